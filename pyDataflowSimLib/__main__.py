import sys

from pyDataflowSimLib.sim import main

sys.exit(main())
