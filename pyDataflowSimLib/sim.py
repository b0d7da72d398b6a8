# File: pyDataflowSimLib/sim.py
# --------------------------------------------------------------------
# Command line front-end.
#
#   pydataflowsim                                  # reads the three default
#                                                  # tables, writes simulation.txt
#   pydataflowsim -i prog.txt -o - --stats         # trace to stdout

import argparse
import logging
import sys

from pyDataflowSimLib.errors import SimulatorError
from pyDataflowSimLib.mem    import DEFAULT_MEM_SIZE
from pyDataflowSimLib.system import BasicSystem

log = logging.getLogger(__name__)

FILENAME_INPUT_INSTRUCTIONS = 'instructions.txt'
FILENAME_INPUT_REGISTERS    = 'registers.txt'
FILENAME_INPUT_DATA_MEMORY  = 'datamemory.txt'
FILENAME_OUTPUT_SIMULATION  = 'simulation.txt'


def buildParser():
    parser = argparse.ArgumentParser(
        prog='pydataflowsim',
        description='Cycle-level simulator of an out-of-order dataflow pipeline.',
    )
    parser.add_argument('-i', '--instructions', default=FILENAME_INPUT_INSTRUCTIONS,
                        help='instruction table (default: %(default)s)')
    parser.add_argument('-r', '--registers', default=FILENAME_INPUT_REGISTERS,
                        help='initial register table (default: %(default)s)')
    parser.add_argument('-d', '--datamemory', default=FILENAME_INPUT_DATA_MEMORY,
                        help='initial data memory table (default: %(default)s)')
    parser.add_argument('-o', '--output', default=FILENAME_OUTPUT_SIMULATION,
                        help="trace file, '-' for stdout (default: %(default)s)")
    parser.add_argument('--mem-size', type=int, default=DEFAULT_MEM_SIZE,
                        help='data memory size in bytes (default: %(default)s)')
    parser.add_argument('--stats', action='store_true',
                        help='print run statistics to stderr')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='enable debug logging')
    return parser


def main(argv=None):
    args = buildParser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )

    try:
        system = BasicSystem(mem_size=args.mem_size)
        system.loadFiles(args.instructions, args.registers, args.datamemory)
        system.run()
    except OSError as e:
        print(f"pydataflowsim: {e}", file=sys.stderr)
        return 1
    except SimulatorError as e:
        print(f"pydataflowsim: error: {e}", file=sys.stderr)
        return 1

    text = system.trace()
    if args.output == '-':
        sys.stdout.write(text)
    else:
        with open(args.output, 'w') as f:
            f.write(text)
        log.info("trace written to %s", args.output)

    if args.stats:
        print(system.report(), file=sys.stderr)

    return 0


if __name__ == '__main__':
    sys.exit(main())
