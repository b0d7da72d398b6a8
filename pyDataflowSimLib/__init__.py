# pyDataflowSimLib
# --------------------------------------------------------------------
# Cycle-level simulator of a small out-of-order dataflow pipeline.

from .errors import (
    SimulatorError,
    InputFormatError,
    MemoryAccessError,
    ConfigurationError,
    InvariantError,
)
from .system import BasicSystem, formatTrace

__version__ = '0.1.0'
