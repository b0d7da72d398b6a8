# File: pyDataflowSimLib/errors.py
# --------------------------------------------------------------------
# Exceptions raised by the simulator.
#
# The library always raises; only the command line front-end turns
# these into an exit status.

class SimulatorError(Exception):
    """Base class for every error the simulator raises."""


class InputFormatError(SimulatorError, ValueError):
    """A record in one of the input tables could not be understood."""

    def __init__(self, msg, source=None, lineno=None):
        s = msg
        if source is not None and lineno is not None:
            s = f"{source}:{lineno}: {msg}"
        elif source is not None:
            s = f"{source}: {msg}"
        super().__init__(s)
        self.source = source
        self.lineno = lineno


class MemoryAccessError(SimulatorError):
    """A load touched an address the data memory cannot serve."""


class ConfigurationError(SimulatorError):
    pass


class InvariantError(SimulatorError):
    """The engine reached a state that should be impossible."""
