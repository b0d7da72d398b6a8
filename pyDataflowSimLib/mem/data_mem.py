# File: pyDataflowSimLib/mem/data_mem.py
# --------------------------------------------------------------------
# Flat byte-addressed data memory. Filled once by the loader, read-only
# while the simulation runs.

from pyDataflowSimLib.errors import ConfigurationError, MemoryAccessError
from pyDataflowSimLib.proc.core.tokens import formatItems

# Size of the data memory when none is configured
DEFAULT_MEM_SIZE = 8


class DataMemory:
    def __init__(self, size=DEFAULT_MEM_SIZE):
        if size <= 0:
            raise ConfigurationError(f"data memory size must be positive, got {size}")
        self.size = size

        # None marks an address that was never initialised
        self.mem = [None] * size

        # Stats
        self.num_reads = 0

    def load(self, entries):
        for addr, value in entries:
            if not 0 <= addr < self.size:
                raise MemoryAccessError(
                    f"address {addr} outside data memory [0, {self.size})")
            self.mem[addr] = value

    def read(self, addr):
        if not 0 <= addr < self.size:
            raise MemoryAccessError(
                f"load from address {addr} outside data memory [0, {self.size})")
        value = self.mem[addr]
        if value is None:
            raise MemoryAccessError(f"load from uninitialised address {addr}")
        self.num_reads += 1
        return value

    def linetrace(self):
        items = [f"<{addr},{v}>" for addr, v in enumerate(self.mem) if v is not None]
        return formatItems('DAM', items)
