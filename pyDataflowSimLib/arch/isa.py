# File: pyDataflowSimLib/arch/isa.py
# --------------------------------------------------------------------
# The closed instruction set of the dataflow machine: eight byte-wide
# registers, one load and four ALU operations, every instruction with
# one destination and two source registers.

from dataclasses import dataclass
from enum import Enum

NUM_REGS = 8

# All data is a signed byte
BYTE_MIN = -128
BYTE_MAX = 127


def to_signed8(value: int) -> int:
    """Wrap an arbitrary integer to a two's complement signed byte."""
    value = value & 0xff
    return value - 0x100 if value & 0x80 else value


class Register(Enum):
    R0 = 0
    R1 = 1
    R2 = 2
    R3 = 3
    R4 = 4
    R5 = 5
    R6 = 6
    R7 = 7

    @property
    def index(self) -> int:
        return self.value

    def __str__(self):
        return self.name


class Opcode(Enum):
    LOAD = 'LOAD'
    ADD  = 'ADD'
    SUB  = 'SUB'
    AND  = 'AND'
    OR   = 'OR'

    @property
    def isLoad(self) -> bool:
        return self is Opcode.LOAD

    def __str__(self):
        return self.value


# Mnemonics accepted in instruction tables besides the canonical names
OPCODE_ALIASES = {
    'LD': Opcode.LOAD,
}


@dataclass(frozen=True)
class Instruction:
    position: int
    opcode:   Opcode
    dest:     Register
    src1:     Register
    src2:     Register

    def __str__(self):
        return f"<{self.opcode},{self.dest},{self.src1},{self.src2}>"
