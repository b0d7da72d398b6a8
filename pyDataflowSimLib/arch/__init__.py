from .isa import (
    NUM_REGS,
    BYTE_MIN,
    BYTE_MAX,
    Register,
    Opcode,
    Instruction,
    to_signed8,
)
