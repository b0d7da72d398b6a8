# File: pyDataflowSimLib/proc/core/tokens.py
# --------------------------------------------------------------------
# Items that travel between pipeline stages. Each one prints itself in
# the bracket notation used by the cycle trace.

from dataclasses import dataclass

from pyDataflowSimLib.arch.isa import Instruction, Opcode, Register


@dataclass(frozen=True)
class OperandSnapshot:
    # Source values as they were when the instruction issued
    src1_value: int
    src2_value: int


@dataclass(frozen=True)
class IssuedInstruction:
    inst:     Instruction
    operands: OperandSnapshot

    @property
    def position(self) -> int:
        return self.inst.position

    @property
    def opcode(self) -> Opcode:
        return self.inst.opcode

    @property
    def dest(self) -> Register:
        return self.inst.dest

    def __str__(self):
        return (f"<{self.inst.opcode},{self.inst.dest},"
                f"{self.operands.src1_value},{self.operands.src2_value}>")


@dataclass(frozen=True)
class EffectiveAddress:
    issued:  IssuedInstruction
    address: int

    def __str__(self):
        return f"<{self.issued.dest},{self.address}>"


@dataclass(frozen=True)
class ComputedResult:
    dest:     Register
    position: int
    value:    int

    def __str__(self):
        return f"<{self.dest},{self.value}>"


def formatItems(tag, items):
    """Render one trace line: the tag, a colon, then the items."""
    return tag + ':' + ','.join(str(i) for i in items)
