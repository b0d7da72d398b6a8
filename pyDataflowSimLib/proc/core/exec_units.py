# File: pyDataflowSimLib/proc/core/exec_units.py
# --------------------------------------------------------------------
# Transforms run by the path stages. Each takes the item a stage holds
# and returns what the stage hands downstream.

from pyDataflowSimLib.arch.isa import Opcode, to_signed8
from pyDataflowSimLib.errors import ConfigurationError
from pyDataflowSimLib.proc.core.tokens import ComputedResult, EffectiveAddress


#=====================================================================
# Load path
#=====================================================================
def computeAddress(issued):
    ops  = issued.operands
    addr = to_signed8(ops.src1_value + ops.src2_value)
    return EffectiveAddress(issued, addr)


def accessMemory(ea, MemReadFunct):
    value = MemReadFunct(ea.address)
    return ComputedResult(ea.issued.dest, ea.issued.position, value)


#=====================================================================
# Arithmetic path
#=====================================================================
def executeAlu(issued):
    op = issued.opcode
    a  = issued.operands.src1_value
    b  = issued.operands.src2_value

    if   op is Opcode.ADD: r = a + b
    elif op is Opcode.SUB: r = a - b
    elif op is Opcode.AND: r = a & b
    elif op is Opcode.OR : r = a | b
    else:
        raise ConfigurationError(f"opcode {op} cannot execute on the ALU")

    return ComputedResult(issued.dest, issued.position, to_signed8(r))
