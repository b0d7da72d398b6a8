# File: pyDataflowSimLib/proc/core/issue.py
# --------------------------------------------------------------------
# Issue splitter.
#
# Takes the instruction fetched this cycle together with its operand
# values (read from the pre-cycle register snapshot) and drops it into
# exactly one of two issue slots: loads go to the load path, everything
# else to the arithmetic path.

import logging

from pyDataflowSimLib.errors import InvariantError
from pyDataflowSimLib.proc.core.tokens import (
    IssuedInstruction,
    OperandSnapshot,
    formatItems,
)

log = logging.getLogger(__name__)


class IssueSplitter:
    def __init__(s):
        # Issue slots
        s.load_slot = None
        s.alu_slot  = None

        # Item probed for this cycle
        s.next = None

        # Fetch port
        s.InstPeek = None

        # Stats
        s.num_loads   = 0
        s.num_alu_ops = 0

    def setInstPeek(s, InstPeek):
        s.InstPeek = InstPeek

    # Downstream ports
    def peekLoad(s):
        return s.load_slot

    def peekAlu(s):
        return s.alu_slot

    def probe(s, snap):
        inst = s.InstPeek(snap)
        if inst is None:
            s.next = None
            return
        v1, v2 = snap.read(inst.src1, inst.src2)
        s.next = IssuedInstruction(inst, OperandSnapshot(v1, v2))

    def step(s):
        issued = s.next
        s.next = None

        s.load_slot = None
        s.alu_slot  = None
        if issued is None:
            return False

        if issued.opcode.isLoad:
            s.load_slot = issued
            s.num_loads += 1
        else:
            s.alu_slot = issued
            s.num_alu_ops += 1
        s.checkSlots()

        log.debug("issue %s", issued)
        return True

    def checkSlots(s):
        if s.load_slot is not None and s.alu_slot is not None:
            raise InvariantError(
                f"both issue slots populated: {s.load_slot} / {s.alu_slot}")

    def linetrace(s):
        s.checkSlots()
        slot = s.load_slot if s.load_slot is not None else s.alu_slot
        return formatItems('INB', [] if slot is None else [slot])
