# File: pyDataflowSimLib/proc/core/inst_source.py
# --------------------------------------------------------------------
# In-order instruction source.
#
# Holds the static program and hands out one instruction per cycle,
# but only when both of that instruction's source registers are Set in
# the pre-cycle register snapshot. A blocked instruction stalls the
# whole stream; nothing behind it is fetched.

import logging

from pyDataflowSimLib.proc.core.tokens import formatItems

log = logging.getLogger(__name__)


class InstructionSource:
    def __init__(s, program=()):
        s.program = list(program)

        # Index of the last fetched instruction (-1: nothing fetched)
        s.cursor = -1

        # Result of this cycle's probe
        s.ready = False

        # Instruction fetched by the last step
        s.fetched = None

        # Stats
        s.num_stalls = 0

    def load(s, program):
        s.program = list(program)
        s.cursor  = -1
        s.fetched = None

    def nextInst(s):
        nidx = s.cursor + 1
        if nidx < len(s.program):
            return s.program[nidx]
        return None

    def isDrained(s):
        return s.cursor >= len(s.program) - 1

    # The instruction this cycle would fetch, or None on a stall / at
    # the end of the stream. Side-effect free.
    def peekNext(s, snap):
        inst = s.nextInst()
        if inst is None:
            return None
        if not snap.isReady(inst.src1, inst.src2):
            return None
        return inst

    def probe(s, snap):
        s.ready = s.peekNext(snap) is not None
        if not s.ready and not s.isDrained():
            log.debug("fetch stall on %s", s.nextInst())

    def advance(s):
        if s.ready and not s.isDrained():
            s.cursor += 1
            s.fetched = s.program[s.cursor]
        else:
            if not s.isDrained():
                s.num_stalls += 1
            s.fetched = None
        s.ready = False
        return s.fetched

    def step(s):
        return s.advance() is not None

    def linetrace(s):
        return formatItems('INM', s.program[s.cursor + 1:])
