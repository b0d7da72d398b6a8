# File: pyDataflowSimLib/proc/core/pipe_reg.py
# --------------------------------------------------------------------
# A single-slot pipeline register.
#
# Every path stage of the dataflow core is one of these: it holds at
# most one in-flight item and produces its output by running a
# transform over the held item when the downstream stage asks for it.
#
# Stages advance in two phases per cycle:
#   probe() - peek at the upstream output (never consumes it)
#   step()  - move the probed item into the slot, evicting whatever
#             was there before

import logging

from pyDataflowSimLib.proc.core.tokens import formatItems

log = logging.getLogger(__name__)


class PipeReg:
    def __init__(s, tag, xform):
        # Trace tag (three letters) and the item -> output transform
        s.tag   = tag
        s.xform = xform

        # Held item and the item probed for the next cycle
        s.curr = None
        s.next = None

        # Upstream output port
        s.InPeek = None

    # Configure the upstream port
    def setInPeek(s, InPeek):
        s.InPeek = InPeek

    def isEmpty(s):
        return s.curr is None

    def held(s):
        return s.curr

    # Output port; pure, may be called any number of times per cycle
    def peekResp(s):
        if s.curr is None:
            return None
        return s.xform(s.curr)

    def probe(s, snap):
        s.next = s.InPeek()

    def step(s):
        s.curr = s.next
        s.next = None
        if s.curr is not None:
            log.debug("%s <- %s", s.tag, s.curr)
        return s.curr is not None

    def linetrace(s):
        if s.curr is None:
            return formatItems(s.tag, [])
        return formatItems(s.tag, [s.curr])
