# File: pyDataflowSimLib/proc/core/reg_file.py
# --------------------------------------------------------------------
# Architectural register file with Unset tracking.
#
# A register starts Unset (None) unless the register table gives it a
# value, and must be Set before any instruction may read it. The file
# accepts a single committed write per cycle, fed by the commit merger.

import logging

from pyDataflowSimLib.arch.isa import NUM_REGS, Register
from pyDataflowSimLib.errors import InvariantError
from pyDataflowSimLib.proc.core.tokens import formatItems

log = logging.getLogger(__name__)


def _readPair(vals, r1, r2):
    v1 = vals[r1.index]
    v2 = vals[r2.index]
    if v1 is None or v2 is None:
        unset = [str(r) for r, v in ((r1, v1), (r2, v2)) if v is None]
        raise InvariantError(f"read of unset register(s): {','.join(unset)}")
    return v1, v2


class RegisterSnapshot:
    """Read-only view of the register file as it was at cycle start."""

    def __init__(s, vals):
        s._vals = tuple(vals)

    def isReady(s, r1, r2):
        return s._vals[r1.index] is not None and s._vals[r2.index] is not None

    def read(s, r1, r2):
        return _readPair(s._vals, r1, r2)

    def value(s, r):
        return s._vals[r.index]


class RegisterFile:
    def __init__(s):
        s.rf = [None for _ in range(NUM_REGS)]

        # Write-back port, bound once the commit merger exists
        s.CommitPeek = None

        # Result probed for write-back this cycle
        s.next = None

        # At most one commit per cycle
        s.wrote = False

        # Stats
        s.num_commits = 0

    def setCommitPeek(s, CommitPeek):
        s.CommitPeek = CommitPeek

    def load(s, entries):
        for reg, value in entries:
            s.rf[reg.index] = value

    #=====================================================================
    # Queries
    #=====================================================================
    def isReady(s, r1, r2):
        return s.rf[r1.index] is not None and s.rf[r2.index] is not None

    def read(s, r1, r2):
        return _readPair(s.rf, r1, r2)

    def value(s, r):
        return s.rf[r.index]

    def snapshot(s):
        return RegisterSnapshot(s.rf)

    #=====================================================================
    # Write-back
    #=====================================================================
    def commit(s, dest, value):
        if s.wrote:
            raise InvariantError(
                f"second commit in one cycle ({dest}={value})")
        s.rf[dest.index] = value
        s.wrote = True
        s.num_commits += 1
        log.debug("commit %s=%d", dest, value)

    def probe(s, snap):
        s.wrote = False
        s.next  = s.CommitPeek()

    def step(s):
        result = s.next
        s.next = None
        if result is None:
            return False
        s.commit(result.dest, result.value)
        return True

    def linetrace(s):
        items = [f"<{r},{s.rf[r.index]}>" for r in Register
                 if s.rf[r.index] is not None]
        return formatItems('RGF', items)
