# File: pyDataflowSimLib/proc/core/commit.py
# --------------------------------------------------------------------
# Commit merger (result buffer).
#
# Both execution paths drop their finished results here. The buffer is
# a min-heap keyed on program position, and results leave it strictly
# in program order: the head is handed to the register file only when
# its position is the next one due, so a younger result that overtook
# an older one through the shorter path waits for it.

import heapq
import logging

from pyDataflowSimLib.errors import InvariantError
from pyDataflowSimLib.proc.core.tokens import formatItems

log = logging.getLogger(__name__)


class CommitMerger:
    def __init__(s):
        # (position, result) pairs
        s.heap = []

        # Next program position allowed to commit
        s.next_pos = 0

        # Path output ports
        s.LoadPeek = None
        s.AluPeek  = None

        # Probed for this cycle
        s.next_load = None
        s.next_alu  = None
        s.retire    = None

    def setLoadPeek(s, LoadPeek):
        s.LoadPeek = LoadPeek

    def setAluPeek(s, AluPeek):
        s.AluPeek = AluPeek

    def __len__(s):
        return len(s.heap)

    def results(s):
        return [r for _, r in sorted(s.heap, key=lambda e: e[0])]

    #=====================================================================
    # Ordering
    #=====================================================================
    def absorb(s, result):
        pos = result.position
        if pos < s.next_pos:
            raise InvariantError(
                f"result for position {pos} arrived after it was committed")
        if any(p == pos for p, _ in s.heap):
            raise InvariantError(f"two results for position {pos}")
        heapq.heappush(s.heap, (pos, result))

    def peekOldest(s):
        if not s.heap:
            return None
        pos, result = s.heap[0]
        if pos < s.next_pos:
            raise InvariantError(f"stale result for position {pos}")
        if pos != s.next_pos:
            # An older instruction is still in flight
            return None
        return result

    def takeOldest(s):
        result = s.peekOldest()
        if result is None:
            return None
        heapq.heappop(s.heap)
        s.next_pos += 1
        return result

    #=====================================================================
    # Cycle
    #=====================================================================
    def probe(s, snap):
        s.next_load = s.LoadPeek()
        s.next_alu  = s.AluPeek()
        s.retire    = s.peekOldest()

    def step(s):
        progress = False

        # The register file commits the same head it probed
        if s.retire is not None:
            taken = s.takeOldest()
            if taken is not s.retire:
                raise InvariantError(
                    f"commit head moved within a cycle: {s.retire} / {taken}")
            log.debug("retire position %d", taken.position)
            progress = True

        for result in (s.next_load, s.next_alu):
            if result is not None:
                s.absorb(result)
                progress = True

        s.next_load = None
        s.next_alu  = None
        s.retire    = None
        return progress

    def linetrace(s):
        return formatItems('REB', s.results())
