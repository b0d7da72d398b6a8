# tests/test_core.py

"""
Unit tests for the pipeline components in pyDataflowSimLib.proc.core.
"""

import unittest

from pyDataflowSimLib.arch import Instruction, Opcode, Register, to_signed8
from pyDataflowSimLib.errors import ConfigurationError, InvariantError
from pyDataflowSimLib.proc.core import (
    CommitMerger,
    InstructionSource,
    IssueSplitter,
    PipeReg,
    RegisterFile,
    computeAddress,
    executeAlu,
)
from pyDataflowSimLib.proc.core.tokens import (
    ComputedResult,
    IssuedInstruction,
    OperandSnapshot,
)

R = Register


def _issued(op, a, b, pos=0, dest=R.R1):
    return IssuedInstruction(Instruction(pos, op, dest, R.R2, R.R3),
                             OperandSnapshot(a, b))


# ============================================================================
# Byte arithmetic
# ============================================================================

class TestByteWrap(unittest.TestCase):

    def test_to_signed8(self) -> None:
        self.assertEqual(to_signed8(127), 127)
        self.assertEqual(to_signed8(128), -128)
        self.assertEqual(to_signed8(-129), 127)
        self.assertEqual(to_signed8(255), -1)
        self.assertEqual(to_signed8(-1), -1)


class TestExecUnits(unittest.TestCase):

    def test_alu_ops(self) -> None:
        self.assertEqual(executeAlu(_issued(Opcode.ADD, 3, 4)).value, 7)
        self.assertEqual(executeAlu(_issued(Opcode.SUB, 3, 4)).value, -1)
        self.assertEqual(executeAlu(_issued(Opcode.AND, -1, 5)).value, 5)
        self.assertEqual(executeAlu(_issued(Opcode.OR, -128, 1)).value, -127)

    def test_alu_wraps(self) -> None:
        self.assertEqual(executeAlu(_issued(Opcode.ADD, 127, 1)).value, -128)
        self.assertEqual(executeAlu(_issued(Opcode.SUB, -128, 1)).value, 127)

    def test_alu_result_carries_dest_and_position(self) -> None:
        r = executeAlu(_issued(Opcode.ADD, 1, 1, pos=5, dest=R.R7))
        self.assertEqual((r.dest, r.position), (R.R7, 5))
        self.assertEqual(str(r), '<R7,2>')

    def test_load_on_alu_is_a_configuration_error(self) -> None:
        with self.assertRaises(ConfigurationError):
            executeAlu(_issued(Opcode.LOAD, 1, 1))

    def test_compute_address(self) -> None:
        ea = computeAddress(_issued(Opcode.LOAD, 100, 100))
        self.assertEqual(ea.address, -56)
        self.assertEqual(str(ea), '<R1,-56>')


# ============================================================================
# Register file
# ============================================================================

class TestRegisterFile(unittest.TestCase):

    def setUp(self) -> None:
        self.rf = RegisterFile()
        self.rf.load([(R.R1, 5), (R.R2, -3)])

    def test_ready_and_read(self) -> None:
        self.assertTrue(self.rf.isReady(R.R1, R.R2))
        self.assertFalse(self.rf.isReady(R.R1, R.R3))
        self.assertEqual(self.rf.read(R.R1, R.R2), (5, -3))

    def test_read_unset_raises(self) -> None:
        with self.assertRaises(InvariantError):
            self.rf.read(R.R1, R.R4)

    def test_snapshot_is_frozen(self) -> None:
        snap = self.rf.snapshot()
        self.rf.commit(R.R3, 9)
        self.assertFalse(snap.isReady(R.R3, R.R1))
        self.assertTrue(self.rf.isReady(R.R3, R.R1))
        self.assertIsNone(snap.value(R.R3))

    def test_one_commit_per_cycle(self) -> None:
        self.rf.setCommitPeek(lambda: None)
        self.rf.probe(self.rf.snapshot())
        self.rf.commit(R.R3, 1)
        with self.assertRaises(InvariantError):
            self.rf.commit(R.R4, 2)
        # A new cycle clears the guard
        self.rf.probe(self.rf.snapshot())
        self.rf.commit(R.R4, 2)
        self.assertEqual(self.rf.value(R.R4), 2)

    def test_step_commits_probed_result(self) -> None:
        result = ComputedResult(R.R0, 0, 11)
        self.rf.setCommitPeek(lambda: result)
        self.rf.probe(self.rf.snapshot())
        self.assertIsNone(self.rf.value(R.R0))
        self.assertTrue(self.rf.step())
        self.assertEqual(self.rf.value(R.R0), 11)
        self.assertEqual(self.rf.num_commits, 1)

    def test_linetrace_skips_unset(self) -> None:
        self.assertEqual(self.rf.linetrace(), 'RGF:<R1,5>,<R2,-3>')


# ============================================================================
# Instruction source
# ============================================================================

class TestInstructionSource(unittest.TestCase):

    def setUp(self) -> None:
        self.rf = RegisterFile()
        self.rf.load([(R.R0, 0)])
        self.prog = [
            Instruction(0, Opcode.ADD, R.R1, R.R0, R.R0),
            Instruction(1, Opcode.ADD, R.R2, R.R1, R.R0),
        ]
        self.src = InstructionSource(self.prog)

    def _cycle(self):
        self.src.probe(self.rf.snapshot())
        return self.src.advance()

    def test_probe_does_not_move_cursor(self) -> None:
        self.src.probe(self.rf.snapshot())
        self.assertEqual(self.src.cursor, -1)
        self.assertEqual(self.src.linetrace(),
                         'INM:<ADD,R1,R0,R0>,<ADD,R2,R1,R0>')

    def test_fetch_then_stall(self) -> None:
        self.assertIs(self._cycle(), self.prog[0])
        self.assertIsNone(self._cycle())
        self.assertIsNone(self._cycle())
        self.assertEqual(self.src.num_stalls, 2)

        self.rf.commit(R.R1, 1)
        self.assertIs(self._cycle(), self.prog[1])
        self.assertTrue(self.src.isDrained())
        self.assertEqual(self.src.linetrace(), 'INM:')

        # Drained: no more fetches, no more stalls counted
        self.assertIsNone(self._cycle())
        self.assertEqual(self.src.num_stalls, 2)

    def test_advance_without_probe_does_nothing(self) -> None:
        self.assertIsNone(self.src.advance())
        self.assertEqual(self.src.cursor, -1)


# ============================================================================
# Issue splitter
# ============================================================================

class TestIssueSplitter(unittest.TestCase):

    def setUp(self) -> None:
        self.rf = RegisterFile()
        self.rf.load([(R.R2, 4), (R.R3, 6)])
        self.inb = IssueSplitter()
        self.pending = None
        self.inb.setInstPeek(lambda snap: self.pending)

    def _cycle(self, inst):
        self.pending = inst
        self.inb.probe(self.rf.snapshot())
        return self.inb.step()

    def test_routes_by_opcode(self) -> None:
        self.assertTrue(self._cycle(Instruction(0, Opcode.LOAD, R.R1, R.R2, R.R3)))
        self.assertIsNotNone(self.inb.peekLoad())
        self.assertIsNone(self.inb.peekAlu())
        self.assertEqual(self.inb.linetrace(), 'INB:<LOAD,R1,4,6>')

        self.assertTrue(self._cycle(Instruction(1, Opcode.SUB, R.R1, R.R3, R.R2)))
        self.assertIsNone(self.inb.peekLoad())
        self.assertEqual(self.inb.peekAlu().operands, OperandSnapshot(6, 4))

        self.assertFalse(self._cycle(None))
        self.assertIsNone(self.inb.peekAlu())
        self.assertEqual(self.inb.linetrace(), 'INB:')
        self.assertEqual((self.inb.num_loads, self.inb.num_alu_ops), (1, 1))

    def test_operands_come_from_snapshot(self) -> None:
        self.pending = Instruction(0, Opcode.ADD, R.R1, R.R2, R.R3)
        self.inb.probe(self.rf.snapshot())
        self.rf.commit(R.R2, 100)
        self.inb.step()
        self.assertEqual(self.inb.peekAlu().operands, OperandSnapshot(4, 6))

    def test_both_slots_is_an_invariant_error(self) -> None:
        item = _issued(Opcode.ADD, 1, 2)
        self.inb.load_slot = item
        self.inb.alu_slot = item
        with self.assertRaises(InvariantError):
            self.inb.linetrace()


# ============================================================================
# Pipeline register
# ============================================================================

class TestPipeReg(unittest.TestCase):

    def test_two_phase_update(self) -> None:
        upstream = {'item': 3}
        reg = PipeReg('TST', lambda x: x * 10)
        reg.setInPeek(lambda: upstream['item'])

        reg.probe(None)
        self.assertTrue(reg.isEmpty())
        self.assertIsNone(reg.peekResp())

        self.assertTrue(reg.step())
        self.assertEqual(reg.held(), 3)
        self.assertEqual(reg.peekResp(), 30)
        self.assertEqual(reg.linetrace(), 'TST:3')

        # Peeking does not consume
        self.assertEqual(reg.peekResp(), 30)

        # Nothing upstream: the slot drains
        upstream['item'] = None
        reg.probe(None)
        self.assertFalse(reg.step())
        self.assertTrue(reg.isEmpty())
        self.assertEqual(reg.linetrace(), 'TST:')

    def test_new_item_evicts_old(self) -> None:
        items = iter([1, 2])
        reg = PipeReg('TST', lambda x: x)
        reg.setInPeek(lambda: next(items))
        reg.probe(None); reg.step()
        reg.probe(None); reg.step()
        self.assertEqual(reg.held(), 2)


# ============================================================================
# Commit merger
# ============================================================================

class TestCommitMerger(unittest.TestCase):

    def setUp(self) -> None:
        self.reb = CommitMerger()

    def test_waits_for_older_result(self) -> None:
        self.reb.absorb(ComputedResult(R.R2, 1, 20))
        self.assertIsNone(self.reb.peekOldest())
        self.assertIsNone(self.reb.takeOldest())

        self.reb.absorb(ComputedResult(R.R1, 0, 10))
        self.assertEqual(self.reb.linetrace(), 'REB:<R1,10>,<R2,20>')
        self.assertEqual(self.reb.takeOldest().position, 0)
        self.assertEqual(self.reb.takeOldest().position, 1)
        self.assertIsNone(self.reb.takeOldest())
        self.assertEqual(len(self.reb), 0)

    def test_duplicate_position_rejected(self) -> None:
        self.reb.absorb(ComputedResult(R.R1, 0, 1))
        with self.assertRaises(InvariantError):
            self.reb.absorb(ComputedResult(R.R2, 0, 2))

    def test_late_position_rejected(self) -> None:
        self.reb.absorb(ComputedResult(R.R1, 0, 1))
        self.reb.takeOldest()
        with self.assertRaises(InvariantError):
            self.reb.absorb(ComputedResult(R.R1, 0, 1))

    def test_cycle_retires_then_absorbs(self) -> None:
        load_out = {'r': ComputedResult(R.R1, 0, 7)}
        alu_out = {'r': ComputedResult(R.R2, 1, 8)}
        self.reb.setLoadPeek(lambda: load_out['r'])
        self.reb.setAluPeek(lambda: alu_out['r'])

        # Both paths finish in the same cycle
        self.reb.probe(None)
        self.assertTrue(self.reb.step())
        self.assertEqual([r.position for r in self.reb.results()], [0, 1])

        load_out['r'] = None
        alu_out['r'] = None
        self.reb.probe(None)
        self.assertIs(self.reb.retire, self.reb.results()[0])
        self.assertTrue(self.reb.step())
        self.assertEqual([r.position for r in self.reb.results()], [1])
        self.assertEqual(self.reb.next_pos, 1)


if __name__ == "__main__":
    unittest.main(verbosity=2)
