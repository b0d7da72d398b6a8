# File: pyDataflowSimLib/proc/dataflow_proc.py
# --------------------------------------------------------------------
# Dataflow processor: builds every pipeline component, then wires the
# ports between them.
#
#   INM -> INB -+-> LIB -> ADB -+-> REB -> RGF
#               |               |
#               +-> AIB --------+
#
# Loads take the two-stage address/memory path, ALU ops the one-stage
# arithmetic path; the result buffer puts them back in program order.

from pyDataflowSimLib.proc.core import (
    CommitMerger,
    InstructionSource,
    IssueSplitter,
    PipeReg,
    RegisterFile,
    accessMemory,
    computeAddress,
    executeAlu,
)


class DataflowProcessor:
    def __init__(s):
        # Cycle Count
        s.cycle_count = 0

        # 1) Components
        s.rgf = RegisterFile()
        s.inm = InstructionSource()
        s.inb = IssueSplitter()
        s.lib = PipeReg('LIB', computeAddress)
        s.adb = PipeReg('ADB', s._accessMemory)
        s.aib = PipeReg('AIB', executeAlu)
        s.reb = CommitMerger()

        # 2) Fetch -> issue
        s.inb.setInstPeek( s.inm.peekNext )

        # 3) Load path
        s.lib.setInPeek(   s.inb.peekLoad )
        s.adb.setInPeek(   s.lib.peekResp )

        # 4) Arithmetic path
        s.aib.setInPeek(   s.inb.peekAlu  )

        # 5) Both paths -> result buffer
        s.reb.setLoadPeek( s.adb.peekResp )
        s.reb.setAluPeek(  s.aib.peekResp )

        # 6) Close the loop: result buffer -> register file
        s.rgf.setCommitPeek( s.reb.peekOldest )

        # Order in which components are probed and stepped
        s.steps = [s.rgf, s.inm, s.inb, s.lib, s.adb, s.aib, s.reb]

        # Order in which components are traced
        s.outputs = [s.inm, s.inb, s.aib, s.lib, s.adb, s.reb, s.rgf]

        # Data memory read port
        s.MemReadFunct = None

        # Flags
        s.inst_c = False

    # Configure memory calls
    def setMemReadFunct(s, MemReadFunct):
        s.MemReadFunct = MemReadFunct

    def _accessMemory(s, ea):
        return accessMemory(ea, s.MemReadFunct)

    # Loading
    def loadProgram(s, program):
        s.inm.load(program)

    def loadRegisters(s, entries):
        s.rgf.load(entries)

    # Flags
    def instCompletionFlag(s):
        return s.inst_c

    def isIdle(s):
        return (s.inm.isDrained()
                and s.inb.peekLoad() is None and s.inb.peekAlu() is None
                and s.lib.isEmpty() and s.adb.isEmpty() and s.aib.isEmpty()
                and len(s.reb) == 0)

    #=====================================================================
    # Tick
    #=====================================================================
    def tick(s):
        # Every probe sees the registers as they were at cycle start
        snap = s.rgf.snapshot()

        for c in s.steps:
            c.probe(snap)

        progress = [c.step() for c in s.steps]

        s.inst_c = s.rgf.wrote
        s.cycle_count += 1
        return any(progress)

    def linetrace(s):
        return [c.linetrace() for c in s.outputs]
