# File: pyDataflowSimLib/system/basic.py
# --------------------------------------------------------------------
# A basic system with the dataflow processor and a data memory
#
# The system owns the clock: every tick() runs one probe/step cycle of
# the processor, and run() keeps ticking until a cycle goes by in which
# no component makes progress, recording one trace block per cycle.

import logging

from pyDataflowSimLib.loader import (
    parseDataMemory,
    parseInstructions,
    parseRegisters,
    readTable,
)
from pyDataflowSimLib.mem  import DataMemory, DEFAULT_MEM_SIZE
from pyDataflowSimLib.proc import DataflowProcessor

log = logging.getLogger(__name__)


class BasicSystem:
    def __init__(s,
                 doLinetrace:       bool   = True,
                 mem_size:          int    = DEFAULT_MEM_SIZE):
        # 1) Processor
        s.proc = DataflowProcessor()

        # 2) Data memory
        s.mem = DataMemory(mem_size)

        # 3) Wire memory -> load path
        s.proc.setMemReadFunct( s.mem.read )

        # 4) Linetrace?
        s.doLinetrace = doLinetrace

        # Run state
        s.exit   = False
        s.blocks = []

    #=====================================================================
    # Loading
    #=====================================================================
    def loader(s, program, registers=(), memory=()):
        s.proc.loadProgram(program)
        s.proc.loadRegisters(registers)
        s.mem.load(memory)

    def loadFiles(s, inst_path, reg_path, mem_path):
        program   = parseInstructions(readTable(inst_path), str(inst_path))
        registers = parseRegisters(readTable(reg_path), str(reg_path))
        memory    = parseDataMemory(readTable(mem_path), str(mem_path),
                                    mem_size=s.mem.size)
        s.loader(program, registers, memory)

    #=====================================================================
    # Clock
    #=====================================================================
    def getExitStatus(s):      return s.exit, s.proc.cycle_count
    def instCompletionFlag(s): return s.proc.instCompletionFlag()

    def tick(s):
        return s.proc.tick()

    def linetrace(s):
        return s.proc.linetrace() + [s.mem.linetrace()]

    def run(s):
        """Tick until the pipeline stops making progress.

        Returns the list of trace blocks, one per cycle, each block being
        the state of every component at the start of that cycle.
        """
        while not s.exit:
            step_no = s.proc.cycle_count
            if s.doLinetrace:
                s.blocks.append([f"STEP {step_no}:"] + s.linetrace())
            if not s.tick():
                s.exit = True

        log.debug("drained after %d cycles, %d commits",
                  s.proc.cycle_count, s.proc.rgf.num_commits)
        return s.blocks

    def trace(s):
        """The whole cycle trace as text."""
        return formatTrace(s.blocks)

    #=====================================================================
    # Stats
    #=====================================================================
    def stats(s):
        return {
            'cycles':       s.proc.cycle_count,
            'committed':    s.proc.rgf.num_commits,
            'loads':        s.proc.inb.num_loads,
            'alu_ops':      s.proc.inb.num_alu_ops,
            'fetch_stalls': s.proc.inm.num_stalls,
        }

    def report(s):
        st = s.stats()
        return (f"cycles={st['cycles']} committed={st['committed']} "
                f"loads={st['loads']} alu_ops={st['alu_ops']} "
                f"fetch_stalls={st['fetch_stalls']}")


def formatTrace(blocks):
    if not blocks:
        return ''
    return '\n\n'.join('\n'.join(b) for b in blocks) + '\n'
