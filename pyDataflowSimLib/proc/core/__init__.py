from .pipe_reg    import PipeReg
from .reg_file    import RegisterFile, RegisterSnapshot
from .inst_source import InstructionSource
from .issue       import IssueSplitter
from .commit      import CommitMerger
from .exec_units  import computeAddress, accessMemory, executeAlu
