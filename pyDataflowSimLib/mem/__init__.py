from .data_mem import DataMemory, DEFAULT_MEM_SIZE
