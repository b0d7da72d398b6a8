from .text_tables import (
    parseInstructions,
    parseRegisters,
    parseDataMemory,
    readTable,
)
