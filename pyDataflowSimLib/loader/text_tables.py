# File: pyDataflowSimLib/loader/text_tables.py
# --------------------------------------------------------------------
# Readers for the three input tables.
#
# Every table holds one record per line in bracket notation, e.g.
#
#   instructions.txt   <ADD,R1,R2,R3>
#   registers.txt      <R1,5>
#   datamemory.txt     <0,7>
#
# Blank lines (a trailing one in particular) are skipped. Any other
# line that does not parse aborts the load with InputFormatError.

import logging
import re

from pyDataflowSimLib.arch.isa import (
    BYTE_MAX,
    BYTE_MIN,
    OPCODE_ALIASES,
    Instruction,
    Opcode,
    Register,
)
from pyDataflowSimLib.errors import InputFormatError

log = logging.getLogger(__name__)

_RECORD_RE = re.compile(r'^<([^<>]*)>$')


def splitRecord(line, nfields, source=None, lineno=None):
    m = _RECORD_RE.match(line.strip())
    if m is None:
        raise InputFormatError(f"not a <...> record: {line.strip()!r}", source, lineno)
    fields = [f.strip() for f in m.group(1).split(',')]
    if len(fields) != nfields:
        raise InputFormatError(
            f"expected {nfields} fields, got {len(fields)}: {line.strip()!r}",
            source, lineno)
    return fields


def records(lines, nfields, source=None):
    """Yield (lineno, fields) for every non-blank line."""
    for lineno, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        yield lineno, splitRecord(line, nfields, source, lineno)


def parseRegister(tok, source=None, lineno=None):
    try:
        return Register[tok]
    except KeyError:
        raise InputFormatError(f"unknown register {tok!r}", source, lineno) from None


def parseOpcode(tok, source=None, lineno=None):
    if tok in OPCODE_ALIASES:
        return OPCODE_ALIASES[tok]
    try:
        return Opcode[tok]
    except KeyError:
        raise InputFormatError(f"unknown opcode {tok!r}", source, lineno) from None


def parseInt(tok, source=None, lineno=None):
    try:
        return int(tok, 10)
    except ValueError:
        raise InputFormatError(f"not a number: {tok!r}", source, lineno) from None


def parseByte(tok, source=None, lineno=None):
    value = parseInt(tok, source, lineno)
    if not BYTE_MIN <= value <= BYTE_MAX:
        raise InputFormatError(
            f"value {value} does not fit a signed byte", source, lineno)
    return value


#=====================================================================
# Tables
#=====================================================================
def parseInstructions(lines, source='<instructions>'):
    program = []
    for lineno, (op, rd, rs1, rs2) in records(lines, 4, source):
        program.append(Instruction(
            position = len(program),
            opcode   = parseOpcode(op, source, lineno),
            dest     = parseRegister(rd, source, lineno),
            src1     = parseRegister(rs1, source, lineno),
            src2     = parseRegister(rs2, source, lineno),
        ))
    log.debug("%s: %d instructions", source, len(program))
    return program


def parseRegisters(lines, source='<registers>'):
    entries = []
    seen = set()
    for lineno, (rn, val) in records(lines, 2, source):
        reg = parseRegister(rn, source, lineno)
        if reg in seen:
            raise InputFormatError(f"register {reg} given twice", source, lineno)
        seen.add(reg)
        entries.append((reg, parseByte(val, source, lineno)))
    return entries


def parseDataMemory(lines, source='<datamemory>', mem_size=None):
    entries = []
    seen = set()
    for lineno, (addr_tok, val) in records(lines, 2, source):
        addr = parseInt(addr_tok, source, lineno)
        if addr < 0 or (mem_size is not None and addr >= mem_size):
            raise InputFormatError(f"address {addr} outside data memory", source, lineno)
        if addr in seen:
            raise InputFormatError(f"address {addr} given twice", source, lineno)
        seen.add(addr)
        entries.append((addr, parseByte(val, source, lineno)))
    return entries


def readTable(path):
    with open(path, 'r') as f:
        return f.read().splitlines()
