"""
LEGv8 Disassembler
==================

This package decodes LEGv8 (the ARMv8 teaching subset) machine words,
written as lines of binary text, into an assembly listing with addresses.

Main Components
---------------
- **cpu**: Instruction set definitions
    Opcode table, instruction formats and lookup helpers

- **disassembler**: Line decoder
    Opcode matching, field extraction, sign extension and rendering

- **cli**: Command-line tool (legv8dis)
    Reads a binary text file and writes a `_dis.txt` listing

Quick Start
-----------
Decode a single word:
    >>> from legv8_disasm import LegV8Disassembler
    >>> disasm = LegV8Disassembler()
    >>> line = disasm.decode("10001011000000100000000000100011", 96)
    >>> line.mnemonic, line.operand_str
    ('ADD', 'R3, R1, R2')

Or use the command-line tool:
    $ legv8dis -i program.txt -o program

Copyright (c) 2025-2026 legv8-disasm Contributors
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from legv8_disasm.cpu import (
    InstructionFormat,
    InstructionDescriptor,
    OpcodeTable,
    DEFAULT_OPCODE_TABLE,
)
from legv8_disasm.disassembler import (
    LegV8Disassembler,
    DecodedLine,
    LineKind,
    decode,
)
from legv8_disasm.config import DisassemblerConfig
from legv8_disasm.errors import (
    LegV8Error,
    OpcodeTableError,
    DecodeError,
    InvalidBitStringError,
)

__all__ = [
    "__version__",
    # Instruction set
    "InstructionFormat",
    "InstructionDescriptor",
    "OpcodeTable",
    "DEFAULT_OPCODE_TABLE",
    # Disassembler
    "LegV8Disassembler",
    "DecodedLine",
    "LineKind",
    "decode",
    # Configuration
    "DisassemblerConfig",
    # Errors
    "LegV8Error",
    "OpcodeTableError",
    "DecodeError",
    "InvalidBitStringError",
]
