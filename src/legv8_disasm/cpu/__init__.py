"""
LEGv8 CPU Package
=================

Instruction set definitions shared by the decoder and the CLI: the opcode
table, instruction formats and lookup helpers.

Usage:
    from legv8_disasm.cpu import (
        DEFAULT_OPCODE_TABLE,
        InstructionFormat,
        OpcodeTable,
    )

Copyright (c) 2025-2026 legv8-disasm Contributors
"""

from legv8_disasm.cpu.legv8 import (
    # Core types
    InstructionFormat,
    InstructionDescriptor,
    OpcodeTable,
    # Table data
    OPCODE_ENTRIES,
    DEFAULT_OPCODE_TABLE,
    MNEMONICS,
    SHIFT_MNEMONICS,
    # Opcode lengths
    PREFIX_LENGTHS,
    MATCH_ORDER,
    MIN_OPCODE_LENGTH,
    WORD_BITS,
    # Lookup functions
    get_descriptor,
    is_valid_mnemonic,
    is_shift_instruction,
)

__all__ = [
    "InstructionFormat",
    "InstructionDescriptor",
    "OpcodeTable",
    "OPCODE_ENTRIES",
    "DEFAULT_OPCODE_TABLE",
    "MNEMONICS",
    "SHIFT_MNEMONICS",
    "PREFIX_LENGTHS",
    "MATCH_ORDER",
    "MIN_OPCODE_LENGTH",
    "WORD_BITS",
    "get_descriptor",
    "is_valid_mnemonic",
    "is_shift_instruction",
]
