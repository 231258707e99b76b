"""
LEGv8 Disassembler Module
=========================

This module turns lines of LEGv8 binary text into assembly listings.

Usage:
    from legv8_disasm.disassembler import LegV8Disassembler

    disasm = LegV8Disassembler()
    for line in disasm.decode_lines(source.splitlines(), start_address=96):
        print(line)

Copyright (c) 2025-2026 legv8-disasm Contributors
"""

from .legv8 import LegV8Disassembler, DecodedLine, LineKind, decode

__all__ = [
    "LegV8Disassembler",
    "DecodedLine",
    "LineKind",
    "decode",
]
