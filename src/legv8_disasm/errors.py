"""
LEGv8 Disassembler Error Hierarchy
==================================

This module defines the exception hierarchy for the disassembler package.
All exceptions inherit from LegV8Error, allowing callers to catch every
package-related error with a single except clause if desired.

Exception Hierarchy
-------------------
LegV8Error (base)
├── OpcodeTableError - malformed opcode table data
└── DecodeError (decoder-related)
    └── InvalidBitStringError - input line is not binary text

Recoverable Conditions
----------------------
Lines that are too short, carry an unknown opcode, or are truncated are
NOT exceptions. A disassembler has to keep going past bad input, so those
conditions come back as annotated DecodedLine objects. Exceptions are
reserved for broken table data and for input that violates the
binary-text contract.

Copyright (c) 2025-2026 legv8-disasm Contributors
"""

from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class LegV8Error(Exception):
    """
    Base exception for all disassembler errors.

        try:
            listing = disasm.disassemble_to_text(lines)
        except LegV8Error as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Opcode Table Exceptions
# =============================================================================

class OpcodeTableError(LegV8Error):
    """
    Invalid opcode table data.

    Raised while building an OpcodeTable when an entry:
    - Has a key length outside the supported prefix lengths
    - Contains characters other than 0 and 1
    - Duplicates another key
    - Is a prefix of (or prefixed by) another key
    """

    def __init__(self, message: str, opcode: Optional[str] = None):
        self.opcode = opcode
        super().__init__(message)


# =============================================================================
# Decoder Exceptions
# =============================================================================

class DecodeError(LegV8Error):
    """Base exception for decoder errors."""
    pass


class InvalidBitStringError(DecodeError):
    """
    Input line contains characters other than binary digits.

    The decoder expects text made of 0/1 characters and whitespace. Anything
    else is a contract violation by the caller.

    Attributes:
        line: The offending input, as received
        address: Address the line was assigned, when known
    """

    def __init__(self, line: str, address: Optional[int] = None):
        self.line = line
        self.address = address
        bad = sorted({ch for ch in line if ch not in "01" and not ch.isspace()})
        where = f" at address {address}" if address is not None else ""
        chars = ", ".join(repr(ch) for ch in bad)
        super().__init__(f"invalid bit string{where}: unexpected {chars} in {line.strip()!r}")
