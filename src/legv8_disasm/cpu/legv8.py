"""
LEGv8 Instruction Set Definition
================================

This module defines the LEGv8 instruction subset understood by the
disassembler: opcode bit patterns, mnemonics and instruction formats.

LEGv8 is the teaching subset of ARMv8 (AArch64). Every instruction is a
32-bit word, and the leading bits identify the instruction. Unlike most
fixed-width encodings, the opcode width depends on the format, so the
table is keyed by bit-prefixes of several lengths.

Instruction Formats
-------------------
1. **R**: register-register (ADD, SUB, AND, ORR, EOR, LSL, LSR, ASR)
   - 11-bit opcode, Rm, shamt, Rn, Rd
   - Example: ADD R1, R2, R3

2. **I**: register-immediate (ADDI, SUBI)
   - 10-bit opcode, signed 12-bit immediate, Rn, Rd

3. **D**: data transfer (LDUR, STUR)
   - 11-bit opcode, 9-bit address offset, op2, Rn, Rt

4. **B**: unconditional branch (B)
   - 6-bit opcode, sign bit, 25-bit magnitude

5. **CB**: conditional branch (CBZ, CBNZ)
   - 8-bit opcode, signed 19-bit offset, Rt

6. **IM**: wide immediate (MOVZ, MOVK)
   - 9-bit opcode, 2-bit shift code, 16-bit immediate, Rd

7. **BREAK**: the 32-bit terminator pattern. Words after it are data.

Reference
---------
- Patterson & Hennessy, Computer Organization and Design, ARM Edition
- ARM Architecture Reference Manual, ARMv8-A

Copyright (c) 2025-2026 legv8-disasm Contributors
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from legv8_disasm.errors import OpcodeTableError

logger = logging.getLogger(__name__)


# =============================================================================
# Instruction Format Enumeration
# =============================================================================

class InstructionFormat(Enum):
    """
    LEGv8 instruction formats.

    The format decides which bitfield layout applies to the rest of the
    instruction word.
    """
    R = "R"          # Register-register
    I = "I"          # Register-immediate
    D = "D"          # Load/store
    B = "B"          # Unconditional branch
    CB = "CB"        # Compare-and-branch
    IM = "IM"        # Wide immediate (MOVZ/MOVK)
    BREAK = "BREAK"  # Stream terminator
    NOP = "NOP"      # No operation

    def __str__(self) -> str:
        return self.value


# =============================================================================
# Instruction Descriptor
# =============================================================================

@dataclass(frozen=True)
class InstructionDescriptor:
    """
    Describes one opcode table entry.

    Frozen so the table cannot be modified after it is built.

    Attributes:
        opcode: Bit-prefix key, e.g. "10001011000"
        mnemonic: Instruction mnemonic, e.g. "ADD"
        format: Instruction format for field extraction
    """
    opcode: str
    mnemonic: str
    format: InstructionFormat

    @property
    def width(self) -> int:
        """Number of opcode bits."""
        return len(self.opcode)

    def __repr__(self) -> str:
        return f"InstructionDescriptor({self.mnemonic}, {self.format}, opcode={self.opcode})"


# =============================================================================
# Opcode Lengths
# =============================================================================

# Every key in a table must have one of these lengths.
PREFIX_LENGTHS: Tuple[int, ...] = (6, 8, 9, 10, 11, 32)

# Order in which the decoder tries prefix lengths. The full-word BREAK
# pattern goes first, then the opcode widths longest to shortest.
MATCH_ORDER: Tuple[int, ...] = (32, 11, 10, 9, 8, 6)

MIN_OPCODE_LENGTH = min(PREFIX_LENGTHS)
WORD_BITS = 32


# =============================================================================
# Opcode Table Data
# =============================================================================
# (opcode bits, mnemonic, format), grouped by opcode width.
# =============================================================================

OPCODE_ENTRIES: List[Tuple[str, str, InstructionFormat]] = [
    # 6-bit opcodes
    ("000101", "B", InstructionFormat.B),

    # 8-bit opcodes
    ("10110100", "CBZ", InstructionFormat.CB),
    ("10110101", "CBNZ", InstructionFormat.CB),

    # 9-bit opcodes
    ("110100101", "MOVZ", InstructionFormat.IM),
    ("111100101", "MOVK", InstructionFormat.IM),

    # 10-bit opcodes
    ("1001000100", "ADDI", InstructionFormat.I),
    ("1101000100", "SUBI", InstructionFormat.I),

    # 11-bit opcodes
    ("10001010000", "AND", InstructionFormat.R),
    ("10001011000", "ADD", InstructionFormat.R),
    ("10101010000", "ORR", InstructionFormat.R),
    ("11001011000", "SUB", InstructionFormat.R),
    ("11010011010", "LSR", InstructionFormat.R),
    ("11010011011", "LSL", InstructionFormat.R),
    ("11010011100", "ASR", InstructionFormat.R),
    ("11101010000", "EOR", InstructionFormat.R),
    ("11111000000", "STUR", InstructionFormat.D),
    ("11111000010", "LDUR", InstructionFormat.D),

    # Terminator
    ("11111110110111101111111111100111", "BREAK", InstructionFormat.BREAK),
]

# R-format mnemonics whose shamt field is the third operand instead of Rm
SHIFT_MNEMONICS = frozenset({"LSL", "LSR", "ASR"})


# =============================================================================
# Opcode Table
# =============================================================================

class OpcodeTable:
    """
    Read-only mapping from opcode bit-prefix to InstructionDescriptor.

    The table is validated when it is built. Decoding never re-checks it,
    so a table that constructs successfully is always safe to match
    against.

    Example:
        table = OpcodeTable(OPCODE_ENTRIES)
        table.lookup("10001011000")   # -> ADD descriptor
        table.lookup("10001011001")   # -> None
    """

    def __init__(self, entries: Iterable[Tuple[str, str, InstructionFormat]]):
        """
        Build and validate the table.

        Args:
            entries: Iterable of (opcode bits, mnemonic, format) tuples

        Raises:
            OpcodeTableError: On bad key length, non-binary key, duplicate
                key or overlapping prefixes
        """
        self._by_opcode: Dict[str, InstructionDescriptor] = {}
        self._by_mnemonic: Dict[str, InstructionDescriptor] = {}

        for opcode, mnemonic, fmt in entries:
            self._add(InstructionDescriptor(opcode, mnemonic.upper(), fmt))

        self._check_disjoint()
        logger.debug(f"Built opcode table with {len(self._by_opcode)} entries")

    def _add(self, desc: InstructionDescriptor) -> None:
        opcode = desc.opcode
        if len(opcode) not in PREFIX_LENGTHS:
            raise OpcodeTableError(
                f"opcode {opcode!r} for {desc.mnemonic} has length {len(opcode)}, "
                f"expected one of {PREFIX_LENGTHS}",
                opcode,
            )
        if set(opcode) - {"0", "1"}:
            raise OpcodeTableError(
                f"opcode {opcode!r} for {desc.mnemonic} is not a binary string", opcode
            )
        if opcode in self._by_opcode:
            other = self._by_opcode[opcode].mnemonic
            raise OpcodeTableError(
                f"duplicate opcode {opcode} for {desc.mnemonic} (already {other})", opcode
            )

        self._by_opcode[opcode] = desc
        # Keep the first entry for a mnemonic
        self._by_mnemonic.setdefault(desc.mnemonic, desc)

    def _check_disjoint(self) -> None:
        """Reject any key that is a prefix of a longer key."""
        keys = sorted(self._by_opcode, key=len)
        for i, short in enumerate(keys):
            for long in keys[i + 1:]:
                if len(long) > len(short) and long.startswith(short):
                    raise OpcodeTableError(
                        f"opcode {short} ({self._by_opcode[short].mnemonic}) is a prefix "
                        f"of {long} ({self._by_opcode[long].mnemonic})",
                        short,
                    )

    def lookup(self, bits: str) -> Optional[InstructionDescriptor]:
        """
        Exact lookup of a bit-prefix.

        Args:
            bits: Candidate opcode bits (already cut to a prefix length)

        Returns:
            The matching descriptor, or None
        """
        return self._by_opcode.get(bits)

    def get_descriptor(self, mnemonic: str) -> Optional[InstructionDescriptor]:
        """Find the descriptor for a mnemonic (case-insensitive)."""
        return self._by_mnemonic.get(mnemonic.upper())

    def is_valid_mnemonic(self, mnemonic: str) -> bool:
        return mnemonic.upper() in self._by_mnemonic

    @property
    def mnemonics(self) -> List[str]:
        return sorted(self._by_mnemonic)

    def __len__(self) -> int:
        return len(self._by_opcode)

    def __iter__(self) -> Iterator[InstructionDescriptor]:
        return iter(self._by_opcode.values())

    def __contains__(self, bits: object) -> bool:
        return bits in self._by_opcode


# Built once at import; a malformed OPCODE_ENTRIES fails here.
DEFAULT_OPCODE_TABLE = OpcodeTable(OPCODE_ENTRIES)

MNEMONICS: List[str] = DEFAULT_OPCODE_TABLE.mnemonics


# =============================================================================
# Lookup Functions
# =============================================================================

def get_descriptor(mnemonic: str) -> Optional[InstructionDescriptor]:
    """
    Get the default-table descriptor for a mnemonic.

    Args:
        mnemonic: Instruction mnemonic (case-insensitive)

    Returns:
        InstructionDescriptor if known, None otherwise
    """
    return DEFAULT_OPCODE_TABLE.get_descriptor(mnemonic)


def is_valid_mnemonic(mnemonic: str) -> bool:
    """Check if a mnemonic is in the default table."""
    return DEFAULT_OPCODE_TABLE.is_valid_mnemonic(mnemonic)


def is_shift_instruction(mnemonic: str) -> bool:
    """Check if an R-format mnemonic takes a shift amount instead of Rm."""
    return mnemonic.upper() in SHIFT_MNEMONICS
