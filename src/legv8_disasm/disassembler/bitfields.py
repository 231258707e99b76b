"""
Bitfield Extraction
===================

Helpers for pulling fields out of an instruction word held as a bit string,
plus the field layout of every LEGv8 instruction format.

Bit positions count from the left: position 0 is the most significant bit
of the 32-bit word and position 31 the least significant. Ranges are
inclusive, matching the way LEGv8 encodings are usually tabulated.

Signedness is declared per field. A signed field of width n holding the
unsigned value v decodes to v - 2**n when its top bit is set, else v.

Copyright (c) 2025-2026 legv8-disasm Contributors
"""

from dataclasses import dataclass
from typing import Dict, List, Tuple

from legv8_disasm.cpu import InstructionFormat


@dataclass(frozen=True)
class BitField:
    """
    One named field of an instruction word.

    Attributes:
        name: Field name ("rd", "imm", ...)
        start: First bit position (inclusive, 0 = leftmost)
        end: Last bit position (inclusive)
        signed: Decode as two's complement when True
    """
    name: str
    start: int
    end: int
    signed: bool = False

    @property
    def width(self) -> int:
        return self.end - self.start + 1

    def decode(self, bits: str) -> int:
        value = extract_bits(bits, self.start, self.end)
        if self.signed:
            return sign_extend(value, self.width)
        return value


def extract_bits(bits: str, start: int, end: int) -> int:
    """
    Read bits[start..end] (inclusive) as an unsigned integer.

    Raises:
        ValueError: If the slice is empty or holds non-binary characters
    """
    return int(bits[start:end + 1], 2)


def sign_extend(value: int, width: int) -> int:
    """
    Interpret an unsigned width-bit value as two's complement.

    >>> sign_extend(0b111111111111, 12)
    -1
    >>> sign_extend(0b011111111111, 12)
    2047
    """
    if value & (1 << (width - 1)):
        return value - (1 << width)
    return value


def to_twos_complement(value: int, width: int) -> str:
    """Encode a signed integer as a width-bit two's complement bit string."""
    return format(value & ((1 << width) - 1), f"0{width}b")


# =============================================================================
# Format Layouts
# =============================================================================
# Every layout covers bits 0-31 without gaps so the same spans can be used
# to split the raw word into display groups.
# =============================================================================

FORMAT_LAYOUTS: Dict[InstructionFormat, Tuple[BitField, ...]] = {
    InstructionFormat.R: (
        BitField("opcode", 0, 10),
        BitField("rm", 11, 15),
        BitField("shamt", 16, 21),
        BitField("rn", 22, 26),
        BitField("rd", 27, 31),
    ),
    InstructionFormat.I: (
        BitField("opcode", 0, 9),
        BitField("imm", 10, 21, signed=True),
        BitField("rn", 22, 26),
        BitField("rd", 27, 31),
    ),
    InstructionFormat.D: (
        BitField("opcode", 0, 10),
        BitField("imm", 11, 19),
        BitField("op2", 20, 21),
        BitField("rn", 22, 26),
        BitField("rt", 27, 31),
    ),
    InstructionFormat.CB: (
        BitField("opcode", 0, 7),
        BitField("imm", 8, 26, signed=True),
        BitField("rt", 27, 31),
    ),
    InstructionFormat.IM: (
        BitField("opcode", 0, 8),
        BitField("shift", 9, 10),
        BitField("imm", 11, 26),
        BitField("rd", 27, 31),
    ),
    # Sign is a separate bit, the magnitude is always unsigned
    InstructionFormat.B: (
        BitField("opcode", 0, 5),
        BitField("sign", 6, 6),
        BitField("offset", 7, 31),
    ),
    InstructionFormat.BREAK: (
        BitField("opcode", 0, 7),
        BitField("b8", 8, 10),
        BitField("b11", 11, 15),
        BitField("b16", 16, 20),
        BitField("b21", 21, 25),
        BitField("b26", 26, 31),
    ),
    InstructionFormat.NOP: (
        BitField("word", 0, 31),
    ),
}

# Formats whose fields carry no operands
OPERANDLESS_FORMATS = frozenset({InstructionFormat.BREAK, InstructionFormat.NOP})


def decode_fields(bits: str, fmt: InstructionFormat) -> Dict[str, int]:
    """
    Decode every operand field of a format.

    Args:
        bits: The instruction word (at least 32 characters)
        fmt: Instruction format

    Returns:
        Dict of field name to decoded integer (opcode excluded)
    """
    if fmt in OPERANDLESS_FORMATS:
        return {}
    return {
        field.name: field.decode(bits)
        for field in FORMAT_LAYOUTS[fmt]
        if field.name != "opcode"
    }


def split_groups(bits: str, fmt: InstructionFormat) -> List[str]:
    """Split the raw word at the format's field boundaries for display."""
    return [bits[field.start:field.end + 1] for field in FORMAT_LAYOUTS[fmt]]
