"""
LEGv8 Disassembler
==================

Decodes LEGv8 machine words, given as lines of binary text, into
human-readable assembly language.

Each input line holds one 32-bit word written as 0/1 characters (spaces
between bit groups are allowed). The disassembler identifies the opcode,
extracts the format-specific fields, and renders a listing line made of the
raw bit groups, the address, the mnemonic and the operands.

Opcode Matching:
    LEGv8 opcodes are 6, 8, 9, 10 or 11 bits wide, and the BREAK terminator
    is a full 32-bit pattern. Prefixes are tried longest first
    (32, 11, 10, 9, 8, 6) and the first hit wins, so an 11-bit R-format
    opcode is never mistaken for a shorter one sharing its leading bits.

Data Words:
    Words following BREAK are program data. There is no "past BREAK" state:
    any 32-bit line that matches no opcode is rendered as a signed 32-bit
    integer instead.

Bad Input:
    Lines that are too short, carry an unknown opcode, or are truncated come
    back as annotated DecodedLine objects so a listing can continue past
    them. Only non-binary characters raise (InvalidBitStringError).

Usage:
    disasm = LegV8Disassembler()

    # Single line
    line = disasm.decode("10001011000 00010 000000 00001 00011", address=96)
    print(line)           # ... 96  ADD  R3, R1, R2

    # Whole program, addresses from 96 in steps of 4
    for line in disasm.decode_lines(text.splitlines()):
        print(line)

Copyright (c) 2025-2026 legv8-disasm Contributors
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from legv8_disasm.config import DEFAULT_ADDRESS_STEP, DEFAULT_BASE_ADDRESS
from legv8_disasm.cpu import (
    DEFAULT_OPCODE_TABLE,
    MATCH_ORDER,
    MIN_OPCODE_LENGTH,
    WORD_BITS,
    InstructionDescriptor,
    InstructionFormat,
    OpcodeTable,
    is_shift_instruction,
)
from legv8_disasm.disassembler.bitfields import (
    decode_fields,
    sign_extend,
    split_groups,
)
from legv8_disasm.errors import InvalidBitStringError

logger = logging.getLogger(__name__)


# =============================================================================
# Data Structures
# =============================================================================

class LineKind(Enum):
    """Outcome of decoding one input line."""
    INSTRUCTION = "instruction"
    DATA = "data"
    TOO_SHORT = "too_short"
    UNKNOWN = "unknown"
    INCOMPLETE = "incomplete"

    def __str__(self) -> str:
        return self.value


@dataclass
class DecodedLine:
    """
    Represents a single decoded input line.

    Attributes:
        address: Byte address assigned to the line
        raw_bits: The input with whitespace removed
        kind: What the line turned out to be
        mnemonic: Instruction mnemonic (instructions and incomplete lines)
        format: Instruction format, when an opcode matched
        fields: Decoded operand fields by name (rd, rn, imm, ...)
        operand_str: Formatted operand list
        groups: Raw bits split at the field boundaries
        value: Signed value of a data word
        comment: Description of the problem for error lines
    """
    address: int
    raw_bits: str
    kind: LineKind
    mnemonic: str = ""
    format: Optional[InstructionFormat] = None
    fields: Dict[str, int] = field(default_factory=dict)
    operand_str: str = ""
    groups: List[str] = field(default_factory=list)
    value: Optional[int] = None
    comment: str = ""

    @property
    def is_error(self) -> bool:
        return self.kind in (LineKind.TOO_SHORT, LineKind.UNKNOWN, LineKind.INCOMPLETE)

    @property
    def rendered(self) -> str:
        """Listing text for this line."""
        if self.kind == LineKind.INSTRUCTION:
            parts = [" ".join(self.groups), str(self.address), self.mnemonic]
            if self.operand_str:
                parts.append(self.operand_str)
            return "\t".join(parts)
        if self.kind == LineKind.DATA:
            return f"{self.raw_bits}\t{self.address}\t{self.value}"
        return self.comment

    def __str__(self) -> str:
        return self.rendered

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "address": self.address,
            "bits": self.raw_bits,
            "kind": str(self.kind),
            "mnemonic": self.mnemonic,
            "format": str(self.format) if self.format else None,
            "fields": dict(self.fields),
            "operands": self.operand_str,
            "value": self.value,
            "comment": self.comment,
            "text": self.rendered,
        }


# =============================================================================
# LEGv8 Disassembler
# =============================================================================

class LegV8Disassembler:
    """
    Disassembler for LEGv8 binary text.

    Holds a reference to a read-only OpcodeTable; the default table covers
    the standard LEGv8 subset. The disassembler keeps no per-line state, so
    one instance can decode any number of lines in any order.

    Attributes:
        _table: Opcode table used for matching
    """

    def __init__(self, opcode_table: Optional[OpcodeTable] = None):
        """
        Initialize the disassembler.

        Args:
            opcode_table: Table to match against (default: DEFAULT_OPCODE_TABLE)
        """
        self._table = opcode_table if opcode_table is not None else DEFAULT_OPCODE_TABLE

    @property
    def opcode_table(self) -> OpcodeTable:
        return self._table

    def decode(self, line: str, address: int) -> DecodedLine:
        """
        Decode a single line.

        Args:
            line: One word of binary text; whitespace is ignored
            address: Address assigned to this line

        Returns:
            DecodedLine describing the instruction, data word or problem

        Raises:
            InvalidBitStringError: If the line has characters other than
                0, 1 and whitespace
        """
        bits = "".join(line.split())
        if set(bits) - {"0", "1"}:
            raise InvalidBitStringError(line, address)

        if len(bits) < MIN_OPCODE_LENGTH:
            logger.debug(f"Line at {address} too short ({len(bits)} bits)")
            return DecodedLine(
                address=address,
                raw_bits=bits,
                kind=LineKind.TOO_SHORT,
                comment=f"Line too short to hold an opcode ({len(bits)} bits) at address {address}",
            )

        desc, attempted = self._match(bits)

        if desc is None:
            if len(bits) == WORD_BITS:
                return self._decode_data(bits, address)
            logger.debug(f"No opcode matches {bits!r} at {address}")
            return DecodedLine(
                address=address,
                raw_bits=bits,
                kind=LineKind.UNKNOWN,
                comment=f"Unknown instruction with opcode: {attempted} at address {address}",
            )

        if len(bits) < WORD_BITS:
            logger.debug(f"{desc.mnemonic} at {address} truncated to {len(bits)} bits")
            return DecodedLine(
                address=address,
                raw_bits=bits,
                kind=LineKind.INCOMPLETE,
                mnemonic=desc.mnemonic,
                format=desc.format,
                comment=(
                    f"Incomplete {desc.mnemonic} instruction at address {address}: "
                    f"expected {WORD_BITS} bits, got {len(bits)}"
                ),
            )

        return self._decode_instruction(bits, address, desc)

    def _match(self, bits: str) -> Tuple[Optional[InstructionDescriptor], str]:
        """
        Find the opcode for a line.

        Returns:
            (descriptor or None, matched key or the longest opcode-width
            prefix that was tried)
        """
        attempted = ""
        for length in MATCH_ORDER:
            if len(bits) < length:
                continue
            key = bits[:length]
            desc = self._table.lookup(key)
            if desc is not None:
                return desc, key
            if length < WORD_BITS and not attempted:
                attempted = key
        return None, attempted

    def _decode_instruction(
        self,
        bits: str,
        address: int,
        desc: InstructionDescriptor
    ) -> DecodedLine:
        word = bits[:WORD_BITS]
        fields = decode_fields(word, desc.format)

        # B carries its sign in a separate bit; IM shift code counts 16-bit steps
        if desc.format == InstructionFormat.B and fields["sign"]:
            fields["offset"] = -fields["offset"]
        elif desc.format == InstructionFormat.IM:
            fields["shift_amount"] = fields["shift"] * 16

        operand_str = self._format_operands(desc, fields)

        return DecodedLine(
            address=address,
            raw_bits=bits,
            kind=LineKind.INSTRUCTION,
            mnemonic=desc.mnemonic,
            format=desc.format,
            fields=fields,
            operand_str=operand_str,
            groups=split_groups(word, desc.format),
        )

    def _decode_data(self, bits: str, address: int) -> DecodedLine:
        value = sign_extend(int(bits, 2), WORD_BITS)
        return DecodedLine(
            address=address,
            raw_bits=bits,
            kind=LineKind.DATA,
            value=value,
        )

    def _format_operands(self, desc: InstructionDescriptor, fields: Dict[str, int]) -> str:
        """
        Format the operand list for an instruction.

        Expects the B offset already signed and the IM shift_amount set.
        """
        fmt = desc.format

        if fmt == InstructionFormat.R:
            if is_shift_instruction(desc.mnemonic):
                return f"R{fields['rd']}, R{fields['rn']}, #{fields['shamt']}"
            return f"R{fields['rd']}, R{fields['rn']}, R{fields['rm']}"

        elif fmt == InstructionFormat.I:
            return f"R{fields['rd']}, R{fields['rn']}, #{fields['imm']}"

        elif fmt == InstructionFormat.D:
            return f"R{fields['rt']}, [R{fields['rn']}, #{fields['imm']}]"

        elif fmt == InstructionFormat.CB:
            return f"R{fields['rt']}, #{fields['imm']}"

        elif fmt == InstructionFormat.IM:
            return f"R{fields['rd']}, #{fields['imm']}, LSL #{fields['shift_amount']}"

        elif fmt == InstructionFormat.B:
            return f"#{fields['offset']}"

        # BREAK, NOP
        return ""

    def decode_lines(
        self,
        lines: Iterable[str],
        start_address: int = DEFAULT_BASE_ADDRESS
    ) -> Iterator[DecodedLine]:
        """
        Decode a sequence of lines.

        The address advances by 4 after every line, whatever the line
        decodes to.

        Args:
            lines: Lines of binary text
            start_address: Address of the first line (default: 96)

        Yields:
            One DecodedLine per input line
        """
        address = start_address
        for line in lines:
            yield self.decode(line, address)
            address += DEFAULT_ADDRESS_STEP

    def disassemble_to_text(
        self,
        lines: Iterable[str],
        start_address: int = DEFAULT_BASE_ADDRESS
    ) -> str:
        """
        Decode lines and return the listing as one string.

        Args:
            lines: Lines of binary text
            start_address: Address of the first line

        Returns:
            Multi-line string, one listing line per input line
        """
        return "\n".join(
            decoded.rendered for decoded in self.decode_lines(lines, start_address)
        )


_default_disassembler = LegV8Disassembler()


def decode(line: str, address: int) -> DecodedLine:
    """Decode one line with the default opcode table."""
    return _default_disassembler.decode(line, address)
