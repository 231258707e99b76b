"""
Disassembler Configuration
==========================

Run configuration for the disassembler driver. Configuration can come from:
- Default values (defined here)
- Environment variables
- Command-line options (applied by the CLI on top of the above)

Address defaults follow the conventional LEGv8 memory layout used for
coursework programs: the text segment starts at byte address 96 and every
instruction word occupies 4 bytes.

Copyright (c) 2025-2026 legv8-disasm Contributors
"""

import logging
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_BASE_ADDRESS = 96
DEFAULT_ADDRESS_STEP = 4
DEFAULT_OUTPUT_SUFFIX = "_dis.txt"


@dataclass
class DisassemblerConfig:
    """
    Configuration for a disassembly run.

    Attributes:
        base_address: Address of the first input line (default: 96)
        output_suffix: Appended to the output base name (default: "_dis.txt")
    """

    base_address: int = DEFAULT_BASE_ADDRESS
    output_suffix: str = DEFAULT_OUTPUT_SUFFIX

    @classmethod
    def from_env(cls) -> "DisassemblerConfig":
        """
        Create DisassemblerConfig from environment variables.

        Environment variables (all optional):
            LEGV8_BASE_ADDRESS: Base address (decimal or 0x hex)
            LEGV8_OUTPUT_SUFFIX: Output file suffix

        An invalid address is ignored with a warning.

        Returns:
            DisassemblerConfig with values from environment variables
        """
        config = cls()

        if base := os.environ.get("LEGV8_BASE_ADDRESS"):
            try:
                config.base_address = parse_address(base)
            except ValueError:
                logger.warning(f"Ignoring invalid LEGV8_BASE_ADDRESS={base!r}")

        if suffix := os.environ.get("LEGV8_OUTPUT_SUFFIX"):
            config.output_suffix = suffix

        return config


def parse_address(text: str) -> int:
    """
    Parse an address given as decimal or with a 0x prefix.

    Raises:
        ValueError: If the text is not a non-negative integer
    """
    text = text.strip()
    if text.lower().startswith("0x"):
        value = int(text, 16)
    else:
        value = int(text)
    if value < 0:
        raise ValueError(f"address must be non-negative: {text}")
    return value
