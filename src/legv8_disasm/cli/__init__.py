"""
LEGv8 Disassembler Command-Line Interface
=========================================

- **legv8dis**: binary text to assembly listing

The tool is a Click-based CLI application with help text and
consistent exit codes (see cli.errors).

Copyright (c) 2025-2026 legv8-disasm Contributors
"""

__all__ = ["legv8dis"]
