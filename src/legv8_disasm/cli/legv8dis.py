"""
legv8dis - LEGv8 Disassembler Command-Line Interface
=====================================================

This module implements the command-line interface for the LEGv8
disassembler. The input is a text file holding one 32-bit machine word per
line, written as binary digits (spaces between groups are allowed).

Usage Examples
--------------
Disassemble to stdout:
    $ legv8dis -i program.txt

Write the listing to program_dis.txt:
    $ legv8dis -i program.txt -o program

With a different base address:
    $ legv8dis -i program.txt --address 0x1000

Copyright (c) 2025-2026 legv8-disasm Contributors
"""

import logging
import sys
from collections import Counter
from pathlib import Path
from typing import Optional

import click

from legv8_disasm import __version__
from legv8_disasm.cli.errors import ExitCode, handle_cli_exception
from legv8_disasm.config import DisassemblerConfig, parse_address
from legv8_disasm.disassembler import LegV8Disassembler, LineKind

logger = logging.getLogger(__name__)


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.option(
    "-i", "--input", "input_file",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Input file with one binary word per line",
)
@click.option(
    "-o", "--output",
    type=str,
    default=None,
    help="Output base name; the listing goes to NAME_dis.txt (default: stdout)",
)
@click.option(
    "-a", "--address",
    type=str,
    default=None,
    help="Base address of the first word (decimal or 0x hex). Default: 96",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="legv8dis")
def main(
    input_file: Path,
    output: Optional[str],
    address: Optional[str],
    verbose: bool,
) -> None:
    """
    Disassemble LEGv8 machine code written as binary text.

    Every input line is decoded at its own address, starting at the base
    address and advancing by 4. Words that follow BREAK and match no opcode
    are listed as signed 32-bit data.

    Examples:

        # Listing to stdout
        legv8dis -i program.txt

        # Listing to program_dis.txt
        legv8dis -i program.txt -o program
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s: %(message)s")

    config = DisassemblerConfig.from_env()

    if address is not None:
        try:
            config.base_address = parse_address(address)
        except ValueError:
            click.echo(f"Error: Invalid address '{address}'", err=True)
            sys.exit(ExitCode.INVALID_ARGS)

    try:
        lines = input_file.read_text(encoding="utf-8-sig").splitlines()

        if verbose:
            click.echo(f"Input file: {input_file} ({len(lines)} lines)", err=True)
            click.echo(f"Base address: {config.base_address}", err=True)

        disasm = LegV8Disassembler()
        decoded = list(disasm.decode_lines(lines, config.base_address))

        result = "\n".join(line.rendered for line in decoded)
        if result:
            result += "\n"

        if output:
            output_file = Path(output + config.output_suffix)
            output_file.write_text(result, encoding="utf-8")
            logger.debug(f"Wrote {len(decoded)} lines to {output_file}")
            if verbose:
                click.echo(f"Output written to: {output_file}", err=True)
        else:
            click.echo(result, nl=False)

        if verbose:
            counts = Counter(line.kind for line in decoded)
            click.echo(
                f"Instructions: {counts[LineKind.INSTRUCTION]}, "
                f"data words: {counts[LineKind.DATA]}, "
                f"problems: {sum(1 for line in decoded if line.is_error)}",
                err=True,
            )

    except Exception as e:
        handle_cli_exception(e, verbose=verbose, error_type="Decode")


# =============================================================================
# Entry Point
# =============================================================================

if __name__ == "__main__":
    main()
