"""
Tests for the legv8dis Command-Line Tool
========================================

Exercises the click command through CliRunner: stdout and file output,
base address handling, exit codes, and environment configuration.

Copyright (c) 2025-2026 legv8-disasm Contributors
"""

import pytest
from click.testing import CliRunner

from legv8_disasm.cli.errors import ExitCode
from legv8_disasm.cli.legv8dis import main


BREAK_BITS = "11111110110111101111111111100111"
ADD_BITS = "10001011000 00010 000000 00001 00011"
ADDI_BITS = "1001000100 000000001010 00000 00001"


@pytest.fixture
def program(tmp_path):
    """A small program: two instructions, BREAK, two data words."""
    path = tmp_path / "program.txt"
    path.write_text(
        "\n".join([ADDI_BITS, ADD_BITS, BREAK_BITS, "0" * 32, "1" * 32]) + "\n"
    )
    return path


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("LEGV8_BASE_ADDRESS", "LEGV8_ADDRESS_STEP", "LEGV8_OUTPUT_SUFFIX"):
        monkeypatch.delenv(name, raising=False)


class TestCLI:
    """Tests for the legv8dis CLI tool."""

    def test_cli_help(self):
        runner = CliRunner()
        result = runner.invoke(main, ["--help"])

        assert result.exit_code == 0
        assert "Disassemble LEGv8" in result.output

    def test_cli_version(self):
        runner = CliRunner()
        result = runner.invoke(main, ["--version"])

        assert result.exit_code == 0
        assert "legv8dis" in result.output

    def test_cli_stdout(self, program):
        runner = CliRunner()
        result = runner.invoke(main, ["-i", str(program)])

        assert result.exit_code == 0
        rows = result.output.splitlines()
        assert len(rows) == 5
        assert rows[0].endswith("\t96\tADDI\tR1, R0, #10")
        assert rows[1].endswith("\t100\tADD\tR3, R1, R2")
        assert rows[2].endswith("\t104\tBREAK")
        assert rows[3].endswith("\t108\t0")
        assert rows[4].endswith("\t112\t-1")

    def test_cli_output_file(self, program, tmp_path):
        base = tmp_path / "team05_out"

        runner = CliRunner()
        result = runner.invoke(main, ["-i", str(program), "-o", str(base)])

        assert result.exit_code == 0
        output_file = tmp_path / "team05_out_dis.txt"
        assert output_file.exists()
        content = output_file.read_text()
        assert "ADDI" in content
        assert content.endswith("\t112\t-1\n")

    def test_cli_with_address(self, program):
        runner = CliRunner()
        result = runner.invoke(main, ["-i", str(program), "--address", "0x100"])

        assert result.exit_code == 0
        assert "\t256\tADDI" in result.output
        assert "\t260\tADD" in result.output

    def test_cli_invalid_address(self, program):
        runner = CliRunner()
        result = runner.invoke(main, ["-i", str(program), "--address", "zz"])

        assert result.exit_code == ExitCode.INVALID_ARGS
        assert "Invalid address" in result.output

    def test_cli_missing_input(self, tmp_path):
        runner = CliRunner()
        result = runner.invoke(main, ["-i", str(tmp_path / "missing.txt")])

        assert result.exit_code == 2

    def test_cli_input_required(self):
        runner = CliRunner()
        result = runner.invoke(main, [])

        assert result.exit_code == 2

    def test_cli_non_binary_input(self, tmp_path):
        path = tmp_path / "bad.txt"
        path.write_text(ADD_BITS + "\n" + "1000101100Z\n")

        runner = CliRunner()
        result = runner.invoke(main, ["-i", str(path)])

        assert result.exit_code == ExitCode.DECODE_ERROR
        assert "Decode error" in result.output
        assert "address 100" in result.output

    def test_cli_bad_lines_do_not_stop_run(self, tmp_path):
        path = tmp_path / "mixed.txt"
        path.write_text("0101\n0000000\n" + ADD_BITS + "\n")

        runner = CliRunner()
        result = runner.invoke(main, ["-i", str(path)])

        assert result.exit_code == 0
        rows = result.output.splitlines()
        assert "too short" in rows[0]
        assert rows[1] == "Unknown instruction with opcode: 000000 at address 100"
        assert rows[2].endswith("\t104\tADD\tR3, R1, R2")

    def test_cli_empty_input(self, tmp_path):
        path = tmp_path / "empty.txt"
        path.write_text("")

        runner = CliRunner()
        result = runner.invoke(main, ["-i", str(path)])

        assert result.exit_code == 0
        assert result.output == ""

    def test_cli_verbose(self, program, tmp_path):
        runner = CliRunner()
        result = runner.invoke(
            main, ["-i", str(program), "-o", str(tmp_path / "out"), "--verbose"]
        )

        assert result.exit_code == 0
        assert "Instructions: 3, data words: 2, problems: 0" in result.output

    def test_cli_env_base_address(self, program, monkeypatch):
        monkeypatch.setenv("LEGV8_BASE_ADDRESS", "0")

        runner = CliRunner()
        result = runner.invoke(main, ["-i", str(program)])

        assert result.exit_code == 0
        assert result.output.splitlines()[0].endswith("\t0\tADDI\tR1, R0, #10")

    def test_cli_env_suffix(self, program, tmp_path, monkeypatch):
        monkeypatch.setenv("LEGV8_OUTPUT_SUFFIX", ".asm")

        runner = CliRunner()
        result = runner.invoke(main, ["-i", str(program), "-o", str(tmp_path / "prog")])

        assert result.exit_code == 0
        assert (tmp_path / "prog.asm").exists()

    def test_cli_env_step_is_ignored(self, program, monkeypatch):
        monkeypatch.setenv("LEGV8_ADDRESS_STEP", "0")

        runner = CliRunner()
        result = runner.invoke(main, ["-i", str(program)])

        assert result.exit_code == 0
        rows = result.output.splitlines()
        assert rows[0].endswith("\t96\tADDI\tR1, R0, #10")
        assert rows[1].endswith("\t100\tADD\tR3, R1, R2")


# =============================================================================
# Input Encoding Tests
# =============================================================================

class TestInputEncoding:
    """Tests for byte-order marks and undecodable input files."""

    def test_utf8_bom_is_skipped(self, tmp_path):
        path = tmp_path / "bom.txt"
        path.write_bytes(b"\xef\xbb\xbf" + f"{ADDI_BITS}\n{BREAK_BITS}\n".encode())

        runner = CliRunner()
        result = runner.invoke(main, ["-i", str(path)])

        assert result.exit_code == 0
        rows = result.output.splitlines()
        assert rows[0].endswith("\t96\tADDI\tR1, R0, #10")
        assert rows[1].endswith("\t100\tBREAK")

    def test_non_utf8_input(self, tmp_path):
        path = tmp_path / "latin1.txt"
        path.write_bytes(b"0" * 32 + b"\n\xff\n")

        runner = CliRunner()
        result = runner.invoke(main, ["-i", str(path)])

        assert result.exit_code == ExitCode.DECODE_ERROR
        assert "not UTF-8" in result.output
        assert "Internal error" not in result.output
