"""
Tests for Disassembler Configuration
====================================

Copyright (c) 2025-2026 legv8-disasm Contributors
"""

import pytest

from legv8_disasm.config import (
    DEFAULT_ADDRESS_STEP,
    DEFAULT_BASE_ADDRESS,
    DisassemblerConfig,
    parse_address,
)


class TestDisassemblerConfig:
    """Tests for defaults and environment overrides."""

    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch):
        for name in ("LEGV8_BASE_ADDRESS", "LEGV8_ADDRESS_STEP", "LEGV8_OUTPUT_SUFFIX"):
            monkeypatch.delenv(name, raising=False)

    def test_defaults(self):
        config = DisassemblerConfig()

        assert config.base_address == 96
        assert config.output_suffix == "_dis.txt"
        assert DEFAULT_BASE_ADDRESS == 96
        assert DEFAULT_ADDRESS_STEP == 4

    def test_from_env_without_overrides(self):
        assert DisassemblerConfig.from_env() == DisassemblerConfig()

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("LEGV8_BASE_ADDRESS", "0x1000")
        monkeypatch.setenv("LEGV8_OUTPUT_SUFFIX", ".lst")

        config = DisassemblerConfig.from_env()

        assert config.base_address == 0x1000
        assert not hasattr(config, "address_step")
        assert config.output_suffix == ".lst"

    def test_from_env_ignores_invalid_numbers(self, monkeypatch):
        monkeypatch.setenv("LEGV8_BASE_ADDRESS", "nowhere")

        config = DisassemblerConfig.from_env()

        assert config.base_address == 96

    def test_address_step_is_not_configurable(self, monkeypatch):
        monkeypatch.setenv("LEGV8_ADDRESS_STEP", "0")

        config = DisassemblerConfig.from_env()

        assert config == DisassemblerConfig()
        assert not hasattr(config, "address_step")


class TestParseAddress:
    """Tests for address parsing."""

    @pytest.mark.parametrize("text,expected", [
        ("96", 96),
        ("0", 0),
        ("0x60", 96),
        ("0X60", 96),
        (" 100 ", 100),
    ])
    def test_valid(self, text, expected):
        assert parse_address(text) == expected

    @pytest.mark.parametrize("text", ["", "abc", "-4", "0xZZ"])
    def test_invalid(self, text):
        with pytest.raises(ValueError):
            parse_address(text)
