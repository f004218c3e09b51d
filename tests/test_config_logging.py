"""Tests for configuration validation and level-gated console logging."""

import pytest

from roomgrid import logging_utils
from roomgrid.config import Config
from roomgrid.logging_utils import Color, colored, log_debug, log_error, log_info, log_warning


def test_colored_respects_no_color(monkeypatch):
    monkeypatch.setenv("ROOMGRID_NO_COLOR", "1")
    assert colored("plain", Color.RED) == "plain"

    monkeypatch.delenv("ROOMGRID_NO_COLOR")
    text = colored("loud", Color.RED, bold=True)
    assert text.startswith(Color.BOLD.value + Color.RED.value)
    assert text.endswith(Color.RESET.value)


def test_log_level_threshold(monkeypatch, capsys):
    monkeypatch.setenv("ROOMGRID_NO_COLOR", "1")
    monkeypatch.setattr(Config, "LOG_LEVEL", "WARNING")

    log_debug("hidden debug")
    log_info("hidden info")
    log_warning("shown warning")
    log_error("shown error")

    out = capsys.readouterr().out
    assert "hidden" not in out
    assert "[!] shown warning" in out
    assert "[!!] shown error" in out


def test_unknown_log_level_falls_back_to_info(monkeypatch):
    monkeypatch.setattr(Config, "LOG_LEVEL", "CHATTY")
    assert logging_utils.is_enabled("INFO")
    assert not logging_utils.is_enabled("DEBUG")


def test_config_validate(monkeypatch):
    monkeypatch.setattr(Config, "LOG_LEVEL", "INFO")
    monkeypatch.setattr(Config, "POSITION_MODE", "readable")
    Config.validate()

    monkeypatch.setattr(Config, "POSITION_MODE", "verbose")
    with pytest.raises(ValueError):
        Config.validate()

    monkeypatch.setattr(Config, "POSITION_MODE", "compact")
    monkeypatch.setattr(Config, "LOG_LEVEL", "TRACE")
    with pytest.raises(ValueError):
        Config.validate()


def test_config_display_lists_settings():
    text = Config.display()
    assert "Position Mode" in text
    assert "Store Path" in text
