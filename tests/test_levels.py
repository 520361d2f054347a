"""Tests for level resolution."""

import logging

import pytest

from log_recorder.levels import LOG_LEVELS, level_name, resolve_level


class TestResolveLevel:
    @pytest.mark.parametrize("level,expected", [
        ("DEBUG", logging.DEBUG),
        ("INFO", logging.INFO),
        ("WARNING", logging.WARNING),
        ("ERROR", logging.ERROR),
        ("CRITICAL", logging.CRITICAL),
    ])
    def test_known_levels(self, level, expected):
        assert resolve_level(level) == expected

    def test_case_and_whitespace_insensitive(self):
        assert resolve_level("  info ") == logging.INFO
        assert resolve_level("Warning") == logging.WARNING

    @pytest.mark.parametrize("alias,expected", [
        ("WARN", logging.WARNING),
        ("FATAL", logging.CRITICAL),
        ("SEVERE", logging.ERROR),
        ("FINE", logging.DEBUG),
    ])
    def test_aliases(self, alias, expected):
        assert resolve_level(alias) == expected

    def test_ints_pass_through(self):
        assert resolve_level(logging.INFO) == logging.INFO
        assert resolve_level(25) == 25

    @pytest.mark.parametrize("bad", ["TRACE", "", -1, None, True, 1.5])
    def test_invalid_levels(self, bad):
        with pytest.raises(ValueError):
            resolve_level(bad)


class TestLevelName:
    def test_all_standard_levels_round_trip(self):
        for name in LOG_LEVELS:
            assert level_name(resolve_level(name)) == name
