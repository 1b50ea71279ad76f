"""Tests for the CommandParser module."""

import pytest
from chat_paginator.core.command_parser import (
    CommandParser,
    HelpCommand,
    InvalidCommand,
    NavigateCommand,
    PageCommand,
)
from chat_paginator.core.controls import ControlKind


class TestCommandParser:
    """Tests for CommandParser."""

    @pytest.fixture
    def parser(self):
        """Create a CommandParser instance."""
        return CommandParser()

    def test_parse_single_digit_number(self, parser):
        """Parsing a single digit returns PageCommand."""
        cmd = parser.parse("2")
        assert isinstance(cmd, PageCommand)
        assert cmd.number == 2

    def test_parse_number_with_whitespace(self, parser):
        """Parsing number with leading/trailing whitespace works."""
        cmd = parser.parse("  7  ")
        assert isinstance(cmd, PageCommand)
        assert cmd.number == 7

    def test_parse_page_prefix(self, parser):
        """'page 3' and 'g 3' select page 3."""
        assert parser.parse("page 3") == PageCommand(number=3)
        assert parser.parse("G 3") == PageCommand(number=3)

    def test_parse_zero_is_invalid(self, parser):
        """Zero is not a valid page."""
        cmd = parser.parse("0")
        assert isinstance(cmd, InvalidCommand)
        assert cmd.reason == "Page must be positive"

    def test_parse_negative_is_invalid(self, parser):
        """Negative numbers are invalid."""
        cmd = parser.parse("-5")
        assert isinstance(cmd, InvalidCommand)

    def test_parse_large_number_is_invalid(self, parser):
        """Numbers above the cap are rejected."""
        cmd = parser.parse("1000")
        assert isinstance(cmd, InvalidCommand)
        assert "999" in cmd.reason

    @pytest.mark.parametrize(
        "text, kind",
        [
            ("f", ControlKind.FIRST),
            ("first", ControlKind.FIRST),
            ("p", ControlKind.PREVIOUS),
            ("prev", ControlKind.PREVIOUS),
            ("b", ControlKind.PREVIOUS),
            ("back", ControlKind.PREVIOUS),
            ("n", ControlKind.NEXT),
            ("N", ControlKind.NEXT),
            ("next", ControlKind.NEXT),
            ("l", ControlKind.LAST),
            ("LAST", ControlKind.LAST),
            ("x", ControlKind.STOP),
            ("quit", ControlKind.STOP),
        ],
    )
    def test_parse_navigation(self, parser, text, kind):
        """Navigation words map to the matching control, case-insensitively."""
        assert parser.parse(text) == NavigateCommand(kind=kind)

    @pytest.mark.parametrize("text", ["?", "h", "help", "HELP"])
    def test_parse_help(self, parser, text):
        """Help aliases return HelpCommand."""
        assert isinstance(parser.parse(text), HelpCommand)

    def test_parse_empty_string(self, parser):
        """Empty string returns InvalidCommand."""
        cmd = parser.parse("")
        assert isinstance(cmd, InvalidCommand)
        assert cmd.reason == "Empty input"

    def test_parse_whitespace_only(self, parser):
        """Whitespace-only string returns InvalidCommand."""
        cmd = parser.parse("   ")
        assert isinstance(cmd, InvalidCommand)

    def test_parse_unknown_command(self, parser):
        """Unknown command returns InvalidCommand with original input."""
        cmd = parser.parse("xyz")
        assert isinstance(cmd, InvalidCommand)
        assert cmd.original_input == "xyz"
        assert cmd.reason == "Unknown command"

    def test_every_key_parses_back_to_its_control(self, parser):
        """The hint keys are themselves valid commands."""
        for kind, key in CommandParser.KEYS.items():
            assert parser.parse(key) == NavigateCommand(kind=kind)
