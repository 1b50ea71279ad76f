"""Command parser for text-based page navigation."""

from abc import ABC
from dataclasses import dataclass

from .controls import ControlKind


class Command(ABC):
    """Base class for all commands."""

    pass


@dataclass(frozen=True)
class NavigateCommand(Command):
    """Command that presses one of the navigation buttons."""

    kind: ControlKind


@dataclass(frozen=True)
class PageCommand(Command):
    """Command to jump to a page by its 1-based number."""

    number: int


@dataclass(frozen=True)
class HelpCommand(Command):
    """Command to display help information."""

    pass


@dataclass(frozen=True)
class InvalidCommand(Command):
    """Represents an invalid or unrecognized command."""

    original_input: str
    reason: str = "Unknown command"


class CommandParser:
    """Parses user input strings into Command objects."""

    MAX_PAGE = 999

    NAVIGATION_COMMANDS = {
        "f": ControlKind.FIRST,
        "first": ControlKind.FIRST,
        "p": ControlKind.PREVIOUS,
        "prev": ControlKind.PREVIOUS,
        "previous": ControlKind.PREVIOUS,
        "b": ControlKind.PREVIOUS,
        "back": ControlKind.PREVIOUS,
        "n": ControlKind.NEXT,
        "next": ControlKind.NEXT,
        "l": ControlKind.LAST,
        "last": ControlKind.LAST,
        "x": ControlKind.STOP,
        "stop": ControlKind.STOP,
        "q": ControlKind.STOP,
        "quit": ControlKind.STOP,
    }
    HELP_COMMANDS = {"?", "h", "help"}

    # Single-letter key shown in hints for each control
    KEYS = {
        ControlKind.FIRST: "f",
        ControlKind.PREVIOUS: "p",
        ControlKind.NEXT: "n",
        ControlKind.LAST: "l",
        ControlKind.STOP: "x",
    }

    def parse(self, input_str: str) -> Command:
        """
        Parse a user input string into a Command object.

        Args:
            input_str: The raw input string from the user.

        Returns:
            A Command object representing the parsed input.
        """
        cleaned = input_str.strip().lower()

        if not cleaned:
            return InvalidCommand(original_input=input_str, reason="Empty input")

        if cleaned in self.NAVIGATION_COMMANDS:
            return NavigateCommand(kind=self.NAVIGATION_COMMANDS[cleaned])

        if cleaned in self.HELP_COMMANDS:
            return HelpCommand()

        # "3", "g 3" and "page 3" all select page 3
        for prefix in ("page ", "g "):
            if cleaned.startswith(prefix):
                cleaned = cleaned[len(prefix):].strip()
                break

        try:
            number = int(cleaned)
        except ValueError:
            return InvalidCommand(original_input=input_str, reason="Unknown command")

        if number < 1:
            return InvalidCommand(original_input=input_str, reason="Page must be positive")
        if number > self.MAX_PAGE:
            return InvalidCommand(original_input=input_str, reason=f"Page must be <= {self.MAX_PAGE}")
        return PageCommand(number=number)
