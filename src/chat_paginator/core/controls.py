"""Transport-neutral descriptors for interactive message controls."""

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Union

from ..constants import ButtonStyle, PlatformLimits
from ..validation import validate_select_values

logger = logging.getLogger(__name__)


class ControlKind(str, Enum):
    """Role of a button in the navigation bar."""

    FIRST = "first"
    PREVIOUS = "previous"
    COUNTER = "counter"
    NEXT = "next"
    LAST = "last"
    STOP = "stop"


class ComponentType(str, Enum):
    """Kind of control an incoming event was raised by."""

    BUTTON = "button"
    SELECT = "select"


@dataclass(frozen=True)
class Button:
    """A clickable button.

    ``emoji_after`` places the icon after the label when the transport
    renders both as text (right-pointing controls).
    """

    custom_id: str
    kind: ControlKind
    label: str | None = None
    emoji: str | None = None
    style: ButtonStyle = ButtonStyle.PRIMARY
    disabled: bool = False
    emoji_after: bool = False

    def display_text(self) -> str:
        """Label and icon combined in reading order."""
        parts = [p for p in (self.label, self.emoji) if p]
        if not self.emoji_after:
            parts.reverse()
        return " ".join(parts)


@dataclass(frozen=True)
class SelectOption:
    """One entry of a dropdown selector."""

    label: str
    value: str
    description: str | None = None
    default: bool = False


@dataclass(frozen=True)
class SelectMenu:
    """A single-select dropdown."""

    custom_id: str
    options: tuple[SelectOption, ...]
    placeholder: str | None = None
    min_values: int = 1
    max_values: int = 1
    disabled: bool = False

    def __post_init__(self):
        validate_select_values(self.min_values, self.max_values)

    def selected(self) -> SelectOption | None:
        """The option marked as default, if any."""
        for option in self.options:
            if option.default:
                return option
        return None


Control = Union[Button, SelectMenu]


@dataclass(frozen=True)
class ActionRow:
    """A horizontal row of controls."""

    components: tuple[Control, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.components)


class ActionKind(str, Enum):
    """What a control activation asks the session to do."""

    FIRST = "first"
    PREVIOUS = "previous"
    NEXT = "next"
    LAST = "last"
    GOTO = "goto"
    STOP = "stop"
    NONE = "none"


@dataclass(frozen=True)
class NavigationAction:
    """A resolved control activation."""

    kind: ActionKind
    page: int | None = None


NO_ACTION = NavigationAction(ActionKind.NONE)


def build_action_rows(controls: list[Control], limits: PlatformLimits) -> list[ActionRow]:
    """
    Distribute controls over action rows.

    Buttons share rows up to the per-row cap; a select menu always takes a
    row of its own. At most ``max_rows_per_message`` rows are returned.

    Args:
        controls: Controls in display order.
        limits: Platform limits to respect.

    Returns:
        List of rows.
    """
    rows: list[ActionRow] = []
    current: list[Control] = []

    def flush() -> None:
        if current:
            rows.append(ActionRow(tuple(current)))
            current.clear()

    for control in controls:
        if isinstance(control, SelectMenu):
            flush()
            rows.append(ActionRow((control,)))
            continue
        if len(current) >= limits.max_buttons_per_row:
            flush()
        current.append(control)
    flush()

    if len(rows) > limits.max_rows_per_message:
        logger.warning(
            f"Controls need {len(rows)} rows, platform allows {limits.max_rows_per_message}; extra rows dropped"
        )
        rows = rows[: limits.max_rows_per_message]
    return rows


def disable_rows(rows: list[ActionRow]) -> list[ActionRow]:
    """Return copies of the rows with every control disabled."""
    return [
        ActionRow(tuple(replace(control, disabled=True) for control in row.components))
        for row in rows
    ]


def iter_controls(rows: list[ActionRow]):
    """Yield every control of every row in order."""
    for row in rows:
        yield from row.components


@dataclass(frozen=True)
class PageView:
    """Snapshot of the pagination state handed to a control surface."""

    current_page: int
    total_pages: int
    items: tuple = ()

    @property
    def at_start(self) -> bool:
        return self.current_page == 0

    @property
    def at_end(self) -> bool:
        return self.current_page == self.total_pages - 1
