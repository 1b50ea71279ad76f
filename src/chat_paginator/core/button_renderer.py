"""Button control surface: first / previous / counter / next / last."""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

from ..config import PaginatorConfig
from ..constants import DEFAULT_BUTTON_ID_PREFIX, ButtonStyle
from ..errors import ComponentError, ValidationError
from ..validation import is_any_emoji, validate_bool, validate_button_config, validate_button_style, validate_custom_id
from .controls import (
    ActionKind,
    ActionRow,
    Button,
    ComponentType,
    ControlKind,
    NavigationAction,
    NO_ACTION,
    PageView,
    build_action_rows,
)

if TYPE_CHECKING:
    from ..interfaces.message_transport import ControlEvent

ButtonConfig = Union[str, Sequence[str]]

DEFAULT_LABELS = {
    ControlKind.FIRST: "First",
    ControlKind.PREVIOUS: "Previous",
    ControlKind.NEXT: "Next",
    ControlKind.LAST: "Last",
    ControlKind.STOP: "Stop",
}

_ID_SUFFIXES = {
    ControlKind.FIRST: "first",
    ControlKind.PREVIOUS: "prev",
    ControlKind.COUNTER: "counter",
    ControlKind.NEXT: "next",
    ControlKind.LAST: "last",
    ControlKind.STOP: "stop",
}

_ACTIONS = {
    ControlKind.FIRST: NavigationAction(ActionKind.FIRST),
    ControlKind.PREVIOUS: NavigationAction(ActionKind.PREVIOUS),
    ControlKind.NEXT: NavigationAction(ActionKind.NEXT),
    ControlKind.LAST: NavigationAction(ActionKind.LAST),
    ControlKind.STOP: NavigationAction(ActionKind.STOP),
    ControlKind.COUNTER: NO_ACTION,
}


@dataclass(frozen=True)
class ButtonOptions:
    """Configuration of the button surface.

    Each of previous/next/first/last/stop is a label, an icon, or a
    [label, icon] pair. None means the default label with the default icon.
    style and show_page_counter fall back to the session config when None.
    """

    previous: ButtonConfig | None = None
    next: ButtonConfig | None = None
    first: ButtonConfig | None = None
    last: ButtonConfig | None = None
    stop: ButtonConfig | None = None
    style: ButtonStyle | None = None
    show_page_counter: bool | None = None
    show_first_last: bool = True
    show_stop: bool = False
    id_prefix: str = DEFAULT_BUTTON_ID_PREFIX


@dataclass(frozen=True)
class ParsedButton:
    label: str
    emoji: str


def parse_button_config(config: ButtonConfig | None, default_label: str, default_emoji: str) -> ParsedButton:
    """
    Resolve a button configuration into a label and an icon.

    A bare string (or one-element sequence) is classified as an icon when it
    looks like one, otherwise as a label; the default fills the other half.
    A pair is taken literally as [label, icon].
    """
    if config is None:
        return ParsedButton(default_label, default_emoji)

    if isinstance(config, str):
        value = config
    elif len(config) == 1:
        value = config[0]
    elif len(config) == 2:
        return ParsedButton(config[0], config[1])
    else:
        return ParsedButton(default_label, default_emoji)

    if is_any_emoji(value):
        return ParsedButton(default_label, value)
    return ParsedButton(value, default_emoji)


class ButtonRenderer:
    """Renders navigation buttons and resolves their activations."""

    def __init__(self, options: ButtonOptions | None = None, config: PaginatorConfig | None = None):
        """
        Initialize the surface.

        Args:
            options: Button surface settings.
            config: Session config supplying default icons, style and limits.

        Raises:
            ValidationError: If any option is invalid.
        """
        self.options = options or ButtonOptions()
        self.config = config or PaginatorConfig()
        limits = self.config.limits

        validate_custom_id(self.options.id_prefix, field="id_prefix")
        for kind in DEFAULT_LABELS:
            value = getattr(self.options, kind.value)
            if value is not None:
                validate_button_config(value, kind.value, limits)
        if self.options.style is not None:
            validate_button_style(self.options.style)
        if self.options.show_page_counter is not None:
            validate_bool("show_page_counter", self.options.show_page_counter)
        validate_bool("show_first_last", self.options.show_first_last)
        validate_bool("show_stop", self.options.show_stop)

        self.style = ButtonStyle(self.options.style or self.config.button_style)
        self.show_page_counter = (
            self.config.show_page_counter
            if self.options.show_page_counter is None
            else self.options.show_page_counter
        )

        emojis = self.config.emojis
        default_emojis = {
            ControlKind.FIRST: emojis.first,
            ControlKind.PREVIOUS: emojis.previous,
            ControlKind.NEXT: emojis.next,
            ControlKind.LAST: emojis.last,
            ControlKind.STOP: emojis.stop,
        }
        self._parsed = {
            kind: parse_button_config(getattr(self.options, kind.value), DEFAULT_LABELS[kind], default_emojis[kind])
            for kind in DEFAULT_LABELS
        }
        self._ids = {kind: f"{self.options.id_prefix}_{suffix}" for kind, suffix in _ID_SUFFIXES.items()}
        for custom_id in self._ids.values():
            if len(custom_id) > 100:
                raise ValidationError("id_prefix", self.options.id_prefix, "prefix leaving room for control suffixes")
        self._kinds = {custom_id: kind for kind, custom_id in self._ids.items()}

    @property
    def custom_ids(self) -> frozenset[str]:
        """Every identifier this surface may emit."""
        return frozenset(self._ids.values())

    def custom_id(self, kind: ControlKind) -> str:
        return self._ids[kind]

    def owns(self, custom_id: str) -> bool:
        return custom_id in self._kinds

    def _button(self, kind: ControlKind, disabled: bool) -> Button:
        parsed = self._parsed[kind]
        style = ButtonStyle.DANGER if kind is ControlKind.STOP else self.style
        return Button(
            custom_id=self._ids[kind],
            kind=kind,
            label=parsed.label,
            emoji=parsed.emoji,
            style=style,
            disabled=disabled,
            emoji_after=kind in (ControlKind.NEXT, ControlKind.LAST),
        )

    def build_buttons(self, view: PageView) -> list[Button]:
        """Build the buttons for a page, in display order."""
        show_edges = self.options.show_first_last and view.total_pages > 2
        buttons: list[Button] = []

        if show_edges:
            buttons.append(self._button(ControlKind.FIRST, view.at_start))
        buttons.append(self._button(ControlKind.PREVIOUS, view.at_start))

        if self.show_page_counter:
            buttons.append(
                Button(
                    custom_id=self._ids[ControlKind.COUNTER],
                    kind=ControlKind.COUNTER,
                    label=f"{view.current_page + 1} / {view.total_pages}",
                    style=ButtonStyle.SECONDARY,
                    disabled=True,
                )
            )

        buttons.append(self._button(ControlKind.NEXT, view.at_end))
        if show_edges:
            buttons.append(self._button(ControlKind.LAST, view.at_end))

        if self.options.show_stop:
            buttons.append(self._button(ControlKind.STOP, False))
        return buttons

    def render(self, view: PageView) -> list[ActionRow]:
        return build_action_rows(self.build_buttons(view), self.config.limits)

    def resolve(self, event: "ControlEvent", view: PageView) -> NavigationAction:
        """
        Map a button activation to a navigation action.

        Raises:
            ComponentError: If the identifier is not one of this surface's buttons.
        """
        if event.component_type is not ComponentType.BUTTON:
            raise ComponentError("Button", f"Unexpected {event.component_type.value} interaction: {event.control_id}")
        kind = self._kinds.get(event.control_id)
        if kind is None:
            raise ComponentError("Button", f"Unknown button interaction: {event.control_id}")
        return _ACTIONS[kind]

    def accessible_page_count(self, total_pages: int) -> int:
        return total_pages
