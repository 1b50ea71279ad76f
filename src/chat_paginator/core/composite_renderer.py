"""Composite surface combining navigation buttons and a page selector."""

import logging
from typing import TYPE_CHECKING

from ..config import PaginatorConfig
from ..constants import Layout
from ..errors import ComponentError, ValidationError
from ..validation import validate_bool, validate_layout
from .button_renderer import ButtonOptions, ButtonRenderer
from .controls import ActionRow, ComponentType, NavigationAction, PageView
from .select_renderer import SelectOptions, SelectRenderer

if TYPE_CHECKING:
    from ..interfaces.message_transport import ControlEvent

logger = logging.getLogger(__name__)


class CompositeRenderer:
    """
    Renders buttons and a selector as one control surface.

    Both parts are logical views over the same session state: every render
    hands them the same PageView, so they always agree on the current page.
    """

    def __init__(
        self,
        buttons: ButtonRenderer | None = None,
        select: SelectRenderer | None = None,
        layout: Layout | str = Layout.BUTTONS_TOP,
        enable_buttons: bool = True,
        enable_select: bool = True,
        config: PaginatorConfig | None = None,
    ):
        """
        Initialize the composite surface.

        Args:
            buttons: Button part (built from defaults when None).
            select: Selector part (built from defaults when None).
            layout: Row ordering of the two parts.
            enable_buttons: Whether the buttons are shown and routed.
            enable_select: Whether the selector is shown and routed.
            config: Session config used for default parts and limits.

        Raises:
            ValidationError: If both parts are disabled, the layout is
                unknown, or the two parts share control identifiers.
        """
        self.config = config or PaginatorConfig()
        self.buttons = buttons or ButtonRenderer(ButtonOptions(), self.config)
        self.select = select or SelectRenderer(SelectOptions(), self.config)
        self.layout = validate_layout(layout)

        validate_bool("enable_buttons", enable_buttons)
        validate_bool("enable_select", enable_select)
        if not enable_buttons and not enable_select:
            raise ValidationError(
                "enable_buttons/enable_select", (enable_buttons, enable_select), "at least one surface enabled"
            )
        self.enable_buttons = enable_buttons
        self.enable_select = enable_select

        shared = self.buttons.custom_ids & self.select.custom_ids
        if shared:
            raise ValidationError("custom_id", sorted(shared), "disjoint identifiers for buttons and selector")

    def _copy(self, **changes) -> "CompositeRenderer":
        settings = {
            "buttons": self.buttons,
            "select": self.select,
            "layout": self.layout,
            "enable_buttons": self.enable_buttons,
            "enable_select": self.enable_select,
            "config": self.config,
        }
        settings.update(changes)
        return CompositeRenderer(**settings)

    def with_layout(self, layout: Layout | str) -> "CompositeRenderer":
        return self._copy(layout=layout)

    def with_buttons_enabled(self, enabled: bool) -> "CompositeRenderer":
        return self._copy(enable_buttons=enabled)

    def with_select_enabled(self, enabled: bool) -> "CompositeRenderer":
        return self._copy(enable_select=enabled)

    @property
    def custom_ids(self) -> frozenset[str]:
        ids: frozenset[str] = frozenset()
        if self.enable_buttons:
            ids |= self.buttons.custom_ids
        if self.enable_select:
            ids |= self.select.custom_ids
        return ids

    @property
    def fallback_pages(self) -> tuple[int, ...]:
        return self.select.fallback_pages if self.enable_select else ()

    def owns(self, custom_id: str) -> bool:
        return (self.enable_buttons and self.buttons.owns(custom_id)) or (
            self.enable_select and self.select.owns(custom_id)
        )

    def render(self, view: PageView) -> list[ActionRow]:
        """Render the enabled parts and merge their rows per layout."""
        button_rows = self.buttons.render(view) if self.enable_buttons else []
        select_rows = self.select.render(view) if self.enable_select else []

        if self.layout in (Layout.BUTTONS_TOP, Layout.SELECT_BOTTOM):
            rows = button_rows + select_rows
        else:
            rows = select_rows + button_rows

        max_rows = self.config.limits.max_rows_per_message
        if len(rows) > max_rows:
            logger.warning(f"Composite controls need {len(rows)} rows, truncating to {max_rows}")
            rows = rows[:max_rows]
        return rows

    def resolve(self, event: "ControlEvent", view: PageView) -> NavigationAction:
        """
        Delegate an event to the part that owns its identifier.

        Raises:
            ComponentError: If no enabled part owns the identifier.
        """
        if event.component_type is ComponentType.BUTTON and self.enable_buttons:
            if self.buttons.owns(event.control_id):
                return self.buttons.resolve(event, view)
        elif event.component_type is ComponentType.SELECT and self.enable_select:
            if self.select.owns(event.control_id):
                return self.select.resolve(event, view)
        raise ComponentError("Composite", f"Unknown interaction: {event.control_id}")

    def accessible_page_count(self, total_pages: int) -> int:
        # Buttons reach every page; the selector alone may be capped.
        if self.enable_buttons:
            return total_pages
        return self.select.accessible_page_count(total_pages)

