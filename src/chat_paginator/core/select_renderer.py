"""Selector control surface: a single dropdown listing the pages."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Union

from ..config import PaginatorConfig
from ..constants import DEFAULT_DESCRIPTION_MAX_LENGTH, DEFAULT_PLACEHOLDER, DEFAULT_SELECT_ID, LabelStyle
from ..errors import ComponentError, RenderError, ValidationError
from ..validation import validate_bool, validate_custom_id, validate_max_options, validate_placeholder
from .controls import (
    ActionKind,
    ActionRow,
    ComponentType,
    NavigationAction,
    NO_ACTION,
    PageView,
    SelectMenu,
    SelectOption,
    build_action_rows,
)

if TYPE_CHECKING:
    from ..interfaces.message_transport import ControlEvent

logger = logging.getLogger(__name__)

# Item fields consulted, in order, for an automatic option description.
DESCRIPTION_FIELDS = ("description", "content", "title", "name", "label")


@dataclass(frozen=True)
class OptionLabel:
    """What a custom label renderer returns for one page."""

    label: str
    description: str | None = None


LabelRenderer = Callable[[Any, int], Union[OptionLabel, Mapping, str]]
DescriptionRenderer = Callable[[Any, int], Union[str, None]]


@dataclass(frozen=True)
class SelectOptions:
    """Configuration of the selector surface.

    Attributes:
        custom_id: Identifier of the dropdown.
        placeholder: Hint shown when nothing is selected.
        label_style: Explicit labeling strategy (inferred when None).
        label_prefix: Prefix for custom numbering, e.g. "Chapter".
        label_suffix: Suffix for custom numbering.
        label_renderer: Function (item, index) returning the option label.
        description_renderer: Descriptions for the custom renderer path.
        show_descriptions: Generate descriptions from the items.
        description_max_length: Cap for generated descriptions.
        max_options: Options listed (defaults to the session config).
    """

    custom_id: str = DEFAULT_SELECT_ID
    placeholder: str = DEFAULT_PLACEHOLDER
    label_style: LabelStyle | None = None
    label_prefix: str | None = None
    label_suffix: str | None = None
    label_renderer: LabelRenderer | None = None
    description_renderer: DescriptionRenderer | None = None
    show_descriptions: bool = True
    description_max_length: int = DEFAULT_DESCRIPTION_MAX_LENGTH
    max_options: int | None = None


@dataclass(frozen=True)
class LabelingInfo:
    """Which labeling strategy a selector ended up using."""

    style: LabelStyle
    prefix: str | None
    suffix: str | None
    is_custom_renderer: bool


def truncate(text: str, max_length: int) -> str:
    """Cut text to max_length, marking the cut with '...'."""
    if len(text) <= max_length:
        return text
    if max_length <= 3:
        return text[:max_length]
    return text[: max_length - 3] + "..."


def describe_item(item: Any) -> str | None:
    """
    Derive a short description from a page item.

    Strings describe themselves. Mappings and objects use the first present
    field of DESCRIPTION_FIELDS; mappings without one are summarized by size.
    """
    if item is None:
        return None
    if isinstance(item, str):
        return item

    if isinstance(item, Mapping):
        for key in DESCRIPTION_FIELDS:
            value = item.get(key)
            if value is not None and value != "":
                return str(value)
        return f"Object with {len(item)} properties"

    for key in DESCRIPTION_FIELDS:
        value = getattr(item, key, None)
        if value is not None and value != "" and not callable(value):
            return str(value)
    return str(item)


class SelectRenderer:
    """Renders the page dropdown and resolves selections."""

    def __init__(self, options: SelectOptions | None = None, config: PaginatorConfig | None = None):
        """
        Initialize the surface and settle the labeling strategy.

        Raises:
            ValidationError: If any option is invalid, including custom
                numbering with neither prefix nor suffix.
        """
        self.options = options or SelectOptions()
        self.config = config or PaginatorConfig()
        limits = self.config.limits
        opts = self.options

        validate_custom_id(opts.custom_id)
        validate_placeholder(opts.placeholder, limits)
        validate_bool("show_descriptions", opts.show_descriptions)
        if not isinstance(opts.description_max_length, int) or opts.description_max_length < 1:
            raise ValidationError("description_max_length", opts.description_max_length, "positive integer")
        if opts.label_renderer is not None and not callable(opts.label_renderer):
            raise ValidationError("label_renderer", opts.label_renderer, "callable")
        if opts.description_renderer is not None and not callable(opts.description_renderer):
            raise ValidationError("description_renderer", opts.description_renderer, "callable")

        self.max_options = self.config.max_options_per_menu if opts.max_options is None else opts.max_options
        validate_max_options(self.max_options, limits)

        self.label_style = self._resolve_label_style()
        self.fallback_pages: tuple[int, ...] = ()
        self._warned_totals: set[int] = set()

    def _resolve_label_style(self) -> LabelStyle:
        opts = self.options
        style = LabelStyle(opts.label_style) if opts.label_style is not None else None
        has_affix = bool(opts.label_prefix) or bool(opts.label_suffix)

        configured = []
        if opts.label_renderer is not None:
            configured.append(LabelStyle.CUSTOM_LABELS)
        elif style is LabelStyle.CUSTOM_LABELS:
            raise ValidationError("label_renderer", None, "callable when label_style is custom-labels")
        if has_affix or style is LabelStyle.CUSTOM_NUMBERS:
            configured.append(LabelStyle.CUSTOM_NUMBERS)

        if len(configured) > 1:
            logger.warning(
                "Both a custom label renderer and custom numbering are configured; "
                "the custom label renderer takes precedence"
            )

        if LabelStyle.CUSTOM_LABELS in configured:
            return LabelStyle.CUSTOM_LABELS
        if LabelStyle.CUSTOM_NUMBERS in configured:
            if not has_affix:
                raise ValidationError(
                    "label_prefix", opts.label_prefix, "non-empty prefix or suffix for custom numbering"
                )
            if style is LabelStyle.PAGE_NUMBERS:
                logger.warning("label_style is page-numbers but a prefix/suffix is set; using custom numbering")
            return LabelStyle.CUSTOM_NUMBERS
        return LabelStyle.PAGE_NUMBERS

    @property
    def custom_ids(self) -> frozenset[str]:
        return frozenset({self.options.custom_id})

    def owns(self, custom_id: str) -> bool:
        return custom_id == self.options.custom_id

    def labeling_info(self) -> LabelingInfo:
        return LabelingInfo(
            style=self.label_style,
            prefix=self.options.label_prefix or None,
            suffix=self.options.label_suffix or None,
            is_custom_renderer=self.label_style is LabelStyle.CUSTOM_LABELS,
        )

    def accessible_page_count(self, total_pages: int) -> int:
        return min(total_pages, self.max_options)

    def are_all_pages_accessible(self, total_pages: int) -> bool:
        return total_pages <= self.max_options

    def is_page_accessible(self, index: int, total_pages: int) -> bool:
        return 0 <= index < self.accessible_page_count(total_pages)

    def _numbered_label(self, index: int) -> str:
        prefix = self.options.label_prefix
        suffix = self.options.label_suffix or ""
        if prefix:
            return f"{prefix} {index + 1}{suffix}"
        return f"{index + 1} {suffix}"

    def _auto_description(self, item: Any) -> str | None:
        if not self.options.show_descriptions:
            return None
        text = describe_item(item)
        if not text:
            return None
        text = truncate(text, self.options.description_max_length)
        return truncate(text, self.config.limits.max_option_description_length)

    def _custom_option(self, item: Any, index: int) -> tuple[str, str | None]:
        limits = self.config.limits
        result = self.options.label_renderer(item, index)

        if isinstance(result, OptionLabel):
            label, description = result.label, result.description
        elif isinstance(result, Mapping):
            label, description = result.get("label"), result.get("description")
        else:
            label, description = result, None

        if not isinstance(label, str) or not label.strip():
            raise RenderError(index, "Custom label renderer returned an empty label")
        label = label.strip()
        if len(label) > limits.max_option_label_length:
            raise ValidationError(
                f"options[{index}].label", label, f"string with max length {limits.max_option_label_length}"
            )

        if self.options.description_renderer is not None:
            description = self.options.description_renderer(item, index)
        if description:
            description = truncate(str(description), limits.max_option_description_length)
        return label, description or None

    def build_option(self, item: Any, index: int, selected: bool) -> SelectOption:
        """
        Build the option for one page.

        Raises:
            RenderError: If a custom renderer yields an empty label.
            ValidationError: If a custom renderer label is too long.
        """
        if self.label_style is LabelStyle.CUSTOM_LABELS:
            label, description = self._custom_option(item, index)
        else:
            if self.label_style is LabelStyle.CUSTOM_NUMBERS:
                label = self._numbered_label(index)
            else:
                label = f"Page {index + 1}"
            label = truncate(label, self.config.limits.max_option_label_length)
            description = self._auto_description(item)

        return SelectOption(label=label, value=str(index), description=description, default=selected)

    def build_menu(self, view: PageView) -> SelectMenu:
        """Build the dropdown for the given page view."""
        total = view.total_pages
        count = self.accessible_page_count(total)

        if total > self.max_options and total not in self._warned_totals:
            self._warned_totals.add(total)
            logger.warning(
                f"{total} pages exceed the selector limit of {self.max_options}; "
                f"only the first {self.max_options} pages are selectable"
            )

        options: list[SelectOption] = []
        fallback: list[int] = []
        for index in range(count):
            selected = index == view.current_page
            item = view.items[index] if index < len(view.items) else None
            try:
                option = self.build_option(item, index, selected)
            except (RenderError, ValidationError):
                raise
            except Exception as e:
                logger.warning(f"Failed to build option for page {index + 1}, using fallback: {e}")
                fallback.append(index)
                option = SelectOption(label=f"Page {index + 1}", value=str(index), default=selected)
            options.append(option)

        self.fallback_pages = tuple(fallback)
        return SelectMenu(
            custom_id=self.options.custom_id,
            options=tuple(options),
            placeholder=self.options.placeholder,
        )

    def render(self, view: PageView) -> list[ActionRow]:
        return build_action_rows([self.build_menu(view)], self.config.limits)

    def resolve(self, event: "ControlEvent", view: PageView) -> NavigationAction:
        """
        Map a dropdown selection to a navigation action.

        Raises:
            ComponentError: If the event is not for this menu or carries an
                unusable value.
        """
        if event.component_type is not ComponentType.SELECT or not self.owns(event.control_id):
            raise ComponentError("Select", f"Unknown select interaction: {event.control_id}")
        if not event.values:
            return NO_ACTION

        raw = event.values[0]
        try:
            page = int(raw)
        except (TypeError, ValueError):
            raise ComponentError("Select", f"Invalid page value: {raw!r}") from None

        if not self.is_page_accessible(page, view.total_pages):
            raise ComponentError("Select", f"Page value out of range: {raw!r}")
        if page == view.current_page:
            return NO_ACTION
        return NavigationAction(ActionKind.GOTO, page)
