"""Input validation for paginator entry points.

Every function here is a pure check: it either returns (possibly a normalized
value) or raises ValidationError naming the field, the offending value and
the expected shape. Nothing here touches session state.
"""

import numbers
import re
from collections.abc import Mapping, Sequence
from typing import Any

from .constants import (
    CUSTOM_EMOJI_PATTERN,
    CUSTOM_ID_PATTERN,
    AfterTimeout,
    ButtonStyle,
    Layout,
    PlatformLimits,
)
from .errors import ValidationError

_EMOJI_CHAR = (
    "["
    "\U0001F000-\U0001FAFF"
    "\u2190-\u21FF"
    "\u2300-\u23FF"
    "\u2460-\u24FF"
    "\u25A0-\u25FF"
    "\u2600-\u27BF"
    "\u2900-\u297F"
    "\u2B00-\u2BFF"
    "\u3030\u303D\u3297\u3299"
    "\u00A9\u00AE\u203C\u2049\u2122\u2139"
    "]"
)
_KEYCAP = "[#*0-9]\uFE0F?\u20E3"
_EMOJI_PATTERN = re.compile(
    "(?:" + _EMOJI_CHAR + "|" + _KEYCAP + ")"
    "(?:" + _EMOJI_CHAR + "|[\uFE0F\u200D\u20E3])*"
)
_MAX_EMOJI_LENGTH = 16

_CUSTOM_EMOJI_RE = re.compile(CUSTOM_EMOJI_PATTERN)
_CUSTOM_ID_RE = re.compile(CUSTOM_ID_PATTERN)

_DEFAULT_LIMITS = PlatformLimits()


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def is_emoji(value: Any) -> bool:
    """Check whether a string is a single Unicode icon token (e.g. "⬅️")."""
    if not isinstance(value, str) or not value or len(value) > _MAX_EMOJI_LENGTH:
        return False
    return _EMOJI_PATTERN.fullmatch(value) is not None


def is_custom_emoji(value: Any) -> bool:
    """Check whether a string is a platform custom emoji (<:name:id>)."""
    return isinstance(value, str) and _CUSTOM_EMOJI_RE.fullmatch(value) is not None


def is_any_emoji(value: Any) -> bool:
    """Check whether a string is any valid icon token."""
    return is_emoji(value) or is_custom_emoji(value)


def validate_data(data: Any) -> None:
    """Pagination data must be a non-empty ordered sequence."""
    if isinstance(data, (str, bytes, Mapping)) or not isinstance(data, Sequence):
        raise ValidationError("data", data, "ordered sequence")
    if len(data) == 0:
        raise ValidationError("data", data, "non-empty sequence")


def validate_timeout(timeout: Any, limits: PlatformLimits = _DEFAULT_LIMITS) -> float:
    """Timeout must be a non-negative number within the interaction token lifetime.

    Returns:
        The timeout as a float.
    """
    if isinstance(timeout, bool) or not isinstance(timeout, numbers.Real) or timeout < 0:
        raise ValidationError("timeout", timeout, "non-negative number of seconds")
    if timeout > limits.interaction_token_lifetime:
        raise ValidationError(
            "timeout",
            timeout,
            f"at most {limits.interaction_token_lifetime:g}s (interaction token lifetime)",
        )
    return float(timeout)


def validate_page_number(page: Any, total_pages: int) -> None:
    """Page must be an integer index into the data."""
    if not _is_int(page):
        raise ValidationError("page", page, "integer")
    if page < 0 or page >= total_pages:
        raise ValidationError("page", page, f"integer between 0 and {total_pages - 1}")


def validate_start_page(page: Any) -> None:
    """Start page must be a non-negative integer."""
    if not _is_int(page) or page < 0:
        raise ValidationError("start_page", page, "non-negative integer")


def validate_after_timeout(value: Any) -> AfterTimeout:
    """After-timeout policy must be 'delete' or 'disable'."""
    try:
        return AfterTimeout(value)
    except ValueError:
        choices = ", ".join(b.value for b in AfterTimeout)
        raise ValidationError("after_timeout", value, f"one of: {choices}") from None


def validate_button_style(value: Any) -> ButtonStyle:
    """Button style must name one of the supported styles."""
    try:
        return ButtonStyle(value)
    except ValueError:
        choices = ", ".join(s.value for s in ButtonStyle)
        raise ValidationError("button_style", value, f"one of: {choices}") from None


def validate_layout(value: Any) -> Layout:
    """Composite layout must be one of the four named layouts."""
    try:
        return Layout(value)
    except ValueError:
        choices = ", ".join(layout.value for layout in Layout)
        raise ValidationError("layout", value, f"one of: {choices}") from None


def validate_bool(field: str, value: Any) -> None:
    if not isinstance(value, bool):
        raise ValidationError(field, value, "boolean")


def validate_button_label(label: Any, limits: PlatformLimits = _DEFAULT_LIMITS, field: str = "button_label") -> None:
    """Button labels are non-empty strings within the platform length cap."""
    if not isinstance(label, str):
        raise ValidationError(field, label, "string")
    if not label:
        raise ValidationError(field, label, "non-empty string")
    if len(label) > limits.max_button_label_length:
        raise ValidationError(field, label, f"string with max length {limits.max_button_label_length}")


def validate_emoji(value: Any, field: str = "emoji") -> None:
    """Value must be a Unicode icon or a custom <:name:id> emoji."""
    if not isinstance(value, str):
        raise ValidationError(field, value, "string")
    if not is_any_emoji(value):
        raise ValidationError(field, value, "valid emoji (Unicode or custom <:name:id>)")


def validate_button_config(config: Any, name: str, limits: PlatformLimits = _DEFAULT_LIMITS) -> None:
    """Validate a button label/icon configuration.

    Accepted shapes:
        "Next"            - a label, default icon added at render time
        "➡️"              - an icon, default label added at render time
        ["Next"]          - same as the bare string
        ["Next", "➡️"]    - label and icon taken literally
    """
    if isinstance(config, str):
        if not config:
            raise ValidationError(name, config, "non-empty string")
        if not is_any_emoji(config):
            validate_button_label(config, limits, field=name)
        return

    if not isinstance(config, (list, tuple)):
        raise ValidationError(name, config, "string or [label, emoji] pair")

    if len(config) not in (1, 2):
        raise ValidationError(name, config, "sequence with 1 or 2 elements")

    for index, item in enumerate(config):
        field = f"{name}[{index}]"
        if not isinstance(item, str) or not item:
            raise ValidationError(field, item, "non-empty string")
        if index == 0 and not is_any_emoji(item):
            validate_button_label(item, limits, field=field)
        if index == 1 and not is_any_emoji(item):
            raise ValidationError(field, item, "valid emoji (Unicode or custom <:name:id>)")


def validate_custom_id(value: Any, field: str = "custom_id") -> None:
    """Identifiers are 1-100 characters of letters, digits, '_' or '-'."""
    if not isinstance(value, str) or _CUSTOM_ID_RE.fullmatch(value) is None:
        raise ValidationError(
            field,
            value,
            "string of letters, digits, underscores and hyphens (1-100 chars)",
        )


def validate_placeholder(value: Any, limits: PlatformLimits = _DEFAULT_LIMITS) -> None:
    if not isinstance(value, str):
        raise ValidationError("placeholder", value, "string")
    if len(value) > limits.max_select_placeholder_length:
        raise ValidationError(
            "placeholder", value, f"string with max length {limits.max_select_placeholder_length}"
        )


def validate_select_values(min_values: Any, max_values: Any, limits: PlatformLimits = _DEFAULT_LIMITS) -> None:
    if not _is_int(min_values) or min_values < 1:
        raise ValidationError("min_values", min_values, "positive integer")
    if not _is_int(max_values) or max_values < min_values:
        raise ValidationError("max_values", max_values, f"integer >= {min_values}")
    if max_values > limits.max_select_options:
        raise ValidationError("max_values", max_values, f"integer <= {limits.max_select_options}")


def validate_max_options(value: Any, limits: PlatformLimits = _DEFAULT_LIMITS) -> None:
    """Per-menu option count must fit the platform's menu cap."""
    if not _is_int(value) or value < 1 or value > limits.max_select_options:
        raise ValidationError(
            "max_options_per_menu", value, f"integer between 1 and {limits.max_select_options}"
        )


def validate_message_content(content: Any, limits: PlatformLimits = _DEFAULT_LIMITS) -> None:
    if not isinstance(content, str):
        raise ValidationError("message_content", content, "string")
    if len(content) > limits.max_message_length:
        raise ValidationError(
            "message_content",
            f"{content[:40]}... ({len(content)} chars)",
            f"string with max length {limits.max_message_length}",
        )


def validate_rich_content(content: Any, limits: PlatformLimits = _DEFAULT_LIMITS) -> None:
    """Check a rich page against the platform's embed limits."""
    checks = [
        ("embed.title", content.title, limits.max_embed_title_length),
        ("embed.description", content.description, limits.max_embed_description_length),
        ("embed.footer", content.footer, limits.max_embed_footer_length),
    ]
    for index, rich_field in enumerate(content.fields):
        checks.append((f"embed.fields[{index}].name", rich_field.name, limits.max_embed_field_name_length))
        checks.append((f"embed.fields[{index}].value", rich_field.value, limits.max_embed_field_value_length))

    total = 0
    for field, text, max_length in checks:
        if text is None:
            continue
        if len(text) > max_length:
            raise ValidationError(field, f"{text[:40]}... ({len(text)} chars)", f"string with max length {max_length}")
        total += len(text)

    if total > limits.max_embed_total_length:
        raise ValidationError("embed", total, f"total text length <= {limits.max_embed_total_length}")
