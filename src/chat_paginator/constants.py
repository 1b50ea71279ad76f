"""Platform limits, enums and default identifiers."""

from dataclasses import dataclass
from enum import Enum


class ButtonStyle(str, Enum):
    """Visual style of a button control."""

    PRIMARY = "primary"
    SECONDARY = "secondary"
    SUCCESS = "success"
    DANGER = "danger"


class AfterTimeout(str, Enum):
    """What happens to the message when a session times out."""

    DELETE = "delete"
    DISABLE = "disable"


class Layout(str, Enum):
    """Row ordering for a composite (buttons + selector) surface."""

    BUTTONS_TOP = "buttons-top"
    BUTTONS_BOTTOM = "buttons-bottom"
    SELECT_TOP = "select-top"
    SELECT_BOTTOM = "select-bottom"


class LabelStyle(str, Enum):
    """Labeling strategy of selector options."""

    PAGE_NUMBERS = "page-numbers"
    CUSTOM_NUMBERS = "custom-numbers"
    CUSTOM_LABELS = "custom-labels"


@dataclass(frozen=True)
class PlatformLimits:
    """Hard limits imposed by the chat platform on messages and controls.

    Durations are in seconds.
    """

    max_buttons_per_row: int = 5
    max_rows_per_message: int = 5
    max_select_options: int = 25
    max_select_placeholder_length: int = 150
    max_button_label_length: int = 80
    max_option_label_length: int = 100
    max_option_description_length: int = 100
    max_option_value_length: int = 100
    max_message_length: int = 2000
    max_embed_title_length: int = 256
    max_embed_description_length: int = 4096
    max_embed_field_name_length: int = 256
    max_embed_field_value_length: int = 1024
    max_embed_footer_length: int = 2048
    max_embed_total_length: int = 6000
    interaction_token_lifetime: float = 900.0


DEFAULT_BUTTON_ID_PREFIX = "pager_btn"
DEFAULT_SELECT_ID = "pager_select"
DEFAULT_PLACEHOLDER = "Select a page..."
DEFAULT_DESCRIPTION_MAX_LENGTH = 50
DEFAULT_MAX_SESSIONS = 50

CUSTOM_ID_PATTERN = r"[A-Za-z0-9_-]{1,100}"
CUSTOM_EMOJI_PATTERN = r"<a?:\w+:\d{17,19}>"
