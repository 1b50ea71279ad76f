"""Chat Paginator - paginated messages with navigation controls for chat platforms."""

from .config import EmojiSet, Messages, PaginatorConfig, ServerConfig, configure, load_config
from .constants import AfterTimeout, ButtonStyle, LabelStyle, Layout, PlatformLimits
from .core import (
    ButtonOptions,
    ButtonRenderer,
    CompositeRenderer,
    OptionLabel,
    PaginationSession,
    RichContent,
    RichField,
    SelectOptions,
    SelectRenderer,
    SessionEvents,
    SessionManager,
    SessionState,
)
from .errors import ComponentError, PaginatorError, RenderError, StateError, TransportError, ValidationError
from .paginators import button_paginator, hybrid_paginator, select_paginator

__version__ = "0.1.0"

__all__ = [
    "AfterTimeout",
    "ButtonOptions",
    "ButtonRenderer",
    "ButtonStyle",
    "ComponentError",
    "CompositeRenderer",
    "EmojiSet",
    "LabelStyle",
    "Layout",
    "Messages",
    "OptionLabel",
    "PaginationSession",
    "PaginatorConfig",
    "PaginatorError",
    "PlatformLimits",
    "RenderError",
    "RichContent",
    "RichField",
    "SelectOptions",
    "SelectRenderer",
    "ServerConfig",
    "SessionEvents",
    "SessionManager",
    "SessionState",
    "StateError",
    "TransportError",
    "ValidationError",
    "button_paginator",
    "configure",
    "hybrid_paginator",
    "load_config",
    "select_paginator",
]
