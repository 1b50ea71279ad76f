"""Core components for the chat paginator."""

from .button_renderer import ButtonOptions, ButtonRenderer, parse_button_config
from .command_parser import CommandParser, Command, NavigateCommand, PageCommand, HelpCommand, InvalidCommand
from .composite_renderer import CompositeRenderer
from .content import MessagePayload, PageContent, PageRenderer, RichContent, RichField, default_page_renderer
from .controls import (
    ActionKind,
    ActionRow,
    Button,
    ComponentType,
    ControlKind,
    NavigationAction,
    PageView,
    SelectMenu,
    SelectOption,
)
from .page_chunker import PageChunker
from .router import InteractionRouter
from .select_renderer import LabelingInfo, OptionLabel, SelectOptions, SelectRenderer
from .session import EndReason, PaginationSession, SessionEvents, SessionSnapshot, SessionState
from .session_manager import SessionManager
from .timer import CancellableTimer

__all__ = [
    "ActionKind",
    "ActionRow",
    "Button",
    "ButtonOptions",
    "ButtonRenderer",
    "CancellableTimer",
    "Command",
    "CommandParser",
    "ComponentType",
    "CompositeRenderer",
    "ControlKind",
    "EndReason",
    "HelpCommand",
    "InteractionRouter",
    "InvalidCommand",
    "LabelingInfo",
    "MessagePayload",
    "NavigateCommand",
    "NavigationAction",
    "OptionLabel",
    "PageChunker",
    "PageCommand",
    "PageContent",
    "PageRenderer",
    "PageView",
    "PaginationSession",
    "RichContent",
    "RichField",
    "SelectMenu",
    "SelectOption",
    "SelectOptions",
    "SelectRenderer",
    "SessionEvents",
    "SessionManager",
    "SessionSnapshot",
    "SessionState",
    "default_page_renderer",
    "parse_button_config",
]
