"""Convenience constructors for the three kinds of paginated session."""

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from .config import PaginatorConfig
from .constants import Layout
from .core.button_renderer import ButtonOptions, ButtonRenderer
from .core.composite_renderer import CompositeRenderer
from .core.content import PageRenderer
from .core.select_renderer import SelectOptions, SelectRenderer
from .core.session import PaginationSession, SessionEvents
from .core.session_manager import SessionManager

if TYPE_CHECKING:
    from .interfaces import MessageTransport


def button_paginator(
    data: Sequence[Any],
    transport: "MessageTransport",
    invoker_id: str,
    *,
    options: ButtonOptions | None = None,
    config: PaginatorConfig | None = None,
    page_renderer: PageRenderer | None = None,
    events: SessionEvents | None = None,
    manager: SessionManager | None = None,
) -> PaginationSession:
    """Create a session navigated with first/previous/next/last buttons."""
    config = config or PaginatorConfig()
    return PaginationSession(
        data,
        transport,
        invoker_id,
        ButtonRenderer(options, config),
        config=config,
        page_renderer=page_renderer,
        events=events,
        manager=manager,
    )


def select_paginator(
    data: Sequence[Any],
    transport: "MessageTransport",
    invoker_id: str,
    *,
    options: SelectOptions | None = None,
    config: PaginatorConfig | None = None,
    page_renderer: PageRenderer | None = None,
    events: SessionEvents | None = None,
    manager: SessionManager | None = None,
) -> PaginationSession:
    """Create a session navigated with a page dropdown."""
    config = config or PaginatorConfig()
    return PaginationSession(
        data,
        transport,
        invoker_id,
        SelectRenderer(options, config),
        config=config,
        page_renderer=page_renderer,
        events=events,
        manager=manager,
    )


def hybrid_paginator(
    data: Sequence[Any],
    transport: "MessageTransport",
    invoker_id: str,
    *,
    buttons: ButtonOptions | None = None,
    select: SelectOptions | None = None,
    layout: Layout | str = Layout.BUTTONS_TOP,
    enable_buttons: bool = True,
    enable_select: bool = True,
    config: PaginatorConfig | None = None,
    page_renderer: PageRenderer | None = None,
    events: SessionEvents | None = None,
    manager: SessionManager | None = None,
) -> PaginationSession:
    """Create a session with both buttons and a page dropdown."""
    config = config or PaginatorConfig()
    controls = CompositeRenderer(
        ButtonRenderer(buttons, config),
        SelectRenderer(select, config),
        layout=layout,
        enable_buttons=enable_buttons,
        enable_select=enable_select,
        config=config,
    )
    return PaginationSession(
        data,
        transport,
        invoker_id,
        controls,
        config=config,
        page_renderer=page_renderer,
        events=events,
        manager=manager,
    )
