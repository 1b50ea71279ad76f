"""Paginated message session state machine."""

import asyncio
import inspect
import logging
import time
from collections.abc import Sequence
from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Union

from ..config import PaginatorConfig
from ..constants import AfterTimeout
from ..errors import PaginatorError, RenderError, StateError, TransportError, ValidationError
from ..validation import validate_data, validate_message_content, validate_page_number, validate_rich_content
from .button_renderer import ButtonRenderer
from .composite_renderer import CompositeRenderer
from .content import MessagePayload, PageRenderer, RichContent, default_page_renderer, with_timeout_notice
from .controls import PageView, disable_rows
from .router import InteractionRouter
from .select_renderer import SelectRenderer
from .timer import CancellableTimer

if TYPE_CHECKING:
    from ..interfaces.message_transport import MessageHandle, MessageTransport, Subscription
    from .session_manager import SessionManager

logger = logging.getLogger(__name__)

ControlSurface = Union[ButtonRenderer, SelectRenderer, CompositeRenderer]


class SessionState(str, Enum):
    """Lifecycle of a session. ENDED is terminal."""

    PENDING = "pending"
    ACTIVE = "active"
    ENDED = "ended"


class EndReason(str, Enum):
    """Why a session ended."""

    USER = "user"
    TIMEOUT = "timeout"
    ERROR = "error"


@dataclass(frozen=True)
class SessionEvents:
    """Callbacks notified of session lifecycle events.

    Each callback may be a plain function or a coroutine function.

    Attributes:
        on_start: Called with the first page index.
        on_page_change: Called with (new_page, old_page).
        on_timeout: Called with the page shown when the session expired.
        on_end: Called once with (reason, last_page).
        on_error: Called with the exception.
    """

    on_start: Callable[[int], Any] | None = None
    on_page_change: Callable[[int, int], Any] | None = None
    on_timeout: Callable[[int], Any] | None = None
    on_end: Callable[[str, int], Any] | None = None
    on_error: Callable[[Exception], Any] | None = None


@dataclass(frozen=True)
class SessionSnapshot:
    """Read-only view of a session's state."""

    current_page: int
    total_pages: int
    is_active: bool
    state: SessionState
    started_at: float | None
    data: tuple
    handle: "MessageHandle | None"


class PaginationSession:
    """
    One paginated message, from start to stop.

    The session owns the message handle, the control subscription and the
    expiry timer. Page transitions are serialized so the page index never
    diverges from what the message shows.
    """

    def __init__(
        self,
        data: Sequence[Any],
        transport: "MessageTransport",
        invoker_id: str,
        controls: ControlSurface,
        *,
        config: PaginatorConfig | None = None,
        page_renderer: PageRenderer | None = None,
        events: SessionEvents | None = None,
        manager: "SessionManager | None" = None,
    ):
        """
        Initialize a session.

        Args:
            data: Items to page through (one page per item).
            transport: Where the message is delivered.
            invoker_id: The only actor allowed to operate the controls.
            controls: Control surface rendering the navigation.
            config: Session settings.
            page_renderer: Turns an item into page content.
            events: Lifecycle callbacks.
            manager: Registry tracking active sessions.

        Raises:
            ValidationError: If the data or any setting is invalid.
        """
        self._config = (config or PaginatorConfig()).validate()
        validate_data(data)
        if page_renderer is not None and not callable(page_renderer):
            raise ValidationError("page_renderer", page_renderer, "callable")

        self._data = tuple(data)
        self._current_page = min(self._config.start_page, len(self._data) - 1)
        self._transport = transport
        self._invoker_id = str(invoker_id)
        self._controls = controls
        self._page_renderer = page_renderer or default_page_renderer
        self._events = events or SessionEvents()
        self._manager = manager

        self._state = SessionState.PENDING
        self._handle: "MessageHandle | None" = None
        self._subscription: "Subscription | None" = None
        self._timer = CancellableTimer(name="pagination-timeout")
        self._lock = asyncio.Lock()
        self._started_at: float | None = None
        self.router = InteractionRouter(self)

    # Properties

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_active(self) -> bool:
        return self._state is SessionState.ACTIVE

    @property
    def current_page(self) -> int:
        return self._current_page

    @property
    def total_pages(self) -> int:
        return len(self._data)

    @property
    def handle(self) -> "MessageHandle | None":
        return self._handle

    @property
    def invoker_id(self) -> str:
        return self._invoker_id

    @property
    def controls(self) -> ControlSurface:
        return self._controls

    @property
    def config(self) -> PaginatorConfig:
        return self._config

    @property
    def transport(self) -> "MessageTransport":
        return self._transport

    # Queries

    def view(self) -> PageView:
        """The state snapshot handed to the control surface."""
        return PageView(self._current_page, len(self._data), self._data)

    def get_state(self) -> SessionSnapshot:
        return SessionSnapshot(
            current_page=self._current_page,
            total_pages=len(self._data),
            is_active=self.is_active,
            state=self._state,
            started_at=self._started_at,
            data=self._data,
            handle=self._handle,
        )

    def current_item(self) -> Any:
        return self._data[self._current_page]

    def has_next_page(self) -> bool:
        return self._current_page < len(self._data) - 1

    def has_previous_page(self) -> bool:
        return self._current_page > 0

    def accessible_page_count(self) -> int:
        return self._controls.accessible_page_count(len(self._data))

    def are_all_pages_accessible(self) -> bool:
        return self.accessible_page_count() == len(self._data)

    # Rendering

    def _render_page(self, page: int):
        try:
            content = self._page_renderer(self._data[page], page, self._data)
        except PaginatorError:
            raise
        except Exception as e:
            raise RenderError(page, str(e)) from e

        limits = self._config.limits
        try:
            if isinstance(content, RichContent):
                validate_rich_content(content, limits)
            elif isinstance(content, str):
                validate_message_content(content, limits)
            else:
                raise RenderError(page, f"renderer returned {type(content).__name__}, expected RichContent or str")
        except ValidationError as e:
            raise RenderError(page, str(e)) from e
        return content

    def _build_payload(self) -> MessagePayload:
        content = self._render_page(self._current_page)
        rows = self._controls.render(self.view())
        return MessagePayload.from_page(content, rows, self._config.ephemeral)

    async def _render_and_edit(self) -> None:
        payload = self._build_payload()
        try:
            await self._transport.edit(self._handle, payload)
        except Exception as e:
            raise TransportError("edit", e) from e

    # Events

    async def _emit(self, name: str, *args: Any) -> None:
        callback = getattr(self._events, name)
        if callback is None:
            return
        try:
            result = callback(*args)
            if inspect.isawaitable(result):
                await result
        except Exception as e:
            logger.error(f"Error in {name} callback: {e}")

    async def report_error(self, error: Exception) -> None:
        """Emit an error event."""
        await self._emit("on_error", error)

    # Lifecycle

    async def start(self) -> "MessageHandle":
        """
        Deliver the first page and begin listening for controls.

        Returns:
            Handle of the delivered message.

        Raises:
            StateError: If the session was already started.
            RenderError: If the first page cannot be rendered.
            TransportError: If delivery fails; the session is then ended.
        """
        failure: PaginatorError | None = None

        async with self._lock:
            if self._state is not SessionState.PENDING:
                raise StateError(f"Cannot start a session that is {self._state.value}")
            if self._manager is not None:
                self._manager.ensure_capacity()

            payload = self._build_payload()

            try:
                handle = await self._transport.send(payload)
            except Exception as e:
                failure = TransportError("send", e)
                self._state = SessionState.ENDED
            else:
                self._handle = handle
                try:
                    if self._manager is not None:
                        self._manager.register(self)
                    self._subscription = self._transport.subscribe(
                        handle, self.router.handle, self._config.timeout or None
                    )
                except Exception as e:
                    failure = e if isinstance(e, PaginatorError) else TransportError("subscribe", e)
                    self._state = SessionState.ENDED
                    await self._rollback_start()
                else:
                    self._state = SessionState.ACTIVE
                    self._started_at = time.time()
                    if self._config.timeout > 0:
                        self._timer.arm(self._config.timeout, self._handle_timeout)

        if failure is not None:
            logger.error(f"Failed to start pagination: {failure}")
            await self.report_error(failure)
            await self._emit("on_end", EndReason.ERROR.value, self._current_page)
            raise failure

        logger.info(f"Pagination started for {self._invoker_id}: {len(self._data)} pages")
        await self._emit("on_start", self._current_page)
        return self._handle

    async def _rollback_start(self) -> None:
        if self._manager is not None:
            self._manager.release(self)
        try:
            await self._transport.delete(self._handle)
        except Exception as e:
            logger.error(f"Failed to delete message after start failure: {e}")

    def _ensure_active(self, operation: str) -> None:
        if self._state is not SessionState.ACTIVE:
            raise StateError(f"Cannot {operation}: session is {self._state.value}")

    async def _navigate(self, operation: str, target: Callable[[int], int | None]) -> None:
        failure: PaginatorError | None = None

        async with self._lock:
            self._ensure_active(operation)
            old_page = self._current_page
            new_page = target(old_page)
            if new_page is None:
                return

            self._current_page = new_page
            try:
                await self._render_and_edit()
            except PaginatorError as e:
                self._current_page = old_page
                failure = e

        if failure is not None:
            logger.error(f"Failed to show page {new_page + 1}: {failure}")
            await self.report_error(failure)
            raise failure

        if new_page != old_page and self._state is SessionState.ACTIVE:
            logger.debug(f"Page {old_page + 1} -> {new_page + 1}")
            await self._emit("on_page_change", new_page, old_page)

    async def go_to_page(self, page: int) -> None:
        """
        Show a specific page.

        Raises:
            StateError: If the session is not active.
            ValidationError: If page is not a valid index.
            RenderError: If the page cannot be rendered (page unchanged).
            TransportError: If the edit fails (page unchanged).
        """

        def target(_current: int) -> int:
            validate_page_number(page, len(self._data))
            return page

        await self._navigate("go_to_page", target)

    async def next(self) -> None:
        """Show the next page; no-op on the last page."""
        await self._navigate("next", lambda current: current + 1 if current < len(self._data) - 1 else None)

    async def previous(self) -> None:
        """Show the previous page; no-op on the first page."""
        await self._navigate("previous", lambda current: current - 1 if current > 0 else None)

    async def first(self) -> None:
        await self._navigate("first", lambda current: 0 if current != 0 else None)

    async def last(self) -> None:
        last_page = len(self._data) - 1
        await self._navigate("last", lambda current: last_page if current != last_page else None)

    async def _handle_timeout(self) -> None:
        async with self._lock:
            if self._state is not SessionState.ACTIVE:
                return
            page = self._current_page
        logger.info(f"Pagination for {self._invoker_id} timed out on page {page + 1}")
        await self._emit("on_timeout", page)
        await self.stop(EndReason.TIMEOUT)

    async def stop(self, reason: EndReason | str = EndReason.USER) -> None:
        """
        End the session. Calling it again is a no-op.

        With reason "timeout" the after-timeout policy is applied to the
        message; failures there are emitted as errors, never raised.
        """
        reason = EndReason(reason)
        failures: list[PaginatorError] = []

        async with self._lock:
            if self._state is not SessionState.ACTIVE:
                return
            self._state = SessionState.ENDED
            self._release()
            if reason is EndReason.TIMEOUT:
                failure = await self._apply_after_timeout()
                if failure is not None:
                    failures.append(failure)

        for failure in failures:
            logger.error(f"Failed to apply after-timeout policy: {failure}")
            await self.report_error(failure)

        logger.info(f"Pagination for {self._invoker_id} ended ({reason.value}) on page {self._current_page + 1}")
        await self._emit("on_end", reason.value, self._current_page)

    def _release(self) -> None:
        self._timer.cancel()
        if self._subscription is not None:
            self._subscription.cancel()
            self._subscription = None
        if self._manager is not None:
            self._manager.release(self)

    async def _apply_after_timeout(self) -> PaginatorError | None:
        if self._config.after_timeout == AfterTimeout.DELETE:
            try:
                await self._transport.delete(self._handle)
            except Exception as e:
                return TransportError("delete", e)
            return None

        try:
            payload = self._build_payload()
            payload = replace(payload, rows=tuple(disable_rows(list(payload.rows))))
            payload = with_timeout_notice(payload, self._config.messages.timeout)
        except PaginatorError as e:
            return e
        try:
            await self._transport.edit(self._handle, payload)
        except Exception as e:
            return TransportError("edit", e)
        return None

    # Reconfiguration

    async def update_data(self, data: Sequence[Any]) -> None:
        """
        Replace the paged items.

        The current page is clamped to the new last page. An active session
        re-renders; a failure there restores the previous items and page
        and is emitted as an error.

        Raises:
            ValidationError: If data is invalid.
            StateError: If the session has ended.
        """
        validate_data(data)
        failure: PaginatorError | None = None

        async with self._lock:
            if self._state is SessionState.ENDED:
                raise StateError("Cannot update_data: session is ended")
            old_data = self._data
            old_page = self._current_page
            self._data = tuple(data)
            self._current_page = min(self._current_page, len(self._data) - 1)
            if self._state is SessionState.ACTIVE:
                try:
                    await self._render_and_edit()
                except PaginatorError as e:
                    self._data = old_data
                    self._current_page = old_page
                    failure = e

        if failure is not None:
            logger.error(f"Failed to re-render after data update: {failure}")
            await self.report_error(failure)
        elif self._current_page != old_page and self._state is SessionState.ACTIVE:
            await self._emit("on_page_change", self._current_page, old_page)

    async def update_controls(self, controls: ControlSurface) -> None:
        """
        Swap the control surface and re-render.

        Raises:
            StateError: If the session has ended.
            RenderError: If the new controls cannot be rendered (old kept).
            TransportError: If the edit fails (old kept).
        """
        failure: PaginatorError | None = None

        async with self._lock:
            if self._state is SessionState.ENDED:
                raise StateError("Cannot update_controls: session is ended")
            previous = self._controls
            self._controls = controls
            if self._state is SessionState.ACTIVE:
                try:
                    await self._render_and_edit()
                except PaginatorError as e:
                    self._controls = previous
                    failure = e

        if failure is not None:
            logger.error(f"Failed to apply new controls: {failure}")
            await self.report_error(failure)
            raise failure
