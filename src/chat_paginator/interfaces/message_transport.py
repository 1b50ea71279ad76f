"""Abstract interface for message transport."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable

from ..core.content import MessagePayload
from ..core.controls import ComponentType


@dataclass(frozen=True)
class MessageHandle:
    """Reference to a delivered message, needed to edit or delete it.

    Equality and hashing use the ids only; ``raw`` carries the
    transport's own message object.
    """

    channel_id: str
    message_id: str
    raw: Any = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class ControlEvent:
    """A control activation addressed at a message.

    Attributes:
        actor_id: Who activated the control.
        control_id: Identifier of the activated control.
        component_type: Whether a button or a selector raised it.
        values: Selected values (selector only).
        handle: The message the control belongs to.
        raw: The transport's own interaction object.
    """

    actor_id: str
    control_id: str
    component_type: ComponentType
    values: tuple[str, ...] = ()
    handle: MessageHandle | None = None
    raw: Any = field(default=None, compare=False, repr=False)


ControlCallback = Callable[[ControlEvent], Awaitable[None]]


class Subscription:
    """A registered control-event listener that can be cancelled once."""

    def __init__(self, on_cancel: Callable[[], None] | None = None):
        self._on_cancel = on_cancel
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        """Stop delivering events. Safe to call more than once."""
        if self._cancelled:
            return
        self._cancelled = True
        if self._on_cancel is not None:
            self._on_cancel()


class MessageTransport(ABC):
    """Abstract interface for delivering pages and receiving control events.

    Failures are raised as ordinary exceptions; the session wraps them.
    """

    @abstractmethod
    async def send(self, payload: MessagePayload) -> MessageHandle:
        """Deliver a new message.

        Args:
            payload: Content and controls to show.

        Returns:
            Handle of the delivered message.
        """

    @abstractmethod
    async def edit(self, handle: MessageHandle, payload: MessagePayload) -> None:
        """Replace the content and controls of a delivered message."""

    @abstractmethod
    async def delete(self, handle: MessageHandle) -> None:
        """Remove a delivered message."""

    @abstractmethod
    def subscribe(self, handle: MessageHandle, callback: ControlCallback, timeout: float | None = None) -> Subscription:
        """Register a callback for control events on a message.

        Args:
            handle: The message whose controls to listen to.
            callback: Coroutine function receiving each ControlEvent.
            timeout: Seconds the listener is expected to live (None for no limit).

        Returns:
            Subscription to cancel the listener.
        """

    @abstractmethod
    async def acknowledge(self, event: ControlEvent) -> None:
        """Tell the platform the event is being handled."""

    @abstractmethod
    async def notify(self, event: ControlEvent, text: str) -> None:
        """Send a short notice visible to the event's actor only."""

    def connect(self) -> None:
        """Connect to the transport. No-op for transports without a connection."""

    def disconnect(self) -> None:
        """Disconnect from the transport."""
