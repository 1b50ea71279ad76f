"""Abstract interfaces for the chat paginator."""

from .message_transport import ControlCallback, ControlEvent, MessageHandle, MessageTransport, Subscription

__all__ = ["ControlCallback", "ControlEvent", "MessageHandle", "MessageTransport", "Subscription"]
