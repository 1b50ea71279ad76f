"""Error types raised by the paginator."""

from typing import Any


class PaginatorError(Exception):
    """Base class for all paginator errors.

    Attributes:
        code: Stable machine-readable error code.
        context: Extra details useful for logging.
    """

    code = "PAGINATOR_ERROR"

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.context = context or {}


class ValidationError(PaginatorError):
    """Bad caller input. Never retried."""

    code = "VALIDATION_ERROR"

    def __init__(self, field: str, value: Any, expected: str, context: dict[str, Any] | None = None):
        self.field = field
        self.value = value
        self.expected = expected
        super().__init__(f"Invalid {field}: expected {expected}, got {value!r}", context)


class StateError(PaginatorError):
    """Operation not valid for the session's lifecycle state."""

    code = "STATE_ERROR"


class RenderError(PaginatorError):
    """A page or an option failed to materialize."""

    code = "RENDER_ERROR"

    def __init__(self, page_index: int, reason: str, context: dict[str, Any] | None = None):
        self.page_index = page_index
        self.reason = reason
        super().__init__(f"Failed to render page {page_index}: {reason}", context)


class ComponentError(PaginatorError):
    """Unrecognized or malformed control interaction."""

    code = "COMPONENT_ERROR"

    def __init__(self, component: str, reason: str, context: dict[str, Any] | None = None):
        self.component = component
        self.reason = reason
        super().__init__(f"{component} component error: {reason}", context)


class TransportError(PaginatorError):
    """A send, edit, delete or subscribe call on the transport failed."""

    code = "TRANSPORT_ERROR"

    def __init__(self, operation: str, cause: BaseException, context: dict[str, Any] | None = None):
        self.operation = operation
        self.cause = cause
        super().__init__(f"Transport {operation} failed: {cause}", context)
