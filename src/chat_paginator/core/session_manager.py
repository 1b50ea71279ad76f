"""Session manager tracking active paginated sessions."""

import logging
from typing import TYPE_CHECKING

from ..constants import DEFAULT_MAX_SESSIONS
from ..errors import StateError

if TYPE_CHECKING:
    from ..interfaces.message_transport import MessageHandle
    from .session import PaginationSession

logger = logging.getLogger(__name__)


class SessionManager:
    """Tracks active sessions by the message they own.

    Exactly one session may own a given message handle, and at most
    max_sessions may be active at once.
    """

    def __init__(self, max_sessions: int = DEFAULT_MAX_SESSIONS):
        """
        Initialize the session manager.

        Args:
            max_sessions: Maximum number of concurrently active sessions.
        """
        self._sessions: dict["MessageHandle", "PaginationSession"] = {}
        self._max_sessions = max_sessions

    @property
    def max_sessions(self) -> int:
        return self._max_sessions

    def ensure_capacity(self) -> None:
        """
        Check that another session may start.

        Raises:
            StateError: If the concurrency cap is reached.
        """
        if len(self._sessions) >= self._max_sessions:
            raise StateError(f"Too many active paginations (max {self._max_sessions})")

    def register(self, session: "PaginationSession") -> None:
        """
        Record a started session under its message handle.

        Raises:
            StateError: If another session owns the handle or the cap is reached.
        """
        handle = session.handle
        if handle is None:
            raise StateError("Cannot register a session without a message handle")

        owner = self._sessions.get(handle)
        if owner is session:
            return
        if owner is not None:
            raise StateError(f"Message {handle.message_id} is already owned by another session")
        self.ensure_capacity()

        self._sessions[handle] = session
        logger.debug(f"Registered session for message {handle.message_id} ({len(self._sessions)} active)")

    def release(self, session: "PaginationSession") -> None:
        """
        Forget a session. Unknown sessions are ignored.

        Args:
            session: The session to remove.
        """
        handle = session.handle
        if handle is not None and self._sessions.get(handle) is session:
            del self._sessions[handle]
            logger.debug(f"Released session for message {handle.message_id}")

    def get(self, handle: "MessageHandle") -> "PaginationSession | None":
        """Get the session owning a message, if any."""
        return self._sessions.get(handle)

    def session_for_channel(self, channel_id: str) -> "PaginationSession | None":
        """Get the most recently registered session in a channel, if any."""
        found = None
        for handle, session in self._sessions.items():
            if handle.channel_id == channel_id:
                found = session
        return found

    async def stop_all(self, reason: str = "user") -> int:
        """
        Stop every tracked session.

        Returns:
            Number of sessions stopped.
        """
        sessions = list(self._sessions.values())
        for session in sessions:
            await session.stop(reason)
        return len(sessions)

    def session_count(self) -> int:
        """Get the number of active sessions."""
        return len(self._sessions)

    def list_handles(self) -> list["MessageHandle"]:
        """Get the handles of all active sessions."""
        return list(self._sessions.keys())
