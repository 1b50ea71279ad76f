"""Routes control events to a session's navigation operations."""

import logging
from typing import TYPE_CHECKING

from ..errors import ComponentError, PaginatorError, TransportError
from .controls import ActionKind, NavigationAction

if TYPE_CHECKING:
    from ..interfaces.message_transport import ControlEvent
    from .session import PaginationSession

logger = logging.getLogger(__name__)


class InteractionRouter:
    """
    Handles control events for one session.

    Only the session's invoker may operate the controls; anyone else gets a
    polite notice and the session is left untouched.
    """

    def __init__(self, session: "PaginationSession"):
        self.session = session

    async def handle(self, event: "ControlEvent") -> None:
        """
        Process one control event.

        Navigation failures are reported to the actor and never stop the
        session.
        """
        session = self.session
        messages = session.config.messages

        if not session.is_active:
            logger.debug(f"Ignoring {event.control_id}: session is {session.state.value}")
            return
        if event.handle is not None and session.handle is not None and event.handle != session.handle:
            logger.debug(f"Ignoring {event.control_id}: event is for another message")
            return

        if event.actor_id != session.invoker_id:
            logger.info(f"Rejected {event.control_id} from {event.actor_id}: not the invoker")
            await self._notify(event, messages.permission_denied)
            return

        try:
            await session.transport.acknowledge(event)
        except Exception as e:
            logger.warning(f"Failed to acknowledge {event.control_id}: {e}")
            await session.report_error(TransportError("acknowledge", e))

        try:
            action = session.controls.resolve(event, session.view())
        except ComponentError as e:
            logger.warning(f"Unhandled interaction: {e}")
            await session.report_error(e)
            return

        logger.debug(f"{event.control_id} from {event.actor_id} -> {action.kind.value}")
        try:
            await self.dispatch(action)
        except PaginatorError as e:
            logger.error(f"Failed to handle {event.control_id}: {e}")
            await self._notify(event, messages.interaction_failed)

    async def dispatch(self, action: NavigationAction) -> None:
        """Run the session operation an action asks for."""
        session = self.session
        if action.kind is ActionKind.NONE:
            return
        if action.kind is ActionKind.GOTO:
            await session.go_to_page(action.page)
        elif action.kind is ActionKind.STOP:
            await session.stop("user")
        elif action.kind is ActionKind.FIRST:
            await session.first()
        elif action.kind is ActionKind.PREVIOUS:
            await session.previous()
        elif action.kind is ActionKind.NEXT:
            await session.next()
        elif action.kind is ActionKind.LAST:
            await session.last()

    async def _notify(self, event: "ControlEvent", text: str) -> None:
        try:
            await self.session.transport.notify(event, text)
        except Exception as e:
            logger.error(f"Failed to notify {event.actor_id}: {e}")
