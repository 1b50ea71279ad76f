"""PagerServer - pages a document to mesh nodes on request."""

import logging
from collections.abc import Sequence
from pathlib import Path

from .config import ServerConfig
from .constants import Layout
from .core import (
    ButtonOptions,
    ButtonRenderer,
    CompositeRenderer,
    PageChunker,
    PaginationSession,
    SelectOptions,
    SelectRenderer,
    SessionEvents,
    SessionManager,
)
from .errors import PaginatorError
from .transport import MeshtasticTransport
from .validation import validate_data

logger = logging.getLogger(__name__)

# Room left in each mesh message for the control hint line.
HINT_RESERVE = 80
MIN_PAGE_SIZE = 40


def load_pages(path: str | Path, max_message_size: int) -> list[str]:
    """
    Read a text file and split it into pages sized for the mesh.

    Raises:
        FileNotFoundError: If the file doesn't exist.
    """
    file_path = Path(path).expanduser()
    if not file_path.exists():
        raise FileNotFoundError(f"Pages file not found: {path}")

    text = file_path.read_text(encoding="utf-8")
    page_size = max(max_message_size - HINT_RESERVE, MIN_PAGE_SIZE)
    return PageChunker(max_size=page_size).paginate(text)


class PagerServer:
    """Main server orchestrating mesh pagination.

    Any message from a node without an open pagination starts one for that
    node over the configured pages. The node then navigates with text
    commands until the session stops or times out.
    """

    def __init__(
        self,
        pages: Sequence[str],
        transport: MeshtasticTransport,
        config: ServerConfig | None = None,
    ):
        """
        Initialize the pager server.

        Args:
            pages: Page texts offered to every node.
            transport: Radio link to the mesh.
            config: Server configuration (uses defaults if None).

        Raises:
            ValidationError: If pages is empty.
        """
        validate_data(pages)
        self.pages = list(pages)
        self.transport = transport
        self.config = config or ServerConfig()
        self.session_manager = SessionManager()
        self._starting: set[str] = set()

        self.transport.on_message(self._handle_message)

    def start(self) -> None:
        """Start the server by connecting to transport."""
        logger.info("Starting pager server...")
        self.transport.connect()
        logger.info(f"Server started, serving {len(self.pages)} pages")

    async def stop(self) -> None:
        """Stop all sessions and disconnect."""
        logger.info("Stopping pager server...")
        stopped = await self.session_manager.stop_all("user")
        if stopped:
            logger.info(f"Stopped {stopped} active session(s)")
        self.transport.disconnect()
        logger.info("Server stopped")

    def build_controls(self) -> CompositeRenderer:
        """Buttons for stepping plus a selector so nodes can jump by number."""
        paginator_config = self.config.paginator
        return CompositeRenderer(
            ButtonRenderer(ButtonOptions(show_stop=True), paginator_config),
            SelectRenderer(SelectOptions(show_descriptions=False), paginator_config),
            layout=Layout.BUTTONS_TOP,
            config=paginator_config,
        )

    async def _handle_message(self, node_id: str, message: str) -> None:
        """
        Open a pagination for a node that has none.

        Args:
            node_id: The sender's node ID.
            message: The message text.
        """
        logger.info(f"[{node_id}] Received: {message!r}")

        if node_id in self._starting or self.session_manager.session_for_channel(node_id) is not None:
            logger.debug(f"[{node_id}] Session already open")
            return

        session = PaginationSession(
            self.pages,
            self.transport.for_node(node_id),
            node_id,
            self.build_controls(),
            config=self.config.paginator,
            events=SessionEvents(on_end=lambda reason, page: logger.info(f"[{node_id}] Session ended: {reason}")),
            manager=self.session_manager,
        )
        self._starting.add(node_id)
        try:
            await session.start()
        except PaginatorError as e:
            logger.error(f"[{node_id}] Could not start pagination: {e}")
        finally:
            self._starting.discard(node_id)
