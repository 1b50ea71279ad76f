"""Meshtastic-based message transport."""

import asyncio
import inspect
import itertools
import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable
from pubsub import pub

from meshtastic import serial_interface, tcp_interface, ble_interface

from ..config import Messages
from ..core.command_parser import CommandParser, HelpCommand, InvalidCommand, NavigateCommand, PageCommand
from ..core.content import MessagePayload
from ..core.controls import Button, ComponentType, SelectMenu, iter_controls
from ..core.page_chunker import PageChunker
from ..interfaces import ControlCallback, ControlEvent, MessageHandle, MessageTransport, Subscription
from .text_layout import TextLayout

logger = logging.getLogger(__name__)


@dataclass
class _NodeListener:
    handle: MessageHandle
    callback: ControlCallback
    subscription: Subscription


class MeshtasticTransport:
    """Radio link to a Meshtastic mesh network.

    Supports Serial, BLE, and TCP connection types. Pages are delivered to
    a node through the MessageTransport returned by for_node(); replies from
    that node are parsed as navigation commands.
    """

    def __init__(
        self,
        connection_type: str = "serial",
        device: str | None = None,
        max_message_size: int = 230,
        ack_timeout: float = 30.0,
        messages: Messages | None = None,
    ):
        """
        Initialize the transport.

        Args:
            connection_type: Type of connection - "serial", "ble", or "tcp".
            device: Device path, BLE address, or hostname depending on type.
                   If None, will auto-detect for serial connections.
            max_message_size: Maximum characters per mesh message.
            ack_timeout: Seconds to wait for an ACK per attempt.
            messages: Notices used for help and command errors.
        """
        self.connection_type = connection_type
        self.device = device
        self.ack_timeout = ack_timeout
        self.messages = messages or Messages()
        self.parser = CommandParser()
        self.layout = TextLayout()
        self.chunker = PageChunker(max_size=max_message_size)

        self._interface = None
        self._loop: asyncio.AbstractEventLoop | None = None
        self._callbacks: list[Callable[[str, str], Any]] = []
        self._listeners: dict[str, _NodeListener] = {}
        self._payloads: dict[MessageHandle, MessagePayload] = {}
        self._message_ids = itertools.count(1)

    def for_node(self, node_id: str) -> "NodeTransport":
        """Get a MessageTransport delivering to one node."""
        return NodeTransport(self, node_id)

    # Radio

    def send_text(self, node_id: str, message: str, want_ack: bool = False) -> None:
        """
        Send a text message to a specific node.

        Raises:
            RuntimeError: If not connected.
        """
        if self._interface is None:
            raise RuntimeError("Not connected. Call connect() first.")

        self._interface.sendText(message, destinationId=node_id, wantAck=want_ack)

    def send_and_wait_for_ack(self, node_id: str, message: str, timeout: float = 30.0) -> bool:
        """
        Send a message and wait for acknowledgment.

        Args:
            node_id: The destination node ID.
            message: The message text to send.
            timeout: Maximum seconds to wait for ACK.

        Returns:
            True if ACK received, False if timeout or NAK.

        Raises:
            RuntimeError: If not connected.
        """
        if self._interface is None:
            raise RuntimeError("Not connected. Call connect() first.")

        ack_event = threading.Event()
        ack_success = [False]

        # Named 'onAckNak' so meshtastic library will call it for ACK/NAK responses
        def onAckNak(packet):
            routing = packet.get("decoded", {}).get("routing", {})
            error_reason = routing.get("errorReason", "NONE")
            if error_reason == "NONE":
                ack_success[0] = True
                logger.debug(f"[{node_id}] ACK received")
            else:
                logger.warning(f"[{node_id}] NAK received: {error_reason}")
            ack_event.set()

        self._interface.sendText(
            message,
            destinationId=node_id,
            wantAck=True,
            onResponse=onAckNak,
        )

        if ack_event.wait(timeout=timeout):
            return ack_success[0]
        logger.warning(f"[{node_id}] ACK timeout after {timeout}s")
        return False

    def send_with_retry(self, node_id: str, message: str, timeout: float = 30.0) -> bool:
        """
        Send a message with one retry on timeout.

        Returns:
            True if ACK received (on first or second attempt), False otherwise.
        """
        if self.send_and_wait_for_ack(node_id, message, timeout):
            return True

        logger.info(f"[{node_id}] Retrying message...")
        return self.send_and_wait_for_ack(node_id, message, timeout)

    async def deliver(self, node_id: str, text: str) -> None:
        """
        Send text to a node, split into message-sized chunks.

        Each chunk waits for its ACK (with one retry) before the next is sent.

        Raises:
            RuntimeError: If not connected.
        """
        chunks = self.chunker.chunk(text)
        logger.info(f"[{node_id}] Sending {len(chunks)} message(s)")
        for i, chunk in enumerate(chunks, 1):
            delivered = await asyncio.to_thread(self.send_with_retry, node_id, chunk, self.ack_timeout)
            if not delivered:
                logger.warning(f"[{node_id}] Message {i}/{len(chunks)} failed after retry")

    async def reply(self, node_id: str, text: str) -> None:
        """Send a short notice without waiting for an ACK, truncated to one message."""
        max_size = self.chunker.max_size
        if len(text) > max_size:
            text = text[: max_size - 3] + "..."
        await asyncio.to_thread(self.send_text, node_id, text)

    def on_message(self, callback: Callable[[str, str], Any]) -> None:
        """
        Register a callback for messages from nodes without an open pagination.

        The callback receives (node_id, message_text) and may be a coroutine
        function.
        """
        self._callbacks.append(callback)

    def connect(self) -> None:
        """
        Connect to the Meshtastic device.

        Must be called from the event loop that will run the sessions, since
        received packets are handed to that loop.
        """
        self._loop = asyncio.get_running_loop()

        if self.connection_type == "serial":
            self._interface = serial_interface.SerialInterface(devPath=self.device)
        elif self.connection_type == "ble":
            self._interface = ble_interface.BLEInterface(address=self.device)
        elif self.connection_type == "tcp":
            self._interface = tcp_interface.TCPInterface(hostname=self.device)
        else:
            raise ValueError(f"Unknown connection type: {self.connection_type}")

        pub.subscribe(self._handle_receive, "meshtastic.receive.text")

    def disconnect(self) -> None:
        """Disconnect from the Meshtastic device."""
        if self._interface is None:
            return

        pub.unsubscribe(self._handle_receive, "meshtastic.receive.text")
        self._interface.close()
        self._interface = None

    def is_connected(self) -> bool:
        """Check if currently connected."""
        return self._interface is not None

    # Pagination bookkeeping

    def remember(self, handle: MessageHandle, payload: MessagePayload) -> None:
        """Record the controls last shown on a message."""
        self._payloads[handle] = payload

    def refresh(self, handle: MessageHandle, payload: MessagePayload) -> None:
        """Update the recorded controls of a message that is still tracked."""
        if handle in self._payloads:
            self._payloads[handle] = payload

    def discard(self, handle: MessageHandle) -> None:
        """Stop tracking the controls of a message."""
        self._payloads.pop(handle, None)

    def listen(self, handle: MessageHandle, callback: ControlCallback) -> Subscription:
        """
        Route commands from the handle's node to callback until cancelled.

        Raises:
            RuntimeError: If the node already has an open pagination.
        """
        node_id = handle.channel_id
        if node_id in self._listeners:
            raise RuntimeError(f"Node {node_id} already has an open pagination")

        def forget() -> None:
            self._forget(node_id, listener)

        subscription = Subscription(on_cancel=forget)
        listener = _NodeListener(handle, callback, subscription)
        self._listeners[node_id] = listener
        return subscription

    def _forget(self, node_id: str, listener: _NodeListener) -> None:
        if self._listeners.get(node_id) is listener:
            del self._listeners[node_id]
        self._payloads.pop(listener.handle, None)

    def next_message_id(self) -> str:
        return str(next(self._message_ids))

    # Receiving

    def _handle_receive(self, packet: dict, interface) -> None:
        """
        Handle received packets from Meshtastic.

        Runs on the Meshtastic reader thread; the text is handed to the
        event loop for processing.

        Args:
            packet: The received packet dictionary.
            interface: The Meshtastic interface (unused but required by pubsub).
        """
        from_id = packet.get("fromId")
        text = packet.get("decoded", {}).get("text")

        if not from_id or not text:
            return
        if self._loop is None or self._loop.is_closed():
            logger.warning(f"[{from_id}] Dropping message: no event loop")
            return

        asyncio.run_coroutine_threadsafe(self.dispatch(from_id, text), self._loop)

    async def dispatch(self, node_id: str, text: str) -> None:
        """Process one incoming text message on the event loop."""
        listener = self._listeners.get(node_id)
        if listener is None:
            await self._notify_callbacks(node_id, text)
            return

        command = self.parser.parse(text)
        logger.debug(f"[{node_id}] Command: {command.__class__.__name__}")

        try:
            if isinstance(command, HelpCommand):
                await self.deliver(node_id, self._help_text(listener.handle))
                return
            if isinstance(command, InvalidCommand):
                await self.reply(node_id, f"Unknown command: {command.original_input}\nSend ? for help")
                return

            event = self.to_event(node_id, command, listener.handle)
            if event is None:
                await self.reply(node_id, f"Not available here: {text.strip()}\nSend ? for help")
                return
        except Exception as e:
            logger.error(f"[{node_id}] Error: {e}")
            return

        await listener.callback(event)

    async def _notify_callbacks(self, node_id: str, text: str) -> None:
        for callback in self._callbacks:
            try:
                result = callback(node_id, text)
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                logger.error(f"[{node_id}] Message callback failed: {e}")

    def _help_text(self, handle: MessageHandle) -> str:
        payload = self._payloads.get(handle)
        if payload is None:
            return self.messages.help
        for control in iter_controls(list(payload.rows)):
            if isinstance(control, SelectMenu):
                return f"{self.messages.help}\n{self.layout.render_options(control)}"
        return self.messages.help

    def to_event(self, node_id: str, command, handle: MessageHandle) -> ControlEvent | None:
        """
        Map a parsed command to the control it stands for on the message.

        Returns:
            The matching ControlEvent, or None if the message has no such control.
        """
        payload = self._payloads.get(handle)
        if payload is None:
            return None

        for control in iter_controls(list(payload.rows)):
            if isinstance(command, NavigateCommand) and isinstance(control, Button):
                if control.kind is command.kind:
                    return ControlEvent(
                        actor_id=node_id,
                        control_id=control.custom_id,
                        component_type=ComponentType.BUTTON,
                        handle=handle,
                    )
            elif isinstance(command, PageCommand) and isinstance(control, SelectMenu):
                return ControlEvent(
                    actor_id=node_id,
                    control_id=control.custom_id,
                    component_type=ComponentType.SELECT,
                    values=(str(command.number - 1),),
                    handle=handle,
                )
        return None


class NodeTransport(MessageTransport):
    """MessageTransport delivering pages to a single mesh node.

    The mesh cannot edit or delete a message: an edit sends the new page as
    a fresh message and a delete is only logged.
    """

    def __init__(self, radio: MeshtasticTransport, node_id: str):
        self.radio = radio
        self.node_id = node_id

    async def send(self, payload: MessagePayload) -> MessageHandle:
        await self.radio.deliver(self.node_id, self.radio.layout.render(payload))
        handle = MessageHandle(channel_id=self.node_id, message_id=self.radio.next_message_id())
        self.radio.remember(handle, payload)
        return handle

    async def edit(self, handle: MessageHandle, payload: MessagePayload) -> None:
        await self.radio.deliver(handle.channel_id, self.radio.layout.render(payload))
        self.radio.refresh(handle, payload)

    async def delete(self, handle: MessageHandle) -> None:
        logger.info(f"[{handle.channel_id}] Mesh messages cannot be deleted; leaving message {handle.message_id}")
        self.radio.discard(handle)

    def subscribe(self, handle: MessageHandle, callback: ControlCallback, timeout: float | None = None) -> Subscription:
        return self.radio.listen(handle, callback)

    async def acknowledge(self, event: ControlEvent) -> None:
        # Text commands need no acknowledgment on the mesh.
        pass

    async def notify(self, event: ControlEvent, text: str) -> None:
        await self.radio.deliver(event.actor_id, text)
