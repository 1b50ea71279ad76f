"""Pytest configuration and fixtures."""

import itertools

import pytest

from chat_paginator.config import PaginatorConfig
from chat_paginator.core.controls import Button, ComponentType, SelectMenu, iter_controls
from chat_paginator.interfaces import ControlEvent, MessageHandle, MessageTransport, Subscription


class FakeTransport(MessageTransport):
    """In-memory transport recording everything the session does.

    Set one of the fail_* attributes to an exception to make that call fail.
    """

    def __init__(self):
        self.sent = []
        self.edits = []
        self.deleted = []
        self.acknowledged = []
        self.notices = []
        self.callback = None
        self.handle = None
        self.subscribe_timeout = None
        self.fail_send = None
        self.fail_edit = None
        self.fail_delete = None
        self.fail_subscribe = None
        self._ids = itertools.count(1)

    async def send(self, payload):
        if self.fail_send:
            raise self.fail_send
        self.sent.append(payload)
        self.handle = MessageHandle(channel_id="channel-1", message_id=f"message-{next(self._ids)}")
        return self.handle

    async def edit(self, handle, payload):
        if self.fail_edit:
            raise self.fail_edit
        self.edits.append((handle, payload))

    async def delete(self, handle):
        if self.fail_delete:
            raise self.fail_delete
        self.deleted.append(handle)

    def subscribe(self, handle, callback, timeout=None):
        if self.fail_subscribe:
            raise self.fail_subscribe
        self.callback = callback
        self.subscribe_timeout = timeout
        return Subscription(on_cancel=self._unsubscribe)

    def _unsubscribe(self):
        self.callback = None

    async def acknowledge(self, event):
        self.acknowledged.append(event)

    async def notify(self, event, text):
        self.notices.append((event.actor_id, text))

    # Helpers

    @property
    def last_payload(self):
        if self.edits:
            return self.edits[-1][1]
        return self.sent[-1]

    def controls(self):
        return list(iter_controls(list(self.last_payload.rows)))

    def buttons(self):
        """Buttons of the last payload keyed by kind."""
        return {c.kind: c for c in self.controls() if isinstance(c, Button)}

    def menu(self):
        for control in self.controls():
            if isinstance(control, SelectMenu):
                return control
        return None

    async def press(self, control_id, actor_id="user-1"):
        event = ControlEvent(
            actor_id=actor_id,
            control_id=control_id,
            component_type=ComponentType.BUTTON,
            handle=self.handle,
        )
        await self.callback(event)

    async def choose(self, control_id, values, actor_id="user-1"):
        event = ControlEvent(
            actor_id=actor_id,
            control_id=control_id,
            component_type=ComponentType.SELECT,
            values=tuple(values),
            handle=self.handle,
        )
        await self.callback(event)


class EventRecorder:
    """Collects session events in order."""

    def __init__(self):
        self.events = []

    def on_start(self, page):
        self.events.append(("start", page))

    def on_page_change(self, new_page, old_page):
        self.events.append(("page_change", new_page, old_page))

    def on_timeout(self, page):
        self.events.append(("timeout", page))

    def on_end(self, reason, page):
        self.events.append(("end", reason, page))

    def on_error(self, error):
        self.events.append(("error", error))

    def named(self, name):
        return [e for e in self.events if e[0] == name]

    def session_events(self):
        from chat_paginator.core.session import SessionEvents

        return SessionEvents(
            on_start=self.on_start,
            on_page_change=self.on_page_change,
            on_timeout=self.on_timeout,
            on_end=self.on_end,
            on_error=self.on_error,
        )


@pytest.fixture
def transport():
    """A fresh in-memory transport."""
    return FakeTransport()


@pytest.fixture
def recorder():
    """Records session lifecycle events."""
    return EventRecorder()


@pytest.fixture
def config():
    """Session config without automatic expiry."""
    return PaginatorConfig(timeout=0)


@pytest.fixture
def pages():
    """Five plain-text pages."""
    return ["Page one", "Page two", "Page three", "Page four", "Page five"]


@pytest.fixture
def articles():
    """Structured items with descriptive fields."""
    return [
        {"title": "Getting started", "description": "Install and configure the bot"},
        {"title": "Commands", "content": "Every slash command explained"},
        {"name": "FAQ"},
        {"id": 4, "tags": ["misc"]},
    ]
