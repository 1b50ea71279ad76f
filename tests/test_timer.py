"""Tests for the cancellable timer."""

import asyncio

import pytest

from chat_paginator.core.timer import CancellableTimer


class TestCancellableTimer:
    """Tests for CancellableTimer."""

    @pytest.mark.asyncio
    async def test_fires_after_delay(self):
        """The callback runs once the delay has passed."""
        fired = []

        async def callback():
            fired.append(True)

        timer = CancellableTimer("test")
        timer.arm(0.01, callback)
        assert timer.is_armed

        await asyncio.sleep(0.05)

        assert fired == [True]
        assert not timer.is_armed

    @pytest.mark.asyncio
    async def test_cancel_prevents_firing(self):
        """A cancelled timer never runs its callback."""
        fired = []

        async def callback():
            fired.append(True)

        timer = CancellableTimer()
        timer.arm(0.01, callback)
        timer.cancel()
        await asyncio.sleep(0.05)

        assert fired == []
        assert not timer.is_armed

    @pytest.mark.asyncio
    async def test_cancel_is_idempotent(self):
        """Cancelling twice is safe."""
        timer = CancellableTimer()
        timer.cancel()
        timer.cancel()
        assert not timer.is_armed

    @pytest.mark.asyncio
    async def test_rearm_replaces_pending(self):
        """Arming again replaces the pending callback."""
        fired = []

        async def first():
            fired.append("first")

        async def second():
            fired.append("second")

        timer = CancellableTimer()
        timer.arm(0.01, first)
        timer.arm(0.01, second)
        await asyncio.sleep(0.05)

        assert fired == ["second"]

    @pytest.mark.asyncio
    async def test_callback_error_is_logged(self, caplog):
        """A failing callback is logged, not raised."""
        async def callback():
            raise RuntimeError("boom")

        timer = CancellableTimer("expiry")
        timer.arm(0, callback)
        await asyncio.sleep(0.02)

        assert "expiry callback failed: boom" in caplog.text

    @pytest.mark.asyncio
    async def test_cancel_from_callback(self):
        """A callback that cancels its own timer does not cancel itself."""
        timer = CancellableTimer()
        done = []

        async def callback():
            timer.cancel()
            await asyncio.sleep(0)
            done.append(True)

        timer.arm(0, callback)
        await asyncio.sleep(0.02)

        assert done == [True]
