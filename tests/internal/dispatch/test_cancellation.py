"""Tests for CancellableToken."""

import asyncio

import pytest

from conduit._internal.dispatch.cancellation import CancellableToken


class FakeHandle:
    """Cancel handle that counts cancellations."""

    def __init__(self) -> None:
        self.cancel_calls = 0

    def cancel(self) -> None:
        self.cancel_calls += 1


def make_token(on_cancel=None) -> CancellableToken:
    return CancellableToken(loop=asyncio.get_running_loop(), on_cancel=on_cancel or (lambda: None))


class TestTokenState:
    """Tests for token state transitions."""

    @pytest.mark.asyncio
    async def test_starts_unattached(self):
        """A new token should be unattached and not cancelled."""
        token = make_token()
        assert token.state == "unattached"
        assert token.is_cancelled is False

    @pytest.mark.asyncio
    async def test_attach_makes_active(self):
        """Attaching a handle should make the token active."""
        token = make_token()
        token.attach(FakeHandle())
        assert token.state == "active"

    @pytest.mark.asyncio
    async def test_mark_fired_only_once(self):
        """mark_fired should return True exactly once."""
        token = make_token()
        assert token.mark_fired() is True
        assert token.mark_fired() is False
        assert token.state == "fired"

    @pytest.mark.asyncio
    async def test_repr_includes_state(self):
        """repr should show the state."""
        assert repr(make_token()) == "<CancellableToken state=unattached>"


class TestTokenCancel:
    """Tests for CancellableToken.cancel()."""

    @pytest.mark.asyncio
    async def test_cancel_unattached_calls_on_cancel(self):
        """Cancelling with nothing attached should schedule on_cancel."""
        calls = []
        token = make_token(on_cancel=lambda: calls.append("cancelled"))

        token.cancel()
        assert token.state == "cancelled"
        assert calls == []

        await asyncio.sleep(0)
        assert calls == ["cancelled"]

    @pytest.mark.asyncio
    async def test_cancel_forwards_to_attached_handle(self):
        """Cancelling should forward to the attached handle, not on_cancel."""
        calls = []
        token = make_token(on_cancel=lambda: calls.append("cancelled"))
        handle = FakeHandle()
        token.attach(handle)

        token.cancel()
        await asyncio.sleep(0)

        assert handle.cancel_calls == 1
        assert calls == []

    @pytest.mark.asyncio
    async def test_attach_after_cancel_cancels_handle(self):
        """A handle attached after cancel() should be cancelled at once."""
        token = make_token()
        token.cancel()
        handle = FakeHandle()

        token.attach(handle)

        assert handle.cancel_calls == 1

    @pytest.mark.asyncio
    async def test_cancel_is_idempotent(self):
        """Repeated cancels should have the effect of one."""
        calls = []
        token = make_token(on_cancel=lambda: calls.append("cancelled"))

        token.cancel()
        token.cancel()
        await asyncio.sleep(0)

        assert calls == ["cancelled"]

    @pytest.mark.asyncio
    async def test_cancel_after_fired_is_inert(self):
        """cancel() after completion should do nothing."""
        calls = []
        token = make_token(on_cancel=lambda: calls.append("cancelled"))
        handle = FakeHandle()
        token.attach(handle)
        token.mark_fired()

        token.cancel()
        await asyncio.sleep(0)

        assert token.is_cancelled is False
        assert handle.cancel_calls == 0
        assert calls == []

    @pytest.mark.asyncio
    async def test_attach_after_fired_is_ignored(self):
        """Attaching to a fired token should not change its state."""
        token = make_token()
        token.mark_fired()
        token.attach(FakeHandle())
        assert token.state == "fired"

    @pytest.mark.asyncio
    async def test_cancel_from_thread_runs_on_loop(self):
        """cancel() from another thread should run its effect on the loop thread."""
        loop_thread = []
        token = make_token()

        class ThreadRecordingHandle:
            def cancel(self) -> None:
                loop_thread.append(asyncio.get_running_loop())

        token.attach(ThreadRecordingHandle())
        await asyncio.to_thread(token.cancel)
        await asyncio.sleep(0.01)

        assert loop_thread == [asyncio.get_running_loop()]
