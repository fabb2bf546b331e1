"""Cancellation handles returned by a Provider."""

import asyncio
import threading
from collections.abc import Callable
from typing import Any, Literal, Protocol

TokenState = Literal["unattached", "active", "cancelled", "fired"]


class Cancellable(Protocol):
    """Anything that can be cancelled, such as an ``asyncio.Task``."""

    def cancel(self) -> Any: ...


class CancellableToken:
    """Handle for one in-flight request.

    The token starts unattached. Once dispatch begins, the Provider attaches
    the lower-level handle doing the work (a network task or a stub timer).
    ``cancel()`` forwards to that handle when one is attached; otherwise it
    records the request and the Provider reports the cancellation itself.
    A handle attached after ``cancel()`` is cancelled on attachment.

    ``cancel()`` may be called from any thread. Its side effects always run on
    the Provider's event loop.
    """

    def __init__(
        self,
        *,
        loop: asyncio.AbstractEventLoop,
        on_cancel: Callable[[], None],
    ) -> None:
        self._loop = loop
        self._on_cancel = on_cancel
        self._lock = threading.Lock()
        self._cancel_requested = False
        self._handle: Cancellable | None = None
        self._fired = False

    @property
    def is_cancelled(self) -> bool:
        """Whether cancellation has been requested."""
        return self._cancel_requested

    @property
    def state(self) -> TokenState:
        with self._lock:
            if self._fired:
                return "fired"
            if self._cancel_requested:
                return "cancelled"
            if self._handle is not None:
                return "active"
            return "unattached"

    def cancel(self) -> None:
        """Cancel the request. Idempotent, and inert once the request completed."""
        with self._lock:
            if self._cancel_requested or self._fired:
                return
            self._cancel_requested = True
            handle = self._handle

        if handle is not None:
            self._call_on_loop(handle.cancel)
        else:
            self._call_on_loop(self._on_cancel)

    def attach(self, handle: Cancellable) -> None:
        """Attach the handle performing the request."""
        with self._lock:
            if self._fired:
                return
            self._handle = handle
            cancel_now = self._cancel_requested

        if cancel_now:
            handle.cancel()

    def mark_fired(self) -> bool:
        """Record that the completion is firing. True only on the first call."""
        with self._lock:
            if self._fired:
                return False
            self._fired = True
            self._handle = None
            return True

    def _call_on_loop(self, callback: Callable[[], Any]) -> None:
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None

        if running is self._loop:
            self._loop.call_soon(callback)
        else:
            self._loop.call_soon_threadsafe(callback)

    def __repr__(self) -> str:
        return f"<CancellableToken state={self.state}>"
