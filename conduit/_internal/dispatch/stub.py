"""Stub dispatch: answer requests locally from an endpoint's sample response."""

import asyncio
from collections.abc import Callable

from conduit._internal.dispatch.cancellation import CancellableToken
from conduit._internal.dispatch.models import StubBehavior
from conduit.exceptions import Cancelled, UnexpectedBackendFailure, Underlying
from conduit.models.endpoint import Endpoint, NetworkError, NetworkResponse
from conduit.models.response import Response, Result

Deliver = Callable[[Result], None]


class StubHandle:
    """Cancel handle for a scheduled stub.

    The stub function runs at most once. Cancelling a pending stub drops its
    timer and runs the stub on the next loop iteration, where it sees the
    cancelled token and reports ``Cancelled``.
    """

    def __init__(self, stub: Callable[[], None], loop: asyncio.AbstractEventLoop) -> None:
        self._stub = stub
        self._loop = loop
        self._timer: asyncio.TimerHandle | None = None
        self._fired = False

    @property
    def fired(self) -> bool:
        return self._fired

    def fire(self) -> None:
        if self._fired:
            return
        self._fired = True
        self._stub()

    def schedule(self, delay: float) -> None:
        self._timer = self._loop.call_later(delay, self.fire)

    def cancel(self) -> None:
        if self._fired:
            return
        if self._timer is not None:
            self._timer.cancel()
        self._loop.call_soon(self.fire)


def create_stub_function(
    endpoint: Endpoint,
    token: CancellableToken,
    deliver: Deliver,
) -> Callable[[], None]:
    """Create the function that produces the stubbed result for ``endpoint``."""

    def stub() -> None:
        if token.is_cancelled:
            deliver(Cancelled())
            return

        try:
            sample = endpoint.sample_response_closure()
        except Exception as e:
            deliver(UnexpectedBackendFailure(e))
            return

        if isinstance(sample, NetworkResponse):
            deliver(Response(status_code=sample.status_code, data=sample.data))
        elif isinstance(sample, NetworkError):
            deliver(Underlying(sample.error))
        else:
            deliver(UnexpectedBackendFailure(TypeError(f"unsupported sample response: {sample!r}")))

    return stub


def dispatch_stub(
    behavior: StubBehavior,
    endpoint: Endpoint,
    token: CancellableToken,
    deliver: Deliver,
    loop: asyncio.AbstractEventLoop,
) -> StubHandle:
    """Run or schedule the stub for one request.

    Returns:
        The handle to attach to the request's token.

    Raises:
        RuntimeError: If called with a "never" behavior; those requests belong
            to the network dispatcher.
    """
    if behavior.kind == "never":
        raise RuntimeError("stub dispatch called for a request that must not be stubbed")

    handle = StubHandle(create_stub_function(endpoint, token, deliver), loop)
    if behavior.kind == "immediate":
        handle.fire()
    else:
        handle.schedule(behavior.delay)
    return handle
