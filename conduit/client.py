"""Provider: the entry point for making requests.

Example:
    from conduit import NetworkLoggerPlugin, Provider, immediately_stub

    async with Provider(plugins=[NetworkLoggerPlugin()]) as provider:
        token = provider.request(GitHub.zen, on_result)
        ...
        token.cancel()

    # Or await a single result
    result = await provider.fetch(GitHub.zen)

    # Answer every request from the targets' sample data
    provider = Provider(stub_closure=immediately_stub)
"""

import asyncio
import os
import sys
from collections.abc import Callable, Iterable
from typing import Any

from conduit._internal.dispatch.cancellation import CancellableToken
from conduit._internal.dispatch.models import StubClosure, never_stub, parse_stub_closure
from conduit._internal.dispatch.network import dispatch_request
from conduit._internal.dispatch.stub import dispatch_stub
from conduit._internal.http import DEFAULT_TIMEOUT, HTTPXTransport, Transport
from conduit.exceptions import BuildingRequestFailed, Cancelled, ConduitConfigError, ConduitError
from conduit.models.endpoint import Endpoint, default_endpoint_mapping, default_request_mapping
from conduit.models.response import Response, Result

DEFAULT_TIMEOUT_MS = int(DEFAULT_TIMEOUT * 1000)

Completion = Callable[[Result], None]
EndpointClosure = Callable[[Any], Endpoint]
RequestClosure = Callable[[Endpoint, Callable[[Any], None]], None]


class Provider:
    """Turns targets into requests, sends or stubs them, and reports results.

    Every ``request()`` call fires its completion exactly once, with either a
    ``Response`` or a ``ConduitError``. Plugins see the outgoing request
    before it is sent and the result immediately before the completion.

    All dispatch happens on the event loop ``request()`` is called from.

    Use ``Provider.from_env()`` to configure timeout, debug logging and
    stubbing from environment variables.
    """

    def __init__(
        self,
        *,
        endpoint_closure: EndpointClosure = default_endpoint_mapping,
        request_closure: RequestClosure = default_request_mapping,
        stub_closure: StubClosure = never_stub,
        transport: Transport | None = None,
        plugins: Iterable[Any] = (),
        debug: bool = False,
    ) -> None:
        """Initialize the provider.

        Args:
            endpoint_closure: Resolves a target into an Endpoint.
            request_closure: Builds the transport request for an Endpoint and
                passes it (or an exception) to the continuation it is given.
            stub_closure: Chooses the StubBehavior for each target.
            transport: Performs real requests. Defaults to an HTTPXTransport.
            plugins: Plugins, invoked in this order.
            debug: Enable debug logging to stderr.
        """
        self.endpoint_closure = endpoint_closure
        self.request_closure = request_closure
        self.stub_closure = stub_closure
        self.plugins: tuple[Any, ...] = tuple(plugins)
        self._transport = transport or HTTPXTransport()
        self._debug = debug

    @classmethod
    def from_env(cls, **overrides: Any) -> "Provider":
        """Create a provider from environment variables.

        Optional environment variables:
            CONDUIT_TIMEOUT_MS: Transport timeout in milliseconds.
            CONDUIT_DEBUG: Set to "1" to enable debug logging.
            CONDUIT_STUB: "never", "immediate", or a delay in seconds to stub
                every request.

        Args:
            **overrides: Constructor arguments taking precedence over the
                environment.

        Raises:
            ConduitConfigError: If CONDUIT_STUB or CONDUIT_TIMEOUT_MS is invalid.
            ValueError: If CONDUIT_TIMEOUT_MS is not an integer.
        """
        debug = os.environ.get("CONDUIT_DEBUG", "") == "1"
        timeout_ms = int(os.environ.get("CONDUIT_TIMEOUT_MS", str(DEFAULT_TIMEOUT_MS)))
        if timeout_ms <= 0:
            raise ConduitConfigError(f"CONDUIT_TIMEOUT_MS must be positive, got {timeout_ms}")
        stub_closure = parse_stub_closure(os.environ.get("CONDUIT_STUB", "never"))

        kwargs: dict[str, Any] = {"stub_closure": stub_closure, "debug": debug}
        if "transport" not in overrides:
            kwargs["transport"] = HTTPXTransport(timeout=timeout_ms / 1000)
        kwargs.update(overrides)
        return cls(**kwargs)

    @property
    def transport(self) -> Transport:
        return self._transport

    def _log_debug(self, message: str) -> None:
        """Log a debug message to stderr if debug mode is enabled."""
        if self._debug:
            print(f"[conduit] {message}", file=sys.stderr)

    def endpoint(self, target: Any) -> Endpoint:
        """Resolve ``target`` through the endpoint closure."""
        return self.endpoint_closure(target)

    def request(self, target: Any, completion: Completion) -> CancellableToken:
        """Request ``target`` and report the result to ``completion``.

        Must be called from a running event loop. Returns before anything is
        dispatched; the completion fires on a later loop iteration.

        Args:
            target: The target to request.
            completion: Called exactly once with the Result.

        Returns:
            A token that cancels the request.
        """
        loop = asyncio.get_running_loop()

        def deliver(result: Result) -> None:
            if not token.mark_fired():
                return
            self._log_debug(f"Completed {_describe(target)}: {_describe_result(result)}")
            for plugin in self.plugins:
                plugin.did_receive_response(result, target)
            completion(result)

        token = CancellableToken(loop=loop, on_cancel=lambda: deliver(Cancelled()))

        try:
            endpoint = self.endpoint(target)
        except Exception as e:
            self._log_debug(f"Endpoint mapping failed for {_describe(target)}: {e}")
            loop.call_soon(deliver, BuildingRequestFailed(e))
            return token

        loop.call_soon(self._perform, target, endpoint, token, deliver, loop)
        return token

    def _perform(
        self,
        target: Any,
        endpoint: Endpoint,
        token: CancellableToken,
        deliver: Callable[[Result], None],
        loop: asyncio.AbstractEventLoop,
    ) -> None:
        """Build the transport request and hand it to the stub or network path."""
        if token.is_cancelled:
            return

        continued = False

        def proceed(request: Any) -> None:
            nonlocal continued
            if continued:
                raise RuntimeError("request closure continuation called more than once")
            continued = True

            # A cancelled token has already reported Cancelled.
            if token.is_cancelled:
                self._log_debug(f"Skipping cancelled request {_describe(target)}")
                return
            if isinstance(request, ConduitError):
                deliver(request)
                return
            if isinstance(request, BaseException):
                deliver(BuildingRequestFailed(request))
                return

            try:
                behavior = self.stub_closure(target)
            except Exception as e:
                self._log_debug(f"Stub decision failed for {_describe(target)}: {e}")
                deliver(BuildingRequestFailed(e))
                return

            for plugin in self.plugins:
                plugin.will_send_request(request, target)

            if behavior.is_stubbed:
                self._log_debug(f"Stubbing {request.method} {request.url} ({behavior.kind})")
                handle = dispatch_stub(behavior, endpoint, token, deliver, loop)
            else:
                self._log_debug(f"Sending {request.method} {request.url}")
                handle = dispatch_request(self._transport, request, deliver, loop)
            token.attach(handle)

        try:
            self.request_closure(endpoint, proceed)
        except Exception as e:
            if continued:
                raise
            self._log_debug(f"Request mapping failed for {_describe(target)}: {e}")
            deliver(BuildingRequestFailed(e))

    async def fetch(self, target: Any) -> Result:
        """Request ``target`` and wait for its Result.

        Cancelling the awaiting task cancels the request.
        """
        future: asyncio.Future[Result] = asyncio.get_running_loop().create_future()

        def completion(result: Result) -> None:
            if not future.done():
                future.set_result(result)

        token = self.request(target, completion)
        try:
            return await future
        except asyncio.CancelledError:
            token.cancel()
            raise

    async def aclose(self) -> None:
        """Close the transport."""
        await self._transport.aclose()

    async def __aenter__(self) -> "Provider":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()


def _describe(target: Any) -> str:
    path = getattr(target, "path", None)
    return f"{type(target).__name__}({path})" if path is not None else repr(target)


def _describe_result(result: Result) -> str:
    if isinstance(result, Response):
        return f"status {result.status_code}"
    return repr(result)


__all__ = ["Provider", "Completion", "EndpointClosure", "RequestClosure"]
