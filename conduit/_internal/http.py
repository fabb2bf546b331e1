"""Shared HTTP client configuration and the default transport."""

from typing import Protocol

import httpx

from conduit._version import __version__

DEFAULT_TIMEOUT = 30.0

# What a transport reports for one request: (response, body, error).
TransportOutcome = tuple[httpx.Response | None, bytes | None, BaseException | None]


def create_http_client(
    *,
    timeout: float = DEFAULT_TIMEOUT,
    base_url: str | None = None,
) -> httpx.AsyncClient:
    """Create configured HTTP client.

    Args:
        timeout: Request timeout in seconds.
        base_url: Optional base URL for all requests.

    Returns:
        Configured httpx.AsyncClient instance.
    """
    return httpx.AsyncClient(
        timeout=timeout,
        base_url=base_url or "",
        headers={"User-Agent": f"conduit/{__version__}"},
    )


class Transport(Protocol):
    """Performs the network I/O for a Provider.

    ``send`` never raises for network failures; it reports them in the error
    slot of the outcome. Cancelling the task awaiting ``send`` cancels the
    request.
    """

    async def send(self, request: httpx.Request) -> TransportOutcome: ...

    async def aclose(self) -> None: ...


class HTTPXTransport:
    """Transport backed by an ``httpx.AsyncClient``."""

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        *,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._client = client or create_http_client(timeout=timeout)

    @property
    def client(self) -> httpx.AsyncClient:
        return self._client

    async def send(self, request: httpx.Request) -> TransportOutcome:
        # Requests are built outside the client, so apply its defaults here.
        for key, value in self._client.headers.items():
            request.headers.setdefault(key, value)
        request.extensions.setdefault("timeout", self._client.timeout.as_dict())

        try:
            response = await self._client.send(request)
        except httpx.HTTPError as e:
            return None, None, e
        return response, response.content, None

    async def aclose(self) -> None:
        await self._client.aclose()
