"""Plugins observe and adjust requests made through a Provider.

A plugin is any object with ``will_send_request(request, target)`` and
``did_receive_response(result, target)``. Plugins run in registration order
on the Provider's event loop. ``will_send_request`` receives the live
``httpx.Request`` and may change its headers. Exceptions raised by a plugin
are not caught by the Provider.
"""

import json
import sys
from collections.abc import Callable
from typing import Any, TextIO

import httpx

from conduit._internal.dispatch.redaction import redact_headers, redact_payload
from conduit.models.response import Response, Result


class Plugin:
    """Base class with no-op hooks. Override either or both."""

    def will_send_request(self, request: httpx.Request, target: Any) -> None:
        """Called before the request is sent or stubbed."""

    def did_receive_response(self, result: Result, target: Any) -> None:
        """Called with the result, immediately before the completion."""


class ClosurePlugin(Plugin):
    """Plugin built from two optional callables."""

    def __init__(
        self,
        will_send: Callable[[httpx.Request, Any], None] | None = None,
        did_receive: Callable[[Result, Any], None] | None = None,
    ) -> None:
        self._will_send = will_send
        self._did_receive = did_receive

    def will_send_request(self, request: httpx.Request, target: Any) -> None:
        if self._will_send is not None:
            self._will_send(request, target)

    def did_receive_response(self, result: Result, target: Any) -> None:
        if self._did_receive is not None:
            self._did_receive(result, target)


class AccessTokenPlugin(Plugin):
    """Adds an ``Authorization: Bearer`` header to every request."""

    def __init__(self, token: str | Callable[[], str]) -> None:
        self._token = token

    @property
    def token(self) -> str:
        return self._token() if callable(self._token) else self._token

    def will_send_request(self, request: httpx.Request, target: Any) -> None:
        request.headers["Authorization"] = f"Bearer {self.token}"


class NetworkLoggerPlugin(Plugin):
    """Writes one line per request and per result.

    In verbose mode headers and bodies are included, with credentials
    redacted unless ``skip_redaction`` is set.
    """

    def __init__(
        self,
        *,
        verbose: bool = False,
        output: TextIO | None = None,
        skip_redaction: bool = False,
    ) -> None:
        self._verbose = verbose
        self._output = output
        self._skip_redaction = skip_redaction

    def _write(self, message: str) -> None:
        print(f"[conduit:network] {message}", file=self._output or sys.stderr)

    def will_send_request(self, request: httpx.Request, target: Any) -> None:
        self._write(f"Request: {request.method} {request.url}")
        if not self._verbose:
            return

        headers = redact_headers(request.headers.items(), skip_redaction=self._skip_redaction)
        self._write(f"Request headers: {headers}")
        body = self._format_body(request.content)
        if body:
            self._write(f"Request body: {body}")

    def did_receive_response(self, result: Result, target: Any) -> None:
        if not isinstance(result, Response):
            self._write(f"Failure: {result!r}")
            return

        self._write(f"Response: {result.status_code} ({len(result.data)} bytes)")
        if not self._verbose:
            return

        if result.response is not None:
            headers = redact_headers(
                result.response.headers.items(), skip_redaction=self._skip_redaction
            )
            self._write(f"Response headers: {headers}")
        body = self._format_body(result.data)
        if body:
            self._write(f"Response body: {body}")

    def _format_body(self, content: bytes) -> str:
        """Render a body for logging, redacting JSON objects."""
        if not content:
            return ""
        try:
            decoded = json.loads(content)
        except ValueError:
            return content.decode("utf-8", errors="replace")

        if isinstance(decoded, dict):
            decoded = redact_payload(decoded, skip_redaction=self._skip_redaction)
        return json.dumps(decoded, default=str)
