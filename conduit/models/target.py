"""Declarative description of an API call."""

from typing import Any, Literal, Protocol

Method = Literal["GET", "POST", "PUT", "DELETE", "OPTIONS", "HEAD", "PATCH", "TRACE", "CONNECT"]

# How endpoint parameters are placed on the outgoing request.
ParameterEncoding = Literal["url", "json", "query"]


class Target(Protocol):
    """An API call as described by the integrator.

    Any object exposing these attributes can be requested through a
    Provider: a dataclass, a pydantic model, or an enum member with
    properties.
    """

    @property
    def base_url(self) -> str: ...

    @property
    def path(self) -> str: ...

    @property
    def method(self) -> Method: ...

    @property
    def parameters(self) -> dict[str, Any] | None: ...

    @property
    def sample_data(self) -> bytes: ...
