"""Pydantic models for resolved endpoints and their sample responses."""

from collections.abc import Callable
from typing import Any

import httpx
from pydantic import BaseModel, field_validator

from conduit.models.target import Method, ParameterEncoding, Target

# Methods whose "url" encoded parameters go in the query string.
QUERY_STRING_METHODS: frozenset[str] = frozenset({"GET", "HEAD", "DELETE"})

# =============================================================================
# Sample Responses
# =============================================================================


class NetworkResponse(BaseModel):
    """Sample response carrying a status code and a body."""

    status_code: int
    data: bytes

    model_config = {"frozen": True}


class NetworkError(BaseModel):
    """Sample response standing in for a transport error."""

    error: BaseException

    model_config = {"frozen": True, "arbitrary_types_allowed": True}


SampleResponse = NetworkResponse | NetworkError

# =============================================================================
# Endpoint
# =============================================================================


class Endpoint(BaseModel):
    """One fully resolved request.

    Required fields:
        url: Absolute URL of the request
        sample_response_closure: Zero-argument callable producing the stubbed
            response for this endpoint

    Optional fields:
        method: HTTP method (default: "GET")
        parameters: Request parameters, placed according to parameter_encoding
        http_header_fields: Extra headers for the outgoing request
        parameter_encoding: "url", "json" or "query" (default: "url")
    """

    url: str
    method: Method = "GET"
    parameters: dict[str, Any] | None = None
    http_header_fields: dict[str, str] | None = None
    parameter_encoding: ParameterEncoding = "url"
    sample_response_closure: Callable[[], SampleResponse]

    model_config = {"frozen": True}

    @field_validator("url")
    @classmethod
    def url_not_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("url must not be empty")
        return v

    def adding_parameters(self, parameters: dict[str, Any]) -> "Endpoint":
        """Return a copy with ``parameters`` merged over the existing ones."""
        merged = {**(self.parameters or {}), **parameters}
        return self.model_copy(update={"parameters": merged})

    def adding_http_header_fields(self, headers: dict[str, str]) -> "Endpoint":
        """Return a copy with ``headers`` merged over the existing ones."""
        merged = {**(self.http_header_fields or {}), **headers}
        return self.model_copy(update={"http_header_fields": merged})

    def adding_parameter_encoding(self, encoding: ParameterEncoding) -> "Endpoint":
        """Return a copy using a different parameter encoding."""
        return self.model_copy(update={"parameter_encoding": encoding})

    def build_request(self) -> httpx.Request:
        """Build the transport-level request for this endpoint."""
        params: dict[str, Any] | None = None
        form: dict[str, Any] | None = None
        body: dict[str, Any] | None = None

        if self.parameters:
            if self.parameter_encoding == "json":
                body = self.parameters
            elif self.parameter_encoding == "query" or self.method in QUERY_STRING_METHODS:
                params = self.parameters
            else:
                form = self.parameters

        return httpx.Request(
            self.method,
            self.url,
            params=params,
            data=form,
            json=body,
            headers=self.http_header_fields,
        )


# =============================================================================
# Default Mappings
# =============================================================================


def join_url(base_url: str, path: str) -> str:
    """Append ``path`` to ``base_url`` with exactly one separating slash."""
    if not path:
        return base_url
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"


def default_endpoint_mapping(target: Target) -> Endpoint:
    """Resolve a target into an endpoint that stubs with ``200`` and its sample data."""
    sample_data = target.sample_data
    return Endpoint(
        url=join_url(target.base_url, target.path),
        method=target.method,
        parameters=target.parameters,
        sample_response_closure=lambda: NetworkResponse(status_code=200, data=sample_data),
    )


def default_request_mapping(endpoint: Endpoint, done: Callable[[Any], None]) -> None:
    """Pass the endpoint's own request straight to the continuation."""
    done(endpoint.build_request())
