"""Public models for conduit.

Example:
    from conduit.models import Endpoint, NetworkResponse

    endpoint = Endpoint(
        url="https://api.example.com/users/1",
        sample_response_closure=lambda: NetworkResponse(status_code=200, data=b"{}"),
    )
"""

from conduit.models.endpoint import (
    Endpoint,
    NetworkError,
    NetworkResponse,
    SampleResponse,
    default_endpoint_mapping,
    default_request_mapping,
    join_url,
)
from conduit.models.response import Response, Result
from conduit.models.target import Method, ParameterEncoding, Target

__all__ = [
    "Endpoint",
    "Method",
    "NetworkError",
    "NetworkResponse",
    "ParameterEncoding",
    "Response",
    "Result",
    "SampleResponse",
    "Target",
    "default_endpoint_mapping",
    "default_request_mapping",
    "join_url",
]
