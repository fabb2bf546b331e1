"""conduit: declarative HTTP requests with stubbing, cancellation and plugins.

Public API:
    Provider - Resolves targets into requests and dispatches them
    Endpoint, Response, Result - Request and outcome models
    StubBehavior - Per-request stub decision
    Plugin, ClosurePlugin, AccessTokenPlugin, NetworkLoggerPlugin - Plugins

Internal (system-level, not for direct use):
    _internal.dispatch - Network and stub dispatch, cancellation
"""

from conduit._internal.dispatch import (
    CancellableToken,
    StubBehavior,
    delayed_stub,
    immediately_stub,
    never_stub,
)
from conduit._internal.http import HTTPXTransport, Transport
from conduit._version import __version__
from conduit.client import Provider
from conduit.exceptions import (
    Aborted,
    BuildingRequestFailed,
    Cancelled,
    ConduitConfigError,
    ConduitError,
    ResponseFailed,
    UnexpectedBackendFailure,
    Underlying,
)
from conduit.models import (
    Endpoint,
    Method,
    NetworkError,
    NetworkResponse,
    Response,
    Result,
    Target,
    default_endpoint_mapping,
    default_request_mapping,
)
from conduit.plugins import AccessTokenPlugin, ClosurePlugin, NetworkLoggerPlugin, Plugin

__all__ = [
    "__version__",
    "Aborted",
    "AccessTokenPlugin",
    "BuildingRequestFailed",
    "CancellableToken",
    "Cancelled",
    "ClosurePlugin",
    "ConduitConfigError",
    "ConduitError",
    "Endpoint",
    "HTTPXTransport",
    "Method",
    "NetworkError",
    "NetworkLoggerPlugin",
    "NetworkResponse",
    "Plugin",
    "Provider",
    "Response",
    "ResponseFailed",
    "Result",
    "StubBehavior",
    "Target",
    "Transport",
    "UnexpectedBackendFailure",
    "Underlying",
    "default_endpoint_mapping",
    "default_request_mapping",
    "delayed_stub",
    "immediately_stub",
    "never_stub",
]
