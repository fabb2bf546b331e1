"""Dispatch system for conduit providers.

WARNING: This is a system-level module used by the Provider.
Do not call directly from user code.
"""

from conduit._internal.dispatch.cancellation import Cancellable, CancellableToken, TokenState
from conduit._internal.dispatch.models import (
    StubBehavior,
    StubClosure,
    delayed_stub,
    immediately_stub,
    never_stub,
    parse_stub_closure,
)
from conduit._internal.dispatch.network import convert_response_to_result, dispatch_request
from conduit._internal.dispatch.stub import StubHandle, create_stub_function, dispatch_stub

__all__ = [
    "Cancellable",
    "CancellableToken",
    "TokenState",
    "StubBehavior",
    "StubClosure",
    "delayed_stub",
    "immediately_stub",
    "never_stub",
    "parse_stub_closure",
    "convert_response_to_result",
    "dispatch_request",
    "StubHandle",
    "create_stub_function",
    "dispatch_stub",
]
