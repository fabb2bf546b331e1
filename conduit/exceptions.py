"""Public exceptions for conduit.

Request failures are never raised out of a Provider. They are delivered as
the failure side of a ``Result`` to plugins and to the completion callback.
"""


class ConduitError(Exception):
    """Base exception for all conduit errors."""

    def __init__(self, message: str | None = None, cause: BaseException | None = None) -> None:
        super().__init__(message or self._default_message(cause))
        self.cause = cause

    def _default_message(self, cause: BaseException | None) -> str:
        if cause is None:
            return self.__class__.__name__
        return f"{self.__class__.__name__}: {cause}"


class BuildingRequestFailed(ConduitError):
    """Turning an endpoint into a transport request failed."""

    def __init__(self, cause: BaseException) -> None:
        super().__init__(cause=cause)


class ResponseFailed(ConduitError):
    """A response could not be decoded or did not pass a filter."""

    def __init__(self, cause: BaseException) -> None:
        super().__init__(cause=cause)


class UnexpectedBackendFailure(ConduitError):
    """The transport or a sample closure failed outside its contract."""

    def __init__(self, cause: BaseException) -> None:
        super().__init__(cause=cause)


class Aborted(ConduitError):
    """The request was abandoned by the caller before it was sent."""


class Cancelled(ConduitError):
    """The request was cancelled through its token."""


class Underlying(ConduitError):
    """Wraps an error reported by the transport."""

    def __init__(self, cause: BaseException) -> None:
        super().__init__(cause=cause)


class ConduitConfigError(ConduitError):
    """Configuration error (invalid env vars, invalid provider setup)."""
