"""Pydantic models for stub dispatch decisions."""

import math
from collections.abc import Callable
from typing import Any, Literal

from pydantic import BaseModel, Field, model_validator

from conduit.exceptions import ConduitConfigError

StubKind = Literal["never", "immediate", "delayed"]


class StubBehavior(BaseModel):
    """How a single request is stubbed.

    Fields:
        kind: "never" sends the request for real, "immediate" answers with the
            sample response in the same dispatch call, "delayed" answers after
            ``delay`` seconds
        delay: Seconds to wait before a delayed stub fires
    """

    kind: StubKind
    delay: float = Field(default=0.0, ge=0)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def delay_only_when_delayed(self) -> "StubBehavior":
        if self.kind != "delayed" and self.delay:
            raise ValueError(f"delay is only valid for delayed stubs, got kind={self.kind!r}")
        return self

    @classmethod
    def never(cls) -> "StubBehavior":
        return cls(kind="never")

    @classmethod
    def immediate(cls) -> "StubBehavior":
        return cls(kind="immediate")

    @classmethod
    def delayed(cls, seconds: float) -> "StubBehavior":
        return cls(kind="delayed", delay=seconds)

    @property
    def is_stubbed(self) -> bool:
        return self.kind != "never"


StubClosure = Callable[[Any], StubBehavior]


def never_stub(target: Any) -> StubBehavior:
    """Send every request over the network."""
    return StubBehavior.never()


def immediately_stub(target: Any) -> StubBehavior:
    """Answer every request with its sample response right away."""
    return StubBehavior.immediate()


def delayed_stub(seconds: float) -> StubClosure:
    """Build a stub closure answering every request after ``seconds``."""
    behavior = StubBehavior.delayed(seconds)

    def stub_closure(target: Any) -> StubBehavior:
        return behavior

    return stub_closure


def parse_stub_closure(value: str) -> StubClosure:
    """Parse a ``never`` / ``immediate`` / ``<seconds>`` setting.

    Raises:
        ConduitConfigError: If the value is not one of the accepted forms.
    """
    normalized = value.strip().lower()
    if normalized in ("", "never"):
        return never_stub
    if normalized == "immediate":
        return immediately_stub
    try:
        seconds = float(normalized)
    except ValueError:
        raise ConduitConfigError(f"invalid stub behavior: {value!r}") from None
    if not math.isfinite(seconds):
        raise ConduitConfigError(f"stub delay must be finite: {value!r}")
    if seconds < 0:
        raise ConduitConfigError(f"stub delay must not be negative: {value!r}")
    return delayed_stub(seconds)
