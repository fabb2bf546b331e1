"""Shared fixtures for conduit tests."""

import asyncio
from dataclasses import dataclass, field
from typing import Any

import pytest

from conduit.models import Result

SAMPLE_BODY = b"Half measures are as bad as nothing at all."


@dataclass(frozen=True)
class SampleTarget:
    """Minimal target pointing at http://test/foo/bar."""

    base_url: str = "http://test"
    path: str = "/foo/bar"
    method: str = "GET"
    parameters: dict[str, Any] | None = None
    sample_data: bytes = field(default=SAMPLE_BODY)


class CompletionRecorder:
    """Completion callback that records every result it receives."""

    def __init__(self) -> None:
        self.results: list[Result] = []
        self._event = asyncio.Event()

    def __call__(self, result: Result) -> None:
        self.results.append(result)
        self._event.set()

    async def wait(self, timeout: float = 1.0) -> Result:
        await asyncio.wait_for(self._event.wait(), timeout)
        return self.results[0]


@pytest.fixture
def target() -> SampleTarget:
    return SampleTarget()


@pytest.fixture
def make_target():
    return SampleTarget


@pytest.fixture
def recorder() -> CompletionRecorder:
    return CompletionRecorder()
