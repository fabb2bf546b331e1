"""Response model and the result type delivered to completions."""

import json
from collections.abc import Container
from typing import Any

import httpx
from pydantic import BaseModel

from conduit.exceptions import ConduitError, ResponseFailed

SUCCESSFUL_STATUS_CODES = range(200, 300)


class Response(BaseModel):
    """A completed request, real or stubbed.

    ``response`` is the raw ``httpx.Response`` for real requests and ``None``
    for stubbed ones.
    """

    status_code: int
    data: bytes
    response: httpx.Response | None = None

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    def filter_status_codes(self, codes: Container[int]) -> "Response":
        """Return self if the status code is in ``codes``.

        Raises:
            ResponseFailed: If the status code is outside ``codes``.
        """
        if self.status_code not in codes:
            raise ResponseFailed(ValueError(f"unexpected status code {self.status_code}"))
        return self

    def filter_successful_status_codes(self) -> "Response":
        """Return self if the status code is 2xx."""
        return self.filter_status_codes(SUCCESSFUL_STATUS_CODES)

    def map_string(self, encoding: str = "utf-8") -> str:
        """Decode the body as text.

        Raises:
            ResponseFailed: If the body is not valid in ``encoding``.
        """
        try:
            return self.data.decode(encoding)
        except UnicodeDecodeError as e:
            raise ResponseFailed(e) from e

    def map_json(self) -> Any:
        """Decode the body as JSON.

        Raises:
            ResponseFailed: If the body is not valid JSON.
        """
        try:
            return json.loads(self.data)
        except ValueError as e:
            raise ResponseFailed(e) from e


# Outcome of one request: a Response on success, a ConduitError on failure.
Result = Response | ConduitError
