"""Real dispatch: send requests through the transport."""

import asyncio
from collections.abc import Callable

import httpx

from conduit._internal.http import Transport
from conduit.exceptions import Cancelled, UnexpectedBackendFailure, Underlying
from conduit.models.response import Response, Result

Deliver = Callable[[Result], None]


def convert_response_to_result(
    response: httpx.Response | None,
    data: bytes | None,
    error: BaseException | None,
) -> Result:
    """Convert a transport outcome into a Result.

    A response with a body and no error is a success. Any error wins over a
    partial response. An outcome with nothing in it is reported as an
    unknown network error.
    """
    if response is not None and data is not None and error is None:
        return Response(status_code=response.status_code, data=data, response=response)
    if error is not None:
        return Underlying(error)
    return Underlying(httpx.NetworkError("unknown network error"))


def dispatch_request(
    transport: Transport,
    request: httpx.Request,
    deliver: Deliver,
    loop: asyncio.AbstractEventLoop,
) -> asyncio.Task:
    """Start sending ``request`` and deliver its result when done.

    Returns:
        The task performing the request, used as the token's cancel handle.
    """
    task = loop.create_task(transport.send(request))

    def on_done(task: asyncio.Task) -> None:
        if task.cancelled():
            deliver(Cancelled())
            return

        error = task.exception()
        if error is not None:
            deliver(UnexpectedBackendFailure(error))
            return

        try:
            response, data, transport_error = task.result()
        except (TypeError, ValueError) as e:
            deliver(UnexpectedBackendFailure(e))
            return
        deliver(convert_response_to_result(response, data, transport_error))

    task.add_done_callback(on_done)
    return task
