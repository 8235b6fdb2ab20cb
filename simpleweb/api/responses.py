"""Starlette response writer."""

from typing import Any

from fastapi.encoders import jsonable_encoder
from starlette.responses import JSONResponse, PlainTextResponse, Response

from simpleweb.core.status import Status
from simpleweb.dispatch.writer import SingleResponseWriter


class StarletteResponseWriter(SingleResponseWriter):
    """Turns the handler's status and output into a Starlette response.

    Output is rendered as JSON, except ``str`` (text/plain) and ``bytes``
    (application/octet-stream). Statuses that forbid a body (1xx, 204, 304)
    and ``None`` output produce an empty response.
    """

    def __init__(self) -> None:
        super().__init__()
        self._response: Response | None = None

    @property
    def response(self) -> Response:
        if self._response is None:
            raise RuntimeError("No response has been written yet")
        return self._response

    async def _write(self, status: Status, output: Any) -> None:
        headers = status.response_headers()

        if output is None or not status.allows_body:
            self._response = Response(status_code=status.code, headers=headers)
        elif isinstance(output, str):
            self._response = PlainTextResponse(
                output, status_code=status.code, headers=headers
            )
        elif isinstance(output, bytes | bytearray):
            self._response = Response(
                bytes(output),
                status_code=status.code,
                headers=headers,
                media_type="application/octet-stream",
            )
        else:
            self._response = JSONResponse(
                jsonable_encoder(output), status_code=status.code, headers=headers
            )
