"""Tests for response writers."""

import pytest

from simpleweb.core import status
from simpleweb.core.errors import ResponseAlreadyWrittenError
from simpleweb.dispatch import BufferedResponseWriter, ResponseWriter


@pytest.mark.unit
class TestBufferedResponseWriter:
    async def test_records_status_and_output(self) -> None:
        writer = BufferedResponseWriter()
        assert not writer.written

        await writer.write(status.CREATED, {"id": 1})

        assert writer.written
        assert writer.status == status.CREATED
        assert writer.output == {"id": 1}

    async def test_second_write_is_rejected(self) -> None:
        writer = BufferedResponseWriter()
        await writer.write(status.OK, None)

        with pytest.raises(ResponseAlreadyWrittenError):
            await writer.write(status.INTERNAL_SERVER_ERROR, None)

        assert writer.status == status.OK

    def test_satisfies_protocol(self) -> None:
        assert isinstance(BufferedResponseWriter(), ResponseWriter)
