"""Server-Sent-Events style line parsing.

The API streams newline-delimited lines of the form ``data: {...}``. Blank
lines separate events and are ignored; a literal ``[DONE]`` payload ends the
stream.
"""

from __future__ import annotations

import asyncio
from typing import AsyncIterable, AsyncIterator, Optional

from .constants import DATA_PREFIX, DONE_SENTINEL


class SSEParser:
    """Turns raw stream lines into JSON payload strings.

    :meth:`feed` returns the payload text for data lines and ``None`` for
    everything else. Once the ``[DONE]`` sentinel is seen :attr:`done` is set
    and further lines are ignored.
    """

    __slots__ = ("done",)

    def __init__(self) -> None:
        self.done = False

    def feed(self, line: str | bytes) -> Optional[str]:
        if self.done:
            return None
        if isinstance(line, bytes):
            line = line.decode("utf-8", errors="replace")
        line = line.rstrip("\r\n")
        if line.startswith(DATA_PREFIX):
            line = line[len(DATA_PREFIX):]
        if line.strip() == DONE_SENTINEL:
            self.done = True
            return None
        if not line.strip():
            return None
        return line.strip()


async def iter_sse_payloads(
    lines: AsyncIterable[str | bytes],
    cancel_event: Optional[asyncio.Event] = None,
) -> AsyncIterator[str]:
    """Yield payloads from ``lines`` until ``[DONE]``, end of body, or cancellation.

    ``cancel_event`` is checked before each line is handled.
    """
    parser = SSEParser()
    async for line in lines:
        if cancel_event is not None and cancel_event.is_set():
            return
        payload = parser.feed(line)
        if parser.done:
            return
        if payload is not None:
            yield payload
