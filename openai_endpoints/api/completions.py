"""Text completions for a prompt, whole or streamed.

<https://platform.openai.com/docs/api-reference/completions>
"""

from __future__ import annotations

import contextlib
from typing import AsyncIterator, Awaitable, Callable, Optional, Union

from pydantic import ValidationError

from ..core.timing_logger import timed
from ..core.utils import _await_if_needed
from ..streaming.sse_parser import iter_sse_payloads
from ..types.completions import CompletionRequest, CompletionResult
from .base import BaseEndpoint

CompletionCallback = Callable[[CompletionResult], Union[None, Awaitable[None]]]


class CompletionsEndpoint(BaseEndpoint):
    path = "completions"

    @timed
    async def create_completion(self, request: CompletionRequest) -> CompletionResult:
        """Return the completion(s) for ``request`` in one response."""
        if request.stream:
            request = request.model_copy(update={"stream": None})
        return await self._call(
            CompletionResult,
            "POST",
            self.endpoint,
            operation="create_completion",
            json_body=request.to_payload(),
        )

    def _parse_chunk(self, payload: str) -> Optional[CompletionResult]:
        try:
            return CompletionResult.model_validate_json(payload)
        except ValidationError as exc:
            self.logger.warning("Discarding unparsable completion chunk: %s (%s)", payload[:200], exc.error_count())
            return None

    async def iter_completion(self, request: CompletionRequest) -> AsyncIterator[CompletionResult]:
        """Yield partial results as the API streams them."""
        streaming_request = request.model_copy(update={"stream": True})
        lines = self._client.stream_lines(
            "POST",
            self.endpoint,
            json_body=streaming_request.to_payload(),
            operation="stream_completion",
        )
        async with contextlib.aclosing(lines), contextlib.aclosing(iter_sse_payloads(lines)) as payloads:
            async for payload in payloads:
                chunk = self._parse_chunk(payload)
                if chunk is not None:
                    yield chunk

    @timed
    async def stream_completion(self, request: CompletionRequest, callback: CompletionCallback) -> None:
        """Invoke ``callback`` (sync or async) with each streamed partial result."""
        stream = self.iter_completion(request)
        async with contextlib.aclosing(stream):
            async for chunk in stream:
                await _await_if_needed(callback(chunk))
