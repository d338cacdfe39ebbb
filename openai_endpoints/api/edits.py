"""Instruction-driven edits of a text input.

<https://platform.openai.com/docs/api-reference/edits>
"""

from __future__ import annotations

from ..core.timing_logger import timed
from ..types.edits import EditRequest, EditResponse
from .base import BaseEndpoint


class EditsEndpoint(BaseEndpoint):
    path = "edits"

    @timed
    async def create_edit(self, request: EditRequest) -> EditResponse:
        return await self._call(
            EditResponse,
            "POST",
            self.endpoint,
            operation="create_edit",
            json_body=request.to_payload(),
        )
