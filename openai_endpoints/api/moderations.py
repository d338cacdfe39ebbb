"""Content policy classification.

<https://platform.openai.com/docs/api-reference/moderations>
"""

from __future__ import annotations

from typing import Optional, Union

from ..core.timing_logger import timed
from ..types.moderations import ModerationsRequest, ModerationsResponse
from .base import BaseEndpoint


class ModerationsEndpoint(BaseEndpoint):
    path = "moderations"

    @timed
    async def create_moderation(self, request: ModerationsRequest) -> ModerationsResponse:
        return await self._call(
            ModerationsResponse,
            "POST",
            self.endpoint,
            operation="create_moderation",
            json_body=request.to_payload(),
        )

    async def get_moderation(self, input: Union[str, list[str]], model: Optional[str] = None) -> bool:
        """Return True if any input is flagged."""
        response = await self.create_moderation(ModerationsRequest(input=input, model=model))
        return response.flagged
