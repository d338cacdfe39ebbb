"""Vector embeddings for text.

<https://platform.openai.com/docs/api-reference/embeddings>
"""

from __future__ import annotations

from typing import Optional, Union

from ..core.timing_logger import timed
from ..types.embeddings import EmbeddingsRequest, EmbeddingsResponse
from ..types.models import KnownModels
from .base import BaseEndpoint


class EmbeddingsEndpoint(BaseEndpoint):
    path = "embeddings"

    @timed
    async def create_embedding(
        self,
        request: Union[EmbeddingsRequest, str, list[str]],
        model: Optional[str] = None,
        user: Optional[str] = None,
    ) -> EmbeddingsResponse:
        """Embed a string or list of strings.

        ``model`` and ``user`` are only used when ``request`` is raw input.
        Empty input is rejected before any request is sent.
        """
        if not isinstance(request, EmbeddingsRequest):
            request = EmbeddingsRequest(
                input=request,
                model=model or KnownModels.EMBEDDING_ADA_002,
                user=user,
            )
        return await self._call(
            EmbeddingsResponse,
            "POST",
            self.endpoint,
            operation="create_embedding",
            json_body=request.to_payload(),
        )
