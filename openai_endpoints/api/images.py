"""Image generation, edits and variations.

<https://platform.openai.com/docs/api-reference/images>
"""

from __future__ import annotations

import aiohttp

from ..core.timing_logger import timed
from ..types.images import (
    ImageEditRequest,
    ImageGenerationRequest,
    ImageResult,
    ImagesResponse,
    ImageVariationRequest,
)
from .base import BaseEndpoint


def _build_image_form(request: ImageEditRequest | ImageVariationRequest) -> aiohttp.FormData:
    form = aiohttp.FormData()
    for name, path in request.file_fields().items():
        form.add_field(name, path.read_bytes(), filename=path.name, content_type="image/png")
    for name, value in request.form_fields().items():
        form.add_field(name, value)
    return form


class ImagesEndpoint(BaseEndpoint):
    path = "images"

    @timed
    async def generate_image(self, request: ImageGenerationRequest) -> list[ImageResult]:
        """Create images from a text prompt."""
        result = await self._call(
            ImagesResponse,
            "POST",
            self._url("generations"),
            operation="generate_image",
            json_body=request.to_payload(),
        )
        return result.data

    @timed
    async def create_image_edit(self, request: ImageEditRequest) -> list[ImageResult]:
        """Edit an image given a prompt and an optional transparency mask."""
        result = await self._call(
            ImagesResponse,
            "POST",
            self._url("edits"),
            operation="create_image_edit",
            form=_build_image_form(request),
        )
        return result.data

    @timed
    async def create_image_variation(self, request: ImageVariationRequest) -> list[ImageResult]:
        result = await self._call(
            ImagesResponse,
            "POST",
            self._url("variations"),
            operation="create_image_variation",
            form=_build_image_form(request),
        )
        return result.data
