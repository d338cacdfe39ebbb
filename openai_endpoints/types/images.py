"""Image generation, edit and variation payloads."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from .common import ApiObject, BaseResponse, RequestBody

MAX_PROMPT_LENGTH = 1000


class ImageSize(str, Enum):
    SMALL = "256x256"
    MEDIUM = "512x512"
    LARGE = "1024x1024"


class ResponseFormat(str, Enum):
    URL = "url"
    B64_JSON = "b64_json"


class ImageGenerationRequest(RequestBody):
    prompt: str = Field(min_length=1, max_length=MAX_PROMPT_LENGTH)
    n: int = Field(default=1, ge=1, le=10)
    size: ImageSize = ImageSize.LARGE
    response_format: ResponseFormat = ResponseFormat.URL
    user: Optional[str] = None


def _existing_file(value: Optional[Path]) -> Optional[Path]:
    if value is not None and not Path(value).is_file():
        raise ValueError(f"File not found: {value}")
    return value


class _MultipartImageRequest(BaseModel):
    image: Path
    n: int = Field(default=1, ge=1, le=10)
    size: ImageSize = ImageSize.LARGE
    response_format: ResponseFormat = ResponseFormat.URL
    user: Optional[str] = None

    @field_validator("image")
    @classmethod
    def _check_image(cls, value: Path) -> Path:
        return _existing_file(value)  # type: ignore[return-value]

    def form_fields(self) -> dict[str, str]:
        """Non-file form fields, stringified for multipart encoding."""
        raw: dict[str, Any] = self.model_dump(mode="json", exclude={"image", "mask"}, exclude_none=True)
        return {key: str(value) for key, value in raw.items()}

    def file_fields(self) -> dict[str, Path]:
        return {"image": self.image}


class ImageEditRequest(_MultipartImageRequest):
    """Edit ``image`` where ``mask`` (or the image's own alpha) is transparent."""

    prompt: str = Field(min_length=1, max_length=MAX_PROMPT_LENGTH)
    mask: Optional[Path] = None

    @field_validator("mask")
    @classmethod
    def _check_mask(cls, value: Optional[Path]) -> Optional[Path]:
        return _existing_file(value)

    def file_fields(self) -> dict[str, Path]:
        files = super().file_fields()
        if self.mask is not None:
            files["mask"] = self.mask
        return files


class ImageVariationRequest(_MultipartImageRequest):
    pass


class ImageResult(ApiObject):
    url: Optional[str] = None
    b64_json: Optional[str] = None

    def __str__(self) -> str:
        return self.url or self.b64_json or ""


class ImagesResponse(BaseResponse):
    created: Optional[int] = None
    data: list[ImageResult] = Field(default_factory=list)
