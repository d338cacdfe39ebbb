"""Embedding payloads."""

from __future__ import annotations

from typing import Optional, Union

from pydantic import Field, field_validator

from .common import ApiObject, BaseResponse, RequestBody, Usage
from .models import KnownModels


class EmbeddingsRequest(RequestBody):
    model: str = KnownModels.EMBEDDING_ADA_002
    input: Union[str, list[str]]
    user: Optional[str] = None

    @field_validator("input")
    @classmethod
    def _check_input(cls, value: Union[str, list[str]]) -> Union[str, list[str]]:
        if isinstance(value, str):
            if not value.strip():
                raise ValueError("input must not be empty")
            return value
        if not value or not any(isinstance(item, str) and item.strip() for item in value):
            raise ValueError("input must contain at least one non-empty string")
        return value


class Datum(ApiObject):
    object: Optional[str] = None
    embedding: list[float] = Field(default_factory=list)
    index: int = 0


class EmbeddingsResponse(BaseResponse):
    object: Optional[str] = None
    data: list[Datum] = Field(default_factory=list)
    model: Optional[str] = None
    usage: Optional[Usage] = None
