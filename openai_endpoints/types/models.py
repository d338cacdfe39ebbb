"""Model catalog payloads."""

from __future__ import annotations

from typing import Optional

from pydantic import Field

from .common import ApiObject


class KnownModels:
    """Model ids commonly passed to the endpoints."""

    GPT_3_5_TURBO = "gpt-3.5-turbo"
    GPT_4 = "gpt-4"
    DAVINCI = "text-davinci-003"
    CURIE = "text-curie-001"
    BABBAGE = "text-babbage-001"
    ADA = "text-ada-001"
    DAVINCI_EDIT = "text-davinci-edit-001"
    EMBEDDING_ADA_002 = "text-embedding-ada-002"
    MODERATION_LATEST = "text-moderation-latest"
    MODERATION_STABLE = "text-moderation-stable"


class Permission(ApiObject):
    id: str
    object: Optional[str] = None
    created: Optional[int] = None
    allow_create_engine: Optional[bool] = None
    allow_sampling: Optional[bool] = None
    allow_logprobs: Optional[bool] = None
    allow_search_indices: Optional[bool] = None
    allow_view: Optional[bool] = None
    allow_fine_tuning: Optional[bool] = None
    organization: Optional[str] = None
    group: Optional[str] = None
    is_blocking: Optional[bool] = None


class Model(ApiObject):
    id: str
    object: Optional[str] = None
    created: Optional[int] = None
    owned_by: Optional[str] = None
    permission: list[Permission] = Field(default_factory=list)
    root: Optional[str] = None
    parent: Optional[str] = None

    def __str__(self) -> str:
        return self.id


class ModelsList(ApiObject):
    data: list[Model] = Field(default_factory=list)


class DeleteModelResponse(ApiObject):
    id: Optional[str] = None
    object: Optional[str] = None
    deleted: bool = False
