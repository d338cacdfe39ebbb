"""Moderation payloads."""

from __future__ import annotations

from typing import Optional, Union

from pydantic import Field

from .common import ApiObject, BaseResponse, RequestBody


class ModerationsRequest(RequestBody):
    input: Union[str, list[str]]
    model: Optional[str] = None


class Categories(ApiObject):
    hate: bool = False
    hate_threatening: bool = Field(default=False, alias="hate/threatening")
    self_harm: bool = Field(default=False, alias="self-harm")
    sexual: bool = False
    sexual_minors: bool = Field(default=False, alias="sexual/minors")
    violence: bool = False
    violence_graphic: bool = Field(default=False, alias="violence/graphic")


class CategoryScores(ApiObject):
    hate: float = 0.0
    hate_threatening: float = Field(default=0.0, alias="hate/threatening")
    self_harm: float = Field(default=0.0, alias="self-harm")
    sexual: float = 0.0
    sexual_minors: float = Field(default=0.0, alias="sexual/minors")
    violence: float = 0.0
    violence_graphic: float = Field(default=0.0, alias="violence/graphic")


class ModerationResult(ApiObject):
    categories: Categories = Field(default_factory=Categories)
    category_scores: CategoryScores = Field(default_factory=CategoryScores)
    flagged: bool = False


class ModerationsResponse(BaseResponse):
    id: Optional[str] = None
    model: Optional[str] = None
    results: list[ModerationResult] = Field(default_factory=list)

    @property
    def flagged(self) -> bool:
        return any(result.flagged for result in self.results)
