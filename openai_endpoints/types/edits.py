"""Edit payloads."""

from __future__ import annotations

from typing import Optional

from pydantic import Field

from .common import BaseResponse, RequestBody, Usage
from .completions import Choice
from .models import KnownModels


class EditRequest(RequestBody):
    """Instruction-driven edit of ``input`` (empty input means "write from scratch")."""

    model: str = KnownModels.DAVINCI_EDIT
    input: Optional[str] = None
    instruction: str = Field(min_length=1)
    n: Optional[int] = Field(default=None, ge=1)
    temperature: Optional[float] = Field(default=None, ge=0, le=2)
    top_p: Optional[float] = Field(default=None, ge=0, le=1)


class EditResponse(BaseResponse):
    object: Optional[str] = None
    created: Optional[int] = None
    choices: list[Choice] = Field(default_factory=list)
    usage: Optional[Usage] = None

    def __str__(self) -> str:
        return self.choices[0].text if self.choices else ""
