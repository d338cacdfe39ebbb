"""Text completion payloads."""

from __future__ import annotations

from typing import Optional, Union

from pydantic import Field, model_validator

from .common import ApiObject, BaseResponse, RequestBody, Usage
from .models import KnownModels


class CompletionRequest(RequestBody):
    model: str = KnownModels.DAVINCI
    prompt: Optional[Union[str, list[str]]] = None
    suffix: Optional[str] = None
    max_tokens: Optional[int] = Field(default=None, ge=1)
    temperature: Optional[float] = Field(default=None, ge=0, le=2)
    top_p: Optional[float] = Field(default=None, ge=0, le=1)
    n: Optional[int] = Field(default=None, ge=1)
    stream: Optional[bool] = None
    logprobs: Optional[int] = Field(default=None, ge=0, le=5)
    echo: Optional[bool] = None
    stop: Optional[Union[str, list[str]]] = None
    presence_penalty: Optional[float] = Field(default=None, ge=-2, le=2)
    frequency_penalty: Optional[float] = Field(default=None, ge=-2, le=2)
    best_of: Optional[int] = Field(default=None, ge=1)
    logit_bias: Optional[dict[str, int]] = None
    user: Optional[str] = None

    @model_validator(mode="after")
    def _check_stop(self) -> "CompletionRequest":
        if isinstance(self.stop, list) and len(self.stop) > 4:
            raise ValueError("stop accepts at most 4 sequences")
        return self


class Logprobs(ApiObject):
    tokens: list[str] = Field(default_factory=list)
    token_logprobs: list[Optional[float]] = Field(default_factory=list)
    top_logprobs: list[Optional[dict[str, float]]] = Field(default_factory=list)
    text_offset: list[int] = Field(default_factory=list)


class Choice(ApiObject):
    text: str = ""
    index: int = 0
    logprobs: Optional[Logprobs] = None
    finish_reason: Optional[str] = None

    def __str__(self) -> str:
        return self.text


class CompletionResult(BaseResponse):
    id: Optional[str] = None
    object: Optional[str] = None
    created: Optional[int] = None
    model: Optional[str] = None
    choices: list[Choice] = Field(default_factory=list)
    usage: Optional[Usage] = None

    @property
    def first_choice(self) -> Optional[Choice]:
        return self.choices[0] if self.choices else None

    def __str__(self) -> str:
        choice = self.first_choice
        return choice.text if choice is not None else ""
