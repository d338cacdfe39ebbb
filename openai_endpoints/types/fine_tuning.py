"""Fine-tune job payloads."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from .common import ApiObject, BaseResponse, RequestBody
from .files import FileData

TERMINAL_JOB_STATUSES = frozenset({"succeeded", "failed", "cancelled"})
CANCELLED_STATUS = "cancelled"


def _to_datetime(unix_seconds: Optional[int]) -> Optional[datetime]:
    if unix_seconds is None:
        return None
    return datetime.fromtimestamp(unix_seconds, tz=timezone.utc)


class CreateFineTuneJobRequest(RequestBody):
    training_file: str = Field(min_length=1)
    validation_file: Optional[str] = None
    model: Optional[str] = None
    n_epochs: Optional[int] = Field(default=None, ge=1)
    batch_size: Optional[int] = Field(default=None, ge=1)
    learning_rate_multiplier: Optional[float] = Field(default=None, gt=0)
    prompt_loss_weight: Optional[float] = Field(default=None, ge=0)
    compute_classification_metrics: Optional[bool] = None
    classification_n_classes: Optional[int] = None
    classification_positive_class: Optional[str] = None
    classification_betas: Optional[list[float]] = None
    suffix: Optional[str] = Field(default=None, max_length=40)


class Event(ApiObject):
    object: Optional[str] = None
    created_at: int = 0
    level: Optional[str] = None
    message: Optional[str] = None

    @property
    def created(self) -> Optional[datetime]:
        return _to_datetime(self.created_at)


class HyperParams(ApiObject):
    batch_size: Optional[int] = None
    learning_rate_multiplier: Optional[float] = None
    n_epochs: Optional[int] = None
    prompt_loss_weight: Optional[float] = None


class FineTuneJob(BaseResponse):
    id: str
    object: Optional[str] = None
    model: Optional[str] = None
    created_at: int = 0
    updated_at: Optional[int] = None
    events: list[Event] = Field(default_factory=list)
    fine_tuned_model: Optional[str] = None
    hyperparams: Optional[HyperParams] = None
    organization_id: Optional[str] = None
    result_files: list[FileData] = Field(default_factory=list)
    status: Optional[str] = None
    validation_files: list[FileData] = Field(default_factory=list)
    training_files: list[FileData] = Field(default_factory=list)

    @property
    def created(self) -> Optional[datetime]:
        return _to_datetime(self.created_at)

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_JOB_STATUSES


class FineTuneList(ApiObject):
    object: Optional[str] = None
    data: list[FineTuneJob] = Field(default_factory=list)


class FineTuneEventList(ApiObject):
    object: Optional[str] = None
    data: list[Event] = Field(default_factory=list)
