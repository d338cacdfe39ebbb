"""Shared pydantic bases for request and response payloads."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

ORGANIZATION_HEADER = "openai-organization"
PROCESSING_TIME_HEADER = "openai-processing-ms"
REQUEST_ID_HEADER = "x-request-id"


class RequestBody(BaseModel):
    """Base for JSON request bodies. ``None`` fields are never serialized."""

    model_config = ConfigDict(populate_by_name=True)

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ApiObject(BaseModel):
    """Base for response payloads; unknown fields are kept, not rejected."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)


class BaseResponse(ApiObject):
    """Response that also records the request metadata headers."""

    organization: Optional[str] = Field(default=None, exclude=True)
    processing_time: Optional[float] = Field(default=None, exclude=True)
    request_id: Optional[str] = Field(default=None, exclude=True)

    def set_response_data(self, headers: Mapping[str, str]) -> None:
        lowered = {str(k).lower(): v for k, v in headers.items()}
        self.organization = lowered.get(ORGANIZATION_HEADER) or self.organization
        self.request_id = lowered.get(REQUEST_ID_HEADER) or self.request_id
        raw_ms = lowered.get(PROCESSING_TIME_HEADER)
        if raw_ms:
            try:
                self.processing_time = float(raw_ms)
            except ValueError:
                self.processing_time = None


class Usage(ApiObject):
    prompt_tokens: Optional[int] = None
    completion_tokens: Optional[int] = None
    total_tokens: Optional[int] = None
