"""File storage payloads."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, model_validator

from .common import ApiObject

FINE_TUNE_PURPOSE = "fine-tune"


class FileData(ApiObject):
    id: str
    object: Optional[str] = None
    size: Optional[int] = Field(default=None, alias="bytes")
    created_at: Optional[int] = None
    filename: Optional[str] = None
    purpose: Optional[str] = None
    status: Optional[str] = None
    status_details: Optional[Any] = None


class FilesList(ApiObject):
    data: list[FileData] = Field(default_factory=list)


class FileDeleteResponse(ApiObject):
    id: Optional[str] = None
    object: Optional[str] = None
    deleted: bool = False


class FileUploadRequest(BaseModel):
    """A document to upload, given as a path or in-memory bytes.

    If the purpose is ``fine-tune``, each line of the file is a JSON record
    with ``prompt`` and ``completion`` fields.
    """

    file_path: Optional[Path] = None
    content: Optional[bytes] = None
    file_name: Optional[str] = None
    purpose: str = FINE_TUNE_PURPOSE

    @model_validator(mode="after")
    def _check_source(self) -> "FileUploadRequest":
        if self.file_path is None and self.content is None:
            raise ValueError("Either file_path or content is required")
        if self.file_path is not None and self.content is None and not self.file_path.is_file():
            raise ValueError(f"File not found: {self.file_path}")
        if not self.file_name:
            if self.file_path is None:
                raise ValueError("file_name is required when uploading raw content")
            self.file_name = self.file_path.name
        if not self.purpose.strip():
            raise ValueError("purpose is required")
        return self

    def read_bytes(self) -> bytes:
        if self.content is not None:
            return self.content
        if self.file_path is None:
            raise ValueError("FileUploadRequest has neither content nor file_path")
        return self.file_path.read_bytes()
