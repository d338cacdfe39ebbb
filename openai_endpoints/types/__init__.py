"""Typed request and response payloads, one module per endpoint."""

from __future__ import annotations

from .common import BaseResponse, Usage
from .completions import Choice, CompletionRequest, CompletionResult, Logprobs
from .edits import EditRequest, EditResponse
from .embeddings import Datum, EmbeddingsRequest, EmbeddingsResponse
from .files import FileData, FileUploadRequest
from .fine_tuning import CreateFineTuneJobRequest, Event, FineTuneJob, HyperParams
from .images import (
    ImageEditRequest,
    ImageGenerationRequest,
    ImageResult,
    ImageSize,
    ImagesResponse,
    ImageVariationRequest,
    ResponseFormat,
)
from .models import KnownModels, Model, Permission
from .moderations import Categories, CategoryScores, ModerationResult, ModerationsRequest, ModerationsResponse

__all__ = [
    "BaseResponse",
    "Usage",
    "Choice",
    "CompletionRequest",
    "CompletionResult",
    "Logprobs",
    "EditRequest",
    "EditResponse",
    "Datum",
    "EmbeddingsRequest",
    "EmbeddingsResponse",
    "FileData",
    "FileUploadRequest",
    "CreateFineTuneJobRequest",
    "Event",
    "FineTuneJob",
    "HyperParams",
    "ImageEditRequest",
    "ImageGenerationRequest",
    "ImageResult",
    "ImageSize",
    "ImagesResponse",
    "ImageVariationRequest",
    "ResponseFormat",
    "KnownModels",
    "Model",
    "Permission",
    "Categories",
    "CategoryScores",
    "ModerationResult",
    "ModerationsRequest",
    "ModerationsResponse",
]
