"""Async client for the OpenAI REST API.

Exposes the models, files, fine-tunes, completions, edits, embeddings,
images and moderations endpoints as typed methods on :class:`OpenAIClient`.
"""

from __future__ import annotations

from .client import ApiResponse, OpenAIClient
from .core.auth import OpenAIAuthentication
from .core.config import ClientSettings, ConfigurationSettings
from .core.errors import (
    FileStillProcessingError,
    FineTuneCancellationError,
    OpenAIAuthenticationError,
    OpenAIError,
    OpenAIRequestError,
)

__all__ = [
    "ApiResponse",
    "OpenAIClient",
    "OpenAIAuthentication",
    "ClientSettings",
    "ConfigurationSettings",
    "OpenAIError",
    "OpenAIAuthenticationError",
    "OpenAIRequestError",
    "FileStillProcessingError",
    "FineTuneCancellationError",
]
