"""Core subsystem.

Shared plumbing used by every endpoint:
- config: ClientSettings / ConfigurationSettings (pydantic)
- auth: API key and organization resolution
- errors: exception hierarchy and error-body parsing
- timing_logger: @timed call instrumentation
"""

from __future__ import annotations

from .auth import OpenAIAuthentication
from .config import ClientSettings, ConfigurationSettings
from .errors import (
    FileStillProcessingError,
    FineTuneCancellationError,
    OpenAIAuthenticationError,
    OpenAIError,
    OpenAIRequestError,
)

__all__ = [
    "OpenAIAuthentication",
    "ClientSettings",
    "ConfigurationSettings",
    "OpenAIError",
    "OpenAIAuthenticationError",
    "OpenAIRequestError",
    "FileStillProcessingError",
    "FineTuneCancellationError",
]
