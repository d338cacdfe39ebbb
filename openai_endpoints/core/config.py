"""Client configuration models.

Two settings objects exist:

- ``ClientSettings`` describes *where* and *how* requests are sent
  (base URL, timeouts, retry knobs, timing log).
- ``ConfigurationSettings`` is the local credentials object an application can
  persist and hand to :class:`~openai_endpoints.core.auth.OpenAIAuthentication`.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator

LOGGER = logging.getLogger("openai_endpoints")

DEFAULT_DOMAIN = "api.openai.com"
DEFAULT_API_VERSION = "v1"
SECRET_KEY_PREFIX = "sk-"
ORGANIZATION_PREFIX = "org-"


class ClientSettings(BaseModel):
    """Transport settings shared by every endpoint of a client."""

    DOMAIN: str = Field(
        default=DEFAULT_DOMAIN,
        description="API host. May include a scheme (e.g. http://localhost:8080) for proxies.",
    )
    API_VERSION: str = Field(
        default=DEFAULT_API_VERSION,
        description="Version path segment appended to the domain.",
    )
    HTTP_CONNECT_TIMEOUT_SECONDS: float = Field(
        default=10.0,
        gt=0,
        description="Seconds allowed to establish a connection.",
    )
    HTTP_TOTAL_TIMEOUT_SECONDS: Optional[float] = Field(
        default=600.0,
        description="Overall request timeout. None disables it (use for long event streams).",
    )
    HTTP_SOCK_READ_SECONDS: float = Field(
        default=300.0,
        gt=0,
        description="Idle read timeout. Always applied to streamed bodies; applied to plain requests only when the total timeout is disabled.",
    )
    FILE_DELETE_RETRY_DELAY_SECONDS: float = Field(
        default=1.0,
        ge=0,
        description="Base delay between file deletion retries; attempt N waits N times this.",
    )
    FILE_DELETE_MAX_ATTEMPTS: int = Field(
        default=10,
        ge=1,
        description="Upper bound on file deletion attempts while the file is still processing.",
    )
    FINE_TUNE_POLL_INTERVAL_SECONDS: float = Field(
        default=30.0,
        ge=0,
        description="Default delay between fine-tune job status polls.",
    )
    USER_AGENT: str = Field(
        default="openai-endpoints",
        description="User-Agent header sent with every request.",
    )
    ENABLE_TIMING_LOG: bool = Field(
        default=False,
        description="Write per-call timing records to TIMING_LOG_FILE.",
    )
    TIMING_LOG_FILE: str = Field(
        default="openai_endpoints_timing.log",
        description="Destination for timing records when ENABLE_TIMING_LOG is set.",
    )

    @property
    def base_url(self) -> str:
        domain = self.DOMAIN.strip().rstrip("/")
        if "://" not in domain:
            domain = f"https://{domain}"
        version = self.API_VERSION.strip().strip("/")
        if not version:
            return f"{domain}/"
        return f"{domain}/{version}/"


class ConfigurationSettings(BaseModel):
    """Locally stored credentials."""

    API_KEY: Optional[str] = Field(
        default=None,
        description="Secret API key (starts with 'sk-').",
    )
    ORGANIZATION_ID: Optional[str] = Field(
        default=None,
        description="Optional organization id (starts with 'org-').",
    )

    @field_validator("API_KEY")
    @classmethod
    def _check_api_key(cls, value: Optional[str]) -> Optional[str]:
        value = (value or "").strip() or None
        if value and not value.startswith(SECRET_KEY_PREFIX):
            raise ValueError(f"API_KEY must start with '{SECRET_KEY_PREFIX}'")
        return value

    @field_validator("ORGANIZATION_ID")
    @classmethod
    def _check_organization(cls, value: Optional[str]) -> Optional[str]:
        value = (value or "").strip() or None
        if value and not value.startswith(ORGANIZATION_PREFIX):
            raise ValueError(f"ORGANIZATION_ID must start with '{ORGANIZATION_PREFIX}'")
        return value

    @classmethod
    def load(cls, path: str | Path) -> "ConfigurationSettings":
        """Read settings from a JSON file holding API_KEY / ORGANIZATION_ID."""
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
        return cls.model_validate(raw)
