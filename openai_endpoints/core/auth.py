"""API key and organization resolution.

Sources, in precedence order:

1. explicit constructor arguments
2. a :class:`ConfigurationSettings` object
3. a ``.openai`` dotfile (JSON or legacy ``KEY=value`` lines)
4. environment variables
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Mapping, Optional

from .config import ORGANIZATION_PREFIX, SECRET_KEY_PREFIX, ConfigurationSettings
from .errors import OpenAIAuthenticationError

DEFAULT_AUTH_FILENAME = ".openai"

_ENV_API_KEY_NAMES = ("OPENAI_API_KEY", "OPENAI_KEY", "OPENAI_SECRET_KEY", "TEST_OPENAI_SECRETKEY")
_ENV_ORGANIZATION_NAMES = ("OPENAI_ORGANIZATION_ID",)
_FILE_API_KEY_NAMES = ("OPENAI_KEY", "OPENAI_API_KEY", "OPENAI_SECRET_KEY", "TEST_OPENAI_SECRETKEY")
_FILE_ORGANIZATION_NAMES = ("OPENAI_ORGANIZATION_ID", "OPENAI_ORGANIZATION", "ORGANIZATION")
_JSON_API_KEY_NAMES = ("apiKey", "api_key", "API_KEY")
_JSON_ORGANIZATION_NAMES = ("organization", "organizationId", "organization_id", "ORGANIZATION_ID")


def _first_value(source: Mapping[str, object], names: tuple[str, ...]) -> Optional[str]:
    for name in names:
        value = source.get(name)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def _parse_legacy_lines(text: str) -> dict[str, str]:
    values: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, _, value = line.partition("=")
        values[key.strip()] = value.strip().strip('"').strip("'")
    return values


class OpenAIAuthentication:
    """Bearer credentials for the API."""

    def __init__(self, api_key: str, organization: Optional[str] = None) -> None:
        api_key = (api_key or "").strip()
        if not api_key.startswith(SECRET_KEY_PREFIX):
            raise OpenAIAuthenticationError(f"api_key must start with '{SECRET_KEY_PREFIX}'")
        organization = (organization or "").strip() or None
        if organization is not None and not organization.startswith(ORGANIZATION_PREFIX):
            raise OpenAIAuthenticationError(f"organization must start with '{ORGANIZATION_PREFIX}'")
        self.api_key = api_key
        self.organization = organization

    def __repr__(self) -> str:
        # Never echo the key itself.
        return f"OpenAIAuthentication(api_key='{SECRET_KEY_PREFIX}***', organization={self.organization!r})"

    def headers(self) -> dict[str, str]:
        headers = {"Authorization": f"Bearer {self.api_key}"}
        if self.organization:
            headers["OpenAI-Organization"] = self.organization
        return headers

    # ------------------------------------------------------------------
    # Sources
    # ------------------------------------------------------------------

    @classmethod
    def load_from_configuration(
        cls, configuration: Optional[ConfigurationSettings]
    ) -> Optional["OpenAIAuthentication"]:
        if configuration is None or not configuration.API_KEY:
            return None
        return cls(configuration.API_KEY, configuration.ORGANIZATION_ID)

    @classmethod
    def load_from_file(cls, path: str | Path) -> Optional["OpenAIAuthentication"]:
        """Load credentials from a JSON or legacy ``KEY=value`` dotfile."""
        file_path = Path(path)
        if not file_path.is_file():
            return None
        text = file_path.read_text(encoding="utf-8")
        api_key: Optional[str] = None
        organization: Optional[str] = None
        stripped = text.strip()
        if stripped.startswith("{"):
            try:
                parsed = json.loads(stripped)
            except ValueError as exc:
                raise OpenAIAuthenticationError(f"Malformed credentials file: {file_path}") from exc
            if isinstance(parsed, dict):
                api_key = _first_value(parsed, _JSON_API_KEY_NAMES)
                organization = _first_value(parsed, _JSON_ORGANIZATION_NAMES)
        else:
            values = _parse_legacy_lines(text)
            api_key = _first_value(values, _FILE_API_KEY_NAMES)
            organization = _first_value(values, _FILE_ORGANIZATION_NAMES)
        if not api_key:
            return None
        return cls(api_key, organization)

    @classmethod
    def load_from_directory(
        cls,
        directory: str | Path | None = None,
        filename: str = DEFAULT_AUTH_FILENAME,
    ) -> Optional["OpenAIAuthentication"]:
        """Load the dotfile from ``directory`` (current working directory by default)."""
        base = Path(directory) if directory is not None else Path.cwd()
        return cls.load_from_file(base / filename)

    @classmethod
    def load_from_env(
        cls, environ: Optional[Mapping[str, str]] = None
    ) -> Optional["OpenAIAuthentication"]:
        env = os.environ if environ is None else environ
        api_key = _first_value(env, _ENV_API_KEY_NAMES)
        if not api_key:
            return None
        return cls(api_key, _first_value(env, _ENV_ORGANIZATION_NAMES))

    @classmethod
    def resolve(
        cls,
        api_key: Optional[str] = None,
        organization: Optional[str] = None,
        configuration: Optional[ConfigurationSettings] = None,
        directory: str | Path | None = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "OpenAIAuthentication":
        """Return the first credentials found, following the documented precedence."""
        if api_key:
            return cls(api_key, organization)
        auth = (
            cls.load_from_configuration(configuration)
            or cls.load_from_directory(directory)
            or cls.load_from_env(environ)
        )
        if auth is None:
            raise OpenAIAuthenticationError(
                "No API key found. Pass one explicitly, provide ConfigurationSettings, "
                f"create a {DEFAULT_AUTH_FILENAME} file, or set OPENAI_API_KEY."
            )
        if organization:
            auth = cls(auth.api_key, organization)
        return auth
