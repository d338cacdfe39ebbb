"""OpenAIClient: shared HTTP session plus the endpoint wrappers.

The client owns:
- credentials (OpenAIAuthentication) and transport settings (ClientSettings)
- one lazily created aiohttp.ClientSession shared by every endpoint
- the request helpers endpoints use: ``request``, ``stream_lines``, ``download``

Each endpoint wrapper (models, files, fine_tuning, ...) only builds URLs,
serializes request bodies and validates responses into typed results.
"""

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, AsyncIterator, Callable, Optional

import aiohttp

from .api.completions import CompletionsEndpoint
from .api.edits import EditsEndpoint
from .api.embeddings import EmbeddingsEndpoint
from .api.files import FilesEndpoint
from .api.fine_tuning import FineTuningEndpoint
from .api.images import ImagesEndpoint
from .api.models import ModelsEndpoint
from .api.moderations import ModerationsEndpoint
from .core.auth import OpenAIAuthentication
from .core.config import LOGGER, ClientSettings
from .core.errors import build_request_error
from .core.timing_logger import configure_timing_file, timed
from .streaming.constants import DOWNLOAD_CHUNK_BYTES

ProgressCallback = Callable[[float], None]


@dataclass(slots=True)
class ApiResponse:
    """Fully read HTTP response."""

    status: int
    text: str
    reason: Optional[str] = None
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def json(self) -> Any:
        return json.loads(self.text) if self.text else None


class OpenAIClient:
    """Entry point for the REST API.

    Usage::

        async with OpenAIClient() as client:
            models = await client.models.list_models()
    """

    def __init__(
        self,
        authentication: Optional[OpenAIAuthentication] = None,
        settings: Optional[ClientSettings] = None,
        *,
        session: Optional[aiohttp.ClientSession] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.authentication = authentication or OpenAIAuthentication.resolve()
        self.settings = settings or ClientSettings()
        self.logger = logger or LOGGER

        self._http_session: Optional[aiohttp.ClientSession] = session
        self._owns_session = session is None
        self._session_lock: Optional[asyncio.Lock] = None

        self.models = ModelsEndpoint(self)
        self.files = FilesEndpoint(self)
        self.fine_tuning = FineTuningEndpoint(self)
        self.completions = CompletionsEndpoint(self)
        self.edits = EditsEndpoint(self)
        self.embeddings = EmbeddingsEndpoint(self)
        self.images = ImagesEndpoint(self)
        self.moderations = ModerationsEndpoint(self)

        if self.settings.ENABLE_TIMING_LOG:
            file_path = self.settings.TIMING_LOG_FILE
            if configure_timing_file(file_path):
                self.logger.info("Timing log enabled: %s", file_path)
            else:
                self.logger.warning("Failed to open timing log file: %s", file_path)

        self.logger.debug("OpenAIClient initialized (base_url=%s)", self.base_url)

    # =============================================================================
    # LIFECYCLE
    # =============================================================================

    async def __aenter__(self) -> "OpenAIClient":
        await self._ensure_session()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP session if this client created it."""
        session = self._http_session
        if session is None or not self._owns_session:
            return
        self._http_session = None
        if not session.closed:
            await session.close()

    @property
    def base_url(self) -> str:
        return self.settings.base_url

    def default_headers(self) -> dict[str, str]:
        headers = self.authentication.headers()
        headers["User-Agent"] = self.settings.USER_AGENT
        return headers

    def _stream_timeout(self) -> aiohttp.ClientTimeout:
        """Per-request timeout for long-lived bodies: no total cap, idle reads still bounded."""
        return aiohttp.ClientTimeout(
            total=None,
            connect=float(self.settings.HTTP_CONNECT_TIMEOUT_SECONDS),
            sock_read=float(self.settings.HTTP_SOCK_READ_SECONDS),
        )

    def _create_http_session(self) -> aiohttp.ClientSession:
        """Return a ClientSession with timeouts taken from the settings."""
        settings = self.settings
        connector = aiohttp.TCPConnector(
            limit=50,
            limit_per_host=10,
            keepalive_timeout=75,
            ttl_dns_cache=300,
        )
        connect_timeout = float(settings.HTTP_CONNECT_TIMEOUT_SECONDS)
        total_timeout_value = settings.HTTP_TOTAL_TIMEOUT_SECONDS
        total_timeout = float(total_timeout_value) if total_timeout_value else None
        sock_read = float(settings.HTTP_SOCK_READ_SECONDS) if total_timeout is None else None
        timeout = aiohttp.ClientTimeout(total=total_timeout, connect=connect_timeout, sock_read=sock_read)
        self.logger.debug(
            "HTTP timeouts: connect=%ss total=%s sock_read=%s",
            connect_timeout,
            total_timeout if total_timeout is not None else "disabled",
            sock_read if sock_read is not None else "disabled",
        )
        return aiohttp.ClientSession(
            connector=connector,
            timeout=timeout,
            json_serialize=json.dumps,
        )

    async def _ensure_session(self) -> aiohttp.ClientSession:
        if self._http_session is not None and not self._http_session.closed:
            return self._http_session
        if self._session_lock is None:
            self._session_lock = asyncio.Lock()
        async with self._session_lock:
            if self._http_session is None or self._http_session.closed:
                self._http_session = self._create_http_session()
                self._owns_session = True
        return self._http_session

    # =============================================================================
    # REQUEST HELPERS
    # =============================================================================

    @timed
    async def request(
        self,
        method: str,
        url: str,
        *,
        json_body: Optional[dict[str, Any]] = None,
        form: Optional[aiohttp.FormData] = None,
        operation: Optional[str] = None,
        check: bool = True,
    ) -> ApiResponse:
        """Send one request and read the whole body.

        Raises:
            OpenAIRequestError: when ``check`` is set and the status is not 2xx.
        """
        session = await self._ensure_session()
        async with session.request(
            method,
            url,
            json=json_body,
            data=form,
            headers=self.default_headers(),
        ) as resp:
            text = await resp.text()
            result = ApiResponse(
                status=resp.status,
                text=text,
                reason=resp.reason,
                headers=dict(resp.headers),
            )
        self.logger.debug("%s %s -> %s", method, url, result.status)
        if check and not result.ok:
            raise build_request_error(
                operation=operation or f"{method} {url}",
                status=result.status,
                reason=result.reason,
                body_text=result.text,
                method=method,
                url=url,
            )
        return result

    async def stream_lines(
        self,
        method: str,
        url: str,
        *,
        json_body: Optional[dict[str, Any]] = None,
        operation: Optional[str] = None,
    ) -> AsyncIterator[str]:
        """Yield decoded response lines as they arrive.

        The status is checked before the first line is yielded. The session's
        total timeout does not apply; only connect and idle-read limits do.
        """
        session = await self._ensure_session()
        async with session.request(
            method,
            url,
            json=json_body,
            headers=self.default_headers(),
            timeout=self._stream_timeout(),
        ) as resp:
            self.logger.debug("%s %s -> %s (stream)", method, url, resp.status)
            if resp.status >= 400:
                body_text = await resp.text()
                raise build_request_error(
                    operation=operation or f"{method} {url}",
                    status=resp.status,
                    reason=resp.reason,
                    body_text=body_text,
                    method=method,
                    url=url,
                )
            async for raw_line in resp.content:
                yield raw_line.decode("utf-8", errors="replace")

    @timed
    async def download(
        self,
        url: str,
        destination: Path,
        *,
        progress: Optional[ProgressCallback] = None,
        operation: Optional[str] = None,
    ) -> Path:
        """Stream ``url`` into ``destination``; ``progress`` receives values in [0, 1].

        Content is written to ``<destination>.part`` and renamed on success, so
        a failed transfer never leaves a truncated ``destination`` behind.
        """
        session = await self._ensure_session()
        destination.parent.mkdir(parents=True, exist_ok=True)
        partial = destination.with_name(f"{destination.name}.part")
        async with session.get(url, headers=self.default_headers(), timeout=self._stream_timeout()) as resp:
            self.logger.debug("GET %s -> %s (download)", url, resp.status)
            if resp.status >= 400:
                body_text = await resp.text()
                raise build_request_error(
                    operation=operation or f"GET {url}",
                    status=resp.status,
                    reason=resp.reason,
                    body_text=body_text,
                    method="GET",
                    url=url,
                )
            total = resp.content_length
            received = 0
            try:
                with partial.open("wb") as handle:
                    async for chunk in resp.content.iter_chunked(DOWNLOAD_CHUNK_BYTES):
                        handle.write(chunk)
                        received += len(chunk)
                        if progress is not None and total:
                            progress(min(received / total, 1.0))
            except BaseException:
                partial.unlink(missing_ok=True)
                self.logger.warning("Download of %s failed after %d bytes", url, received)
                raise
        partial.replace(destination)
        if progress is not None:
            progress(1.0)
        return destination
