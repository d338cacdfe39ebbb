"""Upload, inspect, download and delete stored files (used by fine-tuning).

<https://platform.openai.com/docs/api-reference/files>
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Callable, Optional

import aiohttp
from tenacity import AsyncRetrying, RetryCallState, retry_if_exception_type, stop_after_attempt, wait_incrementing

from ..core.errors import FileStillProcessingError
from ..core.timing_logger import timed
from ..types.files import FINE_TUNE_PURPOSE, FileData, FileDeleteResponse, FilesList, FileUploadRequest
from .base import BaseEndpoint


class FilesEndpoint(BaseEndpoint):
    path = "files"

    def __init__(self, client) -> None:
        super().__init__(client)
        self._sleep = asyncio.sleep

    @timed
    async def list_files(self) -> list[FileData]:
        """Return the files that belong to the organization."""
        result = await self._call(FilesList, "GET", self.endpoint, operation="list_files")
        return result.data

    @timed
    async def upload_file(
        self,
        file: str | Path | FileUploadRequest,
        purpose: str = FINE_TUNE_PURPOSE,
    ) -> FileData:
        """Upload a document for use across the API (fine-tune training data, etc.).

        Args:
            file: Local path, or a prepared :class:`FileUploadRequest`.
            purpose: Intended use of the document; ignored when ``file`` is a request.
        """
        if isinstance(file, FileUploadRequest):
            request = file
        else:
            request = FileUploadRequest(file_path=Path(file), purpose=purpose)
        form = aiohttp.FormData()
        form.add_field("purpose", request.purpose)
        form.add_field(
            "file",
            request.read_bytes(),
            filename=request.file_name,
            content_type="application/octet-stream",
        )
        return await self._call(FileData, "POST", self.endpoint, operation="upload_file", form=form)

    def _log_delete_retry(self, retry_state: RetryCallState) -> None:
        next_sleep = retry_state.next_action.sleep if retry_state.next_action else 0.0
        self.logger.info(
            "File still processing; retrying delete (attempt %s, waiting %.1fs)",
            retry_state.attempt_number + 1,
            next_sleep,
        )

    @timed
    async def delete_file(self, file_id: str) -> bool:
        """Delete a file.

        While the provider reports the file as still processing, the delete is
        retried after ``attempt * FILE_DELETE_RETRY_DELAY_SECONDS``. Any other
        failure is raised immediately.

        Returns:
            True if the file was deleted.
        """
        settings = self._client.settings
        delay = settings.FILE_DELETE_RETRY_DELAY_SECONDS
        url = self._url(file_id)
        result: Optional[FileDeleteResponse] = None
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(settings.FILE_DELETE_MAX_ATTEMPTS),
            wait=wait_incrementing(start=delay, increment=delay),
            retry=retry_if_exception_type(FileStillProcessingError),
            before_sleep=self._log_delete_retry,
            sleep=self._sleep,
            reraise=True,
        ):
            with attempt:
                result = await self._call(FileDeleteResponse, "DELETE", url, operation="delete_file")
        return bool(result and result.deleted)

    @timed
    async def retrieve_file(self, file_id: str) -> FileData:
        """Return metadata for one file."""
        return await self._call(FileData, "GET", self._url(file_id), operation="retrieve_file")

    @timed
    async def download_file(
        self,
        file_id: str,
        directory: str | Path | None = None,
        progress: Optional[Callable[[float], None]] = None,
    ) -> str:
        """Download a file's content into ``directory`` (cwd by default).

        Returns:
            Path of the written file.
        """
        file_data = await self.retrieve_file(file_id)
        target_dir = Path(directory) if directory is not None else Path.cwd()
        file_name = Path(file_data.filename or file_data.id).name
        destination = await self._client.download(
            self._url(file_data.id, "content"),
            target_dir / file_name,
            progress=progress,
            operation="download_file",
        )
        return str(destination)
