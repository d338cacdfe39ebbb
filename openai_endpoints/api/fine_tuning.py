"""Manage fine-tuning jobs that tailor a model to your training data.

<https://platform.openai.com/docs/api-reference/fine-tunes>

Job progress can be observed three ways:
- ``list_fine_tune_events``: one-shot snapshot of the event log
- ``stream_fine_tune_events`` / ``iter_fine_tune_events``: live ``data:`` feed
  ending with ``[DONE]``
- ``wait_for_fine_tune_job``: status polling until a terminal state

If a live feed is interrupted (``cancel_event`` set, or the awaiting task
cancelled) the job itself is cancelled as well, and
:class:`FineTuneCancellationError` is raised when that cancel does not succeed.
"""

from __future__ import annotations

import asyncio
import contextlib
from typing import Any, AsyncIterator, Awaitable, Callable, Optional, Union

from pydantic import ValidationError

from ..core.errors import FineTuneCancellationError
from ..core.timing_logger import timed
from ..core.utils import _await_if_needed
from ..streaming.sse_parser import iter_sse_payloads
from ..types.fine_tuning import (
    CANCELLED_STATUS,
    CreateFineTuneJobRequest,
    Event,
    FineTuneEventList,
    FineTuneJob,
    FineTuneList,
)
from .base import BaseEndpoint

EventCallback = Callable[[Event], Union[None, Awaitable[None]]]
JobCallback = Callable[[FineTuneJob], Union[None, Awaitable[None]]]


class FineTuningEndpoint(BaseEndpoint):
    path = "fine-tunes"

    @timed
    async def create_fine_tune_job(self, request: CreateFineTuneJobRequest) -> FineTuneJob:
        """Enqueue a job that fine-tunes ``request.model`` on ``request.training_file``."""
        return await self._call(
            FineTuneJob,
            "POST",
            self.endpoint,
            operation="create_fine_tune_job",
            json_body=request.to_payload(),
        )

    @timed
    async def list_fine_tune_jobs(self) -> list[FineTuneJob]:
        """List the organization's jobs, oldest first."""
        result = await self._call(FineTuneList, "GET", self.endpoint, operation="list_fine_tune_jobs")
        return sorted(result.data, key=lambda job: job.created_at)

    @timed
    async def retrieve_fine_tune_job(self, job_id: str) -> FineTuneJob:
        return await self._call(FineTuneJob, "GET", self._url(job_id), operation="retrieve_fine_tune_job")

    @timed
    async def cancel_fine_tune_job(self, job_id: str) -> bool:
        """Immediately cancel a job. Returns True when the job reports ``cancelled``."""
        result = await self._call(
            FineTuneJob,
            "POST",
            self._url(job_id, "cancel"),
            operation="cancel_fine_tune_job",
        )
        return result.status == CANCELLED_STATUS

    @timed
    async def list_fine_tune_events(self, job_id: str) -> list[Event]:
        """Return the job's events, oldest first."""
        result = await self._call(
            FineTuneEventList,
            "GET",
            self._url(job_id, "events"),
            operation="list_fine_tune_events",
        )
        return sorted(result.data, key=lambda event: event.created_at)

    # =========================================================================
    # STREAMING
    # =========================================================================

    def _events_stream_url(self, job_id: str) -> str:
        return f"{self._url(job_id, 'events')}?stream=true"

    def _parse_event(self, payload: str) -> Optional[Event]:
        try:
            return Event.model_validate_json(payload)
        except ValidationError as exc:
            self.logger.warning("Discarding unparsable fine-tune event: %s (%s)", payload[:200], exc.error_count())
            return None

    async def _cancel_interrupted_job(self, job_id: str) -> None:
        self.logger.info("Event stream for %s interrupted; cancelling job", job_id)
        if not await self.cancel_fine_tune_job(job_id):
            raise FineTuneCancellationError(job_id)

    async def iter_fine_tune_events(
        self,
        job_id: str,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> AsyncIterator[Event]:
        """Yield live events for a job until the stream reports ``[DONE]``."""
        lines = self._client.stream_lines(
            "GET",
            self._events_stream_url(job_id),
            operation="stream_fine_tune_events",
        )
        try:
            async with contextlib.aclosing(lines), contextlib.aclosing(
                iter_sse_payloads(lines, cancel_event)
            ) as payloads:
                async for payload in payloads:
                    event = self._parse_event(payload)
                    if event is not None:
                        yield event
        except asyncio.CancelledError:
            await self._cancel_interrupted_job(job_id)
            raise
        if cancel_event is not None and cancel_event.is_set():
            await self._cancel_interrupted_job(job_id)

    @timed
    async def stream_fine_tune_events(
        self,
        job_id: str,
        callback: EventCallback,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> None:
        """Invoke ``callback`` (sync or async) for each live event of a job."""
        lines = self._client.stream_lines(
            "GET",
            self._events_stream_url(job_id),
            operation="stream_fine_tune_events",
        )
        try:
            async with contextlib.aclosing(lines), contextlib.aclosing(
                iter_sse_payloads(lines, cancel_event)
            ) as payloads:
                async for payload in payloads:
                    event = self._parse_event(payload)
                    if event is not None:
                        await _await_if_needed(callback(event))
        except asyncio.CancelledError:
            await self._cancel_interrupted_job(job_id)
            raise
        if cancel_event is not None and cancel_event.is_set():
            await self._cancel_interrupted_job(job_id)

    # =========================================================================
    # POLLING
    # =========================================================================

    async def _poll_until_terminal(
        self,
        job_id: str,
        poll_interval: float,
        on_update: Optional[JobCallback],
    ) -> FineTuneJob:
        last_status: Any = object()
        while True:
            job = await self.retrieve_fine_tune_job(job_id)
            if job.status != last_status:
                self.logger.info("Fine-tune job %s status: %s", job_id, job.status)
                last_status = job.status
            if on_update is not None:
                await _await_if_needed(on_update(job))
            if job.is_terminal:
                return job
            await asyncio.sleep(poll_interval)

    @timed
    async def wait_for_fine_tune_job(
        self,
        job_id: str,
        poll_interval: Optional[float] = None,
        timeout: Optional[float] = None,
        on_update: Optional[JobCallback] = None,
    ) -> FineTuneJob:
        """Poll a job until it is ``succeeded``, ``failed`` or ``cancelled``.

        Raises:
            asyncio.TimeoutError: if ``timeout`` seconds pass first.
        """
        if poll_interval is None:
            poll_interval = self._client.settings.FINE_TUNE_POLL_INTERVAL_SECONDS
        return await asyncio.wait_for(
            self._poll_until_terminal(job_id, poll_interval, on_update),
            timeout=timeout,
        )
