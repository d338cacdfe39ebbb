"""Tests for fine-tune jobs: CRUD, event listing, the live event feed, and polling."""

from __future__ import annotations

import asyncio
import json

import pytest
from aiohttp import web
from pydantic import ValidationError

from openai_endpoints import FineTuneCancellationError, OpenAIRequestError
from openai_endpoints.types import CreateFineTuneJobRequest, Event

FINE_TUNES_URL = "https://api.openai.com/v1/fine-tunes"
STREAM_URL = f"{FINE_TUNES_URL}/ft-1/events?stream=true"
CANCEL_URL = f"{FINE_TUNES_URL}/ft-1/cancel"


def _job(status: str = "pending", job_id: str = "ft-1", created_at: int = 1614807352) -> dict:
    return {
        "id": job_id,
        "object": "fine-tune",
        "model": "curie",
        "created_at": created_at,
        "events": [
            {"object": "fine-tune-event", "created_at": created_at, "level": "info", "message": "Job enqueued."}
        ],
        "fine_tuned_model": None,
        "hyperparams": {"batch_size": 4, "learning_rate_multiplier": 0.1, "n_epochs": 4, "prompt_loss_weight": 0.1},
        "organization_id": "org-test",
        "result_files": [],
        "status": status,
        "validation_files": [],
        "training_files": [{"id": "file-abc", "object": "file", "bytes": 1547276, "filename": "train.jsonl"}],
        "updated_at": created_at,
    }


def _event_line(message: str, created_at: int) -> str:
    payload = {"object": "fine-tune-event", "created_at": created_at, "level": "info", "message": message}
    return f"data: {json.dumps(payload)}\n"


# ============================================================================
# Jobs
# ============================================================================


@pytest.mark.asyncio
async def test_create_job_sends_only_set_fields(client, mock_http, sent_requests) -> None:
    mock_http.post(
        FINE_TUNES_URL,
        payload=_job(),
        headers={"openai-organization": "org-test", "openai-processing-ms": "87", "x-request-id": "req-1"},
    )
    request = CreateFineTuneJobRequest(training_file="file-abc", model="curie", n_epochs=4, suffix="custom")

    job = await client.fine_tuning.create_fine_tune_job(request)

    assert job.id == "ft-1"
    assert job.hyperparams is not None and job.hyperparams.n_epochs == 4
    assert job.training_files[0].size == 1547276
    assert job.organization == "org-test"
    assert job.processing_time == 87.0
    assert job.request_id == "req-1"
    sent = sent_requests("POST", FINE_TUNES_URL)[0].kwargs["json"]
    assert sent == {"training_file": "file-abc", "model": "curie", "n_epochs": 4, "suffix": "custom"}


def test_create_job_requires_training_file() -> None:
    with pytest.raises(ValidationError):
        CreateFineTuneJobRequest(training_file="")


@pytest.mark.asyncio
async def test_list_jobs_sorted_by_creation(client, mock_http) -> None:
    mock_http.get(
        FINE_TUNES_URL,
        payload={"object": "list", "data": [_job(job_id="ft-late", created_at=300), _job(job_id="ft-early", created_at=100)]},
    )

    jobs = await client.fine_tuning.list_fine_tune_jobs()

    assert [job.id for job in jobs] == ["ft-early", "ft-late"]


@pytest.mark.asyncio
async def test_retrieve_job_records_headers(client, mock_http) -> None:
    mock_http.get(f"{FINE_TUNES_URL}/ft-1", payload=_job("running"), headers={"X-Request-Id": "req-2"})

    job = await client.fine_tuning.retrieve_fine_tune_job("ft-1")

    assert job.status == "running"
    assert job.request_id == "req-2"
    assert job.is_terminal is False
    assert job.created is not None and job.created.year == 2021


@pytest.mark.asyncio
@pytest.mark.parametrize("status,expected", [("cancelled", True), ("running", False)])
async def test_cancel_job(client, mock_http, status: str, expected: bool) -> None:
    mock_http.post(CANCEL_URL, payload=_job(status))

    assert await client.fine_tuning.cancel_fine_tune_job("ft-1") is expected


@pytest.mark.asyncio
async def test_list_events_sorted(client, mock_http) -> None:
    mock_http.get(
        f"{FINE_TUNES_URL}/ft-1/events",
        payload={
            "object": "list",
            "data": [
                {"object": "fine-tune-event", "created_at": 20, "level": "info", "message": "second"},
                {"object": "fine-tune-event", "created_at": 10, "level": "info", "message": "first"},
            ],
        },
    )

    events = await client.fine_tuning.list_fine_tune_events("ft-1")

    assert [event.message for event in events] == ["first", "second"]


# ============================================================================
# Live event feed
# ============================================================================


@pytest.mark.asyncio
async def test_stream_events_invokes_callback_until_done(client, mock_http, sent_requests) -> None:
    body = (
        _event_line("Job started.", 1)
        + "\n"
        + _event_line("Completed epoch 1/4", 2)
        + "\n"
        + "data: [DONE]\n"
        + _event_line("never delivered", 3)
    )
    mock_http.get(STREAM_URL, body=body, content_type="text/event-stream")
    received: list[Event] = []

    await client.fine_tuning.stream_fine_tune_events("ft-1", received.append)

    assert [event.message for event in received] == ["Job started.", "Completed epoch 1/4"]
    assert sent_requests("POST", CANCEL_URL) == []


@pytest.mark.asyncio
async def test_stream_events_accepts_async_callback(client, mock_http) -> None:
    mock_http.get(STREAM_URL, body=_event_line("Job started.", 1) + "data: [DONE]\n")
    received: list[str] = []

    async def _on_event(event: Event) -> None:
        received.append(event.message or "")

    await client.fine_tuning.stream_fine_tune_events("ft-1", _on_event)

    assert received == ["Job started."]


@pytest.mark.asyncio
async def test_iter_events(client, mock_http) -> None:
    mock_http.get(STREAM_URL, body=_event_line("a", 1) + "\n\n" + _event_line("b", 2) + "data: [DONE]\n")

    messages = [event.message async for event in client.fine_tuning.iter_fine_tune_events("ft-1")]

    assert messages == ["a", "b"]


@pytest.mark.asyncio
async def test_stream_skips_unparsable_lines(client, mock_http) -> None:
    mock_http.get(STREAM_URL, body="data: not-json\n" + _event_line("ok", 1) + "data: [DONE]\n")

    messages = [event.message async for event in client.fine_tuning.iter_fine_tune_events("ft-1")]

    assert messages == ["ok"]


@pytest.mark.asyncio
async def test_stream_error_status_raises(client, mock_http) -> None:
    mock_http.get(STREAM_URL, status=404, body='{"error": {"message": "No fine-tune job: ft-1"}}')

    with pytest.raises(OpenAIRequestError) as excinfo:
        await client.fine_tuning.stream_fine_tune_events("ft-1", lambda event: None)

    assert excinfo.value.status == 404
    assert excinfo.value.error_message == "No fine-tune job: ft-1"


@pytest.mark.asyncio
async def test_cancel_event_cancels_job(client, mock_http, sent_requests) -> None:
    mock_http.get(STREAM_URL, body=_event_line("a", 1) + _event_line("b", 2) + "data: [DONE]\n")
    mock_http.post(CANCEL_URL, payload=_job("cancelled"))
    cancel = asyncio.Event()
    received: list[Event] = []

    def _on_event(event: Event) -> None:
        received.append(event)
        cancel.set()

    await client.fine_tuning.stream_fine_tune_events("ft-1", _on_event, cancel_event=cancel)

    assert [event.message for event in received] == ["a"]
    assert len(sent_requests("POST", CANCEL_URL)) == 1


@pytest.mark.asyncio
async def test_failed_cancel_raises(client, mock_http) -> None:
    mock_http.get(STREAM_URL, body=_event_line("a", 1) + "data: [DONE]\n")
    mock_http.post(CANCEL_URL, payload=_job("running"))
    cancel = asyncio.Event()
    cancel.set()

    with pytest.raises(FineTuneCancellationError, match="Failed to cancel ft-1"):
        async for _ in client.fine_tuning.iter_fine_tune_events("ft-1", cancel_event=cancel):
            pass


# ============================================================================
# Polling
# ============================================================================


@pytest.mark.asyncio
async def test_wait_for_job_polls_until_terminal(client, mock_http, sent_requests) -> None:
    url = f"{FINE_TUNES_URL}/ft-1"
    mock_http.get(url, payload=_job("pending"))
    mock_http.get(url, payload=_job("running"))
    mock_http.get(url, payload=_job("succeeded"))
    seen: list[str] = []

    job = await client.fine_tuning.wait_for_fine_tune_job(
        "ft-1", poll_interval=0, on_update=lambda j: seen.append(j.status or "")
    )

    assert job.status == "succeeded"
    assert seen == ["pending", "running", "succeeded"]
    assert len(sent_requests("GET", url)) == 3


@pytest.mark.asyncio
async def test_wait_for_job_times_out(client, mock_http) -> None:
    mock_http.get(f"{FINE_TUNES_URL}/ft-1", payload=_job("running"), repeat=True)

    with pytest.raises(asyncio.TimeoutError):
        await client.fine_tuning.wait_for_fine_tune_job("ft-1", poll_interval=0.01, timeout=0.05)


# ============================================================================
# Long-lived feeds against a local server
# ============================================================================

EVENTS_PATH = "/v1/fine-tunes/ft-1/events"
CANCEL_PATH = "/v1/fine-tunes/ft-1/cancel"


def _events_app(handler, cancel_status: str = "cancelled", cancel_calls: list[str] | None = None) -> web.Application:
    async def _cancel(request: web.Request) -> web.Response:
        if cancel_calls is not None:
            cancel_calls.append(request.match_info["job_id"])
        return web.json_response(_job(cancel_status))

    app = web.Application()
    app.router.add_get(EVENTS_PATH, handler)
    app.router.add_post("/v1/fine-tunes/{job_id}/cancel", _cancel)
    return app


@pytest.mark.asyncio
async def test_stream_outlives_total_timeout(local_api) -> None:
    async def _slow_feed(request: web.Request) -> web.StreamResponse:
        assert request.query.get("stream") == "true"
        resp = web.StreamResponse(headers={"Content-Type": "text/event-stream"})
        await resp.prepare(request)
        for index in range(4):
            await resp.write(_event_line(f"e{index}", index).encode() + b"\n")
            await asyncio.sleep(0.3)
        await resp.write(b"data: [DONE]\n\n")
        return resp

    api = await local_api(_events_app(_slow_feed), HTTP_TOTAL_TIMEOUT_SECONDS=0.5)

    messages = [event.message async for event in api.fine_tuning.iter_fine_tune_events("ft-1")]

    assert messages == ["e0", "e1", "e2", "e3"]


@pytest.mark.asyncio
async def test_stream_request_has_no_total_timeout(client, mock_http, sent_requests) -> None:
    mock_http.get(STREAM_URL, body="data: [DONE]\n")

    await client.fine_tuning.stream_fine_tune_events("ft-1", lambda event: None)

    timeout = sent_requests("GET", STREAM_URL)[0].kwargs["timeout"]
    assert timeout.total is None
    assert timeout.sock_read == client.settings.HTTP_SOCK_READ_SECONDS


async def _consume_until_first_event(api, received: list[str]) -> asyncio.Task:
    first = asyncio.Event()

    async def _consume() -> None:
        async for event in api.fine_tuning.iter_fine_tune_events("ft-1"):
            received.append(event.message or "")
            first.set()

    task = asyncio.create_task(_consume())
    await asyncio.wait_for(first.wait(), timeout=5)
    return task


def _stalled_feed(release: asyncio.Event):
    async def _handler(request: web.Request) -> web.StreamResponse:
        resp = web.StreamResponse(headers={"Content-Type": "text/event-stream"})
        await resp.prepare(request)
        await resp.write(_event_line("a", 1).encode())
        await release.wait()
        return resp

    return _handler


@pytest.mark.asyncio
async def test_task_cancellation_cancels_job_and_reraises(local_api) -> None:
    release = asyncio.Event()
    cancel_calls: list[str] = []
    api = await local_api(_events_app(_stalled_feed(release), "cancelled", cancel_calls))
    received: list[str] = []
    try:
        task = await _consume_until_first_event(api, received)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
    finally:
        release.set()

    assert received == ["a"]
    assert cancel_calls == ["ft-1"]


@pytest.mark.asyncio
async def test_task_cancellation_with_failed_job_cancel(local_api) -> None:
    release = asyncio.Event()
    cancel_calls: list[str] = []
    api = await local_api(_events_app(_stalled_feed(release), "running", cancel_calls))
    received: list[str] = []
    try:
        task = await _consume_until_first_event(api, received)
        task.cancel()
        with pytest.raises(FineTuneCancellationError, match="Failed to cancel ft-1"):
            await task
    finally:
        release.set()

    assert cancel_calls == ["ft-1"]


# ============================================================================
# Identifiers
# ============================================================================


@pytest.mark.asyncio
@pytest.mark.parametrize("job_id", ["", "  "])
async def test_blank_job_id_rejected_before_request(client, mock_http, sent_requests, job_id: str) -> None:
    with pytest.raises(ValueError):
        await client.fine_tuning.retrieve_fine_tune_job(job_id)

    assert sent_requests("GET", FINE_TUNES_URL) == []
