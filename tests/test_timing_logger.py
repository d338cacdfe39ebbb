"""Tests for the @timed decorator."""

from __future__ import annotations

import logging

import pytest

from openai_endpoints.core.timing_logger import TIMING_LOGGER, timed


@timed
def _add(a: int, b: int) -> int:
    return a + b


@timed
async def _fail() -> None:
    raise RuntimeError("boom")


def test_timed_sync_logs_when_debug_enabled(caplog) -> None:
    with caplog.at_level(logging.DEBUG, logger=TIMING_LOGGER.name):
        assert _add(1, 2) == 3
    assert any("_add" in record.getMessage() for record in caplog.records)


def test_timed_is_silent_by_default(caplog) -> None:
    with caplog.at_level(logging.INFO, logger=TIMING_LOGGER.name):
        _add(1, 1)
    assert caplog.records == []


@pytest.mark.asyncio
async def test_timed_async_marks_errors(caplog) -> None:
    with caplog.at_level(logging.DEBUG, logger=TIMING_LOGGER.name):
        with pytest.raises(RuntimeError):
            await _fail()
    assert any("(error)" in record.getMessage() for record in caplog.records)
