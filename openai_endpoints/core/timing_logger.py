"""Lightweight call timing for endpoint operations.

``@timed`` records wall-clock duration of the wrapped call on the
``openai_endpoints.timing`` logger. Nothing is emitted unless that logger is
enabled for DEBUG, either by the application or via
:func:`configure_timing_file`.
"""

from __future__ import annotations

import functools
import inspect
import logging
from time import perf_counter
from typing import Any, Callable, TypeVar

TIMING_LOGGER = logging.getLogger("openai_endpoints.timing")

_F = TypeVar("_F", bound=Callable[..., Any])
_file_handler: logging.Handler | None = None


def _report(label: str, started: float, failed: bool) -> None:
    elapsed_ms = (perf_counter() - started) * 1000.0
    TIMING_LOGGER.debug("%s %.1fms%s", label, elapsed_ms, " (error)" if failed else "")


def timed(func: _F) -> _F:
    """Decorate a sync or async callable with elapsed-time logging."""
    label = func.__qualname__

    if inspect.iscoroutinefunction(func):

        @functools.wraps(func)
        async def _async_wrapper(*args: Any, **kwargs: Any) -> Any:
            if not TIMING_LOGGER.isEnabledFor(logging.DEBUG):
                return await func(*args, **kwargs)
            started = perf_counter()
            failed = True
            try:
                result = await func(*args, **kwargs)
                failed = False
                return result
            finally:
                _report(label, started, failed)

        return _async_wrapper  # type: ignore[return-value]

    @functools.wraps(func)
    def _sync_wrapper(*args: Any, **kwargs: Any) -> Any:
        if not TIMING_LOGGER.isEnabledFor(logging.DEBUG):
            return func(*args, **kwargs)
        started = perf_counter()
        failed = True
        try:
            result = func(*args, **kwargs)
            failed = False
            return result
        finally:
            _report(label, started, failed)

    return _sync_wrapper  # type: ignore[return-value]


def configure_timing_file(path: str) -> bool:
    """Route timing records to ``path``. Returns False when the file cannot be opened."""
    global _file_handler
    try:
        handler = logging.FileHandler(path, encoding="utf-8")
    except OSError:
        return False
    handler.setFormatter(logging.Formatter("%(asctime)s %(message)s"))
    if _file_handler is not None:
        TIMING_LOGGER.removeHandler(_file_handler)
        _file_handler.close()
    _file_handler = handler
    TIMING_LOGGER.addHandler(handler)
    TIMING_LOGGER.setLevel(logging.DEBUG)
    return True
