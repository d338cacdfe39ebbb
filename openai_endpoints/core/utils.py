"""Small helpers shared across subsystems."""

from __future__ import annotations

import inspect
from typing import Any


async def _await_if_needed(value: Any) -> Any:
    """Await ``value`` when a callback handed back an awaitable."""
    if inspect.isawaitable(value):
        return await value
    return value
