"""Shared streaming constants."""

from __future__ import annotations

DATA_PREFIX = "data: "
DONE_SENTINEL = "[DONE]"

# Download chunk size for file content streams.
DOWNLOAD_CHUNK_BYTES = 64 * 1024
