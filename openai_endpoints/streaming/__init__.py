"""Streaming response processing subsystem.

- sse_parser: ``data:`` line parsing, blank-line skipping, ``[DONE]`` handling
- constants: wire prefixes and chunk sizes
"""

from .sse_parser import SSEParser, iter_sse_payloads

__all__ = [
    "SSEParser",
    "iter_sse_payloads",
]
