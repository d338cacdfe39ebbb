"""Exceptions raised by the client.

Every failed HTTP exchange surfaces as :class:`OpenAIRequestError` carrying
the status code and the raw response body. The only specialisations are the
ones callers need to branch on: credentials, the "file still processing"
deletion answer, and a failed cancel after an interrupted event stream.
"""

from __future__ import annotations

import json
from typing import Any, Optional

FILE_STILL_PROCESSING_MESSAGE = "File is still processing. Check back later."


class OpenAIError(Exception):
    """Base class for all errors raised by this package."""


class OpenAIAuthenticationError(OpenAIError):
    """Credentials are missing or malformed."""


class OpenAIRequestError(OpenAIError):
    """Non-success HTTP response from the API."""

    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        reason: Optional[str] = None,
        method: Optional[str] = None,
        url: Optional[str] = None,
        body_text: Optional[str] = None,
        error_message: Optional[str] = None,
        error_type: Optional[str] = None,
        error_code: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.reason = reason
        self.method = method
        self.url = url
        self.body_text = body_text
        self.error_message = error_message
        self.error_type = error_type
        self.error_code = error_code


class FileStillProcessingError(OpenAIRequestError):
    """The file cannot be deleted yet because the provider is still processing it."""


class FineTuneCancellationError(OpenAIError):
    """Cancelling a fine-tune job after an interrupted event stream did not succeed."""

    def __init__(self, job_id: str) -> None:
        super().__init__(f"Failed to cancel {job_id}")
        self.job_id = job_id


def _parse_error_envelope(body_text: Optional[str]) -> dict[str, Any]:
    """Return the ``error`` object of a standard error body, or an empty dict."""
    if not body_text:
        return {}
    try:
        parsed = json.loads(body_text)
    except ValueError:
        return {}
    if not isinstance(parsed, dict):
        return {}
    error = parsed.get("error")
    if isinstance(error, dict):
        return error
    if isinstance(error, str):
        return {"message": error}
    return {}


def build_request_error(
    *,
    operation: str,
    status: int,
    reason: Optional[str],
    body_text: Optional[str],
    method: Optional[str] = None,
    url: Optional[str] = None,
) -> OpenAIRequestError:
    """Construct the matching :class:`OpenAIRequestError` for a failed response."""
    envelope = _parse_error_envelope(body_text)
    error_code = envelope.get("code")
    message = f"{operation} Failed! HTTP status code: {status}. Response: {body_text or ''}"
    error_cls = OpenAIRequestError
    if body_text and FILE_STILL_PROCESSING_MESSAGE in body_text:
        error_cls = FileStillProcessingError
    return error_cls(
        message,
        status=status,
        reason=reason,
        method=method,
        url=url,
        body_text=body_text,
        error_message=envelope.get("message"),
        error_type=envelope.get("type"),
        error_code=str(error_code) if error_code is not None else None,
    )
