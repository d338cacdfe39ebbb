"""Common behaviour for endpoint wrappers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional, TypeVar

from pydantic import BaseModel

from ..types.common import BaseResponse

if TYPE_CHECKING:
    import aiohttp

    from ..client import ApiResponse, OpenAIClient

_T = TypeVar("_T", bound=BaseModel)


class BaseEndpoint:
    """One API base path, sharing the client's session and serialization rules."""

    path: str = ""

    def __init__(self, client: "OpenAIClient") -> None:
        self._client = client

    @property
    def logger(self):
        return self._client.logger

    @property
    def endpoint(self) -> str:
        return f"{self._client.base_url}{self.path}"

    def _url(self, *parts: str) -> str:
        """Join ``parts`` under this endpoint. Empty ids are rejected, never collapsed."""
        cleaned = [part.strip("/") if part else "" for part in parts]
        if any(not part.strip() for part in cleaned):
            raise ValueError(f"Empty path segment for {self.path}: {parts!r}")
        return "/".join([self.endpoint, *cleaned])

    @staticmethod
    def _parse(model_cls: type[_T], response: "ApiResponse") -> _T:
        result = model_cls.model_validate(response.json() or {})
        if isinstance(result, BaseResponse):
            result.set_response_data(response.headers)
        return result

    async def _call(
        self,
        model_cls: type[_T],
        method: str,
        url: str,
        *,
        operation: str,
        json_body: Optional[dict[str, Any]] = None,
        form: Optional["aiohttp.FormData"] = None,
    ) -> _T:
        response = await self._client.request(
            method,
            url,
            json_body=json_body,
            form=form,
            operation=operation,
        )
        return self._parse(model_cls, response)
