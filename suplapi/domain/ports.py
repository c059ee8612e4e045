from __future__ import annotations

from typing import Protocol, Sequence, Tuple

QueryParams = Sequence[Tuple[str, str]]


class HttpClient(Protocol):
    """Port defining the minimal contract for a blocking HTTP backend.

    Implementations perform exactly one GET per call and never retry. Any
    failure, including a non-2xx status, is raised as an exception.
    """

    def set_user_agent(self, user_agent: str) -> None:
        """Set the identification sent as User-Agent on every later call."""

    def get(self, url: str, params: QueryParams) -> str:
        """GET url with params appended as query parameters, in order. Return the body text."""


class AsyncHttpClient(Protocol):
    """Asyncio counterpart of HttpClient."""

    def set_user_agent(self, user_agent: str) -> None:
        """Set the identification sent as User-Agent on every later call."""

    async def get(self, url: str, params: QueryParams) -> str:
        """GET url with params appended as query parameters, in order. Return the body text."""
