import asyncio
import logging
from typing import Optional

import aiohttp

from suplapi.domain.errors import TransportError
from suplapi.domain.ports import AsyncHttpClient, QueryParams
from suplapi.infrastructure.transports.requests_transport import DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)


class AiohttpHttpClient(AsyncHttpClient):
    """Asyncio HttpClient backed by an aiohttp session.

    A session passed in is reused and never closed here. Otherwise one is
    created on first use and released by close().
    """

    def __init__(self, timeout: float = DEFAULT_TIMEOUT, session: Optional[aiohttp.ClientSession] = None):
        self.user_agent = ''
        self.timeout = timeout
        self._session = session
        self._owns_session = session is None

    def set_user_agent(self, user_agent: str) -> None:
        self.user_agent = user_agent

    async def _ensure_session(self) -> aiohttp.ClientSession:
        if self._session is None:
            self._session = aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=self.timeout))
        return self._session

    async def get(self, url: str, params: QueryParams) -> str:
        """GET url with ordered query params and return the body text.

        Raises:
            TransportError: on network failure, timeout or a status outside 200-299
        """
        session = await self._ensure_session()
        try:
            async with session.get(
                url,
                params=list(params),
                headers={'User-Agent': self.user_agent},
            ) as response:
                if not 200 <= response.status < 300:
                    logger.debug(f"GET {response.url} returned status {response.status}")
                    raise TransportError(f"Bad status: {response.status}", status_code=response.status)
                return await response.text()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.debug(f"GET {url} failed: {e}")
            raise TransportError(f"Request failed: {e}") from e

    async def close(self) -> None:
        if not self._owns_session or self._session is None:
            return
        if not self._session.closed:
            await self._session.close()
        self._session = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
