import logging
from typing import Optional

import requests

from suplapi.domain.errors import TransportError
from suplapi.domain.ports import HttpClient, QueryParams

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


class RequestsHttpClient(HttpClient):
    """Blocking HttpClient backed by a requests session."""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT, session: Optional[requests.Session] = None):
        """Initialize the transport.

        Args:
            timeout: Per-request timeout in seconds
            session: Optional session to reuse. If not provided, one is created
                and closed by close().
        """
        self.user_agent = ''
        self.timeout = timeout
        self._session = session if session is not None else requests.Session()
        self._owns_session = session is None

    def set_user_agent(self, user_agent: str) -> None:
        self.user_agent = user_agent

    def get(self, url: str, params: QueryParams) -> str:
        """GET url with ordered query params and return the body text.

        Raises:
            TransportError: on network failure or a status outside 200-299
        """
        try:
            response = self._session.get(
                url,
                params=list(params),
                headers={'User-Agent': self.user_agent},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.debug(f"GET {url} failed: {e}")
            raise TransportError(f"Request failed: {e}") from e

        if not 200 <= response.status_code < 300:
            logger.debug(f"GET {response.url} returned status {response.status_code}")
            raise TransportError(f"Bad status: {response.status_code}", status_code=response.status_code)

        return response.text

    def close(self) -> None:
        if self._owns_session:
            self._session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
