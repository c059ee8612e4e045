"""Client for the Nelonen Media Supla playlist API.

Example::

    from suplapi.application.client import SuplAPI

    groove_fm = 70
    with SuplAPI() as supla:
        playlist = supla.playlist(groove_fm, 20)
        for track in playlist.items:
            print(track.artist, '-', track.song)
        older = supla.playlist(groove_fm, 20, playlist.next_token)
"""
from __future__ import annotations

from typing import Generic, List, Optional, Tuple, TypeVar, Union

from suplapi.application.decoding import decode_playlist, parse_json
from suplapi.crosscutting.logging import CorrelationContext, get_logger, log_error, log_with_fields
from suplapi.domain.entities import Playlist
from suplapi.domain.errors import HTTPError, SuplAPIError
from suplapi.domain.ports import AsyncHttpClient, HttpClient

logger = get_logger(__name__)

DEFAULT_BASE_URL = '.nm-services.nelonenmedia.fi'
PLAYLIST_URL_PREFIX = 'https://supla-playlist'
USER_AGENT = 'suplapi ()'

C = TypeVar('C', bound=Union[HttpClient, AsyncHttpClient])


class _SuplAPIBase(Generic[C]):
    """State and request/response handling shared by the blocking and asyncio clients."""

    def __init__(self, client: C, base_url: str = DEFAULT_BASE_URL) -> None:
        client.set_user_agent(USER_AGENT)
        self._client = client
        self._base_url = base_url
        self._owns_client = False

    @property
    def client(self) -> C:
        return self._client

    @property
    def base_url(self) -> str:
        return self._base_url

    def playlist_url(self) -> str:
        return f"{PLAYLIST_URL_PREFIX}{self._base_url}"

    def _playlist_request(self, channel: int, limit: int,
                          next_token: Optional[int]) -> Tuple[str, List[Tuple[str, str]]]:
        url = f"{self.playlist_url()}/playlist?"
        params = [
            ('channel', str(channel)),
            ('limit', str(limit)),
        ]
        if next_token is not None:
            params.append(('next_token', str(next_token)))
        return url, params

    def _log_request(self, channel: int, limit: int, next_token: Optional[int]) -> None:
        log_with_fields(logger, 'DEBUG', 'Fetching playlist page',
                        channel=channel, limit=limit, next_token=next_token)

    def _log_failure(self, error: SuplAPIError, channel: int) -> None:
        cause = error.cause
        log_error(logger, 'Playlist request failed', error, level='WARNING',
                  channel=channel,
                  cause_type=type(cause).__name__ if cause is not None else None)

    def _decode(self, text: str, channel: int) -> Playlist:
        try:
            playlist = decode_playlist(parse_json(text))
        except SuplAPIError as e:
            self._log_failure(e, channel)
            raise
        log_with_fields(logger, 'DEBUG', 'Decoded playlist page',
                        items=len(playlist.items), next_token=playlist.next_token)
        return playlist

    def _http_error(self, cause: Exception, channel: int) -> HTTPError:
        error = HTTPError(cause)
        self._log_failure(error, channel)
        return error


class SuplAPI(_SuplAPIBase[HttpClient]):
    """Blocking client for the Supla playlist API.

    Args:
        client: Transport to use. Defaults to a new RequestsHttpClient, which is
            closed by close(). A transport passed in is left to the caller.
        base_url: Host suffix appended to the playlist URL prefix.
    """

    def __init__(self, client: Optional[HttpClient] = None, base_url: str = DEFAULT_BASE_URL) -> None:
        owns_client = client is None
        if client is None:
            from suplapi.infrastructure.transports.requests_transport import RequestsHttpClient
            client = RequestsHttpClient()
        super().__init__(client, base_url)
        self._owns_client = owns_client

    def playlist(self, channel: int, limit: int, next_token: Optional[int] = None) -> Playlist:
        """Fetch one page of recently played tracks for a channel.

        Args:
            channel: Channel id
            limit: Number of tracks requested
            next_token: Continuation token from a previous page, passed verbatim

        Raises:
            HTTPError: the transport failed or the status was not 2xx
            JSONError: the body is not JSON or not a playlist
        """
        url, params = self._playlist_request(channel, limit, next_token)
        with CorrelationContext(channel=channel):
            self._log_request(channel, limit, next_token)
            try:
                text = self._client.get(url, params)
            except Exception as e:
                raise self._http_error(e, channel) from e
            return self._decode(text, channel)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


class AsyncSuplAPI(_SuplAPIBase[AsyncHttpClient]):
    """Asyncio client for the Supla playlist API.

    Args:
        client: Transport to use. Defaults to a new AiohttpHttpClient, which is
            closed by close(). A transport passed in is left to the caller.
        base_url: Host suffix appended to the playlist URL prefix.
    """

    def __init__(self, client: Optional[AsyncHttpClient] = None, base_url: str = DEFAULT_BASE_URL) -> None:
        owns_client = client is None
        if client is None:
            from suplapi.infrastructure.transports.aiohttp_transport import AiohttpHttpClient
            client = AiohttpHttpClient()
        super().__init__(client, base_url)
        self._owns_client = owns_client

    async def playlist(self, channel: int, limit: int, next_token: Optional[int] = None) -> Playlist:
        """Fetch one page of recently played tracks for a channel.

        Same contract as SuplAPI.playlist; suspends only on the network call.
        """
        url, params = self._playlist_request(channel, limit, next_token)
        with CorrelationContext(channel=channel):
            self._log_request(channel, limit, next_token)
            try:
                text = await self._client.get(url, params)
            except Exception as e:
                raise self._http_error(e, channel) from e
            return self._decode(text, channel)

    async def close(self) -> None:
        if self._owns_client:
            await self._client.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
