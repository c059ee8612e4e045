import logging
import os
import sys
from typing import List, Optional, Tuple

import pytest


def _ensure_project_root_on_sys_path() -> None:
    here = os.path.dirname(__file__)
    project_root = os.path.abspath(os.path.join(here, "..", ".."))
    if project_root not in sys.path:
        sys.path.insert(0, project_root)


_ensure_project_root_on_sys_path()

from suplapi.domain.errors import TransportError  # noqa: E402

SAMPLE_BODY = (
    '{"items":[{"timestamp":1,"date":"2020-01-01","channel":70,"artist":"A","song":"B"}],'
    '"next_token":5}'
)


class StubHttpClient:
    """Blocking transport that records calls and replays a canned body or failure."""

    def __init__(self, body: str = SAMPLE_BODY, error: Optional[Exception] = None):
        self.body = body
        self.error = error
        self.user_agent: Optional[str] = None
        self.calls: List[Tuple[str, List[Tuple[str, str]]]] = []
        self.closed = False

    def set_user_agent(self, user_agent: str) -> None:
        self.user_agent = user_agent

    def get(self, url, params):
        self.calls.append((url, list(params)))
        if self.error is not None:
            raise self.error
        return self.body

    def close(self) -> None:
        self.closed = True


class AsyncStubHttpClient(StubHttpClient):
    """Asyncio flavour of StubHttpClient."""

    async def get(self, url, params):
        return StubHttpClient.get(self, url, params)

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def stub_client():
    return StubHttpClient()


@pytest.fixture
def failing_client():
    return StubHttpClient(error=TransportError("Bad status: 503", status_code=503))


@pytest.fixture
def async_stub_client():
    return AsyncStubHttpClient()


@pytest.fixture(autouse=True)
def _reset_library_logger():
    """Keep handlers installed by setup_logging from leaking across tests."""
    logger = logging.getLogger('suplapi')
    handlers = list(logger.handlers)
    level = logger.level
    try:
        yield
    finally:
        logger.handlers[:] = handlers
        logger.setLevel(level)
