"""Service/API fixtures — AppContext over a mocked sentence endpoint.

Invariants:
    - `upstream` controls what the mocked sentence endpoint answers
    - `client` talks to the real FastAPI app with get_context overridden
    - No test reaches the network
"""

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from shici.config import Settings
from shici.infrastructure.jinrishici_client import PoemClient
from shici.main import create_app
from shici.services.app_context import AppContext, get_context
from tests.services.sample_payloads import JINGYESI

SENTENCE_URL = "https://v2.jinrishici.com/sentence"


class Upstream:
    """Programmable stand-in for the sentence endpoint."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.respond = lambda request: httpx.Response(200, json=JINGYESI)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.respond(request)


@pytest.fixture
def upstream():
    return Upstream()


@pytest.fixture
async def context(upstream, font_face, composer):
    http = httpx.AsyncClient(transport=httpx.MockTransport(upstream.handler))
    poem_client = PoemClient(http, SENTENCE_URL, timeout_seconds=1.0)
    yield AppContext.build(
        Settings(),
        token="abc123",
        font=font_face,
        composer=composer,
        poem_client=poem_client,
    )
    await http.aclose()


@pytest.fixture
async def client(context):
    app = create_app()
    app.dependency_overrides[get_context] = lambda: context
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
    app.dependency_overrides.clear()
