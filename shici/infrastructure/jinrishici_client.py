"""Jinrishici Client — fetches one random poem sentence from the v2 API.

Invariants:
    - Exactly one GET per call, token sent in the X-User-Token header
    - Bounded by a per-request timeout; expiry is a fetch failure
    - Connection errors, timeouts, non-2xx status and invalid JSON all map to PoemFetchError
    - No retry, no caching

Design Decisions:
    - One shared httpx.AsyncClient (connection pool) owned by the application lifespan
    - Returns the decoded JSON untouched; shape checks live in core/poem_parser.py
"""

import logging
from typing import Any

import httpx

from shici.core.domain_types import AccessToken
from shici.core.errors import ErrorContext, PoemFetchError

logger = logging.getLogger(__name__)

TOKEN_HEADER = "X-User-Token"


class PoemClient:
    """Thin wrapper over httpx for the sentence endpoint."""

    def __init__(
        self,
        http: httpx.AsyncClient,
        sentence_url: str,
        timeout_seconds: float = 10.0,
        token_header: str = TOKEN_HEADER,
    ):
        self.http = http
        self.sentence_url = sentence_url
        self.timeout = httpx.Timeout(timeout_seconds)
        self.token_header = token_header

    async def fetch_sentence(self, token: AccessToken) -> Any:
        """GET the sentence endpoint and return the decoded JSON body."""
        ctx = ErrorContext(url=self.sentence_url)
        try:
            response = await self.http.get(
                self.sentence_url,
                headers={self.token_header: token},
                timeout=self.timeout,
            )
            response.raise_for_status()
        except httpx.TimeoutException as e:
            raise PoemFetchError(
                f"timed out after {self.timeout.read}s", timed_out=True, context=ctx,
            ) from e
        except httpx.HTTPStatusError as e:
            ctx.upstream_status = e.response.status_code
            raise PoemFetchError(
                f"sentence endpoint returned {e.response.status_code}", context=ctx,
            ) from e
        except httpx.HTTPError as e:
            raise PoemFetchError(f"request failed: {e}", context=ctx) from e

        try:
            return response.json()
        except ValueError as e:
            raise PoemFetchError("response is not valid JSON", context=ctx) from e
