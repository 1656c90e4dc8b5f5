"""Token Provisioner — reads the cached jinrishici token or obtains and caches a new one.

Invariants:
    - A present token file is returned as-is (whitespace stripped) with zero network calls
    - A fresh token is fetched with exactly one unauthenticated GET, then written to disk
      atomically (temp file + os.replace)
    - Every failure raises TokenProvisionError; nothing is retried
    - The token value is never logged

Design Decisions:
    - Runs once from the application lifespan; a failure aborts startup
    - No expiry or refresh: a cached token is used until the file is deleted
"""

import logging
import os
import tempfile
from pathlib import Path

import httpx

from shici.core.domain_types import AccessToken
from shici.core.errors import ErrorContext, TokenProvisionError

logger = logging.getLogger(__name__)


class TokenProvisioner:
    """Provides the access token for the sentence endpoint."""

    def __init__(self, token_path: Path, token_url: str, http: httpx.AsyncClient):
        self.token_path = Path(token_path)
        self.token_url = token_url
        self.http = http

    async def provision(self) -> AccessToken:
        cached = self.read_cached()
        if cached is not None:
            logger.info(
                "Using cached access token",
                extra={"token_source": str(self.token_path)},
            )
            return cached
        token = await self._request_token()
        self._persist(token)
        logger.info(
            "Obtained new access token",
            extra={"token_source": self.token_url},
        )
        return token

    def read_cached(self) -> AccessToken | None:
        """Token from the cache file, or None if the file does not exist."""
        try:
            return AccessToken(self.token_path.read_text(encoding="utf-8").strip())
        except FileNotFoundError:
            return None
        except OSError as e:
            raise TokenProvisionError(
                f"cannot read {self.token_path}: {e}",
            ) from e

    async def _request_token(self) -> AccessToken:
        ctx = ErrorContext(url=self.token_url)
        try:
            response = await self.http.get(self.token_url)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as e:
            ctx.upstream_status = e.response.status_code
            raise TokenProvisionError(
                f"token endpoint returned {e.response.status_code}", ctx,
            ) from e
        except httpx.HTTPError as e:
            raise TokenProvisionError(f"request failed: {e}", ctx) from e
        except ValueError as e:
            raise TokenProvisionError("response is not valid JSON", ctx) from e

        token = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(token, str) or not token:
            raise TokenProvisionError("response has no string 'data' field", ctx)
        return AccessToken(token)

    def _persist(self, token: AccessToken) -> None:
        """Atomic write: sibling temp file, then os.replace."""
        tmp_name = None
        try:
            with tempfile.NamedTemporaryFile(
                "w", encoding="utf-8", dir=self.token_path.parent,
                prefix=f"{self.token_path.name}.", suffix=".tmp", delete=False,
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(token)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(tmp_name, self.token_path)
        except OSError as e:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
            raise TokenProvisionError(
                f"cannot write {self.token_path}: {e}",
            ) from e
