"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Every field can be overridden by a SHICI_-prefixed environment variable or .env entry
    - get_settings() is cached (lru_cache) — single instance per process
    - TLS is enabled only when both ssl_certfile and ssl_keyfile are set; one without
      the other is rejected at load time

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults work out of the box except for the font, which the operator supplies
"""

from functools import lru_cache
from pathlib import Path

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_PACKAGE_DIR = Path(__file__).resolve().parent


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="SHICI_", case_sensitive=False,
    )

    # Upstream (jinrishici v2)
    token_url: str = "https://v2.jinrishici.com/token"
    sentence_url: str = "https://v2.jinrishici.com/sentence"
    token_header: str = "X-User-Token"
    fetch_timeout_seconds: float = 10.0

    # Local state and assets
    token_path: Path = Path(".token")
    font_path: Path = _PACKAGE_DIR / "assets" / "font.ttf"

    # Rendering
    base_font_size: float = 112.0
    content_fill: str = "#cca4e3"
    author_fill: str = "#e4c6d0"

    # Server
    host: str = "0.0.0.0"
    port: int = 80
    ssl_certfile: Path | None = None
    ssl_keyfile: Path | None = None

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @field_validator("fetch_timeout_seconds", "base_font_size")
    @classmethod
    def must_be_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("must be positive")
        return v

    @model_validator(mode="after")
    def tls_pair_complete(self) -> "Settings":
        """Certificate and key must be set together or not at all."""
        if (self.ssl_certfile is None) != (self.ssl_keyfile is None):
            raise ValueError(
                "ssl_certfile and ssl_keyfile must both be set to enable TLS",
            )
        return self

    @property
    def tls_enabled(self) -> bool:
        return self.ssl_certfile is not None and self.ssl_keyfile is not None


@lru_cache
def get_settings() -> Settings:
    return Settings()
