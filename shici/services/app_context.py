"""Application Context — the immutable bundle every request reads from.

Invariants:
    - Built once in the lifespan, after the token and font are ready
    - Never mutated; requests share it by reference
    - Reached through the get_context dependency, never imported as a global
"""

from dataclasses import dataclass

from fastapi import HTTPException, Request, status

from shici.config import Settings
from shici.core.domain_types import (
    AccessToken, FragmentStyle, author_style, content_style,
)
from shici.core.glyph_layout import FontFace
from shici.core.page_composer import PageComposer
from shici.infrastructure.jinrishici_client import PoemClient


@dataclass(frozen=True)
class AppContext:
    token: AccessToken
    font: FontFace
    composer: PageComposer
    poem_client: PoemClient
    content_style: FragmentStyle
    author_style: FragmentStyle

    @classmethod
    def build(
        cls,
        settings: Settings,
        *,
        token: AccessToken,
        font: FontFace,
        composer: PageComposer,
        poem_client: PoemClient,
    ) -> "AppContext":
        return cls(
            token=token,
            font=font,
            composer=composer,
            poem_client=poem_client,
            content_style=content_style(settings.base_font_size, settings.content_fill),
            author_style=author_style(settings.base_font_size, settings.author_fill),
        )


def get_context(request: Request) -> AppContext:
    """FastAPI dependency returning the context stored on app.state."""
    context = getattr(request.app.state, "context", None)
    if context is None:
        raise HTTPException(status.HTTP_503_SERVICE_UNAVAILABLE)
    return context
