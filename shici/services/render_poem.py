"""Render Poem — fetch → parse → lay out (×2) → compose, for a single request.

Invariants:
    - One upstream call per page; no retry at any step
    - Every failure leaves as a ShiciError subclass; partial pages never escape
    - Layout and composition are recomputed on every call

Design Decisions:
    - Unexpected fontTools/Jinja2 exceptions are wrapped at this boundary so the
      route only has to know about ShiciError
"""

import logging

from shici.core.domain_types import FragmentStyle, PoemRecord
from shici.core.errors import GlyphLayoutError, ShiciError, TemplateRenderError
from shici.core.glyph_layout import FontFace, layout_text, render_fragment
from shici.core.poem_parser import parse_poem
from shici.services.app_context import AppContext

logger = logging.getLogger(__name__)


def render_text_fragment(font: FontFace, text: str, style: FragmentStyle) -> str:
    """Lay out one line of text and serialize it as an SVG fragment."""
    try:
        layout = layout_text(font, text, style.size)
        return render_fragment(layout, style.fill, text)
    except ShiciError:
        raise
    except Exception as e:
        raise GlyphLayoutError(f"{type(e).__name__}: {e}") from e


def compose_page(context: AppContext, poem: PoemRecord) -> str:
    content_svg = render_text_fragment(context.font, poem.content, context.content_style)
    author_svg = render_text_fragment(context.font, poem.attribution, context.author_style)
    try:
        return context.composer.compose(content=content_svg, author=author_svg)
    except ShiciError:
        raise
    except Exception as e:
        raise TemplateRenderError(f"{type(e).__name__}: {e}") from e


async def render_poem_page(context: AppContext) -> str:
    """Build the full HTML page for one random poem sentence."""
    payload = await context.poem_client.fetch_sentence(context.token)
    poem = parse_poem(payload)
    logger.debug(f"Rendering {poem.attribution}")
    return compose_page(context, poem)
