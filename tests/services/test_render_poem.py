"""Render Poem — orchestration of fetch → parse → layout ×2 → compose.

Tests cover:
    - Page contains both fragments with their own fill and size
    - One upstream request per page, carrying the token
    - Failures at each step surface as the matching ShiciError
    - Unexpected layout/composition exceptions are wrapped
"""

import dataclasses
import xml.etree.ElementTree as ET

import httpx
import pytest

from shici.core.errors import (
    GlyphLayoutError, PoemFetchError, PoemParseError, TemplateRenderError,
)
from shici.core.page_composer import PageComposer
from shici.services import render_poem
from shici.services.render_poem import render_poem_page, render_text_fragment

SVG = "{http://www.w3.org/2000/svg}"


def _fragments(page: str) -> list[ET.Element]:
    fragments = []
    start = page.find("<svg")
    while start != -1:
        end = page.index("</svg>", start) + len("</svg>")
        fragments.append(ET.fromstring(page[start:end]))
        start = page.find("<svg", end)
    return fragments


async def test_page_has_body_and_attribution_fragments(context, upstream):
    page = await render_poem_page(context)

    content, author = _fragments(page)
    assert content.find(f"{SVG}title").text == "床前明月光"
    assert content.find(f"{SVG}path").get("fill") == "#cca4e3"
    assert author.find(f"{SVG}title").text == "——《静夜思》唐·李白"
    assert author.find(f"{SVG}path").get("fill") == "#e4c6d0"
    # body at 112/2 is taller than attribution at 112/3
    assert float(content.get("height")) > float(author.get("height"))
    assert len(upstream.requests) == 1
    assert upstream.requests[0].headers["X-User-Token"] == "abc123"


async def test_each_call_fetches_again(context, upstream):
    await render_poem_page(context)
    await render_poem_page(context)
    assert len(upstream.requests) == 2


async def test_upstream_failure_raises_fetch_error(context, upstream):
    upstream.respond = lambda r: httpx.Response(502)
    with pytest.raises(PoemFetchError):
        await render_poem_page(context)


async def test_bad_payload_raises_parse_error(context, upstream):
    upstream.respond = lambda r: httpx.Response(200, json={"data": {"content": "床前明月光"}})
    with pytest.raises(PoemParseError) as exc_info:
        await render_poem_page(context)
    assert exc_info.value.field == "data.origin"


async def test_unexpected_layout_failure_is_wrapped(context, monkeypatch):
    def explode(font, text, size):
        raise KeyError("glyf")

    monkeypatch.setattr(render_poem, "layout_text", explode)
    with pytest.raises(GlyphLayoutError):
        await render_poem_page(context)


async def test_template_failure_raises_render_error(context):
    broken = PageComposer("{{ content }}{{ missing_slot }}")
    with pytest.raises(TemplateRenderError):
        await render_poem_page(dataclasses.replace(context, composer=broken))


async def test_render_text_fragment_uses_style(font_face, context):
    fragment = ET.fromstring(
        render_text_fragment(font_face, "李白", context.author_style),
    )
    assert fragment.find(f"{SVG}path").get("fill") == "#e4c6d0"
    # two glyphs at 112/3: (1000 + 950) * (112/3) / 1000
    assert float(fragment.get("width")) == pytest.approx(72.8, abs=0.01)
