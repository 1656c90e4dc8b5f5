"""Glyph Layout — text → outline path + bounding box → standalone SVG fragment.

Invariants:
    - Glyphs advance left to right from x = 0 using the font's horizontal metrics
    - Scale maps the hhea ascent-to-descent height onto `size` layout units
    - Baseline sits at ascent * scale; the y axis points down (SVG convention)
    - Bounding box is the max corner of the drawn ink, clamped at 0
    - Canvas height is 1.5 × the bounding box height
    - Deterministic and uncached: same input → same output, recomputed every call

Design Decisions:
    - fontTools pens over rasterizing: outlines stay vectors, no image dependency
    - FontFace holds pre-extracted tables so requests only read, never decompile
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping
import xml.etree.ElementTree as ET

from fontTools.misc.transform import Transform
from fontTools.pens.boundsPen import BoundsPen
from fontTools.pens.svgPathPen import SVGPathPen
from fontTools.pens.transformPen import TransformPen
from fontTools.ttLib import TTFont

from shici.core.domain_types import BoundingBox, GlyphLayout
from shici.core.errors import GlyphLayoutError

SVG_NAMESPACE = "http://www.w3.org/2000/svg"
CANVAS_HEIGHT_RATIO = 1.5


def format_number(value: float) -> str:
    """Compact decimal: at most 2 places, no trailing zeros, no '-0'."""
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


@dataclass(frozen=True)
class FontFace:
    """Read-only view of a loaded font, shared by all requests."""
    ttfont: TTFont
    glyph_set: Any
    cmap: Mapping[int, str]
    kerning: Mapping[tuple[str, str], int]
    ascent: int
    descent: int
    notdef: str
    family: str

    @classmethod
    def from_ttfont(cls, ttfont: TTFont) -> "FontFace":
        hhea = ttfont["hhea"]
        cmap = ttfont.getBestCmap()
        if not cmap:
            raise ValueError("font has no Unicode cmap")
        if hhea.ascent - hhea.descent <= 0:
            raise ValueError("font has a non-positive ascent-to-descent height")
        glyph_order = ttfont.getGlyphOrder()
        notdef = ".notdef" if ".notdef" in glyph_order else glyph_order[0]
        family = ""
        if "name" in ttfont:
            family = ttfont["name"].getDebugName(1) or ""
        return cls(
            ttfont=ttfont,
            glyph_set=ttfont.getGlyphSet(),
            cmap=MappingProxyType(dict(cmap)),
            kerning=MappingProxyType(_kerning_pairs(ttfont)),
            ascent=hhea.ascent,
            descent=hhea.descent,
            notdef=notdef,
            family=family,
        )

    @property
    def line_height(self) -> int:
        return self.ascent - self.descent

    def glyph_name(self, char: str) -> str:
        return self.cmap.get(ord(char), self.notdef)


def _kerning_pairs(ttfont: TTFont) -> dict[tuple[str, str], int]:
    """Pairs from format-0 subtables of a legacy `kern` table, if any."""
    pairs: dict[tuple[str, str], int] = {}
    if "kern" not in ttfont:
        return pairs
    for subtable in ttfont["kern"].kernTables:
        pairs.update(getattr(subtable, "kernTable", None) or {})
    return pairs


def layout_text(font: FontFace, text: str, size: float) -> GlyphLayout:
    """Lay out `text` on one line at `size` and return its path and extent."""
    if size <= 0:
        raise GlyphLayoutError(f"font size must be positive, got {size}")

    scale = size / font.line_height
    baseline = font.ascent * scale
    path_pen = SVGPathPen(font.glyph_set, ntos=format_number)
    bounds_pen = BoundsPen(font.glyph_set)

    caret = 0.0
    previous: str | None = None
    for char in text:
        name = font.glyph_name(char)
        if previous is not None:
            caret += font.kerning.get((previous, name), 0) * scale
        glyph = font.glyph_set[name]
        # Flip y: font units point up, SVG points down.
        transform = Transform(scale, 0, 0, -scale, caret, baseline)
        glyph.draw(TransformPen(path_pen, transform))
        glyph.draw(TransformPen(bounds_pen, transform))
        caret += glyph.width * scale
        previous = name

    bounds = bounds_pen.bounds
    if bounds is None:
        box = BoundingBox(width=0.0, height=0.0)
    else:
        _, _, x_max, y_max = bounds
        box = BoundingBox(width=max(x_max, 0.0), height=max(y_max, 0.0))
    return GlyphLayout(path_data=path_pen.getCommands(), bounding_box=box)


def render_fragment(layout: GlyphLayout, fill: str, label: str) -> str:
    """Serialize a layout as an <svg> document with a single filled path."""
    svg = ET.Element("svg", {
        "xmlns": SVG_NAMESPACE,
        "width": format_number(layout.bounding_box.width),
        "height": format_number(
            layout.bounding_box.height * CANVAS_HEIGHT_RATIO,
        ),
        "role": "img",
        "aria-label": label,
    })
    ET.SubElement(svg, "title").text = label
    ET.SubElement(svg, "path", {"d": layout.path_data, "fill": fill})
    return ET.tostring(svg, encoding="unicode")
