"""Domain Types — value objects shared by the fetch, layout and compose steps.

Invariants:
    - All value objects are frozen: nothing request-scoped is mutated after creation
    - AccessToken is an opaque string, never parsed or validated
    - BoundingBox is the max corner of the laid-out ink, origin at layout start

Design Decisions:
    - NewType for the token: zero runtime cost, full type-checker support
    - Frozen dataclasses over pydantic models: core/ stays free of IO and validation libs
"""

from dataclasses import dataclass
from typing import NewType


AccessToken = NewType("AccessToken", str)

ATTRIBUTION_FORMAT = "——《{title}》{dynasty}·{author}"


def format_attribution(title: str, dynasty: str, author: str) -> str:
    """Attribution line, e.g. ——《静夜思》唐·李白."""
    return ATTRIBUTION_FORMAT.format(title=title, dynasty=dynasty, author=author)


@dataclass(frozen=True)
class PoemRecord:
    """One poem sentence with its origin."""
    content: str
    title: str
    dynasty: str
    author: str

    @property
    def attribution(self) -> str:
        return format_attribution(self.title, self.dynasty, self.author)


@dataclass(frozen=True)
class BoundingBox:
    width: float
    height: float


@dataclass(frozen=True)
class GlyphLayout:
    """Combined SVG path data for a line of text plus its extent."""
    path_data: str
    bounding_box: BoundingBox


@dataclass(frozen=True)
class FragmentStyle:
    """Font size (layout units) and fill colour of one rendered fragment."""
    size: float
    fill: str


BASE_FONT_SIZE = 112.0
CONTENT_FILL = "#cca4e3"
AUTHOR_FILL = "#e4c6d0"


def content_style(base_size: float = BASE_FONT_SIZE, fill: str = CONTENT_FILL) -> FragmentStyle:
    """Poem body: half the base size."""
    return FragmentStyle(size=base_size / 2, fill=fill)


def author_style(base_size: float = BASE_FONT_SIZE, fill: str = AUTHOR_FILL) -> FragmentStyle:
    """Attribution line: a third of the base size."""
    return FragmentStyle(size=base_size / 3, fill=fill)
