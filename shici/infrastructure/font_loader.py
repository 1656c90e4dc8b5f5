"""Font Loader — parses the font file once at startup into a shared FontFace."""

import logging
from pathlib import Path

from fontTools.ttLib import TTFont, TTLibError

from shici.core.errors import FontLoadError
from shici.core.glyph_layout import FontFace

logger = logging.getLogger(__name__)


def load_font_face(path: Path) -> FontFace:
    """Load and fully decompile a TrueType/OpenType font.

    Raises FontLoadError if the file is missing, unreadable or lacks the
    tables glyph layout needs (cmap, hhea, hmtx, outlines).
    """
    path = Path(path)
    try:
        ttfont = TTFont(str(path), lazy=False)
        # Decompile every table now so requests never trigger lazy loading.
        ttfont.ensureDecompiled()
        face = FontFace.from_ttfont(ttfont)
    except FileNotFoundError as e:
        raise FontLoadError(str(path), "file not found") from e
    except (TTLibError, KeyError, ValueError, OSError) as e:
        raise FontLoadError(str(path), str(e) or type(e).__name__) from e

    logger.info(
        f"Loaded font with {len(face.cmap)} mapped characters",
        extra={"font_family": face.family},
    )
    return face
