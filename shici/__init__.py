"""shici-canvas — renders a random classical Chinese poem as SVG glyph outlines.

Invariants:
    - Package root holds only the version; import side-effects prohibited
"""

__version__ = "1.0.0"
