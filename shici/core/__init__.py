"""Core Layer — poem parsing, glyph layout and page composition.

Invariants:
    - No module in core/ imports from services/, api/ or infrastructure/
    - No network access; the only file read is the bundled page template
"""
