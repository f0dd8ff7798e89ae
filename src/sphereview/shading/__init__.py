"""Shading module: glyph ramp quantization and the floor checkerboard."""

from .glyphs import (
    BLANK,
    DENSE,
    EMPTY_CELL,
    RAMP_SIZE,
    SHADE_RAMP,
    get_shade,
    glyph_char,
    glyphs_to_chars,
    is_checkerboard,
    shade_floor,
)

__all__ = [
    "SHADE_RAMP",
    "RAMP_SIZE",
    "BLANK",
    "DENSE",
    "EMPTY_CELL",
    "is_checkerboard",
    "get_shade",
    "shade_floor",
    "glyph_char",
    "glyphs_to_chars",
]
