"""Glyph shading ramp and floor checkerboard.

Surfaces are quantized to one of seven glyphs, ordered from emptiest to
densest:

    index:  0    1    2    3    4    5    6
    glyph: ' '  '.'  ':'  '-'  '='  '+'  '*'

Inside Taichi kernels glyphs are carried as ramp indices (i32). The Python
helpers at the bottom of this module turn indices back into characters.

The floor is a unit-cell checkerboard on the xz-plane: a point lies on a
"dense" tile when floor(x) + floor(z) is even.

Example:
    >>> from src.sphereview.shading.glyphs import glyph_char, DENSE
    >>> glyph_char(DENSE)
    '*'
"""


import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

# Type alias for 3D vectors
vec3 = tm.vec3

# =============================================================================
# Shading Ramp
# =============================================================================

SHADE_RAMP = " .:-=+*"
RAMP_SIZE = len(SHADE_RAMP)

# Ramp indices with special meaning
BLANK = 0
DENSE = RAMP_SIZE - 1

# Buffer value for a cell that has never been rendered
EMPTY_CELL = -1


@ti.func
def is_checkerboard(point: vec3) -> ti.i32:
    """Checkerboard test on the xz-plane.

    Args:
        point: Any point; its y component is ignored.

    Returns:
        1 if floor(x) + floor(z) is even, 0 otherwise.
    """
    checker_x = ti.cast(ti.floor(point.x), ti.i32)
    checker_z = ti.cast(ti.floor(point.z), ti.i32)
    result = 0
    if (checker_x + checker_z) % 2 == 0:
        result = 1
    return result


@ti.func
def get_shade(intensity: ti.f32, reflective: ti.i32) -> ti.i32:
    """Quantize an intensity to a ramp index.

    The intensity is clamped to [0, 1] and mapped to
    min(int(intensity * 6), 6).

    Reflective surfaces get that ramp index directly. Non-reflective
    surfaces get DENSE or BLANK from a checkerboard test on the point
    (intensity, 0, 0), so only an intensity of exactly 1 comes out BLANK.

    Args:
        intensity: Shading intensity; values outside [0, 1] are clamped.
        reflective: 1 for ramp shading, 0 for the two-tone branch.

    Returns:
        A ramp index in [0, RAMP_SIZE - 1].
    """
    level = intensity
    if level < 0.0:
        level = 0.0
    if level > 1.0:
        level = 1.0

    index = ti.min(ti.cast(level * (RAMP_SIZE - 1), ti.i32), RAMP_SIZE - 1)
    if reflective == 0:
        index = BLANK
        if is_checkerboard(vec3(level, 0.0, 0.0)) == 1:
            index = DENSE
    return index


@ti.func
def shade_floor(point: vec3) -> ti.i32:
    """Shade a point on the floor plane.

    Full intensity through the reflective branch gives DENSE on even tiles.
    On odd tiles the two-tone branch sees intensity 1, which lands on an odd
    cell of its own test and gives BLANK.

    Args:
        point: The floor hit point.

    Returns:
        DENSE or BLANK.
    """
    return get_shade(1.0, is_checkerboard(point))


# =============================================================================
# Python-side Helpers
# =============================================================================


def glyph_char(index: int) -> str:
    """Return the ramp character for an index.

    Cells that were never rendered (EMPTY_CELL) read as blank.

    Raises:
        ValueError: If index is outside the ramp.
    """
    if index == EMPTY_CELL:
        return SHADE_RAMP[BLANK]
    if not 0 <= index < RAMP_SIZE:
        raise ValueError(f"Glyph index {index} outside ramp [0, {RAMP_SIZE - 1}]")
    return SHADE_RAMP[index]


def glyphs_to_chars(glyphs: npt.NDArray[np.int32]) -> npt.NDArray[np.str_]:
    """Map an array of ramp indices to an array of single characters.

    Args:
        glyphs: Integer array of ramp indices (any shape). EMPTY_CELL entries
            map to blank.

    Returns:
        Array of the same shape with dtype '<U1'.
    """
    lookup = np.array(list(SHADE_RAMP), dtype="<U1")
    indices = np.where(glyphs == EMPTY_CELL, BLANK, glyphs)
    return lookup[indices]
