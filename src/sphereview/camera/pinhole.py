"""Pinhole camera: viewport fitting and primary ray generation.

The camera always looks down +z with +y up and a view plane at unit
distance. A character grid usually does not have the target aspect ratio,
so only a sub-rectangle anchored at the top-left corner is rendered:

- view_height = int(width / target_aspect)
- if that exceeds the grid height, view_height = height and
  view_width = int(height * target_aspect)

Cell (x, y) of that viewport maps to view-plane coordinates

    u = (x - view_width / 2) / view_width * (width / height)
    v = (view_height / 2 - y) / view_height

and the primary ray runs from the camera position through (u, v, 1).

Example:
    >>> from src.sphereview.camera.pinhole import viewport_size
    >>> viewport_size(200, 250)
    (200, 112)
"""


import taichi as ti
import taichi.math as tm

from src.sphereview.core.ray import Ray, make_ray
from src.sphereview.scene.params import TARGET_ASPECT_RATIO

# Type alias for 3D vectors
vec3 = tm.vec3


def viewport_size(
    width: int,
    height: int,
    target_aspect_ratio: float = TARGET_ASPECT_RATIO,
) -> tuple[int, int]:
    """Size of the rendered sub-rectangle of a width x height grid.

    Args:
        width: Grid width in cells.
        height: Grid height in cells.
        target_aspect_ratio: Desired width/height ratio of the viewport.

    Returns:
        Tuple (view_width, view_height), each no larger than the grid.
    """
    view_width = width
    view_height = int(width / target_aspect_ratio)
    if view_height > height:
        view_height = height
        view_width = int(height * target_aspect_ratio)
    return view_width, view_height


def grid_aspect_ratio(width: int, height: int) -> float:
    """Width/height ratio of the whole grid, used to scale u."""
    return width / height


@ti.func
def view_plane_uv(
    x: ti.i32,
    y: ti.i32,
    view_width: ti.i32,
    view_height: ti.i32,
    aspect_ratio: ti.f32,
):
    """Map a viewport cell to view-plane coordinates.

    Args:
        x: Cell column (0 = left).
        y: Cell row (0 = top).
        view_width: Viewport width in cells.
        view_height: Viewport height in cells.
        aspect_ratio: Grid width/height ratio.

    Returns:
        Tuple (u, v); u grows to the right and v grows upward.
    """
    fw = ti.cast(view_width, ti.f32)
    fh = ti.cast(view_height, ti.f32)
    u = (ti.cast(x, ti.f32) - fw / 2.0) / fw * aspect_ratio
    v = (fh / 2.0 - ti.cast(y, ti.f32)) / fh
    return u, v


@ti.func
def get_ray(origin: vec3, u: ti.f32, v: ti.f32) -> Ray:
    """Primary ray from the camera through (u, v, 1) on the view plane."""
    return make_ray(origin, vec3(u, v, 1.0))
