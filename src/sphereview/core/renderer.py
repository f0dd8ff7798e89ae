"""Frame renderer with per-cell change tracking.

This module implements the per-frame render pass. Every cell of the active
viewport casts one primary ray from the camera:

1. Sphere hit: the ray is mirrored about the surface normal. If the mirrored
   ray reaches the floor at a positive distance, the floor point it lands on
   is shaded; otherwise the sphere itself is shaded from the raw hit
   distance.
2. Sphere miss, ray heading down: the floor point under the camera ray is
   shaded. The distance is not checked, so a camera below the floor still
   shades a floor point.
3. Anything else is sky and stays blank.

The resulting glyph is compared with the one already in the frame buffer;
only changed cells are written and flagged dirty. Cells outside the viewport
are never visited, so they keep their glyph and are never flagged.

The outer loop of the render kernel is parallelized by Taichi. Each
iteration owns one cell index, and the kernel finishes before the caller can
read the buffers.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.sphereview.camera.controls import CameraState
    >>> from src.sphereview.core.renderer import FrameBuffer, render_frame
    >>> frame = FrameBuffer(200, 250)
    >>> camera = CameraState()
    >>> render_frame(camera, frame)   # first pass: every visible cell is dirty
    22400
    >>> render_frame(camera, frame)   # nothing moved
    0
"""


import logging
import time
from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

from src.sphereview.camera.pinhole import get_ray, grid_aspect_ratio, view_plane_uv, viewport_size
from src.sphereview.core.ray import Ray, make_ray, reflect
from src.sphereview.geometry.floor import floor_distance, hit_floor
from src.sphereview.geometry.sphere import Sphere, hit_sphere, make_sphere
from src.sphereview.scene.params import SceneParams
from src.sphereview.shading.glyphs import BLANK, EMPTY_CELL, get_shade, shade_floor

if TYPE_CHECKING:
    from src.sphereview.camera.controls import CameraState

logger = logging.getLogger(__name__)

# Type alias for 3D vectors
vec3 = tm.vec3

DEFAULT_PARAMS = SceneParams()


# =============================================================================
# Frame Buffer
# =============================================================================


class FrameBuffer:
    """Glyph buffer plus dirty flags for a width x height character grid.

    Both buffers are flat, row-major Taichi fields of length width * height.
    The glyph buffer holds ramp indices and represents what is currently on
    screen; a fresh buffer holds EMPTY_CELL everywhere so the first render
    flags every visited cell. The dirty flags (0/1) describe the most
    recent render pass only.

    Attributes:
        width: Grid width in cells.
        height: Grid height in cells.
        glyphs: Taichi i32 field of ramp indices.
        changed: Taichi i32 field of dirty flags.
    """

    def __init__(self, width: int, height: int) -> None:
        """Allocate the buffers.

        Args:
            width: Grid width in cells.
            height: Grid height in cells.

        Raises:
            ValueError: If either dimension is not positive.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Frame dimensions must be positive, got {width}x{height}")

        self._width = width
        self._height = height
        self.glyphs = ti.field(dtype=ti.i32, shape=width * height)
        self.changed = ti.field(dtype=ti.i32, shape=width * height)
        self.clear()

    @property
    def width(self) -> int:
        """Get the grid width."""
        return self._width

    @property
    def height(self) -> int:
        """Get the grid height."""
        return self._height

    def clear(self) -> None:
        """Forget everything on screen: all cells empty, no dirty flags."""
        self.glyphs.fill(EMPTY_CELL)
        self.changed.fill(0)

    def glyphs_numpy(self) -> npt.NDArray[np.int32]:
        """Glyph buffer as a (height, width) int32 array."""
        return self.glyphs.to_numpy().reshape(self._height, self._width)

    def changed_numpy(self) -> npt.NDArray[np.bool_]:
        """Dirty flags as a (height, width) bool array."""
        return self.changed.to_numpy().reshape(self._height, self._width).astype(bool)

    def dirty_count(self) -> int:
        """Number of cells flagged by the last render pass."""
        return int(np.count_nonzero(self.changed.to_numpy()))

    def __repr__(self) -> str:
        """Return a string representation of the buffer."""
        return f"FrameBuffer(width={self._width}, height={self._height})"


# =============================================================================
# Per-ray Shading
# =============================================================================


@ti.func
def shade_ray(ray: Ray, sphere: Sphere) -> ti.i32:
    """Resolve the glyph seen along a primary ray.

    Args:
        ray: Primary ray from the camera.
        sphere: The scene's sphere.

    Returns:
        A ramp index.
    """
    glyph = BLANK
    rec = hit_sphere(ray, sphere)
    if rec.hit == 1:
        bounce = make_ray(rec.point, reflect(ray.direction, rec.normal))
        bounce_dist = floor_distance(bounce)
        if bounce_dist > 0.0:
            glyph = shade_floor(hit_floor(bounce, bounce_dist))
        else:
            glyph = get_shade(rec.t, 1)
    elif ray.direction.y < 0.0:
        glyph = shade_floor(hit_floor(ray, floor_distance(ray)))
    return glyph


@ti.kernel
def _render_kernel(
    camera: vec3,
    sphere_center: vec3,
    sphere_radius: ti.f32,
    width: ti.i32,
    view_width: ti.i32,
    view_height: ti.i32,
    aspect_ratio: ti.f32,
    glyphs: ti.template(),
    changed: ti.template(),
) -> ti.i32:
    sphere = make_sphere(sphere_center, sphere_radius)
    dirty = 0
    for y, x in ti.ndrange(view_height, view_width):
        u, v = view_plane_uv(x, y, view_width, view_height, aspect_ratio)
        glyph = shade_ray(get_ray(camera, u, v), sphere)

        idx = y * width + x
        if glyph != glyphs[idx]:
            glyphs[idx] = glyph
            changed[idx] = 1
            dirty += 1
    return dirty


def render_frame(
    camera: "CameraState",
    frame: FrameBuffer,
    params: SceneParams = DEFAULT_PARAMS,
) -> int:
    """Render one frame into the buffer and flag the cells that changed.

    Dirty flags are reset first, so after this call they describe exactly
    the cells whose glyph differs from the previous frame.

    Args:
        camera: Current camera state. Not modified.
        frame: Buffer to update in place.
        params: Scene parameters (sphere and viewport aspect ratio).

    Returns:
        Number of dirty cells.

    Raises:
        ValueError: If the frame size differs from the grid in params.
    """
    if (frame.width, frame.height) != (params.width, params.height):
        raise ValueError(
            f"Frame is {frame.width}x{frame.height} but the scene grid is "
            f"{params.width}x{params.height}"
        )

    view_width, view_height = viewport_size(
        frame.width, frame.height, params.target_aspect_ratio
    )
    position = camera.as_tuple()

    start = time.perf_counter()
    frame.changed.fill(0)
    dirty = _render_kernel(
        vec3(*position),
        vec3(*params.sphere_center),
        params.sphere_radius,
        frame.width,
        view_width,
        view_height,
        grid_aspect_ratio(frame.width, frame.height),
        frame.glyphs,
        frame.changed,
    )
    elapsed_ms = (time.perf_counter() - start) * 1000.0

    logger.debug(
        "Rendered %dx%d viewport from %s in %.2f ms (%d dirty cells)",
        view_width,
        view_height,
        position,
        elapsed_ms,
        dirty,
    )
    return int(dirty)
