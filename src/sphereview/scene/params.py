"""Scene configuration.

The scene is fixed: one mirror sphere floating over an infinite
checkerboard floor, viewed from a camera that starts behind and slightly
above the floor. SceneParams gathers the constants in one dataclass so the
renderer, the interactive viewer and the tests share the same defaults.

Example:
    >>> from src.sphereview.scene.params import SceneParams
    >>> params = SceneParams()
    >>> params.sphere_center
    (0.0, 2.0, 3.0)
    >>> small = SceneParams(width=32, height=18)
"""

from __future__ import annotations

from dataclasses import dataclass

# =============================================================================
# Scene Constants
# =============================================================================

# Character grid size
GRID_WIDTH = 200
GRID_HEIGHT = 250

# Initial camera position
CAMERA_POSITION = (0.0, 1.0, -6.0)

# The single sphere
SPHERE_CENTER = (0.0, 2.0, 3.0)
SPHERE_RADIUS = 1.0

# Aspect ratio of the active viewport inside the grid
TARGET_ASPECT_RATIO = 16.0 / 9.0

# Camera translation per key press
MOVE_STEP = 0.2


@dataclass(frozen=True)
class SceneParams:
    """Parameters describing the grid, camera start and sphere.

    Attributes:
        width: Grid width in character cells.
        height: Grid height in character cells.
        camera_position: Initial camera position (x, y, z).
        sphere_center: Center of the sphere (x, y, z).
        sphere_radius: Radius of the sphere.
        target_aspect_ratio: Width/height ratio of the rendered viewport.
            Cells outside that viewport are never rendered.
        move_step: Camera translation per key press.
    """

    width: int = GRID_WIDTH
    height: int = GRID_HEIGHT
    camera_position: tuple[float, float, float] = CAMERA_POSITION
    sphere_center: tuple[float, float, float] = SPHERE_CENTER
    sphere_radius: float = SPHERE_RADIUS
    target_aspect_ratio: float = TARGET_ASPECT_RATIO
    move_step: float = MOVE_STEP

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Grid dimensions must be positive, got {self.width}x{self.height}"
            )
        if self.sphere_radius <= 0.0:
            raise ValueError(f"Sphere radius must be positive, got {self.sphere_radius}")
        if self.target_aspect_ratio <= 0.0:
            raise ValueError(
                f"Target aspect ratio must be positive, got {self.target_aspect_ratio}"
            )

    @property
    def cell_count(self) -> int:
        """Number of cells in the grid."""
        return self.width * self.height
