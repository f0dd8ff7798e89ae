"""Scene configuration module.

Components:
    params: SceneParams dataclass and the default scene constants

Example:
    >>> from src.sphereview.scene import SceneParams
    >>> params = SceneParams()
    >>> params.width, params.height
    (200, 250)
"""

from .params import (
    CAMERA_POSITION,
    GRID_HEIGHT,
    GRID_WIDTH,
    MOVE_STEP,
    SPHERE_CENTER,
    SPHERE_RADIUS,
    TARGET_ASPECT_RATIO,
    SceneParams,
)

__all__ = [
    "SceneParams",
    "GRID_WIDTH",
    "GRID_HEIGHT",
    "CAMERA_POSITION",
    "SPHERE_CENTER",
    "SPHERE_RADIUS",
    "TARGET_ASPECT_RATIO",
    "MOVE_STEP",
]
