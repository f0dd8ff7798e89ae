"""Camera module.

Components:
    pinhole: Viewport fitting and primary ray generation
    controls: Mutable camera state and keyboard bindings

Example:
    >>> from src.sphereview.camera import CameraState, viewport_size
    >>> camera = CameraState()
    >>> camera.apply_key("d")
    True
    >>> viewport_size(200, 250)
    (200, 112)
"""

from .controls import KEY_BINDINGS, CameraState
from .pinhole import get_ray, grid_aspect_ratio, view_plane_uv, viewport_size

__all__ = [
    "CameraState",
    "KEY_BINDINGS",
    "viewport_size",
    "grid_aspect_ratio",
    "view_plane_uv",
    "get_ray",
]
