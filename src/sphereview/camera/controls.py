"""Keyboard-driven camera state.

The camera position is the only state that changes between frames. It lives
in a CameraState object owned by the interactive loop and is handed by
reference to the renderer. Each recognized key moves the camera by one step
along a single axis:

    w: +z (forward)    s: -z (backward)
    a: -x (left)       d: +x (right)
    y: +y (up)         x: -y (down)

Every other key is ignored.

Example:
    >>> camera = CameraState()
    >>> camera.apply_key("w")
    True
    >>> camera.apply_key("q")
    False
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import numpy as np
import numpy.typing as npt

from src.sphereview.scene.params import CAMERA_POSITION, MOVE_STEP

logger = logging.getLogger(__name__)

# Key -> (axis index, direction sign)
KEY_BINDINGS: dict[str, tuple[int, int]] = {
    "w": (2, 1),
    "s": (2, -1),
    "a": (0, -1),
    "d": (0, 1),
    "y": (1, 1),
    "x": (1, -1),
}


def _default_position() -> npt.NDArray[np.float32]:
    return np.array(CAMERA_POSITION, dtype=np.float32)


@dataclass
class CameraState:
    """Mutable camera position.

    The position is stored in float32, the precision the render kernel
    works in, and each step is rounded back to float32 after adding.

    Attributes:
        position: Camera position as a float32 array (x, y, z).
        step: Distance moved per key press.
    """

    position: npt.NDArray[np.float32] = field(default_factory=_default_position)
    step: float = MOVE_STEP

    def __post_init__(self) -> None:
        self.position = np.array(self.position, dtype=np.float32).reshape(3)

    @classmethod
    def from_tuple(
        cls,
        position: tuple[float, float, float],
        step: float = MOVE_STEP,
    ) -> CameraState:
        """Create a camera state at the given position."""
        return cls(position=np.array(position, dtype=np.float32), step=step)

    def move(self, axis: int, sign: int) -> None:
        """Move the camera one step along an axis.

        Args:
            axis: 0 for x, 1 for y, 2 for z.
            sign: +1 or -1.
        """
        self.position[axis] = np.float32(float(self.position[axis]) + sign * self.step)

    def apply_key(self, key: str) -> bool:
        """Apply a key press to the camera.

        Args:
            key: A single character read from the input source.

        Returns:
            True if the key is bound and the camera moved, False otherwise.
        """
        binding = KEY_BINDINGS.get(key)
        if binding is None:
            return False
        axis, sign = binding
        self.move(axis, sign)
        logger.debug("Key %r moved camera to %s", key, self.as_tuple())
        return True

    def as_tuple(self) -> tuple[float, float, float]:
        """Camera position as a tuple of Python floats."""
        return (
            float(self.position[0]),
            float(self.position[1]),
            float(self.position[2]),
        )
