"""Interactive viewer loop.

The viewer is demand-driven: it renders one frame per key press and never on
a timer. Each step

1. applies the key to the camera state,
2. re-renders the whole viewport into the frame buffer,
3. redraws only the cells that changed.

The camera state and frame buffer are created once and owned by the viewer
for its whole lifetime.

Example:
    >>> from src.sphereview.preview.interactive import InteractiveViewer
    >>> from src.sphereview.preview.terminal import TerminalSurface
    >>>
    >>> with TerminalSurface() as surface:
    ...     viewer = InteractiveViewer(surface)
    ...     viewer.run()   # Blocks until input ends or Ctrl-C
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from src.sphereview.camera.controls import CameraState
from src.sphereview.core.renderer import FrameBuffer, render_frame
from src.sphereview.preview.diff import DiffPresenter
from src.sphereview.scene.params import SceneParams

if TYPE_CHECKING:
    from src.sphereview.preview.terminal import TerminalSurface

logger = logging.getLogger(__name__)

START_PROMPT = "Press any key to start"


class InteractiveViewer:
    """Keyboard-driven render loop over a display surface.

    Attributes:
        params: Scene parameters.
        camera: The camera state, mutated by key presses.
        frame: The persistent frame buffer.
        presenter: Diff presenter writing to the surface.
        frame_count: Number of frames rendered so far.
    """

    def __init__(
        self,
        surface: TerminalSurface,
        params: SceneParams | None = None,
        *,
        full_ramp: bool = False,
    ) -> None:
        """Initialize the viewer.

        Args:
            surface: Display surface that also provides key input.
            params: Scene parameters (default: SceneParams()).
            full_ramp: Draw all seven ramp levels instead of two tones.
        """
        self.params = params if params is not None else SceneParams()
        self.surface = surface
        self.camera = CameraState.from_tuple(
            self.params.camera_position, step=self.params.move_step
        )
        self.frame = FrameBuffer(self.params.width, self.params.height)
        self.presenter = DiffPresenter(surface, full_ramp=full_ramp)
        self.frame_count = 0

    def start(self) -> None:
        """Clear the surface and show the start prompt."""
        self.surface.clear()
        self.surface.write(START_PROMPT)
        self.surface.flush()

    def step(self, key: str) -> int:
        """Process one key press: move, render and present.

        Unbound keys leave the camera alone but still trigger a render.

        Args:
            key: The character that was read.

        Returns:
            Number of cells redrawn.
        """
        self.camera.apply_key(key)
        dirty = render_frame(self.camera, self.frame, self.params)
        presented = self.presenter.present(self.frame)
        self.frame_count += 1
        logger.debug("Frame %d: %d dirty cells", self.frame_count, dirty)
        return presented

    def run(self) -> None:
        """Run until the input source is exhausted.

        Ctrl-C propagates as KeyboardInterrupt to the caller.
        """
        self.start()
        logger.info(
            "Viewer started (%dx%d grid, camera at %s)",
            self.params.width,
            self.params.height,
            self.camera.as_tuple(),
        )
        while True:
            key = self.surface.read_key()
            if key is None:
                break
            self.step(key)
        logger.info("Input closed after %d frames", self.frame_count)
