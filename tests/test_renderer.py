"""Unit tests for the frame renderer.

Tests cover:
- FrameBuffer allocation and validation
- Per-ray shading for sphere, reflected floor, direct floor and sky rays
- Change tracking across successive render passes
"""

from typing import Any

import numpy as np
import pytest
import taichi as ti
import taichi.math as tm

vec3 = tm.vec3

# Lazy holder - field and kernel are created on first use after Taichi is initialized
_shade_kernel: Any = None


def _get_shade_kernel() -> Any:
    """Get or create the kernel wrapping shade_ray for the default sphere."""
    global _shade_kernel
    if _shade_kernel is None:
        from src.sphereview.core.ray import make_ray
        from src.sphereview.core.renderer import shade_ray
        from src.sphereview.geometry.sphere import make_sphere

        result = ti.field(dtype=ti.i32, shape=())

        @ti.kernel
        def _kernel(origin: vec3, direction: vec3):
            sphere = make_sphere(vec3(0.0, 2.0, 3.0), 1.0)
            result[None] = shade_ray(make_ray(origin, direction), sphere)

        _shade_kernel = (_kernel, result)
    return _shade_kernel


def shade(origin, direction):
    """Shade one ray against the default scene."""
    kernel, result = _get_shade_kernel()
    kernel(vec3(*origin), vec3(*direction))
    return result[None]


class TestFrameBuffer:
    """Tests for FrameBuffer."""

    def test_initial_state(self):
        """Test that a new buffer is empty with no dirty flags."""
        from src.sphereview.core.renderer import FrameBuffer
        from src.sphereview.shading.glyphs import EMPTY_CELL

        frame = FrameBuffer(8, 5)

        assert frame.width == 8
        assert frame.height == 5
        glyphs = frame.glyphs_numpy()
        assert glyphs.shape == (5, 8)
        assert np.all(glyphs == EMPTY_CELL)
        assert frame.changed_numpy().shape == (5, 8)
        assert frame.dirty_count() == 0

    @pytest.mark.parametrize("width, height", [(0, 10), (10, 0), (-1, 5)])
    def test_invalid_dimensions(self, width, height):
        """Test that non-positive dimensions are rejected."""
        from src.sphereview.core.renderer import FrameBuffer

        with pytest.raises(ValueError, match="must be positive"):
            FrameBuffer(width, height)

    def test_clear(self):
        """Test that clear() resets glyphs and flags."""
        from src.sphereview.core.renderer import FrameBuffer
        from src.sphereview.shading.glyphs import EMPTY_CELL

        frame = FrameBuffer(4, 3)
        frame.glyphs.fill(6)
        frame.changed.fill(1)
        frame.clear()

        assert np.all(frame.glyphs_numpy() == EMPTY_CELL)
        assert frame.dirty_count() == 0

    def test_repr(self):
        """Test string representation."""
        from src.sphereview.core.renderer import FrameBuffer

        assert repr(FrameBuffer(3, 2)) == "FrameBuffer(width=3, height=2)"


class TestShadeRay:
    """Tests for shade_ray against the default scene."""

    def test_grazing_forward_ray_is_dense(self):
        """Test the tangent +z ray from the default camera.

        The bounce runs parallel to the floor, so the sphere branch shades the
        raw distance t = 9, which clamps to the densest glyph.
        """
        from src.sphereview.shading.glyphs import DENSE

        assert shade((0.0, 1.0, -6.0), (0.0, 0.0, 1.0)) == DENSE

    def test_upward_bounce_shades_distance(self):
        """Test a close hit whose reflection points at the sky.

        From (0, 2.5, 1.5) the sphere is hit at t ~ 0.634, giving ramp index 3.
        """
        assert shade((0.0, 2.5, 1.5), (0.0, 0.0, 1.0)) == 3

    def test_bounce_to_even_floor_tile_is_dense(self):
        """Test a ray through the sphere center reflecting onto (0.5, 0, -15.5)."""
        from src.sphereview.shading.glyphs import DENSE

        assert shade((0.25, 1.0, -6.25), (-0.25, 1.0, 9.25)) == DENSE

    def test_bounce_to_odd_floor_tile_is_blank(self):
        """Test a ray through the sphere center reflecting onto (1.5, 0, -15.5)."""
        from src.sphereview.shading.glyphs import BLANK

        assert shade((0.75, 1.0, -6.25), (-0.75, 1.0, 9.25)) == BLANK

    def test_direct_floor_even_tile(self):
        """Test a miss heading down onto (1.5, 0, -4.5)."""
        from src.sphereview.shading.glyphs import DENSE

        assert shade((0.0, 1.0, -6.0), (1.5, -1.0, 1.5)) == DENSE

    def test_direct_floor_odd_tile(self):
        """Test a miss heading down onto (0.5, 0, -4.5)."""
        from src.sphereview.shading.glyphs import BLANK

        assert shade((0.0, 1.0, -6.0), (0.5, -1.0, 1.5)) == BLANK

    def test_sky_is_blank(self):
        """Test a miss heading up."""
        from src.sphereview.shading.glyphs import BLANK

        assert shade((0.0, 1.0, -6.0), (0.0, 1.0, 1.0)) == BLANK

    def test_camera_below_floor_still_shades_floor(self):
        """Test that the direct floor distance is not checked for sign.

        From y = -0.2 looking down, the plane lies behind the camera at
        (-0.1, 0, -0.3), which is an even tile.
        """
        from src.sphereview.shading.glyphs import DENSE

        assert shade((0.0, -0.2, 0.0), (0.5, -1.0, 1.5)) == DENSE


class TestRenderFrame:
    """Tests for render_frame and change tracking."""

    def test_first_render_marks_viewport_dirty(self):
        """Test that the first pass flags every cell of the 200x112 viewport."""
        from src.sphereview.camera.controls import CameraState
        from src.sphereview.core.renderer import FrameBuffer, render_frame

        frame = FrameBuffer(200, 250)
        dirty = render_frame(CameraState(), frame)

        assert dirty == 200 * 112
        changed = frame.changed_numpy()
        assert changed[:112, :].all()
        assert frame.dirty_count() == dirty

    def test_rows_outside_viewport_untouched(self):
        """Test that rows below the viewport are never rendered or flagged."""
        from src.sphereview.camera.controls import CameraState
        from src.sphereview.core.renderer import FrameBuffer, render_frame
        from src.sphereview.shading.glyphs import EMPTY_CELL, RAMP_SIZE

        frame = FrameBuffer(200, 250)
        camera = CameraState()
        render_frame(camera, frame)
        camera.apply_key("a")
        render_frame(camera, frame)

        glyphs = frame.glyphs_numpy()
        assert np.all(glyphs[112:, :] == EMPTY_CELL)
        assert not frame.changed_numpy()[112:, :].any()
        assert glyphs[:112, :].min() >= 0
        assert glyphs[:112, :].max() <= RAMP_SIZE - 1

    def test_center_cell_is_dense(self):
        """Test that the cell on the optical axis shows the grazing sphere hit."""
        from src.sphereview.camera.controls import CameraState
        from src.sphereview.core.renderer import FrameBuffer, render_frame
        from src.sphereview.shading.glyphs import DENSE

        frame = FrameBuffer(200, 250)
        render_frame(CameraState(), frame)

        assert frame.glyphs_numpy()[56, 100] == DENSE

    def test_static_camera_second_render_is_clean(self):
        """Test that re-rendering an unchanged camera flags nothing."""
        from src.sphereview.camera.controls import CameraState
        from src.sphereview.core.renderer import FrameBuffer, render_frame

        frame = FrameBuffer(200, 250)
        camera = CameraState()
        render_frame(camera, frame)
        before = frame.glyphs_numpy().copy()

        assert render_frame(camera, frame) == 0
        assert frame.dirty_count() == 0
        np.testing.assert_array_equal(frame.glyphs_numpy(), before)

    def test_moving_camera_flags_exactly_changed_cells(self):
        """Test that dirty flags match the glyph difference between frames."""
        from src.sphereview.camera.controls import CameraState
        from src.sphereview.core.renderer import FrameBuffer, render_frame

        frame = FrameBuffer(200, 250)
        camera = CameraState()
        render_frame(camera, frame)
        before = frame.glyphs_numpy().copy()

        camera.apply_key("w")
        dirty = render_frame(camera, frame)
        after = frame.glyphs_numpy()

        differs = before != after
        assert dirty > 0
        assert dirty == int(differs.sum())
        np.testing.assert_array_equal(frame.changed_numpy(), differs)

    def test_flags_reset_between_passes(self):
        """Test that flags from an earlier pass do not leak into the next."""
        from src.sphereview.camera.controls import CameraState
        from src.sphereview.core.renderer import FrameBuffer, render_frame

        frame = FrameBuffer(200, 250)
        camera = CameraState()
        render_frame(camera, frame)
        camera.apply_key("d")
        assert render_frame(camera, frame) > 0

        assert render_frame(camera, frame) == 0
        assert not frame.changed_numpy().any()

    def test_camera_not_modified(self, small_params):
        """Test that rendering does not move the camera."""
        from src.sphereview.camera.controls import CameraState
        from src.sphereview.core.renderer import FrameBuffer, render_frame

        camera = CameraState()
        render_frame(camera, FrameBuffer(64, 40), small_params)
        assert camera.as_tuple() == (0.0, 1.0, -6.0)

    @pytest.mark.parametrize("width, height", [(64, 41), (63, 40), (200, 250)])
    def test_frame_size_must_match_params(self, small_params, width, height):
        """Test that a buffer sized differently from the scene grid is rejected."""
        from src.sphereview.camera.controls import CameraState
        from src.sphereview.core.renderer import FrameBuffer, render_frame

        frame = FrameBuffer(width, height)
        with pytest.raises(ValueError, match="scene grid is 64x40"):
            render_frame(CameraState(), frame, small_params)
        assert frame.dirty_count() == 0

    def test_small_grid(self, small_params):
        """Test rendering with custom scene parameters."""
        from src.sphereview.camera.controls import CameraState
        from src.sphereview.core.renderer import FrameBuffer, render_frame
        from src.sphereview.shading.glyphs import EMPTY_CELL

        frame = FrameBuffer(small_params.width, small_params.height)
        dirty = render_frame(CameraState(), frame, small_params)

        assert dirty == 64 * 36
        assert np.all(frame.glyphs_numpy()[36:, :] == EMPTY_CELL)

    def test_restore_position_restores_frame(self):
        """Test that moving away and back reproduces the original frame."""
        from src.sphereview.camera.controls import CameraState
        from src.sphereview.core.renderer import FrameBuffer, render_frame

        frame = FrameBuffer(200, 250)
        camera = CameraState()
        render_frame(camera, frame)
        original = frame.glyphs_numpy().copy()

        camera.apply_key("y")
        render_frame(camera, frame)
        camera.position[:] = np.array((0.0, 1.0, -6.0), dtype=np.float32)
        render_frame(camera, frame)

        np.testing.assert_array_equal(frame.glyphs_numpy(), original)


class TestKernelModules:
    """Tests that the modules defining Taichi functions compile as kernels."""

    @pytest.mark.parametrize(
        "module_name",
        [
            "src.sphereview.core.ray",
            "src.sphereview.core.renderer",
            "src.sphereview.camera.pinhole",
            "src.sphereview.geometry.sphere",
            "src.sphereview.geometry.floor",
            "src.sphereview.shading.glyphs",
        ],
    )
    def test_annotations_are_evaluated(self, module_name):
        """Test that annotations stay real types, which Taichi needs to compile."""
        import importlib
        import __future__

        module = importlib.import_module(module_name)
        assert getattr(module, "annotations", None) is not __future__.annotations

    def test_full_frame_compiles_and_renders(self):
        """Test one default frame end to end, including the checkerboard path."""
        from src.sphereview.camera.controls import CameraState
        from src.sphereview.core.renderer import FrameBuffer, render_frame
        from src.sphereview.shading.glyphs import BLANK, DENSE

        frame = FrameBuffer(200, 250)
        assert render_frame(CameraState(), frame) == 200 * 112

        visible = frame.glyphs_numpy()[:112, :]
        assert (visible == DENSE).any()
        assert (visible == BLANK).any()
