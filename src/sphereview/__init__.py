"""Terminal ray caster for a mirror sphere over a checkerboard floor.

This package renders a single reflective sphere above an infinite
checkerboard floor into a character grid, using analytic ray intersection in
Taichi kernels, and redraws only the cells that changed between frames.

Subpackages:
    core: Ray and vector utilities, frame buffer and render kernel
    geometry: Sphere and floor intersection
    shading: Glyph ramp and checkerboard test
    camera: Viewport fitting, primary rays and keyboard-driven camera state
    scene: Scene parameters
    preview: Diff presenter, terminal surface, interactive loop and export
"""

__version__ = "0.1.0"
