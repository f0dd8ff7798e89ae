"""Core rendering module.

This module contains the fundamental building blocks of the ray caster:

Components:
    ray: Ray data structure and vector utilities
    renderer: Frame buffer with dirty tracking and the per-frame render kernel

The renderer casts one primary ray per grid cell, resolves sphere, floor and
reflected-floor hits, and quantizes the result to a glyph of the shading
ramp. Only cells whose glyph changed are flagged for redraw.
"""

from .ray import (
    Ray,
    add,
    dot,
    length,
    make_ray,
    normalize,
    ray_at,
    reflect,
    scale,
    subtract,
    vec3,
)

# Note: renderer is NOT imported here to avoid circular imports.
# Import directly from src.sphereview.core.renderer when needed.

__all__ = [
    "Ray",
    "ray_at",
    "make_ray",
    "vec3",
    "add",
    "subtract",
    "scale",
    "dot",
    "length",
    "normalize",
    "reflect",
]
