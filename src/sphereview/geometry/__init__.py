"""Geometry module for the scene's two surfaces.

Components:
    sphere: Sphere primitive with analytic ray-sphere intersection
    floor: Infinite floor plane at y = 0

All intersection routines are implemented as Taichi functions (@ti.func)
so they can be evaluated per cell inside the render kernel.
"""

from .floor import floor_distance, hit_floor
from .sphere import HitRecord, Sphere, hit_sphere, make_sphere

__all__ = [
    "Sphere",
    "HitRecord",
    "hit_sphere",
    "make_sphere",
    "floor_distance",
    "hit_floor",
]
