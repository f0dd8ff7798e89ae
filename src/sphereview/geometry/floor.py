"""Infinite floor plane at y = 0.

The floor is the only other surface in the scene. Rays are intersected with
it through the parametric plane test

    origin.y + t * direction.y = 0  =>  t = -origin.y / direction.y

The distance is returned as-is: it is negative when the plane lies behind
the ray and non-finite when the ray runs parallel to it. Callers decide which
distances they accept.

Example:
    >>> # Inside a Taichi kernel:
    >>> # dist = floor_distance(ray)
    >>> # if dist > 0.0:
    >>> #     point = hit_floor(ray, dist)
"""

import taichi as ti
import taichi.math as tm

from src.sphereview.core.ray import Ray, ray_at

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


@ti.func
def floor_distance(ray: Ray) -> ti.f32:
    """Signed distance along the ray to the plane y = 0."""
    return -ray.origin.y / ray.direction.y


@ti.func
def hit_floor(ray: Ray, distance: ti.f32) -> vec3:
    """Point on the floor plane reached after travelling distance along ray."""
    return ray_at(ray, distance)
