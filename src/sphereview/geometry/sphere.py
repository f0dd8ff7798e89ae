"""Sphere primitive with analytic ray-sphere intersection.

This module provides a Sphere dataclass and the intersection routine used by
the renderer. Only the nearer root of the quadratic is ever considered: when
it lies behind the ray origin the ray is reported as a miss, even if the
farther root would be in front. As a consequence a ray that starts inside
the sphere never hits it, and every reported normal points outward.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.sphereview.geometry.sphere import Sphere, hit_sphere
    >>> sphere = Sphere(center=ti.math.vec3(0, 2, 3), radius=1.0)
    >>> # Use hit_sphere within a Taichi kernel
"""

import taichi as ti
import taichi.math as tm

from src.sphereview.core.ray import Ray, dot, normalize, ray_at

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


@ti.dataclass
class Sphere:
    """A sphere defined by center point and radius.

    Attributes:
        center: The center point of the sphere (vec3).
        radius: The radius of the sphere (positive float).
    """

    center: vec3
    radius: ti.f32


@ti.dataclass
class HitRecord:
    """Record of a ray-sphere intersection.

    Attributes:
        hit: Whether the ray intersected the sphere (1 if hit, 0 if miss).
        t: Distance along the ray to the intersection. Only valid if hit == 1.
        point: The 3D point where the ray met the sphere.
            Only valid if hit == 1.
        normal: Outward unit normal at the intersection point.
            Only valid if hit == 1.
    """

    hit: ti.i32
    t: ti.f32
    point: vec3
    normal: vec3


@ti.func
def hit_sphere(ray: Ray, sphere: Sphere) -> HitRecord:
    """Test a ray against a sphere.

    Solves a*t^2 + b*t + c = 0 with:
        a = dot(direction, direction)
        b = 2 * dot(origin - center, direction)
        c = dot(origin - center, origin - center) - radius^2

    A negative discriminant is a miss. Otherwise the smaller root
    (-b - sqrt(discriminant)) / (2a) is taken; if it is not strictly
    positive the ray is also a miss.

    Args:
        ray: The ray to test.
        sphere: The sphere to test against.

    Returns:
        A HitRecord. Check the hit field to determine if intersection occurred.
    """
    oc = ray.origin - sphere.center
    a = dot(ray.direction, ray.direction)
    b = 2.0 * dot(oc, ray.direction)
    c = dot(oc, oc) - sphere.radius * sphere.radius
    discriminant = b * b - 4.0 * a * c

    # Initialize result fields (Taichi requires outer-scope declaration)
    did_hit = 0
    hit_t = 0.0
    hit_point = vec3(0.0, 0.0, 0.0)
    hit_normal = vec3(0.0, 0.0, 0.0)

    if discriminant >= 0.0:
        t = (-b - ti.sqrt(discriminant)) / (2.0 * a)
        if t > 0.0:
            did_hit = 1
            hit_t = t
            hit_point = ray_at(ray, t)
            hit_normal = normalize(hit_point - sphere.center)

    return HitRecord(hit=did_hit, t=hit_t, point=hit_point, normal=hit_normal)


@ti.func
def make_sphere(center: vec3, radius: ti.f32) -> Sphere:
    """Create a sphere from center and radius inside a Taichi kernel."""
    return Sphere(center=center, radius=radius)
