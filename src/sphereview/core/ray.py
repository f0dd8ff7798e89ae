"""Ray data structure and vector utilities for the character-grid ray caster.

This module provides the fundamental Ray dataclass and the small set of
vector operations the renderer needs. All operations are Taichi functions so
they can run inside the parallel render kernel.

Rays built through make_ray() always carry a unit-length direction.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> origin = ti.math.vec3(0.0, 1.0, -6.0)
    >>> direction = ti.math.vec3(0.0, 0.0, 2.0)
    >>> # Inside a kernel:
    >>> # ray = make_ray(origin, direction)   # direction becomes (0, 0, 1)
    >>> # point = ray_at(ray, 5.0)            # (0, 1, -1)
"""

import taichi as ti
import taichi.math as tm

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


@ti.dataclass
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray (vec3).
        direction: The direction vector of the ray (vec3). Unit length when
            the ray is built with make_ray().
    """

    origin: vec3
    direction: vec3


@ti.func
def ray_at(ray: Ray, t: ti.f32) -> vec3:
    """Compute the point along the ray at parameter t.

    Args:
        ray: The ray to evaluate.
        t: The parameter value. Positive values are in front of the origin.

    Returns:
        The point ray.origin + ray.direction * t.
    """
    return ray.origin + ray.direction * t


@ti.func
def make_ray(origin: vec3, direction: vec3) -> Ray:
    """Create a ray from an origin and an un-normalized direction.

    The direction is normalized here and never touched again, so every ray
    in the renderer has a unit-length direction.

    Args:
        origin: The starting point of the ray.
        direction: The direction vector. Must not be zero-length.

    Returns:
        A new Ray instance.
    """
    return Ray(origin=origin, direction=normalize(direction))


# =============================================================================
# Vector Utility Functions
# =============================================================================


@ti.func
def add(a: vec3, b: vec3) -> vec3:
    """Component-wise sum a + b."""
    return a + b


@ti.func
def subtract(a: vec3, b: vec3) -> vec3:
    """Component-wise difference a - b."""
    return a - b


@ti.func
def scale(v: vec3, s: ti.f32) -> vec3:
    """Multiply every component of v by the scalar s."""
    return v * s


@ti.func
def dot(a: vec3, b: vec3) -> ti.f32:
    """Compute the dot product of two vectors.

    Args:
        a: First vector.
        b: Second vector.

    Returns:
        The dot product a . b.
    """
    return tm.dot(a, b)


@ti.func
def length(v: vec3) -> ti.f32:
    """Compute the Euclidean length (magnitude) of a vector."""
    return tm.length(v)


@ti.func
def normalize(v: vec3) -> vec3:
    """Normalize a vector to unit length.

    The vector is divided by its length. There is no guard for
    zero-length input: the result then has NaN components, which simply
    propagate through the caller's arithmetic.

    Args:
        v: The input vector (magnitude > 0).

    Returns:
        A unit vector in the same direction as v.
    """
    return tm.normalize(v)


@ti.func
def reflect(incident: vec3, normal: vec3) -> vec3:
    """Reflect an incident vector about a normal.

    Computes the mirror direction d - 2(d . n)n. The normal should be unit
    length for correct results.

    Args:
        incident: The incoming direction vector (pointing toward the surface).
        normal: The surface normal (should be normalized).

    Returns:
        The reflected direction vector.
    """
    return incident - normal * 2.0 * dot(incident, normal)
