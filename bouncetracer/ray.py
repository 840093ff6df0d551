"""
Ray class for representing rays in 3D space.

A ray is defined by an origin point and a unit direction vector, and it
carries the color accumulated along its bounce path.
Ray(t) = origin + t * direction
"""

from __future__ import annotations
from typing import Optional

from .vec3 import Vec3, Point3, Color

# Background radiance; also the seed of every fresh ray's carried color.
SKY_COLOR = Color(0.8, 0.8, 1.0)


class Ray:
    """A ray with origin, unit direction and carried color.

    The parametric form is: P(t) = origin + t * direction
    where t >= 0 represents points along the ray.
    """

    __slots__ = ('origin', 'direction', 'color')

    def __init__(self, origin: Point3, direction: Vec3, color: Optional[Color] = None):
        """Create a ray with given origin and direction.

        Args:
            origin: The starting point of the ray
            direction: The direction vector (normalized on construction)
            color: Color carried along the path (defaults to SKY_COLOR)
        """
        self.origin = origin
        self.direction = direction.normalize()
        self.color = color if color is not None else SKY_COLOR

    def at(self, t: float) -> Point3:
        """Get the point along the ray at parameter t."""
        return self.origin + self.direction * t

    def with_origin(self, origin: Point3) -> Ray:
        """Return a copy of this ray starting from another point."""
        ray = Ray.__new__(Ray)
        ray.origin = origin
        ray.direction = self.direction
        ray.color = self.color
        return ray

    def __repr__(self) -> str:
        return f"Ray(origin={self.origin}, direction={self.direction}, color={self.color})"
