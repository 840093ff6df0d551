"""
Geometric shapes for the ray tracer.

Each shape implements the Hittable interface: it finds where a ray meets
it, computes the surface normal there, and hands the interaction to its
material to produce the next bounce state.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Iterable, Iterator, Optional
import math

import numpy as np

from .vec3 import Vec3, Point3
from .ray import Ray
from .hit import HitAttr
from .materials import Material


class Hittable(ABC):
    """Abstract base class for all objects that can be hit by rays."""

    def __init__(self, material: Material):
        self.material = material

    @abstractmethod
    def hit_distance(self, ray: Ray) -> Optional[float]:
        """Distance along ``ray`` to the intersection, or None on a miss.

        Only strictly positive, finite distances are reported.
        """
        pass

    @abstractmethod
    def normal_at(self, point: Point3) -> Vec3:
        """Unit surface normal at a point on the surface."""
        pass

    def hit(self, h: HitAttr, rng: np.random.Generator) -> HitAttr:
        """Intersect the ray held by ``h`` and bounce it off this object.

        Args:
            h: Current bounce state; ``h.ray`` is the ray to test
            rng: Random generator passed on to the material

        Returns:
            The next bounce state, or ``HitAttr.miss`` (t = inf, LAST)
            when the ray does not meet this object
        """
        t = self.hit_distance(h.ray)
        if t is None:
            return HitAttr.miss(h.ray)
        return self.bounce(h, t, rng)

    def bounce(self, h: HitAttr, t: float, rng: np.random.Generator) -> HitAttr:
        """Bounce ``h.ray`` off this object at distance ``t``."""
        p = h.ray.at(t)
        result = self.material.get_reflection(p, self.normal_at(p), HitAttr(t, h.ray, h.kind), rng)
        return HitAttr(t, result.ray, result.kind)


class Sphere(Hittable):
    """A sphere defined by center and radius."""

    def __init__(self, center: Point3, radius: float, material: Material):
        """Create a sphere.

        Args:
            center: Center point of the sphere
            radius: Radius of the sphere (must be positive)
            material: Material for shading
        """
        if radius <= 0:
            raise ValueError(f"sphere radius must be positive, got {radius}")
        super().__init__(material)
        self.center = center
        self.radius = radius

    def hit_distance(self, ray: Ray) -> Optional[float]:
        """Solve |O + tD - C|² = r² for the smallest positive root.

        With b = D·(O-C) the equation reads a·t² + 2b·t + c = 0, so
        t = (-b ± sqrt(b² - a·c)) / a.
        """
        oc = ray.origin - self.center
        a = ray.direction.length_squared()
        half_b = oc.dot(ray.direction)
        c = oc.length_squared() - self.radius * self.radius

        discriminant = half_b * half_b - a * c
        if discriminant <= 0 or a == 0:
            return None

        sqrtd = math.sqrt(discriminant)
        root = (-half_b - sqrtd) / a
        if root <= 0:
            # Origin is inside the sphere; take the far side
            root = (-half_b + sqrtd) / a
            if root <= 0:
                return None
        return root

    def normal_at(self, point: Point3) -> Vec3:
        return (point - self.center) / self.radius

    def __repr__(self) -> str:
        return f"Sphere(center={self.center}, radius={self.radius}, material={self.material})"


class Floor(Hittable):
    """An infinite horizontal plane z = height, visible from one side only."""

    def __init__(self, height: float, material: Material, upwards: bool = True):
        """Create a floor (or, facing down, a ceiling).

        Args:
            height: z coordinate of the plane
            material: Material for shading
            upwards: True if the surface faces +z, False for -z
        """
        super().__init__(material)
        self.height = height
        self.upwards = upwards
        self.normal = Vec3(0.0, 0.0, 1.0) if upwards else Vec3(0.0, 0.0, -1.0)

    def hit_distance(self, ray: Ray) -> Optional[float]:
        dz = ray.direction.z
        # Parallel rays and rays arriving from behind never hit
        if dz == 0.0 or ray.direction.dot(self.normal) >= 0.0:
            return None

        t = (self.height - ray.origin.z) / dz
        if t <= 0 or not math.isfinite(t):
            return None
        return t

    def normal_at(self, point: Point3) -> Vec3:
        return self.normal

    def __repr__(self) -> str:
        facing = "up" if self.upwards else "down"
        return f"Floor(height={self.height}, facing={facing}, material={self.material})"


class Scene:
    """An ordered collection of objects, never mutated while rendering.

    Intersection is a linear scan over every object.
    """

    def __init__(self, objects: Optional[Iterable[Hittable]] = None):
        self.objects: list[Hittable] = list(objects) if objects is not None else []

    def add(self, obj: Hittable) -> None:
        """Add an object to the scene."""
        self.objects.append(obj)

    def __len__(self) -> int:
        return len(self.objects)

    def __iter__(self) -> Iterator[Hittable]:
        return iter(self.objects)

    def __repr__(self) -> str:
        return f"Scene({len(self.objects)} objects)"
