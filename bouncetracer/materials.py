"""
Surface response models.

Implements:
- Diffuse (random hemisphere scattering)
- Mirror (perfect specular reflection)
- Glass (dielectric with Schlick reflectance and absorption)
- DiffusedLightSource (emissive terminator)

Every material maps (hit point, normal, incoming state) to a Hit: the ray
for the next segment, tagged to continue or to end the path.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
import math

import numpy as np

from .vec3 import Vec3, Color, Point3
from .ray import Ray, SKY_COLOR
from .hit import Hit, HitAttr, ReflectionError


def specular_reflection(color: Color, p: Point3, normal: Vec3, h: HitAttr) -> Hit:
    """Mirror the incoming ray about ``normal`` and tint it by ``color``.

    Raises:
        ReflectionError: if the normal faces away from the incoming ray
    """
    d = h.ray.direction
    d_dot_n = normal.dot(d)
    if d_dot_n > 0.0:
        raise ReflectionError(
            f"ray {d} is not pointing towards the normal {normal}; try increasing epsilon"
        )
    direction = d - normal * (2.0 * d_dot_n)
    return Hit.normal(Ray(p, direction, h.ray.color * color))


def schlick_reflectance(cosine: float, relative_index: float) -> float:
    """Schlick's approximation of the Fresnel reflectance."""
    r0 = (1.0 - relative_index) / (1.0 + relative_index)
    r0 = r0 * r0
    return r0 + (1.0 - r0) * (1.0 - cosine) ** 5


class Material(ABC):
    """Abstract base class for materials.

    Materials are stateless; any randomness comes from the generator
    passed in by the caller.
    """

    def __init__(self, color: Color):
        self.color = color

    @abstractmethod
    def get_reflection(self, p: Point3, normal: Vec3, h: HitAttr, rng: np.random.Generator) -> Hit:
        """Compute the outgoing ray for a surface interaction.

        Args:
            p: Intersection point
            normal: Unit surface normal at ``p`` (outward for spheres)
            h: ``h.ray`` is the incoming ray, ``h.t`` the length of the
               segment that reached ``p``
            rng: Random generator for stochastic materials

        Returns:
            Hit describing the next segment
        """
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}(color={self.color})"


class Diffuse(Material):
    """Matte material scattering into the hemisphere around the normal."""

    def get_reflection(self, p: Point3, normal: Vec3, h: HitAttr, rng: np.random.Generator) -> Hit:
        direction = normal.random_diffusion(rng)
        return Hit.normal(Ray(p, direction, h.ray.color * self.color))


class Mirror(Material):
    """Perfect specular reflector."""

    def get_reflection(self, p: Point3, normal: Vec3, h: HitAttr, rng: np.random.Generator) -> Hit:
        return specular_reflection(self.color, p, normal, h)


class DiffusedLightSource(Material):
    """Emitter that ends the path.

    The carried color was seeded with SKY_COLOR when the camera ray was
    created; that seed is divided out so only the surface attenuation
    along the path and the light color remain.
    """

    def get_reflection(self, p: Point3, normal: Vec3, h: HitAttr, rng: np.random.Generator) -> Hit:
        color = h.ray.color / SKY_COLOR * self.color
        return Hit.last(Ray(p, Vec3.zero(), color))


class Glass(Material):
    """Dielectric that reflects or refracts according to Schlick's term.

    ``color`` is the per-unit-distance transmission of the medium: a path
    of length ``t`` inside the glass is attenuated by ``color ** t`` when
    it leaves through the surface.
    """

    def __init__(self, color: Color, refraction_index: float = 1.5):
        """Create a glass material.

        Args:
            color: Transmission per unit distance inside the medium
            refraction_index: Index of refraction relative to the outside
        """
        if refraction_index <= 0:
            raise ValueError(f"refraction index must be positive, got {refraction_index}")
        super().__init__(color)
        self.refraction_index = refraction_index

    def get_reflection(self, p: Point3, normal: Vec3, h: HitAttr, rng: np.random.Generator) -> Hit:
        cos_incidence = -normal.dot(h.ray.direction)

        if cos_incidence > 0.0:
            # Entering the medium
            facing = normal
            eta = 1.0 / self.refraction_index
            ray = h.ray
        else:
            # Leaving it: the segment that reached p was inside the glass
            facing = -normal
            cos_incidence = -cos_incidence
            eta = self.refraction_index
            ray = Ray(h.ray.origin, h.ray.direction, h.ray.color.exp_decay(h.t, self.color))

        incoming = HitAttr(h.t, ray, h.kind)

        if rng.random() < schlick_reflectance(cos_incidence, eta):
            return specular_reflection(Color.one(), p, facing, incoming)
        return self.refract(p, facing, incoming, eta, cos_incidence)

    @staticmethod
    def refract(p: Point3, facing: Vec3, h: HitAttr, eta: float, cos_incidence: float) -> Hit:
        """Bend the ray through the surface by Snell's law.

        ``facing`` must point against the incoming direction and ``eta`` is
        the ratio of the incident to the transmitted index. Falls back to
        specular reflection on total internal reflection.
        """
        discriminant = 1.0 - eta * eta * (1.0 - cos_incidence * cos_incidence)
        if discriminant <= 0.0:
            return specular_reflection(Color.one(), p, facing, h)

        d = h.ray.direction
        direction = d * eta + facing * (eta * cos_incidence - math.sqrt(discriminant))
        return Hit.normal(Ray(p, direction, h.ray.color))

    def __repr__(self) -> str:
        return f"Glass(color={self.color}, refraction_index={self.refraction_index})"
