"""
Camera module for generating primary rays.

The scene is z-up: the pinhole looks along +y, image columns run along +x
and image rows run top to bottom along -z.
"""

from __future__ import annotations
import numpy as np

from .vec3 import Vec3, Point3
from .ray import Ray


class PinholeCamera:
    """A pinhole camera with a flat rectangular image plane."""

    def __init__(
        self,
        origin: Point3 = Point3(0.0, -1.0, 0.0),
        viewport_width: float = 2.0,
        viewport_height: float = 2.0,
        focal_length: float = 2.0
    ):
        """Create a camera.

        Args:
            origin: Pinhole position in world space
            viewport_width: Width of the image plane (along +x)
            viewport_height: Height of the image plane (along +z)
            focal_length: Distance from the pinhole to the image plane (along +y)
        """
        self.origin = origin
        self.horizontal = Vec3(viewport_width, 0.0, 0.0)
        self.vertical = Vec3(0.0, 0.0, viewport_height)
        self.lower_left_corner = (
            origin
            - self.horizontal * 0.5
            - self.vertical * 0.5
            + Vec3(0.0, focal_length, 0.0)
        )

    def ray_through(self, u: float, v: float) -> Ray:
        """Ray from the pinhole through image-plane coordinates.

        Args:
            u: Horizontal coordinate [0, 1] (0 = left, 1 = right)
            v: Vertical coordinate [0, 1] (0 = bottom, 1 = top)
        """
        target = self.lower_left_corner + self.horizontal * u + self.vertical * v
        return Ray(self.origin, target - self.origin)

    def get_ray(self, x: int, y: int, width: int, height: int, rng: np.random.Generator) -> Ray:
        """Jittered ray through pixel (x, y), with (0, 0) at the top left.

        The sample point is drawn uniformly within half a pixel of the
        pixel's grid position in each direction.
        """
        jitter_x, jitter_y = rng.uniform(-0.5, 0.5, 2)
        u = (x + jitter_x) / width
        v = 1.0 - (y + jitter_y) / height
        return self.ray_through(u, v)

    def __repr__(self) -> str:
        return f"PinholeCamera(origin={self.origin}, lower_left_corner={self.lower_left_corner})"
