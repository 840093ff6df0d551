"""
Programmatic demo scenes.

All scenes are z-up and framed for the default PinholeCamera at
(0, -1, 0) looking along +y.
"""

from __future__ import annotations

from .vec3 import Point3, Color
from .shapes import Scene, Sphere, Floor
from .materials import Diffuse, Mirror, Glass, DiffusedLightSource


def create_demo_scene() -> Scene:
    """Diffuse and mirror spheres resting above a grey floor."""
    return Scene([
        Sphere(Point3(0.0, 3.0, 0.2), 0.5, Diffuse(Color(0.7, 0.7, 0.7))),
        Sphere(Point3(1.0, 3.0, 0.05), 0.5, Mirror(Color(0.5, 0.7, 0.7))),
        Sphere(Point3(-1.0, 2.0, 0.1), 0.5, Mirror(Color(0.7, 0.3, 0.7))),
        Sphere(Point3(0.2, 1.0, -0.25), 0.2, Diffuse(Color(0.7, 0.3, 0.7))),
        Floor(-0.5, Diffuse(Color(0.5, 0.5, 0.5)), upwards=True),
    ])


def create_glass_scene() -> Scene:
    """A tinted glass sphere in front of a diffuse one, lit by a warm light."""
    return Scene([
        Sphere(Point3(0.0, 2.0, 0.05), 0.5, Glass(Color(0.9, 0.95, 0.9), 1.5)),
        Sphere(Point3(0.6, 3.5, 0.15), 0.6, Diffuse(Color(0.8, 0.3, 0.3))),
        Sphere(Point3(-1.2, 3.0, 1.2), 0.4, DiffusedLightSource(Color(4.0, 3.6, 3.0))),
        Floor(-0.5, Diffuse(Color(0.5, 0.5, 0.5)), upwards=True),
    ])


def create_single_sphere_scene() -> Scene:
    """One diffuse sphere under a downward-facing ceiling."""
    return Scene([
        Sphere(Point3(0.0, 3.0, 0.0), 0.5, Diffuse(Color(0.7, 0.7, 0.7))),
        Floor(1.5, Diffuse(Color(0.6, 0.6, 0.6)), upwards=False),
    ])


SCENES = {
    'demo': create_demo_scene,
    'glass': create_glass_scene,
    'single': create_single_sphere_scene,
}


def get_scene(name: str) -> Scene:
    """Build a demo scene by name."""
    try:
        factory = SCENES[name]
    except KeyError:
        raise ValueError(f"Unknown scene: {name} (choose from {', '.join(sorted(SCENES))})") from None
    return factory()
