"""
BounceTracer - A Python Monte Carlo Path Tracer

A small brute-force path tracer with:
- Diffuse, mirror, glass and emissive materials
- Spheres and one-sided infinite floors
- Jittered antialiasing with running per-pixel averages
- Seedable, multi-threaded rendering
- PNG export
"""

__version__ = "0.1.0"
__author__ = "BounceTracer Team"

from .vec3 import Vec3, Point3, Color
from .ray import Ray, SKY_COLOR
from .hit import Hit, HitAttr, HitKind, BounceError, ReflectionError
from .materials import Material, Diffuse, Mirror, Glass, DiffusedLightSource, specular_reflection
from .shapes import Hittable, Sphere, Floor, Scene
from .camera import PinholeCamera
from .bouncer import EPSILON, advance, trace
from .renderer import Renderer, RenderSettings, render, to_image, to_rgba8
from .scenes import create_demo_scene, create_glass_scene, create_single_sphere_scene, get_scene
from .export import save_png
