"""
Ray bounce engine.

A path is a sequence of HitAttr states. Starting from the camera ray at
t = 0, each call to ``advance`` scans every object in the scene, bounces
the ray off the nearest one and returns the next state. The path ends
when a state is tagged LAST (escape to the sky or absorption by a light)
or when the depth budget runs out.
"""

from __future__ import annotations
import math

import numpy as np

from .vec3 import Color
from .ray import Ray
from .hit import HitAttr, BounceError
from .shapes import Scene

# Offset applied to every new ray origin to prevent shadow acne.
EPSILON = 0.0001


def advance(state: HitAttr, scene: Scene, rng: np.random.Generator) -> HitAttr:
    """Move a path forward by one bounce.

    Args:
        state: Current, non-terminal state
        scene: Objects to intersect
        rng: Random generator for the materials

    Returns:
        The next state. A ray that meets nothing comes back as
        ``HitAttr.miss`` carrying its current color.

    Raises:
        BounceError: if ``state`` is already terminal or an object reports
            an invalid continuing hit
    """
    if state.is_last:
        raise BounceError("cannot advance a path that has already terminated")

    nearest = None
    nearest_t = math.inf
    for obj in scene:
        t = obj.hit_distance(state.ray)
        if t is not None and t < nearest_t:
            nearest, nearest_t = obj, t

    if nearest is None:
        return HitAttr.miss(state.ray)

    result = nearest.bounce(state, nearest_t, rng)
    if result.is_last:
        return result

    if not (0.0 < result.t < math.inf):
        raise BounceError(f"{nearest!r} reported a continuing hit at t={result.t}")
    ray = result.ray
    return HitAttr(result.t, ray.with_origin(ray.at(EPSILON)), result.kind)


def trace(ray: Ray, scene: Scene, max_depth: int, rng: np.random.Generator) -> Color:
    """Follow a camera ray until it terminates and return its color.

    A path still bouncing after ``max_depth`` steps is treated as escaping
    to the sky from where it is, so its carried color is returned as is.
    """
    state = HitAttr.start(ray)
    for _ in range(max_depth):
        state = advance(state, scene, rng)
        if state.is_last:
            break

    color = state.ray.color
    if not color.is_finite():
        raise BounceError(f"path produced a non-finite color {color}")
    return color
