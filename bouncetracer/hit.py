"""
Bounce state shared by shapes, materials and the bounce engine.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
import math

from .ray import Ray


class HitKind(Enum):
    """Whether a bounce continues or ends the path."""
    NORMAL = "normal"  # Keep bouncing
    LAST = "last"  # Escaped to the sky or absorbed by a light


class BounceError(RuntimeError):
    """The bounce state machine was driven into an impossible state."""
    pass


class ReflectionError(RuntimeError):
    """A reflection was requested with a normal facing away from the ray."""
    pass


@dataclass(frozen=True)
class Hit:
    """Outcome of a material interaction: the next ray and whether it continues."""
    kind: HitKind
    ray: Ray

    @classmethod
    def normal(cls, ray: Ray) -> Hit:
        return cls(HitKind.NORMAL, ray)

    @classmethod
    def last(cls, ray: Ray) -> Hit:
        return cls(HitKind.LAST, ray)


@dataclass(frozen=True)
class HitAttr:
    """State of a path after one intersection.

    Attributes:
        t: Distance travelled along the previous ray to reach this state
        ray: The ray for the next segment
        kind: NORMAL to continue, LAST when the path has terminated
    """
    t: float
    ray: Ray
    kind: HitKind = HitKind.NORMAL

    @property
    def is_last(self) -> bool:
        return self.kind is HitKind.LAST

    @classmethod
    def start(cls, ray: Ray) -> HitAttr:
        """Initial state for a freshly generated camera ray."""
        return cls(0.0, ray, HitKind.NORMAL)

    @classmethod
    def miss(cls, ray: Ray) -> HitAttr:
        """State reported by an object the ray does not intersect."""
        return cls(math.inf, ray, HitKind.LAST)
