"""Vectors, rays, spheres and the brute-force scene intersection."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterator, Optional, Sequence, Tuple

#: Distance used as "no hit yet" when searching for the nearest intersection.
FAR = 1e20

#: Self-intersection tolerance for sphere hits.
EPSILON = 1e-4


@dataclass(frozen=True, slots=True)
class Vec:
    """A 3-component vector used for points, directions and RGB colours."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: Vec) -> Vec:
        return Vec(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec) -> Vec:
        return Vec(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> Vec:
        return Vec(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def __getitem__(self, index: int) -> float:
        if index == 0:
            return self.x
        if index == 1:
            return self.y
        if index == 2:
            return self.z
        raise IndexError("Index out of range for Vec")

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def mult(self, other: Vec) -> Vec:
        """Component-wise product."""
        return Vec(self.x * other.x, self.y * other.y, self.z * other.z)

    def norm(self) -> Vec:
        """Return this vector scaled to unit length."""
        return self * (1.0 / math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z))

    def dot(self, other: Vec) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vec) -> Vec:
        return Vec(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )


@dataclass(frozen=True, slots=True)
class Ray:
    """A ray with an origin and a (normally unit-length) direction."""

    origin: Vec
    direction: Vec


class Material(IntEnum):
    """Surface reflection type."""

    DIFFUSE = 0
    SPECULAR = 1
    REFRACTIVE = 2


@dataclass(frozen=True, slots=True)
class Sphere:
    """A sphere with emission, colour and material."""

    radius: float
    position: Vec
    emission: Vec
    color: Vec
    material: Material

    def intersect(self, ray: Ray) -> float:
        """Return the nearest hit distance beyond EPSILON, or 0.0 on a miss."""
        op = self.position - ray.origin
        b = op.dot(ray.direction)
        det = b * b - op.dot(op) + self.radius * self.radius
        if det < 0:
            return 0.0
        det = math.sqrt(det)
        t = b - det
        if t > EPSILON:
            return t
        t = b + det
        return t if t > EPSILON else 0.0


def clamp(x: float) -> float:
    """Clamp a value to [0, 1]."""
    if x < 0:
        return 0.0
    if x > 1:
        return 1.0
    return x


def correct(x: float) -> float:
    """Clamp and apply a 2.2 gamma correction."""
    return math.pow(clamp(x), 1 / 2.2)


def intersect_scene(ray: Ray, spheres: Sequence[Sphere]) -> Optional[Tuple[float, int]]:
    """Find the nearest sphere hit by ``ray``.

    Returns ``(distance, index)`` or ``None`` when nothing is hit. Spheres are
    tested from last to first, so on an exact tie the higher index wins.
    """
    nearest = FAR
    hit: Optional[int] = None
    for index, sphere in reversed(list(enumerate(spheres))):
        distance = sphere.intersect(ray)
        if distance and distance < nearest:
            nearest = distance
            hit = index
    if hit is None:
        return None
    return nearest, hit