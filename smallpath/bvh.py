"""Axis-aligned bounding boxes and a bounding volume hierarchy over spheres."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence, Tuple

from smallpath.geometry import FAR, Ray, Sphere, Vec


def _reciprocal(value: float) -> float:
    if value == 0.0:
        return math.copysign(math.inf, value)
    return 1.0 / value


@dataclass(frozen=True, slots=True)
class AABB:
    """An axis-aligned box; the default box is empty (min above max)."""

    min: Vec = field(default_factory=lambda: Vec(FAR, FAR, FAR))
    max: Vec = field(default_factory=lambda: Vec(-FAR, -FAR, -FAR))

    def intersect(self, ray: Ray, tmin: float, tmax: float) -> Optional[Tuple[float, float]]:
        """Clip ``[tmin, tmax]`` against the box.

        Returns the narrowed interval, or ``None`` when the ray misses.
        """
        for axis in range(3):
            inv_d = _reciprocal(ray.direction[axis])
            t0 = (self.min[axis] - ray.origin[axis]) * inv_d
            t1 = (self.max[axis] - ray.origin[axis]) * inv_d
            if inv_d < 0.0:
                t0, t1 = t1, t0
            tmin = t0 if t0 > tmin else tmin
            tmax = t1 if t1 < tmax else tmax
            if tmax <= tmin:
                return None
        return tmin, tmax

    @staticmethod
    def merge(a: AABB, b: AABB) -> AABB:
        """Smallest box enclosing both ``a`` and ``b``."""
        return AABB(
            Vec(min(a.min.x, b.min.x), min(a.min.y, b.min.y), min(a.min.z, b.min.z)),
            Vec(max(a.max.x, b.max.x), max(a.max.y, b.max.y), max(a.max.z, b.max.z)),
        )


@dataclass
class BVHNode:
    """A node of the hierarchy; leaves cover ``indices[start:end]``."""

    box: AABB = field(default_factory=AABB)
    start: int = 0
    end: int = 0
    left: Optional[BVHNode] = None
    right: Optional[BVHNode] = None

    def is_leaf(self) -> bool:
        return self.left is None and self.right is None


def _sphere_box(sphere: Sphere) -> AABB:
    extent = Vec(sphere.radius, sphere.radius, sphere.radius)
    return AABB(sphere.position - extent, sphere.position + extent)


def build_bvh(
    indices: List[int],
    spheres: Sequence[Sphere],
    start: int = 0,
    end: Optional[int] = None,
) -> BVHNode:
    """Build a hierarchy over ``indices[start:end]``.

    ``indices`` is reordered in place (sorted by sphere centre along x) so
    that leaves refer to contiguous ranges of it.
    """
    if end is None:
        end = len(indices)
    node = BVHNode()
    box = AABB()
    for sphere_index in indices[start:end]:
        box = AABB.merge(box, _sphere_box(spheres[sphere_index]))
    node.box = box

    if end - start <= 1:
        node.start = start
        node.end = end
        return node

    axis = 0
    indices[start:end] = sorted(indices[start:end], key=lambda i: spheres[i].position[axis])

    mid = (start + end) // 2
    node.left = build_bvh(indices, spheres, start, mid)
    node.right = build_bvh(indices, spheres, mid, end)
    return node


def intersect_bvh(
    ray: Ray,
    node: BVHNode,
    spheres: Sequence[Sphere],
    indices: Sequence[int],
    t: float = FAR,
) -> Optional[Tuple[float, int]]:
    """Find a sphere hit nearer than ``t``.

    Returns ``(distance, sphere index)`` for the nearest such hit, or ``None``.
    """
    if node.box.intersect(ray, 0.0, FAR) is None:
        return None

    if node.is_leaf():
        best: Optional[Tuple[float, int]] = None
        for sphere_index in indices[node.start:node.end]:
            distance = spheres[sphere_index].intersect(ray)
            if distance and distance < t:
                t = distance
                best = (distance, sphere_index)
        return best

    hit_left = None
    if node.left is not None:
        hit_left = intersect_bvh(ray, node.left, spheres, indices, t)
        if hit_left is not None:
            t = hit_left[0]
    hit_right = None
    if node.right is not None:
        hit_right = intersect_bvh(ray, node.right, spheres, indices, t)
    return hit_right if hit_right is not None else hit_left


def _format_box(box: AABB) -> str:
    lo, hi = box.min, box.max
    return (
        f"AABB: min=({lo.x:g}, {lo.y:g}, {lo.z:g}), "
        f"max=({hi.x:g}, {hi.y:g}, {hi.z:g})"
    )


def describe_bvh(node: Optional[BVHNode], depth: int = 0) -> Iterator[str]:
    """Yield a depth-first, indented description of the hierarchy."""
    if node is None:
        return
    yield f"{' ' * (depth * 2)}Node at depth {depth} | Start: {node.start}, End: {node.end}"
    yield _format_box(node.box)
    yield from describe_bvh(node.left, depth + 1)
    yield from describe_bvh(node.right, depth + 1)