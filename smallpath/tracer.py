"""Monte Carlo path tracing of the Cornell box, accelerated by a BVH."""

from __future__ import annotations

import logging
import math
import random
from typing import Callable, List, Optional, Sequence, Tuple

from smallpath.bvh import BVHNode, build_bvh, describe_bvh, intersect_bvh
from smallpath.geometry import FAR, Material, Ray, Sphere, Vec, clamp

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[float], None]

#: Field-of-view factor of the camera.
FOV_SCALE = 0.5135

#: Maximum recursion depth before a path returns black.
MAX_DEPTH = 10

#: Depth after which Russian roulette terminates paths.
ROULETTE_DEPTH = 5


def _sqrt(value: float) -> float:
    """Square root that yields NaN for negative input instead of raising."""
    return math.sqrt(value) if value >= 0 else math.nan


def _basis_seed(w: Vec) -> Vec:
    return Vec(0, 1) if abs(w.x) > 0.1 else Vec(1)


class SceneBVH:
    """A list of spheres together with a bounding volume hierarchy over them."""

    def __init__(self, spheres: Sequence[Sphere]) -> None:
        self.spheres: Tuple[Sphere, ...] = tuple(spheres)
        self.indices: List[int] = list(range(len(self.spheres)))
        self.root: BVHNode = build_bvh(self.indices, self.spheres, 0, len(self.indices))

    def intersect(self, ray: Ray, t_max: float = FAR) -> Optional[Tuple[float, int]]:
        """Nearest hit closer than ``t_max`` as ``(distance, sphere index)``, or ``None``."""
        return intersect_bvh(ray, self.root, self.spheres, self.indices, t_max)

    def describe(self) -> List[str]:
        """Human-readable lines describing the hierarchy."""
        return list(describe_bvh(self.root))


def cornell_box() -> List[Sphere]:
    """The Cornell box scene lit by a small spherical light."""
    return [
        Sphere(1e5, Vec(1e5 + 1, 40.8, 81.6), Vec(), Vec(0.75, 0.25, 0.25), Material.DIFFUSE),
        Sphere(1e5, Vec(-1e5 + 99, 40.8, 81.6), Vec(), Vec(0.25, 0.25, 0.75), Material.DIFFUSE),
        Sphere(1e5, Vec(50, 40.8, 1e5), Vec(), Vec(0.75, 0.75, 0.75), Material.DIFFUSE),
        Sphere(1e5, Vec(50, 40.8, -1e5 + 170), Vec(), Vec(), Material.DIFFUSE),
        Sphere(1e5, Vec(50, 1e5, 81.6), Vec(), Vec(0.75, 0.75, 0.75), Material.DIFFUSE),
        Sphere(1e5, Vec(50, -1e5 + 81.6, 81.6), Vec(), Vec(0.75, 0.75, 0.75), Material.DIFFUSE),
        Sphere(16.5, Vec(27, 16.5, 47), Vec(), Vec(1, 1, 1) * 0.999, Material.SPECULAR),
        Sphere(16.5, Vec(73, 16.5, 78), Vec(), Vec(1, 1, 1) * 0.999, Material.REFRACTIVE),
        Sphere(1.5, Vec(50, 81.6 - 16.5, 81.6), Vec(4, 4, 4) * 100, Vec(), Material.DIFFUSE),
    ]


def _direct_light(x: Vec, nl: Vec, f: Vec, rng: random.Random, scene: SceneBVH) -> Vec:
    """Explicit light sampling towards every emissive sphere."""
    e = Vec()
    for i, s in enumerate(scene.spheres):
        if s.emission.x <= 0 and s.emission.y <= 0 and s.emission.z <= 0:
            continue
        sw = s.position - x
        su = _basis_seed(sw).cross(sw).norm()
        sv = sw.cross(su)
        to_center = x - s.position
        cos_a_max = _sqrt(1 - s.radius * s.radius / to_center.dot(to_center))
        eps1 = rng.random()
        eps2 = rng.random()
        cos_a = 1 - eps1 + eps1 * cos_a_max
        sin_a = _sqrt(1 - cos_a * cos_a)
        phi = 2 * math.pi * eps2
        l = (su * (math.cos(phi) * sin_a) + sv * (math.sin(phi) * sin_a) + sw * cos_a).norm()

        hit = scene.intersect(Ray(x, l), FAR)
        if hit is not None and hit[1] == i:
            omega = 2 * math.pi * (1 - cos_a_max)
            e = e + f.mult(s.emission * (l.dot(nl) * omega)) * (1 / math.pi)
    return e


def radiance(
    ray: Ray,
    depth: int,
    rng: random.Random,
    scene: SceneBVH,
    emission: float = 1,
) -> Vec:
    """Estimate the radiance arriving along ``ray``.

    ``emission`` scales the emission of diffuse surfaces; it is 0 on paths
    that follow a diffuse bounce, where lights were already sampled directly.
    """
    hit = scene.intersect(ray, FAR)
    if hit is None:
        return Vec()
    t, index = hit
    obj = scene.spheres[index]
    if depth > MAX_DEPTH:
        return Vec()
    x = ray.origin + ray.direction * t
    n = (x - obj.position).norm()
    nl = n if n.dot(ray.direction) < 0 else n * -1
    f = obj.color

    p = f.x if f.x > f.y and f.x > f.z else (f.y if f.y > f.z else f.z)
    depth += 1
    if depth > ROULETTE_DEPTH or not p:
        if rng.random() < p:
            f = f * (1 / p)
        else:
            return obj.emission * emission

    if obj.material == Material.DIFFUSE:
        r1 = 2 * math.pi * rng.random()
        r2 = rng.random()
        r2s = math.sqrt(r2)
        w = nl
        u = _basis_seed(w).cross(w).norm()
        v = w.cross(u)
        d = (u * (math.cos(r1) * r2s) + v * (math.sin(r1) * r2s) + w * math.sqrt(1 - r2)).norm()
        e = _direct_light(x, nl, f, rng, scene)
        return obj.emission * emission + e + f.mult(radiance(Ray(x, d), depth, rng, scene, 0))

    reflected = ray.direction - n * (2 * n.dot(ray.direction))
    if obj.material == Material.SPECULAR:
        return obj.emission + f.mult(radiance(Ray(x, reflected), depth, rng, scene))

    refl_ray = Ray(x, reflected)
    into = n.dot(nl) > 0
    nc, nt = 1.0, 1.5
    nnt = nc / nt if into else nt / nc
    ddn = ray.direction.dot(nl)
    cos2t = 1 - nnt * nnt * (1 - ddn * ddn)
    if cos2t < 0:
        return obj.emission + f.mult(radiance(refl_ray, depth, rng, scene))

    sign = 1 if into else -1
    tdir = (ray.direction * nnt - n * (sign * (ddn * nnt + math.sqrt(cos2t)))).norm()
    a = nt - nc
    b = nt + nc
    r0 = a * a / (b * b)
    c = 1 - (-ddn if into else tdir.dot(n))
    re = r0 + (1 - r0) * c * c * c * c * c
    tr = 1 - re
    prob = 0.25 + 0.5 * re
    rp = re / prob
    tp = tr / (1 - prob)
    if depth > 2:
        if rng.random() < prob:
            incoming = radiance(refl_ray, depth, rng, scene) * rp
        else:
            incoming = radiance(Ray(x, tdir), depth, rng, scene) * tp
    else:
        incoming = (
            radiance(refl_ray, depth, rng, scene) * re
            + radiance(Ray(x, tdir), depth, rng, scene) * tr
        )
    return obj.emission + f.mult(incoming)


def path_tracing(
    width: int,
    height: int,
    samples: int,
    progress: Optional[ProgressCallback] = None,
    rng: Optional[random.Random] = None,
) -> List[Vec]:
    """Render the Cornell box and return ``width * height`` colours.

    Each pixel takes 2x2 subsamples with ``samples`` tent-filtered paths each.
    Row 0 of the result is the top of the image. Values are clamped to [0, 1]
    but not gamma corrected.
    """
    if width <= 0 or height <= 0:
        raise ValueError("image width and height must be positive")
    if rng is None:
        rng = random.Random()

    cam = Ray(Vec(50, 52, 295.6), Vec(0, -0.042612, -1).norm())
    cx = Vec(width * FOV_SCALE / height)
    cy = cx.cross(cam.direction).norm() * FOV_SCALE
    pixels = [Vec()] * (width * height)

    scene = SceneBVH(cornell_box())
    logger.debug("BVH Tree Structure:")
    for line in scene.describe():
        logger.debug("%s", line)

    for y in range(height):
        logger.debug("Rendering (%d spp) row %d of %d", samples * 4, y + 1, height)
        if progress is not None:
            progress(y / height)
        for x in range(width):
            i = (height - y - 1) * width + x
            for sy in range(2):
                for sx in range(2):
                    r = Vec()
                    for _ in range(samples):
                        r1 = 2 * rng.random()
                        dx = math.sqrt(r1) - 1 if r1 < 1 else 1 - math.sqrt(2 - r1)
                        r2 = 2 * rng.random()
                        dy = math.sqrt(r2) - 1 if r2 < 1 else 1 - math.sqrt(2 - r2)
                        d = (
                            cx * (((sx + 0.5 + dx) / 2 + x) / width - 0.5)
                            + cy * (((sy + 0.5 + dy) / 2 + y) / height - 0.5)
                            + cam.direction
                        )
                        r = r + radiance(Ray(cam.origin + d * 140, d.norm()), 0, rng, scene) * (
                            1.0 / samples
                        )
                    pixels[i] = pixels[i] + Vec(clamp(r.x), clamp(r.y), clamp(r.z)) * 0.25

    if progress is not None:
        progress(1.0)
    return pixels