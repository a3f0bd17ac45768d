"""Path tracing with Halton-driven diffuse bounces for a painterly look."""

from __future__ import annotations

import math
import random
from typing import List, Optional

from smallpath.geometry import Material, Ray, Sphere, Vec, clamp, intersect_scene
from smallpath.tracer import FOV_SCALE, MAX_DEPTH, ROULETTE_DEPTH, ProgressCallback


class Halton:
    """A one-dimensional Halton (radical inverse) sequence walked incrementally."""

    __slots__ = ("value", "inv_base")

    def __init__(self, index: int = 0, base: int = 2) -> None:
        self.value = 0.0
        self.inv_base = 0.5
        self.seed(index, base)

    def seed(self, index: int, base: int) -> None:
        """Set the sequence to element ``index`` in the given ``base``."""
        if base < 2:
            raise ValueError("Halton base must be at least 2")
        f = self.inv_base = 1.0 / base
        self.value = 0.0
        while index > 0:
            self.value += f * (index % base)
            index //= base
            f *= self.inv_base

    def next(self) -> float:
        """Advance to the next element of the sequence and return it."""
        r = 1.0 - self.value - 0.0000001
        if self.inv_base < r:
            self.value += self.inv_base
        else:
            h = self.inv_base
            while True:
                hh = h
                h *= self.inv_base
                if h < r:
                    break
            self.value += hh + h - 1.0
        return self.value


def hemisphere(u1: float, u2: float) -> Vec:
    """Map two numbers in [0, 1) to a unit vector on the +z hemisphere."""
    r = math.sqrt(max(0.0, 1.0 - u1 * u1))
    phi = 2 * math.pi * u2
    return Vec(math.cos(phi) * r, math.sin(phi) * r, u1)


def painterly_scene() -> List[Sphere]:
    """The darker Cornell box lit by a large light sphere poking through the ceiling."""
    return [
        Sphere(1e5, Vec(1e5 + 1, 40.8, 81.6), Vec(), Vec(0.75, 0.25, 0.25), Material.DIFFUSE),
        Sphere(1e5, Vec(-1e5 + 99, 40.8, 81.6), Vec(), Vec(0.25, 0.25, 0.75), Material.DIFFUSE),
        Sphere(1e5, Vec(50, 40.8, 1e5), Vec(), Vec(0.25, 0.25, 0.25), Material.DIFFUSE),
        Sphere(1e5, Vec(50, 40.8, -1e5 + 170), Vec(), Vec(), Material.DIFFUSE),
        Sphere(1e5, Vec(50, 1e5, 81.6), Vec(), Vec(0.25, 0.25, 0.25), Material.DIFFUSE),
        Sphere(1e5, Vec(50, -1e5 + 81.6, 81.6), Vec(), Vec(0.75, 0.75, 0.75), Material.DIFFUSE),
        Sphere(16.5, Vec(27, 16.5, 47), Vec(), Vec(1, 1, 1) * 0.999, Material.SPECULAR),
        Sphere(16.5, Vec(73, 16.5, 78), Vec(), Vec(1, 1, 1) * 0.999, Material.REFRACTIVE),
        Sphere(600, Vec(50, 681.6 - 0.27, 81.6), Vec(12, 12, 12), Vec(), Material.DIFFUSE),
    ]


_SCENE = tuple(painterly_scene())


def radiance_painterly(
    ray: Ray,
    depth: int,
    rng: random.Random,
    hal: Halton,
    hal2: Halton,
) -> Vec:
    """Estimate the radiance along ``ray``; diffuse bounces follow the Halton sequences."""
    hit = intersect_scene(ray, _SCENE)
    if hit is None:
        return Vec()
    t, index = hit
    obj = _SCENE[index]
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
            return obj.emission

    if obj.material == Material.DIFFUSE:
        hal.next()
        hal2.next()
        d = nl + hemisphere(hal.value, hal2.value)
        return obj.emission + f.mult(radiance_painterly(Ray(x, d), depth, rng, hal, hal2))

    reflected = ray.direction - n * (2 * n.dot(ray.direction))
    if obj.material == Material.SPECULAR:
        return obj.emission + f.mult(radiance_painterly(Ray(x, reflected), depth, rng, hal, hal2))

    refl_ray = Ray(x, reflected)
    into = n.dot(nl) > 0
    nc, nt = 1.0, 1.5
    nnt = nc / nt if into else nt / nc
    ddn = ray.direction.dot(nl)
    cos2t = 1 - nnt * nnt * (1 - ddn * ddn)
    if cos2t < 0:
        return obj.emission + f.mult(radiance_painterly(refl_ray, depth, rng, hal, hal2))

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
            incoming = radiance_painterly(refl_ray, depth, rng, hal, hal2) * rp
        else:
            incoming = radiance_painterly(Ray(x, tdir), depth, rng, hal, hal2) * tp
    else:
        incoming = (
            radiance_painterly(refl_ray, depth, rng, hal, hal2) * re
            + radiance_painterly(Ray(x, tdir), depth, rng, hal, hal2) * tr
        )
    return obj.emission + f.mult(incoming)


def path_tracing_painterly(
    width: int,
    height: int,
    samples: int,
    progress: Optional[ProgressCallback] = None,
    rng: Optional[random.Random] = None,
) -> List[Vec]:
    """Render the painterly scene and return ``width * height`` colours.

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

    hal = Halton(0, 2)
    hal2 = Halton(0, 2)

    for y in range(height):
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
                        r = r + radiance_painterly(
                            Ray(cam.origin + d * 140, d.norm()), 0, rng, hal, hal2
                        ) * (1.0 / samples)
                    pixels[i] = pixels[i] + Vec(clamp(r.x), clamp(r.y), clamp(r.z)) * 0.25

    if progress is not None:
        progress(1.0)
    return pixels