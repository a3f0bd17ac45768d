import math
import random

import pytest

from smallpath.geometry import Material, Ray, Vec
from smallpath.painterly import (
    Halton,
    hemisphere,
    painterly_scene,
    path_tracing_painterly,
    radiance_painterly,
)


def test_halton_seed_zero_is_zero():
    hal = Halton()
    hal.seed(0, 3)
    assert hal.value == 0.0


def test_halton_seed_one_base_two_is_half():
    hal = Halton()
    hal.seed(1, 2)
    assert hal.value == 0.5


@pytest.mark.parametrize("base", [2, 3, 5])
def test_halton_next_matches_seeded_elements(base):
    walker = Halton(0, base)
    for index in range(1, 40):
        value = walker.next()
        expected = Halton(index, base).value
        assert value == pytest.approx(expected, abs=1e-9)


@pytest.mark.parametrize("base", [2, 3])
def test_halton_values_stay_in_unit_interval(base):
    hal = Halton(0, base)
    values = [hal.next() for _ in range(100)]
    assert all(0.0 <= v < 1.0 for v in values)
    assert len(set(round(v, 9) for v in values)) == len(values)


def test_halton_rejects_bad_base():
    with pytest.raises(ValueError):
        Halton().seed(3, 1)


@pytest.mark.parametrize("u1,u2", [(0.0, 0.0), (0.3, 0.7), (0.9, 0.25), (0.5, 0.5)])
def test_hemisphere_is_unit_upper(u1, u2):
    v = hemisphere(u1, u2)
    assert math.sqrt(v.dot(v)) == pytest.approx(1.0)
    assert v.z == pytest.approx(u1)
    assert v.z >= 0


def test_hemisphere_pole():
    v = hemisphere(1.0, 0.3)
    assert v.x == pytest.approx(0.0)
    assert v.y == pytest.approx(0.0)
    assert v.z == pytest.approx(1.0)


def test_painterly_scene_contents():
    scene = painterly_scene()
    assert len(scene) == 9
    assert scene[6].material == Material.SPECULAR
    assert scene[7].material == Material.REFRACTIVE
    light = scene[8]
    assert light.radius == 600
    assert light.emission == Vec(12, 12, 12)


def test_radiance_miss_is_black():
    ray = Ray(Vec(0, 0, -1e7), Vec(0, 0, -1))
    result = radiance_painterly(ray, 0, random.Random(1), Halton(), Halton())
    assert result == Vec()


def test_radiance_beyond_max_depth_is_black():
    ray = Ray(Vec(50, 40, 81.6), Vec(0, -1, 0))
    result = radiance_painterly(ray, 11, random.Random(1), Halton(), Halton())
    assert result == Vec()


def test_radiance_straight_at_light_returns_emission():
    ray = Ray(Vec(50, 40, 81.6), Vec(0, 1, 0))
    result = radiance_painterly(ray, 0, random.Random(1), Halton(), Halton())
    assert result == Vec(12, 12, 12)


def test_path_tracing_painterly_image():
    calls = []
    pixels = path_tracing_painterly(4, 3, 1, calls.append, random.Random(7))
    assert len(pixels) == 12
    for p in pixels:
        for c in p:
            assert 0.0 <= c <= 1.0
    assert calls[0] == 0.0
    assert calls[-1] == 1.0
    assert calls == sorted(calls)
    assert len(calls) == 4


def test_path_tracing_painterly_is_deterministic_with_seed():
    first = path_tracing_painterly(3, 2, 1, None, random.Random(11))
    second = path_tracing_painterly(3, 2, 1, None, random.Random(11))
    assert first == second


def test_path_tracing_painterly_rejects_empty_image():
    with pytest.raises(ValueError):
        path_tracing_painterly(0, 3, 1)