import random

import pytest

from smallpath.cases import (
    BACKGROUND,
    MAX_SAMPLES,
    MIN_SAMPLES,
    SIZES,
    PainterlyCase,
    PathTracingCase,
    RenderCase,
    default_cases,
)

TINY = ((3, 2), (2, 2))


def test_default_cases_names_and_order():
    cases = default_cases()
    assert [c.name for c in cases] == ["Path tracing", "Path Tracing(Painterly)"]
    assert all(c.sizes == SIZES for c in cases)


def test_default_settings():
    case = PathTracingCase()
    assert case.size_id == 0
    assert case.samples == 1
    assert case.needs_render
    assert case.size == (512, 384)


def test_placeholder_is_background():
    case = PathTracingCase(sizes=TINY)
    image = case.placeholder()
    assert image.size == (3, 2)
    assert all(image[x, y] == BACKGROUND for x in range(3) for y in range(2))


@pytest.mark.parametrize("factory", [PathTracingCase, PainterlyCase])
def test_render_produces_image_of_size(factory):
    case = factory(sizes=TINY)
    result = case.render(random.Random(3))
    assert result.image_size == (3, 2)
    assert result.image.size == (3, 2)
    assert result.fixed is True
    assert result.flipped is False
    for y in range(2):
        for x in range(3):
            assert all(0.0 <= c <= 1.0 for c in result.image[x, y])
    assert case.progress == 1.0
    assert case.is_rendering is False
    assert not case.needs_render


def test_render_is_deterministic_with_seed():
    first = PathTracingCase(sizes=TINY).render(random.Random(11)).image
    second = PathTracingCase(sizes=TINY).render(random.Random(11)).image
    assert first == second


def test_second_render_without_changes_does_not_trace():
    case = PainterlyCase(sizes=TINY)
    first = case.render(random.Random(5))
    rng = random.Random(9)
    state = rng.getstate()
    again = case.render(rng)
    assert rng.getstate() == state
    assert again.image is first.image


def test_set_size_triggers_recompute():
    case = PathTracingCase(sizes=TINY)
    case.render(random.Random(1))
    case.set_size(1)
    assert case.needs_render
    result = case.render(random.Random(1))
    assert result.image_size == (2, 2)
    assert result.image.size == (2, 2)


def test_same_settings_do_not_trigger_recompute():
    case = PathTracingCase(sizes=TINY)
    case.render(random.Random(1))
    case.set_size(0)
    case.set_samples(MIN_SAMPLES)
    assert not case.needs_render


def test_set_samples_triggers_recompute():
    case = PainterlyCase(sizes=TINY)
    case.render(random.Random(1))
    case.set_samples(2)
    assert case.samples == 2
    assert case.needs_render


@pytest.mark.parametrize("samples", [MIN_SAMPLES - 1, MAX_SAMPLES + 1])
def test_set_samples_out_of_range(samples):
    case = PathTracingCase(sizes=TINY)
    with pytest.raises(ValueError):
        case.set_samples(samples)
    assert case.samples == 1


@pytest.mark.parametrize("size_id", [-1, 2])
def test_set_size_out_of_range(size_id):
    case = PathTracingCase(sizes=TINY)
    with pytest.raises(ValueError):
        case.set_size(size_id)


def test_invalid_sizes_rejected():
    with pytest.raises(ValueError):
        PathTracingCase(sizes=())
    with pytest.raises(ValueError):
        PainterlyCase(sizes=((0, 4),))


def test_custom_tracer_is_used():
    from smallpath.geometry import Vec

    calls = []

    def tracer(width, height, samples, progress, rng):
        calls.append((width, height, samples))
        progress(1.0)
        return [Vec(1.0, 0.0, 2.0)] * (width * height)

    case = RenderCase("custom", tracer, sizes=((2, 1),))
    case.set_samples(7)
    result = case.render()
    assert calls == [(2, 1, 7)]
    assert result.image[0, 0] == (1.0, 0.0, 1.0)
    assert result.image[1, 0] == (1.0, 0.0, 1.0)