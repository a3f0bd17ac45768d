import pytest

from smallpath.image import (
    ImageRGB,
    ImageRGBA,
    alpha_blend,
    create_checkboard_image_rgb,
    create_pure_image_rgb,
)


def test_pure_image_has_uniform_colour():
    color = (0.2, 0.4, 0.6)
    image = create_pure_image_rgb(5, 3, color)
    assert image.size == (5, 3)
    assert all(image[x, y] == color for x in range(5) for y in range(3))


def test_set_and_get_round_trip():
    image = ImageRGB(4, 4)
    image[2, 3] = (0.1, 0.5, 0.9)
    assert image[2, 3] == (0.1, 0.5, 0.9)
    assert image[3, 2] == (0.0, 0.0, 0.0)


def test_fill_replaces_all_pixels():
    image = ImageRGB(3, 2)
    image[0, 0] = (1, 1, 1)
    image.fill((0.3, 0.3, 0.3))
    assert image == create_pure_image_rgb(3, 2, (0.3, 0.3, 0.3))


@pytest.mark.parametrize("key", [(3, 0), (0, 2), (-1, 0)])
def test_out_of_range_pixel_raises(key):
    image = create_pure_image_rgb(3, 2, (0.5, 0.25, 0.75))
    with pytest.raises(IndexError) as excinfo:
        image[key]
    assert excinfo.type is IndexError
    assert image[2, 1] == (0.5, 0.25, 0.75)


def test_wrong_component_count_raises():
    image = ImageRGB(2, 2)
    with pytest.raises(ValueError):
        image[0, 0] = (1.0, 0.0)
    assert image[0, 0] == (0.0, 0.0, 0.0)
    rgba = ImageRGBA(2, 2)
    with pytest.raises(ValueError):
        rgba[0, 0] = (1.0, 0.0, 0.0)
    assert rgba[0, 0] == rgba[1, 0]


def test_checkboard_pattern():
    image = create_checkboard_image_rgb(64, 64)
    assert image[0, 0] == (0.8, 0.8, 0.8)
    assert image[31, 31] == (0.8, 0.8, 0.8)
    assert image[32, 0] == (1.0, 1.0, 1.0)
    assert image[0, 32] == (1.0, 1.0, 1.0)
    assert image[32, 32] == (0.8, 0.8, 0.8)


def test_checkboard_custom_delta_alternates():
    image = create_checkboard_image_rgb(4, 1, 1)
    assert image[0, 0] == image[2, 0]
    assert image[1, 0] == image[3, 0]
    assert image[0, 0] != image[1, 0]


def test_alpha_blend_opaque_and_transparent():
    source = ImageRGBA(2, 1)
    source[0, 0] = (0.2, 0.4, 0.6, 1.0)
    source[1, 0] = (0.2, 0.4, 0.6, 0.0)
    dest = create_pure_image_rgb(2, 1, (0.9, 0.8, 0.7))
    result = alpha_blend(source, dest)
    assert result[0, 0] == pytest.approx((0.2, 0.4, 0.6))
    assert result[1, 0] == pytest.approx((0.9, 0.8, 0.7))


def test_alpha_blend_size_mismatch():
    with pytest.raises(ValueError):
        alpha_blend(ImageRGBA(2, 2), ImageRGB(3, 2))


def test_from_colors_round_trip():
    colors = [(0.0, 0.1, 0.2), (0.3, 0.4, 0.5), (0.6, 0.7, 0.8), (0.9, 1.0, 0.0)]
    image = ImageRGB.from_colors(2, 2, colors)
    assert image[1, 0] == colors[1]
    assert image[0, 1] == colors[2]
    with pytest.raises(ValueError):
        ImageRGB.from_colors(3, 2, colors)


def test_to_ppm_header_and_body():
    image = create_pure_image_rgb(2, 1, (1.0, 0.0, 1.0))
    data = image.to_ppm()
    header = b"P6\n2 1\n255\n"
    assert data.startswith(header)
    body = data[len(header):]
    assert len(body) == 2 * 1 * 3
    assert body[:3] == bytes([255, 0, 255])