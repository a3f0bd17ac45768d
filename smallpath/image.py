"""RGB and RGBA images of floating-point colours, with a few constructors."""

from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

ColorRGB = Tuple[float, float, float]
ColorRGBA = Tuple[float, float, float, float]


def _as_color(color: Iterable[float], channels: int) -> tuple:
    values = tuple(float(c) for c in color)
    if len(values) != channels:
        raise ValueError(f"expected a colour with {channels} components, got {len(values)}")
    return values


class _PixelGrid:
    """Row-major storage shared by the image types."""

    channels = 3

    def __init__(self, width: int, height: int) -> None:
        if width < 0 or height < 0:
            raise ValueError("image width and height must not be negative")
        self.width = width
        self.height = height
        self._pixels: List[tuple] = [(0.0,) * self.channels] * (width * height)

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    def _offset(self, key: Tuple[int, int]) -> int:
        x, y = key
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside a {self.width}x{self.height} image")
        return y * self.width + x

    def _get(self, key: Tuple[int, int]) -> tuple:
        return self._pixels[self._offset(key)]

    def _set(self, key: Tuple[int, int], color: Iterable[float]) -> None:
        self._pixels[self._offset(key)] = _as_color(color, self.channels)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.size == other.size and self._pixels == other._pixels

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.width}, {self.height})"


class ImageRGB(_PixelGrid):
    """An image of RGB colours addressed as ``image[x, y]``."""

    channels = 3

    def __getitem__(self, key: Tuple[int, int]) -> ColorRGB:
        return self._get(key)

    def __setitem__(self, key: Tuple[int, int], color: Iterable[float]) -> None:
        self._set(key, color)

    def fill(self, color: Iterable[float]) -> None:
        """Set every pixel to ``color``."""
        value = _as_color(color, self.channels)
        self._pixels = [value] * (self.width * self.height)

    @classmethod
    def from_colors(
        cls, width: int, height: int, colors: Sequence[Iterable[float]]
    ) -> ImageRGB:
        """Build an image from ``width * height`` colours in row-major order."""
        if len(colors) != width * height:
            raise ValueError("number of colours does not match the image size")
        image = cls(width, height)
        image._pixels = [_as_color(c, cls.channels) for c in colors]
        return image

    def to_ppm(self) -> bytes:
        """Encode as a binary PPM (P6) with 8 bits per channel."""
        header = f"P6\n{self.width} {self.height}\n255\n".encode("ascii")
        body = bytes(
            int(min(max(channel, 0.0), 1.0) * 255 + 0.5)
            for pixel in self._pixels
            for channel in pixel
        )
        return header + body


class ImageRGBA(_PixelGrid):
    """An image of RGBA colours addressed as ``image[x, y]``."""

    channels = 4

    def __getitem__(self, key: Tuple[int, int]) -> ColorRGBA:
        return self._get(key)

    def __setitem__(self, key: Tuple[int, int], color: Iterable[float]) -> None:
        self._set(key, color)


def create_pure_image_rgb(width: int, height: int, color: Iterable[float]) -> ImageRGB:
    """An image filled with a single colour."""
    image = ImageRGB(width, height)
    image.fill(color)
    return image


def create_checkboard_image_rgb(width: int, height: int, delta: int = 32) -> ImageRGB:
    """A grey and white checkerboard with squares of side ``delta``."""
    if delta <= 0:
        raise ValueError("checkerboard square size must be positive")
    image = ImageRGB(width, height)
    for y in range(height):
        for x in range(width):
            if (x // delta + y // delta) % 2 == 0:
                image[x, y] = (0.8, 0.8, 0.8)
            else:
                image[x, y] = (1.0, 1.0, 1.0)
    return image


def alpha_blend(source: ImageRGBA, dest: ImageRGB) -> ImageRGB:
    """Composite ``source`` over ``dest`` using the source alpha."""
    if source.size != dest.size:
        raise ValueError("alpha_blend: incompatible size")
    result = ImageRGB(*source.size)
    for y in range(source.height):
        for x in range(source.width):
            r, g, b, a = source[x, y]
            dr, dg, db = dest[x, y]
            result[x, y] = (r * a + dr * (1 - a), g * a + dg * (1 - a), b * a + db * (1 - a))
    return result