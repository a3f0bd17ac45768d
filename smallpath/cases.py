"""Render cases: one scene, a choice of image sizes and a sample count."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from smallpath.geometry import Vec, correct
from smallpath.image import ImageRGB, create_pure_image_rgb
from smallpath.painterly import path_tracing_painterly
from smallpath.tracer import ProgressCallback, path_tracing

Size = Tuple[int, int]
Tracer = Callable[
    [int, int, int, Optional[ProgressCallback], Optional[random.Random]], List[Vec]
]

#: Image sizes offered by every case.
SIZES: Tuple[Size, ...] = ((512, 384), (768, 576))

#: Labels of the sizes as shown to the user.
SIZE_ITEMS: Tuple[str, ...] = ("Small (512 x 384)", "Large (1024 x 768)")

#: Range of samples per subpixel (the image uses four subpixels per pixel).
MIN_SAMPLES = 1
MAX_SAMPLES = 100

#: Colour of the placeholder image shown before a render has finished.
BACKGROUND = (2.0 / 17, 2.0 / 17, 2.0 / 17)


@dataclass(frozen=True)
class RenderResult:
    """What a case hands back for display."""

    image: ImageRGB
    image_size: Size
    fixed: bool = True
    flipped: bool = False


class RenderCase:
    """A scene rendered by ``tracer`` at one of several sizes.

    The image is recomputed only when the size or the sample count has
    changed since the last render.
    """

    def __init__(self, name: str, tracer: Tracer, sizes: Sequence[Size] = SIZES) -> None:
        self.sizes: Tuple[Size, ...] = tuple((int(w), int(h)) for w, h in sizes)
        if not self.sizes:
            raise ValueError("a render case needs at least one image size")
        if any(w <= 0 or h <= 0 for w, h in self.sizes):
            raise ValueError("image sizes must be positive")
        self.name = name
        self._tracer = tracer
        self.size_id = 0
        self.samples = MIN_SAMPLES
        self.enable_zoom = True
        self.progress = 0.0
        self.is_rendering = False
        self._recompute = True
        self._image: Optional[ImageRGB] = None
        self._empty: dict = {}

    @property
    def size(self) -> Size:
        return self.sizes[self.size_id]

    @property
    def needs_render(self) -> bool:
        return self._recompute

    def set_size(self, size_id: int) -> None:
        """Choose one of the offered sizes by index."""
        if not 0 <= size_id < len(self.sizes):
            raise ValueError(f"size index {size_id} out of range 0..{len(self.sizes) - 1}")
        if size_id != self.size_id:
            self.size_id = size_id
            self._recompute = True

    def set_samples(self, samples: int) -> None:
        """Set the number of samples per subpixel."""
        if not MIN_SAMPLES <= samples <= MAX_SAMPLES:
            raise ValueError(f"samples must be between {MIN_SAMPLES} and {MAX_SAMPLES}")
        if samples != self.samples:
            self.samples = samples
            self._recompute = True

    def placeholder(self) -> ImageRGB:
        """The plain image shown for the current size while nothing is rendered."""
        if self.size_id not in self._empty:
            width, height = self.size
            self._empty[self.size_id] = create_pure_image_rgb(width, height, BACKGROUND)
        return self._empty[self.size_id]

    def _on_progress(self, value: float) -> None:
        self.progress = value

    def render(self, rng: Optional[random.Random] = None) -> RenderResult:
        """Render if anything changed, and return the current image."""
        width, height = self.size
        if self._recompute:
            self._recompute = False
            self.is_rendering = True
            self.progress = 0.0
            try:
                colors = self._tracer(width, height, self.samples, self._on_progress, rng)
            finally:
                self.is_rendering = False
            self._image = ImageRGB.from_colors(
                width,
                height,
                [(correct(c.x), correct(c.y), correct(c.z)) for c in colors],
            )
        image = self._image if self._image is not None else self.placeholder()
        return RenderResult(image=image, image_size=(width, height), fixed=True)


class PathTracingCase(RenderCase):
    """The Cornell box with explicit light sampling."""

    def __init__(self, sizes: Sequence[Size] = SIZES) -> None:
        super().__init__("Path tracing", path_tracing, sizes)


class PainterlyCase(RenderCase):
    """The Cornell box traced with Halton-driven diffuse bounces."""

    def __init__(self, sizes: Sequence[Size] = SIZES) -> None:
        super().__init__("Path Tracing(Painterly)", path_tracing_painterly, sizes)


def default_cases() -> List[RenderCase]:
    """The cases of the application, in display order."""
    return [PathTracingCase(), PainterlyCase()]