"""Paths of the bundled icons, fonts, example models and example scenes."""

from __future__ import annotations

from enum import Enum

_ASSET_ROOT = "assets"
_ICON_SIZES = (32, 48)
_FONT_NAMES = ("Ubuntu", "UbuntuMono")

DEFAULT_ICONS = tuple(
    f"{_ASSET_ROOT}/images/vcl-logo-{size}x{size}.png" for size in _ICON_SIZES
)

DEFAULT_FONTS = tuple(f"{_ASSET_ROOT}/fonts/{name}.ttf" for name in _FONT_NAMES)


class ExampleModel(Enum):
    """Bundled example meshes."""

    ARMA = 0
    BLOCK = 1
    CUBE = 2
    DINOSAUR = 3
    FACE = 4
    FANDISK = 5
    ROCKER = 6
    SPHERE = 7

    def path(self) -> str:
        """Relative path of the model file."""
        return f"{_ASSET_ROOT}/models/{self.name.lower()}.obj"


class ExampleScene(Enum):
    """Bundled example scenes."""

    FLOOR = 0
    CORNELL_BOX = 1
    TEAPOT = 2
    BUNNY = 3
    SPONZA = 4
    BREAKFAST_ROOM = 5
    WHITE_OAK = 6
    SPORTS_CAR = 7
    SIBENIK = 8

    def path(self) -> str:
        """Relative path of the scene description."""
        stem = self.name.lower()
        return f"{_ASSET_ROOT}/scenes/{stem}/{stem}.yaml"


EXAMPLE_MODELS = tuple(model.path() for model in ExampleModel)
EXAMPLE_SCENES = tuple(scene.path() for scene in ExampleScene)