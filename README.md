# smallpath

smallpath is a compact Monte Carlo path tracer written in plain Python. It
renders a Cornell box built from spheres: diffuse walls, a mirror ball, a
glass ball and a light. It uses only the standard library.

It has two renderers:

- **Path tracing.** Diffuse surfaces use cosine-weighted sampling together
  with explicit sampling of every emissive sphere. Mirrors use ideal
  reflection. Glass splits light between reflection and refraction using
  Fresnel weights from Schlick's approximation. Russian roulette ends paths
  after depth 5, and any path deeper than 10 returns black. Scene queries go
  through a bounding volume hierarchy.
- **Painterly.** The scene is the same box with a darker floor and back wall
  and a large light sphere that reaches through the ceiling. Diffuse
  bounces follow two Halton sequences instead of random numbers, which gives
  the image a brush-stroke look. Scene queries here test every sphere
  directly.

Every pixel is divided into 2 × 2 sub-pixels, each sampled through a tent
filter. A pixel's value is the sum of one quarter of the clamped radiance
from each of its sub-pixels. The sample count you set applies per sub-pixel,
so each pixel gets four times that many paths.

## Installation

```
pip install .
```

Tests:

```
pip install ".[test]"
pytest
```

## Command line

Installing the package adds a `smallpath` command. It renders one case and
writes the gamma-corrected result as a binary PPM (P6) image.

```
smallpath --samples 4 --seed 1 -o box.ppm
smallpath --case painterly --width 64 --height 48 -o painterly.ppm
smallpath --list
```

Options:

- `--case {painterly,path}`: which renderer to use. The default is `path`.
- `--size {0,1}`: a size preset. `0` is 512 × 384 and `1` is 768 × 576.
- `--width`, `--height`: a custom size. You must give both.
- `--samples N`: samples per sub-pixel, from 1 to 100. The default is 1.
- `--seed N`: seeds the random number generator so renders are
  reproducible.
- `-o`, `--output FILE`: the output file. Without it, the image goes to
  standard output.
- `--list`: prints the available cases and exits.

## Library

- `smallpath.geometry`
  - `Vec`: an immutable 3-vector. It supports `+`, `-`, scalar `*`,
    indexing and iteration, plus the methods `dot`, `cross`, `mult`
    (component-wise product) and `norm`.
  - `Ray`, with `origin` and `direction`.
  - `Material`: `DIFFUSE`, `SPECULAR` or `REFRACTIVE`.
  - `Sphere`: its `intersect(ray)` returns the nearest hit distance, or
    `0.0` on a miss.
  - `intersect_scene(ray, spheres)`: a brute-force nearest-hit search. It
    returns `(distance, index)` or `None`.
  - `clamp(x)` limits a value to [0, 1]. `correct(x)` clamps and then
    applies a gamma of 2.2.
- `smallpath.bvh`
  - `AABB`: `intersect` and `merge`.
  - `BVHNode`.
  - `build_bvh`: builds a hierarchy that splits along x.
  - `intersect_bvh`: returns `(distance, sphere index)` or `None`.
  - `describe_bvh`: yields an indented text description of the tree.
- `smallpath.tracer`
  - `cornell_box()`: the scene.
  - `SceneBVH`: the spheres together with their hierarchy.
  - `radiance`.
  - `path_tracing(width, height, samples, progress=None, rng=None)`. It
    returns `width * height` colours, top row first, clamped but not gamma
    corrected. The optional `progress` callback receives fractions from 0.0
    to 1.0. The BVH layout and the row-by-row progress are logged at DEBUG
    level.
- `smallpath.painterly`
  - `Halton`: an incremental radical-inverse sequence with `seed`, `next`
    and `value`.
  - `hemisphere`.
  - `painterly_scene()`.
  - `radiance_painterly`.
  - `path_tracing_painterly`, which has the same signature and result as
    `path_tracing`.
- `smallpath.image`
  - `ImageRGB` and `ImageRGBA`: float images indexed as `image[x, y]`.
    `ImageRGB` also provides `fill`, `from_colors` and `to_ppm`.
  - `create_pure_image_rgb` and `create_checkboard_image_rgb`.
  - `alpha_blend`: raises `ValueError` if the sizes differ.
- `smallpath.cases`
  - `PathTracingCase` and `PainterlyCase`. Each has the size presets
    above, `set_size`, `set_samples` (1–100) and `render(rng=None)`. A case
    renders again only when its size or sample count has changed, and
    `render` returns a `RenderResult`.
  - `default_cases()`: returns both cases.
- `smallpath.assets`
  - `ExampleModel` and `ExampleScene`: enums whose `path()` gives the
    relative path of a bundled asset.
  - `DEFAULT_ICONS`, `DEFAULT_FONTS`, `EXAMPLE_MODELS` and
    `EXAMPLE_SCENES`.

Example:

```python
import random

from smallpath.geometry import Vec, clamp, correct
from smallpath.tracer import path_tracing

a = Vec(1, 0, 0)
b = Vec(0, 1, 0)
print(a.cross(b).dot(Vec(0, 0, 1)))   # 1.0
print(clamp(1.7), correct(0.5))

pixels = path_tracing(8, 6, 1, rng=random.Random(0))
print(len(pixels))                     # 48
```

## What it does not do

- There is no window or interactive viewer and no camera control. Output
  goes only to PPM files or to standard output.
- The scenes are fixed sets of spheres. `smallpath.assets` only names
  asset paths. The package does not include those files and cannot load
  meshes or scene descriptions.
- Rendering runs in a single thread in pure Python, so it is slow. Use
  small sizes and low sample counts while you experiment.