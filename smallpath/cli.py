"""Command line front end: render a case and write it as a PPM image."""

from __future__ import annotations

import argparse
import random
import sys
from typing import List, Optional, Sequence

from smallpath.cases import (
    MAX_SAMPLES,
    MIN_SAMPLES,
    SIZE_ITEMS,
    SIZES,
    PainterlyCase,
    PathTracingCase,
    RenderCase,
)

TITLE = "Final Project: Rendering"

_CASES = {"path": PathTracingCase, "painterly": PainterlyCase}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="smallpath", description=TITLE)
    parser.add_argument(
        "--case", choices=sorted(_CASES), default="path", help="which renderer to use"
    )
    parser.add_argument(
        "--size",
        type=int,
        choices=range(len(SIZES)),
        default=0,
        help="; ".join(f"{i}: {label}" for i, label in enumerate(SIZE_ITEMS)),
    )
    parser.add_argument("--width", type=int, help="custom image width")
    parser.add_argument("--height", type=int, help="custom image height")
    parser.add_argument(
        "--samples",
        type=int,
        default=MIN_SAMPLES,
        help=f"samples per subpixel ({MIN_SAMPLES}-{MAX_SAMPLES}); SPP is four times this",
    )
    parser.add_argument("--seed", type=int, help="seed of the random number generator")
    parser.add_argument("-o", "--output", help="output PPM file (default: standard output)")
    parser.add_argument("--list", action="store_true", help="list the cases and exit")
    return parser


def _list_cases() -> List[str]:
    return [
        f"Case {i}: {factory(sizes=((1, 1),)).name}"
        for i, factory in enumerate(_CASES.values(), start=1)
    ]


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.list:
        for line in _list_cases():
            print(line)
        return 0

    if (args.width is None) != (args.height is None):
        parser.error("--width and --height must be given together")

    factory = _CASES[args.case]
    try:
        if args.width is not None:
            case: RenderCase = factory(sizes=((args.width, args.height),))
        else:
            case = factory()
            case.set_size(args.size)
        case.set_samples(args.samples)
    except ValueError as exc:
        parser.error(str(exc))

    rng = random.Random(args.seed)
    result = case.render(rng)
    data = result.image.to_ppm()

    if args.output:
        with open(args.output, "wb") as handle:
            handle.write(data)
    else:
        sys.stdout.buffer.write(data)
        sys.stdout.buffer.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())