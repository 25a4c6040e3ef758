"""Command line entry point: generate a level and print it as ASCII layers."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Any

from levelforge import config
from levelforge.environment.generators.pipeline import create_level_generator
from levelforge.errors import ConfigurationError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="levelforge", description="Generate a seeded 3D grid level"
    )
    parser.add_argument(
        "--preset",
        default="default",
        choices=sorted(config.PRESETS),
        help="Settings preset to start from (default: default)",
    )
    seed_group = parser.add_mutually_exclusive_group()
    seed_group.add_argument("--seed", type=int, help="Pin the random seed")
    seed_group.add_argument(
        "--random-seed",
        action="store_true",
        help="Draw a fresh seed from system entropy",
    )
    parser.add_argument(
        "--size",
        type=int,
        nargs=3,
        metavar=("X", "Y", "Z"),
        help="Level dimensions",
    )
    parser.add_argument("--density", type=float, help="Target room density")
    parser.add_argument(
        "--furniture",
        type=float,
        help=(
            "Furniture density. Furniture only goes into cells above floors "
            "that the solver left empty"
        ),
    )
    parser.add_argument(
        "--layer", type=int, metavar="Y", help="Render only this layer"
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Log generation progress"
    )
    return parser


def _overrides(args: argparse.Namespace) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    if args.seed is not None:
        overrides["seed"] = args.seed
        overrides["use_random_seed"] = False
    if args.random_seed:
        overrides["use_random_seed"] = True
    if args.size is not None:
        overrides["level_size"] = tuple(args.size)
    if args.density is not None:
        overrides["room_density"] = args.density
    if args.furniture is not None:
        overrides["furniture_density"] = args.furniture
    return overrides


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s"
        )

    try:
        generator = create_level_generator(args.preset, **_overrides(args))
        size_y = generator.settings.level_size[1]
        if args.layer is not None and not 0 <= args.layer < size_y:
            raise ConfigurationError(
                f"--layer must be within [0, {size_y - 1}], got {args.layer}."
            )
        result = generator.generate()
    except ConfigurationError as exc:
        print(f"levelforge: {exc}", file=sys.stderr)
        return 2

    layers = [args.layer] if args.layer is not None else range(size_y)
    for y in layers:
        print(f"Layer {y}:")
        print(result.plan.render_layer(y))
        print()
    print(result.report.summary())
    return 0


if __name__ == "__main__":
    sys.exit(main())
