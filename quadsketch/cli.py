"""quadsketch — print a terse quadtree sketch of an image.

Usage:
    quadsketch photo.png            # default cell size 64
    quadsketch photo.png 16         # finer cells
    quadsketch photo.png 8 --budget 2000 --seed 7 -v
"""

from __future__ import annotations

import argparse
import logging
import sys

from dotenv import load_dotenv

from quadsketch.config import settings
from quadsketch.engine.errors import ConfigError, SketchError
from quadsketch.engine.pipeline import sketch_image

logger = logging.getLogger(__name__)


def _parse_int(value: str | None, what: str) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        raise ConfigError(f"invalid {what}: {value!r}") from None


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str):
        raise ConfigError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="quadsketch",
        description="Three-tone quadtree sketch of an image, sized to fit a budget",
    )
    parser.add_argument("image", help="Image file (anything Pillow can read)")
    parser.add_argument("cell_size", nargs="?", help="Minimum cell size (default 64)")
    parser.add_argument("-b", "--budget", help="Encoded size budget (default 903)")
    parser.add_argument("-s", "--seed", help="Seed for leaf selection")
    parser.add_argument(
        "--legacy-snapshot",
        action="store_true",
        help="Keep the initial leaf list for the whole simplification run",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log progress to stderr")
    return parser


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    try:
        args = build_parser().parse_args(argv)
    except ConfigError as e:
        print(f"quadsketch: {e}", file=sys.stderr)
        return 1

    level = logging.DEBUG if args.verbose else getattr(
        logging, settings.quadsketch_log_level.upper(), logging.INFO
    )
    logging.basicConfig(level=level, format="%(name)s %(levelname)s %(message)s", stream=sys.stderr)

    try:
        config = settings.sketch_config(
            minimum_cell_size=_parse_int(args.cell_size, "cell size"),
            encoded_size_budget=_parse_int(args.budget, "budget"),
            seed=_parse_int(args.seed, "seed"),
            refresh_leaves=False if args.legacy_snapshot else None,
        )
        ctx = sketch_image(args.image, config)
    except SketchError as e:
        print(e, file=sys.stderr)
        return 1

    print(ctx.sketch)
    return 0


if __name__ == "__main__":
    sys.exit(main())
