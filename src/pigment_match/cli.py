from __future__ import annotations

import argparse
import logging
from pathlib import Path

from .catalog import CatalogValidationError, builtin_catalog_names
from .convert import InvalidColorError
from .io import dump_result_json, write_result_json
from .pipeline import PigmentMatcher
from .ranking import DEFAULT_LIMIT
from .report import format_recipe_text

logger = logging.getLogger(__name__)


def _add_catalog_arguments(parser: argparse.ArgumentParser, default: str) -> None:
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--catalog",
        default=None,
        help="Path to a pigment catalog (.csv/.json) with id, name and hex columns.",
    )
    source.add_argument(
        "--builtin",
        default=default,
        choices=builtin_catalog_names(),
        help=f"Built-in catalog to use when --catalog is omitted (default: {default}).",
    )


def _add_output_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--out",
        default=None,
        help="Optional output path. If omitted, prints to stdout.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pigment-match",
        description="Match colors to catalog paints and compute mixing recipes.",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging."
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    match = subparsers.add_parser(
        "match", help="Rank pre-made catalog paints by closeness to a color."
    )
    match.add_argument("--color", required=True, help="Target color as #RRGGBB.")
    _add_catalog_arguments(match, default="commercial")
    match.add_argument(
        "--limit",
        type=int,
        default=DEFAULT_LIMIT,
        help="Maximum number of matches to return.",
    )
    match.add_argument("--brand", default=None, help="Only consider this brand.")
    match.add_argument(
        "--inventory",
        nargs="+",
        default=None,
        help="Pigment ids in stock; others are ignored.",
    )
    _add_output_argument(match)

    recipe = subparsers.add_parser(
        "recipe", help="Compute a mixing recipe from the catalog pigments."
    )
    recipe.add_argument("--color", required=True, help="Target color as #RRGGBB.")
    _add_catalog_arguments(recipe, default="rosco")
    recipe.add_argument(
        "--inventory",
        nargs="+",
        default=None,
        help="Pigment ids in stock; others are ignored.",
    )
    recipe.add_argument(
        "--format",
        choices=("json", "text"),
        default="json",
        help="Output a JSON document or a copyable text recipe.",
    )
    recipe.add_argument(
        "--scale",
        type=float,
        default=1.0,
        help="Batch multiplier applied to the parts in text output.",
    )
    _add_output_argument(recipe)

    listing = subparsers.add_parser("catalog", help="List the pigments of a catalog.")
    _add_catalog_arguments(listing, default="rosco")
    _add_output_argument(listing)

    return parser


def _emit(text: str, out: str | None) -> None:
    if out:
        output_path = Path(out)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(text + "\n", encoding="utf-8")
    else:
        print(text)


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        matcher = PigmentMatcher(catalog_path=args.catalog, builtin=args.builtin)
    except CatalogValidationError as exc:
        parser.error(str(exc))

    if args.command == "catalog":
        _emit(dump_result_json(matcher.catalog), args.out)
        return 0

    try:
        if args.command == "match":
            if args.limit < 1:
                parser.error("--limit must be at least 1")
            result = matcher.match(
                args.color,
                limit=args.limit,
                inventory=args.inventory,
                brand=args.brand,
            ) or None
        elif args.command == "recipe":
            if args.scale <= 0:
                parser.error("--scale must be positive")
            result = matcher.recipe(args.color, inventory=args.inventory)
        else:
            parser.error("unknown command")
    except InvalidColorError as exc:
        parser.error(str(exc))

    if args.command == "recipe" and args.format == "text" and result is not None:
        _emit(format_recipe_text(result, scale=args.scale), args.out)
    elif args.out:
        write_result_json(result, args.out)
        logger.info(f"Wrote result to {args.out}")
    else:
        print(dump_result_json(result))

    return 0 if result else 1


if __name__ == "__main__":
    raise SystemExit(main())
