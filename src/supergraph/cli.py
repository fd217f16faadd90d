import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from supergraph.api_schema import build_supergraph_schema, print_api_schema
from supergraph.errors import SupergraphSchemaError
from supergraph.inaccessible import collect_inaccessible_report
from supergraph.settings import FilterSettings

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="supergraph-api-schema",
        description="Print the API schema of a supergraph, without @inaccessible elements",
    )
    parser.add_argument("supergraph", type=Path, help="Path to the supergraph SDL file")
    parser.add_argument(
        "--directive",
        default=None,
        help="Name of the inaccessible directive (default: SUPERGRAPH_INACCESSIBLE_DIRECTIVE "
        "or 'inaccessible')",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write the API schema to this file instead of stdout",
    )
    parser.add_argument(
        "--validate",
        action="store_true",
        help="Fail when the resulting API schema is invalid",
    )
    parser.add_argument(
        "--assume-valid-sdl",
        action="store_true",
        help="Skip SDL validation of the supergraph document",
    )
    parser.add_argument(
        "--report",
        action="store_true",
        help="Log every removed type and field",
    )
    return parser


def _resolve_settings(args: argparse.Namespace) -> FilterSettings:
    settings = FilterSettings.from_env()
    overrides = {}
    if args.directive:
        overrides["directive_name"] = args.directive
    if args.validate:
        overrides["validate_output"] = True
    if args.assume_valid_sdl:
        overrides["assume_valid_sdl"] = True
    if not overrides:
        return settings
    # Re-validate so CLI overrides get the same normalization as env values.
    return FilterSettings(**{**settings.model_dump(), **overrides})


def _log_report(sdl: str, settings: FilterSettings) -> None:
    supergraph = build_supergraph_schema(sdl, assume_valid_sdl=settings.assume_valid_sdl)
    report = collect_inaccessible_report(supergraph, settings.directive_name)
    if report.is_empty:
        logger.info("Nothing marked @%s", settings.directive_name)
        return
    for type_name in report.removed_types:
        logger.info("Removed type %s", type_name)
    for field_coordinate in report.removed_fields:
        logger.info("Removed field %s", field_coordinate)
    for type_name in report.retained_types:
        logger.warning("Type %s is still referenced by arguments or input fields", type_name)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the supergraph API schema CLI."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    args = _build_parser().parse_args(argv)

    try:
        settings = _resolve_settings(args)
        sdl = args.supergraph.read_text(encoding="utf-8")
        if args.report:
            _log_report(sdl, settings)
        api_sdl = print_api_schema(sdl, settings=settings)
    except (SupergraphSchemaError, ValueError) as e:
        logger.error(f"API schema build failed: {e}")
        return 1
    except OSError as e:
        logger.error(f"Could not read {args.supergraph}: {e}")
        return 1

    if args.output is None:
        sys.stdout.write(api_sdl + "\n")
    else:
        args.output.write_text(api_sdl + "\n", encoding="utf-8")
        logger.info(f"API schema written to {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
