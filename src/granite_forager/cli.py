"""
Command-line interface for the application.

This module provides the main entry point for the CLI.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from granite_forager import __version__
from granite_forager.analysis.taxonomy import TaxonomyMapper, coverage_report
from granite_forager.config import get_settings
from granite_forager.datasources.inaturalist.client import date_range_params
from granite_forager.datasources.reports import ReportStore
from granite_forager.pipeline import ValidationPipeline
from granite_forager.predictors import TablePredictor
from granite_forager.schemas import Status


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="granite-forager",
        description="Validate foraging predictions against iNaturalist observations",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    validate_parser = subparsers.add_parser("validate", help="Validate the model for one species")
    _add_validation_args(validate_parser)

    cross_parser = subparsers.add_parser(
        "cross-validate", help="Validate one species, then compare with user reports"
    )
    _add_validation_args(cross_parser)
    cross_parser.add_argument(
        "--reports",
        type=Path,
        required=True,
        help="JSON export of user foraging reports",
    )

    coverage_parser = subparsers.add_parser("coverage", help="Show taxonomy mapping coverage")
    coverage_parser.add_argument(
        "--catalog",
        type=Path,
        default=None,
        help="JSON object of species key -> display name to audit against",
    )

    subparsers.add_parser("info", help="Show application info")

    return parser


def _add_validation_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("species", help="Internal species key (e.g. morels)")
    parser.add_argument("--d1", default=None, help="Start date, YYYY-MM-DD")
    parser.add_argument("--d2", default=None, help="End date, YYYY-MM-DD")
    parser.add_argument(
        "--max-pages",
        type=int,
        default=None,
        help="Maximum API pages to fetch (default: max_pages from settings)",
    )
    parser.add_argument(
        "--predictions",
        type=Path,
        default=None,
        help="JSON table of exported model predictions",
    )


def _build_pipeline(args: argparse.Namespace, reports: ReportStore | None = None) -> ValidationPipeline:
    settings = get_settings()
    predictor = TablePredictor.from_json(args.predictions) if args.predictions else TablePredictor()
    pipeline = ValidationPipeline.from_settings(settings, predictor, reports)
    if args.max_pages is not None:
        pipeline.max_pages = args.max_pages
    return pipeline


def _date_range(args: argparse.Namespace) -> dict[str, str]:
    if args.d1 and args.d2:
        return date_range_params(args.d1, args.d2)
    return {k: v for k, v in (("d1", args.d1), ("d2", args.d2)) if v}


def cmd_validate(args: argparse.Namespace) -> int:
    """Handle the 'validate' command."""
    pipeline = _build_pipeline(args)
    result = pipeline.validate_species(args.species, _date_range(args))
    print(result.model_dump_json(indent=2))
    return 1 if result.status == Status.ERROR else 0


def cmd_cross_validate(args: argparse.Namespace) -> int:
    """Handle the 'cross-validate' command."""
    reports = ReportStore.from_json(args.reports)
    pipeline = _build_pipeline(args, reports)
    result = pipeline.validate_species(args.species, _date_range(args))
    if result.status == Status.ERROR:
        print(f"Error: {result.message}", file=sys.stderr)
        return 1

    cross = pipeline.cross_validate_species(args.species)
    print(cross.model_dump_json(indent=2))
    return 0


def cmd_coverage(args: argparse.Namespace) -> int:
    """Handle the 'coverage' command."""
    mapper = TaxonomyMapper()
    output: dict[str, object] = {"mapping": mapper.mapping_stats()}
    if args.catalog is not None:
        catalog = json.loads(args.catalog.read_text())
        report = coverage_report(catalog, mapper.entries)
        output["coverage"] = {
            "total_species": report.total_species,
            "mapped_species": report.mapped_species,
            "coverage_pct": report.coverage_pct,
            "status": report.status,
            "priority": report.priority,
            "message": report.message,
            "missing": report.missing,
            "extra": report.extra,
        }
    print(json.dumps(output, indent=2))
    return 0


def cmd_info(_args: argparse.Namespace) -> int:
    """Handle the 'info' command."""
    settings = get_settings()
    print(f"Application: {settings.app_name}")
    print(f"Version: {__version__}")
    print(f"Environment: {settings.app_env}")
    print(f"API: {settings.api_base}")
    print(f"Debug: {settings.debug}")
    return 0


def configure_logging(debug: bool = False) -> None:
    settings = get_settings()
    level = logging.DEBUG if debug or settings.debug else settings.log_level
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    configure_logging(args.debug)

    commands = {
        "validate": cmd_validate,
        "cross-validate": cmd_cross_validate,
        "coverage": cmd_coverage,
        "info": cmd_info,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
