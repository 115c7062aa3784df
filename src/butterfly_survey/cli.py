"""
Command-line interface for the survey pipeline.

This module provides the main entry point for the CLI.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

from butterfly_survey import __version__
from butterfly_survey.config import get_settings
from butterfly_survey.flows.checklist import checklist_all
from butterfly_survey.flows.clean import clean_all
from butterfly_survey.flows.report import report_all
from butterfly_survey.flows.spatial import spatial_all


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="butterfly-survey",
        description="Tables, charts, map and report from a butterfly field survey",
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
        help="Enable debug mode",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    clean_parser = subparsers.add_parser("clean", help="Clean the raw survey file")
    clean_parser.add_argument(
        "--input",
        type=Path,
        default=None,
        help="Raw observation file (default: data/raw/<raw_filename> under project_dir)",
    )

    subparsers.add_parser("spatial", help="Build elevation, hotspot and map outputs")
    subparsers.add_parser("checklist", help="Build the species checklist and phenology")
    subparsers.add_parser("report", help="Render the narrative HTML report")
    subparsers.add_parser("run", help="Run every stage in order")
    subparsers.add_parser("info", help="Show application info")

    return parser


def _run_stage(name: str, stage: Callable[[], dict[str, Any]]) -> int:
    """Run one stage flow, turning input problems into exit code 1."""
    try:
        result = stage()
    except (ValueError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    print(f"{name}: {result}")
    return 0


def cmd_clean(args: argparse.Namespace) -> int:
    """Handle the 'clean' command."""
    if args.debug:
        print(f"Debug mode enabled. Settings: {get_settings()}")
    return _run_stage("clean", lambda: clean_all(raw_path=args.input))


def cmd_spatial(_args: argparse.Namespace) -> int:
    """Handle the 'spatial' command."""
    return _run_stage("spatial", spatial_all)


def cmd_checklist(_args: argparse.Namespace) -> int:
    """Handle the 'checklist' command."""
    return _run_stage("checklist", checklist_all)


def cmd_report(_args: argparse.Namespace) -> int:
    """Handle the 'report' command."""
    return _run_stage("report", report_all)


def cmd_run(args: argparse.Namespace) -> int:
    """Handle the 'run' command: every stage, stopping at the first failure."""
    if args.debug:
        print(f"Debug mode enabled. Settings: {get_settings()}")

    stages: list[tuple[str, Callable[[], dict[str, Any]]]] = [
        ("clean", clean_all),
        ("spatial", spatial_all),
        ("checklist", checklist_all),
        ("report", report_all),
    ]
    for name, stage in stages:
        status = _run_stage(name, stage)
        if status != 0:
            return status

    print("Done.")
    return 0


def cmd_info(_args: argparse.Namespace) -> int:
    """Handle the 'info' command."""
    settings = get_settings()
    print(f"Application: {settings.app_name}")
    print(f"Version: {__version__}")
    print(f"Environment: {settings.app_env}")
    print(f"Debug: {settings.debug}")
    print(f"Project directory: {settings.project_dir.resolve()}")
    print(f"Site: {settings.site_name}")
    return 0


def main() -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "clean": cmd_clean,
        "spatial": cmd_spatial,
        "checklist": cmd_checklist,
        "report": cmd_report,
        "run": cmd_run,
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
