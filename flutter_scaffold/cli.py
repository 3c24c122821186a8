"""Flutter Scaffold command-line entry point.

Usage::

    flutter-scaffold --recipe clean-architecture --name "Order Details" --target-dir lib/features
    flutter-scaffold --recipe core-download --target-dir lib --run-commands
    python -m flutter_scaffold.cli --list-recipes

Exit codes: ``0`` success, ``3`` partial success (some steps skipped or
failed), ``1`` failure or invalid input, ``2`` command-line usage error.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
import time
from pathlib import Path

from flutter_scaffold.config import Config
from flutter_scaffold.scaffolder import RECIPES, Outcome, ScaffoldGenerator, get_recipe
from flutter_scaffold.scaffolder.errors import InvalidFeatureName, UnknownRecipe
from flutter_scaffold.utils import (
    console,
    format_duration,
    print_error,
    print_report,
    print_success,
    print_summary_table,
    print_warning,
)

EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_PARTIAL = 3


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="flutter-scaffold",
        description="Flutter Scaffold -- generate Flutter feature structures",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  flutter-scaffold --recipe clean-architecture --name OrderDetails -t lib/features\n"
            "  flutter-scaffold --recipe screen-only --name settings --package-name my_app\n"
            "  flutter-scaffold --recipe core-download -t lib --branch main\n"
        ),
    )
    parser.add_argument(
        "--recipe", "-r",
        default="clean-architecture",
        help="Recipe to run (default: clean-architecture). See --list-recipes",
    )
    parser.add_argument(
        "--name", "-n",
        default=None,
        help="Feature name, e.g. 'Order Details' or OrderDetails",
    )
    parser.add_argument(
        "--target-dir", "-t",
        default=None,
        help="Directory the feature folder is created in (default: current directory)",
    )
    parser.add_argument(
        "--package-name",
        default=None,
        help="Dart package name for imports (default: read from pubspec.yaml)",
    )
    parser.add_argument(
        "--project-dir",
        default=None,
        help="Flutter project root holding pubspec.yaml (default: searched upwards)",
    )
    parser.add_argument("--repo-url", default=None, help="Override the template repository URL")
    parser.add_argument("--branch", default=None, help="Override the template repository branch")
    parser.add_argument("--sub-path", default=None, help="Override the template path inside the archive")
    parser.add_argument(
        "--timeout",
        type=int,
        default=None,
        help="Download timeout in seconds (default: 60)",
    )
    parser.add_argument(
        "--run-commands",
        action="store_true",
        help="Run the recipe's post-generation commands (e.g. dart format)",
    )
    parser.add_argument(
        "--list-recipes",
        action="store_true",
        help="List the available recipes and exit",
    )
    return parser


def config_from_args(args: argparse.Namespace) -> Config:
    """Environment configuration with command-line flags applied on top."""
    config = Config.from_env()
    if args.target_dir:
        config.target_dir = Path(args.target_dir)
    if args.project_dir:
        config.project_dir = Path(args.project_dir)
    if args.package_name:
        config.package_name = args.package_name
    if args.timeout is not None:
        config.remote.download_timeout = args.timeout
    if args.repo_url:
        config.remote.repo_url = args.repo_url
    if args.branch:
        config.remote.branch = args.branch
    if args.sub_path:
        config.remote.sub_path = args.sub_path
    return config


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for ``flutter-scaffold``.

    Returns the process exit code; the console script passes it to
    ``sys.exit``.
    """
    args = build_parser().parse_args(argv)

    if args.list_recipes:
        print_summary_table(
            {key: recipe.description for key, recipe in RECIPES.items()},
            title="Recipes",
        )
        return EXIT_SUCCESS

    try:
        recipe = get_recipe(args.recipe)
    except UnknownRecipe as exc:
        print_error(f"Error: {exc}")
        return EXIT_FAILURE

    name = args.name or recipe.default_name
    if not name:
        print_error(f"Error: recipe '{recipe.key}' needs --name")
        return EXIT_FAILURE

    if args.timeout is not None and args.timeout < 1:
        print_error(f"Error: invalid timeout: {args.timeout}")
        return EXIT_FAILURE

    config = config_from_args(args)
    if not config.target_dir.is_dir():
        print_error(f"Error: target directory not found: {config.target_dir}")
        return EXIT_FAILURE
    if recipe.remote is None and config.remote.overrides():
        print_warning(f"Recipe '{recipe.key}' has no remote template; --repo-url/--branch/--sub-path are ignored")

    generator = ScaffoldGenerator(config)
    started = time.monotonic()
    try:
        report = asyncio.run(
            generator.generate(name, recipe, run_post_commands=args.run_commands)
        )
    except InvalidFeatureName as exc:
        print_error(f"Error: {exc}")
        return EXIT_FAILURE

    print_report(report)
    elapsed = format_duration(time.monotonic() - started)

    if report.outcome == Outcome.SUCCESS:
        print_success(f"Scaffold created at {report.root} in {elapsed}")
        return EXIT_SUCCESS
    if report.outcome == Outcome.PARTIAL:
        print_warning(f"Scaffold completed with skipped steps at {report.root} in {elapsed}")
        return EXIT_PARTIAL

    console.print("[bold red]Scaffold failed.[/bold red]")
    return EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
