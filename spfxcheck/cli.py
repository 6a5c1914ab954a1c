"""Command-line entry point for spfx-check."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .commands import plan_externalize, plan_upgrade
from .config import OUTPUT_MODES, load_settings
from .errors import ConfigError, SpfxCheckError
from .logging_setup import configure_logging
from .package_manager import PACKAGE_MANAGERS
from .report import Result, render
from .utils import find_project_root, load_project

logger = logging.getLogger(__name__)


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--project",
        "-p",
        dest="project",
        default=".",
        help="Folder inside the SharePoint Framework project (defaults to the current folder).",
    )
    parser.add_argument(
        "--output",
        "-o",
        choices=OUTPUT_MODES,
        default=None,
        help="Report format. json|text|md. Default text.",
    )
    parser.add_argument(
        "--output-file",
        "-f",
        dest="output_file",
        default=None,
        help="Path to the file where the report should be stored in.",
    )
    parser.add_argument(
        "--config",
        dest="config_path",
        default=None,
        help="Path to a YAML settings file (defaults to .spfx-check.yaml in the project root).",
    )
    parser.add_argument("--verbose", action="store_true", help="Log progress to stderr.")
    parser.add_argument("--debug", action="store_true", help="Log debug details to stderr.")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="spfx-check",
        description="Analyze SharePoint Framework projects. Project files are never changed.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    upgrade = subparsers.add_parser("upgrade", help="Show the steps to upgrade the project to a newer release.")
    _add_common_arguments(upgrade)
    upgrade.add_argument(
        "--to",
        "-v",
        dest="to_version",
        default=None,
        help="SharePoint Framework version to upgrade to (defaults to the latest supported).",
    )
    upgrade.add_argument(
        "--package-manager",
        dest="package_manager",
        choices=sorted(PACKAGE_MANAGERS),
        default=None,
        help="Package manager used in the suggested commands (defaults to npm).",
    )

    externalize = subparsers.add_parser("externalize", help="Show how to load dependencies from a CDN.")
    _add_common_arguments(externalize)
    return parser


def validate_output_file(output_file: Optional[str]) -> None:
    if not output_file:
        return
    directory = Path(output_file).resolve().parent
    if not directory.is_dir():
        raise ConfigError(f"Directory {directory} doesn't exist. Please check the path and try again.")


def write_output(result: Result, output: str, output_file: Optional[str]) -> None:
    """Render once, then print or write the whole report in a single call."""

    report = render(result, output)
    if output_file:
        Path(output_file).write_text(report, encoding="utf-8")
        logger.info("Report written to %s", output_file)
    else:
        print(report)


def run(args: argparse.Namespace) -> Result:
    validate_output_file(args.output_file)
    root = find_project_root(Path(args.project))
    settings = load_settings(Path(args.config_path) if args.config_path else None, root).merged(
        output=args.output,
        package_manager=getattr(args, "package_manager", None),
    )
    project = load_project(root)
    if args.command == "upgrade":
        result: Result = plan_upgrade(project, args.to_version, settings)
    else:
        result = plan_externalize(project, settings)
    write_output(result, settings.output, args.output_file)
    return result


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(verbose=args.verbose, debug=args.debug)
    try:
        run(args)
    except SpfxCheckError as exc:
        sys.stderr.write(f"{exc.message}\n")
        return exc.code
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
