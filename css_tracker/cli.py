"""Command line entry point: cross-reference CSS class definitions and usages."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional, Sequence

from css_tracker.core.errors import (
    ConfigurationError,
    MalformedExpression,
    UnreadableSource,
)
from css_tracker.services.config_loader import init_manifest, load_config
from css_tracker.services.report_writer import RENDERERS, write_report
from css_tracker.services.tracker import run_tracker
from css_tracker.utils.logger import get_logger

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FINDINGS = 1
EXIT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="css-tracker",
        description="Report unused, undefined, duplicated and misplaced CSS classes.",
    )
    parser.add_argument("--root", default=".", help="Project root (default: .)")
    parser.add_argument(
        "--manifest", default=None, help="Manifest with tracker config (default: <root>/package.json)"
    )
    parser.add_argument("--format", choices=sorted(RENDERERS), default="text")
    parser.add_argument(
        "--output",
        default=None,
        help="Report destination, '-' for stdout (default: outputLog from config)",
    )
    parser.add_argument("--fail-on-findings", action="store_true")
    parser.add_argument(
        "--init",
        action="store_true",
        help="Add default tracker config and a track-css script to the manifest, then exit",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    root = Path(args.root).resolve()

    try:
        if args.init:
            init_manifest(root, args.manifest)
            return EXIT_OK

        config = load_config(root, args.manifest)
        report = run_tracker(root, config)
        destination = args.output or str(root / config.output_log)
        write_report(report.findings, destination, args.format)
    except (ConfigurationError, MalformedExpression, UnreadableSource, OSError) as exc:
        logger.error(f"css-tracker failed: {exc}")
        return EXIT_ERROR

    logger.info(
        f"{report.css_files} stylesheets, {report.front_files} front-end files, "
        f"{report.findings.total()} finding groups"
    )
    if args.fail_on_findings and report.findings.total() > 0:
        return EXIT_FINDINGS
    return EXIT_OK
