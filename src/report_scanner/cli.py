"""Command-line interface for scanning report files."""
from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import build_rules, load_config
from .importer import ReportImporter
from .output import ReportWriter, filter_issues, format_issue
from .progress import ProgressReporter
from .validation import ReportValidator


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Tabular report data-quality scanner")
    parser.add_argument("--input", required=True, help="Path to a CSV, JSON, TXT or TSV file")
    parser.add_argument("--config", default=None, help="Path to config JSON")
    parser.add_argument("--report", default=None, help="Output directory for exported reports")
    parser.add_argument("--export", action="store_true", help="Write the JSON results report")
    parser.add_argument(
        "--severity",
        choices=["error", "warning", "info"],
        default=None,
        help="Only list issues of this severity",
    )
    parser.add_argument("--all", action="store_true", help="List every issue")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def _console_progress(stage: str):
    last = {"value": -1.0}

    def _observer(value: float) -> None:
        if value <= 0 or value == last["value"]:
            return
        last["value"] = value
        print(f"[progress] {stage} {value:.0f}%", flush=True)

    return _observer


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    input_path = Path(args.input)
    if not input_path.exists():
        raise SystemExit(f"Input file not found: {input_path}")

    config = load_config(args.config)
    if args.report:
        config.output.report_dir = args.report

    import_progress = ProgressReporter()
    validation_progress = ProgressReporter()
    if config.progress.enabled:
        import_progress.subscribe(_console_progress("import"))
        validation_progress.subscribe(_console_progress("scan"))

    importer = ReportImporter(config.importer, import_progress)
    imported = asyncio.run(importer.import_file(input_path))
    for message in imported.errors:
        print(f"[{message.kind.value}] {message.message}", file=sys.stderr)
    if not imported.success or imported.dataset is None:
        return 2

    dataset = imported.dataset
    validator = ReportValidator(validation_progress)
    result = validator.validate(dataset, build_rules(config))

    summary = result.summary
    print(
        f"[done] {dataset.file_name}: {summary.total_rows} rows, {summary.total_columns} columns, "
        f"{summary.total_issues} issues "
        f"({summary.error_count} errors, {summary.warning_count} warnings, {summary.info_count} info)",
        flush=True,
    )
    print(
        f"[score] quality {summary.data_quality_score:.2f}, "
        f"completion {summary.completion_percentage:.2f}%, "
        f"valid rows {summary.valid_rows}/{summary.total_rows}",
        flush=True,
    )

    limit = None if args.all else config.output.issue_limit
    for issue in filter_issues(result.issues, args.severity, limit):
        print(format_issue(issue))

    if args.export:
        writer = ReportWriter(config.output.report_dir, config.output.indent)
        path = writer.export(dataset.file_name, result)
        print(f"[export] {path}", flush=True)

    return 0 if result.is_valid else 1


if __name__ == "__main__":
    sys.exit(main())
