"""Command-line entry point.

Usage:
    # Sanitize pages (stdin or file: JSON document, stdout: sanitized JSON)
    echo '{"pages": [{"pageNumber": 1, "text": "mail john@x.com"}]}' | \
        python -m sanitizer.main

    python -m sanitizer.main pages.json --output sanitized.json --fail-closed

Input: ``{"pages": [{"pageNumber": 1, "text": "..."}], "config": {...}}``.
``config`` is optional and defaults to every auto-detected category.
Logs go to stderr so stdout carries only the JSON result.
"""

import argparse
import json
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from sanitizer.config.settings import Settings
from sanitizer.logging.logger import Log
from sanitizer.processor.exceptions import InvalidPageError
from sanitizer.processor.models import DocumentSanitization, PageText
from sanitizer.processor.processor import build_processor
from sanitizer.processor.report_exporter import ReportExporter
from sanitizer.redaction.categories import get_default_privacy_config
from sanitizer.redaction.exceptions import SanitizationError
from sanitizer.redaction.models import PrivacyModeConfig


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="private-session-sanitizer",
        description="Mask sensitive data in extracted page text.",
    )
    parser.add_argument(
        "input",
        nargs="?",
        default="-",
        help="JSON document to sanitize ('-' or omitted reads stdin)",
    )
    parser.add_argument("--output", "-o", help="Write the result here instead of stdout")
    parser.add_argument(
        "--fail-closed",
        action="store_true",
        default=None,
        help="Abort the whole document if any page cannot be sanitized",
    )
    parser.add_argument(
        "--max-workers",
        type=_positive_int,
        default=None,
        help="Sanitize pages on this many threads",
    )
    return parser.parse_args(argv)


def _read_document(source: str) -> dict[str, Any]:
    try:
        raw = sys.stdin.read() if source == "-" else Path(source).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise InvalidPageError(f"Cannot read input: {exc}") from exc
    try:
        document = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise InvalidPageError(f"Input is not valid JSON: {exc}") from exc
    if not isinstance(document, dict):
        raise InvalidPageError("Input must be a JSON object")
    return document


def _load_pages(document: dict[str, Any]) -> list[PageText]:
    pages = document.get("pages", [])
    if not isinstance(pages, list):
        raise InvalidPageError("'pages' must be a list")
    return [PageText.from_dict(page) for page in pages]


def _load_config(document: dict[str, Any]) -> PrivacyModeConfig:
    if "config" not in document:
        return get_default_privacy_config()
    return PrivacyModeConfig.from_dict(document["config"])


def _render(result: DocumentSanitization, report: dict[str, object]) -> dict[str, object]:
    return {
        "pages": [
            {"pageNumber": page.page_number, "sanitizedText": page.sanitized_text}
            for page in result.pages
        ],
        "report": report,
    }


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point: load settings -> build processor -> sanitize -> write JSON."""
    args = _parse_args(argv)
    settings = Settings()
    overrides: dict[str, object] = {}
    if args.fail_closed is not None:
        overrides["sanitizer_fail_closed"] = args.fail_closed
    if args.max_workers is not None:
        overrides["sanitizer_max_workers"] = args.max_workers
    if overrides:
        settings = Settings(**{**settings.model_dump(), **overrides})
    Log.configure(settings.log_level, stream=sys.stderr)

    try:
        document = _read_document(args.input)
        pages = _load_pages(document)
        config = _load_config(document)
        processor = build_processor(settings)
        result = processor.sanitize_pages(pages, config)
    except SanitizationError as exc:
        Log.error("Sanitization aborted", error_type=type(exc).__name__)
        sys.stderr.write(f"error: {exc}\n")
        return 1

    output = _render(result, ReportExporter().export(result, config))
    payload = json.dumps(output, ensure_ascii=False, indent=2)
    if args.output:
        Path(args.output).write_text(payload + "\n", encoding="utf-8")
    else:
        sys.stdout.write(payload + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
