"""Command line entry point.

Scans source files for ``@bleno`` doc comments and writes a markdown (or
JSON) reference:

    blenodoc lib/ -o docs/handlers.md
    blenodoc lib/handler.js --format json
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .config import Settings
from .errors import BlenodocError
from .extractors import extract_paths
from .generators import generate_json, generate_markdown
from .validators import compute_coverage, validate_records

log = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="blenodoc",
        description="Generate handler documentation from @bleno doc comments.",
    )
    parser.add_argument("paths", nargs="*", type=Path, default=[Path(".")])
    parser.add_argument(
        "-o", "--output", type=Path, help="write here instead of stdout"
    )
    parser.add_argument("--format", choices=["markdown", "json"])
    parser.add_argument("--title", help="heading for markdown output")
    parser.add_argument(
        "--pattern",
        action="append",
        dest="patterns",
        help="glob for files inside directories (repeatable, default *.js)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help="fail when any comment has tag errors",
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Generate documentation. Returns the process exit status."""
    args = _build_parser().parse_args(argv)

    try:
        settings = Settings.from_env(
            output=args.output,
            format=args.format,
            title=args.title,
            patterns=args.patterns,
            strict=args.strict,
            log_level="DEBUG" if args.verbose else None,
        )
    except BlenodocError as e:
        print(f"  ✗ {e}", file=sys.stderr)
        return 1

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    root = Path.cwd()
    try:
        result = extract_paths(args.paths, root, settings.patterns)
    except BlenodocError as e:
        log.error("Extraction failed: %s", e)
        return 1

    print(
        f"  ✓ {len(result.records)} handlers from {result.comment_count} doc comments "
        f"({result.skipped} without @bleno)",
        file=sys.stderr,
    )

    validation = validate_records(result.records, strict=settings.strict)
    for warning in validation.warnings:
        print(f"  ⚠ {warning}", file=sys.stderr)
    if validation.errors:
        print("\nValidation errors:", file=sys.stderr)
        for err in validation.errors:
            print(f"  ✗ {err}", file=sys.stderr)
        return 1

    print(f"Coverage: {compute_coverage(result):.0%}", file=sys.stderr)

    if settings.format == "json":
        output = generate_json(result.records)
    else:
        output = generate_markdown(result.records, title=settings.title)

    if settings.output is None:
        sys.stdout.write(output)
    else:
        settings.output.parent.mkdir(parents=True, exist_ok=True)
        settings.output.write_text(output)
        print(f"\nGenerated:\n  {settings.output}", file=sys.stderr)

    return 0


if __name__ == "__main__":
    sys.exit(main())
