"""Documentation validation and quality checks."""

from __future__ import annotations

from collections import Counter

from .models import (
    CodeContext,
    ErrorEntry,
    ExtractionResult,
    Record,
    SourceLocation,
    ValidationResult,
)


def _where(record: Record, entry: ErrorEntry | None = None) -> str:
    """Format a record's position as ``file:line`` when known."""
    file = "<comment>"
    if isinstance(record.context, CodeContext):
        file = record.context.file
    if not isinstance(record.loc, SourceLocation):
        return file
    line = record.loc.start_line
    if entry is not None and entry.comment_line_number is not None:
        line += entry.comment_line_number
    return f"{file}:{line}"


def validate_records(records: list[Record], strict: bool = False) -> ValidationResult:
    """Validate extracted records.

    Checks:
    1. Tag errors on a record (warning in normal mode, error in strict)
    2. Handlers without any @property (warning)
    3. Handler names used more than once (warning)

    Args:
        records: Records produced by the extractor
        strict: If True, tag errors are errors instead of warnings

    Returns:
        ValidationResult with errors and warnings
    """
    result = ValidationResult()

    for record in records:
        for entry in record.errors:
            msg = f"{_where(record, entry)}: {entry.message}"
            if strict:
                result.errors.append(msg)
            else:
                result.warnings.append(msg)

        label = record.name or "(unnamed)"
        if record.name is None:
            result.warnings.append(f"{_where(record)}: @bleno tag has no name")
        if record.properties is None:
            result.warnings.append(f"{_where(record)}: {label} documents no @property")

    counts = Counter(r.name for r in records if r.name is not None)
    for name, count in sorted(counts.items()):
        if count > 1:
            result.warnings.append(f"{name}: documented {count} times")

    return result


def compute_coverage(result: ExtractionResult) -> float:
    """Share of doc comments that produced records (0.0 - 1.0)."""
    if result.comment_count == 0:
        return 1.0
    return len(result.records) / result.comment_count
