"""Doc comment extraction from source files."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable

from .errors import ExtractionError
from .models import CodeContext, ExtractionResult, RawComment, SourceLocation
from .parse import parse_comment

log = logging.getLogger(__name__)

# /** ... */ but not /**/ or /*** separators
_DOC_COMMENT = re.compile(r"/\*\*(?![*/]).*?\*/", re.DOTALL)


def _relative_path(path: Path, root: Path) -> str:
    """Convert absolute path to relative from project root."""
    try:
        return str(path.relative_to(root))
    except ValueError:
        return str(path)


def _position(content: str, offset: int) -> tuple[int, int]:
    """Return (1-based line, 0-based column) of an offset."""
    line = content.count("\n", 0, offset) + 1
    column = offset - (content.rfind("\n", 0, offset) + 1)
    return line, column


def _following_code(content: str, offset: int, line: int) -> tuple[str, int | None]:
    """Find the first non-blank code after a comment."""
    for n, text in enumerate(content[offset:].split("\n")):
        if text.strip():
            return text.strip(), line + n
    return "", None


def extract_comments(source: str, file: str) -> list[RawComment]:
    """Find every doc comment in source text, with location and context."""
    comments = []
    for match in _DOC_COMMENT.finditer(source):
        start_line, start_column = _position(source, match.start())
        end_line, end_column = _position(source, match.end())
        code, code_line = _following_code(source, match.end(), end_line)
        comments.append(
            RawComment(
                text=match.group(0),
                loc=SourceLocation(start_line, start_column, end_line, end_column),
                context=CodeContext(file=file, code=code, line=code_line),
            )
        )
    return comments


def extract_source(source: str, file: str) -> ExtractionResult:
    """Parse the doc comments of one source text into records."""
    result = ExtractionResult()
    for comment in extract_comments(source, file):
        result.comment_count += 1
        record = parse_comment(comment.text, comment.loc, comment.context)
        if record is None:
            result.skipped += 1
        else:
            result.records.append(record)
    return result


def extract_file(path: Path, root: Path) -> ExtractionResult:
    """Read a source file and parse its doc comments."""
    try:
        content = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ExtractionError(f"{path} is not valid UTF-8: {e}", path) from e
    except OSError as e:
        raise ExtractionError(f"Cannot read {path}: {e.strerror or e}", path) from e

    result = extract_source(content, _relative_path(path, root))
    log.info(
        "%s: %d records from %d doc comments",
        _relative_path(path, root),
        len(result.records),
        result.comment_count,
    )
    return result


def _expand(paths: Iterable[Path], patterns: Iterable[str]) -> list[Path]:
    """Expand directories into matching files, sorted and de-duplicated."""
    patterns = list(patterns)
    files: set[Path] = set()
    for path in paths:
        if path.is_dir():
            for pattern in patterns:
                files.update(p for p in path.rglob(pattern) if p.is_file())
        elif path.exists():
            files.add(path)
        else:
            raise ExtractionError(f"No such file or directory: {path}", path)
    return sorted(files)


def extract_paths(
    paths: Iterable[Path], root: Path, patterns: Iterable[str] = ("*.js",)
) -> ExtractionResult:
    """Extract records from files and directories."""
    result = ExtractionResult()
    for path in _expand(paths, patterns):
        result.merge(extract_file(path, root))
    return result
