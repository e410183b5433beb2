"""Data models for comment parsing and documentation extraction."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Tag:
    """One ``@tag`` occurrence produced by the tag grammar parser."""

    title: str
    line_number: int  # 0-based line within the unwrapped comment
    name: str | None = None
    type: str | None = None  # "Hash", "Array.<string>", "number=" (optional)
    description: str | None = None
    default: str | None = None  # From [name=value]
    errors: tuple[str, ...] = ()


@dataclass(frozen=True)
class CommentTags:
    """Tokenized comment: leading free text plus tags in source order."""

    description: str = ""
    tags: tuple[Tag, ...] = ()


@dataclass(frozen=True)
class SourceLocation:
    """Position of a comment in its source file."""

    start_line: int  # 1-based
    start_column: int  # 0-based
    end_line: int
    end_column: int

    def to_dict(self) -> dict[str, dict[str, int]]:
        return {
            "start": {"line": self.start_line, "column": self.start_column},
            "end": {"line": self.end_line, "column": self.end_column},
        }


@dataclass(frozen=True)
class CodeContext:
    """The code a comment annotates."""

    file: str
    code: str  # First code line after the comment, stripped
    line: int | None = None  # 1-based line of that code

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"file": self.file, "code": self.code}
        if self.line is not None:
            data["line"] = self.line
        return data


@dataclass(frozen=True)
class Property:
    """One documented property of a handler."""

    name: str | None
    line_number: int
    description: str | None = None  # Rendered markdown
    type: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name, "lineNumber": self.line_number}
        if self.description is not None:
            data["description"] = self.description
        if self.type is not None:
            data["type"] = self.type
        return data


@dataclass(frozen=True)
class ErrorEntry:
    """A tag-level problem found while parsing a comment."""

    message: str
    comment_line_number: int | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"message": self.message}
        if self.comment_line_number is not None:
            data["commentLineNumber"] = self.comment_line_number
        return data


@dataclass(frozen=True)
class Record:
    """Flattened documentation for one marked comment.

    ``None`` means the field is absent; ``to_dict`` omits it entirely.
    ``properties`` stays ``None`` until the first property tag is seen.
    """

    loc: Any = None
    context: Any = None
    name: str | None = None
    description: str | None = None
    properties: tuple[Property, ...] | None = None
    errors: tuple[ErrorEntry, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.name is not None:
            data["name"] = self.name
        if self.description is not None:
            data["description"] = self.description
        if self.properties is not None:
            data["properties"] = [p.to_dict() for p in self.properties]
        data["loc"] = _plain(self.loc)
        data["context"] = _plain(self.context)
        data["errors"] = [e.to_dict() for e in self.errors]
        return data


def _plain(value: Any) -> Any:
    """Convert loc/context values to JSON-friendly data when they know how."""
    if hasattr(value, "to_dict"):
        return value.to_dict()
    return value


@dataclass(frozen=True)
class RawComment:
    """A doc comment found in source, before parsing."""

    text: str  # Including /** and */
    loc: SourceLocation
    context: CodeContext


@dataclass
class ExtractionResult:
    """Results from extracting documentation."""

    records: list[Record] = field(default_factory=list)
    comment_count: int = 0  # Doc comments seen
    skipped: int = 0  # Doc comments without the marker tag

    def merge(self, other: ExtractionResult) -> None:
        self.records.extend(other.records)
        self.comment_count += other.comment_count
        self.skipped += other.skipped


@dataclass
class ValidationResult:
    """Results from documentation validation."""

    errors: list[str] = field(default_factory=list)  # Build fails if non-empty
    warnings: list[str] = field(default_factory=list)  # Printed but allowed
