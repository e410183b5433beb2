"""Tag grammar parser for JSDoc-style comments.

Turns a raw ``/** ... */`` comment into a ``CommentTags``: the leading
free-text description plus one ``Tag`` per ``@tag`` occurrence, in source
order. The parser always:

- unwraps comment decoration (``/**``, ``*/`` and leading ``*`` on each line)
- accepts JSDoc3 bracketed optional names (``[name]``, ``[name=default]``)
- records malformed tag syntax on the tag's ``errors`` and keeps going
- annotates every tag with its 0-based line number

It never raises for malformed input.
"""

from __future__ import annotations

import re

from .models import CommentTags, Tag

# Titles whose tags carry {type} name description, name required
_PARAM_TITLES = frozenset({"param", "arg", "argument"})
_PROPERTY_TITLES = frozenset({"property", "prop"})
_NAMED_TITLES = _PARAM_TITLES | _PROPERTY_TITLES
# Titles whose {type} is required; other typed titles take it optionally
_TYPE_REQUIRED_TITLES = _PROPERTY_TITLES | frozenset({"type", "typedef", "enum"})
_TYPED_TITLES = (
    _NAMED_TITLES
    | _TYPE_REQUIRED_TITLES
    | frozenset({"returns", "return", "throws", "exception"})
)
# Titles that take an optional name after the type
_OPTIONAL_NAME_TITLES = frozenset({"typedef"})

_OPEN = re.compile(r"^/\*\*?")
_CLOSE = re.compile(r"\*/\s*$")
_DECORATION = re.compile(r"\n[\t ]*\* ?")
_TITLE = re.compile(r"[^\s{]*")
_NAME = re.compile(
    r"(?:[^\W\d]|\$)[\w$]*(?:\[\])?(?:\.(?:[^\W\d]|\$)[\w$]*(?:\[\])?)*"
)
_DASH = re.compile(r"^-\s+")

MISSING_TITLE = "Missing or invalid title"
MISSING_TYPE = "Missing or invalid tag type"
MISSING_NAME = "Missing or invalid tag name"
UNBALANCED = "Braces are not balanced"


class _TagSyntaxError(Exception):
    """Stops scanning the current tag; the message lands on the tag."""


def unwrap(comment: str) -> str:
    """Strip comment delimiters and per-line asterisk decoration."""
    text = comment.replace("\r\n", "\n").replace("\r", "\n")
    text = _OPEN.sub("", text, count=1)
    text = _CLOSE.sub("", text, count=1)
    text = _DECORATION.sub("\n", text)
    return text.rstrip()


def _is_tag_line(line: str) -> bool:
    return line.lstrip().startswith("@")


def parse_tags(comment: str) -> CommentTags:
    """Tokenize a comment into its description and tags."""
    lines = unwrap(comment).split("\n")

    starts = [i for i, line in enumerate(lines) if _is_tag_line(line)]
    first = starts[0] if starts else len(lines)
    description = "\n".join(lines[:first]).strip()

    tags = []
    for n, start in enumerate(starts):
        end = starts[n + 1] if n + 1 < len(starts) else len(lines)
        chunk = "\n".join(lines[start:end]).lstrip()[1:]  # drop "@"
        tags.append(_parse_tag(chunk, start))

    return CommentTags(description=description, tags=tuple(tags))


class _Scanner:
    """Cursor over the text of a single tag, after its ``@``."""

    def __init__(self, text: str):
        self.text = text
        self.pos = 0

    def rest(self) -> str:
        return self.text[self.pos :]

    def skip_space(self, newlines: bool = True) -> None:
        chars = " \t\n" if newlines else " \t"
        while self.pos < len(self.text) and self.text[self.pos] in chars:
            self.pos += 1

    def peek(self) -> str:
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def balanced(self, open_char: str, close_char: str) -> str:
        """Consume a balanced ``open_char ... close_char`` group, return its inside."""
        depth = 0
        for i in range(self.pos, len(self.text)):
            c = self.text[i]
            if c == open_char:
                depth += 1
            elif c == close_char:
                depth -= 1
                if depth == 0:
                    inner = self.text[self.pos + 1 : i]
                    self.pos = i + 1
                    return inner
        self.pos = len(self.text)
        raise _TagSyntaxError(UNBALANCED)

    def title(self) -> str:
        match = _TITLE.match(self.text, self.pos)
        self.pos = match.end()
        return match.group(0)

    def type(self) -> str | None:
        self.skip_space()
        if self.peek() != "{":
            return None
        expression = " ".join(self.balanced("{", "}").split())
        return expression or None

    def name(self) -> tuple[str | None, str | None, bool]:
        """Scan a name, returning ``(name, default, optional)``."""
        self.skip_space(newlines=False)
        if self.peek() == "[":
            inner = self.balanced("[", "]")
            name, eq, default = inner.partition("=")
            name = name.strip()
            if not _NAME.fullmatch(name):
                return None, None, True
            return name, (default.strip() or None) if eq else None, True

        match = _NAME.match(self.text, self.pos)
        if match is None:
            return None, None, False
        self.pos = match.end()
        return match.group(0), None, False


def _description(scanner: _Scanner) -> str | None:
    text = _DASH.sub("", scanner.rest().strip(), count=1)
    return text or None


def _parse_tag(chunk: str, line_number: int) -> Tag:
    scanner = _Scanner(chunk)
    title = scanner.title()
    errors: list[str] = []
    fields: dict = {}

    if not title:
        errors.append(MISSING_TITLE)

    try:
        if title in _TYPED_TITLES:
            type_ = scanner.type()
            if type_ is None and title in _TYPE_REQUIRED_TITLES:
                errors.append(MISSING_TYPE)
            if title in _NAMED_TITLES:
                name, default, optional = scanner.name()
                if name is None:
                    errors.append(MISSING_NAME)
                if optional and type_ is not None:
                    type_ += "="
                fields.update(name=name, default=default)
            elif title in _OPTIONAL_NAME_TITLES:
                fields["name"] = scanner.name()[0]
            fields["type"] = type_
        fields["description"] = _description(scanner)
    except _TagSyntaxError as e:
        errors.append(str(e))

    return Tag(
        title=title,
        line_number=line_number,
        errors=tuple(errors),
        **fields,
    )
