"""Flatten parsed doc comments into documentation records.

A comment yields a record only when it carries the ``@bleno`` marker tag.
Each tag is then folded into the record through ``FLATTENERS``, a read-only
table from tag title to a function ``(record, tag) -> record``. Tags with
syntax errors and tags with unregistered titles become ``ErrorEntry``
values on the record; nothing here raises for malformed comments.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from types import MappingProxyType
from typing import Any, Callable

from .markdown import render_markdown
from .models import ErrorEntry, Property, Record, Tag
from .tags import parse_tags

log = logging.getLogger(__name__)

MARKER_TITLE = "bleno"
PROPERTY_TITLE = "property"

Flattener = Callable[[Record, Tag], Record]


def flatten_marker(record: Record, tag: Tag) -> Record:
    """Use the marker tag's text as the record name. Later markers win."""
    return replace(record, name=tag.description)


def flatten_property(record: Record, tag: Tag) -> Record:
    """Append a property, copying description and type only when present."""
    prop = Property(
        name=tag.name,
        line_number=tag.line_number,
        description=(
            render_markdown(tag.description) if tag.description else None
        ),
        type=tag.type,
    )
    return replace(record, properties=(record.properties or ()) + (prop,))


FLATTENERS: MappingProxyType[str, Flattener] = MappingProxyType(
    {
        MARKER_TITLE: flatten_marker,
        PROPERTY_TITLE: flatten_property,
    }
)


def _add_errors(record: Record, *entries: ErrorEntry) -> Record:
    return replace(record, errors=record.errors + entries)


def flatten_tag(record: Record, tag: Tag) -> Record:
    """Fold one tag into the record."""
    if tag.errors:
        return _add_errors(
            record,
            *(ErrorEntry(message, tag.line_number) for message in tag.errors),
        )

    flattener = FLATTENERS.get(tag.title)
    if flattener is None:
        return _add_errors(
            record, ErrorEntry(f"unknown tag @{tag.title}", tag.line_number)
        )
    return flattener(record, tag)


def parse_comment(comment: str, loc: Any = None, context: Any = None) -> Record | None:
    """Parse a doc comment into a record.

    Args:
        comment: Raw comment text, with or without ``/** */`` decoration
        loc: Location of the comment, attached as-is
        context: Code the comment annotates, attached as-is

    Returns:
        The flattened record, or None when the comment has no ``@bleno`` tag
    """
    parsed = parse_tags(comment)

    if not any(tag.title == MARKER_TITLE for tag in parsed.tags):
        log.debug("Skipping comment without @%s tag", MARKER_TITLE)
        return None

    record = Record(loc=loc, context=context)
    if parsed.description:
        record = replace(record, description=render_markdown(parsed.description))

    for tag in parsed.tags:
        record = flatten_tag(record, tag)

    log.debug(
        "Parsed @%s %s: %d properties, %d errors",
        MARKER_TITLE,
        record.name,
        len(record.properties or ()),
        len(record.errors),
    )
    return record
