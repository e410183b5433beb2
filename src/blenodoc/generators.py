"""Output generators for documentation."""

from __future__ import annotations

import json

from .markdown import inline_html
from .models import CodeContext, Record, SourceLocation


def _slugify(name: str) -> str:
    """Convert handler name to markdown anchor slug."""
    # GitHub-style: lowercase, drop dots, spaces to hyphens
    return name.lower().replace(".", "").replace(" ", "-")


def _escape(text: str) -> str:
    return text.replace("|", "\\|")


def _cell(text: str | None) -> str:
    """Make text safe for a single markdown table cell."""
    if not text:
        return ""
    return _escape(inline_html(text))


def _source(record: Record) -> str | None:
    if not isinstance(record.context, CodeContext):
        return None
    if isinstance(record.loc, SourceLocation):
        return f"{record.context.file}:{record.loc.start_line}"
    return record.context.file


def generate_markdown(records: list[Record], title: str = "API Reference") -> str:
    """Generate a markdown reference with an index and one section per handler."""
    lines = [
        "<!-- AUTO-GENERATED. DO NOT EDIT. Run `blenodoc` to regenerate. -->",
        "",
        f"# {title}",
        "",
    ]

    named = sorted(
        (r for r in records if r.name), key=lambda r: (r.name or "").lower()
    )

    if not named:
        lines.append("*No documented handlers yet. Add @bleno tags to doc comments.*")
        lines.append("")
        return "\n".join(lines)

    lines.extend(
        [
            "| Handler | Description |",
            "|---------|-------------|",
        ]
    )
    for r in named:
        lines.append(f"| [`{r.name}`](#{_slugify(r.name)}) | {_cell(r.description)} |")
    lines.append("")

    for r in named:
        lines.extend([f"## {r.name}", ""])

        if r.description:
            lines.append(r.description.strip())
            lines.append("")

        if r.properties:
            lines.extend(
                [
                    "| Property | Type | Description |",
                    "|----------|------|-------------|",
                ]
            )
            for p in r.properties:
                type_ = f"`{_escape(p.type)}`" if p.type else ""
                lines.append(f"| `{p.name}` | {type_} | {_cell(p.description)} |")
            lines.append("")

        source = _source(r)
        if source:
            lines.append(f"*Source: {source}*")
            lines.append("")
        lines.append("---")
        lines.append("")

    return "\n".join(lines)


def generate_json(records: list[Record]) -> str:
    """Serialize records in the documentation schema field names."""
    return json.dumps([r.to_dict() for r in records], indent=2) + "\n"
