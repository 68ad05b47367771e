from __future__ import annotations

from typing import Any, Sequence

from pydantic import BaseModel

from .models import PagedResult, page_count

EMPTY_VALUE = "-"


def format_cell(value: Any) -> str:
    if value is None:
        return EMPTY_VALUE
    if isinstance(value, bool):
        return "yes" if value else "no"
    if isinstance(value, float):
        return f"{value:,.2f}"
    if isinstance(value, str):
        return value.strip() or EMPTY_VALUE
    return str(value)


def row_values(item: BaseModel | dict[str, Any]) -> dict[str, Any]:
    if isinstance(item, dict):
        return item
    flat = getattr(item, "flat", None)
    if callable(flat):
        return flat()
    return item.model_dump()


def render_table(rows: Sequence[BaseModel | dict[str, Any]], columns: Sequence[tuple[str, str]]) -> list[str]:
    if not rows:
        return []
    values = [row_values(row) for row in rows]
    widths = []
    for key, header in columns:
        max_cell = max(len(format_cell(row.get(key))) for row in values)
        widths.append(max(len(header), max_cell))

    lines = [" | ".join(header.ljust(widths[idx]) for idx, (_, header) in enumerate(columns)).rstrip()]
    lines.append("-+-".join("-" * width for width in widths))
    for row in values:
        lines.append(" | ".join(format_cell(row.get(key)).ljust(widths[idx]) for idx, (key, _) in enumerate(columns)).rstrip())
    return lines


def render_summary(summary: BaseModel | None) -> str | None:
    if summary is None:
        return None
    data = summary.model_dump(exclude_none=True)
    if not data:
        return None
    return "  ".join(f"{key}={format_cell(value)}" for key, value in data.items())


def render_pagination(result: PagedResult, page: int, page_size: int) -> str:
    pages = page_count(result.count, page_size)
    return f"page {page} of {pages} ({result.count} total)"
