from __future__ import annotations

from printduka_sdk.models import PagedResult, Summary
from printduka_sdk.models_operations import LPO, LPOSummary
from printduka_sdk.table import EMPTY_VALUE, format_cell, render_pagination, render_summary, render_table


def test_format_cell() -> None:
    assert format_cell(None) == EMPTY_VALUE
    assert format_cell(True) == "yes"
    assert format_cell(1234.5) == "1,234.50"
    assert format_cell("  ") == EMPTY_VALUE


def test_render_table_aligns_columns() -> None:
    rows = [LPO(id=1, lpo_number="LPO-1", total_amount="10"), LPO(id=22, lpo_number="LPO-22")]

    lines = render_table(rows, [("id", "ID"), ("lpo_number", "LPO"), ("total_amount", "Total")])

    assert lines[0] == "ID | LPO    | Total"
    assert lines[2] == "1  | LPO-1  | 10.00"
    assert lines[3] == f"22 | LPO-22 | {EMPTY_VALUE}"
    assert render_table([], [("id", "ID")]) == []


def test_render_summary_and_pagination() -> None:
    result = PagedResult[LPO, LPOSummary](count=45, results=[], summary=LPOSummary(total_count=45))

    assert "total_count=45" in render_summary(result.summary)
    assert render_summary(None) is None
    assert render_summary(Summary()) is None
    assert render_pagination(result, 1, 20) == "page 1 of 3 (45 total)"
