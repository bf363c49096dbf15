"""
Filterable table view.

A DataTable owns one FilterState (active column + filter text). The visible
rows are never stored: every access re-runs filter_rows() over the original
rows, so any sequence of column/text changes ends in the same view as
applying the last values directly.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional, Sequence

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup

from aral_table.columns import CellContent, ColumnDef, get_column, get_value

EMPTY_MESSAGE = "No results."

_env = Environment(
    loader=FileSystemLoader(Path(__file__).parent / "templates"),
    autoescape=select_autoescape(["html"]),
    trim_blocks=True,
    lstrip_blocks=True,
)


def filter_rows(rows: Sequence[Any], key: str, value: str) -> List[Any]:
    """
    Keep the rows whose `key` attribute contains `value`, ignoring case.

    Plain substring match on lower-cased strings, so regex characters in
    `value` match literally. Missing or None attributes match as "".
    Input order is preserved; an empty `value` keeps every row.
    """
    if not value:
        return list(rows)

    needle = value.lower()
    visible = []
    for row in rows:
        cell = get_value(row, key)
        haystack = "" if cell is None else str(cell)
        if needle in haystack.lower():
            visible.append(row)
    return visible


@dataclass
class FilterState:
    column: str
    value: str = ""


class DataTable:
    """Table of rows shaped by column descriptors, filterable on one column."""

    def __init__(
        self,
        columns: Sequence[ColumnDef],
        rows: Sequence[Any],
        filter_column: Optional[str] = None,
        filter_value: str = "",
        table_id: str = "aral-table",
        rows_url: Optional[str] = None,
        table_url: Optional[str] = None,
    ):
        """
        Args:
            columns: Non-empty, ordered column descriptors
            rows: Records to display (may be empty)
            filter_column: Initial filter column key (default: first column)
            filter_value: Initial filter text
            table_id: DOM id prefix for the rendered table
            rows_url: Endpoint returning the <tbody> fragment; enables
                live filtering with htmx when set
            table_url: Endpoint returning the whole component, requested
                when the filter column changes
        """
        if not columns:
            raise ValueError("DataTable needs at least one column")

        self.columns = tuple(columns)
        self.rows = tuple(rows)
        self.table_id = table_id
        self.rows_url = rows_url
        self.table_url = table_url
        self.state = FilterState(column=self.columns[0].key)

        # Initial values go through the same transitions as user input
        if filter_column:
            self.set_filter_column(filter_column)
        self.set_filter_value(filter_value)

    def set_filter_column(self, key: str) -> None:
        """
        Switch the active filter column.

        A different column starts with an empty filter. Unknown keys fall
        back to the first column.
        """
        if get_column(self.columns, key) is None:
            key = self.columns[0].key
        if key != self.state.column:
            self.state = FilterState(column=key)

    def set_filter_value(self, value: Optional[str]) -> None:
        self.state = FilterState(column=self.state.column, value=value or "")

    @property
    def active_column(self) -> ColumnDef:
        return get_column(self.columns, self.state.column)

    @property
    def visible_rows(self) -> List[Any]:
        return filter_rows(self.rows, self.state.column, self.state.value)

    @property
    def placeholder(self) -> str:
        return f"Filter by {self.state.column}..."

    def header_cells(self) -> List[str]:
        return [column.label for column in self.columns]

    def body_rows(self) -> List[List[CellContent]]:
        """Rendered cells for every visible row; empty when nothing matches."""
        return [[column.cell(row) for column in self.columns] for row in self.visible_rows]

    def _context(self, oob: bool = False) -> dict:
        body = self.body_rows()
        return {
            "table": self,
            "headers": self.header_cells(),
            "body": body,
            "visible_count": len(body),
            "total_count": len(self.rows),
            "empty_message": EMPTY_MESSAGE,
            "oob": oob,
        }

    def render_body(self) -> Markup:
        """Render only the <tbody>, used for in-place updates while typing."""
        return Markup(_env.get_template("data_table_body.html").render(**self._context(oob=True)))

    def render(self) -> Markup:
        """Render the filter controls and the full table."""
        return Markup(_env.get_template("data_table.html").render(**self._context()))

    def __html__(self) -> str:
        return self.render()
