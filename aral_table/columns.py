"""Column schema for the Aral resource table."""

from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence, Union
from urllib.parse import urlsplit

from markupsafe import Markup

CellContent = Union[Markup, str]


def get_value(row: Any, key: str) -> Any:
    """Read an attribute from a model or a plain dict row, None if missing."""
    if isinstance(row, dict):
        return row.get(key)
    return getattr(row, key, None)


@dataclass(frozen=True)
class ColumnDef:
    """
    Binds a table column to a row attribute.

    Attributes:
        key: Row attribute the column reads
        label: Header text
        render: Optional cell strategy, called with the whole row. When absent
            the raw attribute value is shown as text.
    """
    key: str
    label: str
    render: Optional[Callable[[Any], CellContent]] = None

    def cell(self, row: Any) -> CellContent:
        # A raising render function propagates: it is a bug in the column, not the data
        if self.render is not None:
            return self.render(row)
        value = get_value(row, self.key)
        return "" if value is None else str(value)


def render_link(row: Any) -> CellContent:
    """
    Render the row's link as a new-tab anchor with no opener access.

    Only http and https URLs become anchors; any other scheme is shown as
    plain text.
    """
    link = get_value(row, "link")
    if not link:
        return ""
    if urlsplit(link.strip()).scheme.lower() not in ("http", "https"):
        return link
    return Markup('<a href="{}" target="_blank" rel="noopener noreferrer">Visit</a>').format(link)


def get_column(columns: Sequence[ColumnDef], key: str) -> Optional[ColumnDef]:
    for column in columns:
        if column.key == key:
            return column
    return None


ARAL_COLUMNS = (
    ColumnDef(key="source_name", label="Source Name"),
    ColumnDef(key="category", label="Category"),
    ColumnDef(key="field", label="Field"),
    ColumnDef(key="link", label="Link", render=render_link),
)
