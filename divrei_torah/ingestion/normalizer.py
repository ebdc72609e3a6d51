"""Classification of raw rows into normalized corpus records."""

from collections.abc import Mapping

from pydantic import BaseModel

from divrei_torah.config import ColumnsConfig
from divrei_torah.errors import RejectedRow
from divrei_torah.models.category import Category

DEFAULT_COLUMNS = ColumnsConfig()


class NormalizedRow(BaseModel):
    """Canonical fields extracted from one accepted raw row."""

    category: Category
    division: str | None = None
    section: str
    item_id: str
    passage_id: str = ""
    content: str
    title: str = ""
    summary: str = ""


def _cell(row: Mapping[str, str | None], column: str) -> str | None:
    value = row.get(column)
    if value is None:
        return None
    return str(value)


def _required_key(row: Mapping[str, str | None], column: str, category: Category) -> str:
    value = (_cell(row, column) or "").strip()
    if not value:
        raise RejectedRow(f"{category.value} row has missing or blank '{column}'")
    return value


def normalize_row(
    row: Mapping[str, str | None], columns: ColumnsConfig = DEFAULT_COLUMNS
) -> NormalizedRow:
    """Classify one raw row and extract its canonical fields.

    Args:
        row: Column name to cell value, as read from the CSV.
        columns: Names of the columns to read.

    Returns:
        The normalized row.

    Raises:
        RejectedRow: If the row's type is unknown (``ignored=True``) or a
            required field is missing.
    """
    row_type = _cell(row, columns.type) or ""
    category = Category.from_row_type(row_type)
    if category is None:
        raise RejectedRow(f"Unrecognized row type: {row_type.strip()!r}", ignored=True)

    item_id = (_cell(row, columns.item_id) or "").strip()
    if not item_id:
        raise RejectedRow(f"Missing '{columns.item_id}'")

    content = _cell(row, columns.text)
    if content is None:
        raise RejectedRow(f"Missing '{columns.text}' column")

    if category.has_divisions:
        division = _required_key(row, columns.division, category)
        section = _required_key(row, columns.section, category)
    else:
        division = None
        section = _required_key(row, columns.moed, category)

    return NormalizedRow(
        category=category,
        division=division,
        section=section,
        item_id=item_id,
        passage_id=(_cell(row, columns.passage_id) or "").strip(),
        content=content,
        title=_cell(row, columns.title) or "",
        summary=_cell(row, columns.summary) or "",
    )
