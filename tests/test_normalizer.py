"""Tests for row normalization."""

import pytest

from divrei_torah.config import ColumnsConfig
from divrei_torah.errors import RejectedRow
from divrei_torah.ingestion.normalizer import normalize_row
from divrei_torah.models.category import Category


def torah_row(**overrides: str | None) -> dict[str, str | None]:
    row: dict[str, str | None] = {
        "type": "torah",
        "seder": "בראשית",
        "parsha": "נח",
        "dvar_torah_id": "d1",
        "paragraph_id": "p1",
        "text": "שלום עולם",
        "hebrew_title": "כותרת",
        "hebrew_summary": "תקציר",
    }
    row.update(overrides)
    return row


def moadim_row(**overrides: str | None) -> dict[str, str | None]:
    row: dict[str, str | None] = {
        "type": "moadim",
        "moadim": "שבועות",
        "parsha": "shavuos",
        "dvar_torah_id": "m1",
        "text": "מתן תורה",
    }
    row.update(overrides)
    return row


class TestTorahRows:
    def test_extracts_fields(self) -> None:
        result = normalize_row(torah_row())
        assert result.category is Category.TORAH
        assert result.division == "בראשית"
        assert result.section == "נח"
        assert result.item_id == "d1"
        assert result.passage_id == "p1"
        assert result.content == "שלום עולם"
        assert result.title == "כותרת"
        assert result.summary == "תקציר"

    def test_type_is_trimmed_and_case_insensitive(self) -> None:
        assert normalize_row(torah_row(type="  TORAH ")).category is Category.TORAH

    def test_keys_are_trimmed(self) -> None:
        result = normalize_row(torah_row(seder="  בראשית ", parsha=" נח\t"))
        assert result.division == "בראשית"
        assert result.section == "נח"

    @pytest.mark.parametrize("column", ["seder", "parsha"])
    def test_blank_key_rejected(self, column: str) -> None:
        with pytest.raises(RejectedRow) as excinfo:
            normalize_row(torah_row(**{column: "   "}))
        assert excinfo.value.ignored is False
        assert column in excinfo.value.reason

    def test_missing_key_column_rejected(self) -> None:
        row = torah_row()
        del row["seder"]
        with pytest.raises(RejectedRow):
            normalize_row(row)

    def test_item_id_is_trimmed(self) -> None:
        assert normalize_row(torah_row(dvar_torah_id=" d1 ")).item_id == "d1"
        assert normalize_row(torah_row(dvar_torah_id=" d1")).item_id == normalize_row(torah_row()).item_id

    def test_optional_fields_default_empty(self) -> None:
        row = torah_row()
        del row["hebrew_title"]
        del row["hebrew_summary"]
        del row["paragraph_id"]
        result = normalize_row(row)
        assert result.title == ""
        assert result.summary == ""
        assert result.passage_id == ""


class TestMoadimRows:
    def test_section_from_moed_column(self) -> None:
        result = normalize_row(moadim_row())
        assert result.category is Category.MOADIM
        assert result.division is None
        assert result.section == "שבועות"

    def test_blank_moed_rejected(self) -> None:
        with pytest.raises(RejectedRow) as excinfo:
            normalize_row(moadim_row(moadim=""))
        assert excinfo.value.ignored is False

    def test_custom_moed_column(self) -> None:
        columns = ColumnsConfig(moed="parsha")
        assert normalize_row(moadim_row(), columns).section == "shavuos"


class TestRejections:
    def test_unknown_type_is_ignored(self) -> None:
        with pytest.raises(RejectedRow) as excinfo:
            normalize_row(torah_row(type="haftarah"))
        assert excinfo.value.ignored is True

    def test_missing_type_is_ignored(self) -> None:
        row = torah_row()
        del row["type"]
        with pytest.raises(RejectedRow) as excinfo:
            normalize_row(row)
        assert excinfo.value.ignored is True

    def test_missing_item_id_rejected(self) -> None:
        with pytest.raises(RejectedRow) as excinfo:
            normalize_row(torah_row(dvar_torah_id=""))
        assert excinfo.value.ignored is False

    def test_missing_text_rejected(self) -> None:
        with pytest.raises(RejectedRow):
            normalize_row(torah_row(text=None))

    def test_blank_text_is_accepted_here(self) -> None:
        assert normalize_row(torah_row(text="  ")).content == "  "
