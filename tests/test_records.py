"""
Tests for raw record ingestion and validation.
"""

import pandas as pd
import pytest

from src.ingestion.records import (
    DegenerateRecordError,
    EmptyPopulationError,
    RawRecord,
    ValidationError,
    load_records_csv,
    records_to_frame,
)


class TestRawRecord:
    """Tests for the RawRecord type."""

    def test_total_matches(self):
        assert RawRecord("Guzzlord ex", 805, 2130, 1966, 101).total_matches == 4197

    def test_immutable(self):
        record = RawRecord("Guzzlord ex", 805, 2130, 1966, 101)
        with pytest.raises(AttributeError):
            record.wins = 0


class TestRecordsToFrame:
    """Tests for records_to_frame function."""

    def test_from_raw_records(self):
        df = records_to_frame([RawRecord("a", 10, 6, 3, 1), RawRecord("b", 5, 2, 2)])
        assert df.columns.tolist() == ["name", "count", "wins", "losses", "ties"]
        assert df["ties"].tolist() == [1, 0]

    def test_from_mappings(self):
        df = records_to_frame([{"name": "a", "count": 10, "wins": 6, "losses": 3, "ties": 1}])
        assert df.loc[0, "wins"] == 6

    def test_from_dataframe_with_alias_and_extra_columns(self):
        raw = pd.DataFrame({
            "deck_name": ["a"], "count": [10], "wins": [6], "losses": [3], "ties": [1],
            "total_matches": [999],
        })
        df = records_to_frame(raw)
        assert df.loc[0, "name"] == "a"
        assert "total_matches" not in df.columns

    def test_preserves_input_order(self):
        df = records_to_frame([RawRecord(n, 1, 1, 1) for n in ["z", "a", "m"]])
        assert df["name"].tolist() == ["z", "a", "m"]

    def test_numeric_strings_accepted(self):
        df = records_to_frame([{"name": "a", "count": "10", "wins": "6", "losses": "3", "ties": "0"}])
        assert df.loc[0, "count"] == 10

    def test_empty(self):
        with pytest.raises(EmptyPopulationError):
            records_to_frame([])

    def test_missing_column(self):
        with pytest.raises(ValidationError, match="losses"):
            records_to_frame([{"name": "a", "count": 1, "wins": 1, "ties": 0}])

    def test_ties_default_to_zero(self):
        """Mappings may omit ties, like RawRecord."""
        df = records_to_frame([
            {"name": "a", "count": 10, "wins": 6, "losses": 4},
            {"name": "b", "count": 5, "wins": 2, "losses": 2, "ties": 1},
        ])
        assert df["ties"].tolist() == [0, 1]
        assert df["ties"].dtype == "int64"

    def test_mapping_matches_raw_record_without_ties(self):
        from_mapping = records_to_frame([{"name": "a", "count": 10, "wins": 6, "losses": 4}])
        from_record = records_to_frame([RawRecord("a", 10, 6, 4)])
        pd.testing.assert_frame_equal(from_mapping, from_record)

    def test_oversized_batch(self, monkeypatch):
        monkeypatch.setattr("src.ingestion.records.MAX_INPUT_ROWS", 2)
        with pytest.raises(ValidationError, match="Input too large"):
            records_to_frame([RawRecord(n, 1, 1, 1) for n in ["a", "b", "c"]])

    def test_missing_name(self):
        with pytest.raises(ValidationError):
            records_to_frame([{"name": None, "count": 1, "wins": 1, "losses": 0, "ties": 0}])

    def test_negative_count(self):
        with pytest.raises(ValidationError, match="Negative"):
            records_to_frame([RawRecord("a", 1, -1, 2)])

    def test_non_integer_count(self):
        with pytest.raises(ValidationError, match="Non-integer"):
            records_to_frame([{"name": "a", "count": 1.5, "wins": 1, "losses": 0, "ties": 0}])

    def test_unsupported_record_type(self):
        with pytest.raises(ValidationError):
            records_to_frame([("a", 1, 1, 0, 0)])

    def test_degenerate_rejects_batch(self):
        with pytest.raises(DegenerateRecordError) as exc_info:
            records_to_frame([RawRecord("a", 10, 6, 3), RawRecord("ghost", 0, 0, 0)])
        assert exc_info.value.names == ["ghost"]

    def test_drop_degenerate(self):
        df = records_to_frame(
            [RawRecord("a", 10, 6, 3), RawRecord("idle", 3, 0, 0), RawRecord("b", 4, 1, 1)],
            drop_degenerate=True,
        )
        assert df["name"].tolist() == ["a", "b"]
        assert df.index.tolist() == [0, 1]

    def test_drop_degenerate_all(self):
        with pytest.raises(EmptyPopulationError):
            records_to_frame([RawRecord("idle", 3, 0, 0)], drop_degenerate=True)


class TestLoadRecordsCsv:
    """Tests for load_records_csv function."""

    def test_loads_csv(self, tmp_path):
        path = tmp_path / "records.csv"
        path.write_text("deck_name,count,wins,losses,ties\nGuzzlord ex,805,2130,1966,101\n")
        df = load_records_csv(path)
        assert df.loc[0, "name"] == "Guzzlord ex"
        assert df.loc[0, "count"] == 805

    def test_loads_csv_without_ties_column(self, tmp_path):
        path = tmp_path / "records.csv"
        path.write_text("name,count,wins,losses\nArceus ex Pichu,211,537,514\n")
        df = load_records_csv(path)
        assert df.loc[0, "ties"] == 0
        assert df.loc[0, "wins"] == 537
