"""Tests for confluence_rest._utils.dataframe module."""

import pandas as pd

from confluence_rest._utils.dataframe import records_to_dataframe


class TestRecordsToDataframe:
    """Tests for records_to_dataframe function."""

    def test_converts_list_of_dicts_to_dataframe(self):
        """Converts list of dicts to DataFrame."""
        records = [
            {"id": "1", "title": "x"},
            {"id": "2", "title": "y"},
        ]

        df = records_to_dataframe(records)

        assert isinstance(df, pd.DataFrame)
        assert len(df) == 2
        assert list(df.columns) == ["id", "title"]

    def test_flattens_nested_fields(self):
        """Nested objects become dotted columns."""
        records = [{"id": "1", "space": {"key": "HOME", "name": "Home"}}]

        df = records_to_dataframe(records)

        assert df["space.key"].iloc[0] == "HOME"
        assert df["space.name"].iloc[0] == "Home"

    def test_keeps_nested_fields_when_not_flattening(self):
        """flatten=False leaves nested objects in a single column."""
        records = [{"id": "1", "space": {"key": "HOME"}}]

        df = records_to_dataframe(records, flatten=False)

        assert df["space"].iloc[0] == {"key": "HOME"}

    def test_accepts_generators(self):
        """Any iterable of records works."""
        df = records_to_dataframe({"id": str(i)} for i in range(3))

        assert df["id"].tolist() == ["0", "1", "2"]

    def test_handles_empty_records(self):
        """Returns empty DataFrame for empty input."""
        df = records_to_dataframe([])

        assert isinstance(df, pd.DataFrame)
        assert df.empty
