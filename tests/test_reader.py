# tests/test_reader.py
"""Tests for table reading and input coercion."""

from datetime import date

import polars as pl
import pytest

from konstrain.connectors.reader import coerce_table, read_table, supported_formats
from konstrain.errors import InvalidDataError, PersistenceError, UnsupportedFormatError


class TestReadTable:
    def test_csv_dates_are_parsed(self, people_csv):
        df = read_table(people_csv)
        assert df.schema["joined"] == pl.Date
        assert df["joined"][0] == date(2021, 1, 4)
        assert df["age"].null_count() == 2

    def test_csv_without_date_parsing(self, people_csv):
        df = read_table(people_csv, try_parse_dates=False)
        assert df.schema["joined"] == pl.String

    @pytest.mark.parametrize("suffix", [".parquet", ".ndjson"])
    def test_other_formats(self, tmp_path, people_df, suffix):
        path = tmp_path / f"people{suffix}"
        if suffix == ".parquet":
            people_df.write_parquet(path)
        else:
            people_df.write_ndjson(path)
        df = read_table(path)
        assert df.columns == people_df.columns
        assert df.height == people_df.height

    def test_unsupported_suffix(self, tmp_path):
        with pytest.raises(UnsupportedFormatError, match="Unsupported file format"):
            read_table(tmp_path / "data.xlsx")

    def test_missing_file(self, tmp_path):
        with pytest.raises(PersistenceError, match="File not found"):
            read_table(tmp_path / "absent.csv")

    def test_directory(self, tmp_path):
        folder = tmp_path / "dir.csv"
        folder.mkdir()
        with pytest.raises(PersistenceError, match="directory"):
            read_table(folder)

    def test_supported_formats(self):
        assert ".csv" in supported_formats()
        assert ".parquet" in supported_formats()


class TestCoerceTable:
    def test_polars_passthrough(self, people_df):
        assert coerce_table(people_df) is people_df

    def test_records(self):
        df = coerce_table([{"a": 1}, {"a": 2}])
        assert df["a"].to_list() == [1, 2]

    def test_columns_dict(self):
        assert coerce_table({"a": ["x"]}).columns == ["a"]

    def test_lazy_frame(self, people_df):
        assert coerce_table(people_df.lazy()).equals(people_df)

    @pytest.mark.parametrize("data", [None, 42, "not a table"])
    def test_invalid(self, data):
        with pytest.raises(InvalidDataError):
            coerce_table(data)
