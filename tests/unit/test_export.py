"""
Unit tests for the exporter (omnidata.export).

Tests DataFrame conversion, CSV and Parquet export, directory creation
and error handling using pytest's tmp_path fixture.
"""

from __future__ import annotations

import pandas as pd
import pyarrow.parquet as pq
import pytest

import omnidata
from omnidata.exceptions import ExportError
from omnidata.export import export_result, rows_to_dataframe
from omnidata.parsers.base import ParseResult


# ---------------------------------------------------------------------------
# DataFrame conversion
# ---------------------------------------------------------------------------

class TestRowsToDataFrame:
    """rows_to_dataframe() column naming and padding."""

    def test_with_header(self):
        result = omnidata.parse("a,b\n1,2\n3,4", headers=True)
        df = rows_to_dataframe(result)
        assert list(df.columns) == ["a", "b"]
        assert df.to_dict(orient="records") == [
            {"a": "1", "b": "2"},
            {"a": "3", "b": "4"},
        ]

    def test_without_header_pads_ragged_rows(self):
        result = omnidata.parse("1,2,3\n4")
        df = rows_to_dataframe(result)
        assert list(df.columns) == ["column_0", "column_1", "column_2"]
        assert df.iloc[0].tolist() == ["1", "2", "3"]
        assert df.iloc[1].tolist() == ["4", None, None]

    def test_duplicate_header_names_collapse(self):
        result = omnidata.parse("k,k,m\n1,2,3", headers=True)
        df = rows_to_dataframe(result)
        assert list(df.columns) == ["k", "m"]
        assert df.iloc[0].tolist() == ["2", "3"]

    def test_header_only(self):
        df = rows_to_dataframe(omnidata.parse("a,b", headers=True))
        assert list(df.columns) == ["a", "b"]
        assert len(df) == 0

    def test_no_rows(self):
        df = rows_to_dataframe(ParseResult())
        assert df.empty

    def test_parse_result_method(self):
        result = omnidata.parse("a,b\n1,2", headers=True)
        pd.testing.assert_frame_equal(result.to_dataframe(), rows_to_dataframe(result))


# ---------------------------------------------------------------------------
# File export
# ---------------------------------------------------------------------------

class TestExportResult:
    """export_result() for CSV and Parquet."""

    def test_csv_export(self, tmp_path):
        result = omnidata.parse('a,b\n1,"x, y"\n2,', headers=True)
        path = export_result(result, tmp_path / "out.csv", "csv")
        df = pd.read_csv(path, encoding="utf-8-sig", dtype=str, keep_default_na=False)
        assert df.to_dict(orient="records") == [
            {"a": "1", "b": "x, y"},
            {"a": "2", "b": ""},
        ]

    def test_csv_has_bom(self, tmp_path):
        result = omnidata.parse("a\n1", headers=True)
        path = export_result(result, tmp_path / "out.csv")
        assert (tmp_path / "out.csv").read_bytes().startswith(b"\xef\xbb\xbf")
        assert path == str(tmp_path / "out.csv")

    def test_parquet_export(self, tmp_path):
        result = omnidata.parse("name,age\nJohn,25\nJane,30", headers=True)
        path = export_result(result, tmp_path / "out.parquet", "parquet")
        table = pq.read_table(path)
        assert table.column_names == ["name", "age"]
        assert table.to_pydict() == {"name": ["John", "Jane"], "age": ["25", "30"]}

    def test_creates_parent_directory(self, tmp_path):
        result = omnidata.parse("a\n1", headers=True)
        target = tmp_path / "nested" / "dir" / "out.csv"
        export_result(result, target)
        assert target.exists()

    def test_unsupported_format(self, tmp_path):
        result = omnidata.parse("a")
        with pytest.raises(ExportError, match="Unsupported output format"):
            export_result(result, tmp_path / "out.xlsx", "xlsx")

    def test_write_failure_wrapped(self, tmp_path):
        target = tmp_path / "taken"
        target.mkdir()
        result = omnidata.parse("a\n1", headers=True)
        with pytest.raises(ExportError, match="Failed to write"):
            export_result(result, target, "csv")
