"""
Unit tests for the file driver (omnidata.reader).

Uses pytest's tmp_path fixture to write small source files and checks
that reading them in chunks gives the same result as parsing the text.
"""

from __future__ import annotations

import pytest

import omnidata
from omnidata.config import ParseConfiguration
from omnidata.exceptions import SourceReadError
from omnidata.reader import iter_text_chunks, parse_file, stream_file

SAMPLE = 'id,note\r\n1,"multi\r\nline"\r\n2,"say ""hi"""\r\n\r\n3,plain\r\n'


class TestIterTextChunks:
    """iter_text_chunks() decoding and chunking."""

    def test_chunk_sizes(self, tmp_path):
        f = tmp_path / "data.csv"
        f.write_text("abcdefg", encoding="utf-8")
        assert list(iter_text_chunks(f, chunk_size=3)) == ["abc", "def", "g"]

    def test_preserves_carriage_returns(self, tmp_path):
        f = tmp_path / "data.csv"
        f.write_bytes(b"a\r\nb\rc")
        assert "".join(iter_text_chunks(f)) == "a\r\nb\rc"

    def test_missing_file_raises_immediately(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="not found"):
            iter_text_chunks(tmp_path / "missing.csv")

    def test_decode_failure(self, tmp_path):
        f = tmp_path / "bad.csv"
        f.write_bytes(b"a,b\n\xff\xfe\xfa\n")
        with pytest.raises(SourceReadError, match="decode"):
            list(iter_text_chunks(f, encoding="utf-8"))

    def test_empty_file(self, tmp_path):
        f = tmp_path / "empty.csv"
        f.write_bytes(b"")
        assert list(iter_text_chunks(f)) == []


class TestParseFile:
    """parse_file() equals parse() on the file's text."""

    @pytest.mark.parametrize("chunk_size", [1, 2, 5, 8192])
    def test_matches_one_shot_parse(self, tmp_path, chunk_size):
        f = tmp_path / "data.csv"
        f.write_bytes(SAMPLE.encode("utf-8"))
        result = parse_file(f, headers=True, chunk_size=chunk_size)
        expected = omnidata.parse(SAMPLE, headers=True)
        assert result == expected
        assert result.rows == [
            {"id": "1", "note": "multi\r\nline"},
            {"id": "2", "note": 'say "hi"'},
            {"id": "3", "note": "plain"},
        ]

    def test_with_config_object(self, tmp_path):
        f = tmp_path / "data.tsv"
        f.write_text("a\tb\n1\t2\n", encoding="utf-8")
        cfg = ParseConfiguration(delimiter="\t", header_mode="first_row")
        result = parse_file(f, cfg)
        assert result.header == ["a", "b"]
        assert result.rows == [{"a": "1", "b": "2"}]

    def test_utf8_sig_strips_bom(self, tmp_path):
        f = tmp_path / "bom.csv"
        f.write_bytes("\ufeff이름,나이\n홍길동,30\n".encode("utf-8"))
        result = parse_file(f, headers=True, encoding="utf-8-sig")
        assert result.header == ["이름", "나이"]
        assert result.rows == [{"이름": "홍길동", "나이": "30"}]

    def test_other_encoding(self, tmp_path):
        f = tmp_path / "latin.csv"
        f.write_bytes("café,crème\n".encode("latin-1"))
        result = parse_file(f, encoding="latin-1")
        assert result.rows == [["café", "crème"]]

    def test_diagnostics_collected(self, tmp_path):
        f = tmp_path / "broken.csv"
        f.write_text('a"b,c\n"open', encoding="utf-8")
        result = parse_file(f, chunk_size=2)
        assert [d.message for d in result.diagnostics] == [
            "Unexpected quote character",
            "Unclosed quoted field",
        ]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            parse_file(tmp_path / "missing.csv")


class TestStreamFile:
    """stream_file() callbacks and summary."""

    def test_callbacks_and_summary(self, tmp_path):
        f = tmp_path / "data.csv"
        f.write_bytes(SAMPLE.encode("utf-8"))
        rows: list = []
        headers: list = []
        completed: list = []
        summary = stream_file(
            f,
            headers=True,
            chunk_size=4,
            on_row=lambda row, index: rows.append(index),
            on_header=headers.append,
            on_complete=completed.append,
        )
        assert headers == [["id", "note"]]
        assert rows == [0, 1, 2]
        assert summary.total_rows == 3
        assert completed == [summary]

    def test_missing_file_starts_no_session(self, tmp_path):
        headers: list = []
        with pytest.raises(FileNotFoundError):
            stream_file(tmp_path / "missing.csv", headers=["a"], on_header=headers.append)
        assert headers == []
