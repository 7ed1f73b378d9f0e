"""
Exporter for omnidata.

Converts a ``ParseResult`` into a pandas DataFrame and writes it to disk
as CSV or Parquet.

Column naming:
  - Header resolved: the header names, first occurrence order, duplicates
    collapsed (row dicts already hold one value per name).
  - No header: ``column_0``, ``column_1``, ... up to the widest row.
    Shorter rows are padded with ``None``.

All values stay strings; type inference is left to the caller.
CSV files are written with ``utf-8-sig`` encoding (BOM) so that
non-ASCII text displays correctly when opened in Excel.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal

import pandas as pd

from omnidata.exceptions import ExportError
from omnidata.parsers.base import ParseResult

logger = logging.getLogger(__name__)

_SUPPORTED_FORMATS = {"csv", "parquet"}


def rows_to_dataframe(result: ParseResult) -> pd.DataFrame:
    """Build a DataFrame from parsed rows.

    Returns an empty DataFrame (with header columns, if any) when no
    rows were emitted.
    """
    if result.header is not None:
        columns = list(dict.fromkeys(result.header))
        return pd.DataFrame.from_records(result.rows, columns=columns)

    width = max((len(row) for row in result.rows), default=0)
    columns = [f"column_{i}" for i in range(width)]
    records = [list(row) + [None] * (width - len(row)) for row in result.rows]
    return pd.DataFrame(records, columns=columns, dtype=object)


def export_result(
    result: ParseResult,
    path: str | Path,
    output_format: Literal["csv", "parquet"] = "csv",
) -> str:
    """Write a parse result to *path*.

    The parent directory is created if it does not exist.

    Returns:
        The written file path as a string.

    Raises:
        ExportError: If *output_format* is unsupported, or if the write fails.
    """
    if output_format not in _SUPPORTED_FORMATS:
        raise ExportError(
            f"Unsupported output format: '{output_format}'. "
            f"Supported formats: {sorted(_SUPPORTED_FORMATS)}"
        )

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    df = rows_to_dataframe(result)

    try:
        if output_format == "csv":
            df.to_csv(path, index=False, encoding="utf-8-sig")
        else:  # parquet
            df.to_parquet(path, index=False, engine="pyarrow")
    except Exception as exc:
        raise ExportError(
            f"Failed to write {path.name} as {output_format}: {exc}"
        ) from exc

    logger.info(
        "Exported %d rows x %d cols -> %s",
        len(df),
        len(df.columns),
        path.name,
    )
    return str(path)
