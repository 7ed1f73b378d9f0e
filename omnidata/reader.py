"""
File driver for omnidata.

Reads a delimited-text file from disk in decoded text chunks and feeds
them to a parse session.  This is the only place that looks at the
``encoding`` and ``chunk_size`` configuration hints.

Files are opened with ``newline=""`` so that ``\\r`` and ``\\r\\n``
terminators reach the parser untranslated; line-terminator handling
belongs to the lexer.  Use ``encoding="utf-8-sig"`` to drop a leading
byte-order mark.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Any, Callable

from omnidata.config import ParseConfiguration, resolve_config
from omnidata.exceptions import SourceReadError
from omnidata.parsers.base import (
    CompletionSummary,
    Diagnostic,
    ParseResult,
    Row,
    SessionNotifications,
)
from omnidata.parsers.session import CSVParser

logger = logging.getLogger(__name__)


def iter_text_chunks(
    path: str | Path,
    encoding: str = "utf-8",
    chunk_size: int = 8192,
) -> Iterator[str]:
    """Yield decoded text chunks of at most *chunk_size* characters.

    Raises:
        FileNotFoundError: If *path* does not exist.
        SourceReadError: If the file cannot be decoded with *encoding*.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Source file not found: {path}")
    return _read_chunks(path, encoding, chunk_size)


def _read_chunks(path: Path, encoding: str, chunk_size: int) -> Iterator[str]:
    try:
        with open(path, "r", encoding=encoding, newline="") as f:
            while True:
                chunk = f.read(chunk_size)
                if not chunk:
                    break
                yield chunk
    except UnicodeDecodeError as exc:
        raise SourceReadError(
            f"Failed to decode {path.name} as {encoding}: {exc}"
        ) from exc


def stream_file(
    path: str | Path,
    config: ParseConfiguration | None = None,
    *,
    on_row: Callable[[Row, int], None] | None = None,
    on_header: Callable[[list[str]], None] | None = None,
    on_diagnostic: Callable[[Diagnostic], None] | None = None,
    on_complete: Callable[[CompletionSummary], None] | None = None,
    **options: Any,
) -> CompletionSummary:
    """Stream a file through a parse session, chunk by chunk.

    Args:
        path: Path to the delimited-text file.
        config: Parse configuration.  Mutually exclusive with *options*.
        on_row, on_header, on_diagnostic, on_complete: Session callbacks.
        **options: Keyword options for ``ParseConfiguration.from_options``.

    Returns:
        The completion summary (total rows and diagnostics).

    Raises:
        FileNotFoundError: If *path* does not exist.
        SourceReadError: If the file cannot be decoded.
    """
    config = resolve_config(config, **options)
    notifications = SessionNotifications(
        on_row=on_row,
        on_header=on_header,
        on_diagnostic=on_diagnostic,
        on_complete=on_complete,
    )
    logger.info(
        "Streaming %s (encoding=%s, chunk_size=%d)",
        path, config.encoding, config.chunk_size,
    )
    chunks = iter_text_chunks(path, config.encoding, config.chunk_size)
    session = CSVParser(config).open_session(notifications)
    for chunk in chunks:
        session.write(chunk)
    return session.end()


def parse_file(
    path: str | Path,
    config: ParseConfiguration | None = None,
    **options: Any,
) -> ParseResult:
    """Parse a whole file and collect its rows in memory.

    The file is still read in ``chunk_size`` pieces; the result is the
    same as parsing the full text in one call.
    """
    config = resolve_config(config, **options)
    rows: list[Row] = []
    header: list[str] | None = None

    def _collect_header(names: list[str]) -> None:
        nonlocal header
        header = names

    summary = stream_file(
        path,
        config,
        on_row=lambda row, _index: rows.append(row),
        on_header=_collect_header,
    )
    logger.info("Parsed %s: %d rows", Path(path).name, summary.total_rows)
    return ParseResult(rows=rows, header=header, diagnostics=summary.diagnostics)
