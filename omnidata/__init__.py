"""
omnidata: incremental delimited-text parsing.

Public API surface:

- ``parse(text, ...)`` -- one-shot parse of a complete string.  Returns a
  ``ParseResult`` with the header (if any), rows and diagnostics.

- ``open_session(...)`` -- streaming parse.  Returns a ``ParseSession``;
  call ``write(chunk)`` any number of times, then ``end()`` once.  Rows,
  the header and diagnostics are delivered through callbacks.

- ``parse_file(path, ...)`` / ``stream_file(path, ...)`` -- the same two
  forms, reading the text from disk in ``chunk_size`` pieces.

The streaming and one-shot forms give identical rows, diagnostics and
positions for the same input, however it is split into chunks.
"""

from __future__ import annotations

from typing import Any, Callable

from omnidata.config import (
    ParseConfiguration,
    load_config,
    resolve_config,
    save_config,
)
from omnidata.export import export_result, rows_to_dataframe
from omnidata.parsers import (
    CompletionSummary,
    CSVParser,
    Diagnostic,
    ParseResult,
    ParseSession,
    Row,
    SessionNotifications,
)
from omnidata.reader import parse_file, stream_file

__all__ = [
    "parse",
    "parse_simple",
    "open_session",
    "parse_file",
    "stream_file",
    "export_result",
    "rows_to_dataframe",
    "load_config",
    "save_config",
    "CSVParser",
    "CompletionSummary",
    "Diagnostic",
    "ParseConfiguration",
    "ParseResult",
    "ParseSession",
    "SessionNotifications",
]


def parse(
    text: str,
    config: ParseConfiguration | None = None,
    **options: Any,
) -> ParseResult:
    """Parse a complete input string.

    Args:
        text: The full delimited text.
        config: Parse configuration.  Mutually exclusive with *options*.
        **options: Keyword options, e.g. ``delimiter=";"``,
            ``headers=True`` or ``header_mode="first_row"``.

    Returns:
        ``ParseResult`` with ``header``, ``rows`` and ``diagnostics``.

    Examples::

        result = omnidata.parse("a,b,c\\n1,2,3", headers=True)
        result.header   # ['a', 'b', 'c']
        result.rows     # [{'a': '1', 'b': '2', 'c': '3'}]
    """
    return CSVParser(resolve_config(config, **options)).parse(text)


def parse_simple(
    text: str,
    delimiter: str = ",",
    headers: bool | list[str] = True,
) -> ParseResult:
    """Parse with a first-row header unless told otherwise."""
    return parse(text, delimiter=delimiter, headers=headers, skip_empty_lines=True)


def open_session(
    config: ParseConfiguration | None = None,
    *,
    on_row: Callable[[Row, int], None] | None = None,
    on_header: Callable[[list[str]], None] | None = None,
    on_diagnostic: Callable[[Diagnostic], None] | None = None,
    on_complete: Callable[[CompletionSummary], None] | None = None,
    **options: Any,
) -> ParseSession:
    """Open a streaming parse session.

    Examples::

        with omnidata.open_session(headers=True, on_row=handle) as session:
            for chunk in chunks:
                session.write(chunk)
    """
    notifications = SessionNotifications(
        on_row=on_row,
        on_header=on_header,
        on_diagnostic=on_diagnostic,
        on_complete=on_complete,
    )
    return CSVParser(resolve_config(config, **options)).open_session(notifications)
