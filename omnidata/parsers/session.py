"""
Streaming sessions and the one-shot parser for omnidata.

``CSVParser`` holds only an immutable ``ParseConfiguration``.  Every call
to ``open_session()`` or ``parse()`` builds a fresh ``ParserState``, so
one parser can drive any number of independent sessions, including on
different threads.  A single session must not be shared across threads.

Usage::

    parser = CSVParser(ParseConfiguration(header_mode="first_row"))

    # One-shot
    result = parser.parse("a,b\\n1,2")

    # Streaming
    session = parser.open_session(SessionNotifications(on_row=print))
    session.write("a,")
    session.write("b\\n1,2")
    summary = session.end()
"""

from __future__ import annotations

import logging
from types import TracebackType

from omnidata.config import ParseConfiguration
from omnidata.exceptions import SessionClosedError
from omnidata.parsers.assembler import RowAssembler
from omnidata.parsers.base import (
    CompletionSummary,
    ParseResult,
    ParserState,
    Row,
    SessionNotifications,
)
from omnidata.parsers.diagnostics import DiagnosticCollector
from omnidata.parsers.lexer import Lexer

logger = logging.getLogger(__name__)


class ParseSession:
    """Push-based parse: ``write()`` any number of times, then ``end()`` once."""

    def __init__(
        self,
        config: ParseConfiguration,
        notifications: SessionNotifications | None = None,
    ) -> None:
        self._notifications = notifications or SessionNotifications()
        self._state = ParserState(
            diagnostics=DiagnosticCollector(self._notifications.on_diagnostic)
        )
        assembler = RowAssembler(config, self._state, self._notifications)
        self._lexer = Lexer(config, self._state, assembler)
        self._ended = False
        assembler.start()

    @property
    def header(self) -> list[str] | None:
        """The resolved header, or ``None`` if none has been resolved yet."""
        header = self._state.resolved_header
        return list(header) if header is not None else None

    @property
    def rows_emitted(self) -> int:
        return self._state.row_index

    @property
    def ended(self) -> bool:
        return self._ended

    def write(self, chunk: str) -> None:
        if self._ended:
            raise SessionClosedError("Cannot write to a session that has ended")
        self._lexer.feed(chunk)

    def end(self) -> CompletionSummary:
        """Finish the session and deliver ``on_complete``.

        Returns the same summary that is passed to ``on_complete``.
        """
        if self._ended:
            raise SessionClosedError("Session has already ended")
        self._ended = True
        self._lexer.finish()

        summary = CompletionSummary(
            total_rows=self._state.row_index,
            diagnostics=self._state.diagnostics.records,
        )
        logger.info(
            "Session complete: %d rows, %d diagnostic(s)",
            summary.total_rows,
            len(summary.diagnostics),
        )
        if self._notifications.on_complete is not None:
            self._notifications.on_complete(summary)
        return summary

    def __enter__(self) -> ParseSession:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if exc_type is None and not self._ended:
            self.end()


class CSVParser:
    """Entry point bound to one ``ParseConfiguration``."""

    def __init__(self, config: ParseConfiguration | None = None) -> None:
        self.config = config or ParseConfiguration()

    def open_session(
        self, notifications: SessionNotifications | None = None
    ) -> ParseSession:
        return ParseSession(self.config, notifications)

    def parse(self, text: str) -> ParseResult:
        """Parse a complete input and collect the rows in memory."""
        rows: list[Row] = []
        session = self.open_session(
            SessionNotifications(on_row=lambda row, _index: rows.append(row))
        )
        session.write(text)
        summary = session.end()
        return ParseResult(
            rows=rows,
            header=session.header,
            diagnostics=summary.diagnostics,
        )
