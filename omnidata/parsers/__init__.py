"""
Parsing core for omnidata.

Components, leaf to root:
- diagnostics.py: DiagnosticCollector, the append-only anomaly log.
- lexer.py: Lexer, the character-level state machine (quote/escape
  context, delimiter and line-terminator recognition).
- assembler.py: RowAssembler, which turns completed rows into emitted
  rows and resolves the header.
- session.py: ParseSession (write/end streaming surface) and CSVParser
  (one-shot parse + session factory).
- base.py: shared data types (ParserState, Diagnostic, ParseResult, ...).
"""

from omnidata.parsers.base import (
    CompletionSummary,
    Diagnostic,
    ParseResult,
    ParserState,
    Row,
    SessionNotifications,
)
from omnidata.parsers.session import CSVParser, ParseSession

__all__ = [
    "CSVParser",
    "CompletionSummary",
    "Diagnostic",
    "ParseResult",
    "ParseSession",
    "ParserState",
    "Row",
    "SessionNotifications",
]
