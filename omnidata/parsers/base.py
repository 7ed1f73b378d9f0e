"""
Shared data types for the omnidata parsing core.

The contract between the components is:
1. The lexer mutates a ``ParserState`` one character at a time.
2. Completed rows are handed to the assembler, which emits ``Row``
   values (a list of fields, or a header-keyed dict).
3. Anomalies become ``Diagnostic`` records; they never raise.
4. A finished parse is summarised as a ``ParseResult`` (one-shot) or a
   ``CompletionSummary`` (streaming session).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Union

if TYPE_CHECKING:
    import pandas as pd

    from omnidata.parsers.diagnostics import DiagnosticCollector

Row = Union[list[str], dict[str, str]]


@dataclass(frozen=True)
class Diagnostic:
    """A non-fatal anomaly, positioned where it was detected."""
    line: int
    column: int
    message: str


@dataclass
class CompletionSummary:
    """Delivered to ``on_complete`` when a session ends."""
    total_rows: int
    diagnostics: list[Diagnostic] = field(default_factory=list)


@dataclass
class ParseResult:
    """Output of a one-shot parse.

    Attributes:
        header: The resolved header, or ``None`` when no header is used.
        rows: Emitted data rows in order.  Lists when ``header`` is
            ``None``, header-keyed dicts otherwise.
        diagnostics: Anomalies in detection order.
    """
    rows: list[Row] = field(default_factory=list)
    header: list[str] | None = None
    diagnostics: list[Diagnostic] = field(default_factory=list)

    def to_dataframe(self) -> pd.DataFrame:
        """Return the rows as a pandas DataFrame (see ``export.rows_to_dataframe``)."""
        from omnidata.export import rows_to_dataframe

        return rows_to_dataframe(self)


@dataclass
class SessionNotifications:
    """Callbacks for a streaming session.  Every callback is optional."""
    on_row: Callable[[Row, int], None] | None = None
    on_header: Callable[[list[str]], None] | None = None
    on_diagnostic: Callable[[Diagnostic], None] | None = None
    on_complete: Callable[[CompletionSummary], None] | None = None


@dataclass
class ParserState:
    """Mutable per-session state.  Never shared between sessions.

    ``pending`` holds at most one character whose meaning depends on the
    character after it (an escape inside a quoted field, or a ``\\r``
    that may be followed by ``\\n``).  It survives chunk boundaries so
    the lookahead never needs to re-scan earlier input.
    """
    diagnostics: DiagnosticCollector
    in_quoted_field: bool = False
    field_chars: list[str] = field(default_factory=list)
    row_fields: list[str] = field(default_factory=list)
    resolved_header: list[str] | None = None
    row_index: int = 0
    line: int = 1
    column: int = 1
    pending: str | None = None

    def take_field(self) -> str:
        """Return the accumulated field text and clear the buffer."""
        text = "".join(self.field_chars)
        self.field_chars.clear()
        return text
