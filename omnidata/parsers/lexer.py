"""
Character-level state machine for delimited text.

The lexer consumes one character at a time and decides, from the
configuration and the current ``ParserState`` alone, whether that
character closes a field, closes a row, toggles quoted mode, is literal
content, or is an anomaly.

Two characters cannot be classified on their own:

- An escape character inside a quoted field: it is half of an escaped
  quote only when the next character is the quote character.
- A ``\\r`` outside a quoted field: ``\\r\\n`` is one terminator.

Such a character is parked in ``ParserState.pending`` and resolved by
the next character, which may arrive in a later chunk, or by
``finish()``.  Because the only carried context is that one slot,
feeding the input in any split produces exactly the same rows,
diagnostics and positions as feeding it whole.
"""

from __future__ import annotations

from omnidata.config import ParseConfiguration
from omnidata.parsers.assembler import RowAssembler
from omnidata.parsers.base import ParserState
from omnidata.parsers.diagnostics import UNCLOSED_QUOTED_FIELD, UNEXPECTED_QUOTE


class Lexer:
    """Feeds characters through the state machine into a ``RowAssembler``."""

    def __init__(
        self,
        config: ParseConfiguration,
        state: ParserState,
        assembler: RowAssembler,
    ) -> None:
        self._config = config
        self._state = state
        self._assembler = assembler

    def feed(self, chunk: str) -> None:
        state = self._state
        for char in chunk:
            if state.pending is not None and self._resolve_pending(char):
                continue
            self._consume(char)

    def finish(self) -> None:
        """Flush the pending slot and close any trailing row.

        A trailing row without a final terminator is still emitted.  An
        unclosed quoted field is reported after that row is closed.
        """
        state = self._state
        if state.pending is not None:
            self._resolve_pending(None)
        if state.field_chars or state.row_fields:
            self._close_row()
        if state.in_quoted_field:
            state.diagnostics.record(state.line, state.column, UNCLOSED_QUOTED_FIELD)

    # -- State machine ------------------------------------------------------

    def _consume(self, char: str) -> None:
        config = self._config
        state = self._state

        if state.in_quoted_field:
            if char == config.escape_char:
                state.pending = char
                return
            if char == config.quote:
                state.in_quoted_field = False
                state.column += 1
                return
            state.field_chars.append(char)
            state.column += 1
            return

        if char == config.quote:
            if state.field_chars:
                state.diagnostics.record(state.line, state.column, UNEXPECTED_QUOTE)
                state.field_chars.append(char)
            else:
                state.in_quoted_field = True
            state.column += 1
            return

        if char == config.delimiter:
            state.row_fields.append(state.take_field())
            state.column += 1
            return

        if char == "\n":
            self._close_row()
            return

        if char == "\r":
            state.pending = char
            return

        state.field_chars.append(char)
        state.column += 1

    def _resolve_pending(self, next_char: str | None) -> bool:
        """Classify the pending character using *next_char*.

        ``next_char`` is ``None`` at end of input.  Returns ``True`` when
        *next_char* was consumed together with the pending character.
        """
        config = self._config
        state = self._state
        pending = state.pending
        state.pending = None

        if state.in_quoted_field:
            if next_char == config.quote:
                state.field_chars.append(config.quote)
                state.column += 2
                return True
            if pending == config.quote:
                state.in_quoted_field = False
            else:
                state.field_chars.append(pending)
            state.column += 1
            return False

        # \r, optionally followed by \n
        self._close_row()
        return next_char == "\n"

    def _close_row(self) -> None:
        state = self._state
        state.row_fields.append(state.take_field())
        fields = state.row_fields
        state.row_fields = []
        self._assembler.close_row(fields)
        state.line += 1
        state.column = 1
