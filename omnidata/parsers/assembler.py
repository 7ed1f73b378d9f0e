"""
Field & row assembly for omnidata.

Turns the completed rows produced by the lexer into emitted ``Row``
values and owns header resolution:

- ``none``: rows are emitted as plain field lists.
- ``first_row``: the first surviving row becomes the header and is not
  emitted as data.
- ``explicit``: the configured names are the header from session start;
  every surviving row is data.

Rows consisting of a single empty field are "empty lines" and are
dropped when ``skip_empty_lines`` is set.
"""

from __future__ import annotations

import logging

from omnidata.config import ParseConfiguration
from omnidata.parsers.base import ParserState, Row, SessionNotifications

logger = logging.getLogger(__name__)


def shape_row(fields: list[str], header: list[str] | None) -> Row:
    """Convert raw fields to the emitted row form.

    With a header, missing trailing fields become ``""`` and extra
    trailing fields are dropped.  Duplicate header names keep the value
    of the last column with that name.
    """
    if header is None:
        return list(fields)
    return {
        name: fields[i] if i < len(fields) else ""
        for i, name in enumerate(header)
    }


class RowAssembler:
    """Routes completed rows to the header resolver or to ``on_row``."""

    def __init__(
        self,
        config: ParseConfiguration,
        state: ParserState,
        notifications: SessionNotifications,
    ) -> None:
        self._config = config
        self._state = state
        self._notifications = notifications

    def start(self) -> None:
        """Resolve an explicit header at session start."""
        if self._config.header_mode == "explicit":
            self._resolve_header(list(self._config.header_names or []))

    def close_row(self, fields: list[str]) -> None:
        state = self._state

        if self._config.skip_empty_lines and fields == [""]:
            return

        if self._config.header_mode == "first_row" and state.resolved_header is None:
            self._resolve_header(fields)
            return

        row = shape_row(fields, state.resolved_header)
        if self._notifications.on_row is not None:
            self._notifications.on_row(row, state.row_index)
        state.row_index += 1

    def _resolve_header(self, names: list[str]) -> None:
        self._state.resolved_header = list(names)
        logger.debug("Resolved header: %s", names)
        if self._notifications.on_header is not None:
            self._notifications.on_header(list(names))
