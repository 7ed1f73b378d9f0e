"""
Diagnostic collection for omnidata sessions.

Records are appended in detection order and forwarded to the session's
``on_diagnostic`` callback as soon as they are recorded.
"""

from __future__ import annotations

import logging
from typing import Callable

from omnidata.parsers.base import Diagnostic

logger = logging.getLogger(__name__)

UNEXPECTED_QUOTE = "Unexpected quote character"
UNCLOSED_QUOTED_FIELD = "Unclosed quoted field"


class DiagnosticCollector:
    """Append-only list of ``Diagnostic`` records."""

    def __init__(self, listener: Callable[[Diagnostic], None] | None = None) -> None:
        self._records: list[Diagnostic] = []
        self._listener = listener

    def record(self, line: int, column: int, message: str) -> Diagnostic:
        diagnostic = Diagnostic(line=line, column=column, message=message)
        self._records.append(diagnostic)
        logger.debug("Diagnostic at line %d, column %d: %s", line, column, message)
        if self._listener is not None:
            self._listener(diagnostic)
        return diagnostic

    @property
    def records(self) -> list[Diagnostic]:
        """A copy of the records collected so far."""
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)
