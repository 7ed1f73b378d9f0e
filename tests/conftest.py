"""
Shared test fixtures for omnidata tests.

``collect`` feeds a list of chunks through a fresh streaming session and
returns everything the session delivered through its callbacks.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import pytest

import omnidata

# ---------------------------------------------------------------------------
# Stream collection helper
# ---------------------------------------------------------------------------

@dataclass
class Collected:
    """Everything a session delivered through its callbacks."""
    rows: list = field(default_factory=list)
    headers: list = field(default_factory=list)
    diagnostics: list = field(default_factory=list)
    summaries: list = field(default_factory=list)


def stream_chunks(chunks: list[str], **options) -> Collected:
    """Feed *chunks* through a fresh session and collect every notification."""
    out = Collected()
    session = omnidata.open_session(
        on_row=lambda row, index: out.rows.append((index, row)),
        on_header=out.headers.append,
        on_diagnostic=out.diagnostics.append,
        on_complete=out.summaries.append,
        **options,
    )
    for chunk in chunks:
        session.write(chunk)
    session.end()
    return out


@pytest.fixture
def collect():
    """Fixture form of ``stream_chunks``."""
    return stream_chunks


# ---------------------------------------------------------------------------
# Pytest markers
# ---------------------------------------------------------------------------
def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test (reads and writes real files)",
    )
