"""
Demo script: stream delimited-text files through omnidata.

Usage:
    uv run python scripts/run_parse.py data.csv                 # no header
    uv run python scripts/run_parse.py data.csv --header        # first row is header
    uv run python scripts/run_parse.py data.tsv --delimiter "\t"
    uv run python scripts/run_parse.py data.csv --config dialect.yaml
    uv run python scripts/run_parse.py data.csv --export out.parquet

Each file is streamed chunk by chunk; the first few rows and every
diagnostic are logged.  With --export the parsed rows are written to the
given CSV or Parquet path.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    datefmt="%H:%M:%S",
)
log = logging.getLogger("run_parse")

PREVIEW_ROWS = 5


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description=__doc__.split("\n\n")[0])
    p.add_argument("paths", nargs="+", help="Delimited-text files to parse")
    p.add_argument("--config", help="YAML parse configuration")
    p.add_argument("--delimiter", default=",")
    p.add_argument("--header", action="store_true", help="First row is the header")
    p.add_argument("--encoding", default="utf-8")
    p.add_argument("--export", help="Write rows to this .csv or .parquet path")
    return p


SHELL_ESCAPES = {"\\t": "\t", "\\n": "\n", "\\r": "\r", "\\\\": "\\"}


def _unescape(value: str) -> str:
    """Turn a shell-typed ``\\t`` into a real tab; anything else is literal."""
    return SHELL_ESCAPES.get(value, value)


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    from pydantic import ValidationError

    import omnidata
    from omnidata.exceptions import OmnidataError

    args = _build_arg_parser().parse_args(argv)

    try:
        if args.config:
            config = omnidata.load_config(args.config)
        else:
            config = omnidata.ParseConfiguration.from_options(
                headers=args.header,
                delimiter=_unescape(args.delimiter),
                encoding=args.encoding,
            )
    except (OmnidataError, ValidationError, FileNotFoundError) as exc:
        log.error("Invalid configuration: %s", exc)
        return 2

    failures = 0
    for path in args.paths:
        if not Path(path).exists():
            log.warning("SKIP  %s  (file not found)", path)
            failures += 1
            continue

        log.info("=" * 70)
        log.info("Processing: %s", path)

        def _on_row(row, index):
            if index < PREVIEW_ROWS:
                log.info("  row %d: %s", index, row)

        try:
            if args.export:
                result = omnidata.parse_file(path, config)
                for i, row in enumerate(result.rows[:PREVIEW_ROWS]):
                    _on_row(row, i)
                diagnostics = result.diagnostics
                fmt = "parquet" if args.export.endswith(".parquet") else "csv"
                written = omnidata.export_result(result, args.export, fmt)
                log.info("  exported -> %s", written)
                total = len(result.rows)
            else:
                summary = omnidata.stream_file(
                    path,
                    config,
                    on_header=lambda h: log.info("  header: %s", h),
                    on_row=_on_row,
                )
                diagnostics = summary.diagnostics
                total = summary.total_rows
        except OmnidataError:
            log.exception("FAIL  %s", path)
            failures += 1
            continue

        for diag in diagnostics:
            log.warning("  line %d, col %d: %s", diag.line, diag.column, diag.message)
        log.info("  %d rows, %d diagnostic(s)", total, len(diagnostics))

    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
