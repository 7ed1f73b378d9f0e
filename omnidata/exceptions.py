"""
Custom exception hierarchy for omnidata.

Content anomalies in the parsed text (stray quotes, unclosed quoted
fields) are never raised: they are recorded as ``Diagnostic`` records
and parsing continues.  The exceptions below cover the remaining
failure classes:

- Bad configuration handed to the library.
- Misuse of a streaming session after it has ended.
- Host I/O failures in the file driver (undecodable input).
- Export failures when writing parsed results to disk.
"""


class OmnidataError(Exception):
    """Base exception for all omnidata errors."""


class ConfigurationError(OmnidataError):
    """Raised when a parse configuration is inconsistent or unreadable.

    This can happen if:
    - ``header_mode="explicit"`` is used without ``header_names``.
    - ``header_names`` is given for a mode that does not use it.
    - A YAML config file is empty.
    """


class SessionClosedError(OmnidataError):
    """Raised when ``write()`` or ``end()`` is called on an ended session."""


class SourceReadError(OmnidataError):
    """Raised when the file driver cannot decode the source file.

    Wraps the underlying ``UnicodeDecodeError`` so callers can catch a
    single library exception for host-side read failures.
    """


class ExportError(OmnidataError):
    """Raised when the exporter fails to write output files.

    For example, permission errors, disk full, or unsupported format.
    """
