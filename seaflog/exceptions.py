# seaflog/exceptions.py
"""
Exception hierarchy for seaflog.

Construction-time problems (definition table, TSDATA metadata) are fatal and
are raised to the caller. Per-line problems never raise: they are recorded on
the Event itself. Only a failed read of the underlying stream stops a scan.
"""


class SeaflogError(Exception):
    """Base class for all seaflog errors."""


class DefinitionError(SeaflogError):
    """The event definition table could not be loaded or is inconsistent."""


class TsdataError(SeaflogError, ValueError):
    """TSDATA file metadata is internally inconsistent."""


class RenderError(SeaflogError):
    """An event could not be rendered as a TSDATA row."""


class ScanError(SeaflogError):
    """The input stream failed while scanning for events."""
