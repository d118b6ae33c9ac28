# seaflog/convert.py
import io
import logging
import sys
from collections.abc import Iterable
from contextlib import ExitStack
from dataclasses import asdict, dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, TextIO

from .definitions import EventDefinitions
from .events import UNHANDLED, time_filter, unhandled_to_note
from .exceptions import RenderError, ScanError
from .scanner import EventScanner
from .writer import TsdataWriter

logger = logging.getLogger(__name__)

STDIO = "-"


@dataclass
class ConversionStats:
    lines: int = 0  # physical lines read
    events: int = 0  # events produced by the scanner
    written: int = 0  # TSDATA rows written
    filtered: int = 0  # events outside the time range
    notes: int = 0  # unrecognized lines written as notes
    errors: int = 0  # events with parse or render errors

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


def convert_stream(
    lines: Iterable[str],
    out: TextIO,
    writer: TsdataWriter,
    definitions: EventDefinitions,
    earliest: datetime | None = None,
    latest: datetime | None = None,
    notes: bool = True,
) -> ConversionStats:
    """
    Convert SeaFlow log lines to TSDATA written to `out`.

    Per-line problems are logged as warnings and counted; they never stop the
    conversion. Unrecognized lines become "note" events unless `notes` is False.

    Raises:
        ScanError: reading `lines` failed part way through.
    """
    stats = ConversionStats()
    out.write(writer.header_text() + "\n")

    scanner = EventScanner(lines, definitions)
    for event in scanner:
        stats.events += 1
        if not time_filter(event, earliest, latest):
            stats.filtered += 1
            continue

        if event.name == UNHANDLED and notes:
            event = unhandled_to_note(event)
            stats.notes += 1
            logger.warning(
                'Line %d, unrecognized event, treating as a "note".\n  %s',
                event.line_number,
                event.line,
            )

        if event.error is not None:
            stats.errors += 1
            logger.warning("Line %d, %s.\n  %s", event.line_number, event.error, event.line)
            continue

        try:
            row = writer.event_text(event)
        except RenderError as e:
            stats.errors += 1
            logger.warning("Line %d, error serializing, %s.\n  %s", event.line_number, e, event.line)
            continue
        if row is not None:
            out.write(row + "\n")
            stats.written += 1

    stats.lines = scanner.line_number
    if scanner.err is not None:
        raise ScanError(f"read failed after line {scanner.line_number}: {scanner.err}") from scanner.err

    logger.info(
        "Converted %d lines: %d events, %d rows written, %d filtered, %d errors",
        stats.lines,
        stats.events,
        stats.written,
        stats.filtered,
        stats.errors,
    )
    return stats


def convert_file(
    logfile: str | Path,
    outfile: str | Path,
    writer: TsdataWriter,
    definitions: EventDefinitions,
    earliest: datetime | None = None,
    latest: datetime | None = None,
    notes: bool = True,
) -> ConversionStats:
    """Convert a log file to a TSDATA file. "-" selects stdin / stdout."""
    with ExitStack() as stack:
        if str(logfile) == STDIO:
            # split on "\n" only, like the file branch
            src: TextIO = io.TextIOWrapper(sys.stdin.buffer, encoding="utf-8", newline="\n")
            stack.callback(src.detach)
        else:
            src = stack.enter_context(open(logfile, "r", encoding="utf-8", newline="\n"))

        if str(outfile) == STDIO:
            dst: TextIO = sys.stdout
        else:
            out_path = Path(outfile)
            out_path.parent.mkdir(parents=True, exist_ok=True)
            dst = stack.enter_context(out_path.open("w", encoding="utf-8", newline="\n"))

        stats = convert_stream(src, dst, writer, definitions, earliest, latest, notes)
        dst.flush()
        return stats
