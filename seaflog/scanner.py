# seaflog/scanner.py
import logging
from collections.abc import Iterable, Iterator
from datetime import datetime
from enum import Enum

from .definitions import EventDefinitions
from .events import Event, create_event
from .timestamps import parse_timestamp

logger = logging.getLogger(__name__)

FAULT_MARKER = "Fault:"


class ScannerState(Enum):
    READY = "ready"
    SCANNING = "scanning"
    DONE = "done"
    FAILED = "failed"


class EventScanner:
    """
    Pull-based reader of events from a SeaFlow V1 instrument log.

    Call scan() to advance; it returns True while an event is available
    through `event`. Once it returns False, `err` holds the read error if the
    input failed, or None if the input was simply exhausted. The scanner can
    also be used as an iterator:

        scanner = EventScanner(f, definitions)
        for event in scanner:
            ...
        if scanner.err:
            raise scanner.err
    """

    def __init__(self, lines: Iterable[str], definitions: EventDefinitions):
        self._lines = iter(lines)
        self._definitions = definitions
        self._time: datetime | None = None  # last timestamp line seen
        self._line_number = 0
        self._event: Event | None = None
        self._error: Exception | None = None
        self._state = ScannerState.READY

    @property
    def state(self) -> ScannerState:
        return self._state

    @property
    def event(self) -> Event | None:
        return self._event

    @property
    def err(self) -> Exception | None:
        """Unrecoverable read error, if scanning stopped abnormally."""
        return self._error

    @property
    def line_number(self) -> int:
        return self._line_number

    @property
    def current_time(self) -> datetime | None:
        return self._time

    def _next_line(self) -> str | None:
        try:
            raw = next(self._lines)
        except StopIteration:
            self._state = ScannerState.DONE
            return None
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Read failed after line %d: %s", self._line_number, e)
            self._error = e
            self._state = ScannerState.FAILED
            return None
        self._line_number += 1
        line = raw[:-1] if raw.endswith("\n") else raw
        return line[:-1] if line.endswith("\r") else line

    def scan(self) -> bool:
        """Advance to the next event. Returns False when no more events follow."""
        if self._state in (ScannerState.DONE, ScannerState.FAILED):
            return False
        self._state = ScannerState.SCANNING

        while True:
            line = self._next_line()
            if line is None:
                return False

            t = parse_timestamp(line)
            if t is not None:
                self._time = t
                continue
            if line == "" or line == FAULT_MARKER:
                continue

            self._event = create_event(line, self._time, self._line_number, self._definitions)
            return True

    def __iter__(self) -> Iterator[Event]:
        return self

    def __next__(self) -> Event:
        if not self.scan():
            raise StopIteration
        return self._event
