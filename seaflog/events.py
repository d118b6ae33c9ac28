# seaflog/events.py
import math
from dataclasses import dataclass, replace
from datetime import datetime

from .definitions import EventDefinitions, ValueAction
from .exceptions import DefinitionError

UNHANDLED = "unhandled"
NOTE = "note"

ERR_NO_TIME = "event with no time set"
ERR_UNRECOGNIZED = "unrecognized event"
ERR_NO_SEPARATOR = "missing expected separator ':'"

EventValue = float | str | bool | None


@dataclass(frozen=True)
class Event:
    """
    One classified SeaFlow log data line.

    - name / type: event definition name and column type ("float", "text", "boolean")
    - line: raw line text
    - value: decoded value, undefined when `error` is set
    - time: last timestamp seen before the line, None if there was none
    - line_number: 1-based physical line number
    - error: reason the line could not be fully parsed, or None
    """

    name: str = ""
    type: str = ""
    line: str = ""
    value: EventValue = None
    time: datetime | None = None
    line_number: int = 0
    error: str | None = None


def _after_separator(line: str) -> str | None:
    parts = line.split(":", 1)
    if len(parts) < 2:
        return None
    return parts[1].strip()


def _parse_float(text: str) -> float | None:
    # float() also takes "1_000", which is not a float literal in a log
    if "_" in text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    # out of float64 range, e.g. "1e400"; only a literal inf may be infinite
    if math.isinf(value) and "inf" not in text.lower():
        return None
    return value


def create_event(
    line: str, t: datetime | None, line_number: int, definitions: EventDefinitions
) -> Event:
    """Classify one data line against the definition table."""
    if t is None:
        return Event(line=line, time=t, line_number=line_number, error=ERR_NO_TIME)

    matched = definitions.match(line)
    if matched is None:
        return Event(
            name=UNHANDLED,
            type="text",
            line=line,
            value=line,
            time=t,
            line_number=line_number,
            error=ERR_UNRECOGNIZED,
        )

    edef, eform = matched
    event = Event(name=edef.name, type=edef.type, line=line, time=t, line_number=line_number)
    action = eform.value_action

    if action in (ValueAction.AS_FLOAT, ValueAction.AS_TEXT):
        text = _after_separator(line)
        if text is None:
            return replace(event, error=ERR_NO_SEPARATOR)
        if action is ValueAction.AS_TEXT:
            return replace(event, value=text)
        value = _parse_float(text)
        if value is None:
            return replace(event, error=f"could not parse float value {text!r}")
        return replace(event, value=value)
    if action is ValueAction.AS_TRUE:
        return replace(event, value=True)
    if action is ValueAction.AS_FALSE:
        return replace(event, value=False)
    if action is ValueAction.AS_IDENTITY:
        return replace(event, value=line)

    raise DefinitionError(f"invalid value_action {action!r} for event {edef.name!r}")


def time_filter(
    event: Event, earliest: datetime | None = None, latest: datetime | None = None
) -> bool:
    """
    True if the event time lies inclusively within [earliest, latest].
    A None bound is ignored; an event without a time fails any set bound.
    """
    if earliest is not None and (event.time is None or event.time < earliest):
        return False
    if latest is not None and (event.time is None or event.time > latest):
        return False
    return True


def unhandled_to_note(unhandled: Event) -> Event:
    """Downgrade an unrecognized line to an error-free "note" event."""
    return Event(
        name=NOTE,
        type="text",
        value=unhandled.line,
        line=unhandled.line,
        line_number=unhandled.line_number,
        time=unhandled.time,
    )
