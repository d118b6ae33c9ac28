from datetime import datetime, timezone

import pytest

from seaflog.events import (
    ERR_NO_TIME,
    ERR_UNRECOGNIZED,
    Event,
    create_event,
    time_filter,
    unhandled_to_note,
)

T0 = datetime(2015, 3, 14, 0, 26, 52, tzinfo=timezone.utc)


def test_unhandled_to_note():
    unhandled = Event(
        name="unhandled",
        type="text",
        value="not a real event data line",
        line="not a real event data line",
        line_number=2,
        time=T0,
        error=ERR_UNRECOGNIZED,
    )
    note = unhandled_to_note(unhandled)
    assert note == Event(
        name="note",
        type="text",
        value="not a real event data line",
        line="not a real event data line",
        line_number=2,
        time=T0,
    )
    assert note.error is None
    # the input event is untouched
    assert unhandled.error == ERR_UNRECOGNIZED


STAMPS = [datetime(2015, 3, d, tzinfo=timezone.utc) for d in (14, 15, 16, 17)]
EVENTS = [Event(time=t) for t in STAMPS]


@pytest.mark.parametrize(
    "earliest, latest, want",
    [
        (None, None, STAMPS),
        (STAMPS[1], None, STAMPS[1:]),
        (None, STAMPS[1], STAMPS[:2]),
        (STAMPS[1], STAMPS[2], STAMPS[1:3]),
        (STAMPS[1], STAMPS[3], STAMPS[1:4]),
    ],
    ids=["no filter", "only earliest", "only latest", "both", "both to end"],
)
def test_time_filter(earliest, latest, want):
    got = [e.time for e in EVENTS if time_filter(e, earliest, latest)]
    assert got == want


def test_time_filter_without_event_time():
    event = Event(line="PMT1:1.0", error=ERR_NO_TIME)
    assert time_filter(event)
    assert not time_filter(event, earliest=T0)
    assert not time_filter(event, latest=T0)


def test_create_event_decodes_each_value_action(definitions):
    assert create_event("Cruise:  KM1502 ", T0, 7, definitions).value == "KM1502"
    assert create_event("Filter door opened", T0, 7, definitions).value is True
    assert create_event("Filter door closed", T0, 7, definitions).value is False
    line = "SeaFlow version 1.3.2"
    assert create_event(line, T0, 7, definitions).value == line
    event = create_event("PMT2:  -1e-3", T0, 7, definitions)
    assert event.value == -0.001
    assert event.line_number == 7


def test_create_event_value_after_first_separator(definitions):
    event = create_event("Note: pump: restarted", T0, 3, definitions)
    assert event.value == "pump: restarted"


@pytest.mark.parametrize(
    "text", ["PMT1:", "PMT1:abc", "PMT1:1_000", "PMT1:1.0 2.0", "PMT1:1e400", "PMT1:-1e400"]
)
def test_create_event_rejects_bad_floats(text, definitions):
    event = create_event(text, T0, 1, definitions)
    assert event.name == "PMT1"
    assert event.value is None
    assert event.error is not None


def test_create_event_without_time(definitions):
    event = create_event("PMT1:1.406", None, 1, definitions)
    assert event.error == ERR_NO_TIME
    assert event.name == ""
    assert event.value is None


def test_create_event_literal_infinity(definitions):
    event = create_event("PMT1:-Inf", T0, 1, definitions)
    assert event.error is None
    assert event.value == float("-inf")
