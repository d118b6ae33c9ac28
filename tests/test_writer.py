from datetime import datetime, timedelta, timezone

import pytest

from seaflog.definitions import parse_definitions
from seaflog.events import Event
from seaflog.exceptions import RenderError, TsdataError
from seaflog.writer import TsdataWriter

T0 = datetime(2015, 3, 14, 0, 26, 52, tzinfo=timezone.utc)


def _row(writer, event):
    return writer.event_text(event).split("\t")


def test_columns_are_time_then_sorted_names(writer, definitions):
    assert writer.columns == ("time",) + tuple(sorted(definitions))
    assert writer.types[0] == "time"
    assert writer.column_index("time") == 0
    assert writer.column_index("PMT1") == writer.columns.index("PMT1")
    assert writer.column_index("nope") is None


def test_header_text(writer, definitions):
    lines = writer.header_text().split("\n")
    assert lines[:3] == ["SeaFlowLog", "SeaFlow", "test conversion"]
    comments, types, units, names = (line.split("\t") for line in lines[3:])
    assert names == list(writer.columns)
    assert comments[0] == "ISO8601 timestamp"
    assert set(comments[1:]) == {"NA"}
    assert set(units) == {"NA"}
    assert types[names.index("filter_door_open")] == "boolean"
    assert types[names.index("cruise")] == "text"
    assert types[names.index("PMT1")] == "float"


def test_float_row(writer):
    row = _row(writer, Event(name="PMT1", type="float", value=1.406, time=T0, line_number=2))
    assert len(row) == len(writer.columns)
    assert row[0] == "2015-03-14T00:26:52+00:00"
    i = writer.column_index("PMT1")
    assert row[i] == "1.406"
    assert [v for j, v in enumerate(row) if j not in (0, i)] == ["NA"] * (len(row) - 2)


def test_whole_float_has_no_trailing_zero(writer):
    row = _row(writer, Event(name="focus_position", type="float", value=1250.0, time=T0))
    assert row[writer.column_index("focus_position")] == "1250"


def test_time_keeps_local_offset(writer):
    t = datetime(2015, 3, 14, 0, 26, 52, tzinfo=timezone(timedelta(hours=-7)))
    row = _row(writer, Event(name="PMT1", type="float", value=1.0, time=t))
    assert row[0] == "2015-03-14T00:26:52-07:00"


def test_boolean_row(writer):
    i = writer.column_index("filter_door_open")
    row = _row(writer, Event(name="filter_door_open", type="boolean", value=True, time=T0))
    assert row[i] == "TRUE"
    row = _row(writer, Event(name="filter_door_open", type="boolean", value=False, time=T0))
    assert row[i] == "FALSE"


def test_boolean_column_rejects_non_boolean(writer):
    with pytest.raises(RenderError):
        writer.event_text(Event(name="filter_door_open", type="boolean", value="yes", time=T0))


def test_text_delimiter_replaced(writer):
    event = Event(name="note", type="text", value="a\tb\tc", time=T0)
    row = _row(writer, event)
    assert len(row) == len(writer.columns)
    assert row[writer.column_index("note")] == "a b c"


def test_errored_event_renders_nothing(writer):
    event = Event(name="PMT1", type="float", time=T0, error="could not parse float value 'x'")
    assert writer.event_text(event) is None


def test_unknown_column(writer):
    with pytest.raises(RenderError, match="not found"):
        writer.event_text(Event(name="unhandled", type="text", value="x", time=T0))


@pytest.mark.parametrize(
    "file_type, project",
    [("", "SeaFlow"), ("Sea Flow", "SeaFlow"), ("SeaFlowLog", ""), ("SeaFlowLog", "Sea Flow")],
)
def test_bad_metadata_is_fatal(definitions, file_type, project):
    with pytest.raises(TsdataError):
        TsdataWriter(file_type, project, "", definitions)


def test_definition_names_with_delimiter_are_fatal():
    table = parse_definitions(
        {
            "events": [
                {"name": "bad\tname", "type": "text", "forms": [{"startswith": "X:", "value_action": "as_text"}]}
            ]
        }
    )
    with pytest.raises(TsdataError):
        TsdataWriter("SeaFlowLog", "SeaFlow", "", table)


@pytest.mark.parametrize(
    "value, want",
    [
        (1.406, "1.406"),
        (123456.0, "123456"),
        (1.25e6, "1.25e+06"),
        (1e21, "1e+21"),
        (0.0001, "0.0001"),
        (1e-05, "1e-05"),
        (-2.5e-7, "-2.5e-07"),
        (0.0, "0"),
        (-0.0, "-0"),
        (float("nan"), "NaN"),
        (float("inf"), "+Inf"),
        (float("-inf"), "-Inf"),
    ],
)
def test_float_text_form(writer, value, want):
    row = _row(writer, Event(name="event_rate", type="float", value=value, time=T0))
    assert row[writer.column_index("event_rate")] == want
