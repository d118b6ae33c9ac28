from datetime import datetime, timedelta, timezone

import pytest

from seaflog.timestamps import format_timestamp, parse_bound, parse_timestamp


def test_parses_instrument_timestamp():
    t = parse_timestamp("2015-03-14T00-26-52+00-00")
    assert t == datetime(2015, 3, 14, 0, 26, 52, tzinfo=timezone.utc)
    assert t.utcoffset() == timedelta(0)


def test_keeps_numeric_offset():
    t = parse_timestamp("2015-03-14T00-26-52-07-30")
    assert t.utcoffset() == -timedelta(hours=7, minutes=30)
    assert format_timestamp(t) == "2015-03-14T00:26:52-07:30"


@pytest.mark.parametrize(
    "text",
    [
        "2015-03-14T00-26-52+00-00",
        "1999-12-31T23-59-59+05-45",
        "2020-02-29T12-00-00-03-00",
    ],
)
def test_round_trip_preserves_instant(text):
    t = parse_timestamp(text)
    canonical = format_timestamp(t)
    assert datetime.fromisoformat(canonical) == t
    assert canonical.replace(":", "-") == text


def test_rfc3339_data_line_is_not_a_timestamp():
    """A line already in standard form must not be mistaken for a timestamp line."""
    assert parse_timestamp("2015-03-14T00:26:52+00:00") is None


@pytest.mark.parametrize(
    "text",
    [
        "",
        "PMT1:1.406",
        "2015-13-14T00-26-52+00-00",  # month 13
        "2015-03-14T00-26-52",  # no offset
        "2015-03-14T00-26-52+00-00 trailing",
        " 2015-03-14T00-26-52+00-00",
        "2015-03-14T24-00-00+00-00",  # hour 24
    ],
)
def test_non_timestamps(text):
    assert parse_timestamp(text) is None


def test_format_never_uses_z():
    t = datetime(2015, 3, 14, 0, 26, 52, tzinfo=timezone.utc)
    assert format_timestamp(t) == "2015-03-14T00:26:52+00:00"


def test_parse_bound():
    assert parse_bound(None) is None
    assert parse_bound("") is None
    assert parse_bound("2015-03-14T00:26:52Z") == datetime(2015, 3, 14, 0, 26, 52, tzinfo=timezone.utc)
    assert parse_bound("2015-03-14T02:26:52+02:00") == datetime(
        2015, 3, 14, 0, 26, 52, tzinfo=timezone.utc
    )


@pytest.mark.parametrize(
    "text", ["yesterday", "2015-03-14", "2015-03-14T00:26:52", "2015-03-14T24:00:00Z"]
)
def test_parse_bound_rejects_bad_input(text):
    with pytest.raises(ValueError):
        parse_bound(text)
