# seaflog/timestamps.py
import re
from datetime import datetime

from dateutil import parser as dtp

# SeaFlow log timestamp, e.g. "2015-03-14T00-26-52+00-00"
TS_RE = re.compile(
    r"^(?P<date>\d{4}-\d{2}-\d{2})T(?P<h>\d{2})-(?P<m>\d{2})-(?P<s>\d{2})"
    r"(?P<tzh>[+-]\d{2})-(?P<tzm>\d{2})$"
)
TS_CANONICAL = r"\g<date>T\g<h>:\g<m>:\g<s>\g<tzh>:\g<tzm>"

# RFC3339 with a mandatory numeric or Z offset, seconds resolution or finer.
# Hour 24 is rejected here; isoparse alone accepts "24:00:00".
RFC3339_RE = re.compile(
    r"^\d{4}-\d{2}-\d{2}[Tt ](?:[01]\d|2[0-3]):\d{2}:\d{2}(?:\.\d+)?(?:[Zz]|[+-]\d{2}:\d{2})$"
)


def _parse_rfc3339(text: str) -> datetime | None:
    if not RFC3339_RE.match(text):
        return None
    try:
        return dtp.isoparse(text.replace("t", "T").replace("z", "Z").replace(" ", "T"))
    except ValueError:
        return None


def parse_timestamp(line: str) -> datetime | None:
    """
    Return the time encoded by a SeaFlow timestamp line, or None.

    The instrument writes RFC3339 with "-" in place of ":". A line that is
    already valid RFC3339 is a data line, not a timestamp, so a match requires
    the separator substitution to have changed the text.
    """
    canonical = TS_RE.sub(TS_CANONICAL, line)
    if canonical == line:
        return None
    return _parse_rfc3339(canonical)


def format_timestamp(t: datetime) -> str:
    """RFC3339 at seconds resolution with a numeric UTC offset, never "Z"."""
    return t.isoformat(timespec="seconds")


def parse_bound(text: str | None) -> datetime | None:
    """
    Parse an RFC3339 time range bound. Empty means unbounded.

    Raises:
        ValueError: text is not RFC3339 with a UTC offset.
    """
    if not text:
        return None
    t = _parse_rfc3339(text.strip())
    if t is None:
        raise ValueError(f"invalid RFC3339 timestamp {text!r}")
    return t
