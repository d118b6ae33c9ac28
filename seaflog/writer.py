# seaflog/writer.py
import logging
import math
from decimal import Decimal

from . import tsdata
from .definitions import EventDefinitions
from .events import Event
from .exceptions import RenderError
from .timestamps import format_timestamp

logger = logging.getLogger(__name__)


def _float_text(value: float) -> str:
    """
    Shortest round-trip digits, in exponent form when the exponent is below -4
    or at least 6: 1.406, 1250, 1.25e+06, 1e-05.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    sign = "-" if math.copysign(1.0, value) < 0 else ""
    if value == 0:
        return sign + "0"

    # repr() gives the shortest digits that round-trip
    _, digit_tuple, exponent = Decimal(repr(abs(value))).normalize().as_tuple()
    digits = "".join(str(d) for d in digit_tuple)
    dp = len(digits) + exponent  # position of the decimal point
    exp = dp - 1

    if exp < -4 or exp >= 6:
        mantissa = digits[0] + ("." + digits[1:] if len(digits) > 1 else "")
        return f"{sign}{mantissa}e{'-' if exp < 0 else '+'}{abs(exp):02d}"
    if dp <= 0:
        return f"{sign}0.{'0' * -dp}{digits}"
    if dp >= len(digits):
        return sign + digits + "0" * (dp - len(digits))
    return f"{sign}{digits[:dp]}.{digits[dp:]}"


def _value_text(value) -> str:
    if isinstance(value, float):
        return _float_text(value)
    return str(value)


class TsdataWriter:
    """
    Renders SeaFlow log events as TSDATA.

    Columns are "time" followed by every event definition name in sorted
    order. Each row fills the time column and the column of its own event;
    all other columns are NA.
    """

    def __init__(self, file_type: str, project: str, description: str, definitions: EventDefinitions):
        columns = ["time"] + sorted(definitions)
        self._meta = tsdata.TsdataMetadata(
            file_type=file_type,
            project=project,
            description=description,
            headers=columns,
            types=["time"] + [definitions[name].type for name in columns[1:]],
            units=[tsdata.NA] * len(columns),
            comments=["ISO8601 timestamp"] + [tsdata.NA] * (len(columns) - 1),
        )
        # Raises TsdataError before any row can be written
        self._meta.validate()
        self._coli = {name: i for i, name in enumerate(columns)}

    @property
    def columns(self) -> tuple[str, ...]:
        return tuple(self._meta.headers)

    @property
    def types(self) -> tuple[str, ...]:
        return tuple(self._meta.types)

    def column_index(self, name: str) -> int | None:
        return self._coli.get(name)

    def header_text(self) -> str:
        return self._meta.header()

    def event_text(self, event: Event) -> str | None:
        """
        Return one TSDATA row for `event`, or None if the event has an error.

        Raises:
            RenderError: the event has no column or a boolean column got a
                         non-boolean value.
        """
        if event.error is not None:
            return None

        i = self._coli.get(event.name)
        if i is None or i == 0:
            raise RenderError(f"TSDATA column index for event named {event.name!r} not found")
        if event.time is None:
            raise RenderError(f"event {event.name!r} on line {event.line_number} has no time")

        outs = [tsdata.NA] * len(self._meta.headers)
        outs[0] = format_timestamp(event.time)

        col_type = self._meta.types[i]
        if col_type == "boolean":
            if not isinstance(event.value, bool):
                raise RenderError(
                    f"bad boolean value {event.value!r} for column {event.name!r}, "
                    f"line {event.line_number}"
                )
            outs[i] = "TRUE" if event.value else "FALSE"
        elif col_type == "text":
            outs[i] = _value_text(event.value).replace(tsdata.DELIM, " ")
        else:
            outs[i] = _value_text(event.value)

        return tsdata.DELIM.join(outs)
