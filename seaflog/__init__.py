"""
seaflog: convert SeaFlow V1 instrument log files to TSDATA.
"""

__version__ = "0.2.0"

# Explicit re-exports for library users.
from .convert import (
    ConversionStats as ConversionStats,
)
from .convert import (
    convert_file as convert_file,
)
from .convert import (
    convert_stream as convert_stream,
)
from .definitions import (
    EventDef as EventDef,
)
from .definitions import (
    EventDefinitions as EventDefinitions,
)
from .definitions import (
    EventForm as EventForm,
)
from .definitions import (
    ValueAction as ValueAction,
)
from .definitions import (
    load_definitions as load_definitions,
)
from .events import (
    Event as Event,
)
from .events import (
    time_filter as time_filter,
)
from .events import (
    unhandled_to_note as unhandled_to_note,
)
from .exceptions import (
    DefinitionError as DefinitionError,
)
from .exceptions import (
    RenderError as RenderError,
)
from .exceptions import (
    ScanError as ScanError,
)
from .exceptions import (
    SeaflogError as SeaflogError,
)
from .exceptions import (
    TsdataError as TsdataError,
)
from .scanner import (
    EventScanner as EventScanner,
)
from .scanner import (
    ScannerState as ScannerState,
)
from .timestamps import (
    parse_timestamp as parse_timestamp,
)
from .writer import (
    TsdataWriter as TsdataWriter,
)

__all__ = [
    "ConversionStats",
    "DefinitionError",
    "Event",
    "EventDef",
    "EventDefinitions",
    "EventForm",
    "EventScanner",
    "RenderError",
    "ScanError",
    "ScannerState",
    "SeaflogError",
    "TsdataError",
    "TsdataWriter",
    "ValueAction",
    "__version__",
    "convert_file",
    "convert_stream",
    "load_definitions",
    "parse_timestamp",
    "time_filter",
    "unhandled_to_note",
]
