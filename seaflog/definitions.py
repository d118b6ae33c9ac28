# seaflog/definitions.py
"""
Event definition table.

The table maps an event name to its EventDef: the column type of the event
and every line form ("startswith" prefix + value action) the instrument uses
to report it. It is loaded once, validated with pydantic, and is read-only
afterwards. Pass it explicitly to the scanner and the writer.

Document layout (event_definitions.json):

    {
      "events": [
        {
          "name": "PMT1",
          "type": "float",
          "forms": [
            {
              "startswith": "PMT1:",
              "value_action": "as_float",
              "examples": [{"text": "...", "parsed": {...}}]
            }
          ]
        }
      ]
    }
"""

import logging
from collections.abc import Iterator, Mapping
from datetime import datetime
from enum import Enum
from importlib import resources
from pathlib import Path
from types import MappingProxyType
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from . import config
from .exceptions import DefinitionError

logger = logging.getLogger(__name__)

PACKAGED_DEFINITIONS = "event_definitions.json"

# Reserved for the timestamp column of the TSDATA output
RESERVED_NAMES = frozenset({"time"})

ValueType = Literal["float", "text", "boolean"]


class ValueAction(str, Enum):
    """How the remainder of a matched line is decoded into a value."""

    AS_FLOAT = "as_float"
    AS_TEXT = "as_text"
    AS_TRUE = "as_true"
    AS_FALSE = "as_false"
    AS_IDENTITY = "as_identity"


class ExpectedEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = ""
    type: str = ""
    line: str = ""
    value: bool | float | str | None = None
    time: datetime | None = None
    line_number: int = 0
    error: bool = False


class EventExample(BaseModel):
    """Example log text and the event the scanner must produce from it."""

    model_config = ConfigDict(frozen=True)

    text: str
    parsed: ExpectedEvent


class EventForm(BaseModel):
    model_config = ConfigDict(frozen=True)

    startswith: str = Field(..., min_length=1)
    value_action: ValueAction
    examples: tuple[EventExample, ...] = ()


class EventDef(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    type: ValueType
    forms: tuple[EventForm, ...] = Field(..., min_length=1)


class DefinitionDocument(BaseModel):
    events: list[EventDef]


class EventDefinitions(Mapping):
    """
    Immutable name -> EventDef mapping with deterministic prefix dispatch.

    Forms are searched longest prefix first, so a line that starts with two
    declared prefixes always resolves to the more specific one.
    """

    def __init__(self, defs: Mapping[str, EventDef]):
        self._defs = MappingProxyType(dict(defs))
        forms = [(edef, eform) for edef in self._defs.values() for eform in edef.forms]
        forms.sort(key=lambda pair: (-len(pair[1].startswith), pair[1].startswith))
        self._forms: tuple[tuple[EventDef, EventForm], ...] = tuple(forms)

    def __getitem__(self, name: str) -> EventDef:
        return self._defs[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._defs)

    def __len__(self) -> int:
        return len(self._defs)

    def __repr__(self) -> str:
        return f"EventDefinitions({sorted(self._defs)!r})"

    def match(self, line: str) -> tuple[EventDef, EventForm] | None:
        """Return the definition and form whose prefix starts `line`, or None."""
        for edef, eform in self._forms:
            if line.startswith(eform.startswith):
                return edef, eform
        return None

    def examples(self) -> Iterator[tuple[EventDef, EventForm, EventExample]]:
        for name in sorted(self._defs):
            edef = self._defs[name]
            for eform in edef.forms:
                for example in eform.examples:
                    yield edef, eform, example


def _build_table(document: DefinitionDocument) -> EventDefinitions:
    defs: dict[str, EventDef] = {}
    prefixes: dict[str, str] = {}
    for edef in document.events:
        if edef.name in RESERVED_NAMES:
            raise DefinitionError(f"event name {edef.name!r} is reserved")
        if edef.name in defs:
            raise DefinitionError(f"duplicate event definition {edef.name!r}")
        for eform in edef.forms:
            owner = prefixes.get(eform.startswith)
            if owner is not None:
                raise DefinitionError(
                    f"prefix {eform.startswith!r} declared by both {owner!r} and {edef.name!r}"
                )
            prefixes[eform.startswith] = edef.name
        defs[edef.name] = edef
    return EventDefinitions(defs)


def parse_definitions(document: Mapping[str, Any]) -> EventDefinitions:
    """Build a definition table from an already-decoded JSON document."""
    try:
        parsed = DefinitionDocument.model_validate(document)
    except ValidationError as e:
        raise DefinitionError(f"invalid event definitions: {e}") from e
    return _build_table(parsed)


def load_definitions(source: str | Path | Mapping[str, Any] | None = None) -> EventDefinitions:
    """
    Load the event definition table.

    Args:
        source: a path to a definition JSON file, a decoded document, or None
                for SEAFLOG_DEFINITIONS / the packaged definitions.

    Raises:
        DefinitionError: the source is unreadable or malformed.
    """
    if isinstance(source, Mapping):
        return parse_definitions(source)

    if source is None and config.DEFINITIONS_PATH:
        source = config.DEFINITIONS_PATH

    try:
        if source is None:
            text = resources.files(__package__).joinpath(PACKAGED_DEFINITIONS).read_text(
                encoding="utf-8"
            )
            origin = PACKAGED_DEFINITIONS
        else:
            text = Path(source).read_text(encoding="utf-8")
            origin = str(source)
    except OSError as e:
        raise DefinitionError(f"could not read event definitions: {e}") from e

    try:
        parsed = DefinitionDocument.model_validate_json(text)
    except ValidationError as e:
        raise DefinitionError(f"invalid event definitions in {origin}: {e}") from e

    table = _build_table(parsed)
    logger.debug("Loaded %d event definitions from %s", len(table), origin)
    return table
