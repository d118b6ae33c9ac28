# seaflog/tsdata.py
"""
TSDATA file metadata.

A TSDATA file starts with a seven line header followed by tab-delimited rows:

    1. file type identifier (no whitespace)
    2. project identifier (no whitespace)
    3. free-text file description
    4. column comments
    5. column types
    6. column units
    7. column names

Lines 4-7 are tab-delimited with one field per column. The first column is
always "time". Missing values are written as NA.
"""

import re
from dataclasses import dataclass, field

from .exceptions import TsdataError

DELIM = "\t"
NA = "NA"
COLUMN_TYPES = frozenset({"text", "category", "integer", "float", "boolean", "time"})

WHITESPACE_RE = re.compile(r"\s")


@dataclass
class TsdataMetadata:
    file_type: str
    project: str
    description: str = ""
    headers: list[str] = field(default_factory=list)
    types: list[str] = field(default_factory=list)
    units: list[str] = field(default_factory=list)
    comments: list[str] = field(default_factory=list)

    def validate(self) -> None:
        """Raise TsdataError if the metadata cannot describe a valid TSDATA file."""
        for label, ident in (("file type", self.file_type), ("project", self.project)):
            if not ident:
                raise TsdataError(f"{label} is empty")
            if WHITESPACE_RE.search(ident):
                raise TsdataError(f"{label} {ident!r} contains whitespace")
        if "\n" in self.description or "\r" in self.description:
            raise TsdataError("description contains a line break")

        if len(self.headers) < 2:
            raise TsdataError("at least two columns are required")
        for label, values in (("types", self.types), ("units", self.units), ("comments", self.comments)):
            if len(values) != len(self.headers):
                raise TsdataError(
                    f"{len(values)} {label} for {len(self.headers)} columns"
                )

        if self.headers[0] != "time" or self.types[0] != "time":
            raise TsdataError("first column must be 'time' with type 'time'")

        seen: set[str] = set()
        for name in self.headers:
            if not name:
                raise TsdataError("empty column name")
            if name in seen:
                raise TsdataError(f"duplicate column name {name!r}")
            seen.add(name)

        for name, col_type in zip(self.headers, self.types):
            if col_type not in COLUMN_TYPES:
                raise TsdataError(f"unknown type {col_type!r} for column {name!r}")

        for label, values in (
            ("column name", self.headers),
            ("unit", self.units),
            ("comment", self.comments),
        ):
            for value in values:
                if DELIM in value or "\n" in value or "\r" in value:
                    raise TsdataError(f"{label} {value!r} contains a delimiter or line break")

    def header(self) -> str:
        """Header block, without a trailing line break."""
        return "\n".join(
            [
                self.file_type,
                self.project,
                self.description,
                DELIM.join(self.comments),
                DELIM.join(self.types),
                DELIM.join(self.units),
                DELIM.join(self.headers),
            ]
        )
