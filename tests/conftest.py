import io

import pytest

from seaflog.definitions import load_definitions
from seaflog.scanner import EventScanner
from seaflog.writer import TsdataWriter

T0_TEXT = "2015-03-14T00-26-52+00-00"


@pytest.fixture(scope="session")
def definitions():
    return load_definitions()


@pytest.fixture
def writer(definitions):
    return TsdataWriter("SeaFlowLog", "SeaFlow", "test conversion", definitions)


def scan_all(text: str, definitions):
    """Return (events, scanner) for an in-memory log."""
    scanner = EventScanner(io.StringIO(text), definitions)
    return list(scanner), scanner
