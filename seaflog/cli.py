"""Command-line interface for seaflog"""

import logging
import sys
from typing import Optional

import typer

from . import __version__, config
from .convert import convert_file
from .definitions import load_definitions
from .exceptions import SeaflogError
from .timestamps import parse_bound
from .writer import TsdataWriter

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="seaflog",
    help="Convert a SeaFlow v1 log file to TSDATA format (https://github.com/armbrustlab/tsdataformat)",
    add_completion=False,
)


def configure_logging(quiet: bool) -> None:
    logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT, stream=sys.stderr)
    # Quiet only silences per-line parse reports, not fatal errors
    logging.getLogger("seaflog").setLevel(logging.ERROR if quiet else config.LOG_LEVEL)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"seaflog {__version__}")
        raise typer.Exit()


def _parse_bound_option(flag: str, value: Optional[str]):
    try:
        return parse_bound(value)
    except ValueError:
        typer.echo(f"error parsing timestamp for {flag} {value}", err=True)
        raise typer.Exit(code=2)


@app.command()
def convert(
    filetype: str = typer.Option(
        ..., "--filetype", help="identifier for this file type, no spaces (required)"
    ),
    project: str = typer.Option(
        ..., "--project", help="identifier for this project, no spaces (required)"
    ),
    description: str = typer.Option("", "--description", help="long form file description"),
    earliest: Optional[str] = typer.Option(
        None, "--earliest", help="RFC3339 timestamp of earliest event to output"
    ),
    latest: Optional[str] = typer.Option(
        None, "--latest", help="RFC3339 timestamp of latest event to output"
    ),
    logfile: str = typer.Option(
        ..., "--logfile", help="SeaFlow v1 instrument log file, '-' for STDIN (required)"
    ),
    outfile: str = typer.Option(
        ...,
        "--outfile",
        help="output text file for logfile events in TSDATA format, '-' for STDOUT (required)",
    ),
    definitions_path: Optional[str] = typer.Option(
        None,
        "--definitions",
        help="event definition JSON file (default: $SEAFLOG_DEFINITIONS or built-in)",
    ),
    notes: bool = typer.Option(
        True, "--notes/--no-notes", help="write unrecognized lines to the 'note' column"
    ),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="don't report parsing errors"),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Convert a SeaFlow v1 log file to TSDATA format."""
    start = _parse_bound_option("--earliest", earliest)
    end = _parse_bound_option("--latest", latest)
    configure_logging(quiet)

    try:
        definitions = load_definitions(definitions_path)
        writer = TsdataWriter(filetype, project, description, definitions)
        stats = convert_file(logfile, outfile, writer, definitions, start, end, notes)
    except (SeaflogError, OSError) as e:
        typer.echo(f"error: {e}", err=True)
        raise typer.Exit(code=1)

    logger.debug("Conversion stats: %s", stats.as_dict())


def main() -> None:
    app()


if __name__ == "__main__":
    main()
