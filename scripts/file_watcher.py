import logging
import shutil
import time
from pathlib import Path

from watchdog.events import FileSystemEventHandler

from seaflog import config
from seaflog.convert import ConversionStats, convert_file
from seaflog.definitions import EventDefinitions, load_definitions
from seaflog.writer import TsdataWriter

# Watchdog observer selection (polling is more reliable on Docker/Windows bind mounts)
if config.USE_POLLING:
    from watchdog.observers.polling import PollingObserver as Observer
    OBSERVER_NAME = "PollingObserver"
else:
    from watchdog.observers import Observer
    OBSERVER_NAME = "Observer"

# -----------------------
# Logging setup
# -----------------------
logger = logging.getLogger(__name__)

OUTPUT_SUFFIX = ".tsdata"


# -----------------------
# Helpers
# -----------------------
def is_file_stable(path: Path, wait: float = config.FILE_STABLE_WAIT) -> bool:
    """Return True if file size stops changing during a short wait."""
    try:
        s1 = path.stat().st_size
        time.sleep(wait)
        s2 = path.stat().st_size
        return s1 == s2
    except FileNotFoundError:
        return False


def quarantine(src: Path, quarantine_dir: Path, reason: str) -> None:
    """Move a file that failed conversion aside, with a .note explaining why."""
    quarantine_dir.mkdir(parents=True, exist_ok=True)
    qpath = quarantine_dir / src.name
    try:
        shutil.move(str(src), str(qpath))
        note = qpath.with_suffix(qpath.suffix + ".note")
        with open(note, "w", encoding="utf-8") as f:
            f.write(f"Failed to convert {src.name}\nReason: {reason}\n")
        logger.warning("Quarantined %s: %s", src.name, reason)
    except OSError as qe:
        logger.critical("Could not quarantine %s: %s", src, qe, exc_info=True)


# -----------------------
# Watcher
# -----------------------
class LogHandler(FileSystemEventHandler):
    """Watches the incoming directory and converts new SeaFlow log files."""

    def __init__(
        self,
        definitions: EventDefinitions,
        writer: TsdataWriter,
        incoming_dir: Path = config.WATCH_DIR,
        processing_dir: Path = config.PROCESSING_DIR,
        output_dir: Path = config.OUTPUT_DIR,
        quarantine_dir: Path = config.QUARANTINE_DIR,
    ):
        super().__init__()
        self.definitions = definitions
        self.writer = writer
        self.incoming_dir = incoming_dir
        self.processing_dir = processing_dir
        self.output_dir = output_dir
        self.quarantine_dir = quarantine_dir

    def on_created(self, event) -> None:
        if event.is_directory:
            return
        self.process_file(Path(event.src_path))

    def on_moved(self, event) -> None:
        if event.is_directory:
            return
        # process the destination path when a file is moved into the incoming dir
        target = Path(getattr(event, "dest_path", event.src_path))
        if target.parent == self.incoming_dir:
            self.process_file(target)

    def process_file(self, src: Path) -> ConversionStats | None:
        """Wait until stable, move to processing, convert, delete. Quarantine on failure."""
        while not is_file_stable(src):
            if not src.exists():
                logger.warning("%s disappeared before it could be converted", src)
                return None
            time.sleep(config.FILE_STABLE_WAIT)

        self.processing_dir.mkdir(parents=True, exist_ok=True)
        dest = self.processing_dir / src.name
        try:
            shutil.move(str(src), str(dest))
        except OSError as e:
            logger.error("Move failed %s → %s: %s", src, dest, e)
            return None

        outfile = self.output_dir / (dest.stem + OUTPUT_SUFFIX)
        try:
            stats = convert_file(dest, outfile, self.writer, self.definitions)
        except Exception as e:
            outfile.unlink(missing_ok=True)
            quarantine(dest, self.quarantine_dir, str(e))
            return None

        dest.unlink(missing_ok=True)
        logger.info("Wrote %d rows from %s to %s; file deleted", stats.written, dest.name, outfile)
        return stats


# -----------------------
# Lifecycle
# -----------------------
_observer = None


def start_watcher(handler: LogHandler | None = None):
    """Start watching the incoming directory; converts any files already there."""
    global _observer
    if handler is None:
        definitions = load_definitions()
        writer = TsdataWriter(config.FILE_TYPE, config.PROJECT, config.DESCRIPTION, definitions)
        handler = LogHandler(definitions, writer)

    for d in (handler.incoming_dir, handler.processing_dir, handler.output_dir, handler.quarantine_dir):
        d.mkdir(parents=True, exist_ok=True)

    logger.info(
        "Config: incoming=%s, processing=%s, output=%s, quarantine=%s",
        handler.incoming_dir, handler.processing_dir, handler.output_dir, handler.quarantine_dir,
    )
    logger.info("Watcher: using %s", OBSERVER_NAME)

    _observer = Observer()
    _observer.schedule(handler, str(handler.incoming_dir), recursive=False)
    _observer.start()

    for fpath in sorted(handler.incoming_dir.iterdir()):
        if fpath.is_file():
            handler.process_file(fpath)
    return _observer


def stop_watcher() -> None:
    global _observer
    if _observer is not None:
        _observer.stop()
        _observer.join()
        _observer = None


# -----------------------
# Main
# -----------------------
if __name__ == "__main__":
    logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)
    start_watcher()
    logger.info("Watching %s (convert→delete; quarantine on failure)", config.WATCH_DIR)
    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        pass
    stop_watcher()
