# seaflog/config.py
import os
from pathlib import Path

# -----------------------
# Event definitions
# -----------------------
# Empty means "use the packaged event_definitions.json"
DEFINITIONS_PATH = os.getenv("SEAFLOG_DEFINITIONS", "")

# -----------------------
# Logging
# -----------------------
LOG_LEVEL = os.getenv("SEAFLOG_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# -----------------------
# TSDATA metadata defaults (API + watcher)
# -----------------------
FILE_TYPE = os.getenv("SEAFLOG_FILETYPE", "SeaFlowLog")
PROJECT = os.getenv("SEAFLOG_PROJECT", "SeaFlow")
DESCRIPTION = os.getenv("SEAFLOG_DESCRIPTION", "SeaFlow V1 instrument log events")

# -----------------------
# Watcher directories
# -----------------------
WATCH_DIR = Path(os.getenv("WATCH_DIR", "/app/incoming"))
PROCESSING_DIR = Path(os.getenv("PROCESSING_DIR", "/app/processing"))
OUTPUT_DIR = Path(os.getenv("OUTPUT_DIR", "/app/output"))
QUARANTINE_DIR = Path(os.getenv("QUARANTINE_DIR", "/app/quarantine"))

# Polling is more reliable on Docker/Windows bind mounts
USE_POLLING = os.getenv("WATCH_USE_POLLING", "1").lower() in ("1", "true", "yes")
FILE_STABLE_WAIT = float(os.getenv("FILE_STABLE_WAIT", "0.5"))
