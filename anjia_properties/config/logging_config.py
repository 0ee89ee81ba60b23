# anjia_properties/config/logging_config.py

"""Per-run logging for the property data service.

Every process start (API server or CLI run) writes to its own file in
``logs/`` named after the launch time, e.g. ``logs/run_20261019_101500.log``.
All ``anjia.*`` loggers share that file, so one run's adapter failures,
cache activity and fallbacks can be read top to bottom in one place.

The console only shows warnings and above, which keeps CLI JSON output on
stdout clean.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

from anjia_properties.config.settings import Settings

ROOT_LOGGER_NAME = "anjia"

_FILE_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)s | "
    "%(module)s:%(funcName)s:%(lineno)d | %(message)s"
)
_CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _log_path(logs_dir: Path) -> Path:
    """Return the file path for a run starting now."""
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return logs_dir / f"run_{stamp}.log"


def setup_logging(console_level: int = logging.WARNING) -> Path:
    """Attach the per-run file and console handlers to the ``anjia`` logger.

    Args:
        console_level: Threshold for the stderr handler.

    Returns:
        The :class:`~pathlib.Path` of this run's log file.  When handlers
        are already attached (repeated calls, tests) the existing file is
        reported and nothing new is added.
    """
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(logging.DEBUG)

    for handler in root_logger.handlers:
        if isinstance(handler, logging.FileHandler):
            return Path(handler.baseFilename)

    logs_dir: Path = Settings.LOGS_DIR
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_file = _log_path(logs_dir)

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(_FILE_FORMAT, datefmt=_DATE_FORMAT)
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(
        logging.Formatter(_CONSOLE_FORMAT, datefmt=_DATE_FORMAT)
    )

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)
    root_logger.info("Logging initialised, writing to %s", log_file)

    return log_file
