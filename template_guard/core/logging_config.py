"""File and console logging for the API server and scripts.

Log files, all under ``logs/`` unless another directory is given:
- info.log: everything at INFO and above
- error.log: ERROR and above only
- consistency.log: impact previews and integrity scans, for auditing who
  was warned about which template change
"""

import logging
import sys
from pathlib import Path

from template_guard.core.config import Settings, get_settings

CONSISTENCY_LOGGER = "template_guard.strategies.consistency"

# Chatty third-party loggers kept at WARNING unless running in DEBUG.
NOISY_LOGGERS = ("sqlalchemy.engine", "aiosqlite", "uvicorn.access")

_DETAILED = logging.Formatter(
    fmt="%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
_SIMPLE = logging.Formatter(
    fmt="%(asctime)s | %(levelname)-8s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)


def _file_handler(path: Path, level: int) -> logging.FileHandler:
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(_DETAILED)
    return handler


def setup_logging(settings: Settings | None = None, log_dir: Path | None = None) -> logging.Logger:
    """Install file and console handlers on the root logger.

    Safe to call more than once; existing root handlers are replaced.

    Args:
        settings: Optional settings. If None, uses global settings.
        log_dir: Directory for the log files. Defaults to ``logs/`` in the
            project root.

    Returns:
        The configured root logger.
    """
    settings = settings or get_settings()
    level = logging.getLevelName(settings.log_level)
    if not isinstance(level, int):
        level = logging.INFO

    log_dir = log_dir or Path(__file__).resolve().parents[2] / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    root_logger.addHandler(_file_handler(log_dir / "info.log", max(level, logging.INFO)))
    root_logger.addHandler(_file_handler(log_dir / "error.log", logging.ERROR))

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(_SIMPLE)
    root_logger.addHandler(console_handler)

    consistency_logger = logging.getLogger(CONSISTENCY_LOGGER)
    consistency_logger.handlers.clear()
    consistency_logger.addHandler(_file_handler(log_dir / "consistency.log", logging.INFO))

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if level == logging.DEBUG else logging.WARNING)

    root_logger.info(f"Logging to {log_dir} at level {logging.getLevelName(level)}")
    return root_logger
