"""Application logging with file and console handlers."""

import logging
import sys
from datetime import datetime
from pathlib import Path

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_LOG_DATE_FORMAT = "%H:%M:%S"
_LOGGERS_CACHE: dict[str, logging.Logger] = {}


def setup_logger(
    name: str,
    level: int | str = logging.INFO,
    log_dir: Path | None = None,
) -> logging.Logger:
    """Configure and return a logger with file and console handlers.

    Loggers are cached by name; a second call with the same name returns
    the first instance unchanged.

    Args:
        name: Logger name (e.g., 'catalog.movie').
        level: Logging level as int or name (default INFO).
        log_dir: Directory for log files. If None, uses 'logs/'.

    Returns:
        Configured logger instance.
    """
    if name in _LOGGERS_CACHE:
        return _LOGGERS_CACHE[name]

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.handlers.clear()
    logger.propagate = False

    formatter = logging.Formatter(_LOG_FORMAT, _LOG_DATE_FORMAT)
    logger.addHandler(_create_console_handler(formatter, level))

    file_handler = _create_file_handler(name, formatter, level, log_dir)
    if file_handler:
        logger.addHandler(file_handler)

    _LOGGERS_CACHE[name] = logger
    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a logger configured from application settings.

    Args:
        name: Logger name.

    Returns:
        Logger using LOG_LEVEL and the configured logs directory.
    """
    from src.settings import settings

    return setup_logger(
        name,
        level=settings.logging.level,
        log_dir=settings.paths.project_root / settings.logging.log_dir,
    )


def _create_console_handler(
    formatter: logging.Formatter,
    level: int,
) -> logging.StreamHandler:
    """Create console stream handler."""
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def _create_file_handler(
    name: str,
    formatter: logging.Formatter,
    level: int,
    log_dir: Path | None,
) -> logging.FileHandler | None:
    """Create a dated file handler.

    Args:
        name: Logger name for filename.
        formatter: Log formatter.
        level: Logging level.
        log_dir: Directory for log files.

    Returns:
        Configured FileHandler or None when the file cannot be opened.
    """
    try:
        log_path = _get_log_file_path(name, log_dir)
        handler = logging.FileHandler(log_path, encoding="utf-8")
        handler.setLevel(level)
        handler.setFormatter(formatter)
        return handler
    except OSError as e:
        print(f"Warning: Could not create log file: {e}", file=sys.stderr)
        return None


def _get_log_file_path(name: str, log_dir: Path | None) -> Path:
    """Build log file path with date suffix."""
    if log_dir is None:
        log_dir = Path("logs")

    log_dir.mkdir(parents=True, exist_ok=True)

    safe_name = name.replace(".", "_").replace("/", "_")
    date_suffix = datetime.now().strftime("%Y%m%d")
    return log_dir / f"{safe_name}_{date_suffix}.log"
