# utils/logging_config.py
"""
Root logger setup for the analysis tools.

numpy and pint report numeric trouble through ``warnings`` (divide-by-zero in
an axis, unit redefinitions); those are routed into the same handlers so a
sweep log shows them next to the point that caused them.
"""
import logging
from typing import Optional, Union

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# Third-party loggers kept at WARNING even when the tool runs with --verbose.
QUIET_LOGGERS = ('pint',)


def _resolve_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown logging level: {level}")
    return resolved


def setup_logging(level: Union[int, str] = logging.INFO, log_file: Optional[str] = None) -> None:
    """
    Configure the root logger with a console handler and an optional log file.

    Calling it again replaces the previous handlers.

    Args:
        level: Numeric level or its name ("debug", "INFO").
        log_file: Optional path; records are appended there as well.
    """
    level = _resolve_level(level)
    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

    logging.captureWarnings(True)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def get_logger(name: str) -> logging.Logger:
    """Module logger; the level comes from the root configuration."""
    return logging.getLogger(name)
