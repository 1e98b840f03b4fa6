"""Per-module log levels and a single console handler for spectral_pitch."""

import logging
import sys
from typing import Optional, TextIO

PACKAGE = "spectral_pitch"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Every module logger must be listed here; get_logger refuses unknown names.
# DEBUG on the signal stages logs once per block.
MODULE_LOG_LEVELS = {
    PACKAGE: logging.INFO,
    f"{PACKAGE}.core.config": logging.INFO,
    f"{PACKAGE}.core.events": logging.INFO,
    f"{PACKAGE}.core.factory": logging.INFO,
    f"{PACKAGE}.detection.window": logging.WARNING,
    f"{PACKAGE}.detection.fft": logging.WARNING,
    f"{PACKAGE}.detection.peak": logging.INFO,
    f"{PACKAGE}.detection.note_table": logging.INFO,
    f"{PACKAGE}.detection.pipeline": logging.INFO,
    f"{PACKAGE}.services.block_sources": logging.INFO,
    f"{PACKAGE}.services.pitch_detection_service": logging.INFO,
    f"{PACKAGE}.cli.main": logging.INFO,
    "soundfile": logging.ERROR,
}

_handler: Optional[logging.StreamHandler] = None


def _console_handler(stream: Optional[TextIO] = None) -> logging.StreamHandler:
    global _handler
    # Resolve sys.stdout at call time; test runners swap it out
    stream = stream or sys.stdout
    if _handler is None:
        _handler = logging.StreamHandler(stream)
        _handler.setFormatter(logging.Formatter(LOG_FORMAT))
    else:
        _handler.setStream(stream)
    return _handler


def _attach(logger: logging.Logger, level: int) -> None:
    logger.setLevel(level)
    if _handler is not None and _handler not in logger.handlers:
        logger.addHandler(_handler)
    logger.propagate = False


def setup_logging(level: Optional[str] = None, stream: Optional[TextIO] = None) -> None:
    """Route all configured loggers to one console handler.

    Args:
        level: Level name (e.g. "DEBUG") applied to every spectral_pitch
            logger instead of its default. Third-party loggers keep theirs.
        stream: Output stream, stdout by default
    """
    _console_handler(stream)

    override = logging.getLevelName(level.upper()) if level else None
    valid = isinstance(override, int)

    for name, default in MODULE_LOG_LEVELS.items():
        own = name == PACKAGE or name.startswith(PACKAGE + ".")
        _attach(logging.getLogger(name), override if own and valid else default)

    if level and not valid:
        logging.getLogger(PACKAGE).error(f"Invalid log level: {level}")


def get_logger(name: str) -> logging.Logger:
    """Return the logger for ``name``, which must be listed in MODULE_LOG_LEVELS.

    Raises:
        ValueError: If the name is not listed
    """
    if name not in MODULE_LOG_LEVELS:
        raise ValueError(f"Logger '{name}' is not listed in MODULE_LOG_LEVELS")

    logger = logging.getLogger(name)
    # Keep a level already set by setup_logging
    _attach(logger, logger.level or MODULE_LOG_LEVELS[name])
    return logger
