"""
Logging setup for the signedgen CLI.

Library modules only ever do ``logger = logging.getLogger(__name__)``;
handlers are attached here, once, by ``signedgen.main``.  Only the
``signedgen`` logger tree is configured, so a program that imports
signedgen as a library keeps its own root configuration.

Levels are resolved in precedence order:
    --debug / --verbose / --quiet  >  SIGNEDGEN_LOG_LEVEL  >  WARNING

A log file (SIGNEDGEN_LOG_FILE) may run at its own level
(SIGNEDGEN_LOG_FILE_LEVEL), e.g. DEBUG to a file while the console
stays at WARNING.
"""

from __future__ import annotations

import logging
import sys

LOGGER_NAME = "signedgen"

# ── Formats ─────────────────────────────────────────────────────

# Most verbose first: the first row whose threshold covers the level wins.
_CONSOLE_FORMATS: tuple[tuple[int, str, str | None], ...] = (
    (logging.DEBUG, "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d  %(message)s", "%H:%M:%S"),
    (logging.INFO, "%(asctime)s [%(name)s] %(message)s", "%H:%M:%S"),
    (logging.CRITICAL, "%(levelname)s: %(message)s", None),
)

_FMT_FILE = "%(asctime)s %(levelname)-8s %(name)s:%(lineno)d  %(message)s"
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"


def parse_level(level: str | int | None) -> int:
    """Level name ("debug", "INFO") or number ("10", 10) → numeric level.

    Anything unrecognised falls back to WARNING.
    """
    if isinstance(level, int):
        return level
    if not level:
        return logging.WARNING
    if level.strip().isdigit():
        return int(level)
    numeric = logging.getLevelName(level.strip().upper())
    return numeric if isinstance(numeric, int) else logging.WARNING


def console_formatter(level: int) -> logging.Formatter:
    for threshold, fmt, datefmt in _CONSOLE_FORMATS:
        if level <= threshold:
            return logging.Formatter(fmt, datefmt=datefmt)
    return logging.Formatter(_CONSOLE_FORMATS[-1][1])


def setup_logging(
    level: str | int = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> logging.Logger:
    """Attach console (stderr) and optional file handlers to ``signedgen``.

    Calling it again replaces the handlers of the previous call.

    Returns:
        The configured ``signedgen`` logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_level = parse_level(level)
    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(console_formatter(console_level))
    logger.addHandler(console)

    lowest = console_level
    if log_file:
        file_level = parse_level(log_file_level) if log_file_level else console_level
        lowest = min(lowest, file_level)
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(_FMT_FILE, datefmt=_DATEFMT_FILE))
        logger.addHandler(fh)

    logger.setLevel(lowest)
    logger.propagate = False
    return logger
