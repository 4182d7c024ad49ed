"""
Logging for the formula finder service.

Only the ``formula_finder_api`` package logger is configured; records
from uvicorn, FastAPI and the test runner keep their own handlers.
Modules log through ``logging.getLogger(__name__)`` and inherit the
handlers installed here.
"""

import logging
from pathlib import Path
from typing import Optional

PACKAGE_LOGGER = "formula_finder_api"

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

# Handlers installed by setup_logging carry one of these names so a later
# call can find and replace them without touching foreign handlers.
_CONSOLE_HANDLER = "formula_finder_api.console"
_FILE_HANDLER = "formula_finder_api.file"


def _owned_handlers(logger: logging.Logger) -> list:
    return [h for h in logger.handlers if h.get_name() in (_CONSOLE_HANDLER, _FILE_HANDLER)]


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> logging.Logger:
    """Install console and optional file handlers on the package logger.

    Calling it again (every ``create_app`` does) swaps the previously
    installed handlers for new ones, so the last level and log file win.
    Unknown level names fall back to ``INFO``.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in _owned_handlers(logger):
        logger.removeHandler(handler)
        handler.close()

    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console = logging.StreamHandler()
    console.set_name(_CONSOLE_HANDLER)
    console.setFormatter(formatter)
    logger.addHandler(console)

    if logfile:
        path = Path(logfile).expanduser().resolve()
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.set_name(_FILE_HANDLER)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
