"""
Logging configuration for the user registry.

``setup_logging`` installs console (and optionally file) handlers on the
root logger the first time it runs.  The uvicorn loggers are aligned to
the same level on every call, so ``LOG_LEVEL`` and ``DEBUG`` govern the
server's own messages too, even when uvicorn or a test runner attached
handlers first.
"""

import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def resolve_level(level: str, debug: bool = False) -> int:
    """Translate a level name into a ``logging`` constant.

    ``debug`` wins over ``level``.  Unknown names fall back to ``INFO``.
    """
    if debug:
        return logging.DEBUG
    numeric_level = logging.getLevelName(level.upper())
    return numeric_level if isinstance(numeric_level, int) else logging.INFO


def setup_logging(level: str = "INFO", logfile: Optional[str] = None, debug: bool = False) -> bool:
    """Configure the root logger and the uvicorn loggers.

    Parameters
    ----------
    level : str
        Logging level name, case insensitive.
    logfile : Optional[str]
        Path of a file that receives the same records as the console.
    debug : bool
        Force ``DEBUG`` regardless of ``level``.

    Returns
    -------
    bool
        ``True`` if handlers were installed, ``False`` if the root logger
        was already configured and was left alone.
    """
    numeric_level = resolve_level(level, debug)
    for name in SERVER_LOGGERS:
        logging.getLogger(name).setLevel(numeric_level)

    root = logging.getLogger()
    if root.handlers:
        return False

    root.setLevel(numeric_level)
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    handlers = [logging.StreamHandler()]
    if logfile:
        handlers.append(logging.FileHandler(Path(logfile).resolve(), encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

    logging.getLogger(__name__).debug("Logging configured at %s", logging.getLevelName(numeric_level))
    return True
