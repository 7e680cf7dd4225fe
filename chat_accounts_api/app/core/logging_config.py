"""
Log output for the chat accounts service.

Records from the API, the services and the MongoDB driver all go
through the root logger.  ``setup_logging`` is called by ``create_app``
and by the maintenance scripts; whichever caller comes first decides
where records end up, later calls change nothing.

pymongo reports heartbeats, pool checkouts and server selection at
DEBUG, which buries request logs, so its loggers stay at WARNING
unless the service itself is being debugged.
"""

import logging
from pathlib import Path
from typing import List, Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_DRIVER_LOGGERS = ("pymongo", "pymongo.command", "pymongo.serverSelection", "pymongo.connection")


def _build_handlers(logfile: Optional[str]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if logfile:
        handlers.append(logging.FileHandler(Path(logfile).resolve(), encoding="utf-8"))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Send service logs to stderr and, if ``logfile`` is set, to a file.

    Parameters
    ----------
    level : str
        Level name such as ``"INFO"`` or ``"debug"``.  Names the
        ``logging`` module does not know are treated as ``INFO``.
    logfile : Optional[str]
        File that receives a copy of every record.  ``None`` or an
        empty string (the ``LOG_FILE`` default) means stderr only.
    """
    root = logging.getLogger()
    if root.handlers:
        # Already configured by uvicorn or an earlier create_app().
        return

    numeric_level = getattr(logging, level.upper(), logging.INFO)
    root.setLevel(numeric_level)
    for handler in _build_handlers(logfile):
        root.addHandler(handler)

    if numeric_level > logging.DEBUG:
        for name in _DRIVER_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
