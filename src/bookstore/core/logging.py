import logging, sys
from typing import IO, Optional

LOG_FORMAT = '%(asctime)s %(levelname)s %(name)s - %(message)s'
# chatty at DEBUG; only surface their warnings
QUIET_LOGGERS = ("sqlalchemy.engine", "multipart")

def setup_logging(level: str = "INFO", stream: Optional[IO[str]] = None) -> None:
    """Send all records through a single root handler (stdout by default)."""
    lvl = logging.getLevelName(level.upper())
    if not isinstance(lvl, int):
        lvl = logging.INFO
    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(lvl)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
