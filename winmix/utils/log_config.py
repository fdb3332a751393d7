"""
Logging setup shared by the API and the command line tool.

Timestamps are rendered in the application timezone rather than the
host's local time.
"""
import logging
import sys
from datetime import datetime
from typing import IO, Optional

from winmix.config import LOG_FORMAT, LOG_LEVEL
from winmix.utils.time_utils import APP_TZ


class AppTimeFormatter(logging.Formatter):
    def formatTime(self, record, datefmt=None):
        created = datetime.fromtimestamp(record.created, APP_TZ)
        if datefmt:
            return created.strftime(datefmt)
        return f"{created:%Y-%m-%d %H:%M:%S},{int(record.msecs):03d}"


def configure_logging(stream: Optional[IO[str]] = None, force: bool = False) -> None:
    """
    Install a single stderr handler on the root logger.

    Without ``force`` an already configured root logger keeps its handlers
    and only has its level adjusted.
    """
    root = logging.getLogger()
    root.setLevel(LOG_LEVEL)
    if root.handlers and not force:
        return

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(AppTimeFormatter(LOG_FORMAT))
    root.handlers = [handler]
