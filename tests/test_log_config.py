"""
Unit Tests for Logging Setup
"""

import io
import logging
import re
from datetime import datetime

from winmix.utils.log_config import AppTimeFormatter, configure_logging


def test_formatter_renders_millisecond_timestamp():
    record = logging.LogRecord("winmix", logging.INFO, __file__, 1, "prediction served", None, None)

    formatted = AppTimeFormatter("%(asctime)s %(message)s").format(record)

    assert re.fullmatch(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2},\d{3} prediction served", formatted)


def test_formatter_uses_record_creation_time():
    record = logging.LogRecord("winmix", logging.INFO, __file__, 1, "late flush", None, None)
    # 2024-01-01 00:00:00.250 UTC
    record.created = 1704067200.25
    record.msecs = 250.0
    formatter = AppTimeFormatter("%(asctime)s")

    stamped = datetime.strptime(formatter.formatTime(record, "%Y-%m-%d %H:%M:%S%z"), "%Y-%m-%d %H:%M:%S%z")

    assert stamped.timestamp() == 1704067200
    assert formatter.format(record).endswith(",250")


def test_existing_handlers_are_kept_without_force():
    root = logging.getLogger()
    previous = list(root.handlers)
    marker = logging.NullHandler()
    root.addHandler(marker)
    try:
        configure_logging(io.StringIO())
        assert marker in root.handlers
    finally:
        root.handlers = previous


def test_force_installs_single_handler():
    root = logging.getLogger()
    previous = list(root.handlers)
    stream = io.StringIO()
    try:
        configure_logging(stream, force=True)
        logging.getLogger("winmix.test").warning("cache unavailable")

        assert len(root.handlers) == 1
        assert "cache unavailable" in stream.getvalue()
    finally:
        root.handlers = previous
