# File: tests/test_logger.py
import logging
from logging.handlers import RotatingFileHandler

from site_crawler.logger import LOGGER_NAME, configure, init_logging


def test_repeated_configure_keeps_one_handler_set():
    configure(level="INFO")
    lg = configure(level="DEBUG")

    assert lg is logging.getLogger(LOGGER_NAME)
    assert lg.level == logging.DEBUG
    assert len(lg.handlers) == 1
    assert lg.propagate is False


def test_log_file_adds_rotating_handler(tmp_path):
    log_file = tmp_path / "crawl.log"
    lg = init_logging("WARNING", log_file, "%(levelname)s %(message)s")

    rotating = [h for h in lg.handlers if isinstance(h, RotatingFileHandler)]
    assert len(rotating) == 1

    lg.warning("fetch failed")
    rotating[0].flush()
    assert "WARNING fetch failed" in log_file.read_text(encoding="utf-8")

    # switching back to stdout only closes the file handler
    lg = configure(level="INFO")
    assert not any(isinstance(h, RotatingFileHandler) for h in lg.handlers)
    assert rotating[0].stream is None
