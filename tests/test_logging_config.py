import logging

import pytest

from coastercad.logging_config import setup_logging


@pytest.fixture(autouse=True)
def _reset_package_logger():
    yield
    logger = logging.getLogger("coastercad")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


def test_setup_logging_replaces_handlers():
    setup_logging(logging.INFO)
    logger = setup_logging(logging.DEBUG)
    assert logger.name == "coastercad"
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1


def test_setup_logging_with_file(tmp_path):
    log_file = tmp_path / "run.log"
    logger = setup_logging(logging.INFO, str(log_file))
    assert len(logger.handlers) == 2

    logging.getLogger("coastercad.designer").info("hello from a child logger")
    for handler in logger.handlers:
        handler.flush()
    assert "hello from a child logger" in log_file.read_text(encoding="utf-8")

    logger = setup_logging(logging.WARNING)
    assert len(logger.handlers) == 1
