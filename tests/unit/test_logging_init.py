from __future__ import annotations

import logging
from io import StringIO

from keepcard.logging.init import (
    LOGGER_NAME,
    SUMMARY_LEVEL,
    LabeledFormatter,
    get_logger,
    log_summary,
    reset_logging,
    setup_logging,
)


def test_setup_logging_creates_logger_with_labeled_formatter():
    reset_logging()
    logger = setup_logging()

    assert logger.name == LOGGER_NAME
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0].formatter, LabeledFormatter)
    assert logger.propagate is False


def test_setup_logging_is_idempotent():
    reset_logging()
    first = setup_logging()
    second = setup_logging()
    assert first is second
    assert len(second.handlers) == 1
    assert get_logger() is first


def test_logging_labeled_prefixes():
    captured_output = StringIO()
    logger = logging.getLogger("test_keepcard_labels")
    logger.setLevel(logging.INFO)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    logging.addLevelName(SUMMARY_LEVEL, "SUMMARY")
    handler = logging.StreamHandler(captured_output)
    handler.setFormatter(LabeledFormatter())
    logger.addHandler(handler)
    logger.propagate = False

    logger.info("Test info message")
    logger.warning("Test warning message")
    logger.error("Test error message")
    logger.log(SUMMARY_LEVEL, "Test summary message")

    lines = captured_output.getvalue().strip().split("\n")
    assert lines == [
        "INFO Test info message",
        "WARN Test warning message",
        "ERROR Test error message",
        "SUMMARY Test summary message",
    ]


def test_module_loggers_go_through_app_logger(capsys):
    reset_logging()
    setup_logging()
    logging.getLogger("keepcard.services.generator").info("cards=3 pages=1")
    assert "INFO cards=3 pages=1" in capsys.readouterr().out


def test_log_summary_and_debug(capsys):
    reset_logging()
    setup_logging()
    logger = get_logger()
    logger.debug("hidden")
    log_summary("files=1/1")
    setup_logging(logging.DEBUG)
    logger.debug("shown")
    out = capsys.readouterr().out
    assert "hidden" not in out
    assert "SUMMARY files=1/1" in out
    assert "DEBUG shown" in out
    reset_logging()


def test_setup_logging_applies_level_on_existing_logger():
    reset_logging()
    first = setup_logging(logging.DEBUG)
    second = setup_logging(logging.INFO)
    assert first is second
    assert second.level == logging.INFO
    assert all(h.level == logging.INFO for h in second.handlers)
    reset_logging()
