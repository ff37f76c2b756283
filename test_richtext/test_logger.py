import logging

from richtext.logger import DEFAULT_LOG_LEVEL, DETAIL, get_logger


def test_logger_defaults_to_warning(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "")
    logger = get_logger()
    assert logger.level == getattr(logging, DEFAULT_LOG_LEVEL)


def test_logger_reads_from_environment(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "INFO")
    logger = get_logger()
    assert logger.level == 20


def test_explicit_level_overrides_environment(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "ERROR")
    logger = get_logger("detail")
    assert logger.level == DETAIL


def test_logger_gets_only_one_handler():
    get_logger()
    logger = get_logger()
    assert len(logger.handlers) == 1


def test_detail_level_is_registered(caplog):
    logger = get_logger("DETAIL")
    with caplog.at_level(DETAIL, logger="richtext"):
        logger.detail("some %s", "detail")
    assert caplog.records[-1].levelname == "DETAIL"
    assert caplog.records[-1].getMessage() == "some detail"
