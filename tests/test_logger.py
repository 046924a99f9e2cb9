import logging

from sharinggen.common.logger import LOGGER_NAME, get_sharinggen_logger


def test_level_from_env(monkeypatch):
    monkeypatch.setenv("SHARINGGEN_LOG_LEVEL", "debug")
    logger = get_sharinggen_logger()
    assert logger.name == LOGGER_NAME
    assert logger.level == logging.DEBUG


def test_explicit_level_wins(monkeypatch):
    monkeypatch.setenv("SHARINGGEN_LOG_LEVEL", "debug")
    assert get_sharinggen_logger("error").level == logging.ERROR


def test_unknown_level_falls_back_to_warning(monkeypatch):
    monkeypatch.delenv("SHARINGGEN_LOG_LEVEL", raising=False)
    assert get_sharinggen_logger("chatty").level == logging.WARNING


def test_handler_installed_once():
    logger = get_sharinggen_logger()
    count = len(logger.handlers)
    get_sharinggen_logger()
    assert len(logger.handlers) == count
