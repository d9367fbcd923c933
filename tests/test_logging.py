import logging

from pclocator.core.logging import get_logger

def test_logger_level_from_env(monkeypatch):
    monkeypatch.setenv("PCLOCATOR_LOG_LEVEL", "debug")
    logger = get_logger("pclocator.test.level")
    assert logger.level == logging.DEBUG
    assert not logger.propagate

def test_unknown_level_falls_back_to_info(monkeypatch):
    monkeypatch.setenv("PCLOCATOR_LOG_LEVEL", "chatty")
    assert get_logger("pclocator.test.unknown").level == logging.INFO

def test_handler_attached_once():
    get_logger("pclocator.test.once")
    logger = get_logger("pclocator.test.once")
    assert len(logger.handlers) == 1
