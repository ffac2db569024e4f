# tests/test_config.py

import logging

from rich.logging import RichHandler

from odyssey.core.config import DEFAULT_MODEL, Settings, configure_logging, load_settings


def test_defaults_without_key():
    s = load_settings({})
    assert s.api_key == ""
    assert s.model == DEFAULT_MODEL
    assert s.log_level == "INFO"


def test_gemini_key_wins_over_generic_key():
    assert load_settings({"GEMINI_API_KEY": "g", "API_KEY": "a"}).api_key == "g"
    assert load_settings({"API_KEY": " a "}).api_key == "a"


def test_overrides():
    s = load_settings({"GEMINI_MODEL": "gemini-x", "LOG_LEVEL": "debug"})
    assert (s.model, s.log_level) == ("gemini-x", "DEBUG")


def test_temperature_cannot_be_set_from_environment():
    s = load_settings({"GEMINI_TEMPERATURE": "1.5"})
    assert s == Settings()
    assert not hasattr(s, "temperature")


def test_configure_logging_attaches_one_rich_handler():
    configure_logging("debug")
    configure_logging("debug")
    logger = logging.getLogger("odyssey")
    assert logger.level == logging.DEBUG
    assert sum(isinstance(h, RichHandler) for h in logger.handlers) == 1
