import logging

from minion_tracker.core.logging_config import get_logger, get_logging_config


def test_module_names_map_into_minion_hierarchy():
    assert get_logger("minion_tracker.services.minion_store").name == "minion.store"
    assert get_logger("minion_tracker.api.minions").name == "minion.api"
    assert get_logger("minion_tracker.core.database").name == "minion.database"
    assert get_logger("minion_tracker.core.metrics").name == "minion.core"
    assert get_logger("minion_tracker.core.config").name == "minion.core"
    assert get_logger("minion_tracker.main").name == "minion.main"
    assert get_logger("minion.custom").name == "minion.custom"
    assert get_logger("other").name == "minion.other"


def test_production_uses_json_formatter(monkeypatch):
    monkeypatch.setenv("ENVIRONMENT", "production")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    config = get_logging_config()

    assert config["formatters"]["default"]["class"] == "pythonjsonlogger.json.JsonFormatter"
    assert config["loggers"]["minion"]["level"] == "DEBUG"


def test_development_uses_plain_formatter(monkeypatch):
    monkeypatch.delenv("ENVIRONMENT", raising=False)

    config = get_logging_config()

    assert config["formatters"]["default"]["class"] == "logging.Formatter"
    assert isinstance(get_logger("minion_tracker.api.minions"), logging.Logger)


def test_core_modules_have_their_own_logger():
    config = get_logging_config()

    assert "minion.core" in config["loggers"]
    assert get_logger("minion_tracker.core.metrics").name != get_logger("minion_tracker.core.database").name
