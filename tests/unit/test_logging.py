"""
Tests for the logging module.
"""

import json

import pytest
import structlog
from structlog.testing import capture_logs


class TestConfigureLogging:
    """Tests for configure_logging function."""

    def test_configure_development_mode(self):
        """Development mode uses the console renderer."""
        from core.logging import configure_logging

        # Should not raise
        configure_logging(json_logs=False, log_level="DEBUG")

    def test_configure_production_mode(self):
        """Production mode uses the JSON renderer."""
        from core.logging import configure_logging

        # Should not raise
        configure_logging(json_logs=True, log_level="INFO")

    def test_configure_log_level(self):
        """Test that log level is correctly set."""
        import logging
        from core.logging import configure_logging

        configure_logging(log_level="WARNING")

        root_logger = logging.getLogger()
        assert root_logger.level == logging.WARNING

    def test_unknown_level_falls_back_to_info(self):
        import logging
        from core.logging import configure_logging

        configure_logging(log_level="chatty")

        assert logging.getLogger().level == logging.INFO


class TestConfigureFromSettings:
    """Tests for configure_logging_from_settings."""

    def test_debug_forces_debug_level(self):
        import logging
        from config.settings import get_settings_for_testing
        from core.logging import configure_logging_from_settings

        configure_logging_from_settings(get_settings_for_testing(debug=True, log_level="ERROR"))

        assert logging.getLogger().level == logging.DEBUG

    def test_log_level_used_without_debug(self):
        import logging
        from config.settings import get_settings_for_testing
        from core.logging import configure_logging_from_settings

        configure_logging_from_settings(get_settings_for_testing(debug=False, log_level="warning"))

        assert logging.getLogger().level == logging.WARNING

    def test_production_renders_json(self, capsys):
        from config.settings import get_settings_for_testing
        from core.logging import configure_logging_from_settings, get_logger

        configure_logging_from_settings(get_settings_for_testing(environment="production", debug=False))
        get_logger("settings_json_test").info("engine_ready", rules=8)

        lines = [line for line in capsys.readouterr().out.splitlines() if line]
        if lines:
            assert json.loads(lines[-1])["event"] == "engine_ready"

    def test_engine_singleton_configures_logging(self, monkeypatch):
        import logging
        from recommendation import engine as engine_module

        monkeypatch.setenv("LOG_LEVEL", "ERROR")
        monkeypatch.setenv("DEBUG", "false")
        monkeypatch.setattr(engine_module, "_engine", None)
        engine_module.get_settings.cache_clear()
        try:
            engine_module.get_engine()
        finally:
            engine_module.get_settings.cache_clear()

        assert logging.getLogger().level == logging.ERROR


class TestGetLogger:
    """Tests for get_logger function."""

    def test_get_named_logger(self):
        from core.logging import get_logger

        logger = get_logger("recommendation.matcher")

        assert logger is not None
        assert hasattr(logger, "info")
        assert hasattr(logger, "debug")
        assert hasattr(logger, "warning")

    def test_logger_can_log(self):
        """Test that logger can actually log messages."""
        from core.logging import configure_logging, get_logger

        configure_logging(json_logs=False, log_level="DEBUG")
        logger = get_logger("test")

        # Should not raise
        logger.info("comfort_computed", activity="running", comfort_c=11.0)
        logger.debug("vote_filled_from_defaults", categories=["gloves"])
        logger.warning("safety_hazard", hazard="dangerous_cold")


class TestContextBinding:
    """Tests for context binding functions."""

    def test_bind_context(self):
        from core.logging import bind_context, clear_context

        clear_context()
        bind_context(session_id="abc", activity="running")

        ctx = structlog.contextvars.get_contextvars()
        assert ctx.get("session_id") == "abc"
        assert ctx.get("activity") == "running"

        clear_context()

    def test_clear_context(self):
        from core.logging import bind_context, clear_context

        bind_context(session_id="abc")
        clear_context()

        ctx = structlog.contextvars.get_contextvars()
        assert "session_id" not in ctx

    def test_unbind_specific_context(self):
        from core.logging import bind_context, clear_context, unbind_context

        clear_context()
        bind_context(session_id="abc", activity="running", batch="import-1")

        unbind_context("batch")

        ctx = structlog.contextvars.get_contextvars()
        assert ctx.get("session_id") == "abc"
        assert "batch" not in ctx

        clear_context()


class TestLoggerMixin:
    """Tests for LoggerMixin class."""

    def test_mixin_provides_logger(self):
        from core.logging import LoggerMixin

        class Scorer(LoggerMixin):
            pass

        assert Scorer().logger is not None

    def test_mixin_events_captured(self):
        from core.logging import LoggerMixin

        class Scorer(LoggerMixin):
            def run(self):
                self.logger.info("scored", count=3)

        with capture_logs() as logs:
            Scorer().run()

        assert logs == [{"event": "scored", "count": 3, "log_level": "info"}]

    def test_engine_logs_recommendation(self, engine):
        from recommendation.context import WeatherObservation

        with capture_logs() as logs:
            engine.recommend(WeatherObservation(temperature_c=10.0), [], "running", "average")

        built = [e for e in logs if e["event"] == "recommendation_built"]
        assert len(built) == 1
        assert built[0]["source"] == "fallback_defaults"
        assert built[0]["matching_runs"] == 0


class TestJSONOutput:
    """Tests for JSON logging output."""

    def test_json_output_is_valid_json(self, capsys):
        from core.logging import configure_logging, get_logger

        configure_logging(json_logs=True, log_level="INFO")
        logger = get_logger("json_test")

        logger.info("Test message", key="value")

        captured = capsys.readouterr()

        if captured.out:
            for line in captured.out.strip().split("\n"):
                if line:
                    data = json.loads(line)
                    assert "event" in data


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
