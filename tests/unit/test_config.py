"""
Tests for environment configuration and logging setup.
"""

import logging
from pathlib import Path

import pytest

import sys
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from coherence_core.config import AppConfig, LayoutSettings, DEFAULT_DATA_FILE
from coherence_core.logging_config import setup_logging, parse_level, PACKAGE_LOGGERS


class TestAppConfig:

    def test_defaults(self, monkeypatch):
        for name in ("COHERENCE_DATA_FILE", "COHERENCE_GRADE", "COHERENCE_LLM_PROVIDER",
                     "COHERENCE_LOG_LEVEL", "COHERENCE_LOG_FILE"):
            monkeypatch.delenv(name, raising=False)
        config = AppConfig.from_env()
        assert config.data_file == DEFAULT_DATA_FILE
        assert config.default_grade == "Kindergarten"
        assert config.llm_provider is None
        assert config.log_level == "INFO"

    def test_environment_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("COHERENCE_DATA_FILE", str(tmp_path / "other.json"))
        monkeypatch.setenv("COHERENCE_GRADE", "All")
        monkeypatch.setenv("COHERENCE_LLM_PROVIDER", "claude")
        monkeypatch.setenv("COHERENCE_LOG_LEVEL", "debug")
        config = AppConfig.from_env()
        assert config.data_file == tmp_path / "other.json"
        assert config.default_grade == "All"
        assert config.llm_provider == "claude"
        assert parse_level(config.log_level) == logging.DEBUG

    def test_alpha_decay_reaches_min_in_300_ticks(self):
        settings = LayoutSettings()
        assert (1 - settings.alpha_decay) ** 300 == pytest.approx(settings.alpha_min)


class TestLogging:

    def test_parse_level(self):
        assert parse_level("warning") == logging.WARNING
        assert parse_level(None) == logging.INFO
        assert parse_level("nonsense", default=logging.ERROR) == logging.ERROR

    def test_setup_is_repeatable(self, tmp_path):
        log_file = tmp_path / "app.log"
        setup_logging(logging.DEBUG, str(log_file))
        setup_logging(logging.DEBUG, str(log_file))
        for name in PACKAGE_LOGGERS:
            logger = logging.getLogger(name)
            assert logger.level == logging.DEBUG
            assert len(logger.handlers) == 2
            for handler in logger.handlers:
                handler.close()
            logger.handlers.clear()
        assert log_file.exists()
