#!/usr/bin/env python3
"""Tests for the JSONC configuration loader."""

import json
import logging

import pytest

from numerizer.core.config import (
    ConfigLoader,
    get_config,
    load_config,
    setup_logging,
)
from numerizer.core.logging import ContextLogger
from numerizer.exceptions import ConfigurationError


class TestConfigLoader:
    """Test config file discovery, parsing and access."""

    def test_builtin_defaults(self):
        config = ConfigLoader()

        assert config.config_file is None
        assert config.locale == "en"
        assert config.numbering_system == "latn"
        assert config.precision == 3
        assert config.get("logging.level") == "WARNING"

    def test_jsonc_in_working_directory(self, tmp_path):
        (tmp_path / "numerizer.jsonc").write_text(
            "// Project settings\n"
            "{\n"
            "  // More digits for mixed numbers\n"
            '  "numerizer": {"precision": 5}\n'
            "}\n"
        )

        config = ConfigLoader()
        assert config.precision == 5
        assert config.locale == "en"  # defaults are merged in
        assert config.config_file.endswith("numerizer.jsonc")

    def test_environment_override(self, tmp_path, monkeypatch):
        path = tmp_path / "custom.json"
        path.write_text(json.dumps({"numerizer": {"locale": "EN"}}))
        monkeypatch.setenv("NUMERIZER_CONFIG", str(path))

        assert ConfigLoader().locale == "EN"

    def test_explicit_path_wins(self, tmp_path):
        (tmp_path / "numerizer.json").write_text(json.dumps({"numerizer": {"precision": 1}}))
        explicit = tmp_path / "explicit.json"
        explicit.write_text(json.dumps({"numerizer": {"precision": 2}}))

        assert ConfigLoader(explicit).precision == 2

    @pytest.mark.parametrize("content", ["{not json", "[1, 2, 3]"])
    def test_malformed_files(self, tmp_path, content):
        path = tmp_path / "numerizer.json"
        path.write_text(content)

        with pytest.raises(ConfigurationError):
            ConfigLoader(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            ConfigLoader(tmp_path / "missing.json")

    @pytest.mark.parametrize("precision", [-1, "3", 1.5, True])
    def test_invalid_precision(self, precision):
        config = ConfigLoader()
        config.set("numerizer.precision", precision)

        with pytest.raises(ConfigurationError):
            config.precision

    def test_dotted_access(self):
        config = ConfigLoader()
        config.set("numerizer.extra.depth", 2)

        assert config.get("numerizer.extra.depth") == 2
        assert config.get("numerizer.unknown", "fallback") == "fallback"
        assert config["numerizer"]["locale"] == "en"

    def test_save_and_reload(self, tmp_path):
        config = ConfigLoader()
        config.set("numerizer.precision", 4)
        target = tmp_path / "saved.json"
        config.save(target)

        assert ConfigLoader(target).precision == 4
        assert config.config_file == str(target)

    def test_save_without_target(self):
        with pytest.raises(ConfigurationError):
            ConfigLoader().save()

    def test_logs_dir_is_relative_to_config(self, tmp_path):
        path = tmp_path / "numerizer.json"
        path.write_text(json.dumps({"logging": {"directory": "custom-logs"}}))

        assert ConfigLoader(path).logs_dir == tmp_path / "custom-logs"


class TestGlobalConfig:
    """Test the shared config instance."""

    def test_get_config_is_a_singleton(self):
        assert get_config() is get_config()

    def test_load_config_replaces_the_global(self, tmp_path):
        path = tmp_path / "numerizer.json"
        path.write_text(json.dumps({"numerizer": {"precision": 7}}))

        loaded = load_config(path)
        assert get_config() is loaded
        assert get_config().precision == 7


class TestSetupLogging:
    """Test logger creation from config and environment."""

    def test_returns_context_logger(self):
        logger = setup_logging("numerizer.tests.default")
        assert isinstance(logger, ContextLogger)
        assert logger.logger.level == logging.WARNING

    def test_environment_level_beats_config(self, tmp_path, monkeypatch):
        path = tmp_path / "numerizer.json"
        path.write_text(json.dumps({"logging": {"level": "ERROR"}}))
        load_config(path)
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")

        logger = setup_logging("numerizer.tests.env_level")
        assert logger.logger.level == logging.DEBUG

    def test_config_level(self, tmp_path):
        path = tmp_path / "numerizer.json"
        path.write_text(json.dumps({"logging": {"level": "ERROR"}}))
        load_config(path)

        logger = setup_logging("numerizer.tests.config_level")
        assert logger.logger.level == logging.ERROR

    def test_loading_a_config_updates_existing_loggers(self, tmp_path):
        logger = setup_logging("numerizer.tests.existing")
        assert logger.logger.level == logging.WARNING

        path = tmp_path / "numerizer.json"
        path.write_text(json.dumps({"logging": {"level": "DEBUG"}}))
        load_config(path)

        assert logger.logger.level == logging.DEBUG
        assert logging.getLogger("numerizer.numerizer").level == logging.DEBUG

    def test_environment_level_survives_a_config_load(self, tmp_path, monkeypatch):
        logger = setup_logging("numerizer.tests.existing_env")
        monkeypatch.setenv("LOG_LEVEL", "ERROR")

        path = tmp_path / "numerizer.json"
        path.write_text(json.dumps({"logging": {"level": "DEBUG"}}))
        load_config(path)

        assert logger.logger.level == logging.ERROR

    def test_disabled_outputs_add_no_handlers(self, tmp_path):
        path = tmp_path / "numerizer.json"
        path.write_text(json.dumps({"logging": {"console": False, "file": False}}))
        load_config(path)

        logger = setup_logging("numerizer.tests.quiet")
        assert logger.logger.handlers == []
