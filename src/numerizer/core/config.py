#!/usr/bin/env python3
"""Configuration loader that reads from numerizer.json(c)"""
from __future__ import annotations

import copy
import json
import logging
import os
import re
from pathlib import Path
from typing import Any

from ..exceptions import ConfigurationError

CONFIG_ENV_VAR = "NUMERIZER_CONFIG"
CONFIG_FILENAMES = ("numerizer.jsonc", "numerizer.json")

DEFAULT_CONFIG: dict[str, Any] = {
    "numerizer": {
        "locale": "en",
        "numbering_system": "latn",
        "precision": 3,
    },
    "logging": {
        "level": "WARNING",
        "console": True,
        "file": False,
        "directory": "logs",
    },
}


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class ConfigLoader:
    """Load configuration from numerizer.json, falling back to built-in defaults"""

    def __init__(self, config_path: str | Path | None = None) -> None:
        if config_path is None:
            config_path = self._find_config_file()

        self.config_file = str(config_path) if config_path is not None else None

        user_config: dict[str, Any] = {}
        if config_path is not None:
            user_config = self._read_config_file(Path(config_path))

        self._config = _deep_merge(DEFAULT_CONFIG, user_config)
        self.project_dir = str(Path(config_path).parent) if config_path is not None else str(Path.cwd())

    def _find_config_file(self) -> Path | None:
        """Find config file in multiple locations"""
        # Method 1: explicit environment override
        env_path = os.environ.get(CONFIG_ENV_VAR)
        if env_path:
            return Path(env_path)

        # Method 2: current working directory
        for filename in CONFIG_FILENAMES:
            config_path = Path.cwd() / filename
            if config_path.exists():
                return config_path

        # Method 3: built-in defaults only
        return None

    @staticmethod
    def _read_config_file(config_path: Path) -> dict[str, Any]:
        try:
            with open(config_path, encoding="utf-8") as f:
                content = f.read()
        except OSError as e:
            raise ConfigurationError(f"Cannot read config file {config_path}: {e}") from e

        # Remove single-line comments (// ...) for JSONC support
        content = re.sub(r"^\s*//.*$", "", content, flags=re.MULTILINE)

        try:
            loaded = json.loads(content) if content.strip() else {}
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Error decoding JSON from {config_path}: {e}") from e

        if not isinstance(loaded, dict):
            raise ConfigurationError(f"Config file {config_path} must contain a JSON object")
        return loaded

    def get(self, key_path: str, default: Any = None) -> Any:
        """Get a value using dot notation (e.g., 'numerizer.locale')"""
        keys = key_path.split(".")
        value = self._config

        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default

        return value

    def __getitem__(self, key: str) -> Any:
        return self._config[key]

    def set(self, key_path: str, value: Any) -> None:
        """Set a value using dot notation (e.g., 'numerizer.precision')"""
        keys = key_path.split(".")
        target = self._config

        for key in keys[:-1]:
            if key not in target:
                target[key] = {}
            target = target[key]

        target[keys[-1]] = value

    @property
    def locale(self) -> str:
        return str(self.get("numerizer.locale", "en"))

    @property
    def numbering_system(self) -> str:
        return str(self.get("numerizer.numbering_system", "latn"))

    @property
    def precision(self) -> int:
        precision = self.get("numerizer.precision", 3)
        if isinstance(precision, bool) or not isinstance(precision, int) or precision < 0:
            raise ConfigurationError(f"numerizer.precision must be a non-negative integer, got {precision!r}")
        return precision

    @property
    def logs_dir(self) -> Path:
        return Path(self.project_dir) / self.get("logging.directory", "logs")

    def save(self, config_path: str | Path | None = None) -> None:
        """Save the current configuration to a file"""
        target = config_path or self.config_file
        if target is None:
            raise ConfigurationError("No config file to save to")

        with open(target, "w", encoding="utf-8") as f:
            json.dump(self._config, f, indent=2)
        self.config_file = str(target)


# Global instance, created on first use
_config_loader: ConfigLoader | None = None


def get_config() -> ConfigLoader:
    """Get the global config loader instance"""
    global _config_loader
    if _config_loader is None:
        _config_loader = ConfigLoader()
    return _config_loader


def load_config(config_path: str | Path | None = None) -> ConfigLoader:
    """
    Load configuration from config file and make it the global instance.

    Loggers created before the file was loaded pick up its logging level.
    """
    global _config_loader
    _config_loader = ConfigLoader(config_path)
    apply_log_level(_config_loader)
    return _config_loader


def reset_config() -> None:
    """Forget the global config so the next get_config() reloads it."""
    global _config_loader
    _config_loader = None


# ========================= CENTRALIZED LOGGING SETUP =========================


def setup_logging(
    module_name: str,
    log_level: str | None = None,
    include_console: bool | None = None,
    include_file: bool | None = None,
) -> logging.LoggerAdapter:
    """
    Setup standardized logging for numerizer modules.

    Environment variables (LOG_LEVEL, LOG_OUTPUT) take precedence over the
    config file, which takes precedence over the built-in defaults.

    Args:
        module_name: Name of the module (usually __name__)
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        include_console: Whether to log to console
        include_file: Whether to log to file

    Returns:
        Configured logger instance
    """
    from .logging import setup_structured_logging

    config = get_config()
    if log_level is None:
        log_level = os.environ.get("LOG_LEVEL") or config.get("logging.level", "WARNING")
    if include_console is None:
        include_console = config.get("logging.console", True)
    if include_file is None:
        include_file = config.get("logging.file", False)

    output = os.environ.get("LOG_OUTPUT")
    if output is None:
        if include_console and include_file:
            output = "both"
        elif include_file:
            output = "file"
        elif include_console:
            output = "console"
        else:
            output = "none"

    return setup_structured_logging(
        name=module_name,
        log_level=log_level,
        log_output=output,
        logs_dir=config.logs_dir,
    )


def apply_log_level(config: ConfigLoader | None = None) -> None:
    """
    Set the level of every numerizer logger that is already configured.

    LOG_LEVEL still takes precedence over the config file.
    """
    config = config or get_config()
    level_name = (os.environ.get("LOG_LEVEL") or config.get("logging.level", "WARNING")).upper()
    level = getattr(logging, level_name, logging.WARNING)

    for name, logger in list(logging.Logger.manager.loggerDict.items()):
        if name.split(".")[0] == "numerizer" and isinstance(logger, logging.Logger) and logger.handlers:
            logger.setLevel(level)
