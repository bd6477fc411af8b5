#!/usr/bin/env python3
"""Shared constants and the language resource loader."""
from __future__ import annotations

import json
import os
import threading
from typing import Any

# ==============================================================================
# I18N RESOURCE LOADER
# ==============================================================================

_RESOURCES: dict[str, dict[str, Any]] = {}  # Cache for loaded languages
_RESOURCE_PATH = os.path.join(os.path.dirname(__file__), "resources")
_LOCK = threading.Lock()  # For thread-safe lazy loading

# Stage names, in pipeline order, as reported by explain()
STAGE_INPUT = "input"
STAGE_NORMALIZE = "normalize"
STAGE_NUMERALS = "numerals"
STAGE_FRACTIONS = "fractions"
STAGE_MAGNITUDES = "magnitudes"
STAGE_FINALIZE = "finalize"

PIPELINE_STAGES = (
    STAGE_NORMALIZE,
    STAGE_NUMERALS,
    STAGE_FRACTIONS,
    STAGE_MAGNITUDES,
    STAGE_FINALIZE,
)


def get_resources(language: str = "en") -> dict[str, Any]:
    """
    Loads and caches language-specific resources from a JSON file.
    This is the single point of entry for all language-dependent constants.

    Args:
        language: Language code (e.g., 'en')

    Returns:
        dict: Loaded language resources

    Raises:
        ValueError: If the language resource is missing or malformed

    """
    if language in _RESOURCES:
        return _RESOURCES[language]

    with _LOCK:
        # Double-check if another thread loaded it while we were waiting
        if language in _RESOURCES:
            return _RESOURCES[language]

        filepath = os.path.join(_RESOURCE_PATH, f"{language}.json")
        try:
            with open(filepath, encoding="utf-8") as f:
                resources: dict[str, Any] = json.load(f)
        except FileNotFoundError:
            raise ValueError(f"Language resource file not found: {language}.json") from None
        except json.JSONDecodeError as e:
            raise ValueError(f"Error decoding JSON from {language}.json") from e

        _RESOURCES[language] = resources
        return resources


def available_languages() -> list[str]:
    """List the language codes that ship a resource file."""
    return sorted(
        name[: -len(".json")] for name in os.listdir(_RESOURCE_PATH) if name.endswith(".json")
    )
