"""
Configuration loader for code_review_helper.

The tool reads an optional JSON configuration file named
``.codereview.json`` located in the repository root. When the file is
absent the built-in defaults are used. A present but malformed file,
unknown keys, or values of the wrong type raise :class:`ConfigError`.

Example::

  {
    "exclude_files": ["dist", "bun.lock", "poetry.lock"],
    "reviews_dir": "reviews",
    "history_count": 10
  }
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict

from code_review_helper.diff.diff_collector import DEFAULT_EXCLUDED_FILES
from code_review_helper.history.history_reader import DEFAULT_MAX_COUNT


logger = logging.getLogger(__name__)
# Attach a null handler to avoid "No handler" warnings or logging errors in
# environments where the root logger may be closed. When the CLI configures
# logging, it overrides this behaviour.
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


CONFIG_FILE_NAME = ".codereview.json"


class ConfigError(Exception):
    """Raised when the configuration file is malformed or invalid."""

    pass


def default_config() -> Dict[str, Any]:
    """Return a fresh copy of the built-in configuration."""
    return {
        "exclude_files": list(DEFAULT_EXCLUDED_FILES),
        "reviews_dir": "reviews",
        "history_count": DEFAULT_MAX_COUNT,
    }


def load_config(repo_root: Path) -> Dict[str, Any]:
    """Load the configuration for the repository at ``repo_root``.

    Args:
        repo_root: Root directory of the repository under review.

    Returns:
        A dictionary with the keys:
        - exclude_files (List[str]): Paths skipped when collecting diffs
        - reviews_dir (str): Directory for review artifacts, relative to
          the repository root unless absolute
        - history_count (int): Number of commits included as context

    Raises:
        ConfigError: If the configuration file is malformed or invalid.
    """
    config = default_config()
    config_path = Path(repo_root) / CONFIG_FILE_NAME

    if not config_path.exists():
        logger.debug("No configuration file at %s; using defaults", config_path)
        return config

    try:
        content = config_path.read_text(encoding="utf-8")
        data = json.loads(content)
    except (OSError, json.JSONDecodeError) as exc:
        logger.error("Failed to read or parse configuration file: %s", exc)
        raise ConfigError(f"Invalid JSON in {config_path.name}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"{config_path.name} must contain a JSON object")

    unknown = sorted(key for key in data if key not in config)
    if unknown:
        logger.error("Configuration file has unknown keys: %s", unknown)
        raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")

    if "exclude_files" in data:
        value = data["exclude_files"]
        if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
            raise ConfigError("'exclude_files' must be a list of strings")
    if "reviews_dir" in data:
        value = data["reviews_dir"]
        if not isinstance(value, str) or not value.strip():
            raise ConfigError("'reviews_dir' must be a non-empty string")
    if "history_count" in data:
        value = data["history_count"]
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            raise ConfigError("'history_count' must be a positive integer")

    config.update(data)
    logger.debug("Loaded configuration from: %s", config_path)
    logger.debug("Configuration data: %s", config)
    return config
