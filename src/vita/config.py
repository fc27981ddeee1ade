"""Configuration loading utilities for Vita.

This module provides configuration loading that can be used by the CLI or
by applications embedding Vita. It handles:
- Finding and loading vita.yaml config files
- Loading .env files for API keys
- Building Settings objects from multiple sources
- Creating Vita instances from configuration
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

from vita.settings import Settings

if TYPE_CHECKING:
    from vita.vita import Vita

logger = logging.getLogger(__name__)

# Default paths
DEFAULT_DATA_DIR = "./vita_data"
CONFIG_FILES = ["vita.yaml", "vita.yml", ".vitarc"]
ENV_FILE = ".env"

# Valid configuration keys for validation
VALID_ROOT_KEYS = {
    "llm_model",
    "embedding_model",
    "embedding_dimensions",
    "data_dir",
    "settings",
}

# YAML key -> Settings field
SETTINGS_KEYS = {
    "default_limit": "default_limit",
    "limit": "default_limit",  # alias
    "similarity_threshold": "similarity_threshold",
    "similarity": "similarity_threshold",  # alias
    "search_limit": "search_limit",
    "temperature": "temperature",
    "stream_buffer_size": "stream_buffer_size",
    "title_temperature": "title_temperature",
    "title_max_tokens": "title_max_tokens",
    "title_max_length": "title_max_length",
    "locale": "locale",
    "num_retries": "num_retries",
}

# Env var -> (Settings field, parser)
ENV_SETTINGS: dict[str, tuple[str, type]] = {
    "VITA_DEFAULT_LIMIT": ("default_limit", int),
    "VITA_SIMILARITY_THRESHOLD": ("similarity_threshold", float),
    "VITA_SEARCH_LIMIT": ("search_limit", int),
    "VITA_TEMPERATURE": ("temperature", float),
    "VITA_STREAM_BUFFER_SIZE": ("stream_buffer_size", int),
    "VITA_TITLE_TEMPERATURE": ("title_temperature", float),
    "VITA_TITLE_MAX_TOKENS": ("title_max_tokens", int),
    "VITA_TITLE_MAX_LENGTH": ("title_max_length", int),
    "VITA_LOCALE": ("locale", str),
    "VITA_NUM_RETRIES": ("num_retries", int),
}


def load_env_file(env_path: str | Path = ENV_FILE) -> None:
    """Load environment variables from .env file if it exists.

    Existing environment variables are never overridden.

    Args:
        env_path: Path to .env file (default: .env in current directory)
    """
    path = Path(env_path)
    if not path.exists():
        return

    with open(path, encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" in line:
                key, _, value = line.partition("=")
                key = key.strip()
                value = value.strip().strip("'\"")
                if key not in os.environ:
                    os.environ[key] = value


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Find configuration file in current directory or parent directories.

    Args:
        start_dir: Directory to start searching from (default: cwd)

    Returns:
        Path to config file if found, None otherwise
    """
    current = start_dir or Path.cwd()
    for _ in range(10):  # Limit search depth
        for config_name in CONFIG_FILES:
            config_path = current / config_name
            if config_path.exists():
                return config_path
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


def validate_config(config: dict[str, Any], config_path: Path | None = None) -> list[str]:
    """Validate config and return warnings about unknown keys.

    Args:
        config: The loaded configuration dictionary
        config_path: Path to config file (for error messages)

    Returns:
        List of warning messages (empty if no issues)
    """
    warnings = []

    unknown_root = set(config.keys()) - VALID_ROOT_KEYS
    if unknown_root:
        path_str = str(config_path) if config_path else "config"
        warnings.append(f"Unknown config keys in {path_str}: {', '.join(sorted(unknown_root))}")

    settings = config.get("settings", {})
    if isinstance(settings, dict):
        unknown_settings = set(settings.keys()) - set(SETTINGS_KEYS)
        if unknown_settings:
            warnings.append(f"Unknown settings keys: {', '.join(sorted(unknown_settings))}")

    return warnings


def load_config(config_path: Path | str | None = None) -> dict[str, Any]:
    """Load configuration from YAML file.

    Args:
        config_path: Explicit path to config file, or None to search

    Returns:
        Configuration dictionary (empty if no config found)
    """
    config_path = Path(config_path) if config_path is not None else find_config_file()

    if config_path is None:
        return {}

    with open(config_path, encoding="utf-8") as f:
        config = yaml.safe_load(f) or {}

    for warning in validate_config(config, config_path):
        logger.warning(warning)
    return config


def get_settings_from_env() -> dict[str, Any]:
    """Read behavioral settings from VITA_* environment variables.

    Invalid values are skipped with a warning.

    Returns:
        Dictionary of setting name -> value for explicitly set env vars
    """
    result: dict[str, Any] = {}
    for env_key, (field, parse) in ENV_SETTINGS.items():
        raw = os.environ.get(env_key)
        if raw is None or raw == "":
            continue
        try:
            result[field] = parse(raw)
        except ValueError:
            logger.warning("Ignoring invalid %s=%r", env_key, raw)
    return result


def get_settings_from_yaml(config: dict[str, Any]) -> dict[str, Any]:
    """Extract settings from the 'settings:' section of a YAML config."""
    yaml_settings = config.get("settings", {}) or {}
    return {
        settings_key: yaml_settings[yaml_key]
        for yaml_key, settings_key in SETTINGS_KEYS.items()
        if yaml_key in yaml_settings
    }


def build_settings(
    config: dict[str, Any] | None = None,
    env_settings: dict[str, Any] | None = None,
) -> Settings:
    """Build Settings object from YAML config and env vars.

    Precedence (highest to lowest):
    1. Environment variables
    2. YAML settings: section
    3. Settings class defaults
    """
    config = config or {}
    yaml_settings = get_settings_from_yaml(config)
    env_settings = env_settings if env_settings is not None else get_settings_from_env()
    return Settings.from_mapping({**yaml_settings, **env_settings})


def create_vita(
    data_dir: str | None = None,
    config_path: str | Path | None = None,
) -> Vita:
    """Create a Vita instance from config files and environment.

    Args:
        data_dir: Override data directory
        config_path: Override config file path

    Returns:
        Configured Vita instance backed by LiteLLM and local SQLite storage
    """
    from vita.configuration import LiteLLMProvider, LocalStorage
    from vita.providers.litellm import ChatModels, EmbeddingModels
    from vita.vita import Vita

    config = load_config(config_path)
    settings = build_settings(config)

    provider = LiteLLMProvider(
        llm=os.environ.get("VITA_LLM_MODEL") or config.get("llm_model") or ChatModels.GEMMA_3_12B,
        embedding=os.environ.get("VITA_EMBEDDING_MODEL")
        or config.get("embedding_model")
        or EmbeddingModels.GEMINI_EMBEDDING_001,
        dimensions=config.get("embedding_dimensions"),
    )
    effective_data_dir = data_dir or config.get("data_dir") or DEFAULT_DATA_DIR
    return Vita(provider=provider, storage=LocalStorage(effective_data_dir), settings=settings)
