"""Render config.yaml: ``${...}`` placeholders, env-prefixed overrides, validation."""

import os
import re
from pathlib import Path

import yaml
from loguru import logger
from pydantic import ValidationError

from src.catalog.runtime.config.config_data import ConfigData

_PLACEHOLDER = re.compile(r"\$\{([^}]+)\}")


def _resolve(expression: str) -> str:
    name, sep, fallback = expression.partition(":-")
    if sep:
        return os.getenv(name, fallback)

    name, sep, hint = expression.partition(":?")
    value = os.getenv(name)
    if value is not None:
        return value
    if sep:
        raise ValueError(f"Required environment variable {name}: {hint}")
    raise ValueError(f"Required environment variable {name} not set")


def substitute_env_vars(text: str) -> str:
    """Expand shell-style placeholders in ``text``.

    ``${NAME}`` must be set, ``${NAME:-fallback}`` falls back when unset, and
    ``${NAME:?hint}`` fails with ``hint`` when unset. Anything else that
    looks like ``$NAME`` is left alone.
    """
    return _PLACEHOLDER.sub(lambda match: _resolve(match.group(1)), text)


def apply_environment_overrides(env_mode: str) -> dict[str, str]:
    """Promote ``<ENV>_NAME`` variables to ``NAME`` for the active environment.

    Returns the promoted names and values.
    """
    prefix = f"{env_mode.upper()}_"
    promoted = {
        var[len(prefix):]: value
        for var, value in os.environ.items()
        if var.startswith(prefix) and len(var) > len(prefix)
    }
    for name, value in promoted.items():
        os.environ[name] = value
        logger.debug("Set environment variable {} from {}{}", name, prefix, name)
    return promoted


def load_templated_yaml(file_path: Path, env_mode: str | None = None) -> ConfigData:
    """Read ``file_path`` and return the validated ``config:`` section.

    Args:
        file_path: config.yaml or the file named by ``APP_CONFIG_FILE``
        env_mode: Environment whose ``<ENV>_`` variables win over plain ones.
            Defaults to ``APP_ENVIRONMENT`` or ``development``.

    Raises:
        ValueError: A placeholder is unresolved, the YAML is malformed, or
            the values fail validation
        FileNotFoundError: ``file_path`` does not exist
    """
    content = Path(file_path).read_text()

    env_mode = env_mode or os.getenv("APP_ENVIRONMENT", "development")
    logger.info("Loading configuration for environment: {}", env_mode)
    promoted = apply_environment_overrides(env_mode)
    if promoted:
        logger.info("Applied environment-specific overrides: {}", sorted(promoted))

    try:
        loaded = yaml.safe_load(substitute_env_vars(content))
    except yaml.YAMLError as exc:
        raise ValueError(f"Error parsing YAML: {exc}") from exc
    if not isinstance(loaded, dict):
        raise ValueError("Failed to parse YAML")

    try:
        return ConfigData(**(loaded.get("config") or {}))
    except ValidationError as exc:
        raise ValueError(f"Invalid configuration: {exc}") from exc
