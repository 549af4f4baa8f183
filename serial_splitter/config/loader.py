from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import DEFAULT_ALIASES, AppConfig, ExpansionConfig
from ..models.delimiter_rule import DEFAULT_RULES
from .rules import RuleFormatError, rules_from_data

"""Config loader.

Responsibilities:
- Load the YAML config (default config/splitter.yml)
- Validate it against the bundled JSON schema (config_schema.json)
- Apply defaults for every key left out

Resolution order for the config path: explicit argument, then the
SERIAL_SPLITTER_CONFIG environment variable, then DEFAULT_CONFIG_PATH.
Only an explicitly requested file is required to exist.
"""

__all__ = [
    "ConfigError",
    "DEFAULT_CONFIG_PATH",
    "ENV_CONFIG_PATH",
    "load_config",
    "resolve_config_path",
]

SCHEMA_PATH = Path(__file__).parent / "config_schema.json"
DEFAULT_CONFIG_PATH = Path("config/splitter.yml")
ENV_CONFIG_PATH = "SERIAL_SPLITTER_CONFIG"


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the bundled JSON schema.

    Raises:
        ConfigError: schema file unreadable or config data violates the schema
    """
    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    try:
        jsonschema.validate(data, schema)
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def resolve_config_path(path: Path | None) -> tuple[Path, bool]:
    """Return (path, explicit). explicit=False means falling back to the default."""
    if path is not None:
        return path, True
    env = os.getenv(ENV_CONFIG_PATH)
    if env:
        return Path(env), True
    return DEFAULT_CONFIG_PATH, False


def load_config(path: Path | None = None) -> AppConfig:
    cfg_path, explicit = resolve_config_path(path)
    if not cfg_path.exists():
        if explicit:
            raise ConfigError(f"config file not found: {cfg_path}")
        return AppConfig()
    try:
        data = yaml.safe_load(cfg_path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping: {cfg_path}")

    _validate_config_schema(data)

    if "delimiter_rules" in data:
        try:
            rules = rules_from_data(data["delimiter_rules"])
        except RuleFormatError as e:
            raise ConfigError(f"config validation failed: {e}") from e
    else:
        rules = DEFAULT_RULES

    expansion = ExpansionConfig(
        identifier_aliases=tuple(data.get("identifier_aliases", DEFAULT_ALIASES)),
        delimiter_rules=rules,
        header_offset=data.get("header_offset", 2),
    )
    return AppConfig(
        expansion=expansion,
        preview_limit=data.get("preview_limit", 50),
        max_file_mb=data.get("max_file_mb", 10),
        output_suffix=data.get("output_suffix", "_processed"),
    )
