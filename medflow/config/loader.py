from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import AnalyticsConfig, DisplayConfig, GraphConfig, TopNLimits

"""Config loader.

Responsibilities:
- Load YAML (``config/medflow.yml`` by default)
- Validate against ``config_schema.json`` shipped next to this module
- Apply defaults for every key left out
"""

__all__ = [
    "ConfigError",
    "DEFAULT_CONFIG_PATH",
    "SCHEMA_PATH",
    "default_config",
    "load_config",
]

SCHEMA_PATH = Path(__file__).parent / "config_schema.json"
DEFAULT_CONFIG_PATH = Path("config/medflow.yml")


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: if the schema file is missing or invalid, or the data
            fails validation (unknown keys, wrong types, out-of-range values)
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")
    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def default_config() -> AnalyticsConfig:
    return AnalyticsConfig()


def load_config(path: Path) -> AnalyticsConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping, got {type(data).__name__}")

    _validate_config_schema(data)

    defaults = AnalyticsConfig()
    top_raw = data.get("top_n", {})
    graph_raw = data.get("graph", {})
    display = DisplayConfig(
        radius_min=graph_raw.get("radius_min", defaults.graph.display.radius_min),
        radius_max=graph_raw.get("radius_max", defaults.graph.display.radius_max),
        width_scale=graph_raw.get("width_scale", defaults.graph.display.width_scale),
    )
    if display.radius_min > display.radius_max:
        raise ConfigError(
            f"graph.radius_min ({display.radius_min}) exceeds graph.radius_max ({display.radius_max})"
        )
    return AnalyticsConfig(
        top_n=TopNLimits(
            suppliers=top_raw.get("suppliers", defaults.top_n.suppliers),
            customers=top_raw.get("customers", defaults.top_n.customers),
            categories=top_raw.get("categories", defaults.top_n.categories),
            models=top_raw.get("models", defaults.top_n.models),
            licenses=top_raw.get("licenses", defaults.top_n.licenses),
        ),
        scatter_limit=data.get("scatter_limit", defaults.scatter_limit),
        sample_size=data.get("sample_size", defaults.sample_size),
        graph=GraphConfig(
            max_nodes=graph_raw.get("max_nodes", defaults.graph.max_nodes),
            display=display,
        ),
    )
