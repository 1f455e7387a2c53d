"""Configuration loading."""

from .loader import ConfigError, default_config, load_config

__all__ = ["ConfigError", "default_config", "load_config"]
