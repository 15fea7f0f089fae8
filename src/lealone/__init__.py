"""Lealone server configuration loading."""

from __future__ import annotations

from lealone.config_loader import (
    Config,
    ConfigError,
    PluggableEngineDef,
    YamlConfigurationLoader,
    load_config,
)

__all__ = [
    "Config",
    "ConfigError",
    "PluggableEngineDef",
    "YamlConfigurationLoader",
    "load_config",
]
