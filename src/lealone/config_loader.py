"""Public entry points for loading the server configuration."""

from __future__ import annotations

from lealone.domain.config import (
    ENGINE_KINDS,
    ClientEncryptionOptions,
    Config,
    ConfigError,
    PluggableEngineDef,
    ServerEncryptionOptions,
)
from lealone.infrastructure.config.loader import YamlConfigurationLoader, load_config, parse_config
from lealone.infrastructure.config.locator import (
    REQUIRED_PREFIX,
    ConfigResource,
    ResourceLocator,
    resolve_config_resource,
)

__all__ = [
    "ENGINE_KINDS",
    "ConfigError",
    "Config",
    "PluggableEngineDef",
    "ServerEncryptionOptions",
    "ClientEncryptionOptions",
    "REQUIRED_PREFIX",
    "ConfigResource",
    "ResourceLocator",
    "YamlConfigurationLoader",
    "load_config",
    "parse_config",
    "resolve_config_resource",
]
