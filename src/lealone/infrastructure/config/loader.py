"""Config loading utilities coordinating resolution, schema binding and parsing."""

from __future__ import annotations

import logging
from dataclasses import fields
from typing import Any, Mapping

import yaml

from lealone.domain.config import (
    ClientEncryptionOptions,
    Config,
    ConfigError,
    DEFAULT_CONFIGURATION,
    PluggableEngineDef,
    ServerEncryptionOptions,
)
from .locator import ConfigResource, ResourceLocator
from .validators import (
    ConfigBinder,
    UnknownPropertiesTracker,
    format_error,
)

__all__ = ["YamlConfigurationLoader", "load_config", "parse_config"]

logger = logging.getLogger(__name__)


def _read_yaml(data: bytes | str) -> Any:
    try:
        return yaml.safe_load(data)
    except yaml.YAMLError as exc:
        raise ConfigError(format_error("", str(exc))) from exc


def _scalar_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _build_engine(data: Mapping[str, Any]) -> PluggableEngineDef:
    parameters = data.get("parameters") or {}
    return PluggableEngineDef(
        name=_scalar_text(data["name"]),
        enabled=bool(data.get("enabled", True)),
        parameters={_scalar_text(key): _scalar_text(value) for key, value in parameters.items()},
    )


def _build_engines(data: Mapping[str, Any], key: str) -> list[PluggableEngineDef]:
    return [_build_engine(item) for item in data.get(key) or []]


def _declared(cls: type, data: Mapping[str, Any]) -> dict[str, Any]:
    declared = {item.name: item.type for item in fields(cls)}
    values: dict[str, Any] = {}
    for key, value in data.items():
        if key not in declared or value is None:
            continue
        if declared[key] == "bool":
            values[key] = value
        elif isinstance(value, list):
            values[key] = [_scalar_text(item) for item in value]
        else:
            values[key] = _scalar_text(value)
    return values


def _build_server_encryption(data: Mapping[str, Any] | None) -> ServerEncryptionOptions | None:
    if data is None:
        return None
    return ServerEncryptionOptions(**_declared(ServerEncryptionOptions, data))


def _build_client_encryption(data: Mapping[str, Any] | None) -> ClientEncryptionOptions | None:
    if data is None:
        return None
    return ClientEncryptionOptions(**_declared(ClientEncryptionOptions, data))


def _build_config(data: Mapping[str, Any]) -> Config:
    scalars = {key: _scalar_text(data[key]) for key in ("base_dir", "listen_address") if data.get(key) is not None}
    return Config(
        **scalars,
        storage_engines=_build_engines(data, "storage_engines"),
        transaction_engines=_build_engines(data, "transaction_engines"),
        sql_engines=_build_engines(data, "sql_engines"),
        protocol_server_engines=_build_engines(data, "protocol_server_engines"),
        server_encryption_options=_build_server_encryption(data.get("server_encryption_options")),
        client_encryption_options=_build_client_encryption(data.get("client_encryption_options")),
    )


def parse_config(
    data: bytes | str,
    binder: ConfigBinder | None = None,
    document_name: str = DEFAULT_CONFIGURATION,
) -> Config:
    """Parse and validate a YAML document into a :class:`Config`.

    Unknown properties are collected over the whole document and reported
    together once binding has finished.
    """

    document = _read_yaml(data)
    binder = binder or ConfigBinder()
    tracker = UnknownPropertiesTracker(document_name)
    bound = binder.bind(document, tracker)
    result = _build_config(bound)
    tracker.check()
    return result


class YamlConfigurationLoader:
    def __init__(
        self,
        locator: ResourceLocator | None = None,
        binder: ConfigBinder | None = None,
    ) -> None:
        self.locator = locator or ResourceLocator()
        self._binder = binder

    @property
    def binder(self) -> ConfigBinder:
        if self._binder is None:
            self._binder = ConfigBinder()
        return self._binder

    def load_config(self, identifier: str | None = None) -> Config:
        return self.load_config_from(self.locator.resolve(identifier))

    def load_config_from(self, resource: ConfigResource) -> Config:
        logger.info("Loading settings from %s", resource.origin)
        # resolve() already opened this resource, so read errors propagate as-is
        with resource.open() as stream:
            config_bytes = stream.read()
        return parse_config(config_bytes, self.binder)


def load_config(identifier: str | None = None) -> Config:
    """Locate, parse and validate the server configuration."""

    return YamlConfigurationLoader().load_config(identifier)
