"""Domain models representing the server configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

DEFAULT_CONFIGURATION = "lealone.yaml"

ENGINE_KINDS: tuple[str, ...] = (
    "storage",
    "transaction",
    "sql",
    "protocol_server",
)


class ConfigError(Exception):
    """Raised when the configuration cannot be located, parsed or validated."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


@dataclass(frozen=True, kw_only=True)
class PluggableEngineDef:
    name: str
    enabled: bool = True
    parameters: Mapping[str, str] = field(default_factory=dict)

    def get_parameter(self, key: str, default: str | None = None) -> str | None:
        return self.parameters.get(key, default)


@dataclass(frozen=True, kw_only=True)
class EncryptionOptions:
    keystore: str = "conf/.keystore"
    keystore_password: str = "lealone"
    truststore: str = "conf/.truststore"
    truststore_password: str = "lealone"
    cipher_suites: list[str] = field(default_factory=list)
    protocol: str = "TLS"
    algorithm: str = "SunX509"
    store_type: str = "JKS"
    require_client_auth: bool = False


@dataclass(frozen=True, kw_only=True)
class ServerEncryptionOptions(EncryptionOptions):
    internode_encryption: str = "none"


@dataclass(frozen=True, kw_only=True)
class ClientEncryptionOptions(EncryptionOptions):
    enabled: bool = False


@dataclass(frozen=True, kw_only=True)
class Config:
    base_dir: str = "./lealone_data"
    listen_address: str = "127.0.0.1"
    storage_engines: list[PluggableEngineDef] = field(default_factory=list)
    transaction_engines: list[PluggableEngineDef] = field(default_factory=list)
    sql_engines: list[PluggableEngineDef] = field(default_factory=list)
    protocol_server_engines: list[PluggableEngineDef] = field(default_factory=list)
    server_encryption_options: ServerEncryptionOptions | None = None
    client_encryption_options: ClientEncryptionOptions | None = None

    def engines(self, kind: str) -> list[PluggableEngineDef]:
        """Return the engine definitions declared for *kind* (e.g. ``"storage"``)."""

        if kind not in ENGINE_KINDS:
            raise ConfigError(
                f"Unknown engine kind '{kind}'. Expected one of: {', '.join(ENGINE_KINDS)}."
            )
        return getattr(self, f"{kind}_engines")

    def find_engine(self, kind: str, name: str) -> PluggableEngineDef | None:
        wanted = name.lower()
        for engine in self.engines(kind):
            if engine.name.lower() == wanted:
                return engine
        return None


__all__ = [
    "DEFAULT_CONFIGURATION",
    "ENGINE_KINDS",
    "ConfigError",
    "PluggableEngineDef",
    "EncryptionOptions",
    "ServerEncryptionOptions",
    "ClientEncryptionOptions",
    "Config",
]
