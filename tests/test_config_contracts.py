"""Contract tests for the loader, the schema and the domain objects."""

from __future__ import annotations

import io
import logging
from dataclasses import fields
from pathlib import Path

import pytest

from lealone import load_config
from lealone.config_loader import (
    ClientEncryptionOptions,
    Config,
    ConfigError,
    ConfigResource,
    PluggableEngineDef,
    ResourceLocator,
    ServerEncryptionOptions,
    YamlConfigurationLoader,
)
from lealone.infrastructure.config.schema import load_schema


def _declared_properties(schema, definition: str) -> set[str]:
    return set(schema["$defs"][definition].get("properties", {}))


class _TrackingStream(io.BytesIO):
    def __init__(self, payload: bytes, fail_read: bool = False) -> None:
        super().__init__(payload)
        self.fail_read = fail_read
        self.was_closed = False

    def read(self, *args):  # type: ignore[override]
        if self.fail_read:
            raise OSError("disk went away")
        return super().read(*args)

    def close(self) -> None:
        self.was_closed = True
        super().close()


def _resource(stream: _TrackingStream) -> ConfigResource:
    return ConfigResource(origin="memory://lealone.yaml", opener=lambda: stream)


@pytest.mark.parametrize(
    ("definition", "cls"),
    [
        ("config", Config),
        ("pluggable_engine", PluggableEngineDef),
        ("server_encryption_options", ServerEncryptionOptions),
        ("client_encryption_options", ClientEncryptionOptions),
    ],
)
def test_schema_declares_every_dataclass_field(definition: str, cls: type) -> None:
    schema = load_schema()
    assert _declared_properties(schema, definition) == {item.name for item in fields(cls)}


def test_parameters_definition_is_an_open_map() -> None:
    parameters = load_schema()["$defs"]["parameters"]  # type: ignore[index]
    assert parameters["additionalProperties"] is not False
    assert "properties" not in parameters


def test_stream_is_closed_after_successful_load() -> None:
    stream = _TrackingStream(b"listen_address: 10.0.0.1\n")
    cfg = YamlConfigurationLoader().load_config_from(_resource(stream))
    assert cfg.listen_address == "10.0.0.1"
    assert stream.was_closed


def test_stream_is_closed_after_invalid_document() -> None:
    stream = _TrackingStream(b"storage_engines: [\n")
    with pytest.raises(ConfigError):
        YamlConfigurationLoader().load_config_from(_resource(stream))
    assert stream.was_closed


def test_read_failure_is_not_a_config_error() -> None:
    stream = _TrackingStream(b"", fail_read=True)
    with pytest.raises(OSError) as excinfo:
        YamlConfigurationLoader().load_config_from(_resource(stream))
    assert not isinstance(excinfo.value, ConfigError)
    assert stream.was_closed


def test_load_logs_resolved_origin(caplog) -> None:
    caplog.set_level(logging.INFO, logger="lealone")
    stream = _TrackingStream(b"base_dir: data\n")
    YamlConfigurationLoader().load_config_from(_resource(stream))
    assert "Loading settings from memory://lealone.yaml" in caplog.text


def test_loader_uses_its_locator(tmp_path: Path) -> None:
    (tmp_path / "cluster.yaml").write_text("base_dir: cluster\n", encoding="utf-8")
    loader = YamlConfigurationLoader(locator=ResourceLocator(search_path=[tmp_path]))
    assert loader.load_config("cluster.yaml").base_dir == "cluster"


def test_bundled_default_configuration_loads(monkeypatch) -> None:
    monkeypatch.delenv("LEALONE_CONFIG", raising=False)
    monkeypatch.delenv("LEALONE_CONF_PATH", raising=False)

    cfg = load_config()

    assert cfg.find_engine("storage", "aose") is not None
    tcp = cfg.find_engine("protocol_server", "TCP")
    assert tcp is not None
    assert tcp.get_parameter("port") == "9210"
    assert tcp.get_parameter("ssl") == "false"
    assert cfg.storage_engines[0].parameters == {}
    assert cfg.server_encryption_options is not None
    assert cfg.client_encryption_options is not None
    assert cfg.client_encryption_options.enabled is False


def test_engines_rejects_unknown_kind() -> None:
    with pytest.raises(ConfigError) as excinfo:
        Config().engines("network")
    assert "network" in str(excinfo.value)


def test_find_engine_returns_none_when_absent() -> None:
    cfg = Config(sql_engines=[PluggableEngineDef(name="Lealone")])
    assert cfg.find_engine("sql", "mysql") is None
    assert cfg.find_engine("sql", "LEALONE") == PluggableEngineDef(name="Lealone")
