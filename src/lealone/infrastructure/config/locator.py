"""Resolve a configuration identifier to a readable resource."""

from __future__ import annotations

import http.client
import logging
import os
import urllib.request
from dataclasses import dataclass, field
from functools import partial
from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import Path
from typing import BinaryIO, Callable, Sequence

from lealone.domain.config import DEFAULT_CONFIGURATION, ConfigError

logger = logging.getLogger(__name__)

PROPERTY_PREFIX = "LEALONE_"
REQUIRED_PREFIX = "file:" + os.sep + os.sep


def get_property(key: str, default: str | None = None) -> str | None:
    """Read a process-wide property such as ``config`` from ``LEALONE_CONFIG``."""

    value = os.environ.get(PROPERTY_PREFIX + key.upper())
    return value if value else default


def config_identifier() -> str:
    return get_property("config", DEFAULT_CONFIGURATION)  # type: ignore[return-value]


def default_search_path() -> list[Traversable]:
    """Directories from ``LEALONE_CONF_PATH`` followed by the bundled ``conf`` directory."""

    roots: list[Traversable] = []
    extra = get_property("conf_path")
    if extra:
        roots.extend(Path(entry) for entry in extra.split(os.pathsep) if entry)
    roots.append(resources.files("lealone").joinpath("conf"))
    return roots


@dataclass(frozen=True)
class ConfigResource:
    """An openable configuration document and where it came from."""

    origin: str
    opener: Callable[[], BinaryIO] = field(repr=False, compare=False)

    def open(self) -> BinaryIO:
        return self.opener()


class ResourceLocator:
    def __init__(self, search_path: Sequence[Traversable] | None = None) -> None:
        self._search_path = search_path

    @property
    def search_path(self) -> Sequence[Traversable]:
        if self._search_path is None:
            return default_search_path()
        return self._search_path

    def resolve(self, identifier: str | None = None) -> ConfigResource:
        config_url = identifier or config_identifier()

        resource = self._open_url(config_url)
        if resource is None:
            resource = self._find_on_search_path(config_url)
        if resource is not None:
            return resource

        if not config_url.startswith(REQUIRED_PREFIX):
            raise ConfigError(
                f"Expecting URI in variable: [{PROPERTY_PREFIX}CONFIG].  Please prefix the file with "
                f"{REQUIRED_PREFIX}{os.sep} for local files or {REQUIRED_PREFIX}<server>{os.sep} "
                "for remote files.  Aborting."
            )
        raise ConfigError(
            f"Cannot locate {config_url}.  If this is a local file, please confirm you've provided "
            f"{REQUIRED_PREFIX}{os.sep} as a URI prefix."
        )

    @staticmethod
    def _open_url(config_url: str) -> ConfigResource | None:
        try:
            # a well-formed but unreachable URL only fails once opened
            with urllib.request.urlopen(config_url):
                pass
        except (ValueError, OSError, http.client.HTTPException) as exc:
            logger.debug("Not a reachable URL %s: %s", config_url, exc)
            return None
        return ConfigResource(origin=config_url, opener=partial(urllib.request.urlopen, config_url))

    def _find_on_search_path(self, config_url: str) -> ConfigResource | None:
        for root in self.search_path:
            try:
                candidate = root.joinpath(config_url)
                found = candidate.is_file()
            except (ValueError, OSError):
                continue
            if found:
                return ConfigResource(origin=str(candidate), opener=partial(candidate.open, "rb"))
        return None


def resolve_config_resource(identifier: str | None = None) -> ConfigResource:
    return ResourceLocator().resolve(identifier)


__all__ = [
    "REQUIRED_PREFIX",
    "ConfigResource",
    "ResourceLocator",
    "config_identifier",
    "default_search_path",
    "get_property",
    "resolve_config_resource",
]
