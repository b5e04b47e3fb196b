# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2025 The Linux Foundation

"""
Persistent plugin configuration for ge-bamboo.

The configuration record is owned by the CI host and kept in its key-value
store. This module provides the store interface, an in-memory store and a
YAML-file store, plus the manager used by the pre-job action to read the
record.
"""

import logging
import pathlib
from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass
from typing import Any, Dict, Mapping, Optional

import yaml

from ge_bamboo.core.errors import ConfigurationError

logger = logging.getLogger(__name__)

CONFIG_KEY = "com.gradle.bamboo.enterprise.config"


def _clean(value: Any) -> Optional[str]:
    """Normalize an optional string field; blank values are absent."""
    if value is None:
        return None
    value = str(value)
    return value if value.strip() else None


@dataclass
class PersistentConfiguration:
    """Build-scan settings configured by an administrator."""
    server: Optional[str] = None
    shared_credential_name: Optional[str] = None
    ge_plugin_version: Optional[str] = None
    ccud_plugin_version: Optional[str] = None
    allow_untrusted_server: bool = False
    inject_maven_extension: bool = False

    def __post_init__(self):
        self.server = _clean(self.server)
        self.shared_credential_name = _clean(self.shared_credential_name)
        self.ge_plugin_version = _clean(self.ge_plugin_version)
        self.ccud_plugin_version = _clean(self.ccud_plugin_version)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PersistentConfiguration":
        """Build a configuration from a stored mapping, ignoring unknown keys."""
        return cls(
            server=data.get("server"),
            shared_credential_name=data.get("shared_credential_name"),
            ge_plugin_version=data.get("ge_plugin_version"),
            ccud_plugin_version=data.get("ccud_plugin_version"),
            allow_untrusted_server=bool(data.get("allow_untrusted_server", False)),
            inject_maven_extension=bool(data.get("inject_maven_extension", False)),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return asdict(self)


class ConfigurationStore(ABC):
    """Key-value store holding configuration records."""

    @abstractmethod
    def get_value(self, key: str) -> Optional[Mapping[str, Any]]:
        """Get the record stored under key, or None."""
        pass

    @abstractmethod
    def set_value(self, key: str, value: Optional[Mapping[str, Any]]) -> None:
        """Store a record under key; None removes it."""
        pass


class InMemoryConfigurationStore(ConfigurationStore):
    """Configuration store kept in a dictionary."""

    def __init__(self, values: Optional[Dict[str, Mapping[str, Any]]] = None):
        self.values: Dict[str, Mapping[str, Any]] = dict(values or {})

    def get_value(self, key: str) -> Optional[Mapping[str, Any]]:
        return self.values.get(key)

    def set_value(self, key: str, value: Optional[Mapping[str, Any]]) -> None:
        if value is None:
            self.values.pop(key, None)
        else:
            self.values[key] = dict(value)


class YamlConfigurationStore(ConfigurationStore):
    """Configuration store backed by a YAML mapping file."""

    def __init__(self, path: pathlib.Path):
        self.path = pathlib.Path(path)

    def _load(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}

        try:
            with open(self.path) as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to read configuration from {self.path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"Configuration file {self.path} must contain a mapping")
        return data

    def get_value(self, key: str) -> Optional[Mapping[str, Any]]:
        value = self._load().get(key)
        if value is not None and not isinstance(value, dict):
            raise ConfigurationError(f"Configuration entry '{key}' in {self.path} must be a mapping")
        return value

    def set_value(self, key: str, value: Optional[Mapping[str, Any]]) -> None:
        data = self._load()
        if value is None:
            data.pop(key, None)
        else:
            data[key] = dict(value)

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w") as f:
                yaml.safe_dump(data, f, default_flow_style=False, sort_keys=True)
        except OSError as e:
            raise ConfigurationError(f"Failed to write configuration to {self.path}: {e}") from e
        logger.debug(f"Saved configuration entry '{key}' to {self.path}")


class PersistentConfigurationManager:
    """Reads and writes the build-scan configuration record."""

    def __init__(self, store: ConfigurationStore, key: str = CONFIG_KEY):
        self.store = store
        self.key = key

    def load(self) -> Optional[PersistentConfiguration]:
        """Load the configuration, or None when nothing has been saved."""
        value = self.store.get_value(self.key)
        if value is None:
            return None
        return PersistentConfiguration.from_dict(value)

    def save(self, configuration: PersistentConfiguration) -> None:
        self.store.set_value(self.key, configuration.to_dict())

    def clear(self) -> None:
        self.store.set_value(self.key, None)
