# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2025 The Linux Foundation

"""
Shared credential access for ge-bamboo.

Shared credentials live in the CI host's credential store. This module
defines the store interface, an in-memory store and a YAML-file store, and
the provider that turns a username+password credential into a typed value.
"""

import logging
import pathlib
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import yaml

from ge_bamboo.core.errors import CredentialStoreError

logger = logging.getLogger(__name__)

SHARED_USERNAME_PASSWORD_PLUGIN_KEY = (
    "com.atlassian.bamboo.plugin.sharedCredentials:usernamePasswordCredentials"
)
USERNAME = "username"
PASSWORD = "password"


@dataclass
class CredentialRecord:
    """A named shared credential as stored by the host."""
    name: str
    plugin_key: str
    configuration: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CredentialRecord":
        name = data.get("name")
        if not name:
            raise CredentialStoreError("Credential entry is missing a name")

        configuration = data.get("configuration") or {}
        if not isinstance(configuration, dict):
            raise CredentialStoreError(f"Credential '{name}' configuration must be a mapping")

        return cls(
            name=str(name),
            plugin_key=str(data.get("plugin_key", "")),
            configuration={str(k): str(v) for k, v in configuration.items() if v is not None},
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "plugin_key": self.plugin_key,
            "configuration": dict(self.configuration),
        }


@dataclass
class UsernameAndPassword:
    """Typed view of a username+password shared credential."""
    username: Optional[str]
    password: Optional[str]


class CredentialStore(ABC):
    """Abstract base class for shared credential stores."""

    @abstractmethod
    def get_credentials_by_name(self, name: str) -> Optional[CredentialRecord]:
        """Get a credential by its name, or None."""
        pass

    @abstractmethod
    def list_credentials(self) -> List[CredentialRecord]:
        """List all credentials in the store."""
        pass

    def save_credentials(self, credential: CredentialRecord) -> None:
        """Create or replace a credential."""
        raise NotImplementedError(f"{type(self).__name__} does not support saving credentials")

    def delete_credentials(self, name: str) -> bool:
        """Delete a credential, returning whether it existed."""
        raise NotImplementedError(f"{type(self).__name__} does not support deleting credentials")


class InMemoryCredentialStore(CredentialStore):
    """Credential store kept in a dictionary."""

    def __init__(self, credentials: Optional[List[CredentialRecord]] = None):
        self.credentials: Dict[str, CredentialRecord] = {c.name: c for c in credentials or []}

    def get_credentials_by_name(self, name: str) -> Optional[CredentialRecord]:
        return self.credentials.get(name)

    def list_credentials(self) -> List[CredentialRecord]:
        return list(self.credentials.values())

    def save_credentials(self, credential: CredentialRecord) -> None:
        self.credentials[credential.name] = credential

    def delete_credentials(self, name: str) -> bool:
        return self.credentials.pop(name, None) is not None


class YamlCredentialStore(CredentialStore):
    """Credential store backed by a YAML file with a 'credentials' list."""

    def __init__(self, path: pathlib.Path):
        self.path = pathlib.Path(path)

    def _load(self) -> List[CredentialRecord]:
        if not self.path.exists():
            return []

        try:
            with open(self.path) as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise CredentialStoreError(f"Failed to read credentials from {self.path}: {e}") from e

        if data is None:
            return []
        if not isinstance(data, dict) or not isinstance(data.get("credentials", []), list):
            raise CredentialStoreError(f"Credentials file {self.path} must contain a 'credentials' list")

        return [CredentialRecord.from_dict(entry) for entry in data.get("credentials") or [] if entry]

    def _write(self, credentials: List[CredentialRecord]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w") as f:
                yaml.safe_dump(
                    {"credentials": [c.to_dict() for c in credentials]},
                    f,
                    default_flow_style=False,
                    sort_keys=False,
                )
        except OSError as e:
            raise CredentialStoreError(f"Failed to write credentials to {self.path}: {e}") from e

    def get_credentials_by_name(self, name: str) -> Optional[CredentialRecord]:
        for credential in self._load():
            if credential.name == name:
                return credential
        return None

    def list_credentials(self) -> List[CredentialRecord]:
        return self._load()

    def save_credentials(self, credential: CredentialRecord) -> None:
        credentials = [c for c in self._load() if c.name != credential.name]
        credentials.append(credential)
        self._write(credentials)
        logger.info(f"Saved shared credential '{credential.name}'")

    def delete_credentials(self, name: str) -> bool:
        credentials = self._load()
        remaining = [c for c in credentials if c.name != name]
        if len(remaining) == len(credentials):
            return False
        self._write(remaining)
        logger.info(f"Deleted shared credential '{name}'")
        return True


class UsernameAndPasswordCredentialsProvider:
    """Looks up shared credentials of the username+password type."""

    def __init__(self, store: CredentialStore):
        self.store = store

    def find(self, name: str) -> Optional[CredentialRecord]:
        """Get the raw credential record by name."""
        return self.store.get_credentials_by_name(name)

    @staticmethod
    def to_username_and_password(credential: CredentialRecord) -> Optional[UsernameAndPassword]:
        """Convert a record to UsernameAndPassword.

        Returns None unless the record is of the shared username+password
        type and carries a non-empty password.
        """
        if credential.plugin_key != SHARED_USERNAME_PASSWORD_PLUGIN_KEY:
            return None

        password = credential.configuration.get(PASSWORD)
        if not password:
            return None

        return UsernameAndPassword(
            username=credential.configuration.get(USERNAME),
            password=password,
        )

    def find_username_and_password(self, name: str) -> Optional[UsernameAndPassword]:
        credential = self.find(name)
        if credential is None:
            return None
        return self.to_username_and_password(credential)
