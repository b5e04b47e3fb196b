# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2025 The Linux Foundation

"""Helpers shared by ge-bamboo commands."""

import pathlib
from typing import Optional

from ge_bamboo.core.config import PersistentConfigurationManager, YamlConfigurationStore
from ge_bamboo.core.credential_manager import YamlCredentialStore
from ge_bamboo.utils.paths import CONFIG_DIR_ENV, get_config_file_path, get_credentials_file_path

# Constants
CONFIG_DIR_HELP = "Configuration directory path"
OUTPUT_FORMAT_HELP = "Output format: table, json, json-pretty, yaml"
CONFIG_DIR_ENVVAR = CONFIG_DIR_ENV


def get_configuration_manager(config_dir: Optional[pathlib.Path] = None) -> PersistentConfigurationManager:
    """Get a configuration manager backed by config.yaml."""
    return PersistentConfigurationManager(YamlConfigurationStore(get_config_file_path(config_dir)))


def get_credential_store(config_dir: Optional[pathlib.Path] = None) -> YamlCredentialStore:
    """Get the credential store backed by credentials.yaml."""
    return YamlCredentialStore(get_credentials_file_path(config_dir))
