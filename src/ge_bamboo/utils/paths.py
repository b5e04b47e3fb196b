# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2025 The Linux Foundation

"""Filesystem locations used by ge-bamboo."""

import os
import pathlib
from typing import Optional

CONFIG_DIR_ENV = "GE_BAMBOO_CONFIG_DIR"
CONFIG_FILE_NAME = "config.yaml"
CREDENTIALS_FILE_NAME = "credentials.yaml"


def get_config_dir(config_dir: Optional[pathlib.Path] = None) -> pathlib.Path:
    """Get the configuration directory.

    An explicit path wins, then the GE_BAMBOO_CONFIG_DIR environment
    variable, then ~/.config/ge-bamboo.
    """
    if config_dir:
        return pathlib.Path(config_dir)

    env_dir = os.environ.get(CONFIG_DIR_ENV)
    if env_dir:
        return pathlib.Path(env_dir)

    return pathlib.Path.home() / ".config" / "ge-bamboo"


def get_config_file_path(config_dir: Optional[pathlib.Path] = None) -> pathlib.Path:
    """Get the path to the config.yaml file."""
    return get_config_dir(config_dir) / CONFIG_FILE_NAME


def get_credentials_file_path(config_dir: Optional[pathlib.Path] = None) -> pathlib.Path:
    """Get the path to the credentials.yaml file."""
    return get_config_dir(config_dir) / CREDENTIALS_FILE_NAME
