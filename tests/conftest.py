# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2025 The Linux Foundation

"""Common test fixtures for ge-bamboo."""

import pathlib
from typing import Any, Dict, List

import pytest
import yaml

from ge_bamboo.core.config import CONFIG_KEY
from ge_bamboo.core.credential_manager import SHARED_USERNAME_PASSWORD_PLUGIN_KEY
from ge_bamboo.core.injectors import TaskPluginKey

# Test constants
TEST_SERVER = "https://scans.gradle.com"
TEST_CREDENTIAL_NAME = "cred1"
TEST_ACCESS_KEY = "SECRET"


@pytest.fixture
def config_dir(tmp_path: pathlib.Path) -> pathlib.Path:
    """Empty configuration directory."""
    directory = tmp_path / "ge-bamboo"
    directory.mkdir()
    return directory


@pytest.fixture
def sample_configuration() -> Dict[str, Any]:
    """Stored configuration record."""
    return {
        "server": TEST_SERVER,
        "shared_credential_name": TEST_CREDENTIAL_NAME,
        "ge_plugin_version": "3.12",
    }


@pytest.fixture
def sample_credentials() -> List[Dict[str, Any]]:
    """Stored shared credentials."""
    return [
        {
            "name": TEST_CREDENTIAL_NAME,
            "plugin_key": SHARED_USERNAME_PASSWORD_PLUGIN_KEY,
            "configuration": {
                "username": "ge",
                "password": f"scans.gradle.com={TEST_ACCESS_KEY}\nge.example.com=OTHER",
            },
        }
    ]


@pytest.fixture
def sample_job() -> Dict[str, Any]:
    """Job description with one supported task."""
    return {
        "key": "PROJ-PLAN-JOB1",
        "tasks": [
            {"plugin_key": TaskPluginKey.SCRIPT.value, "enabled": True, "name": "Run Gradle"},
        ],
        "variables": {"build.flavor": "release"},
    }


@pytest.fixture
def populated_config_dir(
    config_dir: pathlib.Path,
    sample_configuration: Dict[str, Any],
    sample_credentials: List[Dict[str, Any]],
) -> pathlib.Path:
    """Configuration directory with config.yaml and credentials.yaml."""
    (config_dir / "config.yaml").write_text(yaml.safe_dump({CONFIG_KEY: sample_configuration}))
    (config_dir / "credentials.yaml").write_text(yaml.safe_dump({"credentials": sample_credentials}))
    return config_dir


@pytest.fixture
def job_file(tmp_path: pathlib.Path, sample_job: Dict[str, Any]) -> pathlib.Path:
    """Job description file."""
    path = tmp_path / "job.yaml"
    path.write_text(yaml.safe_dump(sample_job))
    return path
