# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2025 The Linux Foundation

"""Command modules for ge-bamboo."""

from ge_bamboo.commands.config import config_app
from ge_bamboo.commands.credentials import credentials_app
from ge_bamboo.commands.job import job_app

__all__ = ["config_app", "credentials_app", "job_app"]
