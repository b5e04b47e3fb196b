# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2025 The Linux Foundation

"""ge-bamboo: build-scan access key injection for Bamboo jobs."""

__version__ = "0.1.0"
__author__ = "LF Release Engineering"
__email__ = "releng@linuxfoundation.org"

from ge_bamboo.core.pre_job_action import PreJobAction

__all__ = ["PreJobAction"]
