# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2025 The Linux Foundation

"""Exceptions raised by ge-bamboo stores and commands."""


class GeBambooError(Exception):
    """Base class for ge-bamboo errors."""


class ConfigurationError(GeBambooError):
    """Raised when persisted configuration cannot be read or written."""


class CredentialStoreError(GeBambooError):
    """Raised when the shared credential store cannot be read or written."""


class JobDescriptionError(GeBambooError):
    """Raised when a job description file is missing or malformed."""
