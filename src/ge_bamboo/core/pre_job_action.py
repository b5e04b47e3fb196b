# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2025 The Linux Foundation

"""
Pre-job action that injects the build-scan access key into a job.

The action runs once before a job's tasks and never fails the job: every
missing piece of configuration ends the pipeline with a skip reason and the
job proceeds unmodified. Errors raised by the host's stores propagate.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence

from ge_bamboo.core.access_key import find_access_key_entry
from ge_bamboo.core.config import PersistentConfigurationManager
from ge_bamboo.core.credential_manager import UsernameAndPasswordCredentialsProvider
from ge_bamboo.core.injectors import BuildScanInjector, default_injectors, enabled_injectors, has_supported_tasks
from ge_bamboo.core.job_context import JobExecutionContext

logger = logging.getLogger(__name__)

ACCESS_KEY = "GRADLE_ENTERPRISE_ACCESS_KEY"


class SkipReason(Enum):
    """Why the access key was not injected."""
    NO_CONFIGURATION = "no_configuration"
    NO_SERVER = "no_server"
    NO_SHARED_CREDENTIAL = "no_shared_credential"
    CREDENTIAL_NOT_FOUND = "credential_not_found"
    UNSUPPORTED_CREDENTIAL = "unsupported_credential"
    NO_ACCESS_KEY = "no_access_key"
    NO_SUPPORTED_TASKS = "no_supported_tasks"


@dataclass
class PreJobResult:
    """Outcome of a pre-job action run."""
    skip_reason: Optional[SkipReason] = None
    variable_name: Optional[str] = None
    access_key: Optional[str] = None
    variable_value: Optional[str] = None

    @property
    def injected(self) -> bool:
        return self.skip_reason is None

    @classmethod
    def skipped(cls, reason: SkipReason) -> "PreJobResult":
        logger.debug(f"Skipping access key injection: {reason.value}")
        return cls(skip_reason=reason)


class PreJobAction:
    """Adds the build-scan access key to jobs that run supported build tools."""

    def __init__(self,
                 configuration_manager: PersistentConfigurationManager,
                 credentials_provider: UsernameAndPasswordCredentialsProvider,
                 injectors: Optional[Sequence[BuildScanInjector]] = None):
        self.configuration_manager = configuration_manager
        self.credentials_provider = credentials_provider
        self.injectors: List[BuildScanInjector] = (
            list(injectors) if injectors is not None else default_injectors()
        )

    def execute(self, job: JobExecutionContext) -> PreJobResult:
        configuration = self.configuration_manager.load()
        if configuration is None:
            return PreJobResult.skipped(SkipReason.NO_CONFIGURATION)
        if configuration.server is None:
            return PreJobResult.skipped(SkipReason.NO_SERVER)
        if configuration.shared_credential_name is None:
            return PreJobResult.skipped(SkipReason.NO_SHARED_CREDENTIAL)

        credential = self.credentials_provider.find(configuration.shared_credential_name)
        if credential is None:
            return PreJobResult.skipped(SkipReason.CREDENTIAL_NOT_FOUND)

        username_and_password = self.credentials_provider.to_username_and_password(credential)
        if username_and_password is None:
            return PreJobResult.skipped(SkipReason.UNSUPPORTED_CREDENTIAL)

        entry = find_access_key_entry(configuration.server, username_and_password.password)
        if entry is None:
            return PreJobResult.skipped(SkipReason.NO_ACCESS_KEY)

        if not has_supported_tasks(job.runtime_tasks(), enabled_injectors(configuration, self.injectors)):
            return PreJobResult.skipped(SkipReason.NO_SUPPORTED_TASKS)

        job.variable_context().add_local_variable(ACCESS_KEY, entry.value)
        logger.info(f"Added {ACCESS_KEY} for {configuration.server} to the job context")

        return PreJobResult(variable_name=ACCESS_KEY, access_key=entry.key, variable_value=entry.value)
