# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2025 The Linux Foundation

"""
Build-scan injectors and task support classification.

Each injector knows the build-tool runner tasks it can enhance. A job is
supported when at least one of its enabled tasks belongs to any injector.
"""

import logging
from enum import Enum
from typing import FrozenSet, Iterable, List, Optional, Sequence

from ge_bamboo.core.config import PersistentConfiguration
from ge_bamboo.core.job_context import RuntimeTask

logger = logging.getLogger(__name__)


class TaskPluginKey(Enum):
    """Plugin identifiers of the build-tool runner tasks that can be enhanced."""
    SCRIPT = "com.atlassian.bamboo.plugins.scripttask:task.builder.script"
    COMMAND = "com.atlassian.bamboo.plugins.scripttask:task.builder.command"
    GRADLE = "com.atlassian.bamboo.plugins.gradle:task.builder.gradle"
    MAVEN_2 = "com.atlassian.bamboo.plugins.maven:task.builder.mvn2"
    MAVEN_3 = "com.atlassian.bamboo.plugins.maven:task.builder.mvn3"


class BuildScanInjector:
    """Base class for build tool integrations."""

    name = ""
    plugin_keys: FrozenSet[TaskPluginKey] = frozenset()

    @property
    def supported_plugin_keys(self) -> FrozenSet[str]:
        return frozenset(key.value for key in self.plugin_keys)

    def is_enabled(self, configuration: PersistentConfiguration) -> bool:
        """Whether the configuration switches this injector on."""
        return True

    def supports(self, task: RuntimeTask) -> bool:
        """Whether the task is enabled and handled by this injector."""
        if task.enabled and task.plugin_key in self.supported_plugin_keys:
            logger.debug(f"Task '{task.name or task.plugin_key}' supports {self.name} build scans")
            return True
        return False

    def has_supported_tasks(self, tasks: Iterable[RuntimeTask]) -> bool:
        return any(self.supports(task) for task in tasks)


class GradleBuildScanInjector(BuildScanInjector):
    """Gradle builds run through script, command or Gradle tasks."""

    name = "gradle"
    plugin_keys = frozenset({
        TaskPluginKey.SCRIPT,
        TaskPluginKey.COMMAND,
        TaskPluginKey.GRADLE,
    })


class MavenBuildScanInjector(BuildScanInjector):
    """Maven builds run through the Maven 2 and Maven 3 tasks."""

    name = "maven"
    plugin_keys = frozenset({
        TaskPluginKey.MAVEN_2,
        TaskPluginKey.MAVEN_3,
    })

    def is_enabled(self, configuration: PersistentConfiguration) -> bool:
        return configuration.inject_maven_extension


def default_injectors() -> List[BuildScanInjector]:
    """Get the injectors for every supported build tool."""
    return [GradleBuildScanInjector(), MavenBuildScanInjector()]


def enabled_injectors(configuration: PersistentConfiguration,
                      injectors: Optional[Sequence[BuildScanInjector]] = None) -> List[BuildScanInjector]:
    """Get the injectors switched on by the configuration."""
    if injectors is None:
        injectors = default_injectors()
    return [injector for injector in injectors if injector.is_enabled(configuration)]


def has_supported_tasks(tasks: Iterable[RuntimeTask],
                        injectors: Optional[Sequence[BuildScanInjector]] = None) -> bool:
    """Whether any enabled task is supported by one of the injectors."""
    if injectors is None:
        injectors = default_injectors()

    tasks = list(tasks)
    return any(injector.has_supported_tasks(tasks) for injector in injectors)
