# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2025 The Linux Foundation

"""Job execution context seen by the pre-job action."""

import logging
import pathlib
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence

import yaml

from ge_bamboo.core.errors import JobDescriptionError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RuntimeTask:
    """A task configured in a job."""
    plugin_key: str
    enabled: bool = True
    name: str = ""


class VariableContext:
    """Mutable variables of a single job."""

    def __init__(self, variables: Optional[Mapping[str, str]] = None):
        self._inherited: Dict[str, str] = dict(variables or {})
        self._local: Dict[str, str] = {}

    def add_local_variable(self, name: str, value: str) -> None:
        """Add a variable visible to this job only, replacing any previous value."""
        self._local[name] = value

    def get(self, name: str) -> Optional[str]:
        if name in self._local:
            return self._local[name]
        return self._inherited.get(name)

    @property
    def local_variables(self) -> Dict[str, str]:
        return dict(self._local)

    @property
    def effective_variables(self) -> Dict[str, str]:
        """All variables, local ones overriding inherited ones."""
        variables = dict(self._inherited)
        variables.update(self._local)
        return variables


class JobExecutionContext(ABC):
    """Per-job runtime state owned by the CI host."""

    @abstractmethod
    def runtime_tasks(self) -> Sequence[RuntimeTask]:
        """Get the tasks configured in the job."""
        pass

    @abstractmethod
    def variable_context(self) -> VariableContext:
        """Get the job's mutable variable context."""
        pass


class BuildJob(JobExecutionContext):
    """Plain job execution context built from a job description."""

    def __init__(self,
                 key: str,
                 tasks: Optional[List[RuntimeTask]] = None,
                 variables: Optional[Mapping[str, str]] = None):
        self.key = key
        self.tasks: List[RuntimeTask] = list(tasks or [])
        self.variables = VariableContext(variables)

    def runtime_tasks(self) -> Sequence[RuntimeTask]:
        return list(self.tasks)

    def variable_context(self) -> VariableContext:
        return self.variables

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "BuildJob":
        """Build a job from a description mapping.

        Expected shape::

            key: PROJ-PLAN-JOB1
            tasks:
              - plugin_key: com.atlassian.bamboo.plugins.scripttask:task.builder.script
                enabled: true
                name: Run Gradle
            variables:
              build.flavor: release
        """
        tasks_data = data.get("tasks") or []
        if not isinstance(tasks_data, list):
            raise JobDescriptionError("Job 'tasks' must be a list")

        tasks: List[RuntimeTask] = []
        for index, task in enumerate(tasks_data):
            if not isinstance(task, dict) or not task.get("plugin_key"):
                raise JobDescriptionError(f"Task #{index + 1} is missing a plugin_key")
            tasks.append(RuntimeTask(
                plugin_key=str(task["plugin_key"]),
                enabled=bool(task.get("enabled", True)),
                name=str(task.get("name", "")),
            ))

        variables = data.get("variables") or {}
        if not isinstance(variables, dict):
            raise JobDescriptionError("Job 'variables' must be a mapping")

        return cls(
            key=str(data.get("key", "")),
            tasks=tasks,
            variables={str(k): str(v) for k, v in variables.items()},
        )


def load_job(path: pathlib.Path) -> BuildJob:
    """Load a job description from a YAML file."""
    path = pathlib.Path(path)
    if not path.exists():
        raise JobDescriptionError(f"Job description not found: {path}")

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise JobDescriptionError(f"Failed to read job description {path}: {e}") from e

    if not isinstance(data, dict):
        raise JobDescriptionError(f"Job description {path} must contain a mapping")

    job = BuildJob.from_dict(data)
    logger.debug(f"Loaded job '{job.key}' with {len(job.tasks)} tasks from {path}")
    return job
