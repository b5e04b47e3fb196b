# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2025 The Linux Foundation

"""Core modules for ge-bamboo."""

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ge_bamboo.core.pre_job_action import PreJobAction, PreJobResult

__all__ = ["PreJobAction", "PreJobResult"]


def __getattr__(name: str) -> Any:
    """Lazy import for core modules."""
    if name == "PreJobAction":
        from ge_bamboo.core.pre_job_action import PreJobAction
        return PreJobAction
    elif name == "PreJobResult":
        from ge_bamboo.core.pre_job_action import PreJobResult
        return PreJobResult
    else:
        raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
