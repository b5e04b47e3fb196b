# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2025 The Linux Foundation

"""Tests for core module initialization."""

import pytest


def test_lazy_import_pre_job_action() -> None:
    """Test lazy import of PreJobAction."""
    from ge_bamboo.core import PreJobAction

    assert PreJobAction.__name__ == "PreJobAction"


def test_lazy_import_pre_job_result() -> None:
    """Test lazy import of PreJobResult."""
    from ge_bamboo.core import PreJobResult

    assert PreJobResult().injected


def test_getattr_invalid_attribute() -> None:
    """Test that invalid attribute access raises AttributeError."""
    import ge_bamboo.core

    with pytest.raises(AttributeError, match="module 'ge_bamboo.core' has no attribute 'InvalidClass'"):
        ge_bamboo.core.InvalidClass  # type: ignore[attr-defined]


def test_package_exports() -> None:
    """Test that the package exports the pre-job action."""
    import ge_bamboo

    assert "PreJobAction" in ge_bamboo.__all__
    assert ge_bamboo.__version__ == "0.1.0"
