# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2025 The Linux Foundation

"""Tests for job CLI commands."""

from unittest.mock import Mock, patch

import yaml
from typer.testing import CliRunner

from ge_bamboo.commands.job import job_app
from ge_bamboo.core.config import CONFIG_KEY
from ge_bamboo.core.connectivity import ServerCheckResult


class TestJobRunCommand:
    """Test cases for the job run command."""

    def setup_method(self) -> None:
        """Set up test fixtures."""
        self.runner = CliRunner()

    def test_run_injects_access_key(self, populated_config_dir, job_file) -> None:
        """Test running the action against a supported job."""
        result = self.runner.invoke(job_app, [
            "run", str(job_file), "--config-dir", str(populated_config_dir),
            "--format", "json", "--show-secrets",
        ])

        assert result.exit_code == 0
        assert "Injected GRADLE_ENTERPRISE_ACCESS_KEY" in result.output
        assert '{"name":"GRADLE_ENTERPRISE_ACCESS_KEY","value":"scans.gradle.com=SECRET","scope":"local"}' in result.output
        assert '{"name":"build.flavor","value":"release","scope":"inherited"}' in result.output

    def test_run_masks_secrets_by_default(self, populated_config_dir, job_file) -> None:
        """Test that variable values are masked unless asked otherwise."""
        result = self.runner.invoke(job_app, [
            "run", str(job_file), "--config-dir", str(populated_config_dir), "--format", "json",
        ])

        assert result.exit_code == 0
        assert '"value":"****CRET"' in result.output
        assert '"value":"SECRET"' not in result.output
        assert "scans.gradle.com=SECRET" not in result.output

    def test_run_skips_unsupported_job(self, populated_config_dir, tmp_path) -> None:
        """Test that a job without supported tasks is left unchanged."""
        job_file = tmp_path / "job.yaml"
        job_file.write_text(yaml.safe_dump({
            "key": "PROJ-PLAN-JOB2",
            "tasks": [{"plugin_key": "unsupported_plugin_key"}],
        }))

        result = self.runner.invoke(job_app, [
            "run", str(job_file), "--config-dir", str(populated_config_dir), "--format", "json",
        ])

        assert result.exit_code == 0
        assert "Skipped: no_supported_tasks" in result.output
        assert "GRADLE_ENTERPRISE_ACCESS_KEY" not in result.output

    def test_run_without_configuration(self, config_dir, job_file) -> None:
        """Test that a missing configuration is not an error."""
        result = self.runner.invoke(job_app, ["run", str(job_file), "--config-dir", str(config_dir)])

        assert result.exit_code == 0
        assert "Skipped: no_configuration" in result.output

    def test_run_missing_job_file(self, config_dir, tmp_path) -> None:
        """Test running against a job description that does not exist."""
        result = self.runner.invoke(
            job_app, ["run", str(tmp_path / "missing.yaml"), "--config-dir", str(config_dir)]
        )

        assert result.exit_code == 1
        assert "Job description not found" in result.output


class TestResolveKeyCommand:
    """Test cases for the job resolve-key command."""

    def setup_method(self) -> None:
        """Set up test fixtures."""
        self.runner = CliRunner()

    def test_resolve_configured_server(self, populated_config_dir) -> None:
        """Test resolving the key for the configured server."""
        result = self.runner.invoke(job_app, [
            "resolve-key", "--config-dir", str(populated_config_dir), "--show-secrets",
        ])

        assert result.exit_code == 0
        assert result.output.strip() == "SECRET"

    def test_resolve_other_server(self, populated_config_dir) -> None:
        """Test resolving the key for another server."""
        result = self.runner.invoke(job_app, [
            "resolve-key", "--config-dir", str(populated_config_dir),
            "--server", "https://ge.example.com", "--show-secrets",
        ])

        assert result.exit_code == 0
        assert result.output.strip() == "OTHER"

    def test_resolve_unknown_server(self, populated_config_dir) -> None:
        """Test a server without an access key."""
        result = self.runner.invoke(job_app, [
            "resolve-key", "--config-dir", str(populated_config_dir), "--server", "https://nowhere.example.com",
        ])

        assert result.exit_code == 1
        assert "No access key" in result.output

    def test_resolve_without_configuration(self, config_dir) -> None:
        """Test resolving without a configured credential."""
        result = self.runner.invoke(job_app, ["resolve-key", "--config-dir", str(config_dir)])

        assert result.exit_code == 1
        assert "No shared credential configured" in result.output


class TestCheckServerCommand:
    """Test cases for the job check-server command."""

    def setup_method(self) -> None:
        """Set up test fixtures."""
        self.runner = CliRunner()

    @patch("ge_bamboo.commands.job.ServerChecker")
    def test_check_reachable(self, mock_checker_class: Mock, populated_config_dir) -> None:
        """Test a reachable server."""
        mock_checker_class.return_value.check.return_value = ServerCheckResult(
            url="https://scans.gradle.com", reachable=True, status_code=200
        )

        result = self.runner.invoke(job_app, ["check-server", "--config-dir", str(populated_config_dir)])

        assert result.exit_code == 0
        assert "https://scans.gradle.com" in result.output
        mock_checker_class.assert_called_once_with(timeout=5, allow_untrusted=False)
        mock_checker_class.return_value.check.assert_called_once_with("https://scans.gradle.com")

    @patch("ge_bamboo.commands.job.ServerChecker")
    def test_check_unreachable(self, mock_checker_class: Mock, populated_config_dir) -> None:
        """Test an unreachable server."""
        mock_checker_class.return_value.check.return_value = ServerCheckResult(
            url="https://scans.gradle.com", reachable=False, error="refused"
        )

        result = self.runner.invoke(job_app, ["check-server", "--config-dir", str(populated_config_dir)])

        assert result.exit_code == 1

    @patch("ge_bamboo.commands.job.ServerChecker")
    def test_check_honours_allow_untrusted(self, mock_checker_class: Mock, config_dir) -> None:
        """Test that allow_untrusted_server is passed to the checker."""
        (config_dir / "config.yaml").write_text(yaml.safe_dump({
            CONFIG_KEY: {"server": "https://ge.internal", "allow_untrusted_server": True},
        }))
        mock_checker_class.return_value.check.return_value = ServerCheckResult(
            url="https://ge.internal", reachable=True, status_code=200
        )

        result = self.runner.invoke(
            job_app, ["check-server", "--config-dir", str(config_dir), "--timeout", "2"]
        )

        assert result.exit_code == 0
        mock_checker_class.assert_called_once_with(timeout=2, allow_untrusted=True)

    def test_check_without_server(self, config_dir) -> None:
        """Test checking without a configured server."""
        result = self.runner.invoke(job_app, ["check-server", "--config-dir", str(config_dir)])

        assert result.exit_code == 1
        assert "No server configured" in result.output
