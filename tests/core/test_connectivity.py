# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2025 The Linux Foundation

"""Test build-scan server reachability checks."""

from unittest.mock import MagicMock, patch

import httpx

from ge_bamboo.core.connectivity import (
    RESULT_FAILURE,
    RESULT_NA,
    RESULT_SUCCESS,
    RESULT_TIMEOUT,
    ServerChecker,
)


class TestServerChecker:
    """Test the ServerChecker class."""

    def test_init_defaults(self):
        """Test ServerChecker defaults."""
        checker = ServerChecker()
        assert checker.timeout == 5
        assert checker.allow_untrusted is False

    @patch("ge_bamboo.core.connectivity.httpx.Client")
    def test_check_success(self, mock_client):
        """Test a reachable server."""
        mock_response = MagicMock()
        mock_response.status_code = 200
        mock_client.return_value.__enter__.return_value.head.return_value = mock_response

        result = ServerChecker().check("https://ge.example.com")

        assert result.reachable
        assert result.display == RESULT_SUCCESS
        mock_client.assert_called_once_with(timeout=5, verify=True)

    @patch("ge_bamboo.core.connectivity.httpx.Client")
    def test_check_untrusted_disables_verification(self, mock_client):
        """Test that untrusted servers skip certificate verification."""
        mock_response = MagicMock()
        mock_response.status_code = 200
        mock_client.return_value.__enter__.return_value.head.return_value = mock_response

        ServerChecker(timeout=2, allow_untrusted=True).check("https://ge.example.com")

        mock_client.assert_called_once_with(timeout=2, verify=False)

    @patch("ge_bamboo.core.connectivity.httpx.Client")
    def test_check_error_status(self, mock_client):
        """Test a server answering with an error status."""
        mock_response = MagicMock()
        mock_response.status_code = 503
        mock_client.return_value.__enter__.return_value.head.return_value = mock_response

        result = ServerChecker().check("https://ge.example.com")

        assert not result.reachable
        assert "503" in result.display

    @patch("ge_bamboo.core.connectivity.httpx.Client")
    def test_check_timeout(self, mock_client):
        """Test a server that does not answer in time."""
        mock_client.return_value.__enter__.return_value.head.side_effect = httpx.ConnectTimeout("timed out")

        result = ServerChecker().check("https://ge.example.com")

        assert not result.reachable
        assert result.display == RESULT_TIMEOUT

    @patch("ge_bamboo.core.connectivity.httpx.Client")
    def test_check_connection_error(self, mock_client):
        """Test a server that refuses connections."""
        mock_client.return_value.__enter__.return_value.head.side_effect = httpx.ConnectError("refused")

        result = ServerChecker().check("https://ge.example.com")

        assert not result.reachable
        assert result.display == RESULT_FAILURE

    def test_check_empty_url(self):
        """Test checking without a URL."""
        assert ServerChecker().check("").display == RESULT_NA
