# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2025 The Linux Foundation

"""Build-scan server reachability checks."""

import logging
from dataclasses import dataclass
from typing import Optional

import httpx

logger = logging.getLogger(__name__)

# Result constants for consistent formatting
RESULT_SUCCESS = "[green]✓[/green]"
RESULT_FAILURE = "[red]✗[/red]"
RESULT_TIMEOUT = "[yellow]⏱[/yellow]"
RESULT_NA = "[dim]N/A[/dim]"


@dataclass
class ServerCheckResult:
    """Outcome of a reachability check."""
    url: str
    reachable: bool
    status_code: Optional[int] = None
    error: Optional[str] = None

    @property
    def display(self) -> str:
        """Color-coded result string."""
        if not self.url:
            return RESULT_NA
        if self.reachable:
            return RESULT_SUCCESS
        if self.error == "timeout":
            return RESULT_TIMEOUT
        if self.status_code is not None:
            return f"[red]✗ ({self.status_code})[/red]"
        return RESULT_FAILURE


class ServerChecker:
    """Checks that the build-scan server answers HTTP requests."""

    def __init__(self, timeout: int = 5, allow_untrusted: bool = False) -> None:
        """Initialize server checker.

        Args:
            timeout: Timeout in seconds
            allow_untrusted: Skip TLS certificate verification
        """
        self.timeout = timeout
        self.allow_untrusted = allow_untrusted

    def check(self, url: str) -> ServerCheckResult:
        if not url:
            return ServerCheckResult(url="", reachable=False)

        try:
            with httpx.Client(timeout=self.timeout, verify=not self.allow_untrusted) as client:
                response = client.head(url, follow_redirects=True)
        except httpx.TimeoutException:
            return ServerCheckResult(url=url, reachable=False, error="timeout")
        except httpx.HTTPError as e:
            logger.debug(f"Request to {url} failed: {e}")
            return ServerCheckResult(url=url, reachable=False, error=str(e))

        return ServerCheckResult(
            url=url,
            reachable=response.status_code < 400,
            status_code=response.status_code,
        )
