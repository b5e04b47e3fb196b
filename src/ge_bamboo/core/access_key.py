# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2025 The Linux Foundation

"""
Access key extraction from shared credential passwords.

The password field of the shared credential carries one ``host=accessKey``
entry per line, for example::

    scans.gradle.com=7w5kbqqjea4vonghohvuyra5bnvszop4asbqee3m3sm6dbjdudtq
    ge.example.com=abcd1234

Lines are split on ``\\n`` only and each line on its first ``=``. Blank and
malformed lines are skipped, and no other whitespace is trimmed. Hosts are
compared by their host component, case-sensitively, and the first matching
line wins.
"""

from dataclasses import dataclass
from typing import List, Optional
from urllib.parse import urlsplit


@dataclass(frozen=True)
class AccessKeyEntry:
    """A single host=accessKey pair."""
    host: str
    key: str

    @property
    def value(self) -> str:
        """The entry as written, host=accessKey."""
        return f"{self.host}={self.key}"


def host_of(value: str) -> str:
    """Get the host component of a server URL or bare host name.

    Userinfo and port are dropped from URLs; case is preserved.
    """
    if "://" not in value:
        return value

    netloc = urlsplit(value).netloc
    netloc = netloc.rpartition("@")[2]
    if netloc.startswith("["):
        # IPv6 literal, keep the brackets
        return netloc[:netloc.index("]") + 1] if "]" in netloc else netloc
    return netloc.partition(":")[0]


def parse_access_keys(blob: Optional[str]) -> List[AccessKeyEntry]:
    """Parse a password blob into its host=accessKey entries, in order."""
    entries: List[AccessKeyEntry] = []
    if not blob:
        return entries

    for line in blob.split("\n"):
        if not line:
            continue
        host, separator, key = line.partition("=")
        if not separator or not host or not key:
            continue
        entries.append(AccessKeyEntry(host=host, key=key))

    return entries


def find_access_key_entry(server_url: Optional[str], blob: Optional[str]) -> Optional[AccessKeyEntry]:
    """Get the first entry of a password blob whose host is server_url's host.

    Returns None when either input is empty or no entry matches.
    """
    if not server_url or not blob:
        return None

    target = host_of(server_url)
    if not target:
        return None

    for entry in parse_access_keys(blob):
        if host_of(entry.host) == target:
            return entry

    return None


def resolve_access_key(server_url: Optional[str], blob: Optional[str]) -> Optional[str]:
    """Get the access key for server_url from a password blob."""
    entry = find_access_key_entry(server_url, blob)
    return entry.key if entry else None
