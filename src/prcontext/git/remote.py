"""Remote URL parsing - turn a git remote into an owner/repository pair."""

from __future__ import annotations

import re
from dataclasses import dataclass

from prcontext.exceptions import ConfigurationError


@dataclass(frozen=True)
class RemoteIdentity:
    """Owner and repository name of the hosted repository."""
    owner: str
    name: str

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.name}"


def _url_patterns(host: str) -> list[re.Pattern[str]]:
    host_re = re.escape(host)
    return [
        # https://github.com/owner/repo.git, ssh://git@github.com/owner/repo
        re.compile(rf"^[a-z][a-z0-9+.-]*://(?:[^@/]+@)?{host_re}(?::\d+)?/([^/]+)/([^/]+?)/?$"),
        # git@github.com:owner/repo.git
        re.compile(rf"^[^@/]+@{host_re}:([^/]+)/([^/]+?)/?$"),
    ]


def parse_remote_url(url: str, host: str = "github.com") -> RemoteIdentity:
    """Extract (owner, name) from a remote URL on ``host``.

    Raises:
        ConfigurationError: if the URL is not one of the two accepted forms.
    """
    candidate = url.strip()
    for pattern in _url_patterns(host):
        match = pattern.match(candidate)
        if not match:
            continue
        owner, name = match.group(1), match.group(2)
        if name.endswith(".git"):
            name = name[: -len(".git")]
        if owner and name:
            return RemoteIdentity(owner=owner, name=name)

    raise ConfigurationError(
        f"Could not parse GitHub repository from remote URL: {url}"
    )
