"""Derive API URL, owner and repository name from a repository URL."""

import re
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict

from ..config import DEFAULT_API_URL

GITHUB_HOST = "github.com"

# git@github.com:owner/repo.git
SCP_PATTERN = re.compile(r"^[\w.-]+@(?P<host>[\w.-]+):(?P<path>.+)$")


class InvalidRepoUrl(ValueError):
    """The URL does not point at a repository."""


class RepoInfo(BaseModel):
    """What can be deduced from a repository URL."""

    model_config = ConfigDict(frozen=True)

    api_url: str
    owner: str
    name: str


def _api_url_for_host(scheme: str, host: str) -> str:
    if host in (GITHUB_HOST, f"www.{GITHUB_HOST}"):
        return DEFAULT_API_URL
    # GitHub Enterprise serves the REST API under /api/v3
    return f"{scheme}://{host}/api/v3"


def parse_repo_url(url: str) -> RepoInfo:
    """Parse ``https://host/owner/repo`` or ``git@host:owner/repo.git``."""
    scp = SCP_PATTERN.match(url)
    if scp and "://" not in url:
        scheme, host, path = "https", scp.group("host"), scp.group("path")
    else:
        parts = urlsplit(url)
        if parts.scheme not in ("http", "https", "ssh") or not parts.hostname:
            raise InvalidRepoUrl(f"Invalid repository url '{url}'")
        host, path = parts.hostname, parts.path
        if parts.scheme == "ssh":
            scheme = "https"
        else:
            scheme = parts.scheme
            if parts.port:
                host = f"{host}:{parts.port}"

    segments = [s for s in path.strip("/").split("/") if s]
    if len(segments) != 2:
        raise InvalidRepoUrl(f"Expected '<owner>/<repo>' in url '{url}'")

    owner, name = segments
    if name.endswith(".git"):
        name = name[: -len(".git")]
    if not name:
        raise InvalidRepoUrl(f"Missing repository name in url '{url}'")

    return RepoInfo(api_url=_api_url_for_host(scheme, host), owner=owner, name=name)
