"""Git repository detection — derive a :class:`RepoInfo` from ``origin``.

All git subprocess calls are wrapped in try/except so a missing git binary
or a directory outside any repository simply yields no repo scope.
"""

from __future__ import annotations

import logging
import re
import subprocess
from pathlib import Path
from urllib.parse import urlparse

from locus.domain.types import RepoInfo

logger = logging.getLogger(__name__)

# SCP-like syntax: git@github.com:owner/repo.git
_SCP_PATTERN = re.compile(r"^(?:[\w.-]+@)?([^:/]+):(?!//)(.+)$")


def parse_remote_url(url: str) -> RepoInfo | None:
    """Parse a git remote URL into host/owner/repo.

    Supports SCP-like SSH (``git@host:owner/repo.git``), ``https://``,
    ``ssh://``, and ``git://`` URLs. Nested groups are kept in ``owner``.

    Examples:
        >>> parse_remote_url("git@github.com:alice/project.git")
        RepoInfo(host='github.com', owner='alice', repo='project')
        >>> parse_remote_url("https://gitlab.com/group/sub/tool")
        RepoInfo(host='gitlab.com', owner='group/sub', repo='tool')
    """
    raw = url.strip()
    if not raw:
        return None

    scp = _SCP_PATTERN.match(raw)
    if scp and "://" not in raw:
        host, path = scp.group(1), scp.group(2)
    else:
        parsed = urlparse(raw)
        if not parsed.hostname:
            return None
        host, path = parsed.hostname, parsed.path

    path = path.strip("/")
    if path.endswith(".git"):
        path = path[:-4]
    parts = [part for part in path.split("/") if part]
    if len(parts) < 2:
        return None
    return RepoInfo(host=host, owner="/".join(parts[:-1]), repo=parts[-1])


def _run_git(cwd: Path, *args: str) -> subprocess.CompletedProcess[str]:
    """Run a git command in *cwd*. Raises on failure."""
    return subprocess.run(
        ["git", *args],
        cwd=cwd,
        capture_output=True,
        text=True,
        check=True,
    )


def detect_repo_info(cwd: Path | None = None) -> RepoInfo | None:
    """Return the repo scope for *cwd* (default: current directory), or None."""
    try:
        result = _run_git(cwd or Path.cwd(), "remote", "get-url", "origin")
    except (OSError, subprocess.CalledProcessError) as exc:
        logger.debug("git remote lookup failed: %s", exc)
        return None

    info = parse_remote_url(result.stdout)
    if info is None:
        logger.debug("Unrecognized git remote URL: %r", result.stdout.strip())
    else:
        logger.debug("Repo scope: %s", info.slug)
    return info
