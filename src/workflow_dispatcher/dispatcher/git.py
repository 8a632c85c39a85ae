"""Local git lookups."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

logger = logging.getLogger(__name__)


class GitError(RuntimeError):
    """Raised when a git query cannot produce an answer."""


def current_branch_name(cwd: Path | None = None) -> str:
    """Return the currently checked-out branch.

    Raises:
        GitError: Not inside a git repository, git is unavailable, or HEAD is
            detached (there is no branch to report).
    """

    try:
        result = subprocess.run(
            ["git", "rev-parse", "--abbrev-ref", "HEAD"],
            cwd=cwd,
            capture_output=True,
            text=True,
            check=False,
        )
    except FileNotFoundError as e:
        raise GitError("git executable not found") from e

    if result.returncode != 0:
        raise GitError(f"Unable to determine the current branch: {result.stderr.strip()}")

    branch = result.stdout.strip()
    if not branch or branch == "HEAD":
        raise GitError("HEAD is detached; pass an explicit ref instead")

    logger.debug("Resolved current branch", extra={"branch": branch})
    return branch


def repository_root(cwd: Path | None = None) -> Path:
    """Return the top-level directory of the enclosing git checkout.

    Raises:
        GitError: Not inside a git repository, or git is unavailable.
    """

    try:
        result = subprocess.run(
            ["git", "rev-parse", "--show-toplevel"],
            cwd=cwd,
            capture_output=True,
            text=True,
            check=False,
        )
    except FileNotFoundError as e:
        raise GitError("git executable not found") from e

    toplevel = result.stdout.strip()
    if result.returncode != 0 or not toplevel:
        raise GitError(
            f"Unable to locate the repository root: {result.stderr.strip()}; "
            "run inside the checkout or set DISPATCH_WORKFLOWS_ROOT"
        )

    logger.debug("Resolved repository root", extra={"workflows_root": toplevel})
    return Path(toplevel)
