"""GitHub Actions API client wrapper.

Wraps PyGithub for the workflow listing and a `requests` session for the
dispatch call, keeping GitHub calls out of CLI code and making tests easy.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import requests
from github import Auth, Github
from github.Repository import Repository

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Workflow:
    """Minimal workflow metadata returned from GitHub."""

    id: int
    name: str
    path: str
    state: str


@dataclass(frozen=True, slots=True)
class DispatchRequest:
    """A resolved workflow id paired with the ref the run should use."""

    workflow_id: int
    ref: str


class GitHubActionsClient:
    """Small wrapper around the two Actions endpoints the dispatcher needs."""

    def __init__(
        self,
        *,
        token: str,
        repository: str,
        base_url: str = "https://api.github.com",
        authenticate_discovery: bool = False,
        repo: Repository | None = None,
        github_api: Github | None = None,
        session: requests.Session | None = None,
    ) -> None:
        if not token:
            raise ValueError("GitHub token is required")
        if not repository:
            raise ValueError("GitHub repository is required")

        self._repository_name = repository
        self._rest_base_url = base_url.rstrip("/")
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
                "User-Agent": "workflow-dispatcher",
            }
        )

        if repo is not None:
            self._repo = repo
            self._github = None
            logger.debug("Using injected Repository instance")
            return

        # Only the dispatch call needs credentials; listing workflows of a public
        # repository works anonymously unless told otherwise.
        auth = Auth.Token(token) if authenticate_discovery else None
        self._github = github_api or Github(auth=auth, base_url=base_url)

        # Lazy: no request is made until workflows are listed.
        self._repo = self._github.get_repo(repository, lazy=True)
        logger.debug(
            "Prepared GitHub repository handle",
            extra={"repo": repository, "authenticated_discovery": authenticate_discovery},
        )

    @property
    def repository(self) -> str:
        """Return the configured repository name ("owner/repo")."""

        return self._repository_name

    def _dispatches_url(self, *, workflow_id: int) -> str:
        return (
            f"{self._rest_base_url}/repos/{self._repository_name}"
            f"/actions/workflows/{workflow_id}/dispatches"
        )

    def list_workflows(self) -> list[Workflow]:
        """Return every workflow defined in the repository, across all pages."""

        logger.debug("Listing workflows", extra={"repo": self._repository_name})
        workflows = [
            Workflow(
                id=int(w.id),
                name=w.name or "",
                path=w.path or "",
                state=w.state or "",
            )
            for w in self._repo.get_workflows()
        ]
        logger.info(
            "Fetched workflows", extra={"repo": self._repository_name, "count": len(workflows)}
        )
        return workflows

    def dispatch_workflow(self, *, workflow_id: int, ref: str) -> None:
        """Trigger a `workflow_dispatch` event for a workflow on a ref.

        Raises:
            requests.HTTPError: GitHub rejected the dispatch (unknown workflow,
                invalid ref, insufficient permission, ...).
        """

        url = self._dispatches_url(workflow_id=workflow_id)
        resp = self._session.post(url, json={"ref": ref}, timeout=30)
        resp.raise_for_status()
        logger.info(
            "Workflow dispatched",
            extra={"repo": self._repository_name, "workflow_id": workflow_id, "ref": ref},
        )

    def close(self) -> None:
        """Release the HTTP session and the PyGithub connection pool."""

        self._session.close()
        if self._github is not None:
            self._github.close()
