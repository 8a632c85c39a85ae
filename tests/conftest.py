"""Test configuration and fixtures."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from unittest.mock import Mock

import pytest

from workflow_dispatcher.dispatcher.github.client import GitHubActionsClient, Workflow

_SETTINGS_ENV_VARS = (
    "GITHUB_TOKEN",
    "CI",
    "GITHUB_BASE_URL",
    "DISPATCH_REPOSITORY",
    "DISPATCH_WORKFLOWS_ROOT",
    "DISPATCH_AUTHENTICATE_DISCOVERY",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's environment and any `.env` file out of the tests."""
    for name in _SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def workflows_root(tmp_path: Path) -> Path:
    """Provide a fake local checkout containing a workflows directory."""
    root = tmp_path / "checkout"
    (root / ".github" / "workflows").mkdir(parents=True)
    return root


@pytest.fixture
def make_workflow(workflows_root: Path) -> Callable[..., Workflow]:
    """Build workflows, optionally creating their definition file on disk."""

    def _make(
        id: int,
        name: str,
        *,
        path: str | None = None,
        state: str = "active",
        on_disk: bool = True,
    ) -> Workflow:
        path = path if path is not None else f".github/workflows/{name.lower() or id}.yml"
        if on_disk and path:
            target = workflows_root / path
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text("on: workflow_dispatch\n", encoding="utf-8")
        return Workflow(id=id, name=name, path=path, state=state)

    return _make


@pytest.fixture
def mock_github() -> Mock:
    """Provide a mocked Actions client for the `expo/expo` repository."""
    github = Mock(spec=GitHubActionsClient)
    github.repository = "expo/expo"
    github.list_workflows.return_value = []
    return github
