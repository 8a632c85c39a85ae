"""Unit tests for the GitHub Actions client wrapper (mocked)."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import Mock

import pytest
import requests
from github import Auth

from workflow_dispatcher.dispatcher.github import client as client_module
from workflow_dispatcher.dispatcher.github.client import GitHubActionsClient, Workflow


def _session() -> Mock:
    session = Mock(spec=requests.Session)
    session.headers = {}
    return session


def test_client_requires_token() -> None:
    with pytest.raises(ValueError, match="token"):
        GitHubActionsClient(token="", repository="expo/expo", repo=Mock(), session=_session())


def test_client_requires_repository() -> None:
    with pytest.raises(ValueError, match="repository"):
        GitHubActionsClient(token="t", repository="", repo=Mock(), session=_session())


def test_list_workflows_maps_all_pages_to_workflows() -> None:
    repo = Mock()
    repo.get_workflows.return_value = [
        SimpleNamespace(id=1, name="CI", path=".github/workflows/ci.yml", state="active"),
        SimpleNamespace(id=2, name=None, path=None, state="disabled_manually"),
    ]
    client = GitHubActionsClient(token="t", repository="expo/expo", repo=repo, session=_session())

    workflows = client.list_workflows()

    assert workflows == [
        Workflow(id=1, name="CI", path=".github/workflows/ci.yml", state="active"),
        Workflow(id=2, name="", path="", state="disabled_manually"),
    ]
    repo.get_workflows.assert_called_once_with()


def test_dispatch_workflow_posts_ref_with_bearer_token() -> None:
    session = _session()
    client = GitHubActionsClient(
        token="secret",
        repository="expo/expo",
        base_url="https://api.github.com/",
        repo=Mock(),
        session=session,
    )

    client.dispatch_workflow(workflow_id=42, ref="main")

    session.post.assert_called_once_with(
        "https://api.github.com/repos/expo/expo/actions/workflows/42/dispatches",
        json={"ref": "main"},
        timeout=30,
    )
    session.post.return_value.raise_for_status.assert_called_once_with()
    assert session.headers["Authorization"] == "Bearer secret"
    assert session.headers["Accept"] == "application/vnd.github+json"


def test_dispatch_workflow_propagates_http_errors() -> None:
    session = _session()
    session.post.return_value.raise_for_status.side_effect = requests.HTTPError("422")
    client = GitHubActionsClient(token="t", repository="expo/expo", repo=Mock(), session=session)

    with pytest.raises(requests.HTTPError):
        client.dispatch_workflow(workflow_id=1, ref="no-such-branch")


def test_discovery_is_anonymous_by_default(monkeypatch: pytest.MonkeyPatch) -> None:
    github_cls = Mock()
    monkeypatch.setattr(client_module, "Github", github_cls)

    client = GitHubActionsClient(token="secret", repository="expo/expo", session=_session())

    github_cls.assert_called_once_with(auth=None, base_url="https://api.github.com")
    github_cls.return_value.get_repo.assert_called_once_with("expo/expo", lazy=True)
    assert client.repository == "expo/expo"


def test_discovery_can_be_authenticated(monkeypatch: pytest.MonkeyPatch) -> None:
    github_cls = Mock()
    monkeypatch.setattr(client_module, "Github", github_cls)

    GitHubActionsClient(
        token="secret",
        repository="expo/expo",
        authenticate_discovery=True,
        session=_session(),
    )

    auth = github_cls.call_args.kwargs["auth"]
    assert isinstance(auth, Auth.Token)
    assert auth.token == "secret"


def test_close_releases_session_and_github(monkeypatch: pytest.MonkeyPatch) -> None:
    github_cls = Mock()
    monkeypatch.setattr(client_module, "Github", github_cls)
    session = _session()

    client = GitHubActionsClient(token="t", repository="expo/expo", session=session)
    client.close()

    session.close.assert_called_once_with()
    github_cls.return_value.close.assert_called_once_with()
