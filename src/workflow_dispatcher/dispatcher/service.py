"""Workflow dispatch service.

Runs the dispatch command end to end:
- discover the dispatchable workflows
- resolve the requested (or interactively chosen) workflow to an id
- resolve the ref, defaulting to the current branch
- trigger the dispatch
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path

from workflow_dispatcher.dispatcher.github.client import (
    DispatchRequest,
    GitHubActionsClient,
    Workflow,
)
from workflow_dispatcher.dispatcher.workflows import list_active_workflows

logger = logging.getLogger(__name__)

WorkflowPrompt = Callable[[Sequence[Workflow]], int | None]
BranchLookup = Callable[[], str]


class DispatchError(Exception):
    """Base class for dispatcher failures that are not remote or git errors."""


class WorkflowNameRequired(DispatchError):
    """Raised when no workflow name is given in a non-interactive run."""

    def __str__(self) -> str:
        return "Command requires `workflowName` argument when run on the CI."


@dataclass(frozen=True, slots=True)
class WorkflowNotFound(DispatchError):
    """Raised when no workflow id could be resolved."""

    name: str | None

    def __str__(self) -> str:
        if self.name:
            return f"Unable to find workflow ID for {self.name!r}."
        return "Unable to find workflow ID."


class NoWorkflowSelected(WorkflowNotFound):
    """Raised when the interactive prompt ends without a selection."""

    def __str__(self) -> str:
        return "No workflow selected."


@dataclass(frozen=True, slots=True)
class NoDispatchableWorkflows(WorkflowNotFound):
    """Raised when no workflow survives discovery, usually a misconfigured root."""

    workflows_root: Path | None = None

    def __str__(self) -> str:
        return f"No dispatchable workflows found under {self.workflows_root}"


def find_workflow_id(workflows: Sequence[Workflow], name: str) -> int | None:
    """Return the id of the first workflow named exactly `name`."""

    for workflow in workflows:
        if workflow.name == name:
            return workflow.id
    return None


def resolve_workflow_id(
    workflows: Sequence[Workflow],
    requested_name: str | None,
    *,
    non_interactive: bool,
    prompt: WorkflowPrompt,
) -> int | None:
    """Resolve a workflow name, or an interactive choice, to a workflow id.

    Raises:
        WorkflowNameRequired: No name was given and prompting is disabled.
        NoWorkflowSelected: The prompt ended without a choice.
    """

    if requested_name:
        return find_workflow_id(workflows, requested_name)

    if non_interactive:
        raise WorkflowNameRequired()

    workflow_id = prompt(workflows)
    if workflow_id is None:
        raise NoWorkflowSelected(name=None)
    return workflow_id


def resolve_ref(explicit_ref: str | None, branch_lookup: BranchLookup) -> str:
    """Return the explicit ref verbatim, or fall back to the current branch."""

    if explicit_ref:
        return explicit_ref
    return branch_lookup()


class WorkflowDispatchService:
    """Resolve and dispatch a single workflow run."""

    def __init__(
        self,
        *,
        github: GitHubActionsClient,
        workflows_root: Path,
        non_interactive: bool,
        prompt: WorkflowPrompt,
        branch_lookup: BranchLookup,
    ) -> None:
        self._github = github
        self._workflows_root = workflows_root
        self._non_interactive = non_interactive
        self._prompt = prompt
        self._branch_lookup = branch_lookup

    def list_active_workflows(self) -> list[Workflow]:
        return list_active_workflows(self._github, workflows_root=self._workflows_root)

    def prepare(
        self, *, workflow_name: str | None, ref: str | None
    ) -> tuple[Workflow, DispatchRequest]:
        """Resolve everything needed for a dispatch without triggering it.

        Raises:
            WorkflowNameRequired: No name given on CI.
            NoDispatchableWorkflows: Discovery found nothing under the workflows root.
            WorkflowNotFound: The name did not match, or nothing was selected.
            GitError: No ref given and the current branch is unknown.
        """

        if not workflow_name and self._non_interactive:
            raise WorkflowNameRequired()

        workflows = self.list_active_workflows()
        if not workflows:
            raise NoDispatchableWorkflows(workflow_name, self._workflows_root)

        workflow_id = resolve_workflow_id(
            workflows,
            workflow_name,
            non_interactive=self._non_interactive,
            prompt=self._prompt,
        )
        workflow = next((w for w in workflows if w.id == workflow_id), None)
        if workflow_id is None or workflow is None:
            raise WorkflowNotFound(workflow_name)

        resolved_ref = resolve_ref(ref, self._branch_lookup)
        return workflow, DispatchRequest(workflow_id=workflow_id, ref=resolved_ref)

    def dispatch(self, request: DispatchRequest) -> None:
        logger.info(
            "Dispatching workflow",
            extra={
                "repo": self._github.repository,
                "workflow_id": request.workflow_id,
                "ref": request.ref,
            },
        )
        self._github.dispatch_workflow(workflow_id=request.workflow_id, ref=request.ref)

    def run(self, *, workflow_name: str | None, ref: str | None) -> DispatchRequest:
        """Resolve and dispatch in one go; returns what was dispatched."""

        _, request = self.prepare(workflow_name=workflow_name, ref=ref)
        self.dispatch(request)
        return request
