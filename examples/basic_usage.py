#!/usr/bin/env python3
"""Programmatic workflow listing and dispatch example.

This demonstrates using the dispatcher components directly:

* load settings from the environment or `.env`
* list the workflows that can be dispatched from the local checkout
* optionally dispatch one of them on a ref

Without `--dispatch` the script only prints what it would trigger.
"""

from __future__ import annotations

import argparse
from typing import Sequence

from workflow_dispatcher.dispatcher.config import DispatcherSettings
from workflow_dispatcher.dispatcher.git import current_branch_name, repository_root
from workflow_dispatcher.dispatcher.github.client import GitHubActionsClient
from workflow_dispatcher.dispatcher.logging import configure_logging
from workflow_dispatcher.dispatcher.service import WorkflowDispatchService, WorkflowNotFound


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="List or dispatch workflows (example).")
    parser.add_argument("--workflow", default=None, help="Exact workflow name to dispatch")
    parser.add_argument("--ref", default=None, help="Branch, tag or SHA (default: current branch)")
    parser.add_argument(
        "--dispatch",
        action="store_true",
        help="Actually trigger the workflow instead of printing the request",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)

    settings = DispatcherSettings()
    configure_logging(settings.log_level)

    github = GitHubActionsClient(
        token=settings.github_token,
        repository=settings.repository,
        base_url=settings.github_base_url,
        authenticate_discovery=settings.authenticate_discovery,
    )

    workflows_root = settings.workflows_root or repository_root()

    # Never prompt from the example; a missing name just lists the workflows.
    service = WorkflowDispatchService(
        github=github,
        workflows_root=workflows_root,
        non_interactive=True,
        prompt=lambda workflows: None,
        branch_lookup=lambda: current_branch_name(workflows_root),
    )

    try:
        if args.workflow is None:
            for workflow in service.list_active_workflows():
                print(f"{workflow.id:>12}  {workflow.name}  ({workflow.path})")
            return 0

        try:
            workflow, request = service.prepare(workflow_name=args.workflow, ref=args.ref)
        except WorkflowNotFound as exc:
            print(str(exc))
            return 3

        print(f"Workflow: {workflow.name} (id={request.workflow_id})")
        print(f"Ref: {request.ref}")

        if args.dispatch:
            service.dispatch(request)
            print(f"Dispatched in {github.repository}")
        return 0
    finally:
        github.close()


if __name__ == "__main__":
    raise SystemExit(main())
