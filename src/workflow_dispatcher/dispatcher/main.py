"""CLI entrypoint for the workflow dispatcher."""

from __future__ import annotations

import argparse
import logging
import sys

from pydantic import ValidationError

from workflow_dispatcher import __version__
from workflow_dispatcher.dispatcher.config import DispatcherSettings
from workflow_dispatcher.dispatcher.git import current_branch_name, repository_root
from workflow_dispatcher.dispatcher.github.client import GitHubActionsClient
from workflow_dispatcher.dispatcher.logging import configure_logging
from workflow_dispatcher.dispatcher.prompt import prompt_for_workflow
from workflow_dispatcher.dispatcher.service import (
    WorkflowDispatchService,
    WorkflowNameRequired,
    WorkflowNotFound,
)

logger = logging.getLogger(__name__)

WORKFLOW_DISPATCH_COMMAND = "workflow-dispatch"
WORKFLOW_DISPATCH_ALIASES = ("dispatch", "wd")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="workflow-dispatcher",
        description="Trigger GitHub Actions workflows from the command line",
    )
    parser.add_argument(
        "--version", action="version", version=f"workflow-dispatcher {__version__}"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    dispatch = subparsers.add_parser(
        WORKFLOW_DISPATCH_COMMAND,
        aliases=list(WORKFLOW_DISPATCH_ALIASES),
        help="Dispatches a workflow on GitHub Actions.",
    )
    dispatch.add_argument(
        "workflow_name",
        metavar="workflowName",
        nargs="?",
        default=None,
        help="Name of the workflow to dispatch (prompted for when omitted outside CI)",
    )
    dispatch.add_argument(
        "-r",
        "--ref",
        default=None,
        help=(
            "The reference of the workflow run. The reference can be a branch, tag, "
            "or a commit SHA. Defaults to the current branch."
        ),
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = DispatcherSettings()
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check your environment or .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2

    configure_logging(settings.log_level)

    try:
        if args.command in (WORKFLOW_DISPATCH_COMMAND, *WORKFLOW_DISPATCH_ALIASES):
            workflows_root = settings.workflows_root or repository_root()

            github = GitHubActionsClient(
                token=settings.github_token,
                repository=settings.repository,
                base_url=settings.github_base_url,
                authenticate_discovery=settings.authenticate_discovery,
            )
            try:
                service = WorkflowDispatchService(
                    github=github,
                    workflows_root=workflows_root,
                    non_interactive=settings.non_interactive,
                    prompt=prompt_for_workflow,
                    branch_lookup=lambda: current_branch_name(workflows_root),
                )

                workflow, request = service.prepare(workflow_name=args.workflow_name, ref=args.ref)
                print(
                    f"Dispatching {workflow.name!r} (id={request.workflow_id}) on {request.ref!r}"
                )

                service.dispatch(request)
                print(f"Dispatched workflow #{request.workflow_id} in {github.repository}")
                return 0
            finally:
                github.close()

        logger.error("Unknown command", extra={"command": args.command})
        return 2

    except WorkflowNameRequired as e:
        print(str(e), file=sys.stderr)
        return 2

    except WorkflowNotFound as e:
        logger.debug("Workflow not resolved", extra={"workflow_name": e.name})
        print(str(e), file=sys.stderr)
        return 3

    except Exception:
        logger.exception("Command failed")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
