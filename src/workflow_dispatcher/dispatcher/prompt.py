"""Interactive workflow selection."""

from __future__ import annotations

from collections.abc import Sequence

import click

from workflow_dispatcher.dispatcher.github.client import Workflow

PROMPT_MESSAGE = "Which workflow you want to dispatch?"


def prompt_for_workflow(workflows: Sequence[Workflow]) -> int | None:
    """Ask the user to pick one workflow and return its id.

    Every workflow is listed at once, numbered from 1. Returns None when there is
    nothing to choose from or the user aborts the prompt (Ctrl-C / EOF).
    """

    if not workflows:
        return None

    width = len(str(len(workflows)))
    click.echo(PROMPT_MESSAGE)
    for index, workflow in enumerate(workflows, start=1):
        click.echo(f"  {index:>{width}}) {workflow.name}")

    try:
        choice = click.prompt(
            "Workflow number",
            type=click.IntRange(1, len(workflows)),
        )
    except click.Abort:
        click.echo("", err=True)
        return None

    return workflows[choice - 1].id
