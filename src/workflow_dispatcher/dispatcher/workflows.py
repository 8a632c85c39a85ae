"""Discovery of dispatchable workflows.

A workflow is dispatchable when GitHub reports it as active and its definition
file also exists in the local checkout. The second check guards against stale
or renamed workflows that GitHub still lists.
"""

from __future__ import annotations

import logging
import unicodedata
from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import TypeVar

from workflow_dispatcher.dispatcher.github.client import GitHubActionsClient, Workflow

logger = logging.getLogger(__name__)

T = TypeVar("T")

ACTIVE_STATE = "active"
MAX_FILTER_WORKERS = 16


def filter_concurrently(
    items: Iterable[T],
    predicate: Callable[[T], bool],
    *,
    max_workers: int = MAX_FILTER_WORKERS,
) -> list[T]:
    """Keep the items for which `predicate` holds, evaluating it on a thread pool.

    The relative order of kept items matches the input order, whatever order the
    predicate calls complete in.
    """

    candidates = list(items)
    if not candidates:
        return []

    workers = max(1, min(max_workers, len(candidates)))
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="workflow-filter") as pool:
        keep = list(pool.map(predicate, candidates))

    return [item for item, kept in zip(candidates, keep, strict=True) if kept]


def is_dispatchable(workflow: Workflow, *, workflows_root: Path) -> bool:
    # Some repositories report workflows with an empty name or path; skip them.
    if not workflow.name or not workflow.path:
        return False
    if workflow.state != ACTIVE_STATE:
        return False
    return (workflows_root / workflow.path).is_file()


def workflow_sort_key(workflow: Workflow) -> tuple[str, str, str]:
    """Collation key ordering names the way an ICU root-locale comparison would.

    Accents and case only break ties: "Éclair" sorts with the e's, and "build"
    comes before "Build".
    """

    folded = workflow.name.casefold()
    decomposed = unicodedata.normalize("NFKD", folded)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return (base, folded, workflow.name.swapcase())


def list_active_workflows(client: GitHubActionsClient, *, workflows_root: Path) -> list[Workflow]:
    """Fetch the repository's workflows and keep the dispatchable ones, sorted by name."""

    workflows = client.list_workflows()
    active = filter_concurrently(
        workflows,
        lambda w: is_dispatchable(w, workflows_root=workflows_root),
    )
    logger.info(
        "Filtered dispatchable workflows",
        extra={
            "total": len(workflows),
            "dispatchable": len(active),
            "workflows_root": str(workflows_root),
        },
    )
    return sorted(active, key=workflow_sort_key)
