"""
Sync Engine - one reconcile-and-apply run.

Handles:
- Reading both services into keyed snapshots (fail fast)
- Reconciling the snapshots
- Applying adds, then removals, then completions (log and continue)
"""

import logging
from typing import Callable, Iterable, Optional, TypeVar

import httpx

from .config import Config
from .models import ActionSet, PomodoroTask, WorkspaceTask
from .notion_client import NotionClient
from .pomotodo_client import PomotodoClient
from .reconciler import reconcile

logger = logging.getLogger(__name__)

T = TypeVar('T')


def index_by(items: Iterable[T], key: Callable[[T], str], source: str) -> dict[str, T]:
    """
    Build a mapping from ``key(item)`` to item.

    Later items overwrite earlier ones on a key collision; each collision is
    logged so duplicate names upstream are visible.
    """
    mapping: dict[str, T] = {}
    for item in items:
        k = key(item)
        if k in mapping:
            logger.warning(f"Duplicate {source} task {k!r}: keeping the last one read")
        mapping[k] = item
    return mapping


class SyncEngine:
    """Notion → Pomotodo sync engine."""

    def __init__(
        self,
        config: Config,
        notion: Optional[NotionClient] = None,
        pomotodo: Optional[PomotodoClient] = None,
    ):
        self.config = config
        self.prefix = config.task_prefix
        self.notion = notion or NotionClient(config)
        self.pomotodo = pomotodo or PomotodoClient(config)

    # ==========================================================================
    # Reads (any failure aborts the run)
    # ==========================================================================

    def read_workspace_tasks(self) -> dict[str, WorkspaceTask]:
        """In-progress Notion tasks keyed by prefixed title."""
        tasks = self.notion.get_in_progress_tasks(self.prefix)
        return index_by(tasks, lambda t: t.title, 'Notion')

    def read_pomodoro_tasks(self) -> dict[str, PomodoroTask]:
        """
        Active and completed Pomotodo todos keyed by description.

        Active todos are read first, so a completed todo with the same
        description wins.
        """
        todos = self.pomotodo.get_todos(completed=False) + self.pomotodo.get_todos(completed=True)
        return index_by(todos, lambda t: t.description, 'Pomotodo')

    def plan(self) -> ActionSet:
        """Read both sides and reconcile them without changing anything."""
        workspace = self.read_workspace_tasks()
        pomodoro = self.read_pomodoro_tasks()

        actions = reconcile(workspace, pomodoro, self.prefix)
        logger.info(
            f"Reconciled {len(workspace)} Notion tasks against {len(pomodoro)} Pomotodo todos: "
            f"{len(actions.to_add)} to add, {len(actions.to_remove)} to remove, "
            f"{len(actions.to_complete)} to complete"
        )
        return actions

    # ==========================================================================
    # Writes (each call logged, failures never stop the batch)
    # ==========================================================================

    def _apply(self, action: str, target: str, call: Callable[[], int]) -> None:
        """Run one mutation and log its outcome."""
        try:
            status_code = call()
        except httpx.HTTPError as e:
            logger.error(f"{action} {target} failed: {e}")
            return

        if 200 <= status_code < 300:
            logger.info(f"{action} {target} with code {status_code}")
        else:
            logger.warning(f"{action} {target} with code {status_code}")

    def add_pomodoro_task(self, task: WorkspaceTask) -> None:
        self._apply('Added Pomotodo todo', repr(task.title),
                    lambda: self.pomotodo.create_todo(task.title))

    def remove_pomodoro_task(self, todo: PomodoroTask) -> None:
        self._apply('Removed Pomotodo todo', f"{todo.id} ({todo.description!r})",
                    lambda: self.pomotodo.delete_todo(todo.id))

    def complete_workspace_task(self, task: WorkspaceTask) -> None:
        self._apply('Completed Notion task', f"{task.id} ({task.title!r})",
                    lambda: self.notion.mark_task_completed(task.id))

    def apply(self, actions: ActionSet) -> None:
        """Apply all adds, then all removals, then all completions."""
        for task in actions.to_add:
            self.add_pomodoro_task(task)

        for todo in actions.to_remove:
            self.remove_pomodoro_task(todo)

        for task in actions.to_complete:
            self.complete_workspace_task(task)

    def run(self, dry_run: bool = False) -> ActionSet:
        """
        Run one full sync.

        Read failures propagate as APIError before anything is applied.
        """
        actions = self.plan()

        if dry_run:
            logger.info("Dry run - no changes applied")
        elif actions.is_empty():
            logger.info("Already in sync")
        else:
            self.apply(actions)

        return actions
