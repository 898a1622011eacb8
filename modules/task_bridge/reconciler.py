"""
Reconciler - works out what each side needs changed.

Pure: takes the Notion and Pomotodo snapshots for one run and returns the
ActionSet. Nothing here talks to the network.
"""

from typing import Mapping

from .models import ActionSet, PomodoroTask, WorkspaceTask


def reconcile(
    workspace: Mapping[str, WorkspaceTask],
    pomodoro: Mapping[str, PomodoroTask],
    prefix: str,
) -> ActionSet:
    """
    Compare the two snapshots.

    Args:
        workspace: In-progress Notion tasks keyed by prefixed title
        pomodoro: Active and completed Pomotodo todos keyed by description
        prefix: Marks the todos this tool manages

    Returns:
        ActionSet with:
        - to_add: Notion tasks with no todo of the same description
        - to_remove: prefixed todos with no in-progress Notion task
        - to_complete: Notion tasks whose todo is already completed
    """
    actions = ActionSet()

    for task in workspace.values():
        if task.title not in pomodoro:
            actions.to_add.append(task)

    for todo in pomodoro.values():
        # Todos outside our namespace are never touched
        if not todo.description.startswith(prefix):
            continue

        task = workspace.get(todo.description)
        if task is None:
            actions.to_remove.append(todo)
        elif todo.completed:
            actions.to_complete.append(task)

    return actions
