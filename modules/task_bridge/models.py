"""
Data models for Task Bridge module.

Notion and Pomotodo task snapshots plus the action set a reconcile pass produces.
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class WorkspaceTask:
    """In-progress task from the Notion database."""
    id: str
    title: str  # prefixed, exactly as it must appear in Pomotodo

    @classmethod
    def from_api(cls, data: dict, prefix: str = '') -> Optional['WorkspaceTask']:
        """
        Create from a Notion query result record.

        Returns None when the Name title has no rich-text segments.
        """
        segments = data['properties']['Name']['title']
        if not segments:
            return None

        return cls(
            id=str(data['id']),
            title=prefix + segments[0]['plain_text'],
        )


@dataclass(frozen=True)
class PomodoroTask:
    """Todo from Pomotodo."""
    id: str
    description: str
    completed: bool = False

    @classmethod
    def from_api(cls, data: dict) -> 'PomodoroTask':
        """Create from Pomotodo API response."""
        if not isinstance(data, dict):
            raise TypeError(f"Expected a todo object, got {type(data).__name__}")

        todo_id = data.get('uuid', data.get('id'))
        if todo_id is None:
            raise KeyError('uuid')

        return cls(
            id=str(todo_id),
            description=data['description'],
            completed=data.get('completed') is True,
        )


@dataclass
class ActionSet:
    """Corrections produced by one reconcile pass."""
    to_add: list[WorkspaceTask] = field(default_factory=list)
    to_remove: list[PomodoroTask] = field(default_factory=list)
    to_complete: list[WorkspaceTask] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not (self.to_add or self.to_remove or self.to_complete)

    def describe(self) -> str:
        """Human-readable listing of the planned actions."""
        lines = [
            f"Add to Pomotodo: {len(self.to_add)}",
            *[f"  + {task.title}" for task in self.to_add],
            f"Remove from Pomotodo: {len(self.to_remove)}",
            *[f"  - {task.description} ({task.id})" for task in self.to_remove],
            f"Complete in Notion: {len(self.to_complete)}",
            *[f"  ✓ {task.title} ({task.id})" for task in self.to_complete],
        ]
        return "\n".join(lines)
