"""Data models for the terminal task list.

Only exposes the Task dataclass. Stored records use the field names
id, title, description, completed; anything else in a record is ignored.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Mapping

@dataclass
class Task:
    """A single task.

    Fields:
        id: Sequential integer id, assigned once and never reused in a session.
        title: Short, single-line title.
        description: Free text, empty when not set.
        completed: Completion flag toggled from the list view.
    """
    id: int
    title: str
    description: str = ""
    completed: bool = False

    @property
    def checkbox(self) -> str:
        return "[X]" if self.completed else "[ ]"

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'completed': self.completed,
        }

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "Task":
        """Build a Task from a stored record.

        Raises ValueError when a field is missing or has the wrong type;
        bool is rejected as an id even though it is an int subclass.
        """
        tid = raw.get('id')
        if not isinstance(tid, int) or isinstance(tid, bool) or tid < 0:
            raise ValueError(f"invalid task id: {tid!r}")
        title = raw.get('title')
        if not isinstance(title, str):
            raise ValueError(f"invalid title for task {tid}")
        description = raw.get('description', '')
        if not isinstance(description, str):
            raise ValueError(f"invalid description for task {tid}")
        completed = raw.get('completed', False)
        if not isinstance(completed, bool):
            raise ValueError(f"invalid completed flag for task {tid}")
        return cls(id=tid, title=title, description=description, completed=completed)

    def __repr__(self) -> str:  # pragma: no cover - convenience only
        return f"Task(id={self.id}, title={self.title}, completed={self.completed})"
