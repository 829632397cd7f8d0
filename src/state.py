"""Application state shared by the loop, the key handler and the renderer."""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional
from models import Task
from store import TaskStore


class Mode(Enum):
    NORMAL = "normal"
    ADD_TITLE = "add-title"
    EDIT_TITLE = "edit-title"
    EDIT_DESCRIPTION = "edit-description"

    @property
    def is_text_entry(self) -> bool:
        return self is not Mode.NORMAL


@dataclass
class AppState:
    """Single mutable structure threaded through each loop step.

    selected_index is only meaningful while the store is non-empty;
    input_buffer is only used outside NORMAL mode. status_message holds a
    transient warning (e.g. a failed save) shown until the next key.
    """
    store: TaskStore
    selected_index: int = 0
    mode: Mode = Mode.NORMAL
    input_buffer: str = ""
    status_message: Optional[str] = None

    @property
    def tasks(self) -> List[Task]:
        return self.store.tasks

    @property
    def selected_task(self) -> Optional[Task]:
        return self.store.get(self.selected_index)

    def clamp_selection(self) -> None:
        """Keep selected_index inside [0, len-1] (0 for an empty list)."""
        last = len(self.store) - 1
        if last < 0:
            self.selected_index = 0
        elif self.selected_index > last:
            self.selected_index = last
        elif self.selected_index < 0:
            self.selected_index = 0

    def reset_input(self) -> None:
        self.mode = Mode.NORMAL
        self.input_buffer = ""
