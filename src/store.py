"""Task store: the ordered task list, id management and persistence.

Every mutation rewrites the whole backing file immediately. Index based
operations are no-ops when the index is out of range; callers repair
their selection after delete().
"""
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional
from models import Task
from storage import Storage

logger = logging.getLogger(__name__)


class TaskStore:
    def __init__(self, storage: Storage, records: Optional[Iterable[Mapping[str, Any]]] = None):
        self.storage: Storage = storage
        self.tasks: List[Task] = []
        self._next_id: int = 1
        # result of the most recent save; None until something was saved
        self.last_save_ok: Optional[bool] = None
        self._load_from_records(storage.load_tasks() if records is None else records)

    # -------------------- loading --------------------
    def _load_from_records(self, records: Iterable[Mapping[str, Any]]) -> None:
        try:
            loaded = [Task.from_dict(raw) for raw in records]
        except (ValueError, AttributeError) as exc:
            logger.warning("discarding stored tasks from %s: %s", self.storage.path, exc)
            loaded = []
        self.tasks = loaded
        self._next_id = max(t.id for t in loaded) + 1 if loaded else 1
        # repeated ids keep their first holder; later ones get fresh ids
        seen = set()
        for task in loaded:
            if task.id in seen:
                old_id = task.id
                task.id = self._allocate_id()
                logger.warning("duplicate task id %d in %s renumbered to %d",
                               old_id, self.storage.path, task.id)
            seen.add(task.id)

    # -------------------- id management --------------------
    @property
    def next_id(self) -> int:
        return self._next_id

    def _allocate_id(self) -> int:
        nid = self._next_id
        self._next_id += 1
        return nid

    # -------------------- queries --------------------
    def __len__(self) -> int:
        return len(self.tasks)

    def get(self, index: int) -> Optional[Task]:
        if 0 <= index < len(self.tasks):
            return self.tasks[index]
        return None

    # -------------------- task operations --------------------
    def add(self, title: str, description: str = "") -> Task:
        task = Task(id=self._allocate_id(), title=title, description=description)
        self.tasks.append(task)
        logger.debug("added task %d", task.id)
        self._persist()
        return task

    def delete(self, index: int) -> Optional[Task]:
        task = self.get(index)
        if task is None:
            return None
        del self.tasks[index]
        logger.debug("deleted task %d", task.id)
        self._persist()
        return task

    def toggle(self, index: int) -> None:
        task = self.get(index)
        if task is None:
            return
        task.completed = not task.completed
        logger.debug("task %d completed=%s", task.id, task.completed)
        self._persist()

    def edit_title(self, index: int, new_title: str) -> None:
        task = self.get(index)
        if task is None:
            return
        task.title = new_title
        logger.debug("task %d title changed", task.id)
        self._persist()

    def edit_description(self, index: int, new_description: str) -> None:
        task = self.get(index)
        if task is None:
            return
        task.description = new_description
        logger.debug("task %d description changed", task.id)
        self._persist()

    # -------------------- serialization --------------------
    def get_records(self) -> List[Dict[str, Any]]:
        return [task.to_dict() for task in self.tasks]

    def _persist(self) -> None:
        self.last_save_ok = self.storage.save_tasks(self.get_records())

    def __str__(self) -> str:
        done = sum(1 for t in self.tasks if t.completed)
        return f'{len(self.tasks)} tasks, {done} completed'
