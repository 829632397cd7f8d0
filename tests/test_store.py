# tests/test_store.py

from __future__ import annotations

import json
from pathlib import Path

from models import Task
from storage import Storage
from store import TaskStore


def test_add_assigns_increasing_unique_ids(store: TaskStore) -> None:
    ids = [store.add(f"task {n}").id for n in range(5)]
    assert ids == [1, 2, 3, 4, 5]
    assert store.next_id == 6


def test_ids_are_not_reused_after_delete(store: TaskStore) -> None:
    store.add("a")
    store.add("b")
    store.delete(1)
    assert store.add("c").id == 3


def test_add_defaults(store: TaskStore) -> None:
    task = store.add("Buy milk")
    assert task == Task(id=1, title="Buy milk", description="", completed=False)


def test_toggle_twice_restores_flag(store: TaskStore) -> None:
    store.add("x")
    store.toggle(0)
    assert store.tasks[0].completed is True
    store.toggle(0)
    assert store.tasks[0].completed is False


def test_out_of_range_operations_are_noops(store: TaskStore, storage: Storage) -> None:
    assert store.delete(0) is None
    store.toggle(3)
    store.edit_title(-1, "nope")
    store.edit_description(9, "nope")
    assert store.tasks == []
    # nothing was mutated, so nothing was written
    assert not storage.exists()


def test_edit_fields(store: TaskStore) -> None:
    store.add("old", "")
    store.edit_title(0, "new")
    store.edit_description(0, "details")
    assert store.tasks[0].title == "new"
    assert store.tasks[0].description == "details"


def test_every_mutation_persists(store: TaskStore, storage: Storage) -> None:
    store.add("a", "first")
    store.add("b")
    store.toggle(1)
    on_disk = json.loads(storage.path.read_text(encoding="utf-8"))
    assert on_disk == [
        {"id": 1, "title": "a", "description": "first", "completed": False},
        {"id": 2, "title": "b", "description": "", "completed": True},
    ]
    store.delete(0)
    on_disk = json.loads(storage.path.read_text(encoding="utf-8"))
    assert [r["id"] for r in on_disk] == [2]


def test_round_trip_resumes_ids_above_max(store: TaskStore, storage: Storage) -> None:
    store.add("a", "x")
    store.add("b")
    store.add("c")
    store.delete(2)
    store.toggle(0)

    reloaded = TaskStore(storage)
    assert reloaded.tasks == store.tasks
    assert reloaded.next_id == 3
    assert reloaded.add("d").id == 3


def test_next_id_follows_max_not_length(tmp_path: Path) -> None:
    storage = Storage(tmp_path / "tasks.json")
    storage.save_tasks([
        {"id": 7, "title": "seven", "description": "", "completed": False},
        {"id": 2, "title": "two", "description": "", "completed": True},
    ])
    store = TaskStore(storage)
    assert [t.id for t in store.tasks] == [7, 2]
    assert store.next_id == 8


def test_malformed_records_load_as_empty(tmp_path: Path) -> None:
    storage = Storage(tmp_path / "tasks.json")
    storage.save_tasks([{"id": "one", "title": "bad"}])
    store = TaskStore(storage)
    assert store.tasks == []
    assert store.next_id == 1


def test_duplicate_ids_are_renumbered_not_dropped(tmp_path: Path) -> None:
    storage = Storage(tmp_path / "tasks.json")
    storage.save_tasks([
        {"id": 1, "title": "a", "description": "", "completed": False},
        {"id": 1, "title": "b", "description": "", "completed": True},
        {"id": 2, "title": "c", "description": "", "completed": False},
    ])
    store = TaskStore(storage)
    assert [(t.id, t.title) for t in store.tasks] == [(1, "a"), (3, "b"), (2, "c")]

    store.add("new")
    on_disk = json.loads(storage.path.read_text(encoding="utf-8"))
    assert [(r["id"], r["title"]) for r in on_disk] == [(1, "a"), (3, "b"), (2, "c"), (4, "new")]


def test_missing_description_defaults_to_empty(tmp_path: Path) -> None:
    storage = Storage(tmp_path / "tasks.json")
    storage.save_tasks([{"id": 4, "title": "a", "completed": True}])
    store = TaskStore(storage)
    assert store.tasks == [Task(id=4, title="a", description="", completed=True)]


def test_save_failure_is_reported_not_raised(tmp_path: Path) -> None:
    # the parent directory does not exist, so every write fails
    storage = Storage(tmp_path / "missing" / "tasks.json")
    store = TaskStore(storage)
    store.add("still in memory")
    assert store.last_save_ok is False
    assert [t.title for t in store.tasks] == ["still in memory"]


def test_unencodable_title_keeps_previous_file(store: TaskStore, storage: Storage) -> None:
    store.add("keep me")
    store.add("bad\udcff")
    assert store.last_save_ok is False
    assert [t.title for t in store.tasks] == ["keep me", "bad\udcff"]
    # the earlier save is still intact and loadable
    assert [t.title for t in TaskStore(storage).tasks] == ["keep me"]
    assert not storage.path.with_name("tasks.json.tmp").exists()
