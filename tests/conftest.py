# tests/conftest.py

from __future__ import annotations

from pathlib import Path

import pytest

from state import AppState
from storage import Storage
from store import TaskStore


@pytest.fixture()
def storage(tmp_path: Path) -> Storage:
    """Storage backed by a file in a per-test temporary directory."""
    return Storage(tmp_path / "tasks.json")


@pytest.fixture()
def store(storage: Storage) -> TaskStore:
    return TaskStore(storage)


@pytest.fixture()
def state(store: TaskStore) -> AppState:
    return AppState(store=store)


@pytest.fixture()
def three_tasks(state: AppState) -> AppState:
    for title in ("one", "two", "three"):
        state.store.add(title, "")
    return state
