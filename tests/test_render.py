# tests/test_render.py

from __future__ import annotations

from typing import Dict

import render
from render import Line, render as render_frame
from state import AppState, Mode


def by_row(frame) -> Dict[int, Line]:
    rows = [line.row for line in frame]
    assert len(rows) == len(set(rows)), "rows must not overlap"
    return {line.row: line for line in frame}


def test_empty_list_shows_hint_and_bars(state: AppState) -> None:
    rows = by_row(render_frame(state, 100, 20))
    assert rows[0].text == render.BANNER_TEXT.ljust(100)
    assert rows[0].spans[0].style == "banner"
    assert rows[2].text == render.EMPTY_HINT
    assert rows[2].spans[0].style == "placeholder"
    assert rows[19].text.startswith(" Controls:")
    assert len(rows[19].text) == 100
    assert rows[19].spans[0].style == "status"


def test_task_lines_and_styles(state: AppState) -> None:
    state.store.add("Buy milk", "")
    state.store.add("Call Bob", "urgent")
    state.store.toggle(1)
    rows = by_row(render_frame(state, 100, 20))

    first = rows[2]
    assert first.text == "[ ] 1 Buy milk"
    assert [s.style for s in first.spans] == ["selected"]

    second = rows[3]
    assert second.text == "[X] 2 Call Bob - urgent"
    assert [s.style for s in second.spans] == ["completed", "description"]


def test_text_entry_mode_layout(state: AppState) -> None:
    state.store.add("Buy milk")
    state.mode = Mode.ADD_TITLE
    state.input_buffer = "Walk d"
    rows = by_row(render_frame(state, 100, 20))

    assert rows[2].text == render.INSTRUCTIONS[Mode.ADD_TITLE]
    assert rows[3].text == "> Walk d"
    assert rows[3].spans[0].style == "input"
    # tasks move down and nothing is highlighted outside NORMAL mode
    assert rows[5].text == "[ ] 1 Buy milk"
    assert rows[5].spans[0].style == "task"
    assert rows[19].text.strip() == render.ENTRY_LEGEND.strip()


def test_overflowing_tasks_are_not_drawn(state: AppState) -> None:
    for n in range(30):
        state.store.add(f"task {n}")
    frame = render_frame(state, 80, 10)
    task_rows = [line.row for line in frame if line.text.startswith("[")]
    assert task_rows == list(range(2, 8))
    assert max(line.row for line in frame) == 9


def test_lines_are_clipped_to_width(state: AppState) -> None:
    state.store.add("a very long title that does not fit", "and a description")
    frame = render_frame(state, 12, 10)
    assert all(len(line.text) <= 12 for line in frame)
    assert by_row(frame)[2].text == "[ ] 1 a very"


def test_selection_follows_index(three_tasks: AppState) -> None:
    three_tasks.selected_index = 2
    rows = by_row(render_frame(three_tasks, 80, 20))
    assert rows[4].spans[0].style == "selected"
    assert rows[2].spans[0].style == "task"


def test_warning_line(state: AppState) -> None:
    state.status_message = "Could not save tasks to /x/tasks.json"
    rows = by_row(render_frame(state, 80, 12))
    assert rows[10].spans[0].style == "warning"
    assert "Could not save" in rows[10].text


def test_tiny_terminals(state: AppState) -> None:
    state.store.add("x")
    assert render_frame(state, 80, 0) == []
    one = render_frame(state, 80, 1)
    assert [(line.row, line.spans[0].style) for line in one] == [(0, "status")]
    two = by_row(render_frame(state, 80, 2))
    assert sorted(two) == [0, 1]


def test_render_does_not_mutate(three_tasks: AppState) -> None:
    before = (list(three_tasks.tasks), three_tasks.selected_index, three_tasks.mode)
    render_frame(three_tasks, 40, 5)
    assert (list(three_tasks.tasks), three_tasks.selected_index, three_tasks.mode) == before
