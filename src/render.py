"""Frame rendering: maps application state to draw instructions.

render() is pure. A frame is a list of Line objects, each placed at a
screen row and made of styled spans; style names are resolved to ANSI
codes by the terminal layer (see theme.STYLES).

Layout:
    row 0            banner (full width)
    rows 2-3         instruction + input echo, text-entry modes only
    rows 2.. / 5..   task list, stops before row height-2 (no scrolling)
    row height-2     transient warning, when present
    row height-1     status bar (full width)
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, Tuple
from models import Task
from state import AppState, Mode

BANNER_TEXT = " RTasks - Terminal Task Manager"
PROMPT = "> "
EMPTY_HINT = "No tasks yet. Press 'A' to add your first task!"
NORMAL_LEGEND = (" Controls: ↑↓ Navigate | Space: Toggle | A: Add | E: Edit"
                 " | D: Edit Desc | Del: Delete | Q: Quit")
ENTRY_LEGEND = " Press Enter to confirm | Esc to cancel"
INSTRUCTIONS: Dict[Mode, str] = {
    Mode.ADD_TITLE: "Adding new task. Type title and press Enter (Esc to cancel):",
    Mode.EDIT_TITLE: "Editing task title. Type new title and press Enter (Esc to cancel):",
    Mode.EDIT_DESCRIPTION: "Editing description. Type new description and press Enter (Esc to cancel):",
}
CONTENT_START = 2


@dataclass(frozen=True)
class Span:
    text: str
    style: str


@dataclass(frozen=True)
class Line:
    row: int
    spans: Tuple[Span, ...]

    @property
    def text(self) -> str:
        return ''.join(s.text for s in self.spans)


Frame = List[Line]


def render(state: AppState, width: int, height: int) -> Frame:
    width = max(width, 0)
    height = max(height, 0)
    frame: Frame = []
    if height == 0:
        return frame
    frame.append(_full_width(0, BANNER_TEXT, 'banner', width))
    content_end = height - 2
    row = CONTENT_START

    if state.mode.is_text_entry:
        frame.append(_line(row, [Span(INSTRUCTIONS[state.mode], 'instruction')], width))
        frame.append(_line(row + 1, [Span(PROMPT + state.input_buffer, 'input')], width))
        row += 3

    if not state.tasks:
        frame.append(_line(row, [Span(EMPTY_HINT, 'placeholder')], width))
    else:
        for index, task in enumerate(state.tasks):
            if row >= content_end:
                break
            selected = index == state.selected_index and state.mode is Mode.NORMAL
            frame.append(_line(row, _task_spans(task, selected), width))
            row += 1

    if state.status_message and height > CONTENT_START + 1:
        frame.append(_line(height - 2, [Span(' ' + state.status_message, 'warning')], width))

    # tiny terminals: anything on or below the status row is dropped
    footer_row = height - 1
    frame = [ln for ln in frame if ln.row < footer_row]
    legend = NORMAL_LEGEND if state.mode is Mode.NORMAL else ENTRY_LEGEND
    frame.append(_full_width(footer_row, legend, 'status', width))
    return frame


def _task_spans(task: Task, selected: bool) -> List[Span]:
    if selected:
        style = 'selected'
    elif task.completed:
        style = 'completed'
    else:
        style = 'task'
    spans = [Span(f"{task.checkbox} {task.id} {task.title}", style)]
    if task.description:
        spans.append(Span(f" - {task.description}", 'selected' if selected else 'description'))
    return spans


def _full_width(row: int, text: str, style: str, width: int) -> Line:
    return Line(row, (Span(text[:width].ljust(width), style),))


def _line(row: int, spans: List[Span], width: int) -> Line:
    """Clip spans so the line never wraps past the terminal width."""
    clipped: List[Span] = []
    room = width
    for span in spans:
        if room <= 0:
            break
        text = span.text[:room]
        clipped.append(Span(text, span.style))
        room -= len(text)
    return Line(row, tuple(clipped))
