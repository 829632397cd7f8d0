"""Input mode state machine.

handle_key() interprets one key event against the current mode and
returns False when the application should terminate.

NORMAL:
    q/Q quit, up/down move, space toggle, a/A add, e/E edit title,
    d/D edit description, Delete removes the selected task.
ADD_TITLE, EDIT_TITLE, EDIT_DESCRIPTION:
    Escape discards, Enter commits the trimmed buffer (an empty buffer
    just returns to NORMAL), Backspace drops the last character,
    printable characters are appended, Ctrl-C quits.
"""
from __future__ import annotations
import keys
from keys import KeyEvent
from state import AppState, Mode


def handle_key(state: AppState, key: KeyEvent) -> bool:
    state.status_message = None
    if state.mode is Mode.NORMAL:
        return _handle_normal(state, key)
    return _handle_text_entry(state, key)


# -------------------- NORMAL --------------------
def _handle_normal(state: AppState, key: KeyEvent) -> bool:
    store = state.store
    if key.name == keys.CHAR and not key.ctrl:
        ch = key.char
        if ch in ("q", "Q"):
            return False
        if ch == " ":
            if state.selected_task is not None:
                store.toggle(state.selected_index)
                _note_save(state)
        elif ch in ("a", "A"):
            state.mode = Mode.ADD_TITLE
            state.input_buffer = ""
        elif ch in ("e", "E"):
            task = state.selected_task
            if task is not None:
                state.mode = Mode.EDIT_TITLE
                state.input_buffer = task.title
        elif ch in ("d", "D"):
            task = state.selected_task
            if task is not None:
                state.mode = Mode.EDIT_DESCRIPTION
                state.input_buffer = task.description
    elif key.name == keys.UP:
        if len(store) and state.selected_index > 0:
            state.selected_index -= 1
    elif key.name == keys.DOWN:
        if len(store) and state.selected_index < len(store) - 1:
            state.selected_index += 1
    elif key.name == keys.DELETE:
        if store.delete(state.selected_index) is not None:
            state.clamp_selection()
            _note_save(state)
    return True


# -------------------- text entry --------------------
def _handle_text_entry(state: AppState, key: KeyEvent) -> bool:
    if key.is_interrupt:
        return False
    if key.name == keys.ESCAPE:
        state.reset_input()
    elif key.name == keys.ENTER:
        _commit(state)
    elif key.name == keys.BACKSPACE:
        state.input_buffer = state.input_buffer[:-1]
    elif key.name == keys.CHAR and not key.ctrl:
        state.input_buffer += key.char
    return True


def _commit(state: AppState) -> None:
    text = state.input_buffer.strip()
    mode = state.mode
    state.reset_input()
    if not text:
        return
    store = state.store
    if mode is Mode.ADD_TITLE:
        store.add(text, "")
    elif mode is Mode.EDIT_TITLE:
        store.edit_title(state.selected_index, text)
    elif mode is Mode.EDIT_DESCRIPTION:
        store.edit_description(state.selected_index, text)
    _note_save(state)


def _note_save(state: AppState) -> None:
    if state.store.last_save_ok is False:
        state.status_message = f"Could not save tasks to {state.store.storage.path}"
