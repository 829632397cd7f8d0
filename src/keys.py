"""Decode raw terminal input into key events.

Input arrives as the chunk returned by click.getchar(): a single
character, a complete escape sequence (arrows, Delete) or, when text is
pasted, a run of printable characters. Windows consoles report special
keys with a '\\xe0' or '\\x00' prefix instead of an escape sequence.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, Tuple

UP = "up"
DOWN = "down"
DELETE = "delete"
ESCAPE = "escape"
ENTER = "enter"
BACKSPACE = "backspace"
TAB = "tab"
CHAR = "char"
UNKNOWN = "unknown"

_SEQUENCES: Dict[str, str] = {
    "\x1b[A": UP,
    "\x1bOA": UP,
    "\x1b[B": DOWN,
    "\x1bOB": DOWN,
    "\x1b[3~": DELETE,
    "\xe0H": UP,
    "\x00H": UP,
    "\xe0P": DOWN,
    "\x00P": DOWN,
    "\xe0S": DELETE,
    "\x00S": DELETE,
    "\x1b": ESCAPE,
    "\r": ENTER,
    "\n": ENTER,
    "\r\n": ENTER,
    "\x7f": BACKSPACE,
    "\x08": BACKSPACE,
    "\t": TAB,
}


@dataclass(frozen=True)
class KeyEvent:
    name: str
    char: str = ""
    ctrl: bool = False

    @property
    def is_interrupt(self) -> bool:
        return self.name == CHAR and self.ctrl and self.char == "c"


INTERRUPT = KeyEvent(CHAR, "c", ctrl=True)


def decode(raw: str) -> KeyEvent:
    if raw in _SEQUENCES:
        return KeyEvent(_SEQUENCES[raw])
    if not raw or raw[0] in ("\x1b", "\xe0", "\x00"):
        return KeyEvent(UNKNOWN)
    if len(raw) == 1 and "\x01" <= raw <= "\x1a":
        # Ctrl-A .. Ctrl-Z
        return KeyEvent(CHAR, chr(ord(raw) + 96), ctrl=True)
    if raw.isprintable():
        return KeyEvent(CHAR, raw)
    return KeyEvent(UNKNOWN)


# multi-character escape sequences, longest first so "\x1b[3~" wins over "\x1b"
_ESCAPES = sorted((s for s in _SEQUENCES if len(s) > 1 and s[0] in "\x1b\xe0\x00"),
                  key=len, reverse=True)


def _escape_at(raw: str, i: int) -> Tuple[KeyEvent, int]:
    for seq in _ESCAPES:
        if raw.startswith(seq, i):
            return KeyEvent(_SEQUENCES[seq]), i + len(seq)
    if raw[i] != "\x1b":
        # Windows prefix with an unmapped scan code
        return KeyEvent(UNKNOWN), min(i + 2, len(raw))
    if raw[i + 1:i + 2] in ("[", "O"):
        # unmapped CSI/SS3 sequence: skip through its final byte
        j = i + 2
        while j < len(raw) and not ("@" <= raw[j] <= "~"):
            j += 1
        return KeyEvent(UNKNOWN), min(j + 1, len(raw))
    return KeyEvent(ESCAPE), i + 1


def split(raw: str) -> List[KeyEvent]:
    """Split one input chunk into key events, in order.

    A chunk may hold several keys (held arrows, fast typing followed by
    Enter, a paste ending in a newline). Runs of printable characters stay
    together as one CHAR event.
    """
    if raw in _SEQUENCES:
        return [decode(raw)]
    events: List[KeyEvent] = []
    i = 0
    while i < len(raw):
        ch = raw[i]
        if ch in ("\x1b", "\x00"):
            event, i = _escape_at(raw, i)
        elif raw.startswith("\r\n", i):
            event, i = KeyEvent(ENTER), i + 2
        elif ch.isprintable():
            j = i
            while j < len(raw) and raw[j].isprintable():
                j += 1
            event, i = KeyEvent(CHAR, raw[i:j]), j
        else:
            event, i = decode(ch), i + 1
        events.append(event)
    return events
