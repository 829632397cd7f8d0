"""Terminal control: raw mode, alternate screen, frame output and key reads.

Raw mode is scoped to Terminal.session(); the saved attributes are
restored on every exit path, including exceptions raised while drawing
or reading keys. Those exceptions are not handled here.
"""
from __future__ import annotations
import contextlib
import os
import shutil
import sys
from collections import deque
from typing import IO, Deque, Iterator, Optional, Tuple

import click

import keys
from keys import KeyEvent
from render import Frame
from theme import styled

# --- escape sequences ---
CLEAR = "\033[2J"
HOME = "\033[H"
HIDE_CURSOR = "\033[?25l"
SHOW_CURSOR = "\033[?25h"
ALT_SCREEN_ON = "\033[?1049h"
ALT_SCREEN_OFF = "\033[?1049l"
FALLBACK_SIZE = (80, 24)


def _fileno(stream: IO[str]) -> Optional[int]:
    try:
        return stream.fileno()
    except (AttributeError, OSError, ValueError):
        return None


@contextlib.contextmanager
def raw_mode(stream: IO[str]) -> Iterator[None]:
    """Put the terminal behind ``stream`` into raw mode for the block.

    No-op when the stream is not a TTY or termios is not available
    (Windows consoles already deliver unbuffered keys to click.getchar()).
    """
    fd = _fileno(stream)
    if fd is None or not os.isatty(fd) or os.name == "nt":
        yield
        return
    import termios, tty
    saved = termios.tcgetattr(fd)
    tty.setraw(fd)
    try:
        yield
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, saved)


def move_to(row: int, col: int = 0) -> str:
    return f"\033[{row + 1};{col + 1}H"


class Terminal:
    def __init__(self, out: Optional[IO[str]] = None, stdin: Optional[IO[str]] = None,
                 alt_screen: bool = True):
        self.out: IO[str] = out if out is not None else sys.stdout
        self.stdin: IO[str] = stdin if stdin is not None else sys.stdin
        self.alt_screen: bool = alt_screen
        self._pending: Deque[KeyEvent] = deque()

    def _write(self, text: str) -> None:
        print(text, end="", file=self.out, flush=True)

    def size(self) -> Tuple[int, int]:
        size = shutil.get_terminal_size(FALLBACK_SIZE)
        return size.columns, size.lines

    @contextlib.contextmanager
    def session(self) -> Iterator["Terminal"]:
        with raw_mode(self.stdin):
            if self.alt_screen:
                self._write(ALT_SCREEN_ON)
            self._write(HIDE_CURSOR)
            try:
                yield self
            finally:
                self._write(SHOW_CURSOR + CLEAR + HOME)
                if self.alt_screen:
                    self._write(ALT_SCREEN_OFF)

    def draw(self, frame: Frame) -> None:
        parts = [HOME, CLEAR]
        for line in frame:
            parts.append(move_to(line.row))
            parts.extend(styled(span.text, span.style) for span in line.spans)
        self._write(''.join(parts))

    def read_key(self) -> KeyEvent:
        """Return the next key event, blocking only when none is queued.

        One read may deliver several keys; the extras are handed out on
        later calls.
        """
        while not self._pending:
            try:
                raw = click.getchar()
            except KeyboardInterrupt:
                # click translates Ctrl-C / Ctrl-D read in raw mode into exceptions
                return keys.INTERRUPT
            except EOFError:
                return KeyEvent(keys.CHAR, "d", ctrl=True)
            self._pending.extend(keys.split(raw))
        return self._pending.popleft()
