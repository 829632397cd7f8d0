"""Interactive full-screen loop for the task list.

Each cycle renders the current state, blocks for exactly one key and
hands it to the mode state machine until it asks to terminate.
"""
import logging
from typing import Optional
from modes import handle_key
from render import render
from state import AppState
from terminal import Terminal

logger = logging.getLogger(__name__)

FAREWELL = "Thanks for using RTasks! 👋"


class CLI:
    def __init__(self, state: AppState, terminal: Optional[Terminal] = None):
        self.state: AppState = state
        self.terminal: Terminal = terminal if terminal is not None else Terminal()

    def run(self) -> None:
        """Main loop; the terminal session is restored on every exit path.

        Terminal I/O errors propagate to the caller after cleanup.
        """
        logger.info("interactive session started (%s)", self.state.store)
        with self.terminal.session():
            while True:
                width, height = self.terminal.size()
                self.terminal.draw(render(self.state, width, height))
                key = self.terminal.read_key()
                if not handle_key(self.state, key):
                    break
        logger.info("interactive session ended (%s)", self.state.store)
        print(FAREWELL, file=self.terminal.out)
