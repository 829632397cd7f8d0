"""Logging configuration.

The interactive session owns the whole screen, so it only ever logs to
a file. One-shot commands additionally print warnings to stderr.
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

LOG_FILE_NAME = "rtasks.log"


def setup_logging(
    *,
    log_dir: Optional[Path],
    level: int = logging.INFO,
    console: bool = False,
) -> None:
    """
    Configure the root logger with:
    - File handler: rtasks.log in log_dir (skipped when log_dir is None
      or the file cannot be opened)
    - Console handler: stderr, WARNING and above, only when console=True

    Call this ONCE, before the first log call.
    """
    root = logging.getLogger()
    root.setLevel(level)

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    if log_dir is not None:
        try:
            fh = logging.FileHandler(str(Path(log_dir) / LOG_FILE_NAME), encoding="utf-8")
        except OSError as exc:
            print(f"rtasks: file logging disabled ({exc})", file=sys.stderr)
        else:
            fh.setLevel(level)
            fh.setFormatter(fmt)
            root.addHandler(fh)

    if console:
        ch = logging.StreamHandler(sys.stderr)
        ch.setLevel(logging.WARNING)
        ch.setFormatter(logging.Formatter("rtasks: %(levelname)s: %(message)s"))
        root.addHandler(ch)

    if not root.handlers:
        root.addHandler(logging.NullHandler())

    # Route warnings.warn(...) into logging as 'py.warnings'
    logging.captureWarnings(True)
