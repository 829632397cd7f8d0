"""Persistence helpers (path resolution, migration, load/save) for the task list.

The backing file is a pretty-printed JSON array of task records and is
rewritten in full on every save. Persistence is best effort: read errors
degrade to an empty list and write errors are logged and reported to the
caller as False, never raised.
"""
import contextlib
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

DATA_FILE_NAME = 'tasks.json'
LEGACY_FILE = Path(DATA_FILE_NAME)

TaskRecord = Dict[str, Any]

logger = logging.getLogger(__name__)


def resolve_data_file(data_dir: Optional[Path]) -> Path:
    """Return the backing file path, creating its directory when needed.

    Falls back to ./tasks.json when no data directory is known or it
    cannot be created.
    """
    if data_dir is None:
        return LEGACY_FILE
    try:
        data_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        logger.warning("cannot create data dir %s (%s); using ./%s", data_dir, exc, DATA_FILE_NAME)
        return LEGACY_FILE
    return data_dir / DATA_FILE_NAME


class Storage:
    def __init__(self, path: Path):
        self.path: Path = Path(path)

    def exists(self) -> bool:
        return self.path.exists()

    def migrate_legacy(self, legacy: Path = LEGACY_FILE) -> bool:
        """Move a legacy ./tasks.json into the data file location.

        Only happens when the legacy file exists and the data file does not.
        Returns True when the contents were copied and the legacy file removed.
        """
        if not legacy.exists() or self.path.exists():
            return False
        try:
            data = legacy.read_text(encoding='utf-8')
            self.path.write_text(data, encoding='utf-8')
        except OSError as exc:
            logger.warning("migration from %s to %s failed: %s", legacy, self.path, exc)
            return False
        try:
            legacy.unlink()
        except OSError as exc:
            # contents are already in place; the stale copy is left behind
            logger.warning("could not remove legacy file %s: %s", legacy, exc)
        logger.info("migrated tasks from %s to %s", legacy, self.path)
        return True

    def load_tasks(self) -> List[TaskRecord]:
        """Load task records from disk.

        Missing file -> empty list. Unreadable file, invalid JSON or a
        top-level value that is not a list of objects -> empty list.
        """
        if not self.path.exists():
            return []
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            logger.warning("could not read %s: %s", self.path, exc)
            return []
        if not isinstance(data, list) or not all(isinstance(r, dict) for r in data):
            logger.warning("ignoring %s: expected a list of task records", self.path)
            return []
        return data

    def save_tasks(self, records: List[TaskRecord]) -> bool:
        """Persist records to disk (pretty-printed). Returns False on failure.

        The data is fully encoded before anything is written and then
        swapped in with os.replace, so a failed save leaves the previous
        file intact.
        """
        tmp = self.path.with_name(self.path.name + '.tmp')
        try:
            data = json.dumps(records, indent=4, ensure_ascii=False).encode('utf-8')
            tmp.write_bytes(data)
            os.replace(tmp, self.path)
        except (OSError, ValueError) as exc:
            logger.warning("could not save tasks to %s: %s", self.path, exc)
            with contextlib.suppress(OSError):
                tmp.unlink()
            return False
        return True
