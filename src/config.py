"""Settings loaded from RTASKS_* environment variables.

Decisions:
- Data directory: RTASKS_DATA_DIR, else $XDG_DATA_HOME/rtasks, else
  $HOME/.local/share/rtasks. None means "no home known"; storage then
  falls back to the working directory.
- Alt screen default ON; disable with RTASKS_ALT_SCREEN=0 (or false/no/off).
"""
from __future__ import annotations
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

ENV_PREFIX = "RTASKS"
APP_DIR_NAME = "rtasks"


def _k(suffix: str) -> str:
    return f"{ENV_PREFIX}_{suffix}"


def _truthy_env(value: Optional[str], default: bool = True) -> bool:
    if value is None:
        return default
    return value.strip().lower() not in {"0", "false", "no", "off", ""}


def _log_level(value: Optional[str], default: int = logging.INFO) -> int:
    if not value or not value.strip():
        return default
    level = logging.getLevelName(value.strip().upper())
    return level if isinstance(level, int) else default


def default_data_dir(environ: Mapping[str, str]) -> Optional[Path]:
    """Per-user data directory derived from the environment."""
    override = environ.get(_k("DATA_DIR"), "").strip()
    if override:
        return Path(override).expanduser()
    xdg = environ.get("XDG_DATA_HOME", "").strip()
    if xdg:
        return Path(xdg).expanduser() / APP_DIR_NAME
    home = environ.get("HOME", "").strip()
    if home:
        return Path(home) / ".local" / "share" / APP_DIR_NAME
    return None


@dataclass(frozen=True)
class Settings:
    data_dir: Optional[Path]
    alt_screen: bool = True
    log_level: int = logging.INFO
    log_file: bool = True


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    env = os.environ if environ is None else environ
    return Settings(
        data_dir=default_data_dir(env),
        alt_screen=_truthy_env(env.get(_k("ALT_SCREEN")), True),
        log_level=_log_level(env.get(_k("LOG_LEVEL"))),
        log_file=_truthy_env(env.get(_k("LOG_FILE")), True),
    )
