"""Color & style helpers.

Decisions:
- Truecolor preferred; falls back to 256-color cube if unsupported.
- Disables automatically when not a TTY unless FORCE_COLOR=1.
- Honors NO_COLOR for complete disable.
- Supports palette overrides via environment or project .env file.
- Selection uses reverse video and completed tasks use faint text so both
  stay readable on any terminal background.
"""
from __future__ import annotations
import os, sys
from pathlib import Path
from typing import Dict

_FORCE = os.environ.get("FORCE_COLOR", "").lower() in {"1", "true", "yes", "on"}
_NO_COLOR = os.environ.get("NO_COLOR") is not None
_ENABLE = (_FORCE or sys.stdout.isatty()) and not _NO_COLOR
_COLORTERM = os.environ.get("COLORTERM", "").lower()
_USE_TRUECOLOR = _ENABLE and any(tok in _COLORTERM for tok in ("truecolor", "24bit"))

def _code(part: str) -> str:
    """Generate ANSI escape code for a given style part."""
    return f"\033[{part}m" if _ENABLE else ''

def _hex_to_rgb(hex_code: str) -> tuple[int,int,int]:
    """Convert a hex color code to an RGB tuple."""
    h = hex_code.lstrip('#')
    return int(h[0:2],16), int(h[2:4],16), int(h[4:6],16)

def _to_256(r: int, g: int, b: int) -> int:
    """Approximate RGB to an xterm 256-color cube index."""
    def to_6(x: int) -> int:
        return int(round(x / 255 * 5))
    return 16 + 36 * to_6(r) + 6 * to_6(g) + to_6(b)

def _from_hex(hex_code: str, background: bool = False) -> str:
    """Convert a hex color code to a foreground/background ANSI sequence."""
    if not _ENABLE:
        return ''
    r, g, b = _hex_to_rgb(hex_code)
    layer = 48 if background else 38
    if _USE_TRUECOLOR:
        return f"\033[{layer};2;{r};{g};{b}m"
    return f"\033[{layer};5;{_to_256(r, g, b)}m"

def _valid_hex(value: str) -> bool:
    h = value.lstrip('#')
    return len(h) == 6 and all(c in '0123456789abcdefABCDEF' for c in h)

RESET = _code('0')
BOLD = _code('1')
DIM = _code('2')
REVERSE = _code('7')

HEX_BANNER_DEFAULT = '#1F4E9E'
HEX_ACCENT_DEFAULT = '#E5C07B'
HEX_INPUT_DEFAULT = '#98C379'
HEX_TEXT = '#FFFFFF'
_PALETTE_KEYS = {'RTASKS_BANNER', 'RTASKS_ACCENT', 'RTASKS_INPUT'}

# Load overrides from environment and optional .env file
_ENV_OVERRIDES: dict[str, str] = {}
_env_path = Path(__file__).resolve().parent.parent / '.env'
if _env_path.exists():
    try:
        for line in _env_path.read_text().splitlines():
            line = line.strip()
            if not line or line.startswith('#') or '=' not in line:
                continue
            k,v = line.split('=',1)
            k = k.strip()
            v = v.strip()
            if k in _PALETTE_KEYS and _valid_hex(v):
                _ENV_OVERRIDES[k] = '#' + v.lstrip('#')
    except OSError:
        pass  # unreadable .env: keep defaults

def _palette(key: str, default: str) -> str:
    """Resolve a palette entry (priority: real env var > .env override > default)."""
    value = os.environ.get(key)
    if value and _valid_hex(value):
        return '#' + value.lstrip('#')
    return _ENV_OVERRIDES.get(key, default)

HEX_BANNER = _palette('RTASKS_BANNER', HEX_BANNER_DEFAULT)
HEX_ACCENT = _palette('RTASKS_ACCENT', HEX_ACCENT_DEFAULT)
HEX_INPUT = _palette('RTASKS_INPUT', HEX_INPUT_DEFAULT)

BANNER_COLOR = _from_hex(HEX_BANNER, background=True) + _from_hex(HEX_TEXT) + BOLD
ACCENT_COLOR = _from_hex(HEX_ACCENT)
INPUT_COLOR = _from_hex(HEX_INPUT)

# style name (as used by render.Span) -> ANSI prefix
STYLES: Dict[str, str] = {
    'banner': BANNER_COLOR,
    'status': BANNER_COLOR,
    'instruction': ACCENT_COLOR,
    'input': INPUT_COLOR,
    'task': '',
    'selected': REVERSE,
    'completed': DIM,
    'description': DIM,
    'placeholder': DIM,
    'warning': ACCENT_COLOR + BOLD,
}

def color(text: str, *styles: str) -> str:
    """Apply ANSI styles to a given text."""
    if not _ENABLE or not any(styles):
        return text
    return ''.join(styles) + text + RESET

def styled(text: str, style: str) -> str:
    """Apply a named style from STYLES; unknown names render plain."""
    return color(text, STYLES.get(style, ''))

__all__ = [
    'color','styled','STYLES','RESET','BOLD','DIM','REVERSE',
    'HEX_BANNER','HEX_ACCENT','HEX_INPUT','_ENABLE','_USE_TRUECOLOR','_FORCE'
]
