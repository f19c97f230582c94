"""Color, border & layout configuration.

Decisions:
- Truecolor preferred; falls back to 256-color cube if unsupported.
- Disables color automatically when not a TTY unless FORCE_COLOR=1.
- Honors NO_COLOR for complete disable.
- Settings resolve as: real env var > project .env file > default.
- Render functions receive a ``Theme`` value; nothing here is mutated
  after load.
"""
from __future__ import annotations
import logging
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Mapping, Optional, Tuple
from models import Status

log = logging.getLogger("kanban.theme")

ENV_FILE = Path(__file__).resolve().parent.parent / '.env'

RESET = "\033[0m"
BOLD = "\033[1m"
DIM = "\033[2m"
REVERSE = "\033[7m"

# Default palette
HEX_PRIMARY_DEFAULT = '#476EAE'
HEX_TODO_DEFAULT = '#48B3AF'
HEX_INPROGRESS_DEFAULT = '#F6FF99'
HEX_DONE_DEFAULT = '#A7E399'
HEX_ACCENT_DEFAULT = '#5F5FD7'  # xterm 62
BORDER_DEFAULT = 'rounded'

# top-left, top-right, bottom-left, bottom-right, horizontal, vertical
BORDERS: Dict[str, Tuple[str, str, str, str, str, str]] = {
    'rounded': ('╭', '╮', '╰', '╯', '─', '│'),
    'normal': ('┌', '┐', '└', '┘', '─', '│'),
    'double': ('╔', '╗', '╚', '╝', '═', '║'),
    'thick': ('┏', '┓', '┗', '┛', '━', '┃'),
}


def _hex_to_rgb(hex_code: str) -> tuple[int, int, int]:
    """Convert a hex color code to an RGB tuple."""
    h = hex_code.lstrip('#')
    return int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16)


def _is_hex(value: str) -> bool:
    h = value.lstrip('#')
    return len(h) == 6 and all(c in '0123456789abcdefABCDEF' for c in h)


def _fg_truecolor(r: int, g: int, b: int) -> str:
    return f"\033[38;2;{r};{g};{b}m"


def _fg_256(r: int, g: int, b: int) -> str:
    """Approximate RGB to xterm 256-color cube."""
    def to_6(x: int) -> int:
        return int(round(x / 255 * 5))
    r6, g6, b6 = to_6(r), to_6(g), to_6(b)
    idx = 16 + 36 * r6 + 6 * g6 + b6
    return f"\033[38;5;{idx}m"


def fg(hex_code: str, truecolor: bool) -> str:
    """ANSI foreground sequence for a hex color."""
    r, g, b = _hex_to_rgb(hex_code)
    return _fg_truecolor(r, g, b) if truecolor else _fg_256(r, g, b)


# -------------------- settings resolution --------------------
def read_env_file(path: Path = ENV_FILE) -> Dict[str, str]:
    """Parse KANBAN_* assignments from a .env file; missing file -> {}."""
    values: Dict[str, str] = {}
    if not path.exists():
        return values
    try:
        text = path.read_text(encoding='utf-8')
    except OSError:
        log.warning("Unable to read %s", path, exc_info=True)
        return values
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith('#') or '=' not in line:
            continue
        k, v = line.split('=', 1)
        k = k.strip()
        if k.startswith('KANBAN_'):
            values[k] = v.strip().strip('"').strip("'")
    return values


def setting(key: str, default: str, env: Optional[Mapping[str, str]] = None,
            overrides: Optional[Mapping[str, str]] = None) -> str:
    env = os.environ if env is None else env
    overrides = read_env_file() if overrides is None else overrides
    return str(env.get(key) or overrides.get(key, default))


def color_enabled(env: Optional[Mapping[str, str]] = None) -> bool:
    env = os.environ if env is None else env
    force = env.get("FORCE_COLOR", "").lower() in {"1", "true", "yes", "on"}
    no_color = env.get("NO_COLOR") is not None
    return (force or sys.stdout.isatty()) and not no_color


# -------------------- theme --------------------
@dataclass(frozen=True)
class Theme:
    """Everything the render functions need to know about styling."""
    primary: str = ''
    accent: str = ''
    status_colors: Mapping[Status, str] = field(default_factory=dict)
    border: str = BORDER_DEFAULT
    color: bool = False

    @property
    def border_chars(self) -> Tuple[str, str, str, str, str, str]:
        return BORDERS[self.border]

    def paint(self, text: str, *styles: str) -> str:
        """Apply ANSI styles to text when color is enabled."""
        if not self.color or not text:
            return text
        return ''.join(styles) + text + RESET

    def status_color(self, status: Status) -> str:
        return self.status_colors.get(status, '')


def _hex_setting(key: str, default: str, env: Mapping[str, str], overrides: Mapping[str, str]) -> str:
    value = setting(key, default, env, overrides)
    if not _is_hex(value):
        log.warning("Ignoring %s=%r: not a hex color", key, value)
        return default
    return '#' + value.lstrip('#')


def load_theme(env: Optional[Mapping[str, str]] = None,
               overrides: Optional[Mapping[str, str]] = None,
               color: Optional[bool] = None) -> Theme:
    """Build a Theme from env vars, the .env file and defaults."""
    env = os.environ if env is None else env
    overrides = read_env_file() if overrides is None else overrides
    enabled = color_enabled(env) if color is None else color
    truecolor = any(tok in env.get("COLORTERM", "").lower() for tok in ("truecolor", "24bit"))

    def resolve(key: str, default: str) -> str:
        return fg(_hex_setting(key, default, env, overrides), truecolor) if enabled else ''

    border = setting('KANBAN_BORDER', BORDER_DEFAULT, env, overrides).lower()
    if border not in BORDERS:
        log.warning("Unknown KANBAN_BORDER %r, using %s", border, BORDER_DEFAULT)
        border = BORDER_DEFAULT
    return Theme(
        primary=resolve('KANBAN_PRIMARY', HEX_PRIMARY_DEFAULT),
        accent=resolve('KANBAN_ACCENT', HEX_ACCENT_DEFAULT),
        status_colors={
            Status.TODO: resolve('KANBAN_TODO', HEX_TODO_DEFAULT),
            Status.IN_PROGRESS: resolve('KANBAN_INPROGRESS', HEX_INPROGRESS_DEFAULT),
            Status.DONE: resolve('KANBAN_DONE', HEX_DONE_DEFAULT),
        },
        border=border,
        color=enabled,
    )
