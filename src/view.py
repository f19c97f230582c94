"""Rendering: pure functions from board/form state to ANSI text.

Nothing here mutates state or touches the terminal; ``cli.py`` paints the
returned strings. Widths are terminal cells of the visible text, so ANSI
sequences added by ``Theme.paint`` never affect alignment and wide
characters take two cells.
"""
import re
from typing import List, Optional, Tuple
from prompt_toolkit.utils import get_cwidth
from board import Board, Column
from form import Form
from models import Status
from theme import Theme, BOLD, DIM, REVERSE

LOADING = "loading..."
PAD_X = 2
PAD_Y = 1
SELECTED_BAR = "│ "
UNSELECTED_BAR = "  "
FORM_WIDTH = 40
DESCRIPTION_ROWS = 6
ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


def visible_len(s: str) -> int:
    """Terminal cells taken by ``s`` once ANSI sequences are stripped."""
    return get_cwidth(ANSI_RE.sub('', s))


def clip(text: str, width: int) -> str:
    """Longest prefix of ``text`` that fits in ``width`` cells."""
    used = 0
    for i, ch in enumerate(text):
        used += get_cwidth(ch)
        if used > width:
            return text[:i]
    return text


def truncate(text: str, width: int) -> str:
    if width <= 0:
        return ''
    if get_cwidth(text) <= width:
        return text
    return clip(text, width - 1) + '…'


def pad(line: str, width: int) -> str:
    gap = width - visible_len(line)
    return line + ' ' * gap if gap > 0 else line


def join_horizontal(blocks: List[List[str]]) -> str:
    """Place blocks of lines side by side, top aligned."""
    widths = [max((visible_len(l) for l in b), default=0) for b in blocks]
    rows = max((len(b) for b in blocks), default=0)
    out: List[str] = []
    for r in range(rows):
        cells = [pad(b[r] if r < len(b) else '', w) for b, w in zip(blocks, widths)]
        out.append(''.join(cells).rstrip())
    return '\n'.join(out)


def frame(lines: List[str], width: int, height: int, theme: Theme, visible: bool) -> List[str]:
    """Surround content with padding and a border.

    ``visible=False`` draws the border with spaces so focused and
    unfocused panels keep the same footprint.
    """
    tl, tr, bl, br, hz, vt = theme.border_chars
    if not visible:
        tl = tr = bl = br = hz = vt = ' '
    inner = max(0, width)
    body = [' ' * inner] * PAD_Y
    body += [' ' * PAD_X + pad(l, inner - 2 * PAD_X) for l in lines]
    body += [' ' * inner] * max(PAD_Y, height - len(body))
    def edge(s: str) -> str:
        return theme.paint(s, theme.accent) if visible else s

    out = [edge(tl + hz * inner + tr)]
    out += [edge(vt) + pad(l, inner) + edge(vt) for l in body]
    out.append(edge(bl + hz * inner + br))
    return out


# -------------------- board --------------------
def filter_line(column: Column, theme: Theme, width: int) -> str:
    """The filter prompt: bold while typing, dim once applied, blank when unset."""
    if column.filtering:
        return theme.paint(truncate(f"Filter: {column.filter_text}", width - 1), BOLD) + _cursor(' ', 0, theme)
    if column.filter_text:
        return theme.paint(truncate(f"Filter: {column.filter_text}", width), DIM)
    return ''


def item_count(column: Column) -> str:
    n = len(column)
    if column.filter_text:
        shown = len(column.positions())
        return f"{shown} of {n} items" if shown else "No matches."
    if n == 0:
        return "No items."
    return f"{n} item" if n == 1 else f"{n} items"


def column_lines(column: Column, status: Status, theme: Theme, focused: bool) -> List[str]:
    width = max(1, column.width - 2 * PAD_X)
    lines = [theme.paint(truncate(f" {column.title} ", width), BOLD, theme.primary)]
    lines.append(filter_line(column, theme, width))
    lines.append(theme.paint(item_count(column), DIM))
    lines.append('')
    for pos, task in column.visible_tasks():
        selected = pos == column.index
        bar = SELECTED_BAR if selected else UNSELECTED_BAR
        text_width = width - len(bar)
        title = truncate(task.title or '<untitled>', text_width)
        first_line = task.description.split('\n', 1)[0] if task.description else ''
        desc = truncate(first_line, text_width)
        if selected:
            accent = theme.accent if focused else theme.status_color(status)
            lines.append(theme.paint(bar, accent) + theme.paint(title, accent, BOLD))
            lines.append(theme.paint(bar, accent) + theme.paint(desc, accent))
        else:
            lines.append(bar + theme.paint(title, theme.status_color(status)))
            lines.append(bar + theme.paint(desc, DIM))
        lines.append('')
    if column.page_count > 1:
        dots = ''.join('•' if p == column.page else '○' for p in range(column.page_count))
        lines.append(theme.paint(dots, DIM))
    return lines


def render_board(board: Board, theme: Theme) -> str:
    """Three column panels side by side; the focused one is bordered."""
    if not board.loaded:
        return LOADING
    blocks = []
    for status in Status:
        column = board.column(status)
        focused = status is board.focused
        lines = column_lines(column, status, theme, focused)
        blocks.append(frame(lines, column.width, column.height, theme, visible=focused))
    return join_horizontal(blocks)


# -------------------- form --------------------
def _cursor(text: str, col: Optional[int], theme: Theme) -> str:
    """Mark the cursor with reverse video at ``col`` (None: no cursor)."""
    if col is None or not theme.color:
        return text
    ch = text[col] if col < len(text) else ' '
    return text[:col] + REVERSE + ch + '\033[27m' + text[col + 1:]


def title_line(form: Form, theme: Theme, width: int = FORM_WIDTH) -> str:
    text = form.title.text
    pos = form.title.cursor_position
    # scroll so the text before the cursor plus the cursor cell fit
    start = 0
    while start < pos and get_cwidth(text[start:pos]) + 1 > width:
        start += 1
    shown = clip(text[start:], width)
    col = pos - start if form.title_focused else None
    return '> ' + _cursor(shown, col, theme)


def _chunks(line: str, width: int) -> List[str]:
    """Split ``line`` into pieces of at most ``width`` cells."""
    chunks: List[str] = []
    current, used = '', 0
    for ch in line:
        w = get_cwidth(ch)
        if current and used + w > width:
            chunks.append(current)
            current, used = '', 0
        current += ch
        used += w
    if current or not chunks:
        chunks.append(current)
    return chunks


def wrap_with_cursor(text: str, cursor: int, width: int) -> Tuple[List[str], Tuple[int, int]]:
    """Hard-wrap ``text`` to ``width`` cells; return rows and the cursor's (row, col).

    ``col`` is a character offset into its row.
    """
    rows: List[str] = []
    where = (0, 0)
    offset = 0
    for line in text.split('\n'):
        chunks = _chunks(line, width)
        start = offset
        for ci, chunk in enumerate(chunks):
            end = start + len(chunk)
            if start <= cursor < end or (cursor == end and ci == len(chunks) - 1):
                where = (len(rows), cursor - start)
            rows.append(chunk)
            start = end
        offset += len(line) + 1
    return rows, where


def description_lines(form: Form, theme: Theme, width: int = FORM_WIDTH,
                      rows: int = DESCRIPTION_ROWS) -> List[str]:
    wrapped, (row, col) = wrap_with_cursor(form.description.text, form.description.cursor_position, width)
    top = max(0, row - rows + 1)
    window = wrapped[top:top + rows]
    window += [''] * (rows - len(window))
    out = []
    for i, line in enumerate(window):
        at = col if form.description_focused and top + i == row else None
        out.append(_cursor(line, at, theme))
    return out


def render_form(form: Form, theme: Theme) -> str:
    """Title input above the description area."""
    tl, tr, bl, br, hz, vt = theme.border_chars
    heading = theme.paint(f" New task in {form.target.title} ", BOLD, theme.primary)
    title_label = theme.paint('Title', BOLD if form.title_focused else DIM)
    desc_label = theme.paint('Description', BOLD if form.description_focused else DIM)
    box_color = theme.accent if form.description_focused else DIM

    def edge(s: str) -> str:
        return theme.paint(s, box_color)

    lines = [heading, '', title_label, title_line(form, theme), '', desc_label]
    lines.append(edge(tl + hz * (FORM_WIDTH + 2) + tr))
    for line in description_lines(form, theme):
        lines.append(edge(vt) + ' ' + pad(line, FORM_WIDTH) + ' ' + edge(vt))
    lines.append(edge(bl + hz * (FORM_WIDTH + 2) + br))
    hint = 'enter: description' if form.title_focused else 'enter: create task · ctrl+j: new line'
    lines += ['', theme.paint(hint + ' · ctrl+c: quit', DIM)]
    return '\n'.join(lines)
