"""Mode controller: routes keys to the board or to the new-task form.

Exactly one mode is active. ``FormMode`` owns the suspended board in
``return_to`` so the same ``Board`` object is handed back when the form
completes or is cancelled; the board is never copied.

Logical key names are plain strings ("left", "enter", "ctrl+c", or the
typed character); ``cli.py`` translates terminal keys into them.
"""
import logging
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Union
from board import Board, Column
from form import Form
from theme import Theme, load_theme
import view

log = logging.getLogger("kanban.modes")

TERMINATE_KEY = "ctrl+c"
BOARD_QUIT_KEYS = {"q"}
NEW_TASK_KEY = "n"
FILTER_KEY = "/"
CLEAR_FILTER_KEY = "escape"


@dataclass
class BoardMode:
    board: Board


@dataclass
class FormMode:
    form: Form
    return_to: Board


Mode = Union[BoardMode, FormMode]


BOARD_ACTIONS: Dict[str, Callable[[Board], object]] = {
    "left": Board.focus_previous,
    "h": Board.focus_previous,
    "right": Board.focus_next,
    "l": Board.focus_next,
    "enter": Board.move_selected_to_next,
    "d": Board.delete_selected,
    "up": lambda b: b.focused_column().select_previous(),
    "k": lambda b: b.focused_column().select_previous(),
    "down": lambda b: b.focused_column().select_next(),
    "j": lambda b: b.focused_column().select_next(),
    "home": lambda b: b.focused_column().select_first(),
    "g": lambda b: b.focused_column().select_first(),
    "end": lambda b: b.focused_column().select_last(),
    "G": lambda b: b.focused_column().select_last(),
}


class Controller:
    def __init__(self, board: Optional[Board] = None, theme: Optional[Theme] = None):
        self.mode: Mode = BoardMode(board if board is not None else Board())
        self.theme: Theme = theme if theme is not None else load_theme()
        self.quitting: bool = False

    @property
    def board(self) -> Board:
        """The single live board, whichever mode is active."""
        if isinstance(self.mode, FormMode):
            return self.mode.return_to
        return self.mode.board

    # -------------------- events --------------------
    def resize(self, width: int, height: int) -> None:
        self.board.init_columns(width, height)

    def handle_key(self, key: str) -> bool:
        """Dispatch one key to the active mode. Returns False once quitting."""
        if self.quitting:
            return False
        if key == TERMINATE_KEY:
            self._terminate()
        elif isinstance(self.mode, FormMode):
            self._form_key(self.mode, key)
        else:
            self._board_key(self.mode, key)
        return not self.quitting

    def _board_key(self, mode: BoardMode, key: str) -> None:
        column = mode.board.focused_column()
        if column.filtering:
            self._filter_key(column, key)
            return
        if key in BOARD_QUIT_KEYS:
            self._terminate()
            return
        if not mode.board.loaded:
            return
        if key == NEW_TASK_KEY:
            self.open_form()
            return
        if key == FILTER_KEY:
            column.start_filter()
            return
        if key == CLEAR_FILTER_KEY:
            column.clear_filter()
            return
        action = BOARD_ACTIONS.get(key)
        if action is not None:
            action(mode.board)

    @staticmethod
    def _filter_key(column: Column, key: str) -> None:
        """Keys typed while the focused column's filter is being edited."""
        if key == "enter":
            column.accept_filter()
        elif key == CLEAR_FILTER_KEY:
            column.clear_filter()
        elif key == "backspace":
            column.set_filter(column.filter_text[:-1])
        elif len(key) == 1 and key.isprintable():
            column.set_filter(column.filter_text + key)

    def _form_key(self, mode: FormMode, key: str) -> None:
        task = mode.form.handle_key(key)
        if task is not None:
            mode.return_to.insert(task)
            self.mode = BoardMode(mode.return_to)

    # -------------------- handoff --------------------
    def open_form(self) -> Form:
        board = self.board
        form = Form(board.focused)
        self.mode = FormMode(form, return_to=board)
        log.debug("form opened for %s", board.focused.title)
        return form

    def cancel_form(self) -> None:
        if isinstance(self.mode, FormMode):
            self.mode = BoardMode(self.mode.return_to)
            log.debug("form cancelled")

    def _terminate(self) -> None:
        self.cancel_form()
        self.quitting = True
        log.info("terminate requested")

    # -------------------- rendering --------------------
    def view(self) -> str:
        if self.quitting:
            return ""
        if isinstance(self.mode, FormMode):
            return view.render_form(self.mode.form, self.theme)
        return view.render_board(self.mode.board, self.theme)
