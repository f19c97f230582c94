"""Board logic: holds the three columns, focus, and task mutation.

Columns are keyed by ``Status`` so "the column for status X" is a plain
dict lookup that always succeeds. Every mutation is a no-op when nothing
is selected; callers get ``None`` back instead of an error.
"""
import logging
from typing import Dict, List, Optional, Tuple
from models import Status, Task

log = logging.getLogger("kanban.board")

DIVISOR = 4
ITEM_HEIGHT = 3    # title, description, gap
CHROME_HEIGHT = 4  # title, gap, item count, gap


class Column:
    def __init__(self, title: str = "", width: int = 0, height: int = 0):
        self.title: str = title
        self.width: int = width
        self.height: int = height
        self.tasks: List[Task] = []
        self.index: Optional[int] = None
        self.filter_text: str = ""
        self.filtering: bool = False

    def __len__(self) -> int:
        return len(self.tasks)

    # -------------------- filter --------------------
    def matches(self, task: Task) -> bool:
        return self.filter_text.lower() in task.title.lower()

    def positions(self) -> List[int]:
        """Positions of the tasks shown under the current filter."""
        return [pos for pos, task in enumerate(self.tasks) if self.matches(task)]

    def start_filter(self) -> None:
        self.filtering = True

    def set_filter(self, text: str) -> None:
        self.filter_text = text
        self._clamp(self.index or 0)

    def accept_filter(self) -> None:
        """Stop typing; a non-empty filter stays applied."""
        self.filtering = False
        if not self.filter_text:
            self.clear_filter()

    def clear_filter(self) -> None:
        self.filtering = False
        self.set_filter("")

    # -------------------- selection --------------------
    def selected_task(self) -> Optional[Task]:
        if self.index is None or not self.tasks:
            return None
        return self.tasks[self.index]

    def _step(self, delta: int) -> None:
        shown = self.positions()
        if self.index is None or self.index not in shown:
            return
        at = shown.index(self.index) + delta
        self.index = shown[max(0, min(at, len(shown) - 1))]

    def select_next(self) -> None:
        self._step(1)

    def select_previous(self) -> None:
        self._step(-1)

    def select_first(self) -> None:
        shown = self.positions()
        if shown:
            self.index = shown[0]

    def select_last(self) -> None:
        shown = self.positions()
        if shown:
            self.index = shown[-1]

    def _clamp(self, preferred: int) -> None:
        """Select the first shown task at or after ``preferred``, else the last one."""
        shown = self.positions()
        if not shown:
            self.index = None
            return
        later = [pos for pos in shown if pos >= preferred]
        self.index = later[0] if later else shown[-1]

    # -------------------- mutation --------------------
    def remove_selected(self) -> Optional[Task]:
        """Remove and return the selected task; ``None`` if nothing selected.

        The selection is re-clamped afterwards so a stale index past the
        end, or one hidden by the filter, is never observable.
        """
        if self.index is None or not self.tasks:
            return None
        removed_at = self.index
        task = self.tasks.pop(removed_at)
        self._clamp(removed_at)
        return task

    def insert_at_end(self, task: Task) -> None:
        self.tasks.append(task)
        if self.index is None and self.matches(task):
            self.index = len(self.tasks) - 1

    # -------------------- paging --------------------
    @property
    def per_page(self) -> int:
        return max(1, (self.height - CHROME_HEIGHT) // ITEM_HEIGHT)

    @property
    def page(self) -> int:
        shown = self.positions()
        at = shown.index(self.index) if self.index in shown else 0
        return at // self.per_page

    @property
    def page_count(self) -> int:
        return max(1, -(-len(self.positions()) // self.per_page))

    def visible_tasks(self) -> List[Tuple[int, Task]]:
        """Positions and tasks on the page holding the selection."""
        start = self.page * self.per_page
        window = self.positions()[start:start + self.per_page]
        return [(pos, self.tasks[pos]) for pos in window]

    def __str__(self) -> str:
        return f"{self.title}: {len(self.tasks)} tasks"


class Board:
    def __init__(self):
        self.columns: Dict[Status, Column] = {status: Column(status.title) for status in Status}
        self.focused: Status = Status.TODO
        self.loaded: bool = False

    # -------------------- sizing --------------------
    def init_columns(self, width: int, height: int) -> bool:
        """Size the columns from the first known terminal size.

        Runs once; later calls return False and change nothing. Columns get
        a quarter of the width and half of the height each.
        """
        if self.loaded:
            return False
        col_width = width // DIVISOR
        col_height = height // 2
        for status, column in self.columns.items():
            column.title = status.title
            column.width = col_width
            column.height = col_height
        self.loaded = True
        log.debug("columns sized to %dx%d (terminal %dx%d)", col_width, col_height, width, height)
        return True

    # -------------------- queries --------------------
    def column(self, status: Status) -> Column:
        return self.columns[status]

    def focused_column(self) -> Column:
        return self.columns[self.focused]

    def selected_task(self) -> Optional[Task]:
        return self.focused_column().selected_task()

    def all_tasks(self) -> List[Task]:
        return [task for status in Status for task in self.columns[status].tasks]

    # -------------------- focus --------------------
    def focus_next(self) -> None:
        self.focused = self.focused.next()

    def focus_previous(self) -> None:
        self.focused = self.focused.previous()

    # -------------------- task operations --------------------
    def insert(self, task: Task) -> None:
        self.columns[task.status].insert_at_end(task)
        log.debug('task "%s" added to %s', task.title, task.status.title)

    def move_selected_to_next(self) -> Optional[Task]:
        """Move the focused column's selected task one status forward.

        Removal, advance, append and refocus happen together; focus always
        follows the task. Returns the moved task, or ``None`` when the
        focused column has nothing selected.
        """
        task = self.focused_column().remove_selected()
        if task is None:
            return None
        task.advance()
        self.columns[task.status].insert_at_end(task)
        self.focused = task.status
        log.debug('task "%s" moved to %s', task.title, task.status.title)
        return task

    def delete_selected(self) -> Optional[Task]:
        task = self.focused_column().remove_selected()
        if task is not None:
            log.debug('task "%s" deleted from %s', task.title, self.focused.title)
        return task

    def __str__(self) -> str:
        return ", ".join(str(self.columns[status]) for status in Status)
