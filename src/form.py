"""New-task form: a single-line title above a multi-line description.

Text editing (insertion, deletion, cursor motion) is done by
``prompt_toolkit`` buffers; the form only decides which buffer gets a key
and what ``enter`` means. The first ``enter`` moves from title to
description, the second one produces the task.
"""
import logging
from enum import Enum
from typing import Optional
from prompt_toolkit.buffer import Buffer
from models import Status, Task

log = logging.getLogger("kanban.form")

TITLE_LIMIT = 156
DESCRIPTION_LIMIT = 400


class FormField(Enum):
    TITLE = "title"
    DESCRIPTION = "description"


class Form:
    def __init__(self, target: Status):
        self.target: Status = target
        self.title: Buffer = Buffer(multiline=False)
        self.description: Buffer = Buffer(multiline=True)
        self.field: FormField = FormField.TITLE

    @property
    def title_focused(self) -> bool:
        return self.field is FormField.TITLE

    @property
    def description_focused(self) -> bool:
        return self.field is FormField.DESCRIPTION

    def focused_buffer(self) -> Buffer:
        return self.title if self.title_focused else self.description

    def submit(self) -> Task:
        return Task(self.target, self.title.text, self.description.text)

    # -------------------- input --------------------
    def handle_key(self, key: str) -> Optional[Task]:
        """Apply one key; return the new task once the form is complete."""
        if key == "enter":
            if self.title_focused:
                self.field = FormField.DESCRIPTION
                return None
            task = self.submit()
            log.debug('form submitted "%s" into %s', task.title, task.status.title)
            return task
        self._edit(self.focused_buffer(), key)
        return None

    def _edit(self, buf: Buffer, key: str) -> None:
        limit = TITLE_LIMIT if buf is self.title else DESCRIPTION_LIMIT
        doc = buf.document
        if key == "backspace":
            buf.delete_before_cursor()
        elif key == "delete":
            buf.delete()
        elif key == "left":
            buf.cursor_left()
        elif key == "right":
            buf.cursor_right()
        elif key == "home":
            buf.cursor_position += doc.get_start_of_line_position()
        elif key == "end":
            buf.cursor_position += doc.get_end_of_line_position()
        elif key == "up" and buf is self.description:
            buf.cursor_up()
        elif key == "down" and buf is self.description:
            buf.cursor_down()
        elif key == "ctrl+j" and buf is self.description:
            if len(buf.text) < limit:
                buf.insert_text("\n")
        elif len(key) == 1 and key.isprintable():
            if len(buf.text) < limit:
                buf.insert_text(key)
