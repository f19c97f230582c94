"""Data models for the terminal Kanban application.

Exposes the ``Status`` enumeration and the ``Task`` dataclass. ``Status``
plays three roles: a task's progress stage, the board's focused column and
the key of each column. Both progress and focus wrap around, so the order
Todo -> In Progress -> Done -> Todo is cyclic in both directions.
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import IntEnum
from typing import Dict


class Status(IntEnum):
    TODO = 0
    IN_PROGRESS = 1
    DONE = 2

    def next(self) -> "Status":
        return Status((self + 1) % len(Status))

    def previous(self) -> "Status":
        return Status((self - 1) % len(Status))

    @property
    def title(self) -> str:
        return STATUS_TITLES[self]


STATUS_TITLES: Dict[Status, str] = {
    Status.TODO: "To Do",
    Status.IN_PROGRESS: "In Progress",
    Status.DONE: "Done",
}


@dataclass
class Task:
    """A single Kanban task.

    Fields:
        status: Column the task lives in; changed only by ``advance``.
        title: Single-line title captured by the form.
        description: Free text captured by the form (may span lines).

    Tasks carry no id; a task is addressed by its position in a column.
    """
    status: Status
    title: str
    description: str = ""

    def advance(self) -> None:
        self.status = self.status.next()

    def __repr__(self) -> str:  # pragma: no cover - convenience only
        return f"Task(title={self.title}, status={self.status.name})"
