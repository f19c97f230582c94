"""Tests for the two-field new-task form."""

from form import DESCRIPTION_LIMIT, TITLE_LIMIT, Form, FormField
from models import Status


def feed(form, keys):
    result = None
    for key in keys:
        result = form.handle_key(key)
    return result


def test_form_starts_on_title():
    form = Form(Status.IN_PROGRESS)
    assert form.field is FormField.TITLE
    assert form.title_focused and not form.description_focused
    assert form.focused_buffer() is form.title


def test_first_enter_moves_to_description():
    form = Form(Status.TODO)
    feed(form, "T")
    assert form.handle_key("enter") is None
    assert form.description_focused and not form.title_focused


def test_second_enter_produces_task():
    form = Form(Status.DONE)
    feed(form, "T")
    form.handle_key("enter")
    feed(form, "D")
    task = form.handle_key("enter")
    assert (task.status, task.title, task.description) == (Status.DONE, "T", "D")


def test_keys_only_reach_focused_field():
    form = Form(Status.TODO)
    feed(form, "abc")
    assert form.title.text == "abc"
    assert form.description.text == ""
    form.handle_key("enter")
    feed(form, "xy")
    assert form.title.text == "abc"
    assert form.description.text == "xy"


def test_editing_keys_are_delegated():
    form = Form(Status.TODO)
    feed(form, "abd")
    feed(form, ["left", "backspace", "c", "end", "!"])
    assert form.title.text == "acd!"
    feed(form, ["home", "delete"])
    assert form.title.text == "cd!"


def test_ctrl_j_adds_line_only_to_description():
    form = Form(Status.TODO)
    feed(form, ["a", "ctrl+j", "b"])
    assert form.title.text == "ab"
    form.handle_key("enter")
    feed(form, ["x", "ctrl+j", "y", "up", "end", "z"])
    assert form.description.text == "xz\ny"


def test_unknown_keys_are_ignored():
    form = Form(Status.TODO)
    feed(form, ["f1", "\t", "\x1b[15~"])
    assert form.title.text == ""
    assert form.title_focused


def test_character_limits():
    form = Form(Status.TODO)
    feed(form, "a" * (TITLE_LIMIT + 10))
    assert len(form.title.text) == TITLE_LIMIT
    form.handle_key("enter")
    feed(form, "b" * (DESCRIPTION_LIMIT + 10))
    assert len(form.description.text) == DESCRIPTION_LIMIT


def test_target_fixed_at_creation():
    form = Form(Status.IN_PROGRESS)
    feed(form, ["t", "enter", "d"])
    assert form.submit().status is Status.IN_PROGRESS
