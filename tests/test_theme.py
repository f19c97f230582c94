"""Tests for settings resolution and the Theme value."""

import pytest

from models import Status
from theme import BORDERS, Theme, color_enabled, load_theme, read_env_file, setting


def test_defaults_without_color():
    theme = load_theme(env={}, overrides={}, color=False)
    assert theme.border == "rounded"
    assert theme.primary == ""
    assert theme.paint("x", "\033[1m") == "x"


def test_env_beats_env_file_beats_default():
    assert setting("KANBAN_BORDER", "rounded", {"KANBAN_BORDER": "thick"}, {"KANBAN_BORDER": "double"}) == "thick"
    assert setting("KANBAN_BORDER", "rounded", {}, {"KANBAN_BORDER": "double"}) == "double"
    assert setting("KANBAN_BORDER", "rounded", {}, {}) == "rounded"


def test_border_choice():
    theme = load_theme(env={"KANBAN_BORDER": "Double"}, overrides={}, color=False)
    assert theme.border_chars == BORDERS["double"]


def test_unknown_border_falls_back():
    assert load_theme(env={"KANBAN_BORDER": "wavy"}, overrides={}, color=False).border == "rounded"


def test_truecolor_status_color():
    env = {"KANBAN_TODO": "#FF0000", "COLORTERM": "truecolor"}
    theme = load_theme(env=env, overrides={}, color=True)
    assert theme.status_color(Status.TODO) == "\033[38;2;255;0;0m"
    assert theme.paint("x", theme.status_color(Status.TODO)).endswith("x\033[0m")


def test_256_color_fallback_and_bad_hex():
    theme = load_theme(env={"KANBAN_DONE": "nothex"}, overrides={"KANBAN_TODO": "ff0000"}, color=True)
    assert theme.status_color(Status.TODO) == "\033[38;5;196m"
    assert theme.status_color(Status.DONE).startswith("\033[38;5;")


def test_read_env_file(tmp_path):
    path = tmp_path / ".env"
    path.write_text("# palette\nKANBAN_TODO = '#123456'\nOTHER=1\nnot a setting\n")
    assert read_env_file(path) == {"KANBAN_TODO": "#123456"}
    assert read_env_file(tmp_path / "missing") == {}


def test_color_enabled_flags():
    assert color_enabled({"FORCE_COLOR": "1"})
    assert not color_enabled({"FORCE_COLOR": "1", "NO_COLOR": ""})


def test_theme_is_immutable():
    theme = Theme()
    with pytest.raises(AttributeError):
        theme.border = "double"
