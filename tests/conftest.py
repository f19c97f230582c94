import pytest

from board import Board
from modes import Controller
from theme import Theme


@pytest.fixture
def theme():
    """Colorless theme so rendered text can be compared directly."""
    return Theme()


@pytest.fixture
def board():
    b = Board()
    b.init_columns(120, 40)
    return b


@pytest.fixture
def controller(board, theme):
    return Controller(board, theme)


@pytest.fixture
def type_text():
    def _type(controller, text):
        for ch in text:
            controller.handle_key(ch)
    return _type
