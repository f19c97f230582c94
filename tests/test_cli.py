"""Drive the prompt_toolkit application through a pipe."""

from types import SimpleNamespace

from prompt_toolkit.input import create_pipe_input
from prompt_toolkit.output import DummyOutput

from board import Board
from cli import KanbanApp, _truthy_env
from modes import BoardMode, Controller
from models import Status


def run_keys(controller, keys):
    with create_pipe_input() as pipe:
        pipe.send_text(keys)
        KanbanApp(controller, alt_screen=True).run(input=pipe, output=DummyOutput())


def test_typed_task_lands_in_todo(controller):
    run_keys(controller, "nWrite spec\rCore engine\r\x03")
    assert controller.quitting
    assert isinstance(controller.mode, BoardMode)
    tasks = controller.board.column(Status.TODO).tasks
    assert [(t.title, t.description) for t in tasks] == [("Write spec", "Core engine")]


def test_arrow_keys_and_quit(controller):
    run_keys(controller, "\x1b[C\x1b[Cq")
    assert controller.quitting
    assert controller.board.focused is Status.DONE


def test_ctrl_c_mid_form_creates_nothing(controller):
    run_keys(controller, "nabc\x03")
    assert controller.board.all_tasks() == []


def test_first_render_sizes_board(theme):
    controller = Controller(Board(), theme)
    ui = KanbanApp(controller)
    fake_app = SimpleNamespace(output=DummyOutput())
    ui._before_render(fake_app)
    assert controller.board.loaded
    # DummyOutput reports 80x40
    assert controller.board.column(Status.TODO).width == 20
    assert controller.board.column(Status.TODO).height == 20


def test_truthy_env():
    assert _truthy_env(None, True)
    assert not _truthy_env(None, False)
    assert not _truthy_env(" Off ")
    assert _truthy_env("1")
