"""Terminal front end for the Kanban board.

prompt_toolkit owns the terminal: raw mode, the alternate screen and
repainting. This module only translates terminal keys into the logical
key names understood by ``modes.Controller`` and paints whatever the
controller renders. The terminal is restored by ``Application.run`` on
every exit path, including ctrl+c and exceptions.
"""
import logging
import os
from typing import Optional
from prompt_toolkit import Application
from prompt_toolkit.formatted_text import ANSI
from prompt_toolkit.input import Input
from prompt_toolkit.key_binding import KeyBindings, KeyPressEvent
from prompt_toolkit.keys import Keys
from prompt_toolkit.layout import Layout, Window
from prompt_toolkit.layout.controls import FormattedTextControl
from prompt_toolkit.output import Output
from modes import Controller

log = logging.getLogger("kanban.cli")

# prompt_toolkit key -> logical key name
KEY_NAMES = {
    'left': 'left',
    'right': 'right',
    'up': 'up',
    'down': 'down',
    'home': 'home',
    'end': 'end',
    'enter': 'enter',
    'backspace': 'backspace',
    'delete': 'delete',
    'c-c': 'ctrl+c',
    'c-j': 'ctrl+j',
    'escape': 'escape',
}


def _truthy_env(value: Optional[str], default: bool = True) -> bool:
    if value is None:
        return default
    return value.strip().lower() not in {"0", "false", "no", "off", ""}


def alt_screen_default() -> bool:
    # Alt screen default ON; disable with KANBAN_ALT_SCREEN=0 (or false/no/off)
    return _truthy_env(os.getenv("KANBAN_ALT_SCREEN"), True)


class KanbanApp:
    def __init__(self, controller: Optional[Controller] = None, alt_screen: bool = True):
        self.controller: Controller = controller if controller is not None else Controller()
        self.alt_screen: bool = alt_screen

    # -------------------- event plumbing --------------------
    def _dispatch(self, event: KeyPressEvent, key: str) -> None:
        if not self.controller.handle_key(key):
            event.app.exit()

    def _before_render(self, app: Application) -> None:
        if self.controller.board.loaded:
            return
        size = app.output.get_size()
        self.controller.resize(size.columns, size.rows)

    def key_bindings(self) -> KeyBindings:
        kb = KeyBindings()
        for pt_key, name in KEY_NAMES.items():
            @kb.add(pt_key)
            def _(event: KeyPressEvent, name: str = name) -> None:
                self._dispatch(event, name)

        @kb.add(Keys.Any)
        def _(event: KeyPressEvent) -> None:
            self._dispatch(event, event.data)

        return kb

    def build_app(self, input: Optional[Input] = None, output: Optional[Output] = None) -> Application:
        control = FormattedTextControl(text=lambda: ANSI(self.controller.view()), focusable=True)
        window = Window(content=control, wrap_lines=False, always_hide_cursor=True)
        return Application(
            layout=Layout(window),
            key_bindings=self.key_bindings(),
            full_screen=self.alt_screen,
            before_render=self._before_render,
            input=input,
            output=output,
        )

    def run(self, input: Optional[Input] = None, output: Optional[Output] = None) -> None:
        """Run the board until the user quits.

        Terminal setup errors propagate to the caller; an interrupt that
        reaches us outside the key bindings counts as a normal quit.
        """
        app = self.build_app(input=input, output=output)
        log.info("starting (alt_screen=%s)", self.alt_screen)
        try:
            app.run()
        except (KeyboardInterrupt, EOFError):
            log.info("interrupted")
        finally:
            log.info("stopped: %s", self.controller.board)
