"""Main entry point for terminal Kanban.

The terminal belongs to the board while it runs, so diagnostics go to a
rotating log file instead of stderr.
"""
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional
import click
from cli import KanbanApp, alt_screen_default
from modes import Controller
from theme import load_theme, setting

__version__ = "0.1.0"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
DEFAULT_LOG_FILE = Path.home() / ".kanban" / "kanban.log"

log = logging.getLogger("kanban")


def setup_logging(level: str, path: Optional[Path] = None) -> Path:
    """Send the ``kanban`` logger to a rotating file at ``level``."""
    path = Path(path) if path is not None else DEFAULT_LOG_FILE
    path.parent.mkdir(parents=True, exist_ok=True)
    # Always reset handlers so repeated calls do not duplicate output.
    for h in list(log.handlers):
        log.removeHandler(h)
        h.close()
    log.setLevel(logging.DEBUG)
    log.propagate = False
    fh = RotatingFileHandler(path, maxBytes=2_000_000, backupCount=2, encoding='utf-8')
    fh.setLevel(getattr(logging, level.upper(), logging.WARNING))
    fh.setFormatter(logging.Formatter('%(asctime)s %(levelname)s %(name)s %(message)s'))
    log.addHandler(fh)
    return path


@click.command()
@click.version_option(__version__, prog_name="kanban")
@click.option("--log-level", type=click.Choice(LOG_LEVELS, case_sensitive=False),
              default=lambda: setting("KANBAN_LOG_LEVEL", "WARNING").upper(),
              help="Level written to the log file.")
@click.option("--log-file", type=click.Path(dir_okay=False, path_type=Path),
              default=lambda: setting("KANBAN_LOG_FILE", str(DEFAULT_LOG_FILE)),
              help="Where to write diagnostics.")
@click.option("--alt-screen/--no-alt-screen", default=alt_screen_default,
              help="Use the terminal's alternate screen (KANBAN_ALT_SCREEN).")
def main(log_level: str, log_file: Path, alt_screen: bool) -> None:
    """Keyboard-driven Kanban board: To Do, In Progress, Done.

    \b
    left/h, right/l   change column
    up/k, down/j      select task
    enter             advance selected task
    d                 delete selected task
    n                 new task in the focused column
    /, esc            filter the column by title, clear the filter
    q, ctrl+c         quit
    """
    try:
        setup_logging(log_level, log_file)
    except OSError as exc:
        raise click.ClickException(f"cannot open log file: {exc}") from exc
    app = KanbanApp(Controller(theme=load_theme()), alt_screen=alt_screen)
    try:
        app.run()
    except Exception as exc:
        log.exception("terminal failure")
        raise click.ClickException(f"terminal failure: {exc}") from exc


if __name__ == "__main__":
    main()
