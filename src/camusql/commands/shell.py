"""
Interactive Shell Command

Line-oriented read-eval loop: built-in commands (exit, clear, source, help)
are handled here, everything else is recorded in the history and executed as
a batch. The loop only ends on `exit`, end of input or an interrupt.
"""

import logging
from collections.abc import Callable

from rich.console import Console
from rich.markup import escape

from camusql.commands._render import Presenter, RichPresenter
from camusql.commands.batch import run_batch
from camusql.commands.source import load_source
from camusql.core.history import HistoryStore
from camusql.core.interrupt import ShutdownRequested, handle_interrupt
from camusql.core.session import SessionState
from camusql.domain.errors import SourceFileNotFoundError, SourceFileReadError

log = logging.getLogger(__name__)

console = Console()

EXIT_OK = 0
EXIT_INTERRUPTED = 130

HELP_TEXT = """Statements end with ';' (the last one may omit it).
  source <file>  execute a SQL file
  clear          clear the screen
  help           show this help
  exit           leave the shell (commit or rollback first)"""


def _prompt_reader(prompt: str) -> Callable[[], str]:
    def read() -> str:
        return console.input(f"[pale_turquoise1]{escape(prompt)}[/pale_turquoise1]")

    return read


class ShellExit(Exception):
    """Raised by a built-in command to end the loop normally."""


def _exit(session: SessionState, history_store: HistoryStore | None, presenter: Presenter) -> None:
    if session.in_transaction:
        presenter.notice("There's an active transaction, please commit or rollback before exit")
        return

    if history_store is not None:
        try:
            history_store.save(session.history)
        except Exception:
            log.exception("Could not save history to %s", history_store.path)
    raise ShellExit()


def handle_line(
    session: SessionState,
    line: str,
    presenter: Presenter,
    history_store: HistoryStore | None = None,
) -> None:
    """Process one line of interactive input.

    Raises:
        ShellExit: When the user leaves the shell
    """
    if not line or line.isspace():
        return

    command = line.strip()
    lowered = command.lower()

    if lowered == "exit":
        _exit(session, history_store, presenter)
        return

    if lowered == "clear":
        presenter.clear()
        return

    if lowered == "help":
        presenter.notice(HELP_TEXT, style="cyan")
        return

    if lowered.startswith("source "):
        try:
            load_source(session, command[len("source ") :].strip(), presenter)
        except (SourceFileNotFoundError, SourceFileReadError) as e:
            presenter.notice(str(e))
        return

    session.record(line)
    run_batch(session, line, presenter)


def run_shell(
    session: SessionState,
    history_store: HistoryStore | None = None,
    presenter: Presenter | None = None,
    read_line: Callable[[], str] | None = None,
    prompt: str = "camus> ",
) -> int:
    """Run the read-eval loop until exit, end of input or interruption.

    Args:
        session: Session to run statements in
        history_store: Where history is flushed on exit/interrupt
        presenter: Output sink (defaults to a RichPresenter)
        read_line: Line reader (defaults to a rich console prompt);
            raises EOFError at end of input
        prompt: Prompt shown by the default reader

    Returns:
        Process exit code (0 on exit/EOF, 130 on interruption)
    """
    presenter = presenter or RichPresenter()
    reader = read_line or _prompt_reader(prompt)

    while True:
        try:
            line = reader()
            handle_line(session, line, presenter, history_store)
        except ShellExit:
            return EXIT_OK
        except EOFError:
            handle_interrupt(session, history_store)
            return EXIT_OK
        except (KeyboardInterrupt, ShutdownRequested):
            handle_interrupt(session, history_store)
            return EXIT_INTERRUPTED
        except Exception as e:
            log.debug("Unhandled error in shell loop", exc_info=True)
            presenter.report_error(e)
