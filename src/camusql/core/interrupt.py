"""
Shutdown on interruption.

Signals are turned into exceptions that unwind the shell loop to its boundary
(KeyboardInterrupt for SIGINT, ShutdownRequested for SIGTERM). The loop then
calls `handle_interrupt` with the current session; nothing here closes over
loop variables.
"""

import contextlib
import logging
import signal
import threading
from collections.abc import Iterator
from types import FrameType

from rich.console import Console

from camusql.core.history import HistoryStore
from camusql.core.session import SessionState

log = logging.getLogger(__name__)

console = Console()


class ShutdownRequested(BaseException):
    """Delivered to the shell loop when the process is asked to terminate.

    Derives from BaseException so per-statement `except Exception` handlers
    do not swallow it.
    """

    def __init__(self, signum: int) -> None:
        self.signum = signum
        super().__init__(f"Received signal {signum}")


def _raise_shutdown(signum: int, frame: FrameType | None) -> None:
    del frame
    raise ShutdownRequested(signum)


def install_signal_handlers() -> None:
    """Route SIGTERM to the loop as ShutdownRequested. SIGINT keeps Python's default."""
    signal.signal(signal.SIGTERM, _raise_shutdown)


def force_rollback(session: SessionState) -> bool:
    """Roll back the open transaction, if any; best-effort.

    The slot is cleared before the rollback is requested, so the session ends
    IDLE even when the rollback fails. Failures are logged, never raised.

    Returns:
        True if a rollback was requested
    """
    handle = session.take_transaction()
    if handle is None:
        return False

    console.print("[yellow]Rolling back active transaction...[/yellow]")
    try:
        handle.rollback()
    except Exception:
        log.exception("Forced rollback failed during shutdown")
    return True


@contextlib.contextmanager
def _signals_ignored() -> Iterator[None]:
    """Ignore SIGINT and SIGTERM inside the block; restores the previous handlers."""
    if threading.current_thread() is not threading.main_thread():
        yield
        return

    previous = {signum: signal.getsignal(signum) for signum in (signal.SIGINT, signal.SIGTERM)}
    for signum in previous:
        signal.signal(signum, signal.SIG_IGN)
    try:
        yield
    finally:
        for signum, handler in previous.items():
            if handler is not None:
                signal.signal(signum, handler)


def handle_interrupt(session: SessionState, history_store: HistoryStore | None) -> None:
    """Force a rollback of any open transaction, then flush history.

    Further SIGINT/SIGTERM deliveries are ignored until both steps finished.
    """
    with _signals_ignored():
        console.print("[cyan]\nExiting...[/cyan]")
        force_rollback(session)

        if history_store is None:
            return
        try:
            history_store.save(session.history)
        except Exception:
            log.exception("Could not save history to %s", history_store.path)
