"""
Click-based CLI for camusql.
"""

import sys
from pathlib import Path
from typing import Any

import click
from rich.console import Console

from camusql import __version__
from camusql.commands import RichPresenter, load_source, run_batch, run_shell
from camusql.core.history import HistoryStore
from camusql.core.interrupt import ShutdownRequested, force_rollback, install_signal_handlers
from camusql.core.log import configure_logging
from camusql.core.session import SessionState
from camusql.core.settings import DEFAULT_CONNECTION_SOURCE, ShellSettings
from camusql.domain.errors import CamusShellError, SourceFileNotFoundError, SourceFileReadError
from camusql.providers import ProviderRegistry

console = Console()


def _run_once(
    session: SessionState,
    presenter: RichPresenter,
    file: str | None,
    execute: str | None,
) -> int:
    """Run a file or SQL string as one batch; returns the process exit code."""
    try:
        if file is not None:
            success = load_source(session, file, presenter)
        else:
            success = run_batch(session, execute or "", presenter)
    except (SourceFileNotFoundError, SourceFileReadError) as e:
        presenter.notice(str(e))
        return 1
    except (KeyboardInterrupt, ShutdownRequested):
        force_rollback(session)
        return 130

    if session.in_transaction:
        presenter.notice("Transaction left open at end of input, rolling back", style="yellow")
        force_rollback(session)
        return 1
    return 0 if success else 1


@click.command()
@click.version_option(version=__version__, prog_name="camusql")
@click.option(
    "--connection-source",
    "-c",
    envvar="CAMUSQL_CONNECTION",
    default=DEFAULT_CONNECTION_SOURCE,
    show_default=True,
    help="Connection string, e.g. 'Provider=sqlite;Database=app.db'",
)
@click.option(
    "--history-file",
    envvar="CAMUSQL_HISTORY",
    type=click.Path(dir_okay=False, path_type=Path),
    help="History file (default: camusql.history.json in the temp directory)",
)
@click.option(
    "--timeout",
    type=click.IntRange(min=1),
    default=60,
    show_default=True,
    help="Per-command timeout in seconds",
)
@click.option(
    "--file",
    "-f",
    "file",
    type=click.Path(dir_okay=False),
    help="Execute a SQL file and exit",
)
@click.option(
    "--execute",
    "-e",
    "execute",
    help="Execute SQL statements and exit",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(
    connection_source: str,
    history_file: Path | None,
    timeout: int,
    file: str | None,
    execute: str | None,
    verbose: bool,
) -> None:
    """Interactive SQL shell"""

    options: dict[str, Any] = {
        "connection_source": connection_source,
        "command_timeout": timeout,
        "verbose": verbose,
    }
    if history_file is not None:
        options["history_path"] = history_file
    settings = ShellSettings(**options)

    configure_logging(settings.verbose)
    interactive = file is None and execute is None
    if interactive:
        console.print(f"CamusDB SQL Shell {__version__} (alpha)\n")

    try:
        connection = ProviderRegistry.connect(settings.connection_source)
    except CamusShellError as e:
        console.print(f"[red]✗ Error:[/red] {e}")
        sys.exit(1)

    presenter = RichPresenter()
    install_signal_handlers()
    try:
        if interactive:
            history_store = HistoryStore(settings.history_path)
            session = SessionState(
                connection=connection,
                command_timeout=settings.command_timeout,
                history=history_store.load(),
            )
            exit_code = run_shell(session, history_store, presenter, prompt=settings.prompt)
        else:
            session = SessionState(connection=connection, command_timeout=settings.command_timeout)
            exit_code = _run_once(session, presenter, file, execute)
    finally:
        connection.close()

    sys.exit(exit_code)


if __name__ == "__main__":
    cli()
