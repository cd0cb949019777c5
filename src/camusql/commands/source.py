"""
Source Command

Loads a SQL file and executes it exactly like interactive input.
"""

import logging
from pathlib import Path

from camusql.commands._render import Presenter
from camusql.commands.batch import run_batch
from camusql.core.session import SessionState
from camusql.domain.errors import SourceFileNotFoundError, SourceFileReadError

log = logging.getLogger(__name__)


def load_source(session: SessionState, path: str | Path, presenter: Presenter) -> bool:
    """Execute every statement of a SQL file.

    Args:
        session: Current session
        path: SQL file path (`~` is expanded)
        presenter: Receives rows, outcomes and errors

    Returns:
        True if every statement succeeded

    Raises:
        SourceFileNotFoundError: If the file does not exist
        SourceFileReadError: If the file cannot be read as UTF-8 text
    """
    source_path = Path(path).expanduser()
    if not source_path.is_file():
        raise SourceFileNotFoundError(message=f"File not found: {path}")

    try:
        sql_text = source_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SourceFileReadError(message=f"Cannot read {path}: {e}") from e
    log.debug("Sourcing %s (%d characters)", source_path, len(sql_text))
    return run_batch(session, sql_text, presenter)
