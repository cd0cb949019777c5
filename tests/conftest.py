import io
from pathlib import Path

import pytest
from rich.console import Console

from camusql.commands import RichPresenter
from camusql.core.history import HistoryStore
from camusql.core.session import SessionState
from tests.utils import FakeConnection


@pytest.fixture
def connection() -> FakeConnection:
    """Fresh connection double"""
    return FakeConnection()


@pytest.fixture
def session(connection: FakeConnection) -> SessionState:
    """Idle session bound to the connection double"""
    return SessionState(connection=connection, command_timeout=60)


@pytest.fixture
def output() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def presenter(output: io.StringIO) -> RichPresenter:
    """Presenter writing plain text into `output`"""
    return RichPresenter(Console(file=output, width=120, color_system=None))


@pytest.fixture
def history_store(tmp_path: Path) -> HistoryStore:
    """History store inside a temporary directory"""
    return HistoryStore(tmp_path / "history.json")
