"""Rich presentation of rows, outcomes and errors."""

from typing import Protocol

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from camusql.domain.results import Outcome, RowsAffected, RowsReturned
from camusql.providers.base.connection import ColumnType, ColumnValue, Row

console = Console()


class Presenter(Protocol):
    """Presentation collaborator used by the shell loop."""

    def render_row(self, row: Row) -> None: ...

    def report(self, outcome: Outcome) -> None: ...

    def report_error(self, error: BaseException) -> None: ...

    def notice(self, message: str, style: str = "red") -> None: ...

    def clear(self) -> None: ...


def format_value(column: ColumnValue) -> str:
    """Render one typed column value as table cell text."""
    if column.type is ColumnType.ID:
        return "" if column.value in (None, "") else str(column.value)
    if column.type is ColumnType.STRING:
        return "" if column.value in (None, "") else escape(str(column.value))
    if column.type in (ColumnType.INTEGER64, ColumnType.FLOAT64, ColumnType.BOOL):
        return str(column.value)
    return "null"


def format_elapsed(elapsed: float) -> str:
    return f"{elapsed:.4f}s"


class RichPresenter:
    """Collects streamed rows into a table and prints outcome lines."""

    def __init__(self, out: Console | None = None) -> None:
        self.console = out or console
        self._table: Table | None = None

    def render_row(self, row: Row) -> None:
        if self._table is None:
            self._table = Table(box=box.SQUARE)
            for name in row:
                self._table.add_column(escape(name))
        self._table.add_row(*(format_value(value) for value in row.values()))

    def report(self, outcome: Outcome) -> None:
        elapsed = format_elapsed(outcome.elapsed)

        if isinstance(outcome, RowsReturned):
            if self._table is not None:
                self.console.print(self._table)
                self._table = None
            self.console.print(f"[blue]{outcome.rows}[/blue] rows in set ({elapsed})\n")
            return

        rows = outcome.rows
        color = "blue" if rows > 0 or not isinstance(outcome, RowsAffected) else "yellow"
        self.console.print(f"Query OK, [{color}]{rows}[/{color}] rows affected ({elapsed})\n")

    def report_error(self, error: BaseException) -> None:
        self._table = None
        self.console.print(
            f"[red]{escape(type(error).__name__)}[/red]: {escape(str(error))}\n"
        )

    def notice(self, message: str, style: str = "red") -> None:
        self.console.print(f"[{style}]{escape(message)}[/{style}]")

    def clear(self) -> None:
        self.console.clear()
