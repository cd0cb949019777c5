"""Typed dispatch outcomes handed to the presentation layer."""

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class Outcome:
    """Common outcome payload; `elapsed` is wall-clock seconds."""

    elapsed: float

    @property
    def rows(self) -> int:
        return 0


@dataclass(slots=True, frozen=True)
class RowsAffected(Outcome):
    """Generic (DML) statement executed."""

    affected: int = 0

    @property
    def rows(self) -> int:
        return self.affected


@dataclass(slots=True, frozen=True)
class RowsReturned(Outcome):
    """Query executed; `elapsed` excludes row streaming."""

    returned: int = 0

    @property
    def rows(self) -> int:
        return self.returned


@dataclass(slots=True, frozen=True)
class TransactionStarted(Outcome):
    pass


@dataclass(slots=True, frozen=True)
class TransactionCommitted(Outcome):
    pass


@dataclass(slots=True, frozen=True)
class TransactionRolledBack(Outcome):
    pass


@dataclass(slots=True, frozen=True)
class SchemaChangeApplied(Outcome):
    pass
