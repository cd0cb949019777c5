"""
Statement classification.

Assigns each statement an execution category from its leading keyword.
Rules are evaluated top to bottom and the first match wins, so the order of
`_RULES` is significant.
"""

from collections.abc import Callable
from enum import Enum


class StatementKind(str, Enum):
    """Execution category of a single statement"""

    QUERY = "query"
    SCHEMA_CHANGE = "schema_change"
    BEGIN_TRANSACTION = "begin_transaction"
    COMMIT = "commit"
    ROLLBACK = "rollback"
    NON_QUERY = "non_query"


def _starts_with(*prefixes: str) -> Callable[[str], bool]:
    """Build a predicate matching any of `prefixes` on lower-cased text."""

    def predicate(normalized: str) -> bool:
        return normalized.startswith(prefixes)

    return predicate


# Queries and DDL always take an object reference, hence the trailing space.
# Transaction keywords may stand alone ("begin", "commit transaction").
_RULES: tuple[tuple[Callable[[str], bool], StatementKind], ...] = (
    (_starts_with("select ", "show ", "desc ", "describe "), StatementKind.QUERY),
    (
        _starts_with(
            "create table ",
            "create index ",
            "drop table ",
            "drop index ",
            "alter table ",
        ),
        StatementKind.SCHEMA_CHANGE,
    ),
    (_starts_with("begin", "start"), StatementKind.BEGIN_TRANSACTION),
    (_starts_with("commit"), StatementKind.COMMIT),
    (_starts_with("rollback"), StatementKind.ROLLBACK),
)


def classify(statement: str) -> StatementKind:
    """Classify a statement by its case-insensitive keyword prefix.

    Args:
        statement: Statement text; surrounding whitespace is ignored.

    Returns:
        The first matching StatementKind, NON_QUERY when nothing matches.
    """
    normalized = statement.strip().lower()
    for predicate, kind in _RULES:
        if predicate(normalized):
            return kind
    return StatementKind.NON_QUERY
