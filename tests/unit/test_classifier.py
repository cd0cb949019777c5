"""Unit tests for statement classification."""

import pytest

from camusql.core.classifier import StatementKind, classify


@pytest.mark.parametrize(
    ("statement", "expected"),
    [
        ("SELECT * FROM t", StatementKind.QUERY),
        ("show tables", StatementKind.QUERY),
        ("DESC robots", StatementKind.QUERY),
        ("describe robots", StatementKind.QUERY),
        ("  create TABLE x (id int)", StatementKind.SCHEMA_CHANGE),
        ("CREATE INDEX idx ON t (a)", StatementKind.SCHEMA_CHANGE),
        ("drop table t", StatementKind.SCHEMA_CHANGE),
        ("Drop Index idx", StatementKind.SCHEMA_CHANGE),
        ("alter table t add column c int", StatementKind.SCHEMA_CHANGE),
        ("BEGIN", StatementKind.BEGIN_TRANSACTION),
        ("begin transaction", StatementKind.BEGIN_TRANSACTION),
        ("start", StatementKind.BEGIN_TRANSACTION),
        ("START TRANSACTION", StatementKind.BEGIN_TRANSACTION),
        ("commit", StatementKind.COMMIT),
        ("COMMIT TRANSACTION", StatementKind.COMMIT),
        ("rollback", StatementKind.ROLLBACK),
        ("update t set x=1", StatementKind.NON_QUERY),
        ("insert into t values (1)", StatementKind.NON_QUERY),
        ("delete from t", StatementKind.NON_QUERY),
        ("", StatementKind.NON_QUERY),
    ],
)
def test_classify(statement: str, expected: StatementKind) -> None:
    assert classify(statement) is expected


def test_query_keywords_require_a_following_space() -> None:
    assert classify("select") is StatementKind.NON_QUERY
    assert classify("selection from t") is StatementKind.NON_QUERY
    assert classify("showtables") is StatementKind.NON_QUERY


def test_create_other_objects_is_not_a_schema_change() -> None:
    assert classify("create view v as select 1") is StatementKind.NON_QUERY
    assert classify("create catalog c") is StatementKind.NON_QUERY


def test_transaction_keywords_match_as_bare_prefixes() -> None:
    # Bare-prefix matching is intentionally loose.
    assert classify("beginning") is StatementKind.BEGIN_TRANSACTION
    assert classify("committed") is StatementKind.COMMIT
    assert classify("startup") is StatementKind.BEGIN_TRANSACTION


def test_first_matching_rule_wins() -> None:
    # "desc " is a query keyword even though the statement mentions a table.
    assert classify("desc table t") is StatementKind.QUERY
    assert classify("select begin from t") is StatementKind.QUERY


def test_classify_is_deterministic() -> None:
    statement = "Rollback Work"
    assert {classify(statement) for _ in range(5)} == {StatementKind.ROLLBACK}
