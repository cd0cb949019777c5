"""
SQL utilities - provider-agnostic helpers for SQL script handling.

Single source of truth for splitting SQL text into statements, used both for
interactively typed lines and for `source <file>` batches. No provider or
dialect dependency.
"""

from collections.abc import Iterator

TERMINATOR = ";"
QUOTES = ("'", '"')
ESCAPE = "\\"


def iter_statements(sql_text: str) -> Iterator[str]:
    """Lazily split SQL text into trimmed statements.

    Semicolons inside single- or double-quoted strings are part of the
    statement. A backslash followed by a quote is kept verbatim and does not
    toggle quote state. Empty statements between consecutive terminators are
    yielded as empty strings; callers skip them. An unterminated quote keeps
    its text in the final statement.

    Args:
        sql_text: Raw SQL text (one typed line or a whole file).

    Yields:
        Trimmed statement strings, in source order, without the terminator.
    """
    current: list[str] = []
    in_single_quote = False
    in_double_quote = False

    i = 0
    length = len(sql_text)
    while i < length:
        char = sql_text[i]

        if char == ESCAPE and i + 1 < length and sql_text[i + 1] in QUOTES:
            current.append(char)
            current.append(sql_text[i + 1])
            i += 2
            continue

        if char == "'" and not in_double_quote:
            in_single_quote = not in_single_quote
        elif char == '"' and not in_single_quote:
            in_double_quote = not in_double_quote

        if char == TERMINATOR and not in_single_quote and not in_double_quote:
            yield "".join(current).strip()
            current = []
        else:
            current.append(char)
        i += 1

    if current:
        yield "".join(current).strip()


def split_sql_statements(sql_text: str) -> list[str]:
    """Split SQL text into non-empty statements while preserving quoted semicolons.

    Args:
        sql_text: Raw SQL script content (e.g. from a file).

    Returns:
        List of non-empty statement strings, in order.
    """
    return [statement for statement in iter_statements(sql_text) if statement]
