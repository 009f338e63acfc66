"""Statement classification helpers.

Pure text analysis over a single statement. Like the rules, these helpers
expect SQL keywords in lower case (see ``sqlsmell.normalize``).
"""

from __future__ import annotations

import re

from .rules.base import PatternCategory

CREATE_TABLE = "create table"

_WHITESPACE_RUN = re.compile(r"\s+")
_IF_NOT_EXISTS = re.compile(r"^if not exists\b\s*")
# A table identifier ends at whitespace or at the opening paren of the column list
_TABLE_TOKEN = re.compile(r"^[^\s(]*")
_SELECT = re.compile(r"\bselect\b")

# Opening identifier quote -> closing quote
_QUOTE_PAIRS = {'"': '"', "`": "`", "[": "]"}


def is_creation_statement(statement: str) -> bool:
    """Return True if the statement defines a table."""
    return CREATE_TABLE in statement


def extract_table_name(statement: str) -> str:
    """Return the name of the table defined by a ``create table`` statement.

    Examples:
        >>> extract_table_name("create table Users (id int)")
        'Users'
        >>> extract_table_name("create table  if not exists Users(id int)")
        'Users'
        >>> extract_table_name('create table "Order Items" (item_id int)')
        'Order Items'
        >>> extract_table_name("select * from Users")
        ''

    Returns an empty string when the statement is not a creation statement or
    nothing follows the keyword sequence.
    """
    found = statement.find(CREATE_TABLE)
    if found == -1:
        return ""

    rest = statement[found + len(CREATE_TABLE) :].strip()
    rest = _WHITESPACE_RUN.sub(" ", rest)
    rest = _IF_NOT_EXISTS.sub("", rest)

    # A quoted identifier runs to its closing quote and may contain spaces
    close = _QUOTE_PAIRS.get(rest[:1])
    if close is not None:
        end = rest.find(close, 1)
        if end != -1:
            return rest[1:end]
        rest = rest[1:]

    match = _TABLE_TOKEN.match(rest)
    return match.group(0) if match else ""


def statement_kind(statement: str) -> PatternCategory | None:
    """Best-effort category of a statement, for sinks that group output.

    The rule engine never gates on this; each rule decides applicability itself.
    """
    if is_creation_statement(statement):
        return PatternCategory.CREATION
    if _SELECT.search(statement):
        return PatternCategory.QUERY
    return None
