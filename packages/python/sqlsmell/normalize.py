"""Keyword normalization using the sqlglot tokenizer.

Every rule matches lower-case keywords (``create table``, ``primary key``).
Input is expected to arrive normalized; this module is the opt-in way to get
there without touching identifiers, which stay byte-for-byte intact so that
table names extracted from the statement keep their case.
"""

from __future__ import annotations

from sqlglot.dialects.dialect import Dialect
from sqlglot.errors import TokenError
from sqlglot.tokens import Token, TokenType

from .exceptions import ParseError

# Tokens whose text is user data rather than SQL vocabulary
_PRESERVED = {
    TokenType.VAR,
    TokenType.IDENTIFIER,
    TokenType.STRING,
    TokenType.NATIONAL_STRING,
    TokenType.RAW_STRING,
    TokenType.HEREDOC_STRING,
    TokenType.UNICODE_STRING,
    TokenType.HEX_STRING,
    TokenType.BIT_STRING,
    TokenType.BYTE_STRING,
    TokenType.NUMBER,
    TokenType.PARAMETER,
}

# Words the rules match that some dialects tokenize as plain VAR (CHECK, ...).
# A bare identifier spelled like one of these is lower-cased too.
_RULE_WORDS = {
    "CHECK",
    "CREATE",
    "ENUM",
    "EXISTS",
    "FOREIGN",
    "IF",
    "IN",
    "KEY",
    "NOT",
    "PRIMARY",
    "REFERENCES",
    "REGEXP",
    "SELECT",
    "SERIAL",
    "TABLE",
    "TEXT",
    "VARCHAR",
}


def normalize_keywords(statement: str, dialect: str | None = None) -> str:
    """Lower-case keyword tokens in a statement.

    Examples:
        >>> normalize_keywords("SELECT * FROM Users")
        'select * from Users'
        >>> normalize_keywords("CREATE TABLE Users (ID INT PRIMARY KEY)")
        'create table Users (ID int primary key)'
        >>> normalize_keywords("CREATE TABLE t (s TEXT CHECK (s IN ('a')))")
        "create table t (s text check (s in ('a')))"

    Args:
        statement: A single SQL statement.
        dialect: sqlglot dialect name ('postgres', 'mysql', ...). None uses
            the default dialect.

    Returns:
        The statement with keywords lower-cased and everything else,
        including whitespace and comments, unchanged.

    Raises:
        ParseError: If the statement cannot be tokenized.
    """
    try:
        tokens = Dialect.get_or_raise(dialect).tokenize(statement)
    except TokenError as e:
        raise ParseError(str(e)) from e

    parts: list[str] = []
    cursor = 0
    for token in tokens:
        if token.token_type in _PRESERVED and not _is_rule_word(token):
            continue
        end = token.end + 1
        parts.append(statement[cursor : token.start])
        parts.append(statement[token.start : end].lower())
        cursor = end
    parts.append(statement[cursor:])
    return "".join(parts)


def _is_rule_word(token: Token) -> bool:
    return token.token_type == TokenType.VAR and token.text.upper() in _RULE_WORDS
