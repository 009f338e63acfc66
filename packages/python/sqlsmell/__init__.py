"""SQLSmell - static detection of SQL anti-patterns.

SQLSmell inspects raw SQL statement text and flags database design smells:
missing primary keys, wildcard column selection, multi-valued attributes,
recursive self-references, generic key naming and more. Use it from tests
or CI to catch schema and query mistakes before they reach production.

Quick Start:
    >>> import sqlsmell

    # One statement at a time, keywords in lower case
    >>> [d.title for d in sqlsmell.check("select * from users")]
    ['SELECT *']
    >>> sqlsmell.has_antipatterns("select name from users")
    False

    # With custom configuration
    >>> from sqlsmell import LintConfig, Linter
    >>> linter = Linter(LintConfig(disabled_rules={"foreign-key-exists"}))
    >>> linter.check("create table users (user_id int primary key)").passed
    True

Input contract:
    Rules match lower-case keywords ("create table", "primary key"). Callers
    that cannot guarantee normalized input set
    ``LintConfig(normalize_keywords=True)``, which lower-cases keywords with
    the sqlglot tokenizer and leaves identifiers untouched.

Rules:
    - SELECT *                  (query, error)
    - Multi-Valued Attribute    (creation, error)
    - Recursive Dependency      (creation, error)
    - Primary Key Exists        (creation, warn)
    - Generic Primary Key       (creation, error)
    - Foreign Key Exists        (creation, warn)
    - Values In Definition      (creation, warn)
"""

from __future__ import annotations

from .config import LintConfig
from .engine import RuleEngine
from .exceptions import (
    ConfigurationError,
    ParseError,
    PatternError,
    RegistrationError,
    SQLSmellError,
)
from .linter import Linter
from .matching import PatternMatcher, TriggerPolicy
from .result import LintResult
from .rules import (
    Diagnostic,
    PatternCategory,
    PatternRule,
    Rule,
    RuleRegistry,
    Severity,
    default_registry,
)

__version__ = "0.1.0"
__all__ = [
    # Main API
    "check",
    "has_antipatterns",
    "Linter",
    "RuleEngine",
    # Types
    "LintConfig",
    "LintResult",
    "Diagnostic",
    "Severity",
    "PatternCategory",
    "TriggerPolicy",
    # Extension points
    "Rule",
    "PatternRule",
    "PatternMatcher",
    "RuleRegistry",
    "default_registry",
    # Exceptions
    "SQLSmellError",
    "ConfigurationError",
    "PatternError",
    "RegistrationError",
    "ParseError",
]

# Default engine instance for simple API
_default_engine = RuleEngine()
_default_config = LintConfig()


def check(sql: str, *, config: LintConfig | None = None) -> list[Diagnostic]:
    """Check one SQL statement against the baseline rules.

    For repeated checks with the same configuration, create a Linter instance
    so the configuration is validated once.

    Args:
        sql: Exactly one SQL statement.
        config: Run configuration. If None, all rules run on the statement as-is.

    Returns:
        Diagnostics in rule registration order.

    Examples:
        >>> import sqlsmell
        >>> diagnostics = sqlsmell.check("create table users (id int)")
        >>> [d.title for d in diagnostics]
        ['Primary Key Exists', 'Generic Primary Key', 'Foreign Key Exists']

        # Lower-case keywords on the way in
        >>> config = sqlsmell.LintConfig(normalize_keywords=True)
        >>> [d.title for d in sqlsmell.check("SELECT * FROM users", config=config)]
        ['SELECT *']
    """
    return _default_engine.evaluate(config or _default_config, sql)


def has_antipatterns(sql: str, *, config: LintConfig | None = None) -> bool:
    """Return True if any rule fires on the statement (convenience wrapper)."""
    return bool(check(sql, config=config))
