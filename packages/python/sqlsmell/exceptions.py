"""Exception hierarchy for SQLSmell."""

from __future__ import annotations


class SQLSmellError(Exception):
    """Base class for every error raised by SQLSmell."""


class ConfigurationError(SQLSmellError):
    """Raised when a LintConfig cannot be honored by the rule engine.

    Examples: an unknown rule id in ``enabled_rules``/``disabled_rules``, or a
    rule that is both enabled and disabled. Always raised before any rule runs.
    """


class PatternError(SQLSmellError):
    """Raised when a rule's regular expression fails to compile."""

    def __init__(self, expression: str, reason: str) -> None:
        self.expression = expression
        self.reason = reason
        super().__init__(f"Invalid pattern {expression!r}: {reason}")


class RegistrationError(SQLSmellError, ValueError):
    """Raised when a rule cannot be added to a registry (duplicate id or title)."""


class ParseError(SQLSmellError):
    """Raised when SQL text cannot be tokenized for keyword normalization."""
