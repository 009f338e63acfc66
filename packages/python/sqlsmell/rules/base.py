"""Base classes for anti-pattern rules."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from ..matching import PatternMatcher, TriggerPolicy

if TYPE_CHECKING:
    from ..config import LintConfig

logger = logging.getLogger(__name__)


class Severity(str, Enum):
    """Severity levels for diagnostics.

    ERROR: A design mistake that should be fixed before it ships
    WARN: Usually a mistake, occasionally justified
    INFO: Informational only
    """

    INFO = "info"
    WARN = "warn"
    ERROR = "error"

    @property
    def rank(self) -> int:
        """Numeric order: INFO < WARN < ERROR."""
        return _SEVERITY_ORDER[self]

    def at_least(self, other: Severity) -> bool:
        return self.rank >= other.rank


_SEVERITY_ORDER = {
    Severity.INFO: 1,
    Severity.WARN: 2,
    Severity.ERROR: 3,
}


class PatternCategory(str, Enum):
    """The class of statement a rule targets.

    Used by sinks for grouping. The engine never gates on it.
    """

    QUERY = "query"
    CREATION = "creation"


@dataclass(frozen=True)
class Diagnostic:
    """One anti-pattern finding for one statement.

    Attributes:
        rule_id: Identifier of the rule that fired
        title: Human-readable rule title (unique per registry)
        severity: How loudly the finding should be surfaced
        category: The statement class the rule targets
        message: Multi-paragraph rationale
        statement: The statement as given by the caller (before any keyword
            normalization)
    """

    rule_id: str
    title: str
    severity: Severity
    category: PatternCategory
    message: str
    statement: str

    @property
    def headline(self) -> str:
        """One-line summary, e.g. ``[ERROR] SELECT *``."""
        return f"[{self.severity.value.upper()}] {self.title}"


class Rule(ABC):
    """Abstract base class for anti-pattern rules.

    Each rule is a self-contained, stateless detector. Rules never mutate the
    statement or the configuration, and never look at other rules' output.

    Subclasses must implement:
    - rule_id: Unique identifier for the rule
    - title: Unique human-readable title
    - message: Rationale shown to the user
    - severity: Severity of a violation
    - category: Targeted statement class
    - check(): The detection logic
    """

    @property
    @abstractmethod
    def rule_id(self) -> str:
        """Unique identifier for this rule (e.g., 'select-star')."""
        ...

    @property
    @abstractmethod
    def title(self) -> str:
        """Human-readable title, used as the diagnostic's key downstream."""
        ...

    @property
    @abstractmethod
    def message(self) -> str:
        """Rationale explaining why the pattern is harmful."""
        ...

    @property
    @abstractmethod
    def severity(self) -> Severity:
        ...

    @property
    @abstractmethod
    def category(self) -> PatternCategory:
        ...

    @abstractmethod
    def check(self, statement: str, config: LintConfig) -> Diagnostic | None:
        """Check one statement.

        Args:
            statement: A single SQL statement with lower-case keywords
            config: Read-only run configuration

        Returns:
            A Diagnostic if the statement violates this rule, else None
        """
        ...

    def _diagnose(self, statement: str) -> Diagnostic:
        """Convenience method to build this rule's diagnostic."""
        return Diagnostic(
            rule_id=self.rule_id,
            title=self.title,
            severity=self.severity,
            category=self.category,
            message=self.message,
            statement=statement,
        )


class PatternRule(Rule):
    """A rule decided by one regular expression and a trigger policy.

    Subclasses set ``pattern`` and ``trigger`` and may override:
    - applies_to(): hard gate; when False the rule emits nothing at all
    - matcher_for(): build a per-statement matcher; None means skip

    The static pattern is compiled at construction so a broken expression
    fails rule registration instead of silently never matching.
    """

    pattern: str | None = None
    trigger: TriggerPolicy = TriggerPolicy.MATCH

    def __init__(self) -> None:
        self._matcher: PatternMatcher | None = None
        if self.pattern is not None:
            self._matcher = PatternMatcher.compile(self.pattern, self.trigger)

    def applies_to(self, statement: str) -> bool:
        return True

    def matcher_for(self, statement: str) -> PatternMatcher | None:
        return self._matcher

    def check(self, statement: str, config: LintConfig) -> Diagnostic | None:
        if not self.applies_to(statement):
            return None

        matcher = self.matcher_for(statement)
        if matcher is None:
            return None

        if matcher.is_violation(statement):
            logger.debug(
                "Rule %s fired (%s on %r)", self.rule_id, matcher.trigger.value, matcher.expression
            )
            return self._diagnose(statement)
        return None
