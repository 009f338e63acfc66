"""Pattern matching with an explicit trigger policy."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from .exceptions import PatternError


class TriggerPolicy(str, Enum):
    """Whether finding the pattern or failing to find it is the violation.

    MATCH: The pattern being present is the anti-pattern (e.g. ``select *``)
    ABSENCE: The pattern being missing is the anti-pattern (e.g. no ``primary key``)
    """

    MATCH = "match"
    ABSENCE = "absence"


@dataclass(frozen=True)
class PatternMatcher:
    """A compiled expression plus the policy that turns a search into a verdict.

    Matching is an unanchored search over the whole statement; case
    sensitivity is whatever the expression itself says.

    Example:
        >>> matcher = PatternMatcher.compile(r"primary key", TriggerPolicy.ABSENCE)
        >>> matcher.is_violation("create table t (a int)")
        True
    """

    pattern: re.Pattern[str]
    trigger: TriggerPolicy = TriggerPolicy.MATCH

    @classmethod
    def compile(
        cls,
        expression: str,
        trigger: TriggerPolicy = TriggerPolicy.MATCH,
    ) -> PatternMatcher:
        """Compile an expression, raising PatternError if it is invalid."""
        try:
            pattern = re.compile(expression)
        except re.error as e:
            raise PatternError(expression, str(e)) from e
        return cls(pattern=pattern, trigger=trigger)

    @property
    def expression(self) -> str:
        return self.pattern.pattern

    def found(self, statement: str) -> bool:
        """Return True if the pattern occurs anywhere in the statement."""
        return self.pattern.search(statement) is not None

    def is_violation(self, statement: str) -> bool:
        """Apply the trigger policy to the search result."""
        found = self.found(statement)
        if self.trigger is TriggerPolicy.ABSENCE:
            return not found
        return found


def literal(fragment: str) -> str:
    """Escape a fragment extracted from user SQL for use inside an expression.

    A table named ``a.b*`` must match itself, not "a", any char, then "b"s.
    """
    return re.escape(fragment)
