"""Lint result types."""

from __future__ import annotations

from dataclasses import dataclass, field

from .rules import Diagnostic, Severity


@dataclass(frozen=True)
class LintResult:
    """Immutable result of checking one statement.

    Attributes:
        statement: The statement as given by the caller.
        diagnostics: Findings in rule registration order.
    """

    statement: str
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        """True if no ERROR diagnostics were produced."""
        return not self.errors

    @property
    def errors(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.severity == Severity.WARN]

    @property
    def titles(self) -> list[str]:
        return [d.title for d in self.diagnostics]

    @property
    def max_severity(self) -> Severity | None:
        """Highest severity among the diagnostics, or None if there are none."""
        if not self.diagnostics:
            return None
        return max((d.severity for d in self.diagnostics), key=lambda s: s.rank)

    def __bool__(self) -> bool:
        """Allow using result directly in boolean context."""
        return self.passed
