"""Main Linter class - the primary entry point for SQLSmell."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .config import LintConfig
from .engine import RuleEngine
from .result import LintResult

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .rules import RuleRegistry


class Linter:
    """Checks SQL statements against a fixed set of rules and configuration.

    The configuration is validated once, at construction, so a bad rule name
    fails at startup instead of on the first statement.

    Example:
        >>> linter = Linter()
        >>> linter.check("select * from users").titles
        ['SELECT *']

        >>> linter = Linter(LintConfig(disabled_rules={"select-star"}))
        >>> linter.check("select * from users").passed
        True
    """

    def __init__(
        self,
        config: LintConfig | None = None,
        registry: RuleRegistry | None = None,
    ) -> None:
        """Initialize the linter.

        Args:
            config: Run configuration. If None, uses defaults.
            registry: Rules to apply. If None, uses the baseline rules.

        Raises:
            ConfigurationError: If config references rules the registry lacks.
        """
        self.config = config or LintConfig()
        self._engine = RuleEngine(registry)
        self._engine.validate_config(self.config)

    @property
    def engine(self) -> RuleEngine:
        return self._engine

    def check(self, statement: str) -> LintResult:
        """Check a single statement.

        Args:
            statement: Exactly one SQL statement; splitting scripts into
                statements is the caller's job.

        Returns:
            LintResult with the diagnostics in rule registration order.
        """
        diagnostics = self._engine.evaluate(self.config, statement)
        return LintResult(statement=statement, diagnostics=diagnostics)

    def check_all(self, statements: Iterable[str]) -> list[LintResult]:
        """Check independent statements in order."""
        return [self.check(statement) for statement in statements]
