"""Rule engine that applies the registry to one statement at a time."""

from __future__ import annotations

import dataclasses
import logging
from typing import TYPE_CHECKING

from .normalize import normalize_keywords
from .rules import Diagnostic, Rule, RuleRegistry, default_registry

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .config import LintConfig

logger = logging.getLogger(__name__)


class RuleEngine:
    """Runs every enabled rule against a statement and collects diagnostics.

    Evaluation is a pure function of (config, statement): the engine keeps no
    per-call state, so one instance can serve many threads at once as long as
    nobody registers rules concurrently.

    Example:
        engine = RuleEngine()
        config = LintConfig(disabled_rules={"foreign-key-exists"})

        for diagnostic in engine.evaluate(config, "select * from users"):
            print(diagnostic.headline)
    """

    def __init__(self, registry: RuleRegistry | None = None) -> None:
        """Initialize the engine.

        Args:
            registry: Rules to apply. If None, uses the baseline rules.
        """
        self._registry = registry if registry is not None else default_registry()

    def register_rule(self, rule: Rule) -> None:
        """Append a rule; it runs after every rule registered before it."""
        self._registry.register(rule)

    def validate_config(self, config: LintConfig) -> None:
        """Raise ConfigurationError if config names rules this engine lacks."""
        config.validate(self._registry.ids())

    def evaluate(self, config: LintConfig, statement: str) -> list[Diagnostic]:
        """Evaluate one statement.

        Args:
            config: Read-only run configuration.
            statement: Exactly one SQL statement. Keywords must be lower case
                unless ``config.normalize_keywords`` is set.

        Returns:
            Diagnostics in rule registration order. Never deduplicated.
            Each diagnostic carries ``statement`` exactly as passed in, even
            when keywords were normalized before matching.

        Raises:
            ConfigurationError: If the configuration is invalid; raised before
                any rule runs.
            ParseError: If keyword normalization is enabled and the statement
                cannot be tokenized.
        """
        self.validate_config(config)

        if (
            config.max_statement_length is not None
            and len(statement) > config.max_statement_length
        ):
            logger.warning(
                "Skipping statement of %d characters (max_statement_length=%d)",
                len(statement),
                config.max_statement_length,
            )
            return []

        # Rules match the normalized text; diagnostics report the caller's text
        original = statement
        if config.normalize_keywords:
            statement = normalize_keywords(statement, dialect=config.dialect)

        diagnostics: list[Diagnostic] = []
        for rule in self._registry:
            if not config.should_run_rule(rule):
                continue

            diagnostic = rule.check(statement, config)
            if diagnostic is not None:
                if diagnostic.statement != original:
                    diagnostic = dataclasses.replace(diagnostic, statement=original)
                diagnostics.append(diagnostic)

        logger.debug("Evaluated statement: %d diagnostic(s)", len(diagnostics))
        return diagnostics

    def evaluate_many(
        self,
        config: LintConfig,
        statements: Iterable[str],
    ) -> list[list[Diagnostic]]:
        """Evaluate independent statements, one diagnostic list per statement."""
        return [self.evaluate(config, statement) for statement in statements]

    @property
    def rules(self) -> list[Rule]:
        """Get all registered rules."""
        return self._registry.all()

    def active_rules(self, config: LintConfig) -> list[Rule]:
        """Get only the rules that would actually run."""
        return [r for r in self._registry if config.should_run_rule(r)]
