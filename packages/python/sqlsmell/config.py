"""Run configuration for the rule engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from sqlglot.dialects.dialect import Dialect

from .exceptions import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .rules import Rule


@dataclass
class LintConfig:
    """Configuration for anti-pattern rule checking.

    Owned by the caller and treated as read-only for the duration of a run.
    Rules receive it by reference and never mutate it.

    Attributes:
        enabled_rules: If set, ONLY run these rule ids (whitelist mode).
        disabled_rules: Set of rule ids to skip.
        verbose: Whether sinks should print each diagnostic's full rationale.
        normalize_keywords: Lower-case SQL keywords before evaluation. Rules
            match lower-case keywords, so enable this for input that has not
            been normalized upstream.
        dialect: sqlglot dialect used when normalizing keywords.
        max_statement_length: Statements longer than this are not evaluated.
            None means no bound.
    """

    enabled_rules: set[str] | None = None
    disabled_rules: set[str] = field(default_factory=set)
    verbose: bool = False
    normalize_keywords: bool = False
    dialect: str | None = None
    max_statement_length: int | None = None

    def should_run_rule(self, rule: Rule) -> bool:
        """Determine if a specific rule should be run."""
        # Check whitelist mode
        if self.enabled_rules is not None and rule.rule_id not in self.enabled_rules:
            return False

        # Check blacklist
        return rule.rule_id not in self.disabled_rules

    def validate(self, known_rule_ids: Iterable[str]) -> None:
        """Check this configuration against the rules a registry knows.

        Raises:
            ConfigurationError: On unknown rule ids, a rule that is both
                enabled and disabled, an unknown dialect, or a non-positive
                statement length bound.
        """
        known = set(known_rule_ids)

        requested = set(self.disabled_rules)
        if self.enabled_rules is not None:
            requested |= self.enabled_rules
        unknown = requested - known
        if unknown:
            raise ConfigurationError(
                f"Unknown rule(s): {', '.join(sorted(unknown))}. "
                f"Known rules: {', '.join(sorted(known))}"
            )

        if self.enabled_rules is not None:
            conflicting = self.enabled_rules & self.disabled_rules
            if conflicting:
                raise ConfigurationError(
                    f"Rule(s) both enabled and disabled: {', '.join(sorted(conflicting))}"
                )

        if self.max_statement_length is not None and self.max_statement_length <= 0:
            raise ConfigurationError(
                f"max_statement_length must be positive, got {self.max_statement_length}"
            )

        if self.normalize_keywords and self.dialect is not None:
            try:
                Dialect.get_or_raise(self.dialect)
            except ValueError as e:
                raise ConfigurationError(f"Unknown SQL dialect '{self.dialect}'") from e
