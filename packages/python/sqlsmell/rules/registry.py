"""Ordered rule registry."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..exceptions import RegistrationError
from .base import PatternCategory, Rule, Severity

if TYPE_CHECKING:
    from collections.abc import Iterator

logger = logging.getLogger(__name__)


class RuleRegistry:
    """Ordered collection of rules.

    Registration order is evaluation order, and therefore diagnostic order.
    Registries are plain objects: build one at startup and pass it around.

    Example:
        registry = RuleRegistry()
        registry.register(SelectStarRule())
        registry.register(PrimaryKeyExistsRule())

        # Get all rules, in order
        all_rules = registry.all()

        # Get only ERROR rules
        errors = registry.by_severity(Severity.ERROR)
    """

    def __init__(self, rules: list[Rule] | None = None) -> None:
        self._rules: dict[str, Rule] = {}
        for rule in rules or []:
            self.register(rule)

    def register(self, rule: Rule) -> None:
        """Register a rule with the registry.

        Args:
            rule: The rule instance to register

        Raises:
            RegistrationError: If a rule with the same ID or title is already registered
        """
        if rule.rule_id in self._rules:
            raise RegistrationError(f"Rule '{rule.rule_id}' is already registered")
        for existing in self._rules.values():
            if existing.title == rule.title:
                raise RegistrationError(
                    f"Rule title '{rule.title}' is already used by '{existing.rule_id}'"
                )
        self._rules[rule.rule_id] = rule
        logger.debug("Registered rule %s (%s)", rule.rule_id, rule.title)

    def unregister(self, rule_id: str) -> None:
        """Remove a rule from the registry."""
        self._rules.pop(rule_id, None)

    def get(self, rule_id: str) -> Rule | None:
        """Get a rule by its ID."""
        return self._rules.get(rule_id)

    def all(self) -> list[Rule]:
        """Get all registered rules in registration order."""
        return list(self._rules.values())

    def ids(self) -> list[str]:
        return list(self._rules)

    def by_severity(self, severity: Severity) -> list[Rule]:
        """Get rules filtered by severity level."""
        return [r for r in self._rules.values() if r.severity == severity]

    def by_severity_minimum(self, minimum: Severity) -> list[Rule]:
        """Get rules with severity >= the specified minimum.

        Severity order: ERROR > WARN > INFO
        """
        return [r for r in self._rules.values() if r.severity.at_least(minimum)]

    def by_category(self, category: PatternCategory) -> list[Rule]:
        return [r for r in self._rules.values() if r.category == category]

    def clear(self) -> None:
        """Clear all registered rules (mainly for testing)."""
        self._rules.clear()

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, rule_id: object) -> bool:
        return rule_id in self._rules

    def __iter__(self) -> Iterator[Rule]:
        return iter(self.all())


def default_registry() -> RuleRegistry:
    """Build a fresh registry holding the baseline anti-pattern rules, in order."""
    # Imported here: table_design depends on the classifier, which depends on .base
    from .query_patterns import SelectStarRule
    from .table_design import (
        ForeignKeyExistsRule,
        GenericPrimaryKeyRule,
        MultiValuedAttributeRule,
        PrimaryKeyExistsRule,
        RecursiveDependencyRule,
        ValuesInDefinitionRule,
    )

    return RuleRegistry(
        [
            SelectStarRule(),
            MultiValuedAttributeRule(),
            RecursiveDependencyRule(),
            PrimaryKeyExistsRule(),
            GenericPrimaryKeyRule(),
            ForeignKeyExistsRule(),
            ValuesInDefinitionRule(),
        ]
    )
