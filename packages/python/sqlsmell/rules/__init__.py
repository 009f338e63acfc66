"""Anti-pattern rules for SQLSmell.

This module provides a composable, extensible rule system for detecting
database design smells in raw SQL statement text.

Architecture:
    - Rule: Abstract interface every rule implements
    - PatternRule: Rule decided by a regular expression and a trigger policy
    - Diagnostic: Structured finding emitted by a rule
    - RuleRegistry: Ordered, constructible collection of rules
    - Individual rule classes: query_patterns and table_design

Usage:
    from sqlsmell.config import LintConfig
    from sqlsmell.rules import default_registry

    config = LintConfig()
    for rule in default_registry():
        diagnostic = rule.check("select * from users", config)
        if diagnostic is not None:
            print(diagnostic.headline)
"""

from .base import Diagnostic, PatternCategory, PatternRule, Rule, Severity
from .registry import RuleRegistry, default_registry

__all__ = [
    "Rule",
    "PatternRule",
    "Diagnostic",
    "Severity",
    "PatternCategory",
    "RuleRegistry",
    "default_registry",
]
