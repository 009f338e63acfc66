"""Rules for anti-patterns in table definitions."""

from __future__ import annotations

from ..classifier import extract_table_name, is_creation_statement
from ..matching import PatternMatcher, TriggerPolicy, literal
from .base import PatternCategory, PatternRule, Severity


class CreationRule(PatternRule):
    """Pattern rule that only looks at ``create table`` statements.

    The gate is a hard skip: for any other statement the rule emits nothing,
    even when its trigger policy is ABSENCE.
    """

    @property
    def category(self) -> PatternCategory:
        return PatternCategory.CREATION

    def applies_to(self, statement: str) -> bool:
        return is_creation_statement(statement)


class MultiValuedAttributeRule(PatternRule):
    """Detects id columns typed as free text, i.e. a packed list of ids.

    ERROR severity. Not gated on ``create table``: ``alter table ... add``
    statements can introduce the same column.
    """

    pattern = r"(id\s+varchar)|(id\s+text)|(id\s+regexp)"

    @property
    def rule_id(self) -> str:
        return "multi-valued-attribute"

    @property
    def title(self) -> str:
        return "Multi-Valued Attribute"

    @property
    def message(self) -> str:
        return (
            "● Store each value in its own column and row:\n"
            "Storing a list of IDs as a VARCHAR/TEXT column can cause performance and data integrity\n"
            "problems. Querying against such a column would require using pattern-matching\n"
            "expressions. It is awkward and costly to join a comma-separated list to matching rows.\n"
            "This will make it harder to validate IDs. Think about what is the greatest number of\n"
            "entries this list must support? Instead of using a multi-valued attribute,\n"
            "consider storing it in a separate table, so that each individual value of that attribute\n"
            "occupies a separate row. Such an intersection table implements a many-to-many relationship\n"
            "between the two referenced tables. This will greatly simplify querying and validating\n"
            "the IDs.\n"
        )

    @property
    def severity(self) -> Severity:
        return Severity.ERROR

    @property
    def category(self) -> PatternCategory:
        return PatternCategory.CREATION


class RecursiveDependencyRule(PatternRule):
    """Detects a foreign key that references the table being defined.

    The pattern depends on the statement, so it is compiled per call from the
    extracted table name (escaped, so ``a.b*`` matches only itself).
    """

    # The whole quoted name including its closing quote, or the bare name
    # followed by an identifier boundary
    _TEMPLATE = r"(references\s+(?:\"{name}\"|`{name}`|\[{name}\]|{name}(?![\w$])))"

    @property
    def rule_id(self) -> str:
        return "recursive-dependency"

    @property
    def title(self) -> str:
        return "Recursive Dependency"

    @property
    def message(self) -> str:
        return (
            "● Avoid recursive relationships:\n"
            "It’s common for data to have recursive relationships. Data may be organized in a\n"
            "treelike or hierarchical way. However, creating a foreign key constraint to enforce\n"
            "the relationship between two columns in the same table lends to awkward querying.\n"
            "Each level of the tree corresponds to another join. You will need to issue recursive\n"
            "queries to get all descendants or all ancestors of a node.\n"
            "A solution is to construct an additional closure table. It involves storing all paths\n"
            "through the tree, not just those with a direct parent-child relationship.\n"
            "You might want to compare different hierarchical data designs -- closure table,\n"
            "path enumeration, nested sets -- and pick one based on your application's needs.\n"
        )

    @property
    def severity(self) -> Severity:
        return Severity.ERROR

    @property
    def category(self) -> PatternCategory:
        return PatternCategory.CREATION

    def matcher_for(self, statement: str) -> PatternMatcher | None:
        table_name = extract_table_name(statement)
        if not table_name:
            return None
        return PatternMatcher.compile(self._TEMPLATE.format(name=literal(table_name)))


class PrimaryKeyExistsRule(CreationRule):
    """Detects tables defined without a primary key.

    WARN severity - keyless staging tables exist, but are rare.
    """

    pattern = r"(primary key)"
    trigger = TriggerPolicy.ABSENCE

    @property
    def rule_id(self) -> str:
        return "primary-key-exists"

    @property
    def title(self) -> str:
        return "Primary Key Exists"

    @property
    def message(self) -> str:
        return (
            "● Consider adding a primary key:\n"
            "A primary key constraint is important when you need to do the following:\n"
            "prevent a table from containing duplicate rows,\n"
            "reference individual rows in queries, and\n"
            "support foreign key references\n"
            "If you don’t use primary key constraints, you create a chore for yourself:\n"
            "checking for duplicate rows. More often than not, you will need to define\n"
            "a primary key for every table. Use compound keys when they are appropriate.\n"
        )

    @property
    def severity(self) -> Severity:
        return Severity.WARN


class GenericPrimaryKeyRule(CreationRule):
    """Detects a column named literally ``id``.

    Matches ``id`` at the start of a column definition (after whitespace, the
    opening paren or a comma), so ``user_id`` and ``parent_id`` don't count.
    """

    pattern = r"((?:^|[\s(,])id\s+)"

    @property
    def rule_id(self) -> str:
        return "generic-primary-key"

    @property
    def title(self) -> str:
        return "Generic Primary Key"

    @property
    def message(self) -> str:
        return (
            "● Skip using a generic primary key (id):\n"
            "Adding an id column to every table causes several effects that make its\n"
            "use seem arbitrary. You might end up creating a redundant key or allow\n"
            "duplicate rows if you add this column in a compound key.\n"
            "The name id is so generic that it holds no meaning. This is especially\n"
            "important when you join two tables and they have the same primary\n"
            "key column name.\n"
        )

    @property
    def severity(self) -> Severity:
        return Severity.ERROR


class ForeignKeyExistsRule(CreationRule):
    """Detects tables defined without any foreign key constraint."""

    pattern = r"(foreign key)"
    trigger = TriggerPolicy.ABSENCE

    @property
    def rule_id(self) -> str:
        return "foreign-key-exists"

    @property
    def title(self) -> str:
        return "Foreign Key Exists"

    @property
    def message(self) -> str:
        return (
            "● Consider adding a foreign key:\n"
            "Are you leaving out the application constraints? Even though it seems at\n"
            "first that skipping foreign key constraints makes your database design\n"
            "simpler, more flexible, or speedier, you pay for this in other ways.\n"
            "It becomes your responsibility to write code to ensure referential integrity\n"
            "manually. Use foreign key constraints to enforce referential integrity.\n"
            "Foreign keys have another feature you can’t mimic using application code:\n"
            "cascading updates to multiple tables. This feature allows you to\n"
            "update or delete the parent row and lets the database takes care of any child\n"
            "rows that reference it. The way you declare the ON UPDATE or ON DELETE clauses\n"
            "in the foreign key constraint allow you to control the result of a cascading\n"
            "operation. Make your database mistake-proof with constraints.\n"
        )

    @property
    def severity(self) -> Severity:
        return Severity.WARN


class ValuesInDefinitionRule(CreationRule):
    """Detects value lists baked into a column definition.

    Catches ``enum(...)`` column types and ``check (col in (...))``
    constraints.
    """

    pattern = r"(\benum\s*\()|(\bcheck\s*\([^)]*\bin\s*\()"

    @property
    def rule_id(self) -> str:
        return "values-in-definition"

    @property
    def title(self) -> str:
        return "Values In Definition"

    @property
    def message(self) -> str:
        return (
            "● Don't specify values in the column definition:\n"
            "With ENUM or a CHECK ... IN (...) constraint, the set of legal values lives in\n"
            "the table metadata instead of in data. Listing the permitted values requires\n"
            "querying the metadata, and adding or retiring a value requires an ALTER TABLE,\n"
            "which may lock or rebuild the table. Old values can't be retired without\n"
            "breaking rows that still use them, and the definition is hard to port between\n"
            "databases.\n"
            "Store the permitted values in a lookup table and reference it with a foreign\n"
            "key. Adding a value then becomes an INSERT, and retiring one can be a flag.\n"
        )

    @property
    def severity(self) -> Severity:
        return Severity.WARN
