"""Tests for the rule engine, configuration and Linter."""

import logging
from concurrent.futures import ThreadPoolExecutor

import pytest

import sqlsmell
from sqlsmell import (
    ConfigurationError,
    LintConfig,
    Linter,
    LintResult,
    ParseError,
    RuleEngine,
    Severity,
)
from sqlsmell.rules import default_registry

CREATION_GATED = {
    "Primary Key Exists",
    "Generic Primary Key",
    "Foreign Key Exists",
    "Recursive Dependency",
    "Values In Definition",
}


@pytest.fixture
def engine() -> RuleEngine:
    return RuleEngine()


@pytest.fixture
def config() -> LintConfig:
    return LintConfig()


def titles(diagnostics: list[sqlsmell.Diagnostic]) -> list[str]:
    return [d.title for d in diagnostics]


class TestEvaluate:
    """Test end-to-end evaluation of single statements."""

    def test_select_star_yields_single_error(self, engine: RuleEngine, config: LintConfig) -> None:
        diagnostics = engine.evaluate(config, "select * from Users")
        assert len(diagnostics) == 1
        assert diagnostics[0].title == "SELECT *"
        assert diagnostics[0].severity == Severity.ERROR

    def test_table_with_descriptive_primary_key(
        self, engine: RuleEngine, config: LintConfig
    ) -> None:
        sql = "create table Users (user_id int primary key, name varchar(50))"
        found = titles(engine.evaluate(config, sql))
        assert "Primary Key Exists" not in found
        assert "Generic Primary Key" not in found

    def test_table_with_generic_id_and_no_key(
        self, engine: RuleEngine, config: LintConfig
    ) -> None:
        sql = "create table Users (id int, name varchar(50))"
        diagnostics = engine.evaluate(config, sql)

        missing_pk = [d for d in diagnostics if d.title == "Primary Key Exists"]
        generic_pk = [d for d in diagnostics if d.title == "Generic Primary Key"]
        assert len(missing_pk) == 1
        assert missing_pk[0].severity == Severity.WARN
        assert len(generic_pk) == 1
        assert generic_pk[0].severity == Severity.ERROR

    def test_recursive_dependency(self, engine: RuleEngine, config: LintConfig) -> None:
        sql = "create table Category (id int, parent_id int, references Category)"
        recursive = [d for d in engine.evaluate(config, sql) if d.title == "Recursive Dependency"]
        assert len(recursive) == 1
        assert recursive[0].severity == Severity.ERROR

        other = "create table Category (id int, parent_id int, references Department)"
        assert "Recursive Dependency" not in titles(engine.evaluate(config, other))

    def test_diagnostics_follow_registration_order(
        self, engine: RuleEngine, config: LintConfig
    ) -> None:
        sql = "create table Users (id int, name varchar(50))"
        assert titles(engine.evaluate(config, sql)) == [
            "Primary Key Exists",
            "Generic Primary Key",
            "Foreign Key Exists",
        ]

    def test_diagnostic_carries_statement_and_rationale(
        self, engine: RuleEngine, config: LintConfig
    ) -> None:
        (diagnostic,) = engine.evaluate(config, "select * from Users")
        assert diagnostic.statement == "select * from Users"
        assert diagnostic.rule_id == "select-star"
        assert "SELECT *" in diagnostic.message
        assert diagnostic.headline == "[ERROR] SELECT *"

    def test_clean_statement(self, engine: RuleEngine, config: LintConfig) -> None:
        assert engine.evaluate(config, "select name from users where user_id = 1") == []

    @pytest.mark.parametrize(
        "sql",
        [
            "select * from Users",
            "select id from users where id = 1",
            "insert into users (id, name) values (1, 'a')",
            "update users set name = 'b' where id = 1",
            "delete from users where id = 1",
            "drop table users",
            "alter table users add column id int",
            "",
        ],
    )
    def test_creation_gated_rules_silent_on_other_statements(
        self, engine: RuleEngine, config: LintConfig, sql: str
    ) -> None:
        assert not CREATION_GATED & set(titles(engine.evaluate(config, sql)))

    def test_upper_case_keywords_are_not_matched(
        self, engine: RuleEngine, config: LintConfig
    ) -> None:
        """Rules require lower-case keywords; upper-case input is not guessed at."""
        assert engine.evaluate(config, "SELECT * FROM Users") == []


class TestDeterminism:
    """Test idempotence and rule independence."""

    STATEMENTS = [
        "select * from Users",
        "create table Users (id int, name varchar(50))",
        "create table Category (id int, parent_id int, references Category)",
        "create table tags (tag_id varchar(10), kind enum('a', 'b'))",
    ]

    @pytest.mark.parametrize("sql", STATEMENTS)
    def test_evaluation_is_idempotent(
        self, engine: RuleEngine, config: LintConfig, sql: str
    ) -> None:
        assert engine.evaluate(config, sql) == engine.evaluate(config, sql)

    @pytest.mark.parametrize("sql", STATEMENTS)
    @pytest.mark.parametrize("disabled", [rule.rule_id for rule in default_registry()])
    def test_disabling_one_rule_leaves_others_unchanged(
        self, engine: RuleEngine, config: LintConfig, sql: str, disabled: str
    ) -> None:
        baseline = [d for d in engine.evaluate(config, sql) if d.rule_id != disabled]
        reduced = engine.evaluate(LintConfig(disabled_rules={disabled}), sql)
        assert reduced == baseline

    def test_concurrent_evaluation_matches_sequential(
        self, engine: RuleEngine, config: LintConfig
    ) -> None:
        statements = self.STATEMENTS * 25
        expected = engine.evaluate_many(config, statements)
        with ThreadPoolExecutor(max_workers=8) as pool:
            actual = list(pool.map(lambda sql: engine.evaluate(config, sql), statements))
        assert actual == expected

    def test_config_is_not_mutated(self, engine: RuleEngine) -> None:
        config = LintConfig(disabled_rules={"foreign-key-exists"})
        engine.evaluate(config, "create table t (id int)")
        assert config == LintConfig(disabled_rules={"foreign-key-exists"})


class TestLintConfig:
    """Test rule selection and configuration errors."""

    def test_whitelist_mode(self, engine: RuleEngine) -> None:
        config = LintConfig(enabled_rules={"generic-primary-key"})
        sql = "create table Users (id int, name varchar(50))"
        assert titles(engine.evaluate(config, sql)) == ["Generic Primary Key"]
        assert [r.rule_id for r in engine.active_rules(config)] == ["generic-primary-key"]

    def test_blacklist_mode(self, engine: RuleEngine) -> None:
        config = LintConfig(disabled_rules={"select-star"})
        assert engine.evaluate(config, "select * from Users") == []
        assert len(engine.active_rules(config)) == 6

    def test_unknown_disabled_rule(self, engine: RuleEngine) -> None:
        with pytest.raises(ConfigurationError, match="no-such-rule"):
            engine.evaluate(LintConfig(disabled_rules={"no-such-rule"}), "select 1")

    def test_unknown_enabled_rule(self, engine: RuleEngine) -> None:
        with pytest.raises(ConfigurationError):
            engine.evaluate(LintConfig(enabled_rules={"SELECT *"}), "select 1")

    def test_rule_both_enabled_and_disabled(self, engine: RuleEngine) -> None:
        config = LintConfig(enabled_rules={"select-star"}, disabled_rules={"select-star"})
        with pytest.raises(ConfigurationError, match="both enabled and disabled"):
            engine.evaluate(config, "select 1")

    def test_non_positive_length_bound(self, engine: RuleEngine) -> None:
        with pytest.raises(ConfigurationError):
            engine.evaluate(LintConfig(max_statement_length=0), "select 1")

    def test_unknown_dialect(self, engine: RuleEngine) -> None:
        config = LintConfig(normalize_keywords=True, dialect="not-a-dialect")
        with pytest.raises(ConfigurationError, match="not-a-dialect"):
            engine.evaluate(config, "select 1")

    def test_oversized_statement_is_skipped(
        self, engine: RuleEngine, caplog: pytest.LogCaptureFixture
    ) -> None:
        config = LintConfig(max_statement_length=10)
        with caplog.at_level(logging.WARNING, logger="sqlsmell.engine"):
            assert engine.evaluate(config, "select * from Users") == []
        assert "max_statement_length=10" in caplog.text

    def test_statement_within_bound_is_evaluated(self, engine: RuleEngine) -> None:
        config = LintConfig(max_statement_length=100)
        assert titles(engine.evaluate(config, "select * from Users")) == ["SELECT *"]


class TestKeywordNormalization:
    """Test opt-in keyword normalization in the engine."""

    @pytest.fixture
    def config(self) -> LintConfig:
        return LintConfig(normalize_keywords=True)

    def test_upper_case_select_star(self, engine: RuleEngine, config: LintConfig) -> None:
        (diagnostic,) = engine.evaluate(config, "SELECT * FROM Users")
        assert diagnostic.title == "SELECT *"
        assert diagnostic.statement == "SELECT * FROM Users"

    def test_upper_case_recursive_dependency_keeps_table_case(
        self, engine: RuleEngine, config: LintConfig
    ) -> None:
        sql = "CREATE TABLE Category (category_id INT PRIMARY KEY, parent_id INT REFERENCES Category)"
        assert titles(engine.evaluate(config, sql)) == [
            "Recursive Dependency",
            "Foreign Key Exists",
        ]

    def test_upper_case_check_in_constraint(self, engine: RuleEngine, config: LintConfig) -> None:
        sql = (
            "CREATE TABLE bugs (bug_id INT PRIMARY KEY, "
            "status VARCHAR(20) CHECK (status IN ('NEW', 'FIXED')))"
        )
        assert titles(engine.evaluate(config, sql)) == [
            "Foreign Key Exists",
            "Values In Definition",
        ]

    def test_diagnostics_and_result_share_original_statement(self, config: LintConfig) -> None:
        sql = "CREATE TABLE Users (ID INT)"
        result = Linter(config).check(sql)
        assert result.statement == sql
        assert result.diagnostics
        assert all(d.statement == sql for d in result.diagnostics)

    def test_untokenizable_statement(self, engine: RuleEngine, config: LintConfig) -> None:
        with pytest.raises(ParseError):
            engine.evaluate(config, "select 'unterminated from users")


class TestLinter:
    """Test the Linter entry point and LintResult."""

    def test_config_validated_at_construction(self) -> None:
        with pytest.raises(ConfigurationError):
            Linter(LintConfig(disabled_rules={"no-such-rule"}))

    def test_check_returns_result(self) -> None:
        result = Linter().check("create table Users (id int, name varchar(50))")
        assert isinstance(result, LintResult)
        assert result.statement == "create table Users (id int, name varchar(50))"
        assert result.passed is False
        assert not result
        assert [d.title for d in result.errors] == ["Generic Primary Key"]
        assert [d.title for d in result.warnings] == ["Primary Key Exists", "Foreign Key Exists"]
        assert result.max_severity == Severity.ERROR

    def test_warnings_only_pass(self) -> None:
        result = Linter().check("create table users (user_id int primary key)")
        assert result.passed is True
        assert result.titles == ["Foreign Key Exists"]
        assert result.max_severity == Severity.WARN

    def test_clean_result(self) -> None:
        result = Linter().check("select name from users")
        assert result.passed
        assert result.diagnostics == []
        assert result.max_severity is None

    def test_check_all(self) -> None:
        results = Linter().check_all(["select * from a", "select b from a"])
        assert [r.titles for r in results] == [["SELECT *"], []]


class TestModuleApi:
    """Test the module-level convenience functions."""

    def test_check(self) -> None:
        assert titles(sqlsmell.check("select * from users")) == ["SELECT *"]

    def test_check_with_config(self) -> None:
        config = LintConfig(disabled_rules={"select-star"})
        assert sqlsmell.check("select * from users", config=config) == []

    def test_has_antipatterns(self) -> None:
        assert sqlsmell.has_antipatterns("select * from users") is True
        assert sqlsmell.has_antipatterns("select name from users") is False
