"""Tests for condition registries and safe expression evaluation."""

import pytest

from userinput.core.conditions import RuleRegistry
from userinput.core.errors import ConditionError
from userinput.core.tree import node_from_data
from userinput.utils import eval_condition


class TestEvalCondition:
    def test_comparisons_and_logic(self):
        variables = {"db": "pg", "port": "5432"}
        assert eval_condition("db == 'pg' and port != ''", variables)
        assert not eval_condition("db in ['mysql', 'maria']", variables)
        assert eval_condition("not (db == 'mysql')", variables)

    def test_undefined_names_are_none(self):
        assert eval_condition("missing is None", {})
        assert not eval_condition("missing == 'x'", {})

    def test_helpers(self):
        assert eval_condition("lower(flag) == true or lower(flag) == 'true'", {"flag": "TRUE"})
        assert eval_condition("len(name) > 2", {"name": "abc"})

    def test_rejects_attribute_access(self):
        assert eval_condition("db.__class__", {"db": "x"}) is False
        with pytest.raises(ConditionError):
            eval_condition("db.upper()", {"db": "x"}, raise_on_error=True)

    def test_rejects_dunder_names(self):
        with pytest.raises(ConditionError):
            eval_condition("__import__('os')", {}, raise_on_error=True)


class TestRuleRegistry:
    def test_expression_and_callable_conditions(self):
        registry = RuleRegistry(
            {
                "isPg": "db == 'pg'",
                "hasPort": lambda variables: bool(variables.get("port")),
            }
        )
        assert registry.is_condition_true("isPg", {"db": "pg"})
        assert not registry.is_condition_true("hasPort", {})

    def test_unknown_id_is_false(self, caplog):
        with caplog.at_level("WARNING"):
            assert not RuleRegistry().is_condition_true("nope", {})
        assert "Unknown condition id" in caplog.text

    def test_failing_conditions_are_false(self):
        def boom(variables):
            raise RuntimeError("broken")

        registry = RuleRegistry({"bad_expr": "1 +", "boom": boom})
        assert not registry.is_condition_true("bad_expr", {})
        assert not registry.is_condition_true("boom", {})

    def test_from_node(self):
        node = node_from_data(
            "conditions",
            {
                "condition": [
                    {"id": "a", "expr": "x == '1'"},
                    {"id": "missing_expr"},
                ]
            },
        )
        registry = RuleRegistry.from_node(node)
        assert registry.ids() == ["a"]
        assert "a" in registry
        assert registry.is_condition_true("a", {"x": "1"})

    def test_merged_prefers_other(self):
        merged = RuleRegistry({"a": "false"}).merged(RuleRegistry({"a": "true"}))
        assert merged.is_condition_true("a", {})


class TestVarLookup:
    def test_reads_dotted_names(self):
        variables = {"db.host": "localhost", "db": "pg"}
        assert eval_condition("var('db.host') == 'localhost'", variables)
        assert eval_condition("var('db.host') != '' and db == 'pg'", variables)

    def test_missing_variable_is_none(self):
        assert eval_condition("var('db.port') is None", {})

    def test_name_may_come_from_a_variable(self):
        assert eval_condition("var(key) == 'yes'", {"key": "a.b", "a.b": "yes"})

    @pytest.mark.parametrize(
        "expression", ["var()", "var('a', 'b')", "var(name='a')"]
    )
    def test_requires_exactly_one_name(self, expression):
        with pytest.raises(ConditionError):
            eval_condition(expression, {}, raise_on_error=True)
        assert eval_condition(expression, {}) is False

    def test_registry_expression_with_dotted_name(self):
        registry = RuleRegistry({"localDb": "var('db.host') == 'localhost'"})
        assert registry.is_condition_true("localDb", {"db.host": "localhost"})
        assert not registry.is_condition_true("localDb", {"db.host": "remote"})
