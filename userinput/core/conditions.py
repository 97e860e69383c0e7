"""Condition registry: maps condition ids to predicates over the store.

Fields reference conditions by id (``conditionid="..."``). A condition is
either a Python callable taking the variable mapping, or an expression
string evaluated with :func:`userinput.utils.eval_condition`.
"""

import logging
from typing import Any, Callable, Mapping, Protocol

from ..utils.eval_safe import eval_condition
from .errors import ConditionError
from .tree import SpecNode

logger = logging.getLogger(__name__)

Predicate = Callable[[Mapping[str, str]], bool]


class ConditionEvaluator(Protocol):
    def is_condition_true(self, condition_id: str, variables: Mapping[str, str]) -> bool: ...


class RuleRegistry:
    """Condition evaluator backed by a dict of id -> predicate/expression."""

    def __init__(self, conditions: Mapping[str, Predicate | str] | None = None):
        self._conditions: dict[str, Predicate | str] = dict(conditions or {})

    def register(self, condition_id: str, condition: Predicate | str) -> None:
        self._conditions[condition_id] = condition

    def __contains__(self, condition_id: str) -> bool:
        return condition_id in self._conditions

    def ids(self) -> list[str]:
        return list(self._conditions)

    def is_condition_true(self, condition_id: str, variables: Mapping[str, str]) -> bool:
        """Evaluate a condition by id.

        Unknown ids and failing predicates are logged and evaluate to False.
        """
        condition = self._conditions.get(condition_id)
        if condition is None:
            logger.warning("Unknown condition id %r", condition_id)
            return False
        if isinstance(condition, str):
            try:
                return eval_condition(condition, variables, raise_on_error=True)
            except ConditionError as e:
                logger.warning("%s", e)
                return False
        try:
            return bool(condition(variables))
        except Exception as e:
            logger.warning("Condition %r raised: %s", condition_id, e)
            return False

    @classmethod
    def from_node(cls, node: SpecNode | None) -> "RuleRegistry":
        """Build a registry from a ``conditions`` node.

        Each ``condition`` child needs an ``id`` and an ``expr`` attribute.
        """
        registry = cls()
        if node is None:
            return registry
        for child in node.children_named("condition"):
            condition_id = child.get("id")
            expression = child.get("expr")
            if not condition_id or not expression:
                logger.warning("Ignoring condition without id/expr: %s", child)
                continue
            registry.register(condition_id, expression)
        return registry

    def merged(self, other: "RuleRegistry") -> "RuleRegistry":
        combined: dict[str, Any] = dict(self._conditions)
        combined.update(other._conditions)
        return RuleRegistry(combined)
