"""Restricted expression evaluation for panel conditions.

Conditions are small boolean expressions over installer variables, e.g.
``db_type == 'postgres' and port != ''``. Only literals, names, boolean
logic, comparisons and a handful of string helpers are allowed.
Variables whose names are not identifiers are read with ``var('db.host')``.
"""

import ast
import operator
from typing import Any, Mapping

from ..core.errors import ConditionError

SAFE_BUILTINS = {
    "True": True,
    "False": False,
    "None": None,
    "true": True,
    "false": False,
    "int": int,
    "str": str,
    "len": len,
    "bool": bool,
    "lower": lambda s: str(s).lower(),
    "upper": lambda s: str(s).upper(),
}

_SAFE_UNARY_OPS: dict[type[ast.unaryop], Any] = {
    ast.Not: operator.not_,
    ast.USub: operator.neg,
}
_SAFE_CMP_OPS: dict[type[ast.cmpop], Any] = {
    ast.Eq: operator.eq,
    ast.NotEq: operator.ne,
    ast.Lt: operator.lt,
    ast.LtE: operator.le,
    ast.Gt: operator.gt,
    ast.GtE: operator.ge,
    ast.In: lambda a, b: a in b,
    ast.NotIn: lambda a, b: a not in b,
    ast.Is: operator.is_,
    ast.IsNot: operator.is_not,
}


def _eval_ast(node: ast.AST, variables: Mapping[str, Any]) -> Any:
    if isinstance(node, ast.Expression):
        return _eval_ast(node.body, variables)

    if isinstance(node, ast.Constant):
        return node.value

    if isinstance(node, ast.Name):
        if node.id.startswith("__"):
            raise ConditionError("dunder names are not allowed in conditions")
        if node.id in variables:
            return variables[node.id]
        if node.id in SAFE_BUILTINS:
            return SAFE_BUILTINS[node.id]
        # Undefined installer variables compare as None
        return None

    if isinstance(node, (ast.List, ast.Tuple, ast.Set)):
        return [_eval_ast(elt, variables) for elt in node.elts]

    if isinstance(node, ast.UnaryOp):
        op_type = type(node.op)
        if op_type not in _SAFE_UNARY_OPS:
            raise ConditionError(f"Unary operator not allowed: {op_type.__name__}")
        return _SAFE_UNARY_OPS[op_type](_eval_ast(node.operand, variables))

    if isinstance(node, ast.BoolOp):
        if isinstance(node.op, ast.And):
            return all(_eval_ast(value, variables) for value in node.values)
        return any(_eval_ast(value, variables) for value in node.values)

    if isinstance(node, ast.Compare):
        left = _eval_ast(node.left, variables)
        for op, comparator in zip(node.ops, node.comparators):
            op_type = type(op)
            if op_type not in _SAFE_CMP_OPS:
                raise ConditionError(
                    f"Comparison operator not allowed: {op_type.__name__}"
                )
            right = _eval_ast(comparator, variables)
            if not _SAFE_CMP_OPS[op_type](left, right):
                return False
            left = right
        return True

    if isinstance(node, ast.Call):
        if not isinstance(node.func, ast.Name):
            raise ConditionError("Only direct function calls are allowed")
        if node.func.id == "var":
            # Lookup for names that are not identifiers, e.g. var('db.host')
            if len(node.args) != 1 or node.keywords:
                raise ConditionError("var() takes exactly one variable name")
            return variables.get(str(_eval_ast(node.args[0], variables)))
        func = SAFE_BUILTINS.get(node.func.id)
        if not callable(func):
            raise ConditionError(f"Function '{node.func.id}' is not allowed")
        if node.keywords:
            raise ConditionError("Keyword arguments are not allowed")
        return func(*[_eval_ast(arg, variables) for arg in node.args])

    raise ConditionError(f"Unsupported expression element: {type(node).__name__}")


def eval_condition(
    expression: str,
    variables: Mapping[str, Any],
    *,
    raise_on_error: bool = False,
) -> bool:
    """
    Evaluate a condition expression against installer variables.

    Args:
        expression: Boolean expression (e.g., "install_type == 'full'")
        variables: Current variable values

    Returns:
        True if the condition holds, False otherwise

    Note:
        Evaluation errors return False unless raise_on_error is set, in
        which case ConditionError is raised.

    Example:
        >>> eval_condition("db == 'pg'", {"db": "pg"})
        True
    """
    try:
        tree = ast.parse(expression, mode="eval")
        return bool(_eval_ast(tree, variables))
    except Exception as e:
        if raise_on_error:
            raise ConditionError(f"Condition '{expression}' failed: {e}") from e
        return False
