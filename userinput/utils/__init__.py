"""Pure utility functions for userinput.

Modules:
- eval_safe: Restricted condition evaluation
"""

from .eval_safe import eval_condition, SAFE_BUILTINS

__all__ = [
    "eval_condition",
    "SAFE_BUILTINS",
]
