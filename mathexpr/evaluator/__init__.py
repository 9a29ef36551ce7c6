"""
mathexpr Evaluator Package

Walks parsed trees with pluggable constant and function tables.
"""

from .evaluator import ArgumentList, Evaluator, comma, evaluate
from .builtins import (
    evaluate_numeric, evaluate_integer, evaluate_complex,
    evaluate_string, evaluate_rpn_string, EPSILON
)
from .errors import EvaluationError, EVALUATOR_ERROR_CODES

__all__ = [
    "Evaluator",
    "ArgumentList",
    "comma",
    "evaluate",
    "evaluate_numeric",
    "evaluate_integer",
    "evaluate_complex",
    "evaluate_string",
    "evaluate_rpn_string",
    "EPSILON",
    "EvaluationError",
    "EVALUATOR_ERROR_CODES",
]
