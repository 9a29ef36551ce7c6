"""
Error handling for mathexpr evaluators.
"""

from typing import Optional

from ..lexer.tokens import Token
from ..lexer.errors import ErrorKind, ExpressionError


class EvaluationError(ExpressionError):
    """
    Exception raised while evaluating a tree.

    Position information comes from the token being evaluated; synthetic
    tokens (such as an implicit '*') report -1.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        token: Optional[Token] = None,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[list] = None
    ):
        position = token.position if token is not None else -1
        super().__init__(
            kind,
            message,
            position=position,
            code=code,
            help_text=help_text,
            suggestions=suggestions
        )
        self.token = token


EVALUATOR_ERROR_CODES = {
    "E001": "Unknown function",
    "E002": "Unknown constant",
    "E003": "Division by zero",
    "E004": "Math domain error",
}


def create_unknown_function_error(token: Token) -> EvaluationError:
    """Create an error for an operator the evaluator has no function for."""
    return EvaluationError(
        ErrorKind.UNKNOWN_FUNCTION,
        message=f'Unknown function "{token.lexeme}"',
        token=token,
        code="E001",
        help_text="Register the function with the evaluator or supply a default handler."
    )


def create_unknown_constant_error(token: Token) -> EvaluationError:
    """Create an error for a constant with no value in this evaluator."""
    return EvaluationError(
        ErrorKind.UNKNOWN_CONSTANT,
        message=f'Unknown constant "{token.lexeme}"',
        token=token,
        code="E002"
    )


def create_division_by_zero_error(token: Token) -> EvaluationError:
    return EvaluationError(
        ErrorKind.DIVISION_BY_ZERO,
        message=f"Division by zero in '{token.lexeme}'",
        token=token,
        code="E003"
    )


def create_domain_error(token: Token, detail: str) -> EvaluationError:
    """Create an error for a math function called outside its domain."""
    return EvaluationError(
        ErrorKind.DOMAIN_ERROR,
        message=f"Math domain error in '{token.lexeme}': {detail}",
        token=token,
        code="E004"
    )
