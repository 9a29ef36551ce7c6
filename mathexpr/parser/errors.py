"""
Error handling for the mathexpr parser.

Every structural problem found after tokenizing (brackets that do not
balance, operators missing an operand, leftover input, runaway nesting)
is raised as a ParseError carrying the offending position.
"""

from typing import Optional

from ..lexer.tokens import Token, OPENING_BRACKETS
from ..lexer.errors import ErrorKind, ExpressionError


class ParseError(ExpressionError):
    """
    Exception raised when the parser cannot build a complete tree.

    Contains the error kind, diagnostic information and, where there is
    one, the token at fault.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        token: Optional[Token] = None,
        position: Optional[int] = None,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[list] = None,
        source: Optional[str] = None
    ):
        if position is None:
            position = token.position if token is not None else -1
        super().__init__(
            kind,
            message,
            position=position,
            code=code,
            help_text=help_text,
            suggestions=suggestions,
            source=source
        )
        self.token = token


# Common parser error codes for categorization
PARSER_ERROR_CODES = {
    "P001": "Unbalanced brackets",
    "P002": "Mismatched brackets",
    "P003": "Trailing tokens",
    "P004": "Missing operand",
    "P005": "Expression nested too deeply",
}


# Helper functions for creating common parser errors

def create_unbalanced_brackets_error(token: Token) -> ParseError:
    """Create an error for an opener never closed, or a closer never opened."""
    if token.lexeme in OPENING_BRACKETS:
        closing = OPENING_BRACKETS[token.lexeme]
        return ParseError(
            ErrorKind.UNBALANCED_BRACKETS,
            message=f"Unclosed bracket '{token.lexeme}'",
            token=token,
            code="P001",
            help_text=f"The '{token.lexeme}' at position {token.position} was never closed.",
            suggestions=[f"Add a closing '{closing}'"]
        )

    return ParseError(
        ErrorKind.UNBALANCED_BRACKETS,
        message=f"Unexpected closing bracket '{token.lexeme}'",
        token=token,
        code="P001",
        help_text="There is no open bracket for this one to close.",
        suggestions=["Remove the bracket", "Add the matching opening bracket"]
    )


def create_mismatched_brackets_error(opener: Token, closer: Token) -> ParseError:
    """Create an error for a group closed by the wrong kind of bracket."""
    expected = OPENING_BRACKETS[opener.lexeme]
    return ParseError(
        ErrorKind.MISMATCHED_BRACKETS,
        message=f"Expected '{expected}' to close '{opener.lexeme}', found '{closer.lexeme}'",
        token=closer,
        code="P002",
        help_text=f"The '{opener.lexeme}' at position {opener.position} must be closed by '{expected}'.",
        suggestions=[f"Replace '{closer.lexeme}' with '{expected}'"]
    )


def create_trailing_tokens_error(token: Token, reason: str) -> ParseError:
    """Create an error for input that could not be attached to the tree."""
    return ParseError(
        ErrorKind.TRAILING_TOKENS,
        message=f"Unexpected '{token.lexeme}': {reason}",
        token=token,
        code="P003",
        help_text=reason,
        suggestions=["Check for a missing operator between terms"]
    )


def create_missing_operand_error(token: Token, side: str = "right") -> ParseError:
    """Create an error for an operator lacking an operand on one side."""
    return ParseError(
        ErrorKind.MISSING_OPERAND,
        message=f"Operator '{token.lexeme}' is missing its {side} operand",
        token=token,
        code="P004",
        help_text=f"'{token.lexeme}' needs an operand on its {side}.",
        suggestions=["Ensure all operators have operands"]
    )


def create_too_deeply_nested_error(token: Optional[Token], limit: int) -> ParseError:
    """Create an error for input nested beyond the configured limit."""
    return ParseError(
        ErrorKind.TOO_DEEPLY_NESTED,
        message=f"Expression nested more than {limit} levels deep",
        token=token,
        code="P005",
        help_text="Simplify the expression or raise ParserConfig.max_depth.",
    )


def create_empty_brackets_error(bracket: str, position: int) -> ParseError:
    """Create an error for a bracket pair with nothing inside."""
    closing = OPENING_BRACKETS.get(bracket, "")
    return ParseError(
        ErrorKind.MISSING_OPERAND,
        message=f"Empty brackets '{bracket}{closing}'",
        position=position,
        code="P004",
        help_text="Brackets must contain an expression.",
        suggestions=["Remove the brackets", "Put an expression between them"]
    )
