"""
Error handling for the mathexpr lexer.

Provides the diagnostic record and the exception base shared by every
stage of the package (lexer, parser and evaluators), so callers can catch
a single ``ExpressionError`` and still tell failures apart by ``kind``.
"""

from enum import Enum
from typing import Optional, List
from dataclasses import dataclass


class ErrorKind(Enum):
    """Tag identifying what went wrong."""
    UNRECOGNIZED_CHARACTER = "UnrecognizedCharacter"
    UNBALANCED_BRACKETS = "UnbalancedBrackets"
    MISMATCHED_BRACKETS = "MismatchedBrackets"
    TRAILING_TOKENS = "TrailingTokens"
    MISSING_OPERAND = "MissingOperand"
    TOO_DEEPLY_NESTED = "TooDeeplyNested"
    UNKNOWN_FUNCTION = "UnknownFunction"
    UNKNOWN_CONSTANT = "UnknownConstant"
    DIVISION_BY_ZERO = "DivisionByZero"
    DOMAIN_ERROR = "DomainError"


@dataclass
class Diagnostic:
    """Base class for diagnostics (errors, warnings, info)."""
    message: str
    position: int
    severity: str  # "error", "warning", "info", "hint"
    code: Optional[str] = None
    help_text: Optional[str] = None
    suggestions: Optional[List[str]] = None
    source: Optional[str] = None

    def __str__(self) -> str:
        severity_prefix = self.severity.upper()
        result = f"{severity_prefix}: {self.message}\n"
        if self.position >= 0:
            result += f"  --> position {self.position}\n"
            if self.source is not None:
                result += f"  | {self.source}\n"
                result += f"  | {' ' * self.position}^\n"

        if self.help_text:
            result += f"  help: {self.help_text}\n"

        if self.suggestions:
            result += "  suggestions:\n"
            for suggestion in self.suggestions:
                result += f"    - {suggestion}\n"

        return result


class ExpressionError(Exception):
    """
    Base exception for every failure raised by mathexpr.

    Carries the error kind, the offending position in the source text
    (``-1`` when it cannot be determined) and a full diagnostic.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        position: int = -1,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None,
        source: Optional[str] = None
    ):
        super().__init__(message)
        self.kind = kind
        self.position = position
        self.diagnostic = Diagnostic(
            message=message,
            position=position,
            severity="error",
            code=code,
            help_text=help_text,
            suggestions=suggestions,
            source=source
        )

    def __str__(self) -> str:
        return str(self.diagnostic)


class LexerError(ExpressionError):
    """
    Exception raised when the lexer meets text it cannot tokenize.
    """


# Common error codes for categorization
ERROR_CODES = {
    "L001": "Unrecognized character",
}


def create_unrecognized_character_error(char: str, position: int, source: Optional[str] = None) -> LexerError:
    """Create an error for a character that starts no known token."""
    if char.isprintable():
        help_text = f"The character '{char}' is not valid in an expression."
    else:
        help_text = f"Non-printable character (Unicode: U+{ord(char):04X}) is not allowed."

    suggestions = []
    if char == '|':
        suggestions.append("Use abs(x) instead of |x|")
    elif char == '×':
        suggestions.append("Use '*' for multiplication")
    elif char == '÷':
        suggestions.append("Use '/' for division")

    return LexerError(
        ErrorKind.UNRECOGNIZED_CHARACTER,
        message=f"Unrecognized character: '{char}'",
        position=position,
        code="L001",
        help_text=help_text,
        suggestions=suggestions or None,
        source=source
    )
