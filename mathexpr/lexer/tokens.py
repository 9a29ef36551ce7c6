"""
Token definitions for the mathexpr lexer.

This module defines the four token categories produced by the tokenizer,
operator fixities, and the lookup tables used for recognition:
- Operators (longest match wins)
- Brackets
- Number literals (decimal, scientific, hex/octal/binary)
- Identifiers (later reclassified into constants or prefix functions)
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Optional, Union


class TokenType(Enum):
    """Enumeration of all token types in an expression."""

    OPERATOR = auto()               # +, -, *, //, !, deg, ...
    BRACKET = auto()                # ( ) [ ] { }
    NUMBER = auto()                 # 42, 4.4e-3, 0x1F, and constants after classification
    IDENTIFIER = auto()             # sin, pi, x1


class Fixity(Enum):
    """Where an operator sits relative to its operand(s)."""

    PREFIX = "prefix"               # sin 2, -3
    INFIX = "infix"                 # 3 + 4
    SUFFIX = "suffix"               # 5!, 30deg


Number = Union[int, float]


@dataclass(frozen=True)
class Token:
    """
    Represents a lexical token of an expression.

    Contains the token type, lexeme (raw text), the numeric value for
    number literals, and the character offset where the token starts.
    Tokens are immutable; later stages derive new tokens with
    ``dataclasses.replace``.
    """
    type: TokenType
    lexeme: str                     # Raw text from source
    value: Optional[Number] = None  # Parsed value for number literals
    position: int = -1              # Offset in source, -1 for synthetic tokens
    fixity: Optional[Fixity] = None
    is_constant: bool = False

    def __str__(self) -> str:
        if self.type == TokenType.NUMBER and self.value is not None:
            return repr(self.value)
        return self.lexeme

    def __repr__(self) -> str:
        parts = [self.type.name, repr(self.lexeme)]
        if self.value is not None:
            parts.append(f"value={self.value!r}")
        if self.fixity is not None:
            parts.append(f"fixity={self.fixity.name}")
        if self.is_constant:
            parts.append("constant")
        parts.append(f"at {self.position}")
        return f"Token({', '.join(parts)})"

    @property
    def is_operator(self) -> bool:
        return self.type == TokenType.OPERATOR

    @property
    def is_number(self) -> bool:
        return self.type == TokenType.NUMBER

    @property
    def is_bracket(self) -> bool:
        return self.type == TokenType.BRACKET

    @property
    def is_identifier(self) -> bool:
        return self.type == TokenType.IDENTIFIER

    @property
    def is_synthetic(self) -> bool:
        """True for tokens inserted by the parser rather than read from source."""
        return self.position < 0


# Lookup tables for token recognition

OPERATORS = frozenset({
    # Arithmetic
    "+", "-", "*", "/", "//", "^", "%",

    # Comparison and assignment
    "=", "==", "!=", "<", "<=", ">", ">=",

    # Suffix operators
    "!", "deg",

    # Argument separator
    ",",
})

# Longest spelling first so that '//' beats '/' and '<=' beats '<'
OPERATORS_BY_LENGTH = tuple(sorted(OPERATORS, key=len, reverse=True))

OPENING_BRACKETS = {
    "(": ")",
    "[": "]",
    "{": "}",
}

CLOSING_BRACKETS = frozenset(OPENING_BRACKETS.values())

BRACKETS = frozenset(OPENING_BRACKETS) | CLOSING_BRACKETS

# Identifiers that name constants rather than functions
DEFAULT_CONSTANTS = frozenset({"pi", "e", "phi", "i", "I"})
