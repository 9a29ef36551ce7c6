"""
mathexpr Lexer Package

Tokenizer for mathematical expressions.

Key Features:
- Longest-match operator recognition (//, <=, deg, ...)
- Hexadecimal, octal and binary integer literals
- Scientific notation with a single exponent
- Explicit cursor threading, no hidden lexer state
- Positioned diagnostics for unrecognized characters
"""

from .tokens import Token, TokenType, Fixity
from .lexer import Lexer, next_token, tokenize_string
from .errors import ErrorKind, ExpressionError, LexerError, ERROR_CODES

__all__ = [
    "Lexer",
    "next_token",
    "tokenize_string",
    "Token",
    "TokenType",
    "Fixity",
    "ErrorKind",
    "ExpressionError",
    "LexerError",
    "ERROR_CODES",
]
