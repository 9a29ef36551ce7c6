"""
mathexpr Lexer - turns expression text into tokens

The tokenizer never keeps a "current position" of its own: every call to
next_token() takes a cursor and hands back the cursor after the token, so
a Lexer can be iterated any number of times over the same source.
"""

import re
import logging
from typing import Iterator, List, Optional, Tuple

from .tokens import (
    Token, TokenType, Number, OPERATORS_BY_LENGTH, BRACKETS
)
from .errors import create_unrecognized_character_error

logger = logging.getLogger(__name__)


# Whitespace pattern
WHITESPACE_PATTERN = re.compile(r'\s+')

# Integer patterns with a base prefix, tried before plain decimals
HEX_PATTERN = re.compile(r'0[xX][0-9a-fA-F]+')
OCTAL_PATTERN = re.compile(r'0[oO][0-7]+')
BINARY_PATTERN = re.compile(r'0[bB][01]+')

BASE_PATTERNS = (
    (HEX_PATTERN, 16),
    (OCTAL_PATTERN, 8),
    (BINARY_PATTERN, 2),
)

# Decimal pattern; the exponent group matches at most once, so '4.4e3e3'
# stops after the first exponent
DECIMAL_PATTERN = re.compile(r'(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?', re.ASCII)

IDENTIFIER_PATTERN = re.compile(r'[A-Za-z]\w*', re.ASCII)


def _is_word_char(char: str) -> bool:
    return char.isascii() and (char.isalnum() or char == '_')


def _match_operator(source: str, pos: int) -> Optional[str]:
    """Return the longest operator starting at pos, if any."""
    for op in OPERATORS_BY_LENGTH:
        if source.startswith(op, pos):
            end = pos + len(op)
            # 'deg' must not swallow the start of 'degree'
            if op[-1].isalpha() and end < len(source) and _is_word_char(source[end]):
                continue
            return op
    return None


def _match_number(source: str, pos: int) -> Optional[Tuple[str, Number]]:
    """Return (lexeme, value) for a number literal starting at pos, if any."""
    for pattern, base in BASE_PATTERNS:
        match = pattern.match(source, pos)
        if match:
            lexeme = match.group(0)
            return lexeme, int(lexeme[2:], base)

    match = DECIMAL_PATTERN.match(source, pos)
    if match:
        lexeme = match.group(0)
        if lexeme.isdigit():
            return lexeme, int(lexeme)
        return lexeme, float(lexeme)

    return None


def next_token(source: str, cursor: int = 0) -> Optional[Tuple[Token, int]]:
    """
    Read one token from source at cursor.

    Args:
        source: Expression text
        cursor: Offset to start reading from

    Returns:
        (token, new_cursor), or None once only whitespace remains

    Raises:
        LexerError: If the text at the cursor starts no known token
    """
    match = WHITESPACE_PATTERN.match(source, cursor)
    if match:
        cursor = match.end()

    if cursor >= len(source):
        return None

    op = _match_operator(source, cursor)
    if op is not None:
        return Token(TokenType.OPERATOR, op, None, cursor), cursor + len(op)

    char = source[cursor]
    if char in BRACKETS:
        return Token(TokenType.BRACKET, char, None, cursor), cursor + 1

    number = _match_number(source, cursor)
    if number is not None:
        lexeme, value = number
        return Token(TokenType.NUMBER, lexeme, value, cursor), cursor + len(lexeme)

    match = IDENTIFIER_PATTERN.match(source, cursor)
    if match:
        lexeme = match.group(0)
        return Token(TokenType.IDENTIFIER, lexeme, None, cursor), match.end()

    raise create_unrecognized_character_error(char, cursor, source)


class Lexer:
    """
    Expression lexical analyzer.

    Wraps an immutable source string; tokenize() produces a fresh lazy
    token stream each time it is called.
    """

    def __init__(self, source: str):
        """
        Initialize the lexer with source text.

        Args:
            source: Expression text
        """
        self.source = source

    def tokenize(self) -> Iterator[Token]:
        """
        Lazily tokenize the whole source.

        Yields:
            Tokens in source order

        Raises:
            LexerError: On the first unrecognized character
        """
        cursor = 0
        while True:
            result = next_token(self.source, cursor)
            if result is None:
                return
            token, cursor = result
            yield token

    def __iter__(self) -> Iterator[Token]:
        return self.tokenize()


def tokenize_string(source: str) -> List[Token]:
    """
    Convenience function to tokenize a source string.

    Args:
        source: Expression text

    Returns:
        List of tokens

    Raises:
        LexerError: If lexing fails
    """
    tokens = list(Lexer(source).tokenize())
    logger.debug("tokens: %s", tokens)
    return tokens
