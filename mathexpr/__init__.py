"""
mathexpr Package

A parser and evaluator for mathematical expressions written the way
people type them into a calculator: '4pi/3', '2^3!', 'sin 30deg',
'atan2(1, 2)'.

Architecture:
    mathexpr/
    ├── lexer/           # Tokenization
    ├── parser/          # Bracket tree, rewrites and precedence climbing
    ├── evaluator/       # Numeric, integer, complex and string evaluators
    └── config.py        # ParserConfig

Example:
    >>> from mathexpr import parse, evaluate_numeric
    >>> evaluate_numeric(parse("3*3+4"))
    [13]
"""

import logging

from ._version import __version__
from .config import ParserConfig, DEFAULT_CONFIG
from .lexer import Lexer, Token, TokenType, Fixity, ErrorKind, ExpressionError, LexerError
from .parser import Parser, Node, Group, ASTVisitor, ParseError, parse, parse_rpn, to_list
from .evaluator import (
    Evaluator, EvaluationError, evaluate_numeric, evaluate_integer,
    evaluate_complex, evaluate_string, evaluate_rpn_string
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "__version__",

    # Parsing
    "parse", "parse_rpn", "Parser", "ParserConfig", "DEFAULT_CONFIG", "Lexer",

    # Trees
    "Token", "TokenType", "Fixity", "Node", "Group", "ASTVisitor", "to_list",

    # Evaluation
    "Evaluator", "evaluate_numeric", "evaluate_integer", "evaluate_complex",
    "evaluate_string", "evaluate_rpn_string",

    # Errors
    "ErrorKind", "ExpressionError", "LexerError", "ParseError", "EvaluationError",
]
