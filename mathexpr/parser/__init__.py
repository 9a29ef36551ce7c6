"""
mathexpr Parser Package

Turns expression text into operator trees.

Key Features:
- Precedence climbing with right-associative '^' and '='
- Implicit multiplication ('4pi', '2(3+4)', '3 sin 2')
- Suffix operators ('!', 'deg') rewritten ahead of tree building
- Strict or lenient bracket matching
- Postfix (RPN) input
"""

from .ast_nodes import AST, ASTVisitor, Group, Node, accept, to_list
from .errors import ParseError, PARSER_ERROR_CODES
from .operators import OperatorId, greater_precedence, precedence
from .parser import ASTBuilder, Parser, parse, parse_rpn

__all__ = [
    # Core parser
    "Parser",
    "ASTBuilder",
    "parse",
    "parse_rpn",

    # Trees
    "AST", "ASTVisitor", "Group", "Node", "accept", "to_list",

    # Operators
    "OperatorId", "greater_precedence", "precedence",

    # Error handling
    "ParseError", "PARSER_ERROR_CODES",
]
