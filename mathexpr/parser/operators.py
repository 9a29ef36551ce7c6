"""
Operator metadata for the mathexpr parser.

Precedence, associativity and fixity lookups are total: any operator text,
including function names the parser has never heard of, gets an answer
from the documented defaults.
"""

from enum import Enum
from typing import Dict, FrozenSet, Optional

from ..lexer.tokens import Token, Fixity


class OperatorId(Enum):
    """Known operator spellings; anything else is OTHER (e.g. 'sin')."""
    PLUS = "+"
    MINUS = "-"
    MULTIPLY = "*"
    DIVIDE = "/"
    FLOOR_DIVIDE = "//"
    POWER = "^"
    MODULO = "%"
    ASSIGN = "="
    EQUAL = "=="
    NOT_EQUAL = "!="
    LESS_THAN = "<"
    LESS_EQUAL = "<="
    GREATER_THAN = ">"
    GREATER_EQUAL = ">="
    COMMA = ","
    FACTORIAL = "!"
    DEGREES = "deg"
    NEGATE = "negate"
    OTHER = None


_BY_TEXT: Dict[str, OperatorId] = {
    op.value: op for op in OperatorId if op is not OperatorId.OTHER
}


INFIX_PRECEDENCE: Dict[OperatorId, int] = {
    OperatorId.ASSIGN: 0,
    OperatorId.EQUAL: 0,
    OperatorId.NOT_EQUAL: 0,
    OperatorId.LESS_THAN: 0,
    OperatorId.LESS_EQUAL: 0,
    OperatorId.GREATER_THAN: 0,
    OperatorId.GREATER_EQUAL: 0,

    OperatorId.PLUS: 1,
    OperatorId.MINUS: 1,
    OperatorId.MODULO: 1,

    OperatorId.MULTIPLY: 2,
    OperatorId.DIVIDE: 2,
    OperatorId.FLOOR_DIVIDE: 2,

    OperatorId.POWER: 4,

    # Comma lists always sit inside brackets, so lowest is safe
    OperatorId.COMMA: -1,
}

PREFIX_PRECEDENCE: Dict[OperatorId, int] = {
    OperatorId.MINUS: 2,
    OperatorId.NEGATE: 2,
}

SUFFIX_PRECEDENCE: Dict[OperatorId, int] = {
    OperatorId.FACTORIAL: 3,
    OperatorId.DEGREES: 3,
}

DEFAULT_PRECEDENCE: Dict[Fixity, int] = {
    Fixity.INFIX: 1,
    Fixity.PREFIX: 2,
    Fixity.SUFFIX: 2,
}

_TABLES = {
    Fixity.INFIX: INFIX_PRECEDENCE,
    Fixity.PREFIX: PREFIX_PRECEDENCE,
    Fixity.SUFFIX: SUFFIX_PRECEDENCE,
}

RIGHT_ASSOCIATIVE: FrozenSet[OperatorId] = frozenset({
    OperatorId.POWER,
    OperatorId.ASSIGN,
})


def operator_id(text: str) -> OperatorId:
    """Map operator text to its identity."""
    return _BY_TEXT.get(text, OperatorId.OTHER)


def precedence(text: str, fixity: Optional[Fixity] = None) -> int:
    """Precedence of text used with the given fixity (infix when None)."""
    fixity = fixity or Fixity.INFIX
    return _TABLES[fixity].get(operator_id(text), DEFAULT_PRECEDENCE[fixity])


def token_precedence(token: Token) -> int:
    return precedence(token.lexeme, token.fixity)


def is_right_associative(text: str) -> bool:
    return operator_id(text) in RIGHT_ASSOCIATIVE


def is_suffix_operator(text: str) -> bool:
    return operator_id(text) in SUFFIX_PRECEDENCE


def is_infix_operator(text: str) -> bool:
    """True if text is listed in the infix table."""
    return operator_id(text) in INFIX_PRECEDENCE


def greater_precedence(op: Optional[Token], active: Optional[Token]) -> bool:
    """
    Decide whether op binds tighter than the currently active operator.

    Nothing beats a missing op and everything beats a missing active
    operator. Two right-associative operators compare with >=, so equal
    precedence chains nest to the right.
    """
    if op is None:
        return False
    if active is None:
        return True
    if is_right_associative(op.lexeme) and is_right_associative(active.lexeme):
        return token_precedence(op) >= token_precedence(active)
    return token_precedence(op) > token_precedence(active)
