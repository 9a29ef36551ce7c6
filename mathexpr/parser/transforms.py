"""
Token-stream transformations run between the lexer and the AST builder.

Each function takes the previous stage's output and returns a new
structure; nothing is modified in place:

    classify_identifiers            identifiers -> constants / prefix functions
    build_bracket_tree              ( ... ) spans -> nested Groups
    insert_implicit_multiplication  '4pi' -> '4 * pi'
    rewrite_suffixes                '3 * 4 !' -> '3 * [! 4]'
"""

import logging
from collections import deque
from dataclasses import dataclass, field, replace
from typing import Deque, Iterable, List, Optional, Tuple

from ..config import ParserConfig, DEFAULT_CONFIG
from ..lexer.tokens import Token, TokenType, Fixity, OPENING_BRACKETS
from .ast_nodes import Group, TreeItem
from .errors import (
    create_unbalanced_brackets_error, create_mismatched_brackets_error,
    create_too_deeply_nested_error
)
from .operators import greater_precedence, is_suffix_operator

logger = logging.getLogger(__name__)


# ============================================================================
# Identifier classification
# ============================================================================

def classify_identifiers(tokens: Iterable[Token], constants: Iterable[str]) -> List[Token]:
    """
    Turn every identifier into either a constant number or a prefix operator.

    Unknown names are not an error here: 'sin', 'atan2' or 'foo' all become
    prefix operators and it is up to the evaluator to know them.
    """
    constants = frozenset(constants)
    classified = []
    for token in tokens:
        if token.is_identifier:
            if token.lexeme in constants:
                token = replace(token, type=TokenType.NUMBER, is_constant=True)
            else:
                token = replace(token, type=TokenType.OPERATOR, fixity=Fixity.PREFIX)
        classified.append(token)
    return classified


# ============================================================================
# Bracket tree
# ============================================================================

def build_bracket_tree(tokens: Iterable[Token], config: ParserConfig = DEFAULT_CONFIG) -> Group:
    """
    Replace every bracketed span with a nested Group.

    The bracket tokens themselves are dropped. The returned top-level
    Group has no bracket.

    Raises:
        ParseError: UNBALANCED_BRACKETS for an unclosed opener or a stray
            closer, MISMATCHED_BRACKETS when strict matching is on and a
            group is closed by the wrong kind of bracket,
            TOO_DEEPLY_NESTED past config.max_depth
    """
    group, _ = _collect_group(list(tokens), 0, None, config, 0)
    return group


def _collect_group(tokens: List[Token], index: int, opener: Optional[Token],
                   config: ParserConfig, depth: int) -> Tuple[Group, int]:
    if depth > config.max_depth:
        raise create_too_deeply_nested_error(opener, config.max_depth)

    items: List[TreeItem] = []
    while index < len(tokens):
        token = tokens[index]
        index += 1

        if not token.is_bracket:
            items.append(token)
            continue

        if token.lexeme in OPENING_BRACKETS:
            group, index = _collect_group(tokens, index, token, config, depth + 1)
            items.append(group)
            continue

        # Closing bracket
        if opener is None:
            raise create_unbalanced_brackets_error(token)
        if config.strict_brackets and token.lexeme != OPENING_BRACKETS[opener.lexeme]:
            raise create_mismatched_brackets_error(opener, token)
        return Group(tuple(items), opener.lexeme, opener.position), index

    if opener is not None:
        raise create_unbalanced_brackets_error(opener)
    return Group(tuple(items)), index


# ============================================================================
# Implicit multiplication
# ============================================================================

def _synthetic_multiply() -> Token:
    return Token(TokenType.OPERATOR, "*", None, -1)


def _ends_value(item: TreeItem) -> bool:
    """Can item be the left factor of an implicit product?"""
    if isinstance(item, Group):
        return True
    if item.is_number:
        return True
    return item.is_operator and is_suffix_operator(item.lexeme)


def _starts_value(item: TreeItem) -> bool:
    """Can item be the right factor of an implicit product?"""
    if isinstance(item, Group):
        return True
    if item.is_number:
        return True
    return item.is_operator and item.fixity == Fixity.PREFIX


def insert_implicit_multiplication(group: Group) -> Group:
    """
    Insert '*' wherever two value-like terms touch.

    The rules are summarized as:
        '3 4'      -> '3 * 4'
        '3 (4)'    -> '3 * (4)'
        '3 sin(2)' -> '3 * sin(2)'
        '3! 2'     -> '3! * 2'
    """
    items: List[TreeItem] = []
    source = group.items
    for index, item in enumerate(source):
        if isinstance(item, Group):
            item = insert_implicit_multiplication(item)
        items.append(item)
        if index + 1 < len(source) and _ends_value(item) and _starts_value(source[index + 1]):
            items.append(_synthetic_multiply())
    return Group(tuple(items), group.bracket, group.position)


# ============================================================================
# Suffix operators
# ============================================================================

@dataclass
class _Frame:
    """One pending suffix operator and what has been gathered for it."""
    suffix: Optional[Token]
    items: Deque[TreeItem] = field(default_factory=deque)


def _is_operator(item: TreeItem) -> bool:
    return isinstance(item, Token) and item.is_operator


def rewrite_suffixes(group: Group, config: ParserConfig = DEFAULT_CONFIG, depth: int = 0) -> Group:
    """
    Move every suffix operator in front of the operand it applies to.

    The AST builder reads left to right and only knows prefix and infix
    operators, so '3*4!' is rewritten to '3*[! 4]' and '2^3!' to
    '[! 2^3]'. Each relocated operator and its operand are wrapped in a
    Group, which is what makes '3!^4' mean '(!3)^4' rather than '!(3^4)'.

    The scan runs right to left. Meeting a suffix opens a frame; the frame
    keeps gathering operands, plus any operator binding tighter than the
    suffix, and closes as soon as the operand is complete.
    """
    if depth > config.max_depth:
        raise create_too_deeply_nested_error(None, config.max_depth)

    remaining: List[TreeItem] = list(group.items)
    frames: List[_Frame] = [_Frame(None)]

    def close_frame():
        frame = frames.pop()
        frame.items.appendleft(frame.suffix)
        relocated = Group(tuple(frame.items), None, frame.suffix.position)
        logger.debug("relocated suffix %r: %s", frame.suffix.lexeme, relocated)
        frames[-1].items.appendleft(relocated)

    while remaining:
        item = remaining.pop()
        frame = frames[-1]

        if isinstance(item, Group):
            item = rewrite_suffixes(item, config, depth + 1)
        elif item.is_operator and item.fixity is None and is_suffix_operator(item.lexeme):
            if depth + len(frames) > config.max_depth:
                raise create_too_deeply_nested_error(item, config.max_depth)
            frames.append(_Frame(replace(item, fixity=Fixity.SUFFIX)))
            continue

        if frame.suffix is None:
            frame.items.appendleft(item)
            continue

        if _is_operator(item):
            if greater_precedence(item, frame.suffix):
                frame.items.appendleft(item)
            else:
                # Belongs to an enclosing frame
                remaining.append(item)
                close_frame()
            continue

        # An operand; a tighter operator to its left widens the operand
        frame.items.appendleft(item)
        if remaining and _is_operator(remaining[-1]) and greater_precedence(remaining[-1], frame.suffix):
            frame.items.appendleft(remaining.pop())
        else:
            close_frame()

    # Suffixes still pending apply to everything up to the start
    while len(frames) > 1:
        close_frame()

    return Group(tuple(frames[0].items), group.bracket, group.position)
