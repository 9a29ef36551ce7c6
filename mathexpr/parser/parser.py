"""
mathexpr Parser Implementation

Runs the full text-to-tree pipeline:

    tokenize -> classify identifiers -> bracket tree
             -> implicit multiplication -> suffixes to prefixes -> AST

The last stage is a precedence-climbing builder: it reads the rewritten
stream left to right, carrying the operator whose right operand is being
built, and hands control back to the caller whenever it meets an operator
that does not bind tighter.
"""

import logging
from dataclasses import replace
from typing import List, Optional, Sequence

from ..config import ParserConfig, DEFAULT_CONFIG
from ..lexer.errors import ExpressionError
from ..lexer.lexer import tokenize_string
from ..lexer.tokens import Token, TokenType, Fixity
from .ast_nodes import AST, Group, Node, TreeItem
from .errors import (
    create_trailing_tokens_error, create_missing_operand_error,
    create_too_deeply_nested_error, create_empty_brackets_error
)
from .operators import (
    OperatorId, greater_precedence, is_infix_operator, is_suffix_operator,
    operator_id
)
from .transforms import (
    classify_identifiers, build_bracket_tree, insert_implicit_multiplication,
    rewrite_suffixes
)

logger = logging.getLogger(__name__)


class _TokenStream:
    """Read cursor over one level of the rewritten token tree."""

    def __init__(self, items: Sequence[TreeItem]):
        self.items = items
        self.current = 0

    def is_at_end(self) -> bool:
        return self.current >= len(self.items)

    def advance(self) -> TreeItem:
        item = self.items[self.current]
        self.current += 1
        return item

    def retreat(self):
        """Push the last item back for the caller."""
        self.current -= 1


def _anchor(item: TreeItem) -> Optional[Token]:
    """A token to blame in error messages for item."""
    if isinstance(item, Token):
        return item
    if item.bracket is not None:
        return Token(TokenType.BRACKET, item.bracket, None, item.position)
    for element in item.items:
        token = _anchor(element)
        if token is not None:
            return token
    return None


class ASTBuilder:
    """
    Precedence-climbing tree builder.

    Expects a Group that has been through implicit multiplication and
    suffix rewriting, so it only ever meets prefix and infix operators.
    """

    def __init__(self, config: ParserConfig = DEFAULT_CONFIG):
        self.config = config

    def build(self, group: Group) -> List[AST]:
        """
        Build the tree for a whole expression.

        With no active operator every operator binds, so the outermost
        call always consumes the whole stream.

        TRAILING_TOKENS only arises for input that skipped implicit
        multiplication; after Parser.parse() every pair of adjacent terms
        has a '*' between them.

        Returns:
            Top-level results: one tree, or nothing for empty input

        Raises:
            ParseError: MISSING_OPERAND, TRAILING_TOKENS or TOO_DEEPLY_NESTED
        """
        return self._treeize(_TokenStream(group.items), None, 0)

    def _treeize(self, stream: _TokenStream, active: Optional[Token], depth: int) -> List[AST]:
        """Build one operand, stopping before an operator weaker than active."""
        if depth > self.config.max_depth:
            raise create_too_deeply_nested_error(active, self.config.max_depth)

        result: List[AST] = []
        while not stream.is_at_end():
            item = stream.advance()

            if isinstance(item, Group):
                self._append_operand(result, self._build_group(item, depth + 1), item)
            elif item.is_number:
                self._append_operand(result, item, item)
            elif not result:
                # Nothing on the left, so this must be a prefix application
                result.append(self._build_prefix(item, stream, depth))
            elif item.fixity is not None:
                raise create_trailing_tokens_error(
                    item, "a function cannot directly follow a complete operand"
                )
            elif greater_precedence(item, active):
                operator = replace(item, fixity=Fixity.INFIX)
                right = self._treeize(stream, operator, depth + 1)
                if not right:
                    raise create_missing_operand_error(operator, "right")
                result = [Node(operator, (result[0], right[0]))]
            else:
                # Lower precedence: give control back to the caller
                stream.retreat()
                return result

        return result

    def _build_group(self, group: Group, depth: int) -> AST:
        stream = _TokenStream(group.items)
        result = self._treeize(stream, None, depth)
        if not result:
            raise create_empty_brackets_error(group.bracket or "(", group.position)
        return result[0]

    def _build_prefix(self, token: Token, stream: _TokenStream, depth: int) -> Node:
        if token.fixity is None:
            # The '-' sign is overloaded; as a prefix it becomes 'negate'
            if operator_id(token.lexeme) is OperatorId.MINUS:
                token = replace(token, lexeme=OperatorId.NEGATE.value, fixity=Fixity.PREFIX)
            else:
                raise create_missing_operand_error(token, "left")

        operand = self._treeize(stream, token, depth + 1)
        if not operand:
            raise create_missing_operand_error(token, "right")
        return Node(token, (operand[0],))

    def _append_operand(self, result: List[AST], operand: AST, item: TreeItem):
        if result:
            raise create_trailing_tokens_error(
                _anchor(item), "expected an operator between two terms"
            )
        result.append(operand)


class Parser:
    """
    Expression parser.

    Stateless apart from its configuration; one Parser can be shared and
    reused for any number of parse() calls.
    """

    def __init__(self, config: Optional[ParserConfig] = None):
        """
        Initialize parser.

        Args:
            config: Parser settings, DEFAULT_CONFIG when omitted
        """
        self.config = config or DEFAULT_CONFIG

    def tokenize(self, source: str) -> List[Token]:
        """Tokenize source and classify its identifiers."""
        return classify_identifiers(tokenize_string(source), self.config.constants)

    def parse(self, source: str) -> List[AST]:
        """
        Parse an infix expression.

        Args:
            source: Expression text, e.g. '4pi/3 + 2^3!'

        Returns:
            List of top-level trees (a single Node or number Token for any
            non-empty expression)

        Raises:
            LexerError: If the text contains an unrecognized character
            ParseError: If the expression is structurally invalid
        """
        try:
            tokens = self.tokenize(source)
            tree = build_bracket_tree(tokens, self.config)
            logger.debug("bracket tree: %s", tree)
            tree = insert_implicit_multiplication(tree)
            logger.debug("with implicit multiplication: %s", tree)
            tree = rewrite_suffixes(tree, self.config)
            logger.debug("suffixes moved to prefix: %s", tree)
            result = ASTBuilder(self.config).build(tree)
        except ExpressionError as e:
            if e.diagnostic.source is None:
                e.diagnostic.source = source
            raise

        logger.debug("ast: %s", [str(item) for item in result])
        return result

    def parse_rpn(self, source: str) -> List[AST]:
        """
        Parse a postfix (RPN) expression such as '3 4 + 2 *'.

        Operators in the infix table take two operands, all others one.

        Raises:
            LexerError: If the text contains an unrecognized character
            ParseError: TRAILING_TOKENS for brackets, MISSING_OPERAND when
                an operator runs out of operands
        """
        try:
            stack: List[AST] = []
            for token in self.tokenize(source):
                if token.is_bracket:
                    raise create_trailing_tokens_error(token, "brackets are not used in RPN input")
                if token.is_number:
                    stack.append(token)
                    continue

                if is_infix_operator(token.lexeme):
                    arity, fixity = 2, Fixity.INFIX
                elif is_suffix_operator(token.lexeme):
                    arity, fixity = 1, Fixity.SUFFIX
                else:
                    arity, fixity = 1, Fixity.PREFIX

                if len(stack) < arity:
                    raise create_missing_operand_error(token, "left")
                children = tuple(stack[-arity:])
                del stack[-arity:]
                stack.append(Node(replace(token, fixity=fixity), children))
        except ExpressionError as e:
            if e.diagnostic.source is None:
                e.diagnostic.source = source
            raise

        return stack


def parse(source: str, config: Optional[ParserConfig] = None) -> List[AST]:
    """
    Convenience function to parse an infix expression.

    Args:
        source: Expression text
        config: Parser settings

    Returns:
        List of top-level trees

    Raises:
        ExpressionError: If parsing fails
    """
    return Parser(config).parse(source)


def parse_rpn(source: str, config: Optional[ParserConfig] = None) -> List[AST]:
    """Convenience function to parse a postfix expression."""
    return Parser(config).parse_rpn(source)
