"""
Tree evaluator for mathexpr.

An Evaluator is configured with a table of constants and a table of
functions keyed by operator text ('+', 'negate', 'sin', ...). Walking a
tree calls the function for every node with its evaluated children, so
the same tree can be turned into a float, a complex number, an exact
integer or a string just by swapping tables.
"""

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional

from ..lexer.tokens import Token
from ..parser.ast_nodes import AST, ASTVisitor, Node, accept
from .errors import (
    create_unknown_function_error, create_unknown_constant_error,
    create_division_by_zero_error, create_domain_error
)

logger = logging.getLogger(__name__)


class ArgumentList(list):
    """
    Operands collected from a comma chain.

    A node whose single child evaluates to an ArgumentList receives the
    list spread as separate arguments, so 'atan2(1, 2)' calls atan2(1, 2).
    """


def comma(left: Any, right: Any) -> ArgumentList:
    """Flatten left-nested comma chains: ((1,2),3) -> [1, 2, 3]."""
    if isinstance(left, ArgumentList):
        return ArgumentList(left + [right])
    return ArgumentList([left, right])


def _identity(value: Any) -> Any:
    return value


DefaultFunction = Callable[[str, List[Any]], Any]


class Evaluator(ASTVisitor):
    """
    Evaluate trees against a constants table and a functions table.

    Args:
        constants: Values for constant leaves, keyed by name
        functions: Callables keyed by operator text
        default: Called as default(name, args) for operators missing from
            ``functions``; without one, such operators are an error
        number_wrapper: Applied to every numeric literal
    """

    def __init__(
        self,
        constants: Optional[Mapping[str, Any]] = None,
        functions: Optional[Mapping[str, Callable[..., Any]]] = None,
        default: Optional[DefaultFunction] = None,
        number_wrapper: Optional[Callable[[Any], Any]] = None
    ):
        self.constants: Dict[str, Any] = dict(constants or {})
        self.functions: Dict[str, Callable[..., Any]] = dict(functions or {})
        self.default = default
        self.number_wrapper = number_wrapper or _identity

    def evaluate(self, ast: Any) -> Any:
        """
        Evaluate a tree, or each tree in a list of trees.

        Raises:
            EvaluationError: For unknown functions or constants, division
                by zero and math domain errors
        """
        if isinstance(ast, (list, tuple)):
            return [self.evaluate(item) for item in ast]
        return accept(ast, self)

    def make_evaluator(self) -> Callable[[Any], Any]:
        """Return a callable that evaluates its argument with this evaluator."""
        return self.evaluate

    def visit_node(self, node: Node) -> Any:
        args = [accept(child, self) for child in node.children]
        if len(args) == 1 and isinstance(args[0], ArgumentList):
            args = list(args[0])

        function = self.functions.get(node.operator)
        if function is None and self.default is None:
            raise create_unknown_function_error(node.token)

        try:
            if function is None:
                logger.debug("no function for %r, using default", node.operator)
                return self.default(node.operator, args)
            return function(*args)
        except ZeroDivisionError as e:
            raise create_division_by_zero_error(node.token) from e
        except (OverflowError, ValueError) as e:
            raise create_domain_error(node.token, str(e)) from e
        except TypeError as e:
            # Argument errors at the call only; raised inside the body it propagates
            if e.__traceback__.tb_next is not None:
                raise
            raise create_domain_error(node.token, str(e)) from e

    def visit_leaf(self, token: Token) -> Any:
        if token.is_constant:
            if token.lexeme not in self.constants:
                raise create_unknown_constant_error(token)
            return self.constants[token.lexeme]

        try:
            return self.number_wrapper(token.value)
        except (OverflowError, ValueError) as e:
            raise create_domain_error(token, str(e)) from e


def evaluate(ast: AST, evaluator: Evaluator) -> Any:
    """Convenience function to evaluate a tree with the given evaluator."""
    return evaluator.evaluate(ast)
