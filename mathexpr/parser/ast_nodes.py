"""
Abstract Syntax Tree node definitions for mathexpr.

Defines the bracket-tree Group used between parsing stages and the final
Node type. Both are frozen: a tree, once built, can be walked by several
evaluators (even concurrently) without copying.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple, Union

from ..lexer.tokens import Token, Fixity


@dataclass(frozen=True)
class Group:
    """
    A bracketed span of tokens.

    ``bracket`` is the opening bracket text, or None for groups the suffix
    rewriter creates to keep a relocated operator's operand together.
    """
    items: Tuple[Union[Token, "Group"], ...]
    bracket: Optional[str] = None
    position: int = -1

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    def __str__(self) -> str:
        return "[" + " ".join(str(item) for item in self.items) + "]"


TreeItem = Union[Token, Group]


class ASTVisitor(ABC):
    """Abstract visitor interface for walking expression trees."""

    @abstractmethod
    def visit_node(self, node: "Node") -> Any:
        """Visit an operator node."""
        pass

    @abstractmethod
    def visit_leaf(self, token: Token) -> Any:
        """Visit a number or constant leaf."""
        pass


@dataclass(frozen=True)
class Node:
    """
    An operator applied to its operands.

    ``children`` holds one operand for prefix and suffix operators and two
    for infix operators; each child is another Node or a number Token.
    """
    token: Token
    children: Tuple[Union["Node", Token], ...]

    @property
    def operator(self) -> str:
        return self.token.lexeme

    @property
    def fixity(self) -> Optional[Fixity]:
        return self.token.fixity

    @property
    def arity(self) -> int:
        return len(self.children)

    def accept(self, visitor: ASTVisitor) -> Any:
        """Accept a visitor (visitor pattern)."""
        return visitor.visit_node(self)

    def to_list(self) -> List[Any]:
        """Nested-list form, e.g. ['+', ['*', 3, 3], 4]."""
        return [self.operator] + [to_list(child) for child in self.children]

    def __str__(self) -> str:
        return f"{self.operator}[ {','.join(str(child) for child in self.children)} ]"


AST = Union[Node, Token]


def accept(item: AST, visitor: ASTVisitor) -> Any:
    """Dispatch a visitor on either a Node or a leaf token."""
    if isinstance(item, Node):
        return item.accept(visitor)
    return visitor.visit_leaf(item)


def to_list(item: Any) -> Any:
    """
    Convert a tree (or list of trees) to plain nested lists.

    Number leaves become their numeric value and constants their name.
    """
    if isinstance(item, Node):
        return item.to_list()
    if isinstance(item, (list, tuple)):
        return [to_list(element) for element in item]
    if isinstance(item, Token):
        if item.value is not None:
            return item.value
        return item.lexeme
    raise TypeError(f"Cannot convert {item!r} to a list")
