"""
Parser configuration.

A ParserConfig is an immutable value passed explicitly to every pipeline
stage; there is no module-level mutable setting.
"""

from dataclasses import dataclass, field
from typing import FrozenSet

from .lexer.tokens import DEFAULT_CONSTANTS


@dataclass(frozen=True)
class ParserConfig:
    """Settings shared by all parsing stages."""

    # Identifiers read as constant numbers instead of prefix functions
    constants: FrozenSet[str] = field(default=DEFAULT_CONSTANTS)

    # Maximum nesting of brackets, suffix groups and recursive descent
    max_depth: int = 200

    # Require ')' for '(', ']' for '[' and '}' for '{'
    strict_brackets: bool = True

    def __post_init__(self):
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be positive, got {self.max_depth}")
        # Accept any iterable of names
        object.__setattr__(self, "constants", frozenset(self.constants))

    def with_constants(self, *names: str) -> "ParserConfig":
        """Return a copy recognising additional constant names."""
        return ParserConfig(
            constants=self.constants | frozenset(names),
            max_depth=self.max_depth,
            strict_brackets=self.strict_brackets,
        )


DEFAULT_CONFIG = ParserConfig()
