"""
Parser configuration.

Author: xwest
"""

from dataclasses import dataclass


DEFAULT_MAX_DEPTH = 100


@dataclass(frozen=True)
class ParserConfig:
    """
    Options shared by ASTParser, EvalParser and AST evaluation.

    Attributes:
        strict: Reject input left over after a complete expression. Off by
            default, so "1 + 2)" evaluates to 3.
        exact_power: Use exact integer exponentiation for '^'. Off by
            default, where the power is computed in floating point and
            truncated toward zero.
        max_depth: Deepest allowed nesting of parentheses and '^' chains.
    """
    strict: bool = False
    exact_power: bool = False
    max_depth: int = DEFAULT_MAX_DEPTH

    def __post_init__(self):
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be positive, got {self.max_depth}")


DEFAULT_CONFIG = ParserConfig()
