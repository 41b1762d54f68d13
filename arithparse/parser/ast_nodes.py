"""
Abstract Syntax Tree node definitions for arithparse.

The node set is closed: an expression is either a NumberLiteral or a BinaryOp
over two owned sub-expressions. Evaluation and rendering are visitors that
walk the tree in post-order without recursing, so long left-leaning chains
such as "1-1-1-...-1" never hit the interpreter's recursion limit.

Author: xwest
"""

import math
from abc import ABC, abstractmethod
from typing import List, Optional, Any, Iterator, Tuple
from dataclasses import dataclass
from enum import Enum

from ..config import ParserConfig, DEFAULT_CONFIG
from ..lexer.tokens import SourceLocation, TokenType


class ASTNodeType(Enum):
    """Enumeration of all AST node types."""

    NUMBER_LITERAL = "NumberLiteral"
    BINARY_OP = "BinaryOp"


class BinaryOperator(Enum):
    """Binary operators, valued by their rendered name."""

    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"
    DIVIDE = "divide"
    POWER = "power"

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]

    @classmethod
    def from_token_type(cls, token_type: TokenType) -> 'BinaryOperator':
        """Map an operator token type to its operator."""
        return _TOKEN_OPERATORS[token_type]

    def apply(self, left: int, right: int, exact_power: bool = False) -> int:
        """
        Combine two integers.

        Division truncates toward zero. Power goes through floating point and
        truncates unless exact_power is set. Division by zero and float
        overflow are not intercepted.
        """
        if self is BinaryOperator.ADD:
            return left + right
        if self is BinaryOperator.SUBTRACT:
            return left - right
        if self is BinaryOperator.MULTIPLY:
            return left * right
        if self is BinaryOperator.DIVIDE:
            return truncating_divide(left, right)
        if exact_power:
            return exact_power_of(left, right)
        return float_power(left, right)


_SYMBOLS = {
    BinaryOperator.ADD: "+",
    BinaryOperator.SUBTRACT: "-",
    BinaryOperator.MULTIPLY: "*",
    BinaryOperator.DIVIDE: "/",
    BinaryOperator.POWER: "^",
}

_TOKEN_OPERATORS = {
    TokenType.PLUS: BinaryOperator.ADD,
    TokenType.MINUS: BinaryOperator.SUBTRACT,
    TokenType.MULTIPLY: BinaryOperator.MULTIPLY,
    TokenType.DIVIDE: BinaryOperator.DIVIDE,
    TokenType.POWER: BinaryOperator.POWER,
}


def truncating_divide(left: int, right: int) -> int:
    """Integer division rounding toward zero, so -7 / 2 == -3."""
    quotient = abs(left) // abs(right)
    if (left < 0) != (right < 0):
        return -quotient
    return quotient


def float_power(base: int, exponent: int) -> int:
    """Raise in floating point, then truncate toward zero."""
    return int(math.pow(base, exponent))


def exact_power_of(base: int, exponent: int) -> int:
    """Exact integer power; negative exponents truncate toward zero."""
    if exponent >= 0:
        return base ** exponent
    if base == 0:
        raise ZeroDivisionError("0 cannot be raised to a negative power")
    if base == 1:
        return 1
    if base == -1:
        return 1 if exponent % 2 == 0 else -1
    return 0


@dataclass
class SourceSpan:
    """Represents a span of source text (start and end locations)."""
    start: SourceLocation
    end: SourceLocation

    def __str__(self) -> str:
        if self.start.filename == self.end.filename:
            return f"{self.start.filename}:{self.start.line}:{self.start.column}-{self.end.line}:{self.end.column}"
        return f"{self.start}-{self.end}"


def postorder(root: 'ASTNode') -> Iterator['ASTNode']:
    """Yield every node of a tree, children before parents, left to right."""
    stack: List[Tuple['ASTNode', bool]] = [(root, False)]
    while stack:
        node, expanded = stack.pop()
        children = node.children()
        if expanded or not children:
            yield node
        else:
            stack.append((node, True))
            for child in reversed(children):
                stack.append((child, False))


class ASTVisitor(ABC):
    """
    Folds a tree bottom-up.

    Subclasses receive each literal and each binary node together with the
    already-computed results for its operands.
    """

    def visit(self, node: 'ASTNode') -> Any:
        results: List[Any] = []
        for current in postorder(node):
            if isinstance(current, NumberLiteral):
                results.append(self.visit_number_literal(current))
            elif isinstance(current, BinaryOp):
                right = results.pop()
                left = results.pop()
                results.append(self.visit_binary_op(current, left, right))
            else:
                raise TypeError(f"Unknown AST node: {current!r}")
        return results.pop()

    @abstractmethod
    def visit_number_literal(self, node: 'NumberLiteral') -> Any:
        pass

    @abstractmethod
    def visit_binary_op(self, node: 'BinaryOp', left: Any, right: Any) -> Any:
        pass


class ASTNode(ABC):
    """Base class for all AST nodes."""

    def __init__(self, node_type: ASTNodeType, span: Optional[SourceSpan] = None):
        self.node_type = node_type
        self.span = span
        # Set on the root by the parser that built the tree
        self.config: Optional[ParserConfig] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        """Accept a visitor (visitor pattern)."""
        return visitor.visit(self)

    @abstractmethod
    def children(self) -> List['ASTNode']:
        """Get all child nodes."""
        pass

    def process(self, config: Optional[ParserConfig] = None) -> int:
        """
        Evaluate the tree rooted at this node to an integer.

        Without an explicit config, the config of the parser that built the
        tree applies.
        """
        return self.accept(Evaluator(config or self.config))

    evaluate = process

    def render(self) -> str:
        """Render as nested calls, e.g. "add(number(1), number(2))"."""
        return self.accept(Renderer())

    def __str__(self) -> str:
        return self.render()


class Expression(ASTNode):
    """Base class for expressions."""
    pass


class NumberLiteral(Expression):
    """Integer literal."""
    value: int

    def __init__(self, value: int, span: Optional[SourceSpan] = None):
        super().__init__(ASTNodeType.NUMBER_LITERAL, span)
        self.value = value

    def children(self) -> List[ASTNode]:
        return []

    def __repr__(self) -> str:
        return f"NumberLiteral({self.value})"


class BinaryOp(Expression):
    """Binary operation expression."""
    operator: BinaryOperator
    left: Expression
    right: Expression

    def __init__(self, operator: BinaryOperator, left: Expression, right: Expression,
                 span: Optional[SourceSpan] = None):
        super().__init__(ASTNodeType.BINARY_OP, span)
        self.operator = operator
        self.left = left
        self.right = right

    def children(self) -> List[ASTNode]:
        return [self.left, self.right]

    def __repr__(self) -> str:
        return f"BinaryOp({self.operator.name}, {self.left!r}, {self.right!r})"


class Evaluator(ASTVisitor):
    """Computes the integer value of a tree."""

    def __init__(self, config: Optional[ParserConfig] = None):
        self.config = config or DEFAULT_CONFIG

    def visit_number_literal(self, node: NumberLiteral) -> int:
        return node.value

    def visit_binary_op(self, node: BinaryOp, left: int, right: int) -> int:
        return node.operator.apply(left, right, self.config.exact_power)


class Renderer(ASTVisitor):
    """Produces the diagnostic string form of a tree."""

    def visit_number_literal(self, node: NumberLiteral) -> str:
        return f"number({node.value})"

    def visit_binary_op(self, node: BinaryOp, left: str, right: str) -> str:
        return f"{node.operator.value}({left}, {right})"
