"""
arithparse Recursive Descent Parser

One grammar, two products. GrammarParser walks the rules below and hands
every literal and every operator application to a pair of hooks:
ASTParser turns them into tree nodes, EvalParser folds them into integers
on the spot.

    expr   := term   ( ('+' | '-') term )*
    term   := power  ( ('*' | '/') power )*
    power  := factor ( '^' power )?
    factor := NUMBER | '(' expr ')'

expr and term loop, which makes them left-associative. power recurses for
its right operand, which makes '^' right-associative: 2^2^3 == 2^(2^3).

Author: xwest
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Generic, List, Optional, TypeVar

from ..config import ParserConfig, DEFAULT_CONFIG
from ..lexer.lexer import Lexer
from ..lexer.errors import create_invalid_character_error
from ..lexer.tokens import Token, TokenType, SourceLocation
from .ast_nodes import BinaryOperator, BinaryOp, Expression, NumberLiteral, SourceSpan
from .errors import (
    ParseError, create_unexpected_token_error, create_missing_right_paren_error,
    create_nesting_depth_error, create_trailing_input_error
)


T = TypeVar("T")

ADDITIVE = (TokenType.PLUS, TokenType.MINUS)
MULTIPLICATIVE = (TokenType.MULTIPLY, TokenType.DIVIDE)


class _ParseContext:
    """State for a single parse call."""
    __slots__ = ("lexer", "depth", "open_parens")

    def __init__(self, lexer: Lexer):
        self.lexer = lexer
        self.depth = 0
        self.open_parens: List[Token] = []


class GrammarParser(ABC, Generic[T]):
    """
    Shared recursive descent over the expression grammar.

    Instances keep only their config, so one parser can serve any number of
    parse calls.
    """

    def __init__(self, config: Optional[ParserConfig] = None):
        self.config = config or DEFAULT_CONFIG

    def parse(self, statement: str, filename: str = "<string>") -> T:
        """
        Parse one expression.

        Input after the expression is ignored unless the config is strict.
        A max_depth beyond what the interpreter stack can hold still fails
        with the nesting error.

        Raises:
            ParseError: If the input is not a valid expression
        """
        ctx = _ParseContext(Lexer(statement, filename))
        try:
            result = self._expr(ctx)
        except RecursionError:
            raise create_nesting_depth_error(self.config.max_depth, ctx.lexer.peek()) from None

        if self.config.strict:
            self._expect_end(ctx)

        return result

    @abstractmethod
    def _number(self, token: Token) -> T:
        """Build the result for a NUMBER token."""
        pass

    @abstractmethod
    def _combine(self, operator: BinaryOperator, left: T, right: T) -> T:
        """Build the result of applying operator to two sub-results."""
        pass

    # Grammar rules

    def _expr(self, ctx: _ParseContext) -> T:
        left = self._term(ctx)
        token = ctx.lexer.peek()
        while token.type in ADDITIVE:
            ctx.lexer.advance(token)
            right = self._term(ctx)
            left = self._combine(BinaryOperator.from_token_type(token.type), left, right)
            token = ctx.lexer.peek()
        return left

    def _term(self, ctx: _ParseContext) -> T:
        left = self._power(ctx)
        token = ctx.lexer.peek()
        while token.type in MULTIPLICATIVE:
            ctx.lexer.advance(token)
            right = self._power(ctx)
            left = self._combine(BinaryOperator.from_token_type(token.type), left, right)
            token = ctx.lexer.peek()
        return left

    def _power(self, ctx: _ParseContext) -> T:
        left = self._factor(ctx)
        token = ctx.lexer.peek()
        if token.type == TokenType.POWER:
            ctx.lexer.advance(token)
            self._descend(ctx, token)
            right = self._power(ctx)
            ctx.depth -= 1
            left = self._combine(BinaryOperator.POWER, left, right)
        return left

    def _factor(self, ctx: _ParseContext) -> T:
        token = ctx.lexer.peek()

        if token.type == TokenType.NUMBER:
            ctx.lexer.advance(token)
            return self._number(token)

        if token.type == TokenType.LEFT_PAREN:
            ctx.lexer.advance(token)
            self._descend(ctx, token)
            ctx.open_parens.append(token)
            inner = self._expr(ctx)

            closing = ctx.lexer.peek()
            if closing.type != TokenType.RIGHT_PAREN:
                raise create_missing_right_paren_error(token.location, closing)
            ctx.lexer.advance(closing)

            ctx.open_parens.pop()
            ctx.depth -= 1
            return inner

        if token.type == TokenType.INVALID:
            raise create_unexpected_token_error(token) from create_invalid_character_error(
                token.lexeme, token.location
            )

        # Input ran out inside a group: report the group, not the operand
        if token.type == TokenType.EOF and ctx.open_parens:
            raise create_missing_right_paren_error(ctx.open_parens[-1].location, token)

        raise create_unexpected_token_error(token)

    # Utility methods

    def _descend(self, ctx: _ParseContext, token: Token):
        """Enter one nesting level, enforcing the configured limit."""
        ctx.depth += 1
        if ctx.depth > self.config.max_depth:
            raise create_nesting_depth_error(self.config.max_depth, token)

    def _expect_end(self, ctx: _ParseContext):
        """Reject anything but end of input."""
        token = ctx.lexer.peek()
        if token.type == TokenType.EOF:
            return
        if token.type == TokenType.INVALID:
            raise create_trailing_input_error(token) from create_invalid_character_error(
                token.lexeme, token.location
            )
        raise create_trailing_input_error(token)


class ASTParser(GrammarParser[Expression]):
    """Parses an expression into an AST."""

    def parse(self, statement: str, filename: str = "<string>") -> Expression:
        root = super().parse(statement, filename)
        root.config = self.config
        return root

    def _number(self, token: Token) -> Expression:
        return NumberLiteral(token.value, SourceSpan(token.location, _end_location(token)))

    def _combine(self, operator: BinaryOperator, left: Expression, right: Expression) -> Expression:
        span = None
        if left.span is not None and right.span is not None:
            span = SourceSpan(left.span.start, right.span.end)
        return BinaryOp(operator, left, right, span)


class EvalParser(GrammarParser[int]):
    """Evaluates an expression directly, without building a tree."""

    def evaluate(self, statement: str, filename: str = "<string>") -> int:
        return self.parse(statement, filename)

    def _number(self, token: Token) -> int:
        return token.value

    def _combine(self, operator: BinaryOperator, left: int, right: int) -> int:
        return operator.apply(left, right, self.config.exact_power)


def _end_location(token: Token) -> SourceLocation:
    """Location of the last character of a single-line token."""
    width = max(len(token.lexeme) - 1, 0)
    location = token.location
    return SourceLocation(location.filename, location.line, location.column + width, location.offset + width)


@dataclass
class ParseResult(Generic[T]):
    """Outcome of a parse: either a value or the ParseError that stopped it."""
    value: Optional[T] = None
    error: Optional[ParseError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the value, or raise the stored error."""
        if self.error is not None:
            raise self.error
        return self.value


def parse_string(source: str, config: Optional[ParserConfig] = None,
                 filename: str = "<string>") -> Expression:
    """
    Convenience function to parse an expression string.

    Args:
        source: Expression text
        config: Parser options
        filename: Filename for error reporting

    Returns:
        Root expression node

    Raises:
        ParseError: If parsing fails
    """
    return ASTParser(config).parse(source, filename)


def evaluate_string(source: str, config: Optional[ParserConfig] = None,
                    filename: str = "<string>") -> int:
    """
    Convenience function to evaluate an expression string.

    Raises:
        ParseError: If parsing fails
        ZeroDivisionError: On division by zero
    """
    return EvalParser(config).parse(source, filename)


def try_parse(source: str, config: Optional[ParserConfig] = None) -> ParseResult[Expression]:
    """Like parse_string, but returns syntax errors instead of raising them."""
    return _attempt(ASTParser(config), source)


def try_evaluate(source: str, config: Optional[ParserConfig] = None) -> ParseResult[int]:
    """Like evaluate_string, but returns syntax errors instead of raising them."""
    return _attempt(EvalParser(config), source)


def _attempt(parser: GrammarParser[Any], source: str) -> ParseResult[Any]:
    try:
        return ParseResult(value=parser.parse(source))
    except ParseError as e:
        return ParseResult(error=e)
