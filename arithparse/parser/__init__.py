"""
arithparse Parser Package

Implements a recursive descent parser for integer arithmetic expressions,
in two flavors that share one grammar implementation.

Key Features:
- Correct precedence: ^ binds tighter than * and /, which bind tighter than + and -
- Left-associative + - * /, right-associative ^
- AST building (ASTParser) or direct evaluation (EvalParser)
- Diagnostics with source locations

Author: xwest
"""

from .ast_nodes import (
    ASTNode, ASTNodeType, ASTVisitor, BinaryOp, BinaryOperator, Evaluator,
    Expression, NumberLiteral, Renderer, SourceSpan, postorder,
)
from .parser import (
    ASTParser, EvalParser, GrammarParser, ParseResult,
    evaluate_string, parse_string, try_evaluate, try_parse,
)
from .errors import ParseError

__all__ = [
    # Core parsers
    "ASTParser", "EvalParser", "GrammarParser", "ParseResult",
    "parse_string", "evaluate_string", "try_parse", "try_evaluate",

    # AST nodes
    "ASTNode", "ASTNodeType", "ASTVisitor", "Expression",
    "NumberLiteral", "BinaryOp", "BinaryOperator", "SourceSpan",
    "Evaluator", "Renderer", "postorder",

    # Error handling
    "ParseError",
]
