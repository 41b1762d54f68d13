"""
arithparse Package

A recursive descent parser and evaluator for integer arithmetic expressions
with + - * / ^ and parentheses.

Architecture:
    arithparse/
    ├── lexer/           # On-demand tokenization
    ├── parser/          # Grammar, AST nodes and direct evaluation
    ├── config.py        # Parser options
    ├── harness.py       # Demonstration cases
    └── cli.py           # Command line entry point

Author: xwest
License: MIT
"""

__version__ = "0.1.0"
__author__ = "xwest"
__email__ = "dev@neuralscript.org"
__license__ = "MIT"

from .config import ParserConfig
from .lexer import Lexer, Token, TokenType, LexerError
from .parser import (
    ASTParser, EvalParser, ParseError, ParseResult,
    parse_string, evaluate_string, try_parse, try_evaluate,
)

__all__ = [
    # Core classes
    "Lexer",
    "Token",
    "TokenType",
    "ASTParser",
    "EvalParser",
    "ParserConfig",
    "ParseResult",

    # Convenience functions
    "parse_string",
    "evaluate_string",
    "try_parse",
    "try_evaluate",

    # Errors
    "LexerError",
    "ParseError",

    # Version info
    "__version__",
    "__author__",
    "__email__",
    "__license__",
]
