"""
arithparse Lexer Package

Implements an on-demand lexical analyzer (tokenizer) for integer arithmetic
expressions.

Key Features:
- One-token lookahead through peek()/advance()
- Transparent whitespace skipping
- Invalid characters surface as INVALID tokens, reported by the parser
- Source location tracking for diagnostics

Author: xwest
"""

from .tokens import Token, TokenType, SourceLocation
from .lexer import Lexer, tokenize_string
from .errors import Diagnostic, LexerError

__all__ = [
    "Lexer",
    "Token",
    "TokenType",
    "SourceLocation",
    "Diagnostic",
    "LexerError",
    "tokenize_string",
]
