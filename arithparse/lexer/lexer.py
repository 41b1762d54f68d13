"""
arithparse Lexer - tokenizes arithmetic expressions on demand

The parser only ever needs one token of lookahead, so the lexer hands out
tokens through peek()/advance() instead of building the whole list up front.
tokenize() is still around for tooling and tests.

xwest
"""

import re
from typing import Iterator, List, Optional

from .tokens import Token, TokenType, SourceLocation, SYMBOLS
from .errors import create_invalid_character_error, create_token_mismatch_error


class Lexer:
    """
    Arithmetic expression lexical analyzer.

    Holds the input and a cursor over the unconsumed part of it. The cursor
    only moves forward: whitespace is skipped when the next token is
    requested, and advance() consumes exactly one token's lexeme.
    """

    def __init__(self, source: str, filename: str = "<string>"):
        """
        Initialize the lexer with an expression.

        Args:
            source: Expression text
            filename: Name used in error locations
        """
        self.source = source
        self.filename = filename
        self.pos = 0
        self.line = 1
        self.column = 1

        # Token returned by the last peek(), dropped on advance()
        self._lookahead: Optional[Token] = None

        self._compile_patterns()

    def _compile_patterns(self):
        """Compile regex patterns used by the lexer."""

        # ASCII only; \d would also accept other Unicode digits
        self.number_pattern = re.compile(r'[0-9]+')

        self.whitespace_pattern = re.compile(r'[ \t\n\r\f\v]+')

    @property
    def remaining(self) -> str:
        """The unconsumed suffix of the input."""
        return self.source[self.pos:]

    @property
    def at_end(self) -> bool:
        """Check if only whitespace (or nothing) is left."""
        return self.peek().type == TokenType.EOF

    def peek(self) -> Token:
        """
        Return the next token without consuming it.

        Classification order is integer literal, single-character symbol,
        whitespace (skipped), end of input, and finally INVALID for anything
        else.
        """
        if self._lookahead is not None:
            return self._lookahead

        self._skip_whitespace()
        location = self._location()

        if self.pos >= len(self.source):
            token = Token(TokenType.EOF, "", None, location)
        else:
            match = self.number_pattern.match(self.source, self.pos)
            current_char = self.source[self.pos]

            if match:
                lexeme = match.group(0)
                token = Token(TokenType.NUMBER, lexeme, int(lexeme), location)
            elif current_char in SYMBOLS:
                token = Token(SYMBOLS[current_char], current_char, None, location)
            else:
                token = Token(TokenType.INVALID, current_char, None, location)

        self._lookahead = token
        return token

    def advance(self, token: Token):
        """
        Consume a token previously returned by peek().

        Raises:
            LexerError: If the token's lexeme is not at the cursor
        """
        self._skip_whitespace()

        if not self.source.startswith(token.lexeme, self.pos):
            raise create_token_mismatch_error(token.lexeme, self.remaining, self._location())

        self._advance_by(len(token.lexeme))
        self._lookahead = None

    def next_token(self) -> Token:
        """Consume and return the next token."""
        token = self.peek()
        self.advance(token)
        return token

    def tokenize(self) -> List[Token]:
        """
        Tokenize the rest of the input.

        Returns:
            List of tokens ending with the EOF token
        """
        return list(self)

    def __iter__(self) -> Iterator[Token]:
        while True:
            token = self.next_token()
            yield token
            if token.type == TokenType.EOF:
                return

    def _skip_whitespace(self):
        """Move the cursor past a whitespace run, if any."""
        match = self.whitespace_pattern.match(self.source, self.pos)
        if match:
            self._advance_by(match.end() - self.pos)

    def _location(self) -> SourceLocation:
        return SourceLocation(self.filename, self.line, self.column, self.pos)

    def _advance(self):
        """Advance position by one character, updating line/column."""
        if self.pos < len(self.source):
            if self.source[self.pos] == '\n':
                self.line += 1
                self.column = 1
            else:
                self.column += 1
            self.pos += 1

    def _advance_by(self, count: int):
        """Advance position by multiple characters."""
        for _ in range(count):
            self._advance()


def tokenize_string(source: str, filename: str = "<string>") -> List[Token]:
    """
    Convenience function to tokenize an expression string.

    Args:
        source: Expression text
        filename: Filename for error reporting

    Returns:
        List of tokens

    Raises:
        LexerError: If the input contains an invalid character
    """
    tokens = Lexer(source, filename).tokenize()

    for token in tokens:
        if token.type == TokenType.INVALID:
            raise create_invalid_character_error(token.lexeme, token.location)

    return tokens
