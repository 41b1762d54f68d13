"""
Error handling for the arithparse parser.

Provides error reporting with source location information and
suggestions for syntax errors.

Author: xwest
"""

from typing import Optional, List

from ..lexer.tokens import Token, TokenType, SourceLocation
from ..lexer.errors import Diagnostic


class ParseError(Exception):
    """
    Exception raised when the parser encounters a fatal syntax error.

    Contains detailed diagnostic information for error reporting.
    """

    def __init__(
        self,
        message: str,
        location: SourceLocation,
        token: Optional[Token] = None,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.diagnostic = Diagnostic(
            message=message,
            location=location,
            severity="error",
            code=code,
            help_text=help_text,
            suggestions=suggestions
        )
        self.token = token

    @property
    def message(self) -> str:
        return self.diagnostic.message

    @property
    def code(self) -> Optional[str]:
        return self.diagnostic.code

    def __str__(self) -> str:
        return str(self.diagnostic)


class SyntaxErrorRecovery:
    """
    Suggestions for fixing common syntax errors.
    """

    @staticmethod
    def suggest_for_unexpected(found: Token) -> List[str]:
        """Suggest what might be wrong when an operand was expected."""
        if found.type == TokenType.EOF:
            return ["Add a number or a parenthesized expression"]
        if found.type == TokenType.MINUS:
            return ["Unary minus is not supported; write (0 - x) instead"]
        if found.is_operator:
            return ["Every operator needs a number on both sides"]
        if found.type == TokenType.RIGHT_PAREN:
            return ["Remove the ')' or put an expression before it"]
        return []


# Helper functions for creating common parser errors

def create_unexpected_token_error(found: Token) -> ParseError:
    """Create an error for a token that cannot start an operand."""
    if found.type == TokenType.EOF:
        found_str = "end of input"
    else:
        found_str = f"{found.type.name} {found.lexeme!r}"

    return ParseError(
        message="parse error",
        location=found.location,
        token=found,
        code="P001",
        help_text=f"Expected a number or '(' but found {found_str}.",
        suggestions=SyntaxErrorRecovery.suggest_for_unexpected(found)
    )


def create_missing_right_paren_error(open_location: SourceLocation, found: Token) -> ParseError:
    """Create an error for a '(' that was never closed."""
    return ParseError(
        message="missing right parenthesis",
        location=found.location,
        token=found,
        code="P004",
        help_text=f"The opening '(' at {open_location} was never closed.",
        suggestions=["Add a closing ')'", "Check for missing operators between operands"]
    )


def create_nesting_depth_error(limit: int, found: Token) -> ParseError:
    """Create an error for an expression nested past the configured limit."""
    return ParseError(
        message="maximum nesting depth exceeded",
        location=found.location,
        token=found,
        code="P013",
        help_text=f"Parentheses and '^' chains may nest at most {limit} levels deep.",
        suggestions=["Simplify the expression", "Raise ParserConfig.max_depth"]
    )


def create_trailing_input_error(found: Token) -> ParseError:
    """Create an error for input left over after a complete expression."""
    return ParseError(
        message="unexpected trailing input",
        location=found.location,
        token=found,
        code="P014",
        help_text=f"The expression ended before {found.lexeme!r}.",
        suggestions=["Remove the extra input", "Check for unbalanced parentheses"]
    )
