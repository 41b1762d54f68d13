"""
Error handling for the arithparse lexer.

Provides error reporting with source location information and
suggestions for characters that look like supported operators.

Author: xwest
"""

from typing import Optional, List
from dataclasses import dataclass
from .tokens import SourceLocation


@dataclass
class Diagnostic:
    """A located message with optional help and suggestions."""
    message: str
    location: SourceLocation
    severity: str  # "error"
    code: Optional[str] = None
    help_text: Optional[str] = None
    suggestions: Optional[List[str]] = None

    def __str__(self) -> str:
        severity_prefix = self.severity.upper()
        result = f"{severity_prefix}: {self.message}\n"
        result += f"  --> {self.location}\n"

        if self.help_text:
            result += f"  help: {self.help_text}\n"

        if self.suggestions:
            result += "  suggestions:\n"
            for suggestion in self.suggestions:
                result += f"    - {suggestion}\n"

        return result


class LexerError(Exception):
    """
    Exception raised when the lexer encounters a fatal error.

    Contains detailed diagnostic information for error reporting.
    """

    def __init__(
        self,
        message: str,
        location: SourceLocation,
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

    def __str__(self) -> str:
        return str(self.diagnostic)


class ErrorRecovery:
    """
    Helpers for explaining lexical errors to the user.
    """

    @staticmethod
    def suggest_ascii_alternatives(char: str) -> List[str]:
        """Suggest supported ASCII symbols for look-alike characters."""
        ascii_alternatives = {
            '×': ['*'],
            '⋅': ['*'],
            '·': ['*'],
            '÷': ['/'],
            '−': ['-'],
            '–': ['-'],
            '[': ['('],
            '{': ['('],
            ']': [')'],
            '}': [')'],
        }

        return ascii_alternatives.get(char, [])


# Helper functions for creating common errors
def create_invalid_character_error(char: str, location: SourceLocation) -> LexerError:
    """Create an error for an invalid character."""
    suggestions = ErrorRecovery.suggest_ascii_alternatives(char)

    if suggestions:
        help_text = f"Did you mean one of these operators: {', '.join(suggestions)}?"
    elif char.isprintable():
        help_text = (f"The character '{char}' is not valid in an expression; "
                     f"only digits, + - * / ^ ( ) and whitespace are allowed.")
    else:
        help_text = f"Non-printable character (Unicode: U+{ord(char):04X}) is not allowed."

    return LexerError(
        message=f"Invalid character: '{char}'",
        location=location,
        code="L001",
        help_text=help_text,
        suggestions=suggestions
    )


def create_token_mismatch_error(lexeme: str, remaining: str, location: SourceLocation) -> LexerError:
    """Create an error for advancing past a token that is not next in the input."""
    return LexerError(
        message=f"Cannot advance past {lexeme!r}: remaining input is {remaining[:10]!r}",
        location=location,
        code="L011",
        help_text="advance() must be called with the token most recently returned by peek().",
    )
