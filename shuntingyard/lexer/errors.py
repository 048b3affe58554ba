"""
Error handling for the expression lexer.

Provides error reporting with source location information and
IDE-friendly diagnostics.
"""

from typing import Optional, List
from dataclasses import dataclass
from .tokens import SourceLocation, OPERATOR_CHARS


@dataclass
class Diagnostic:
    """Base class for diagnostics (errors, warnings, info)."""
    message: str
    location: SourceLocation
    severity: str  # "error", "warning", "info", "hint"
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
    Exception raised when the lexer cannot produce the next token.

    The parser never catches it: a lexical failure aborts the parse and
    reaches the caller unchanged.
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

    @property
    def location(self) -> SourceLocation:
        return self.diagnostic.location

    @property
    def code(self) -> Optional[str]:
        return self.diagnostic.code

    def __str__(self) -> str:
        return str(self.diagnostic)


# Common error codes for categorization
ERROR_CODES = {
    "L001": "Invalid character",
    "L003": "Invalid numeric literal",
}


def suggest_operator_alternatives(char: str) -> List[str]:
    """Suggest supported ASCII operators for common look-alikes."""
    alternatives = {
        '×': ['*'],
        '·': ['*'],
        '⋅': ['*'],
        '÷': ['/'],
        '−': ['-'],
        '[': ['('],
        ']': [')'],
        '{': ['('],
        '}': [')'],
    }

    return alternatives.get(char, [])


def create_invalid_character_error(char: str, location: SourceLocation) -> LexerError:
    """Create an error for an invalid character."""
    suggestions = suggest_operator_alternatives(char)

    if suggestions:
        help_text = f"Did you mean: {', '.join(suggestions)}?"
    elif char.isprintable():
        help_text = (f"The character '{char}' is not valid in an expression. "
                     f"Supported operators are: {' '.join(sorted(OPERATOR_CHARS))}")
    else:
        help_text = f"Non-printable character (Unicode: U+{ord(char):04X}) is not allowed."

    return LexerError(
        message=f"Invalid character: '{char}'",
        location=location,
        code="L001",
        help_text=help_text,
        suggestions=suggestions
    )


def create_invalid_number_error(lexeme: str, location: SourceLocation, reason: str) -> LexerError:
    """Create an error for an invalid numeric literal."""
    return LexerError(
        message=f"Invalid numeric literal: '{lexeme}'",
        location=location,
        code="L003",
        help_text=reason,
        suggestions=["Check the numeric format", "An exponent needs at least one digit, e.g. 1e5"]
    )
