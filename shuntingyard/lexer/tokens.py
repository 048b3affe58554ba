"""
Token definitions for the expression lexer.

The expression grammar only needs four kinds of token:
- Numeric literals (integers and floats)
- Identifiers
- Single-character operators, including the grouping parentheses
- End of input
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Any, Optional


class TokenType(Enum):
    """Enumeration of all token types produced by the lexer."""

    NUMBER = auto()                 # 42, 3.14, 1e-3
    IDENTIFIER = auto()             # x, rate_1, θ
    OPERATOR = auto()               # + - * / ^ ( )
    EOF = auto()                    # End of input


@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in the source text.

    Used for error reporting and to tag every AST node with the
    position it originated from.
    """
    filename: str
    line: int
    column: int
    offset: int  # Character offset from start of input

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"

    def __repr__(self) -> str:
        return f"SourceLocation({self.filename!r}, {self.line}, {self.column}, {self.offset})"


@dataclass(frozen=True)
class Token:
    """
    A lexical token.

    Equality of *kind* (``matches``) is by type and payload only; the
    location never takes part in it.
    """
    type: TokenType
    lexeme: str                     # Raw text from source
    value: Any                      # int/float, identifier name, operator char, or None
    location: SourceLocation

    def __str__(self) -> str:
        return self.describe()

    def __repr__(self) -> str:
        return (f"Token({self.type.name}, {self.lexeme!r}, "
                f"{self.value!r}, {self.location!r})")

    def matches(self, token_type: TokenType, value: Optional[Any] = None) -> bool:
        """Check tag (and payload, when given) without looking at position."""
        if self.type != token_type:
            return False
        return value is None or self.value == value

    def describe(self) -> str:
        """Human readable form used in diagnostics."""
        if self.type == TokenType.EOF:
            return "end of input"
        return f"{self.type.name}({self.lexeme!r})"


# Every character the lexer turns into an OPERATOR token
OPERATOR_CHARS = frozenset("+-*/^()")

# Descriptions used when the parser expects a specific token
TOKEN_DESCRIPTIONS = {
    TokenType.NUMBER: "number",
    TokenType.IDENTIFIER: "identifier",
    TokenType.OPERATOR: "operator",
    TokenType.EOF: "end of input",
}
