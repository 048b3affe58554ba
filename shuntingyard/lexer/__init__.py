"""
Expression Lexer Package

Implements the tokenizer feeding the shunting-yard parser. Tokens are
produced lazily, one per ``Lexer.next_token`` call, so the parser never
looks more than one token ahead.

Key Features:
- Integer and floating-point literals (42, 3.14, .5, 1e-3)
- Unicode-aware identifiers
- Single-character operators: + - * / ^ ( )
- Source location tracking (line, column, offset) for diagnostics
"""

from .tokens import Token, TokenType, SourceLocation, OPERATOR_CHARS
from .lexer import Lexer, tokenize_string
from .errors import Diagnostic, LexerError

__all__ = [
    "Lexer",
    "Token",
    "TokenType",
    "SourceLocation",
    "OPERATOR_CHARS",
    "Diagnostic",
    "LexerError",
    "tokenize_string",
]
