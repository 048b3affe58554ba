"""
shuntingyard

An operator-precedence parser for arithmetic expressions built on the
shunting-yard algorithm.

Architecture:
    shuntingyard/
    ├── lexer/           # Tokenization
    ├── parser/          # Shunting-yard engine and AST nodes
    └── config.py        # Parser options
"""

__version__ = "0.1.0"
__license__ = "MIT"

from .config import ParserConfig, max_supported_nesting_depth
from .lexer import Lexer, Token, TokenType, SourceLocation, LexerError
from .parser import ShuntingYardParser, ParseError, InternalParserError, parse, parse_file, to_sexpr

__all__ = [
    "parse",
    "parse_file",
    "to_sexpr",
    "ParserConfig",
    "max_supported_nesting_depth",
    "Lexer",
    "Token",
    "TokenType",
    "SourceLocation",
    "ShuntingYardParser",
    "ParseError",
    "LexerError",
    "InternalParserError",

    # Version info
    "__version__",
    "__license__",
]
