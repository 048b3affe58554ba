"""
Expression lexer - turns source text into tokens on demand.

The parser pulls one token at a time through ``next_token``; ``tokenize``
is there for tooling and tests that want the whole stream at once.
"""

import re
from typing import List

from .tokens import Token, TokenType, SourceLocation, OPERATOR_CHARS
from .errors import create_invalid_character_error, create_invalid_number_error


class Lexer:
    """
    Pull-based lexical analyzer for arithmetic expressions.

    Recognizes numbers, identifiers and single-character operators,
    skipping whitespace and tracking line/column for every token.
    """

    def __init__(self, source: str, filename: str = "<string>"):
        """
        Initialize the lexer with source text.

        Args:
            source: Expression text
            filename: Name used in source locations for error reporting
        """
        self.source = source
        self.filename = filename
        self.pos = 0
        self.line = 1
        self.column = 1

        self._compile_patterns()

    def _compile_patterns(self):
        """Compile regex patterns used by the lexer."""
        self.number_pattern = re.compile(r'(?:\d+(?:\.\d*)?|\.\d+)')
        self.exponent_pattern = re.compile(r'[eE][+-]?\d+')

    def next_token(self) -> Token:
        """
        Produce the next token.

        Returns:
            The next token; an EOF token once the input is exhausted
            (repeatedly, if called again).

        Raises:
            LexerError: If the input at the current position is not a valid token
        """
        self._skip_whitespace()

        location = self._location()
        if self.pos >= len(self.source):
            return Token(TokenType.EOF, "", None, location)

        current_char = self.source[self.pos]

        if current_char.isdecimal() or (current_char == '.' and self._peek().isdecimal()):
            return self._tokenize_number(location)

        if self._is_identifier_start(current_char):
            return self._tokenize_identifier(location)

        if current_char in OPERATOR_CHARS:
            self._advance()
            return Token(TokenType.OPERATOR, current_char, current_char, location)

        raise create_invalid_character_error(current_char, location)

    def tokenize(self) -> List[Token]:
        """
        Tokenize the remaining input.

        Returns:
            List of tokens ending with the EOF token
        """
        tokens = []
        while True:
            token = self.next_token()
            tokens.append(token)
            if token.type == TokenType.EOF:
                return tokens

    def _tokenize_number(self, location: SourceLocation) -> Token:
        """Tokenize an integer or float literal."""
        match = self.number_pattern.match(self.source, self.pos)
        end = match.end()
        is_float = '.' in match.group(0)

        if end < len(self.source) and self.source[end] in 'eE':
            exponent = self.exponent_pattern.match(self.source, end)
            if exponent is None:
                raise create_invalid_number_error(
                    self.source[self.pos:end + 1],
                    location,
                    "Exponent marker is not followed by any digits"
                )
            end = exponent.end()
            is_float = True

        lexeme = self.source[self.pos:end]
        self._advance_by(len(lexeme))

        value = float(lexeme) if is_float else int(lexeme)
        return Token(TokenType.NUMBER, lexeme, value, location)

    def _tokenize_identifier(self, location: SourceLocation) -> Token:
        """Tokenize an identifier."""
        start_pos = self.pos
        self._advance()

        while self.pos < len(self.source) and self._is_identifier_continue(self.source[self.pos]):
            self._advance()

        lexeme = self.source[start_pos:self.pos]
        return Token(TokenType.IDENTIFIER, lexeme, lexeme, location)

    def _is_identifier_start(self, char: str) -> bool:
        return char.isalpha() or char == '_'

    def _is_identifier_continue(self, char: str) -> bool:
        return char.isalnum() or char == '_'

    def _skip_whitespace(self):
        while self.pos < len(self.source) and self.source[self.pos].isspace():
            self._advance()

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

    def _peek(self, offset: int = 1) -> str:
        """Peek at character ahead without advancing."""
        peek_pos = self.pos + offset
        if peek_pos < len(self.source):
            return self.source[peek_pos]
        return '\0'


def tokenize_string(source: str, filename: str = "<string>") -> List[Token]:
    """
    Convenience function to tokenize a source string.

    Args:
        source: Expression text
        filename: Filename for error reporting

    Returns:
        List of tokens including the final EOF token

    Raises:
        LexerError: If lexing fails
    """
    return Lexer(source, filename).tokenize()
