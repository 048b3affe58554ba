"""
Error handling for the shunting-yard parser.

Two kinds of failure live here:
- ``ParseError``: the input does not match the grammar. Carries a
  diagnostic naming what was expected, what was found, and where.
- ``InternalParserError``: the parser broke one of its own stack
  invariants. This is a defect in the parser, never a property of the
  input, so it is deliberately not a ``ParseError``.
"""

from typing import Optional, List, Union

from ..lexer.tokens import Token, TokenType, SourceLocation, TOKEN_DESCRIPTIONS
from ..lexer.errors import Diagnostic


class ParseError(Exception):
    """
    Exception raised when the parser encounters a syntax error.

    There is no recovery: the first syntax error aborts the parse.
    """

    def __init__(
        self,
        message: str,
        location: SourceLocation,
        token: Optional[Token] = None,
        expected: Optional[str] = None,
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
        self.expected = expected

    @property
    def location(self) -> SourceLocation:
        return self.diagnostic.location

    @property
    def code(self) -> Optional[str]:
        return self.diagnostic.code

    def __str__(self) -> str:
        return str(self.diagnostic)


class InternalParserError(RuntimeError):
    """Raised when the parser's operator/operand stacks are inconsistent."""
    pass


# Common parser error codes for categorization
PARSER_ERROR_CODES = {
    "P001": "Unexpected token",
    "P004": "Unclosed delimiter",
    "P005": "Invalid expression",
    "P010": "Unexpected end of input",
    "P013": "Expression nested too deeply",
}


def describe_expected(token_type: TokenType, value: Optional[str] = None) -> str:
    """Describe an expected token kind (and payload) for messages."""
    if value is not None:
        return f"'{value}'"
    return TOKEN_DESCRIPTIONS[token_type]


def suggest_missing_token(expected: Union[TokenType, str], value: Optional[str] = None) -> List[str]:
    """Suggest what token might be missing."""
    if value == ')':
        return ["Add a closing parenthesis ')'"]
    if expected == TokenType.EOF:
        return ["Remove the trailing input", "Join the expressions with an operator"]
    if expected == "primary expression":
        return ["Add a number, identifier or parenthesized expression"]
    return []


# Helper functions for creating common parser errors

def create_unexpected_token_error(expected: str, found: Token,
                                  suggestions: Optional[List[str]] = None) -> ParseError:
    """Create an error for an unexpected token."""
    found_str = found.describe()
    at = found.location.offset

    if found.type == TokenType.EOF:
        return create_unexpected_eof_error(expected, found)

    return ParseError(
        message=f"Expected {expected}, but got {found_str} at position {at}",
        location=found.location,
        token=found,
        expected=expected,
        code="P001",
        help_text=f"The parser expected to see {expected} at this position, but found {found_str} instead.",
        suggestions=suggestions or []
    )


def create_unexpected_eof_error(expected: str, found: Token) -> ParseError:
    """Create an error for unexpected end of input."""
    return ParseError(
        message=f"Expected {expected}, but got end of input at position {found.location.offset}",
        location=found.location,
        token=found,
        expected=expected,
        code="P010",
        help_text=f"The parser reached the end of the input while expecting {expected}.",
        suggestions=[f"Add the missing {expected}", "Check for an incomplete expression"]
    )


def create_unclosed_delimiter_error(delimiter: str, open_location: SourceLocation,
                                    found: Token) -> ParseError:
    """Create an error for an unclosed parenthesis."""
    closing_delimiters = {
        "(": ")",
    }

    closing = closing_delimiters.get(delimiter, delimiter)

    return ParseError(
        message=(f"Expected '{closing}', but got {found.describe()} "
                 f"at position {found.location.offset}"),
        location=found.location,
        token=found,
        expected=f"'{closing}'",
        code="P004",
        help_text=f"The opening '{delimiter}' at {open_location} was never closed.",
        suggestions=[f"Add a closing '{closing}'"]
    )


def create_invalid_expression_error(reason: str, found: Token, expected: str) -> ParseError:
    """Create an error for an operator that cannot start an expression."""
    return ParseError(
        message=f"Invalid expression: {reason}",
        location=found.location,
        token=found,
        expected=expected,
        code="P005",
        help_text=reason,
        suggestions=["Check the expression syntax", "Ensure all operators have operands"]
    )


def create_nesting_too_deep_error(limit: int, found: Token) -> ParseError:
    """Create an error for input nested beyond the configured limit."""
    return ParseError(
        message=f"Expression nested too deeply (limit is {limit})",
        location=found.location,
        token=found,
        code="P013",
        help_text="Parentheses and prefix operators count towards the nesting depth.",
        suggestions=["Simplify the expression", "Raise ParserConfig.max_nesting_depth"]
    )
