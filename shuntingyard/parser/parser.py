"""
Shunting-yard expression parser.

Parses the grammar

    E --> P { B P }
    P --> v | "(" E ")" | U P
    B --> "+" | "-" | "*" | "/" | "^"
    U --> "-"

(``v`` being a number or identifier) with two stacks: pending operators
and finished sub-trees. Operators are reduced into the tree as soon as a
looser-binding operator arrives, or when a parenthesis scope or the whole
input ends. The approach follows
https://www.engr.mun.ca/~theo/Misc/exp_parsing.htm
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from ..config import ParserConfig, DEFAULT_CONFIG
from ..lexer.errors import LexerError
from ..lexer.lexer import Lexer
from ..lexer.tokens import Token, TokenType, SourceLocation
from .ast_nodes import ASTNode, Number, Identifier, Binary, Prefix, Postfix, Parenthesized
from .errors import (
    ParseError, InternalParserError, create_unexpected_token_error, create_unclosed_delimiter_error,
    create_invalid_expression_error, create_nesting_too_deep_error,
    describe_expected, suggest_missing_token
)

logger = logging.getLogger(__name__)


BINARY_OPERATORS = frozenset("+-*/^")
PREFIX_OPERATORS = frozenset("-")


class OperatorKind(Enum):
    SENTINEL = "sentinel"
    BINARY = "binary"
    PREFIX = "prefix"
    POSTFIX = "postfix"


class Associativity(Enum):
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class Operator:
    """An entry on the operator stack."""
    kind: OperatorKind
    symbol: Optional[str]
    location: SourceLocation

    @classmethod
    def sentinel(cls, location: SourceLocation) -> 'Operator':
        return cls(OperatorKind.SENTINEL, None, location)

    @classmethod
    def binary(cls, symbol: str, location: SourceLocation) -> 'Operator':
        return cls(OperatorKind.BINARY, symbol, location)

    @classmethod
    def prefix(cls, symbol: str, location: SourceLocation) -> 'Operator':
        return cls(OperatorKind.PREFIX, symbol, location)

    @classmethod
    def postfix(cls, symbol: str, location: SourceLocation) -> 'Operator':
        return cls(OperatorKind.POSTFIX, symbol, location)

    @property
    def is_sentinel(self) -> bool:
        return self.kind == OperatorKind.SENTINEL

    def __str__(self) -> str:
        if self.is_sentinel:
            return f"sentinel@{self.location.offset}"
        return f"{self.kind.value}({self.symbol})@{self.location.offset}"


BINARY_PRECEDENCE = {
    '+': 1,
    '-': 1,
    '*': 2,
    '/': 2,
    '^': 4,
}

PREFIX_PRECEDENCE = {
    '-': 3,
}

BINARY_ASSOCIATIVITY = {
    '+': Associativity.LEFT,
    '-': Associativity.LEFT,
    '*': Associativity.LEFT,
    '/': Associativity.LEFT,
    '^': Associativity.RIGHT,
}


def precedence(op: Operator) -> int:
    """Binding power of ``op``; the sentinel binds loosest of all."""
    if op.kind == OperatorKind.SENTINEL:
        return 0
    table = {
        OperatorKind.BINARY: BINARY_PRECEDENCE,
        OperatorKind.PREFIX: PREFIX_PRECEDENCE,
    }.get(op.kind, {})
    if op.symbol not in table:
        raise InternalParserError(f"Unexpected operator {op} has no precedence")
    return table[op.symbol]


def associativity(op: Operator) -> Associativity:
    """Associativity of a binary operator."""
    if op.kind != OperatorKind.BINARY or op.symbol not in BINARY_ASSOCIATIVITY:
        raise InternalParserError(f"Operator {op} does not have associativity")
    return BINARY_ASSOCIATIVITY[op.symbol]


def has_greater_precedence(top: Operator, incoming: Operator) -> bool:
    """
    Decide whether ``top`` must be reduced before ``incoming`` is pushed.

    True when ``top`` binds tighter, or binds equally and is left
    associative. A sentinel is never reduced this way, and an incoming
    prefix operator reduces nothing since its operand has not been read.
    """
    if top.is_sentinel or incoming.kind == OperatorKind.PREFIX:
        return False

    top_prec = precedence(top)
    incoming_prec = precedence(incoming)
    if top_prec > incoming_prec:
        return True
    return (top_prec == incoming_prec
            and top.kind == OperatorKind.BINARY
            and associativity(top) == Associativity.LEFT)


class ShuntingYardParser:
    """
    Operator-precedence parser over a pull-based lexer.

    A parser instance handles exactly one input. After a successful
    ``parse`` the operator stack holds only the outer sentinel and the
    operand stack only the returned root node.
    """

    def __init__(self, lexer: Lexer, config: Optional[ParserConfig] = None):
        """
        Initialize the parser.

        Args:
            lexer: Token source; the parser owns and drains it
            config: Parser options, defaults to ``DEFAULT_CONFIG``
        """
        self.lexer = lexer
        self.config = config or DEFAULT_CONFIG
        self.current: Optional[Token] = None
        self.operators: List[Operator] = []
        self.operands: List[ASTNode] = []
        self._depth = 0

    def parse(self) -> ASTNode:
        """
        Parse the whole input into a single expression tree.

        Returns:
            Root node of the expression

        Raises:
            ParseError: If the input is not a valid expression
            LexerError: If the input cannot be tokenized
            InternalParserError: If the stacks end up inconsistent
        """
        self.consume()
        self.operators.append(Operator.sentinel(self.current.location))

        self.parse_expression()
        self.expect(TokenType.EOF)

        if len(self.operands) != 1:
            raise InternalParserError(
                f"Expected exactly one expression after parsing, found {len(self.operands)}"
            )
        if len(self.operators) != 1 or not self.operators[0].is_sentinel:
            raise InternalParserError(
                f"Expected only the outer sentinel after parsing, found "
                f"[{', '.join(str(op) for op in self.operators)}]"
            )
        return self.operands[0]

    def consume(self):
        """Advance the lookahead to the next token from the lexer."""
        self.current = self.lexer.next_token()

    def expect(self, token_type: TokenType, value: Optional[str] = None):
        """Consume the lookahead if it matches ``token_type``/``value``, else fail."""
        if self.current.matches(token_type, value):
            self.consume()
            return

        if value == ')' and self.top_operator().is_sentinel:
            raise create_unclosed_delimiter_error('(', self.top_operator().location, self.current)

        raise create_unexpected_token_error(
            describe_expected(token_type, value),
            self.current,
            suggestions=suggest_missing_token(token_type, value)
        )

    def parse_expression(self):
        """E --> P { B P }"""
        self.parse_primary()

        while self.current.type == TokenType.OPERATOR and self.current.value in BINARY_OPERATORS:
            self.push_operator(Operator.binary(self.current.value, self.current.location))
            self.consume()
            self.parse_primary()

        while not self.top_operator().is_sentinel:
            self.pop_operator()

    def parse_primary(self):
        """P --> v | "(" E ")" | U P"""
        token = self.current

        if token.type == TokenType.NUMBER:
            self.operands.append(Number(token.value, token.location))
            self.consume()

        elif token.type == TokenType.IDENTIFIER:
            self.operands.append(Identifier(token.value, token.location))
            self.consume()

        elif token.matches(TokenType.OPERATOR, '('):
            self._enter_nested(token)
            self.consume()
            self.operators.append(Operator.sentinel(token.location))
            self.parse_expression()
            self.expect(TokenType.OPERATOR, ')')

            sentinel = self.operators.pop()
            if not sentinel.is_sentinel:
                raise InternalParserError(
                    f"Expected the sentinel for '(' at {token.location}, found {sentinel}"
                )
            inner = self._pop_operand()
            self.operands.append(Parenthesized(inner, token.location))
            self._depth -= 1

        elif token.type == TokenType.OPERATOR:
            if token.value not in PREFIX_OPERATORS:
                raise create_invalid_expression_error(
                    f"Expected unary operator, but got '{token.value}' at position {token.location.offset}",
                    token,
                    expected="primary expression"
                )
            self._enter_nested(token)
            self.push_operator(Operator.prefix(token.value, token.location))
            self.consume()
            self.parse_primary()
            self._depth -= 1

        else:
            raise create_unexpected_token_error(
                "primary expression",
                token,
                suggestions=suggest_missing_token("primary expression")
            )

    def top_operator(self) -> Operator:
        if not self.operators:
            raise InternalParserError("Operator stack is empty")
        return self.operators[-1]

    def push_operator(self, op: Operator):
        """Reduce every tighter-binding operator on top, then push ``op``."""
        while has_greater_precedence(self.top_operator(), op):
            self.pop_operator()
        self.operators.append(op)

    def pop_operator(self):
        """Pop one operator and replace its operands with the built node."""
        op = self.operators.pop()
        if op.is_sentinel:
            raise InternalParserError(
                f"Unexpected sentinel from position {op.location.offset} on operator stack"
            )

        operand = self._pop_operand()
        if op.kind == OperatorKind.BINARY:
            left = self._pop_operand()
            node = Binary(op.symbol, left, operand, op.location)
        elif op.kind == OperatorKind.PREFIX:
            node = Prefix(op.symbol, operand, op.location)
        else:
            node = Postfix(op.symbol, operand, op.location)

        logger.debug("Reduced %s", op)
        self.operands.append(node)

    def _pop_operand(self) -> ASTNode:
        if not self.operands:
            raise InternalParserError("Expression stack underflow")
        return self.operands.pop()

    def _enter_nested(self, token: Token):
        if self._depth >= self.config.max_nesting_depth:
            raise create_nesting_too_deep_error(self.config.max_nesting_depth, token)
        self._depth += 1


def parse(text: str, filename: Optional[str] = None,
          config: Optional[ParserConfig] = None) -> ASTNode:
    """
    Parse an arithmetic expression.

    Args:
        text: Expression source text
        filename: Name used in source locations; overrides ``config.filename``
        config: Parser options

    Returns:
        Root node of the expression tree

    Raises:
        ParseError: If the text is not a valid expression
        LexerError: If the text cannot be tokenized
    """
    config = config or DEFAULT_CONFIG
    lexer = Lexer(text, filename or config.filename)
    logger.debug("Parsing %d characters from %s", len(text), lexer.filename)
    try:
        return ShuntingYardParser(lexer, config).parse()
    except (ParseError, LexerError) as e:
        logger.debug("Parse of %s aborted: %s", lexer.filename, e.diagnostic.message)
        raise


def parse_file(filepath: str, config: Optional[ParserConfig] = None) -> ASTNode:
    """
    Parse an expression stored in a UTF-8 text file.

    Raises:
        ParseError: If parsing fails
        LexerError: If lexing fails
        OSError: If the file cannot be read
    """
    with open(filepath, 'r', encoding='utf-8') as f:
        source = f.read()

    return parse(source, filename=filepath, config=config)
