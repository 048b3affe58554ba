"""
Shunting-yard Parser Package

Turns a token stream into an expression tree using an operator stack and
an operand stack.

Key Features:
- Fixed precedence table: + - (1), * / (2), prefix - (3), ^ (4)
- Left-associative + - * /, right-associative ^
- Parenthesized grouping preserved in the tree
- Source location on every node
- Distinct errors for bad input (ParseError) and parser defects
  (InternalParserError)
"""

from .ast_nodes import (
    ASTNode, ASTNodeType, ASTVisitor, Number, Identifier, Binary, Prefix,
    Postfix, Parenthesized, SExpressionFormatter, to_sexpr, walk
)
from .parser import (
    ShuntingYardParser, Operator, OperatorKind, Associativity,
    parse, parse_file
)
from .errors import ParseError, InternalParserError

__all__ = [
    # Core parser
    "ShuntingYardParser", "Operator", "OperatorKind", "Associativity",
    "parse", "parse_file",

    # AST nodes
    "ASTNode", "ASTNodeType", "ASTVisitor",
    "Number", "Identifier", "Binary", "Prefix", "Postfix", "Parenthesized",
    "SExpressionFormatter", "to_sexpr", "walk",

    # Error handling
    "ParseError", "InternalParserError",
]
