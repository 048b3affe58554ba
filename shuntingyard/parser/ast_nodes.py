"""
Abstract Syntax Tree node definitions for arithmetic expressions.

Every node carries the source location it originated from: the literal or
identifier token, the operator token for Binary/Prefix/Postfix nodes, and
the opening parenthesis for Parenthesized nodes. Nodes own their children
exclusively, so a parse result is always a tree.
"""

from abc import ABC, abstractmethod
from typing import Any, Iterator, List, Optional, Tuple, Union
from enum import Enum

from ..lexer.tokens import SourceLocation


class ASTNodeType(Enum):
    """Enumeration of all AST node types."""

    NUMBER = "Number"
    IDENTIFIER = "Identifier"
    BINARY = "Binary"
    PREFIX = "Prefix"
    POSTFIX = "Postfix"           # Reserved; the grammar never produces it
    PARENTHESIZED = "Parenthesized"


class ASTVisitor:
    """
    Visitor base class.

    ``visit`` dispatches to ``visit_<node type>`` (e.g. ``visit_binary``);
    node types without a handler fall through to ``generic_visit``.
    """

    def visit(self, node: 'ASTNode') -> Any:
        method = getattr(self, f"visit_{node.node_type.name.lower()}", self.generic_visit)
        return method(node)

    def generic_visit(self, node: 'ASTNode') -> Any:
        raise NotImplementedError(
            f"{self.__class__.__name__} has no handler for {node.node_type.value} nodes"
        )


class ASTNode(ABC):
    """Base class for all AST nodes."""

    def __init__(self, node_type: ASTNodeType, location: SourceLocation):
        self.node_type = node_type
        self.location = location
        self.parent: Optional['ASTNode'] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        """Accept a visitor (visitor pattern)."""
        return visitor.visit(self)

    @abstractmethod
    def children(self) -> List['ASTNode']:
        """Get all child nodes."""
        pass

    @abstractmethod
    def _payload(self) -> Tuple[Any, ...]:
        """Node specific data (excluding children) used for comparisons."""
        pass

    def set_parent(self, parent: 'ASTNode'):
        """Set the parent node."""
        self.parent = parent

    def _shallow_key(self) -> Tuple[Any, ...]:
        return (self.node_type, self._payload(), self.location, len(self.children()))

    def __eq__(self, other) -> bool:
        """Structural equality: same shape, payloads and locations."""
        if not isinstance(other, ASTNode):
            return NotImplemented
        # Pre-order walks with child counts pin down the whole shape
        pending = [(self, other)]
        while pending:
            left, right = pending.pop()
            if left._shallow_key() != right._shallow_key():
                return False
            pending.extend(zip(left.children(), right.children()))
        return True

    def __hash__(self) -> int:
        return hash(tuple(node._shallow_key() for node in walk(self)))

    def __str__(self) -> str:
        return f"{self.node_type.value}@{self.location}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({to_sexpr(self)}, location={self.location!r})"


# ============================================================================
# Leaves
# ============================================================================

class Number(ASTNode):
    """Numeric literal."""
    value: Union[int, float]

    def __init__(self, value: Union[int, float], location: SourceLocation):
        super().__init__(ASTNodeType.NUMBER, location)
        self.value = value

    def children(self) -> List[ASTNode]:
        return []

    def _payload(self) -> Tuple[Any, ...]:
        # 1 == 1.0, but an int and a float literal are different nodes
        return (type(self.value), self.value)


class Identifier(ASTNode):
    """Identifier reference."""
    name: str

    def __init__(self, name: str, location: SourceLocation):
        super().__init__(ASTNodeType.IDENTIFIER, location)
        self.name = name

    def children(self) -> List[ASTNode]:
        return []

    def _payload(self) -> Tuple[Any, ...]:
        return (self.name,)


# ============================================================================
# Operators
# ============================================================================

class Binary(ASTNode):
    """Binary operation; located at the operator."""
    operator: str
    left: ASTNode
    right: ASTNode

    def __init__(self, operator: str, left: ASTNode, right: ASTNode, location: SourceLocation):
        super().__init__(ASTNodeType.BINARY, location)
        self.operator = operator
        self.left = left
        self.right = right

        left.set_parent(self)
        right.set_parent(self)

    def children(self) -> List[ASTNode]:
        return [self.left, self.right]

    def _payload(self) -> Tuple[Any, ...]:
        return (self.operator,)


class Prefix(ASTNode):
    """Unary prefix operation; located at the operator."""
    operator: str
    operand: ASTNode

    def __init__(self, operator: str, operand: ASTNode, location: SourceLocation):
        super().__init__(ASTNodeType.PREFIX, location)
        self.operator = operator
        self.operand = operand

        operand.set_parent(self)

    def children(self) -> List[ASTNode]:
        return [self.operand]

    def _payload(self) -> Tuple[Any, ...]:
        return (self.operator,)


class Postfix(ASTNode):
    """Unary postfix operation. No postfix operator is lexed today."""
    operator: str
    operand: ASTNode

    def __init__(self, operator: str, operand: ASTNode, location: SourceLocation):
        super().__init__(ASTNodeType.POSTFIX, location)
        self.operator = operator
        self.operand = operand

        operand.set_parent(self)

    def children(self) -> List[ASTNode]:
        return [self.operand]

    def _payload(self) -> Tuple[Any, ...]:
        return (self.operator,)


class Parenthesized(ASTNode):
    """Parenthesized sub-expression; located at the opening parenthesis."""
    inner: ASTNode

    def __init__(self, inner: ASTNode, location: SourceLocation):
        super().__init__(ASTNodeType.PARENTHESIZED, location)
        self.inner = inner

        inner.set_parent(self)

    def children(self) -> List[ASTNode]:
        return [self.inner]

    def _payload(self) -> Tuple[Any, ...]:
        return ()


# ============================================================================
# Traversal and formatting
# ============================================================================

def walk(node: ASTNode) -> Iterator[ASTNode]:
    """Yield ``node`` and its descendants in pre-order, without recursion."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children()))


class SExpressionFormatter(ASTVisitor):
    """
    Renders a tree as a compact S-expression.

    ``2+3*4`` becomes ``(+ 2 (* 3 4))``, ``-x`` becomes ``(neg x)`` and
    ``(a)`` becomes ``(group a)``. Locations are not shown.

    ``visit`` renders bottom-up with an explicit stack, so long operator
    chains do not hit the interpreter's recursion limit. Each
    ``render_<node type>`` receives the node and its rendered children.
    """

    PREFIX_NAMES = {'-': 'neg'}

    def visit(self, node: ASTNode) -> str:
        rendered: List[str] = []
        stack = [(node, False)]
        while stack:
            current, children_done = stack.pop()
            if not children_done:
                stack.append((current, True))
                stack.extend((child, False) for child in reversed(current.children()))
                continue

            count = len(current.children())
            parts = rendered[len(rendered) - count:]
            del rendered[len(rendered) - count:]
            render = getattr(self, f"render_{current.node_type.name.lower()}")
            rendered.append(render(current, parts))
        return rendered[0]

    def render_number(self, node: Number, parts: List[str]) -> str:
        return repr(node.value)

    def render_identifier(self, node: Identifier, parts: List[str]) -> str:
        return node.name

    def render_binary(self, node: Binary, parts: List[str]) -> str:
        left, right = parts
        return f"({node.operator} {left} {right})"

    def render_prefix(self, node: Prefix, parts: List[str]) -> str:
        name = self.PREFIX_NAMES.get(node.operator, node.operator)
        return f"({name} {parts[0]})"

    def render_postfix(self, node: Postfix, parts: List[str]) -> str:
        return f"(postfix{node.operator} {parts[0]})"

    def render_parenthesized(self, node: Parenthesized, parts: List[str]) -> str:
        return f"(group {parts[0]})"


def to_sexpr(node: ASTNode) -> str:
    """Render ``node`` with ``SExpressionFormatter``."""
    return node.accept(SExpressionFormatter())
