"""
Tests for AST nodes and visitors.
"""

import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from shuntingyard import parse
from shuntingyard.lexer import SourceLocation
from shuntingyard.parser import (
    ASTNodeType, ASTVisitor, Binary, Identifier, Number, Parenthesized, Prefix, to_sexpr, walk
)


LOC = SourceLocation("<test>", 1, 1, 0)


class CountingVisitor(ASTVisitor):
    """Counts identifiers and numbers, descending through every other node."""

    def __init__(self):
        self.identifiers = 0
        self.numbers = 0

    def visit_number(self, node):
        self.numbers += 1

    def visit_identifier(self, node):
        self.identifiers += 1

    def generic_visit(self, node):
        for child in node.children():
            child.accept(self)


class TestASTNodes(unittest.TestCase):

    def test_node_types_and_children(self):
        a = Identifier("a", LOC)
        two = Number(2, LOC)
        tree = Binary("*", Parenthesized(Prefix("-", a, LOC), LOC), two, LOC)

        self.assertEqual(tree.node_type, ASTNodeType.BINARY)
        self.assertEqual(tree.children(), [tree.left, two])
        self.assertEqual(tree.left.node_type, ASTNodeType.PARENTHESIZED)
        self.assertIs(a.parent.parent, tree.left)

    def test_structural_equality(self):
        self.assertEqual(Number(1, LOC), Number(1, LOC))
        self.assertNotEqual(Number(1, LOC), Number(2, LOC))
        self.assertNotEqual(Number(1, LOC), Identifier("1", LOC))
        self.assertNotEqual(Prefix("-", Number(1, LOC), LOC), Parenthesized(Number(1, LOC), LOC))
        self.assertEqual(len({Number(1, LOC), Number(1, LOC)}), 1)

    def test_int_and_float_literals_differ(self):
        self.assertNotEqual(Number(1, LOC), Number(1.0, LOC))
        self.assertNotEqual(parse("1"), parse("1."))
        self.assertEqual(parse("1."), parse("1.0"))
        self.assertEqual(len({Number(2, LOC), Number(2.0, LOC)}), 2)

    def test_walk_is_pre_order(self):
        names = [node.node_type.name for node in walk(parse("(a+1)*-b"))]
        self.assertEqual(
            names,
            ["BINARY", "PARENTHESIZED", "BINARY", "IDENTIFIER", "NUMBER", "PREFIX", "IDENTIFIER"]
        )

    def test_str_and_repr(self):
        node = Binary("+", Number(1, LOC), Identifier("x", LOC), LOC)
        self.assertEqual(str(node), "Binary@<test>:1:1")
        self.assertTrue(repr(node).startswith("Binary((+ 1 x)"))

    def test_float_formatting(self):
        self.assertEqual(to_sexpr(parse("1.5e3 / .5")), "(/ 1500.0 0.5)")


class TestVisitor(unittest.TestCase):

    def test_custom_visitor(self):
        visitor = CountingVisitor()
        parse("(a + 2) * -b ^ 3").accept(visitor)

        self.assertEqual(visitor.identifiers, 2)
        self.assertEqual(visitor.numbers, 2)

    def test_missing_handler(self):
        with self.assertRaises(NotImplementedError):
            parse("1 + 2").accept(ASTVisitor())


if __name__ == '__main__':
    unittest.main()
