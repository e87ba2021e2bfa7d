# coding: utf-8
"""
Translation of intension expression trees into backend constraints.

The tree is walked in post-order: the children of an operator are translated
first, in source order, and the results are handed to the method of the
``IntensionFactory`` matching the operator.  The factory is given by the
caller, so the same translation works for every backend.
"""
from typing import Any

from combparse.utils.exceptions import StructuralMismatchError, UnsupportedConstructError
from combparse.xcsp.intension_factory import IntensionFactory
from combparse.xcsp.tree import Constant, ExpressionNode, Operator, OperatorTag, Variable

# operator tag -> name of the factory method building it
_UNARY_METHODS = {
    OperatorTag.ABS: "absolute",
    OperatorTag.NEG: "neg",
    OperatorTag.SQR: "sqr",
    OperatorTag.NOT: "negation",
}

_BINARY_METHODS = {
    OperatorTag.DIST: "dist",
    OperatorTag.DIV: "div",
    OperatorTag.MOD: "mod",
    OperatorTag.POW: "power",
    OperatorTag.SUB: "sub",
    OperatorTag.IMPLIES: "implies",
    OperatorTag.GE: "ge",
    OperatorTag.GT: "gt",
    OperatorTag.LE: "le",
    OperatorTag.LT: "lt",
    OperatorTag.NE: "ne",
}

_NARY_METHODS = {
    OperatorTag.ADD: "add",
    OperatorTag.MAX: "maximum",
    OperatorTag.MIN: "minimum",
    OperatorTag.MULT: "mult",
    OperatorTag.EQUIV: "equiv",
    OperatorTag.AND: "conjunction",
    OperatorTag.OR: "disjunction",
    OperatorTag.XOR: "parity",
    OperatorTag.EQ: "eq",
}


class IntensionTranslator:
    """Turns expression trees into objects built by an ``IntensionFactory``."""

    def __init__(self, factory: IntensionFactory):
        self.factory = factory

    def translate(self, node: ExpressionNode) -> Any:
        """
        Translate a whole tree.

        Args:
            node: The root of the tree

        Returns:
            The object built by the factory for the root

        Raises:
            UnsupportedConstructError: If an operator is not known
            StructuralMismatchError: If an operator has the wrong number of children
        """
        if isinstance(node, Constant):
            return self.factory.constant(node.value)
        if isinstance(node, Variable):
            return self.factory.variable(node.name)
        if not isinstance(node, Operator):
            raise UnsupportedConstructError(f"Unknown expression node: {node!r}")

        tag = node.tag
        if tag in _UNARY_METHODS:
            self._check_arity(node, 1)
            child = self.translate(node.children[0])
            return getattr(self.factory, _UNARY_METHODS[tag])(child)

        if tag in _BINARY_METHODS:
            self._check_arity(node, 2)
            left = self.translate(node.children[0])
            right = self.translate(node.children[1])
            return getattr(self.factory, _BINARY_METHODS[tag])(left, right)

        if tag in _NARY_METHODS:
            if len(node.children) < 2:
                raise StructuralMismatchError(
                    f"Operator `{tag.value}' expects at least 2 operands, got {len(node.children)}")
            children = [self.translate(child) for child in node.children]
            return getattr(self.factory, _NARY_METHODS[tag])(children)

        raise UnsupportedConstructError(f"Unknown operator in intension constraint: {tag!r}")

    @staticmethod
    def _check_arity(node: Operator, expected: int) -> None:
        if len(node.children) != expected:
            raise StructuralMismatchError(
                f"Operator `{node.tag.value}' expects {expected} operand(s), "
                f"got {len(node.children)}")
