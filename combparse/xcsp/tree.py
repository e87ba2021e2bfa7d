#!/usr/bin/env python3
"""
tree.py  -  expression trees of intension constraints
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple, Union

from combparse.utils.exceptions import UnsupportedConstructError


class Arity(Enum):
    """How many children an operator takes."""
    UNARY = 1
    BINARY = 2
    NARY = 3


class OperatorTag(Enum):
    """The closed set of operators allowed in intension constraints."""

    # arithmetic
    ABS = "abs"
    ADD = "add"
    DIST = "dist"
    DIV = "div"
    MAX = "max"
    MIN = "min"
    MOD = "mod"
    MULT = "mult"
    NEG = "neg"
    POW = "pow"
    SQR = "sqr"
    SUB = "sub"

    # logic
    EQUIV = "equiv"
    AND = "and"
    IMPLIES = "implies"
    NOT = "not"
    OR = "or"
    XOR = "xor"

    # comparison
    EQ = "eq"
    GE = "ge"
    GT = "gt"
    LE = "le"
    LT = "lt"
    NE = "ne"

    @property
    def arity(self) -> Arity:
        if self in _UNARY_TAGS:
            return Arity.UNARY
        if self in _BINARY_TAGS:
            return Arity.BINARY
        return Arity.NARY

    @classmethod
    def from_name(cls, name: str) -> "OperatorTag":
        """
        Get the tag of an operator from its name, accepting the XCSP3
        spellings ``mul``, ``iff`` and ``imp``.

        :raises UnsupportedConstructError: if the operator is unknown
        """
        name = _XCSP3_ALIASES.get(name, name)
        try:
            return cls(name)
        except ValueError:
            raise UnsupportedConstructError(f"Unknown operator `{name}'") from None


_UNARY_TAGS = frozenset({OperatorTag.ABS, OperatorTag.NEG, OperatorTag.SQR, OperatorTag.NOT})

_BINARY_TAGS = frozenset({
    OperatorTag.DIST, OperatorTag.DIV, OperatorTag.MOD, OperatorTag.POW, OperatorTag.SUB,
    OperatorTag.IMPLIES,
    OperatorTag.GE, OperatorTag.GT, OperatorTag.LE, OperatorTag.LT, OperatorTag.NE,
})

_XCSP3_ALIASES = {
    "mul": "mult",
    "iff": "equiv",
    "imp": "implies",
}


@dataclass(frozen=True)
class Constant:
    """An integer constant."""
    value: int


@dataclass(frozen=True)
class Variable:
    """A reference to a declared variable."""
    name: str


@dataclass(frozen=True)
class Operator:
    """An operator applied to its children, in source order."""
    tag: OperatorTag
    children: Tuple["ExpressionNode", ...]


ExpressionNode = Union[Constant, Variable, Operator]
