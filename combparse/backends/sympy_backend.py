# coding: utf-8
"""
Symbolic constraint networks with SymPy.

The network is not solved: it is kept as SymPy expressions that can be
inspected, simplified or evaluated under an assignment.
"""
import logging
from typing import Dict, List, Mapping, Optional, Sequence

import sympy
from sympy.logic.boolalg import Boolean

from combparse.backends.base import CspBackend
from combparse.utils.exceptions import StructuralMismatchError
from combparse.xcsp.intension_factory import IntensionFactory

logger = logging.getLogger(__name__)


def to_int(expr):
    if isinstance(expr, Boolean):
        return sympy.Piecewise((1, expr), (0, True))
    return expr


def to_bool(expr):
    if isinstance(expr, Boolean):
        return expr
    return sympy.Ne(expr, 0)


class SympyIntensionFactory(IntensionFactory):
    """Builds SymPy expressions over integer symbols.

    Integer division rounds towards minus infinity.
    """

    def __init__(self, symbols: Optional[Dict[str, sympy.Symbol]] = None):
        self.symbols = symbols

    def constant(self, value):
        return sympy.Integer(value)

    def variable(self, name):
        if self.symbols is None:
            return sympy.Symbol(name, integer=True)
        if name not in self.symbols:
            raise StructuralMismatchError(f"Undeclared variable: {name}")
        return self.symbols[name]

    def absolute(self, child):
        return sympy.Abs(to_int(child))

    def neg(self, child):
        return -to_int(child)

    def sqr(self, child):
        return to_int(child) ** 2

    def negation(self, child):
        return sympy.Not(to_bool(child))

    def dist(self, left, right):
        return sympy.Abs(to_int(left) - to_int(right))

    def div(self, left, right):
        return sympy.floor(to_int(left) / to_int(right))

    def mod(self, left, right):
        return sympy.Mod(to_int(left), to_int(right))

    def power(self, left, right):
        return to_int(left) ** to_int(right)

    def sub(self, left, right):
        return to_int(left) - to_int(right)

    def implies(self, left, right):
        return sympy.Implies(to_bool(left), to_bool(right))

    def ge(self, left, right):
        return sympy.Ge(to_int(left), to_int(right))

    def gt(self, left, right):
        return sympy.Gt(to_int(left), to_int(right))

    def le(self, left, right):
        return sympy.Le(to_int(left), to_int(right))

    def lt(self, left, right):
        return sympy.Lt(to_int(left), to_int(right))

    def ne(self, left, right):
        return sympy.Ne(to_int(left), to_int(right))

    def add(self, children):
        return sympy.Add(*[to_int(c) for c in children])

    def maximum(self, children):
        return sympy.Max(*[to_int(c) for c in children])

    def minimum(self, children):
        return sympy.Min(*[to_int(c) for c in children])

    def mult(self, children):
        return sympy.Mul(*[to_int(c) for c in children])

    def equiv(self, children):
        return sympy.Equivalent(*[to_bool(c) for c in children])

    def conjunction(self, children):
        return sympy.And(*[to_bool(c) for c in children])

    def disjunction(self, children):
        return sympy.Or(*[to_bool(c) for c in children])

    def parity(self, children):
        return sympy.Xor(*[to_bool(c) for c in children])

    def eq(self, children):
        if all(isinstance(c, Boolean) for c in children):
            return sympy.Equivalent(*children)
        values = [to_int(c) for c in children]
        return sympy.And(*[sympy.Eq(values[0], v) for v in values[1:]])


class SympyCspBackend(CspBackend):
    """A constraint network kept as SymPy expressions."""

    def __init__(self):
        self.symbols: Dict[str, sympy.Symbol] = {}
        self.domains: Dict[str, Sequence[int]] = {}
        self.constraints: List[Boolean] = []
        self._factory = SympyIntensionFactory(self.symbols)

    @property
    def intension_factory(self) -> SympyIntensionFactory:
        return self._factory

    def new_variable(self, identifier: str, domain: Sequence[int]) -> None:
        if identifier in self.symbols:
            raise StructuralMismatchError(f"Variable declared twice: {identifier}")
        self.symbols[identifier] = sympy.Symbol(identifier, integer=True)
        self.domains[identifier] = domain

    def add_intension(self, constraint) -> None:
        self.constraints.append(to_bool(constraint))

    def evaluate(self, assignment: Mapping[str, int]) -> bool:
        """
        Check whether an assignment satisfies the network.

        :param assignment: a value for every variable
        :return: True iff every value is in its domain and every constraint holds
        :raises ValueError: if a variable is missing or unknown
        """
        if set(assignment) != set(self.symbols):
            missing = sorted(set(self.symbols) - set(assignment))
            unknown = sorted(set(assignment) - set(self.symbols))
            raise ValueError(f"Assignment mismatch (missing: {missing}, unknown: {unknown})")

        for name, value in assignment.items():
            if value not in self.domains[name]:
                logger.debug("Value %d out of the domain of %s", value, name)
                return False

        substitution = {self.symbols[name]: value for name, value in assignment.items()}
        return all(bool(c.subs(substitution)) for c in self.constraints)
