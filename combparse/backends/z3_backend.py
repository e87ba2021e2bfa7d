# coding: utf-8
"""
Backends built on Z3.
  - Z3SatBackend: clauses over Boolean variables k!1, k!2, ...
  - Z3PseudoBooleanBackend: linear pseudo-Boolean constraints
  - Z3CspBackend: integer variables and intension constraints
  - Z3IntensionFactory: builds Z3 expressions from intension trees
"""
import functools
import logging
import operator
from typing import Dict, List, Optional, Sequence

import z3

from combparse.backends.base import CspBackend, PseudoBooleanBackend, SatBackend, SolverFactory
from combparse.utils.exceptions import StructuralMismatchError
from combparse.utils.types import SolverResult
from combparse.xcsp.intension_factory import IntensionFactory

logger = logging.getLogger(__name__)

_MAX_UNFOLDED_EXPONENT = 64


def _to_solver_result(res: z3.CheckSatResult) -> SolverResult:
    if res == z3.sat:
        return SolverResult.SAT
    if res == z3.unsat:
        return SolverResult.UNSAT
    return SolverResult.UNKNOWN


def to_int(expr: z3.ExprRef) -> z3.ArithRef:
    """A Boolean used as a number counts as 1 or 0."""
    if z3.is_bool(expr):
        return z3.If(expr, z3.IntVal(1), z3.IntVal(0))
    return expr


def to_bool(expr: z3.ExprRef) -> z3.BoolRef:
    """A number used as a Boolean means "non-zero"."""
    if z3.is_bool(expr):
        return expr
    return expr != 0


def _absolute(expr: z3.ArithRef) -> z3.ArithRef:
    return z3.If(expr >= 0, expr, -expr)


class Z3SatBackend(SatBackend):
    """Z3 solver fed with DIMACS clauses."""

    def __init__(self, logic: Optional[str] = None):
        self.int2z3var: Dict[int, z3.BoolRef] = {}
        self.solver = z3.SolverFor(logic) if logic else z3.Solver()

    def get_z3var(self, variable: int) -> z3.BoolRef:
        """
        Given an integer (labeling a Boolean var.), return its corresponding Z3 Boolean var
        """
        if variable not in self.int2z3var:
            self.int2z3var[variable] = z3.Bool(f"k!{variable}")
        return self.int2z3var[variable]

    def _literal(self, literal: int) -> z3.BoolRef:
        var = self.get_z3var(abs(literal))
        return z3.Not(var) if literal < 0 else var

    def add_clause(self, literals: List[int]) -> None:
        if not literals:
            self.solver.add(z3.BoolVal(False))
            return
        self.solver.add(z3.Or([self._literal(lit) for lit in literals]))

    def check_sat(self) -> SolverResult:
        """Check the satisfiability of the constraints added so far."""
        result = _to_solver_result(self.solver.check())
        logger.debug("Z3 answered %s", result.name)
        return result

    def get_model(self) -> List[int]:
        """
        The last model found, as DIMACS literals sorted by variable
        (only meaningful after ``check_sat`` answered SAT)
        """
        model = self.solver.model()
        return [v if z3.is_true(model.eval(self.int2z3var[v], model_completion=True)) else -v
                for v in sorted(self.int2z3var)]


class Z3PseudoBooleanBackend(Z3SatBackend, PseudoBooleanBackend):
    """Z3 solver fed with pseudo-Boolean constraints.

    Constraints are stated over integer sums so that coefficients are not
    limited to machine integers.
    """

    def _weighted_sum(self, literals: List[int], coefficients: List[int]) -> z3.ArithRef:
        if not literals:
            return z3.IntVal(0)
        return z3.Sum([z3.If(self._literal(lit), z3.IntVal(coef), z3.IntVal(0))
                       for lit, coef in zip(literals, coefficients)])

    def add_at_least(self, literals: List[int], coefficients: List[int], degree: int) -> None:
        self.solver.add(self._weighted_sum(literals, coefficients) >= z3.IntVal(degree))

    def add_at_most(self, literals: List[int], coefficients: List[int], degree: int) -> None:
        self.solver.add(self._weighted_sum(literals, coefficients) <= z3.IntVal(degree))

    def add_exactly(self, literals: List[int], coefficients: List[int], degree: int) -> None:
        self.solver.add(self._weighted_sum(literals, coefficients) == z3.IntVal(degree))


class Z3IntensionFactory(IntensionFactory):
    """Builds Z3 expressions.

    When ``variables`` is given, only the variables it contains can be
    referenced.
    """

    def __init__(self, variables: Optional[Dict[str, z3.ArithRef]] = None):
        self.variables = variables

    def constant(self, value: int) -> z3.ArithRef:
        return z3.IntVal(value)

    def variable(self, name: str) -> z3.ArithRef:
        if self.variables is None:
            return z3.Int(name)
        if name not in self.variables:
            raise StructuralMismatchError(f"Undeclared variable: {name}")
        return self.variables[name]

    def absolute(self, child):
        return _absolute(to_int(child))

    def neg(self, child):
        return -to_int(child)

    def sqr(self, child):
        child = to_int(child)
        return child * child

    def negation(self, child):
        return z3.Not(to_bool(child))

    def dist(self, left, right):
        return _absolute(to_int(left) - to_int(right))

    def div(self, left, right):
        return to_int(left) / to_int(right)

    def mod(self, left, right):
        return to_int(left) % to_int(right)

    def power(self, left, right):
        left, right = to_int(left), to_int(right)
        if z3.is_int_value(right) and 0 <= right.as_long() <= _MAX_UNFOLDED_EXPONENT:
            # unfold small constant exponents to stay in integer arithmetic
            return functools.reduce(operator.mul, [left] * right.as_long(), z3.IntVal(1))
        result = left ** right
        return z3.ToInt(result) if z3.is_real(result) else result

    def sub(self, left, right):
        return to_int(left) - to_int(right)

    def implies(self, left, right):
        return z3.Implies(to_bool(left), to_bool(right))

    def ge(self, left, right):
        return to_int(left) >= to_int(right)

    def gt(self, left, right):
        return to_int(left) > to_int(right)

    def le(self, left, right):
        return to_int(left) <= to_int(right)

    def lt(self, left, right):
        return to_int(left) < to_int(right)

    def ne(self, left, right):
        return to_int(left) != to_int(right)

    def add(self, children):
        return z3.Sum([to_int(c) for c in children])

    def maximum(self, children):
        return functools.reduce(lambda a, b: z3.If(a >= b, a, b), [to_int(c) for c in children])

    def minimum(self, children):
        return functools.reduce(lambda a, b: z3.If(a <= b, a, b), [to_int(c) for c in children])

    def mult(self, children):
        return functools.reduce(operator.mul, [to_int(c) for c in children])

    def equiv(self, children):
        return self._all_equal([to_bool(c) for c in children])

    def conjunction(self, children):
        return z3.And([to_bool(c) for c in children])

    def disjunction(self, children):
        return z3.Or([to_bool(c) for c in children])

    def parity(self, children):
        return functools.reduce(z3.Xor, [to_bool(c) for c in children])

    def eq(self, children):
        if all(z3.is_bool(c) for c in children):
            return self._all_equal(children)
        return self._all_equal([to_int(c) for c in children])

    @staticmethod
    def _all_equal(children):
        equalities = [children[0] == c for c in children[1:]]
        if len(equalities) == 1:
            return equalities[0]
        return z3.And(equalities)


class Z3CspBackend(CspBackend):
    """Z3 solver fed with integer variables and intension constraints."""

    def __init__(self, logic: Optional[str] = None):
        self.solver = z3.SolverFor(logic) if logic else z3.Solver()
        self.variables: Dict[str, z3.ArithRef] = {}
        self._factory = Z3IntensionFactory(self.variables)

    @property
    def intension_factory(self) -> Z3IntensionFactory:
        return self._factory

    def new_variable(self, identifier: str, domain: Sequence[int]) -> None:
        if identifier in self.variables:
            raise StructuralMismatchError(f"Variable declared twice: {identifier}")
        var = z3.Int(identifier)
        self.variables[identifier] = var
        if isinstance(domain, range) and domain.step == 1:
            if len(domain) == 0:
                self.solver.add(z3.BoolVal(False))
            else:
                self.solver.add(var >= domain.start, var <= domain.stop - 1)
        else:
            self.solver.add(z3.Or([var == v for v in domain]) if domain else z3.BoolVal(False))

    def add_intension(self, constraint: z3.ExprRef) -> None:
        self.solver.add(to_bool(constraint))

    def check_sat(self) -> SolverResult:
        """Check the satisfiability of the constraints added so far."""
        result = _to_solver_result(self.solver.check())
        logger.debug("Z3 answered %s", result.name)
        return result

    def get_model(self) -> Dict[str, int]:
        """The value of every variable in the last model found."""
        model = self.solver.model()
        return {name: model.eval(var, model_completion=True).as_long()
                for name, var in self.variables.items()}


class Z3SolverFactory(SolverFactory):
    """Creates Z3 backends for every format."""

    def __init__(self, logic: Optional[str] = None):
        self.logic = logic

    def create_sat_backend(self) -> Z3SatBackend:
        return Z3SatBackend(self.logic)

    def create_pseudo_boolean_backend(self) -> Z3PseudoBooleanBackend:
        return Z3PseudoBooleanBackend(self.logic)

    def create_csp_backend(self) -> Z3CspBackend:
        return Z3CspBackend(self.logic)
