# coding: utf-8
"""
Backends built on PySAT.

Clauses are collected in a ``pysat.formula.CNF`` and solved with one of the
SAT oracles of ``pysat.solvers``.  Pseudo-Boolean constraints are kept as
they were read and only encoded into clauses (with ``pysat.pb.PBEnc``) when
the formula is solved or exported.  PBEnc needs the ``pypblib`` package and
only handles coefficients and degrees that fit in 64 bits; larger values are
rejected when the constraint is added.

Constraint networks are handed to the SymPy backend.
"""
import logging
from typing import List, NamedTuple, Optional

from pysat.formula import CNF
from pysat.pb import PBEnc
from pysat.solvers import Solver

from combparse.backends.base import PseudoBooleanBackend, SatBackend, SolverFactory
from combparse.backends.sympy_backend import SympyCspBackend
from combparse.global_params import global_config
from combparse.utils.exceptions import UnsupportedConstructError
from combparse.utils.types import RelationalOperator, SolverResult

logger = logging.getLogger(__name__)

# pblib works on 64-bit signed integers
_MIN_PB_VALUE = -(2 ** 63)
_MAX_PB_VALUE = 2 ** 63 - 1


class PseudoBooleanConstraint(NamedTuple):
    """``sum(coefficients[i] * literals[i]) <operator> degree``"""
    literals: List[int]
    coefficients: List[int]
    operator: RelationalOperator
    degree: int

    def holds_when_empty(self) -> bool:
        """Truth value of the constraint when it has no term."""
        if self.operator == RelationalOperator.GE:
            return self.degree <= 0
        if self.operator == RelationalOperator.LE:
            return self.degree >= 0
        return self.degree == 0


_ENCODERS = {
    RelationalOperator.GE: PBEnc.atleast,
    RelationalOperator.LE: PBEnc.atmost,
    RelationalOperator.EQ: PBEnc.equals,
}


class PySATBackend(SatBackend):
    """Collects clauses for a PySAT oracle."""

    def __init__(self, solver_name: Optional[str] = None):
        self.solver_name = solver_name or global_config.pysat_solver
        self.formula = CNF()
        self.model: Optional[List[int]] = None

    def add_clause(self, literals: List[int]) -> None:
        self.formula.append(list(literals))

    def to_cnf(self) -> CNF:
        """The clauses added so far."""
        return self.formula

    def check_sat(self) -> SolverResult:
        """Run the oracle on the formula; the model is kept in ``self.model``."""
        cnf = self.to_cnf()
        logger.debug("Solving %d clauses over %d variables with %s",
                     len(cnf.clauses), cnf.nv, self.solver_name)
        with Solver(name=self.solver_name, bootstrap_with=cnf.clauses) as solver:
            if solver.solve():
                self.model = solver.get_model()
                return SolverResult.SAT
        self.model = None
        return SolverResult.UNSAT


class PySATPseudoBooleanBackend(PySATBackend, PseudoBooleanBackend):
    """Collects pseudo-Boolean constraints, encoded to CNF on demand."""

    def __init__(self, solver_name: Optional[str] = None):
        super().__init__(solver_name)
        self.constraints: List[PseudoBooleanConstraint] = []

    def _add(self, literals: List[int], coefficients: List[int],
             operator: RelationalOperator, degree: int) -> None:
        """
        Record a constraint.

        :raises UnsupportedConstructError: if a coefficient or the degree does
            not fit in a 64-bit signed integer, the range PBEnc works with
        """
        for value in list(coefficients) + [degree]:
            if not _MIN_PB_VALUE <= value <= _MAX_PB_VALUE:
                raise UnsupportedConstructError(
                    f"Value {value} out of the range supported by the PySAT "
                    f"pseudo-Boolean encoder [{_MIN_PB_VALUE}, {_MAX_PB_VALUE}]")
        self.constraints.append(PseudoBooleanConstraint(
            list(literals), list(coefficients), operator, degree))

    def add_at_least(self, literals: List[int], coefficients: List[int], degree: int) -> None:
        self._add(literals, coefficients, RelationalOperator.GE, degree)

    def add_at_most(self, literals: List[int], coefficients: List[int], degree: int) -> None:
        self._add(literals, coefficients, RelationalOperator.LE, degree)

    def add_exactly(self, literals: List[int], coefficients: List[int], degree: int) -> None:
        self._add(literals, coefficients, RelationalOperator.EQ, degree)

    def to_cnf(self) -> CNF:
        """
        Encode the pseudo-Boolean constraints into clauses.

        Auxiliary variables are numbered after the largest variable in use.
        """
        cnf = CNF(from_clauses=self.formula.clauses)
        top_id = max([cnf.nv] + [abs(lit) for c in self.constraints for lit in c.literals])
        for constraint in self.constraints:
            if not constraint.literals:
                if not constraint.holds_when_empty():
                    cnf.append([])
                continue
            encoded = _ENCODERS[constraint.operator](lits=constraint.literals,
                                                     weights=constraint.coefficients,
                                                     bound=constraint.degree,
                                                     top_id=top_id)
            top_id = max(top_id, encoded.nv)
            cnf.extend(encoded.clauses)
        return cnf


class PySATSolverFactory(SolverFactory):
    """Creates PySAT backends; constraint networks go to SymPy."""

    def __init__(self, solver_name: Optional[str] = None):
        self.solver_name = solver_name

    def create_sat_backend(self) -> PySATBackend:
        return PySATBackend(self.solver_name)

    def create_pseudo_boolean_backend(self) -> PySATPseudoBooleanBackend:
        return PySATPseudoBooleanBackend(self.solver_name)

    def create_csp_backend(self) -> SympyCspBackend:
        return SympyCspBackend()
