# coding: utf-8
"""
For testing the PySAT backends on parsed inputs
"""
import pytest

from combparse import parse_string
from combparse.backends.pysat_backend import (
    PseudoBooleanConstraint,
    PySATBackend,
    PySATPseudoBooleanBackend,
    PySATSolverFactory,
)
from combparse.backends.sympy_backend import SympyCspBackend
from combparse.utils.exceptions import UnsupportedConstructError
from combparse.utils.types import RelationalOperator, SolverResult


@pytest.fixture
def factory():
    return PySATSolverFactory()


def test_cnf_is_collected(factory):
    backend = parse_string("p cnf 3 2\n1 -2 0\n2 3 0\n", factory)
    assert isinstance(backend, PySATBackend)
    assert backend.to_cnf().clauses == [[1, -2], [2, 3]]


def test_sat_and_model(factory):
    backend = parse_string("p cnf 2 2\n-1 0\n1 2 0\n", factory)
    assert backend.check_sat() == SolverResult.SAT
    assert backend.model == [-1, 2]


def test_unsat(factory):
    backend = parse_string("p cnf 2 4\n1 2 0\n-1 2 0\n1 -2 0\n-1 -2 0\n", factory)
    assert backend.check_sat() == SolverResult.UNSAT
    assert backend.model is None


def test_pseudo_boolean_constraints_are_kept(factory):
    text = "* #variable= 3 #constraint= 2\n+2 x1 -1 ~x3 >= 1;\n+1 x2 = 1;\n"
    backend = parse_string(text, factory)
    assert isinstance(backend, PySATPseudoBooleanBackend)
    assert backend.constraints == [
        PseudoBooleanConstraint([1, -3], [2, -1], RelationalOperator.GE, 1),
        PseudoBooleanConstraint([2], [1], RelationalOperator.EQ, 1),
    ]


def test_coefficients_beyond_64_bits(factory):
    big = 10 ** 30
    text = f"* #variable= 2 #constraint= 1\n+{big} x1 +{big} x2 >= {2 * big};\n"
    with pytest.raises(UnsupportedConstructError, match="64|range"):
        parse_string(text, factory)

    # the largest 64-bit values are still accepted
    top = 2 ** 63 - 1
    backend = parse_string(f"* #variable= 1 #constraint= 1\n+{top} x1 >= {top};\n", factory)
    assert backend.constraints[0].degree == top


def test_constraint_without_terms(factory):
    backend = parse_string("* #variable= 1 #constraint= 2\n>= 1;\n<= 0;\n", factory)
    assert backend.to_cnf().clauses == [[]]


def test_pseudo_boolean_encoding(factory):
    pytest.importorskip("pypblib")
    text = "* #variable= 3 #constraint= 2\n+1 x1 +1 x2 +1 x3 >= 2;\n+1 x1 +1 x2 <= 0;\n"
    backend = parse_string(text, factory)
    assert backend.check_sat() == SolverResult.UNSAT

    text = "* #variable= 3 #constraint= 1\n+3 x1 +2 x2 +1 ~x3 = 3;\n"
    backend = parse_string(text, factory)
    assert backend.check_sat() == SolverResult.SAT
    x1, x2, x3 = (lit > 0 for lit in backend.model[:3])
    assert 3 * x1 + 2 * x2 + (not x3) == 3


def test_networks_go_to_sympy(factory):
    text = '<instance type="CSP"><variables><var id="x">0..1</var></variables></instance>'
    assert isinstance(parse_string(text, factory), SympyCspBackend)
