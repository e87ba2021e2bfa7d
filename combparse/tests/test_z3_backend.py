# coding: utf-8
"""
For testing the Z3 backends on parsed inputs
"""
import z3

from combparse.tests import TestCase, main
from combparse import parse_string
from combparse.backends.z3_backend import (
    Z3CspBackend,
    Z3IntensionFactory,
    Z3PseudoBooleanBackend,
    Z3SatBackend,
    Z3SolverFactory,
)
from combparse.utils.exceptions import StructuralMismatchError
from combparse.utils.types import SolverResult
from combparse.xcsp.functional import read_expression
from combparse.xcsp.translator import IntensionTranslator


def xcsp(variables, constraints):
    return ('<instance format="XCSP3" type="CSP"><variables>' + variables
            + "</variables><constraints>" + constraints + "</constraints></instance>")


class TestZ3Sat(TestCase):

    def setUp(self):
        self.factory = Z3SolverFactory()

    def test_sat_cnf(self):
        backend = parse_string("p cnf 2 2\n1 -2 0\n2 0\n", self.factory)
        self.assertIsInstance(backend, Z3SatBackend)
        self.assertEqual(backend.check_sat(), SolverResult.SAT)
        self.assertEqual(backend.get_model(), [1, 2])

    def test_unsat_cnf(self):
        backend = parse_string("p cnf 1 2\n1 0\n-1 0\n", self.factory)
        self.assertEqual(backend.check_sat(), SolverResult.UNSAT)

    def test_empty_clause(self):
        backend = parse_string("p cnf 1 1\n0\n", self.factory)
        self.assertEqual(backend.check_sat(), SolverResult.UNSAT)


class TestZ3PseudoBoolean(TestCase):

    def test_at_least(self):
        text = "* #variable= 2 #constraint= 2\n+1 x1 +2 x2 >= 2;\n+1 x2 <= 0;\n"
        backend = parse_string(text, Z3SolverFactory())
        self.assertIsInstance(backend, Z3PseudoBooleanBackend)
        self.assertEqual(backend.check_sat(), SolverResult.UNSAT)

    def test_exactly_with_big_coefficients(self):
        big = 2 ** 70
        text = f"* #variable= 2 #constraint= 1\n+{big} x1 +{big} ~x2 = {big};\n"
        backend = parse_string(text, Z3SolverFactory())
        self.assertEqual(backend.check_sat(), SolverResult.SAT)
        model = backend.get_model()
        # exactly one of x1, ~x2 holds
        self.assertEqual(model[0] > 0, model[1] > 0)


class TestZ3Csp(TestCase):

    def test_solve_instance(self):
        text = xcsp('<var id="x"> 0..5 </var><var id="y"> 2 4 </var>',
                    "<intension> eq(add(x,y),7) </intension>"
                    "<intension> gt(x,y) </intension>")
        backend = parse_string(text, Z3SolverFactory())
        self.assertIsInstance(backend, Z3CspBackend)
        self.assertEqual(backend.check_sat(), SolverResult.SAT)
        self.assertEqual(backend.get_model(), {"x": 5, "y": 2})

    def test_domain_holes(self):
        text = xcsp('<var id="x"> 1 3 </var>', "<intension> eq(mod(x,2),0) </intension>")
        backend = parse_string(text, Z3SolverFactory())
        self.assertEqual(backend.check_sat(), SolverResult.UNSAT)

    def test_undeclared_variable(self):
        text = xcsp('<var id="x"> 0..1 </var>', "<intension> eq(x,z) </intension>")
        with self.assertRaises(StructuralMismatchError):
            parse_string(text, Z3SolverFactory())


class TestZ3IntensionFactory(TestCase):

    def check_valid(self, text):
        translator = IntensionTranslator(Z3IntensionFactory())
        solver = z3.Solver()
        solver.add(z3.Not(translator.translate(read_expression(text))))
        self.assertEqual(solver.check(), z3.unsat, text)

    def test_arithmetic(self):
        self.check_valid("eq(dist(3,x),abs(sub(x,3)))")
        self.check_valid("eq(pow(x,3),mul(x,x,x))")
        self.check_valid("eq(sqr(neg(x)),mul(x,x))")
        self.check_valid("eq(pow(x,0),1)")
        self.check_valid("eq(pow(2,10),1024)")
        self.check_valid("ge(max(x,y,z),min(x,y,z))")
        self.check_valid("eq(div(7,2),3)")
        self.check_valid("eq(mod(7,2),1)")

    def test_large_constant_exponent(self):
        translator = IntensionTranslator(Z3IntensionFactory())
        # built as a power term, not as a product of a billion factors
        expr = translator.translate(read_expression("pow(x,1000000000)"))
        self.assertLess(len(expr.children()), 3)

    def test_logic(self):
        self.check_valid("imp(and(a,b),or(a,c))")
        self.check_valid("iff(xor(a,b),ne(ne(a,0),ne(b,0)))")
        self.check_valid("iff(not(and(a,b)),or(not(a),not(b)))")
        self.check_valid("eq(a,a,a)")

    def test_mixed_sorts(self):
        # comparisons count as 0/1 in arithmetic, integers as "non-zero" in logic
        self.check_valid("le(add(lt(x,y),ge(x,y)),1)")
        self.check_valid("imp(and(x,eq(x,y)),y)")


if __name__ == '__main__':
    main()
