# coding: utf-8
"""
For testing the SymPy backend
"""
import sympy

from combparse.tests import TestCase, main
from combparse import parse_string
from combparse.backends.pysat_backend import PySATSolverFactory
from combparse.backends.sympy_backend import SympyCspBackend, SympyIntensionFactory
from combparse.utils.exceptions import StructuralMismatchError
from combparse.xcsp.functional import read_expression
from combparse.xcsp.translator import IntensionTranslator

INSTANCE = """<instance format="XCSP3" type="CSP">
  <variables>
    <var id="x"> 0..9 </var>
    <array id="y" size="[2]"> 1 2 4 </array>
  </variables>
  <constraints>
    <intension> eq(add(x,y[0]),mul(2,y[1])) </intension>
    <intension> or(lt(x,3),eq(y[0],y[1])) </intension>
  </constraints>
</instance>
"""


class TestSympyCspBackend(TestCase):

    def setUp(self):
        self.backend = parse_string(INSTANCE, PySATSolverFactory())

    def test_network(self):
        self.assertIsInstance(self.backend, SympyCspBackend)
        self.assertEqual(list(self.backend.symbols), ["x", "y[0]", "y[1]"])
        self.assertEqual(self.backend.domains["y[1]"], [1, 2, 4])
        self.assertEqual(len(self.backend.constraints), 2)

    def test_evaluate(self):
        self.assertTrue(self.backend.evaluate({"x": 0, "y[0]": 2, "y[1]": 1}))
        self.assertTrue(self.backend.evaluate({"x": 4, "y[0]": 4, "y[1]": 4}))
        # second constraint violated
        self.assertFalse(self.backend.evaluate({"x": 6, "y[0]": 2, "y[1]": 4}))
        # out of domain
        self.assertFalse(self.backend.evaluate({"x": 10, "y[0]": 2, "y[1]": 6}))

    def test_incomplete_assignment(self):
        with self.assertRaises(ValueError):
            self.backend.evaluate({"x": 0})

    def test_declared_twice(self):
        with self.assertRaises(StructuralMismatchError):
            self.backend.new_variable("x", range(0, 2))


class TestSympyIntensionFactory(TestCase):

    def translate(self, text):
        return IntensionTranslator(SympyIntensionFactory()).translate(read_expression(text))

    def test_integer_symbols(self):
        expr = self.translate("add(x,1)")
        x = sympy.Symbol("x", integer=True)
        self.assertEqual(expr, x + 1)

    def test_evaluation(self):
        x, y = sympy.symbols("x y", integer=True)
        expr = self.translate("and(eq(div(x,2),3),ne(mod(x,2),0),gt(dist(x,y),max(1,2)))")
        self.assertTrue(bool(expr.subs({x: 7, y: 1})))
        self.assertFalse(bool(expr.subs({x: 6, y: 1})))
        self.assertFalse(bool(expr.subs({x: 7, y: 5})))

    def test_booleans_in_arithmetic(self):
        x = sympy.Symbol("x", integer=True)
        expr = self.translate("eq(add(gt(x,0),lt(x,0)),1)")
        self.assertTrue(bool(expr.subs({x: -3})))
        self.assertFalse(bool(expr.subs({x: 0})))


if __name__ == '__main__':
    main()
