#!/usr/bin/env python3

import unittest
import sys

import sympy as sp

from testutils import AlgebraTestCase
from .constants import constant, dynamic, variables
from .elementary import sin, cos, exp, log
from .binding import compose
from .evaluators import evaluate
from .differential import differentiate
from .printing import to_sympy, latex


class TestToSympy(AlgebraTestCase):
    def setUp(self):
        self.x, self.y = variables(2)
        self.x0, self.x1 = sp.symbols("x0 x1")

    def test_basic(self):
        x, y, x0, x1 = self.x, self.y, self.x0, self.x1
        self.assertEqual(to_sympy(sin(x) * y**2), sp.sin(x0) * x1**2)
        self.assertEqual(to_sympy(x*y + 3), x0*x1 + 3)
        self.assertEqual(to_sympy(exp(x) / log(y)), sp.exp(x0) / sp.log(x1))
        self.assertEqual(to_sympy(-cos(x)), -sp.cos(x0))
        self.assertEqual(to_sympy(x**y - x), x0**x1 - x0)
        self.assertEqual(to_sympy(constant(2)), sp.Integer(2))
        self.assertEqual(to_sympy(dynamic(2.5)), sp.Float(2.5))

    def test_composition(self):
        x, y, x0, x1 = self.x, self.y, self.x0, self.x1
        self.assertEqual(to_sympy(x*y | (sin(x),)), sp.sin(x0) * x1)
        self.assertEqual(to_sympy((x - y) | {x: y, y: x}), x1 - x0)
        self.assertEqual(to_sympy((x + y) | {x: sin(y), y: x**2}),
                         sp.sin(x1) + x0**2)

    def test_symbols(self):
        x, y = self.x, self.y
        a, b = sp.symbols("a b")
        self.assertEqual(to_sympy(x + y, symbols=(a, b)), a + b)
        self.assertEqual(to_sympy(x + y, symbols=(a,)), a + self.x1)

    def test_latex(self):
        x, y = self.x, self.y
        self.assertEqual(latex(x / y), r"\frac{x_{0}}{x_{1}}")


class TestDerivativesAgainstSympy(AlgebraTestCase):
    def setUp(self):
        self.x, self.y = variables(2)

    def _check(self, term, pt, places=10):
        syms = sp.symbols("x0 x1")
        expr = to_sympy(term, symbols=syms)
        values = dict(zip(syms, pt))
        for i, sym in enumerate(syms):
            expected = float(sp.diff(expr, sym).subs(values).evalf())
            self.assertAlmostEqual(
                evaluate(differentiate(term, i), pt), expected, places=places
            )

    def test_elementary(self):
        x, y = self.x, self.y
        pt = [.7, 1.3]
        self._check(exp(x*y) / (1 + x**2), pt)
        self._check(log(x + y**2) * sin(y), pt)
        self._check(x**y, pt)
        self._check(cos(x)**3 - 2/y, pt)

    def test_compositions(self):
        x, y = self.x, self.y
        pt = [.7, 1.3]
        self._check(compose(x*x, x + y), pt)
        self._check(compose(compose(x*x, x + y), x, 2*x), pt)
        self._check((x**2 * sin(y)) | {x: exp(y), y: x*y}, pt)
        self._check((x / y) | (cos(y),), pt)


def run_tests():
    suite = unittest.TestLoader().loadTestsFromModule(sys.modules[__name__])
    return len(unittest.TextTestRunner(verbosity=2).run(suite).failures)


if __name__ == '__main__':
    unittest.main()
