#!/usr/bin/env python3

import unittest
import sys

from testutils import AlgebraTestCase
from .constants import StaticConstant, DynamicConstant, ZERO, ONE
from .constants import constant, dynamic, variables
from .basics import Negate, Add, Sub, Mul, Div, Power
from .basics import add, mul, power
from .elementary import sin, log
from .evaluators import evaluate


class TestIdentities(AlgebraTestCase):
    def setUp(self):
        self.x, self.y = variables(2)

    def test_add(self):
        x = self.x
        self.assertIs(x + 0, x)
        self.assertIs(0 + x, x)
        self.assertIs(x + ZERO, x)
        self.assertIs(add(constant(0), x), x)
        self.assertIs(x - 0, x)
        self.assertIsType(0 - x, Sub)

    def test_mul(self):
        x = self.x
        self.assertIs(x * ZERO, ZERO)
        self.assertIs(ZERO * x, ZERO)
        self.assertTrue((x * 0).is_zero_expression())
        self.assertIsType(x * 0, DynamicConstant)
        self.assertIs(x * 1, x)
        self.assertIs(ONE * x, x)
        self.assertIs(mul(x, constant(1)), x)

    def test_div(self):
        x, y = self.x, self.y
        self.assertIs(ZERO / x, ZERO)
        self.assertIs(x / 1, x)
        self.assertIsType(x / ZERO, Div)
        self.assertIsType(1 / x, Div)

    def test_power(self):
        x = self.x
        self.assertIs(x**0, ONE)
        self.assertIs(x**1, x)
        self.assertIs(x**constant(1), x)
        self.assertIs(power(x, dynamic(0)), ONE)
        p = x**2
        self.assertIsType(p, Power)
        self.assertTrue(p.has_static_exponent())
        self.assertEqual(p.exponent, 2)
        p = x**constant(3)
        self.assertTrue(p.has_static_exponent())
        self.assertEqual(p.exponent, 3)
        p = x**2.5
        self.assertFalse(p.has_static_exponent())
        self.assertTrue(p.has_constant_exponent())
        self.assertFalse((x**self.y).has_constant_exponent())

    def test_same_variable(self):
        x, y = self.x, self.y
        self.assertIs(x - x, ZERO)
        self.assertIs(x / x, ONE)
        self.assertIsType(x - y, Sub)
        self.assertIsType(x / y, Div)
        # Only variables are recognized, not general terms.
        self.assertIsType((x + y) - (x + y), Sub)

    def test_no_canonicalization(self):
        x, y = self.x, self.y
        self.assertIsType(x + x, Add)
        self.assertNotEqual(x + y, y + x)
        self.assertIsType(x * x, Mul)

    def test_negate(self):
        x = self.x
        self.assertIsType(-x, Negate)
        self.assertIs(+x, x)
        c = -dynamic(2)
        self.assertIsType(c, DynamicConstant)
        self.assertEqual(c.value, -2)
        self.assertEqual(evaluate(-x, [3]), -3)


class TestArithmetic(AlgebraTestCase):
    def setUp(self):
        self.x, self.y = variables(2)

    def test_evaluate(self):
        x, y = self.x, self.y
        self.assertEqual(evaluate(x*y + 3, [2, 5]), 13)
        self.assertAlmostEqual(evaluate(x/y - 1, [3, 4]), -0.25)
        self.assertAlmostEqual(evaluate(x**y, [2, 3]), 8)
        self.assertAlmostEqual(evaluate(2**x, [3]), 8)
        self.assertAlmostEqual(evaluate(x**2.5, [4]), 32)
        self.assertAlmostEqual(evaluate(x**-2, [2]), 0.25)
        self.assertAlmostEqual(evaluate((x + y)**2 - x, [1, 2]), 8)

    def test_numpy_scalars(self):
        import numpy as np
        x = self.x
        f = np.float64(2.0) * x
        self.assertIsType(f, Mul)
        self.assertAlmostEqual(evaluate(f, [3]), 6)
        self.assertIsType(np.int64(2) + constant(1), DynamicConstant)

    def test_ieee(self):
        x, y = self.x, self.y
        self.assertEqual(evaluate(x / y, [1.0, 0.0]), float('inf'))
        self.assertEqual(evaluate(x / y, [-1.0, 0.0]), -float('inf'))
        self.assertNan(evaluate(x / y, [0.0, 0.0]))
        self.assertEqual(evaluate(x / ZERO, [1]), float('inf'))
        self.assertNan(evaluate(log(x), [-1.0]))
        self.assertEqual(evaluate(log(x), [0.0]), -float('inf'))

    def test_str(self):
        x, y = self.x, self.y
        self.assertEqual(str(x + y), "x0 + x1")
        self.assertEqual(str(x * (y + 1)), "x0 * (x1 + 1)")
        self.assertEqual(str(x**2), "x0 ** 2")
        self.assertEqual(str(-x), "-x0")
        self.assertEqual(repr(x / y), "<Div(x0 / x1)>")
        self.assertEqual(str(sin(x) - y), "sin(x0) - x1")

    def test_slots(self):
        x, y = self.x, self.y
        self.assertEqual((x * y + 3).slots, frozenset([0, 1]))
        self.assertEqual((y * 2).arity, 2)
        self.assertEqual(constant(3).arity, 0)

    def test_names(self):
        x, y = self.x, self.y
        self.assertEqual((x + y).name, "add")
        self.assertEqual((x * y).nice_name, "mult (left * right)")
        self.assertEqual((x**3).nice_name, "pow (^3)")


def run_tests():
    suite = unittest.TestLoader().loadTestsFromModule(sys.modules[__name__])
    return len(unittest.TextTestRunner(verbosity=2).run(suite).failures)


if __name__ == '__main__':
    unittest.main()
