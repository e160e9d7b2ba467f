#!/usr/bin/env python3

import unittest
import sys
import math

from testutils import AlgebraTestCase
from .common import RebindingError, ConstructionError, ArityError
from .constants import Variable, constant, variables
from .elementary import sin, cos
from .binding import Composition, NamedBindingGroup
from .binding import compose, bindings, pass_through_slot, positional_bindings
from .evaluators import evaluate


class TestPassThrough(AlgebraTestCase):
    def test_pass_through_slot(self):
        self.assertEqual(pass_through_slot(3, 2), 3)
        self.assertEqual(pass_through_slot(2, 2), 2)
        self.assertIsNone(pass_through_slot(1, 2))
        self.assertEqual(pass_through_slot(0, 0), 0)
        with self.assertRaises(ValueError):
            pass_through_slot(-1, 2)

    def test_positional_bindings(self):
        x, y, z = variables(3)
        group = NamedBindingGroup({1: sin(x)})
        self.assertEqual(positional_bindings(group, 3), (x, sin(x)))
        self.assertEqual(positional_bindings(group, 1), ())
        self.assertEqual(positional_bindings(NamedBindingGroup(), 3), ())
        group = NamedBindingGroup({z: y})
        self.assertEqual(group.to_positional(3), (x, y, y))


class TestComposition(AlgebraTestCase):
    def setUp(self):
        self.x, self.y = variables(2)

    def test_nesting(self):
        x, y = self.x, self.y
        h = x*x | x + y
        self.assertIsType(h, Composition)
        self.assertAlmostEqual(evaluate(h, [1, 2]), 9)
        g = h | (x, 2*x)
        self.assertIsType(g, Composition)
        self.assertEqual(g.arity, 1)
        self.assertAlmostEqual(evaluate(g, [1]), 9)
        self.assertAlmostEqual(evaluate(g, [2]), 36)

    def test_pass_through(self):
        x, y = self.x, self.y
        f = x*y | (2*x,)
        self.assertEqual(len(f.bindings), 1)
        self.assertAlmostEqual(evaluate(f, [3, 5]), 30)
        f = compose(x*y, constant(2))
        self.assertEqual(f.slots, frozenset([1]))
        self.assertEqual(f.arity, 2)
        self.assertAlmostEqual(evaluate(f, [0, 5]), 10)
        with self.assertRaises(ArityError):
            evaluate(f, [5])

    def test_trivial(self):
        x, y = self.x, self.y
        c = constant(3)
        self.assertIs(c | {x: y}, c)
        self.assertIs(compose(c, x, y), c)
        f = x*y
        self.assertIs(f | (x, y), f)
        self.assertIs(compose(f), f)
        self.assertEqual(x | (sin(y),), sin(y))
        self.assertIs(y | sin(x), y)
        self.assertEqual((x | 3).value, 3)

    def test_str(self):
        x, y = self.x, self.y
        f = compose(x*y, sin(y))
        self.assertEqual(str(f), "(x0 * x1) | (sin(x1))")
        self.assertEqual(f.nice_name, "compose (1 bound)")

    def test_equality(self):
        x, y = self.x, self.y
        self.assertEqual(compose(x*y, sin(y)), compose(x*y, sin(y)))
        self.assertNotEqual(compose(x*y, sin(y)), compose(x*y, cos(y)))


class TestNamedBindings(AlgebraTestCase):
    def setUp(self):
        self.x, self.y = variables(2)

    def test_simultaneous(self):
        x, y = self.x, self.y
        f = (x + y) | {x: sin(y), y: x**2}
        self.assertAlmostEqual(evaluate(f, [3, 4]), math.sin(4) + 9)
        g = (x + y) | (x.bind(sin(y)), y.bind(x**2))
        self.assertEqual(f, g)
        g = (x + y) | (x.bind(sin(y)) & y.bind(x**2))
        self.assertEqual(f, g)

    def test_swap(self):
        x, y = self.x, self.y
        f = (x - y) | {x: y, y: x}
        self.assertAlmostEqual(evaluate(f, [1, 3]), 2)

    def test_partial(self):
        x, y = self.x, self.y
        f = (x * y) | {y: 3}
        self.assertAlmostEqual(evaluate(f, [2]), 6)
        f = (x * y) | y.bind(sin(x))
        self.assertAlmostEqual(evaluate(f, [2]), 2*math.sin(2))
        f = (x * y) | {x: cos(y)}
        self.assertAlmostEqual(evaluate(f, [0, 2]), 2*math.cos(2))

    def test_identity_members(self):
        x, y = self.x, self.y
        group = bindings(x, y.bind(sin(x)))
        self.assertEqual(group.slots, (0, 1))
        self.assertEqual(group[x], x)
        self.assertAlmostEqual(evaluate((x*y) | group, [2]), 2*math.sin(2))
        group = x & y.bind(3)
        self.assertIsInstance(group, NamedBindingGroup)
        self.assertEqual(len(group), 2)

    def test_rebinding(self):
        x, y = self.x, self.y
        with self.assertRaises(RebindingError):
            bindings(x.bind(1), x.bind(2))
        with self.assertRaises(RebindingError):
            x.bind(1) & x
        with self.assertRaises(ConstructionError):
            NamedBindingGroup({0: y, x: 2})
        with self.assertRaises(RebindingError):
            (x + y) | (x.bind(1), y.bind(2), x.bind(3))

    def test_invalid_keys(self):
        x, y = self.x, self.y
        with self.assertRaises(TypeError):
            NamedBindingGroup({x + y: 1})
        with self.assertRaises(TypeError):
            x.bind(1) & 5

    def test_group_protocol(self):
        x, y = self.x, self.y
        group = NamedBindingGroup({y: x*2})
        self.assertIn(y, group)
        self.assertIn(1, group)
        self.assertNotIn(x, group)
        self.assertEqual(list(group), [1])
        self.assertEqual(group.items(), [(1, x*2)])
        self.assertEqual(group, NamedBindingGroup({1: x*2}))
        self.assertEqual(hash(group), hash(NamedBindingGroup({1: x*2})))

    def test_lookup(self):
        x, y = self.x, self.y
        group = NamedBindingGroup({y: x*2})
        self.assertEqual(group.lookup(1, [3, 4]), 6)
        self.assertEqual(group.lookup(x, [3, 4]), 3)
        with self.assertRaises(ArityError):
            group.lookup(Variable(5), [3])


def run_tests():
    suite = unittest.TestLoader().loadTestsFromModule(sys.modules[__name__])
    return len(unittest.TextTestRunner(verbosity=2).run(suite).failures)


if __name__ == '__main__':
    unittest.main()
