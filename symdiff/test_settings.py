#!/usr/bin/env python3

import unittest
import sys
import tempfile
import os.path as op

from testutils import AlgebraTestCase
from .settings import Settings, load_settings
from .exprs import variables, evaluate


class TestSettingsOverride(AlgebraTestCase):
    def test_override(self):
        self.assertEqual(Settings.numeric_errors, "ignore")
        with Settings.override(numeric_errors="raise", processes=2):
            self.assertEqual(Settings.numeric_errors, "raise")
            self.assertEqual(Settings.processes, 2)
        self.assertEqual(Settings.numeric_errors, "ignore")
        self.assertIsNone(Settings.processes)

    def test_restore_on_error(self):
        with self.assertRaises(KeyError):
            with Settings.override(check_arity=False):
                raise KeyError("foo")
        self.assertTrue(Settings.check_arity)

    def test_invalid(self):
        with self.assertRaises(ValueError):
            Settings.update(numeric_errors="explode")
        with self.assertRaises(TypeError):
            Settings.update(foo=1)
        self.assertEqual(Settings.numeric_errors, "ignore")

    def test_numeric_errors(self):
        x, y = variables(2)
        with Settings.override(numeric_errors="raise"):
            with self.assertRaises(FloatingPointError):
                evaluate(x/y, [1.0, 0.0])
        self.assertEqual(evaluate(x/y, [1.0, 0.0]), float('inf'))


class TestLoadSettings(AlgebraTestCase):
    def test_load(self):
        with tempfile.TemporaryDirectory() as tmp, Settings.override():
            fname = op.join(tmp, "config.cfg")
            with open(fname, "w") as f:
                f.write("[symdiff]\n"
                        "numeric_errors = warn\n"
                        "check_arity = no\n"
                        "processes = 3\n")
            mine = op.join(tmp, "config.mine.cfg")
            with open(mine, "w") as f:
                f.write("[symdiff]\nprocesses = none\n")
            found = load_settings(fname, mine, op.join(tmp, "missing.cfg"))
            self.assertEqual(found, [fname, mine])
            self.assertEqual(Settings.numeric_errors, "warn")
            self.assertFalse(Settings.check_arity)
            self.assertIsNone(Settings.processes)
        self.assertEqual(Settings.numeric_errors, "ignore")
        self.assertTrue(Settings.check_arity)

    def test_other_sections(self):
        with tempfile.TemporaryDirectory() as tmp, Settings.override():
            fname = op.join(tmp, "config.cfg")
            with open(fname, "w") as f:
                f.write("[other]\nnumeric_errors = raise\n")
            self.assertEqual(load_settings(fname), [fname])
            self.assertEqual(Settings.numeric_errors, "ignore")


def run_tests():
    suite = unittest.TestLoader().loadTestsFromModule(sys.modules[__name__])
    return len(unittest.TextTestRunner(verbosity=2).run(suite).failures)


if __name__ == '__main__':
    unittest.main()
