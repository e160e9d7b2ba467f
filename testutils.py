r"""@package testutils

Common base class and decorators for the unit tests of symdiff.

All test cases derive from AlgebraTestCase, which respects the options in
TestSettings (set by the `tests.py` runner) and adds a few assertions for
terms and numerical results.

Tests decorated with slowtest are skipped unless `TestSettings.skipslow` is
set to `False` (e.g. by running `tests.py -s`).
"""

import sys
import functools
import unittest
import time

import numpy as np


__all__ = [
    "AlgebraTestCase",
    "TestSettings",
    "slowtest",
]


def slowtest(func):
    """Decorator for skipping a test if TestSettings.skipslow is true."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        if TestSettings.skipslow:
            raise unittest.SkipTest("skipping slow tests")
        return func(*args, **kwargs)
    return wrapper


class AlgebraTestCase(unittest.TestCase):
    """Base class for the symdiff unit tests.

    Compared to `unittest.TestCase`, this class
        * prints the duration of each test if TestSettings.timing is true
          (needs `verbosity=2`)
        * calls failureHook() after a test failed or errored, but before
          tearDown() runs
    """
    @classmethod
    def setUpClass(cls):
        if cls is AlgebraTestCase:
            return
        # Make sure our own setUp()/tearDown() run even if overridden.
        for name in ("setUp", "tearDown"):
            own = getattr(AlgebraTestCase, name)
            method = getattr(cls, name)
            if method is own or getattr(method, "_wraps_base", False):
                continue
            setattr(cls, name, cls._chain(own, method))

    @staticmethod
    def _chain(base, method):
        @functools.wraps(method)
        def wrapper(self, *args, **kwargs):
            base(self)
            return method(self, *args, **kwargs)
        wrapper._wraps_base = True
        return wrapper

    def run(self, result=None):
        self.__result = result
        self.__counts = self.__count_results()
        return unittest.TestCase.run(self, result)

    def __count_results(self):
        r = self.__result
        # Runners other than unittest (e.g. pytest) may pass other objects.
        if r is None or not hasattr(r, "errors"):
            return (0, 0, 0)
        return (len(r.errors), len(r.failures), len(getattr(r, "skipped", ())))

    def __succeeded(self):
        errors, failures, _ = self.__count_results()
        return errors == self.__counts[0] and failures == self.__counts[1]

    def __skipped(self):
        return self.__count_results()[2] > self.__counts[2]

    def __print_timing(self):
        if not TestSettings.timing or self.__skipped() or not self.__succeeded():
            return False
        r = self.__result
        return r is None or (getattr(r, "showAll", False) and not getattr(r, "dots", True))

    def setUp(self):
        self.startTime = time.time()
        self.__done = False

    def tearDown(self):
        if self.__done:
            return
        self.__done = True
        if not self.__succeeded():
            self.failureHook(self.__result)
        if self.__print_timing():
            print("(%.4f seconds) ... " % (time.time() - self.startTime),
                  file=sys.stderr, end='')

    def failureHook(self, result):
        r"""Called right after a failure/error, before tearDown() runs.

        Override this e.g. to keep generated files for inspection.
        """
        pass

    def assertIsType(self, obj, cls):
        r"""Assert that an object is exactly of a certain type."""
        self.assertIs(type(obj), cls)

    def assertTermEqual(self, first, second, msg=None):
        r"""Assert that two terms are structurally equal, showing both on failure."""
        if first != second:
            raise self.failureException(
                msg or "Terms differ: %s != %s" % (first, second)
            )

    def assertNan(self, value):
        r"""Assert that a (NumPy) number is `nan`."""
        if not np.isnan(value):
            raise self.failureException("%r is not nan" % (value,))

    def assertListAlmostEqual(self, a, b, places=None, delta=None):
        r"""Assert that two sequences contain (almost) the same values."""
        if places is not None and delta is not None:
            raise TypeError("Cannot use delta and places at the same time")
        if places is None and delta is None:
            places = 7
        if len(a) != len(b):
            raise self.failureException(
                "Lists have different lengths (%d != %d)" % (len(a), len(b))
            )
        def _differ(u, v):
            if u == v:
                return False
            if delta is not None:
                return abs(u - v) > delta
            return round(abs(u - v), places) != 0
        fails = [i for i in range(len(a)) if _differ(a[i], b[i])]
        if fails:
            lines = ["  [%d] %s != %s    (difference: %s)" % (i, a[i], b[i], b[i]-a[i])
                     for i in fails[:9]]
            raise self.failureException(
                "%d elements differ.\n%s:\n%s" % (
                    len(fails),
                    "Differing elements" if len(fails) <= 9 else "First few differing elements",
                    "\n".join(lines),
                )
            )


class TestSettings(object):
    """Global settings for tests."""
    ## Stop test run on first fail/error.
    failfast = False
    ## Whether output is buffered (informational only).
    buffering = False
    ## Whether the timing for each test case should be printed.
    timing = False
    ## Control whether tests marked as slowtest should be skipped.
    skipslow = True
