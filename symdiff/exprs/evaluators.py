r"""@package symdiff.exprs.evaluators

Evaluators turning numexpr.Term trees into callables.

Users of the term system usually don't need to deal with how evaluators are
implemented. They are light-weight objects created by numexpr.Term.evaluator()
which, upon creation, build the evaluation callables of all sub-terms once.
Evaluating is then just a sequence of nested function calls.

Arithmetic is performed using NumPy operations, so that division by zero or
the logarithm of negative values produce `inf` and `nan` instead of raising
(see settings.Settings.numeric_errors). This also means the arguments may be
NumPy arrays, which evaluates the term element-wise for all of them.
"""

import logging

import numpy as np

from ..settings import Settings
from ..utils import parallel_compute
from .common import ArityError, is_number
from .numexpr import ensure_term


__all__ = [
    "TermEvaluator",
    "evaluate",
    "evaluate_many",
]


logger = logging.getLogger(__name__)


def _as_args(args):
    r"""Convert the supported argument list forms to an indexable sequence.

    A single number is interpreted as a one-element argument list. NumPy
    arrays are kept as they are, so that ``args[i]`` may be a whole array of
    values for the i'th variable.
    """
    if isinstance(args, np.ndarray):
        if args.ndim == 0:
            return (args[()],)
        return args
    if is_number(args):
        return (args,)
    return tuple(args)


def _slot_of(x):
    r"""Return the slot number of a variable or slot given as integer."""
    from .constants import Variable
    if isinstance(x, Variable):
        return x.slot
    return int(x)


class TermEvaluator(object):
    r"""Callable evaluating a term and its derivatives.

    The derivative terms requested via diff() or function() are computed once
    and stored together with their evaluators, so evaluating e.g. the second
    derivative at many points only differentiates the term twice.

    @b Examples

    ```
        x, y = variables(2)
        ev = (x*y**2).evaluator()
        ev([2, 3])              # 18
        ev.diff([2, 3], y)      # 12
        ev.diff([2, 3], y, n=2) # 4
    ```
    """
    def __init__(self, term):
        r"""Create an evaluator for the given term (or number)."""
        term = ensure_term(term)
        ## The term this evaluator was created for.
        self._term = term
        self._arity = term.arity
        self._f = term._evaluator()
        self._derivs = dict()
        logger.debug("Created evaluator for %r (arity %d)", term, self._arity)

    @property
    def term(self):
        r"""The term evaluated by this evaluator."""
        return self._term

    @property
    def arity(self):
        r"""Minimum number of arguments needed for evaluation."""
        return self._arity

    def check_arity(self, args):
        r"""Raise an ArityError if there are too few arguments."""
        if len(args) < self._arity:
            raise ArityError(
                "Term %s needs %d argument(s), got %d."
                % (self._term, self._arity, len(args))
            )

    def __call__(self, args=()):
        r"""Evaluate the term for the given positional argument list."""
        args = _as_args(args)
        if Settings.check_arity:
            self.check_arity(args)
        with np.errstate(all=Settings.numeric_errors):
            return self._f(args)

    def derivative_evaluator(self, x=0, n=1):
        r"""Return the evaluator of the n'th derivative w.r.t. variable `x`."""
        if n < 0:
            raise ValueError("Derivative order must be non-negative.")
        if n == 0:
            return self
        slot = _slot_of(x)
        key = (slot, n)
        try:
            return self._derivs[key]
        except KeyError:
            pass
        from .differential import differentiate
        logger.debug("Computing derivative %d w.r.t. slot %d of %r", n, slot, self._term)
        prev = self.derivative_evaluator(slot, n-1)
        ev = TermEvaluator(differentiate(prev.term, slot))
        self._derivs[key] = ev
        return ev

    def diff(self, args, x=0, n=1):
        r"""Evaluate the n'th derivative w.r.t. variable `x` for the given arguments."""
        return self.derivative_evaluator(x, n)(args)

    def function(self, x=0, n=0):
        r"""Return a callable for the n'th derivative w.r.t. variable `x`."""
        ev = self.derivative_evaluator(x, n)
        return lambda args: ev(args)


class _TermCall(object):
    r"""Picklable callable evaluating a term, used for parallel evaluation."""

    def __init__(self, term):
        self._term = term
        self._ev = None

    def __getstate__(self):
        return dict(_term=self._term, _ev=None)

    def __call__(self, args):
        if self._ev is None:
            self._ev = TermEvaluator(self._term)
        return self._ev(args)


def evaluate(term, args=()):
    r"""Evaluate a term for the positional argument list `args`.

    This is a convenience for ``term.evaluator()(args)``. If the term is to be
    evaluated many times, create and keep an evaluator instead.

    @param term
        The term to evaluate. Plain numbers are accepted too.
    @param args
        Sequence of argument values, where ``args[i]`` is the value of the
        variable with slot `i`. Too few values raise a common.ArityError.
    """
    return TermEvaluator(term)(args)


def evaluate_many(term, arg_list, processes=None):
    r"""Evaluate a term for each argument list in `arg_list`.

    @param term
        The term to evaluate.
    @param arg_list
        Iterable of argument lists.
    @param processes
        Number of processes to evaluate in parallel. Defaults to
        settings.Settings.processes, where `None` means evaluating in the
        current process.

    @return List of results in the order of `arg_list`.
    """
    if processes is None:
        processes = Settings.processes
    if processes is None:
        processes = 1
    return parallel_compute(_TermCall(ensure_term(term)), arg_list,
                            processes=processes)
