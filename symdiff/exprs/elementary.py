r"""@package symdiff.exprs.elementary

Sine, cosine, exponential and natural logarithm of terms.

Applied to a constant, the functions sin(), cos(), exp() and log() return a
constant of the same flavor. The logarithm of a non-positive static constant
is rejected with a common.ConstructionError, while for dynamic constants and
during evaluation it produces `-inf` or `nan`.
"""

import numpy as np

from .common import _construction_error
from .numexpr import Term, ensure_term
from .constants import fold_unary


__all__ = [
    "UnaryTranscendental",
    "Sin",
    "Cos",
    "Exp",
    "Log",
    "sin",
    "cos",
    "exp",
    "log",
]


class UnaryTranscendental(Term):
    r"""Base class for an elementary function applied to a term.

    Child classes set `kind` and the NumPy function `_func`.
    """
    ## Name of the function, e.g. ``'sin'``.
    kind = None

    def __init__(self, inner, name=None):
        self._inner = inner
        super(UnaryTranscendental, self).__init__(
            name=name if name else self.kind, inner=inner
        )

    @property
    def inner(self):
        r"""The argument of the function."""
        return self._inner

    def _expr_str(self):
        inner = self._inner.str()
        if not inner.startswith("("):
            inner = "(%s)" % inner
        return "%s%s" % (self.kind, inner)

    def str(self):
        return self._expr_str()

    def _key(self):
        return (self._inner,)

    def _evaluator(self):
        f = self._inner._evaluator()
        func = self._func
        return lambda args: func(f(args))


class Sin(UnaryTranscendental):
    r"""Sine \f$ \sin(f) \f$."""
    kind = 'sin'
    _func = staticmethod(np.sin)


class Cos(UnaryTranscendental):
    r"""Cosine \f$ \cos(f) \f$."""
    kind = 'cos'
    _func = staticmethod(np.cos)


class Exp(UnaryTranscendental):
    r"""Exponential \f$ e^f \f$."""
    kind = 'exp'
    _func = staticmethod(np.exp)


class Log(UnaryTranscendental):
    r"""Natural logarithm \f$ \ln(f) \f$."""
    kind = 'log'
    _func = staticmethod(np.log)


def _build(cls, f, validate=None):
    f = ensure_term(f)
    if f.is_constant():
        return fold_unary(cls._func, f, validate=validate)
    return cls(f)


def sin(f):
    r"""Return the term `sin(f)`."""
    return _build(Sin, f)


def cos(f):
    r"""Return the term `cos(f)`."""
    return _build(Cos, f)


def exp(f):
    r"""Return the term `exp(f)`."""
    return _build(Exp, f)


def _check_log_argument(value):
    if not value > 0:
        raise _construction_error("Logarithm of non-positive static constant %r.", value)


def log(f):
    r"""Return the term `log(f)` (natural logarithm)."""
    return _build(Log, f, validate=_check_log_argument)
