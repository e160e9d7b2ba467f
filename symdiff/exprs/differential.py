r"""@package symdiff.exprs.differential

Symbolic differentiation of terms.

differentiate() walks the term tree and builds the derivative from the
derivatives of the sub-terms using the usual rules (sum, product, quotient,
power and chain rule). The result is built using the ordinary combinators,
so constant folding and the identities described in basics apply to it
automatically and most zero branches disappear right away. The derivative is
a normal term and can be evaluated or differentiated again.

The derivative of a binding.Composition uses the generalized chain rule.
For \f$ h = f \circ (g_0, \ldots, g_{k-1}) \f$ and a variable \f$ x_m \f$,

\f[
    \partial_m h = \sum_{j<k} (\partial_j f \circ g)\, \partial_m g_j
                 + [m \geq k]\, (\partial_m f \circ g),
\f]

where the second term accounts for the slot `m` of the outer term being fed
by the caller's argument directly (see binding.pass_through_slot()).
"""

from functools import singledispatch
import logging

import numpy as np

from .numexpr import Term, ensure_term
from .constants import Constant, StaticConstant, Variable, ZERO, ONE
from .constants import dynamic, is_static, fold_unary
from .basics import Negate, Add, Sub, Mul, Div, Power
from .elementary import Sin, Cos, Exp, Log, sin, cos, exp, log
from .binding import Composition, compose, pass_through_slot


__all__ = [
    "differentiate",
    "derivative",
    "gradient",
]


logger = logging.getLogger(__name__)


def _as_variable(x):
    r"""Accept a Variable or a slot number."""
    if isinstance(x, Variable):
        return x
    if isinstance(x, Term):
        raise TypeError("Can only differentiate w.r.t. a variable, got %r." % x)
    return Variable(x)


def differentiate(term, x):
    r"""Return the derivative of `term` w.r.t. the variable `x`.

    @param term
        The term to differentiate. Numbers are treated as constants.
    @param x
        A constants.Variable or its slot number.
    """
    return _diff(ensure_term(term), _as_variable(x))


def derivative(term, x, n=1):
    r"""Return the n'th derivative of `term` w.r.t. the variable `x`."""
    if n < 0:
        raise ValueError("Derivative order must be non-negative.")
    x = _as_variable(x)
    term = ensure_term(term)
    logger.debug("Differentiating %r %d time(s) w.r.t. slot %d", term, n, x.slot)
    for _ in range(n):
        term = _diff(term, x)
    return term


def gradient(term, size=None):
    r"""Return the tuple of partial derivatives w.r.t. all variables.

    @param term
        The term to differentiate.
    @param size
        Number of variables to differentiate for. By default, the arity of
        the term is used.
    """
    term = ensure_term(term)
    if size is None:
        size = term.arity
    return tuple(_diff(term, Variable(i)) for i in range(size))


@singledispatch
def _diff(term, x):
    raise NotImplementedError(
        "Cannot differentiate a %s" % type(term).__name__
    )


@_diff.register(Constant)
def _(term, x):
    return ZERO


@_diff.register(Variable)
def _(term, x):
    return ONE if term.slot == x.slot else ZERO


@_diff.register(Negate)
def _(term, x):
    return -_diff(term.inner, x)


@_diff.register(Add)
def _(term, x):
    return _diff(term.left, x) + _diff(term.right, x)


@_diff.register(Sub)
def _(term, x):
    return _diff(term.left, x) - _diff(term.right, x)


@_diff.register(Mul)
def _(term, x):
    f, g = term.left, term.right
    return _diff(f, x) * g + f * _diff(g, x)


@_diff.register(Div)
def _(term, x):
    f, g = term.left, term.right
    g2 = g * g
    if is_static(g2) and g2.is_zero_expression():
        # A static zero here must give inf/nan instead of an error.
        g2 = dynamic(g2)
    return (_diff(f, x) * g - f * _diff(g, x)) / g2


@_diff.register(Power)
def _(term, x):
    f = term.base
    if term.has_static_exponent():
        c = term.exponent
        if c == 0:
            return ZERO
        return StaticConstant(c) * f**(c-1) * _diff(f, x)
    c = term.exponent
    if c.is_constant():
        return c * f**(c-1) * _diff(f, x)
    if f.is_constant():
        # Non-positive constant bases yield nan, not an error.
        logf = fold_unary(np.log, dynamic(f))
    else:
        logf = log(f)
    return _diff(exp(logf * c), x)


@_diff.register(Sin)
def _(term, x):
    return cos(term.inner) * _diff(term.inner, x)


@_diff.register(Cos)
def _(term, x):
    return -sin(term.inner) * _diff(term.inner, x)


@_diff.register(Exp)
def _(term, x):
    return term * _diff(term.inner, x)


@_diff.register(Log)
def _(term, x):
    return _diff(term.inner, x) / term.inner


@_diff.register(Composition)
def _(term, x):
    outer, gs = term.outer, term.bindings
    k = len(gs)
    result = ZERO
    for j, g in enumerate(gs):
        dg = _diff(g, x)
        if dg.is_zero_expression():
            continue
        result = result + compose(_diff(outer, Variable(j)), *gs) * dg
    m = pass_through_slot(x.slot, k)
    if m is not None:
        result = result + compose(_diff(outer, Variable(m)), *gs)
    return result
