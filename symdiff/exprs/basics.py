r"""@package symdiff.exprs.basics

Arithmetic terms and the combinators building them.

The combinators negate(), add(), sub(), mul(), div() and power() (used by
the Python operators of numexpr.Term) never build a node blindly. They first
fold constants and then apply the following identities, where `0` and `1`
denote constants of either flavor:

    f + 0 = 0 + f = f       f - 0 = f
    f * 0 = 0 * f = 0       f * 1 = 1 * f = f
    0 / f = 0               f / 1 = f
    f ^ 0 = 1               f ^ 1 = f

In addition, `x - x = 0` and `x / x = 1` for the same variable `x`. No
further canonicalization (like collecting polynomial terms) is done.
"""

import numbers

import numpy as np

from .numexpr import Term, ensure_term
from .constants import Constant, Variable, StaticConstant, ONE, ZERO
from .constants import fold_binary


__all__ = [
    "Negate",
    "BinaryOp",
    "Add",
    "Sub",
    "Mul",
    "Div",
    "Power",
    "negate",
    "add",
    "sub",
    "mul",
    "div",
    "power",
]


class Negate(Term):
    r"""Negation of another term, \f$ f(\mathbf{x}) = -g(\mathbf{x}) \f$."""
    def __init__(self, inner, name='neg'):
        self._inner = inner
        super(Negate, self).__init__(name=name, inner=inner)

    @property
    def inner(self):
        r"""The negated term."""
        return self._inner

    def _expr_str(self):
        return "-%s" % self._inner.str()

    def _key(self):
        return (self._inner,)

    def _evaluator(self):
        f = self._inner._evaluator()
        return lambda args: -f(args)


class BinaryOp(Term):
    r"""Base class for the four arithmetic operations on two terms.

    Child classes set the `kind` class attribute and implement _apply().
    """
    ## Operator symbol, one of ``'+', '-', '*', '/'``.
    kind = None

    def __init__(self, left, right, name=None):
        self._left = left
        self._right = right
        super(BinaryOp, self).__init__(name=name, left=left, right=right)

    @property
    def left(self):
        r"""Left operand."""
        return self._left

    @property
    def right(self):
        r"""Right operand."""
        return self._right

    @property
    def nice_name(self):
        return "%s (left %s right)" % (self.name, self.kind)

    def _expr_str(self):
        return "%s %s %s" % (self._left.str(), self.kind, self._right.str())

    def _key(self):
        return (self._left, self._right)

    @staticmethod
    def _apply(a, b):
        raise NotImplementedError

    def _evaluator(self):
        f = self._left._evaluator()
        g = self._right._evaluator()
        op = self._apply
        return lambda args: op(f(args), g(args))


class Add(BinaryOp):
    r"""Sum \f$ f + g \f$."""
    kind = '+'
    def __init__(self, left, right, name='add'):
        super(Add, self).__init__(left, right, name=name)
    _apply = staticmethod(np.add)


class Sub(BinaryOp):
    r"""Difference \f$ f - g \f$."""
    kind = '-'
    def __init__(self, left, right, name='sub'):
        super(Sub, self).__init__(left, right, name=name)
    _apply = staticmethod(np.subtract)


class Mul(BinaryOp):
    r"""Product \f$ f g \f$."""
    kind = '*'
    def __init__(self, left, right, name='mult'):
        super(Mul, self).__init__(left, right, name=name)
    _apply = staticmethod(np.multiply)


class Div(BinaryOp):
    r"""Quotient \f$ f / g \f$.

    Division by zero during evaluation produces `inf` or `nan`.
    """
    kind = '/'
    def __init__(self, left, right, name='divide'):
        super(Div, self).__init__(left, right, name=name)
    _apply = staticmethod(np.true_divide)


class Power(Term):
    r"""Power \f$ f^n \f$ of a term.

    The exponent is either a Python integer known when building the term,
    or an arbitrary term. For integers and constant exponent terms, the
    derivative follows the simple power rule. Any other exponent is
    differentiated via the identity \f$ f^g = e^{g \ln f} \f$.
    """
    def __init__(self, base, exponent, name='pow'):
        r"""Init function.

        Args:
            base:   The term to raise to a power.
            exponent: Either an `int` or a numexpr.Term.
        """
        self._base = base
        self._exponent = exponent
        if isinstance(exponent, Term):
            super(Power, self).__init__(name=name, base=base, exponent=exponent)
        else:
            super(Power, self).__init__(name=name, base=base)

    @property
    def base(self):
        r"""The term being raised to a power."""
        return self._base

    @property
    def exponent(self):
        r"""Either an integer or a term."""
        return self._exponent

    def has_static_exponent(self):
        r"""Whether the exponent is an integer known at build time."""
        return not isinstance(self._exponent, Term)

    def has_constant_exponent(self):
        r"""Whether the exponent does not depend on any variable."""
        return self.has_static_exponent() or self._exponent.is_constant()

    @property
    def nice_name(self):
        if self.has_static_exponent():
            return "%s (^%d)" % (self.name, self._exponent)
        return "%s (^e)" % self.name

    def _expr_str(self):
        if self.has_static_exponent():
            return "%s ** %d" % (self._base.str(), self._exponent)
        return "%s ** %s" % (self._base.str(), self._exponent.str())

    def _key(self):
        return (self._base, self._exponent)

    def _evaluator(self):
        f = self._base._evaluator()
        if self.has_static_exponent():
            n = self._exponent
            return lambda args: np.float_power(f(args), n)
        g = self._exponent._evaluator()
        return lambda args: np.float_power(f(args), g(args))


def _is_zero(term):
    return isinstance(term, Constant) and term.is_zero_expression()


def _is_one(term):
    return isinstance(term, Constant) and term.is_one_expression()


def negate(f):
    r"""Return `-f`, folding constants."""
    f = ensure_term(f)
    if isinstance(f, Constant):
        return type(f)(-f.value)
    return Negate(f)


def add(f, g):
    r"""Return `f + g` after folding constants and applying `f+0 = 0+f = f`."""
    f, g = ensure_term(f), ensure_term(g)
    if f.is_constant() and g.is_constant():
        return fold_binary('+', f, g)
    if _is_zero(g):
        return f
    if _is_zero(f):
        return g
    return Add(f, g)


def sub(f, g):
    r"""Return `f - g` after folding constants and applying `f-0 = f`."""
    f, g = ensure_term(f), ensure_term(g)
    if f.is_constant() and g.is_constant():
        return fold_binary('-', f, g)
    if _is_zero(g):
        return f
    if isinstance(f, Variable) and f == g:
        return ZERO
    return Sub(f, g)


def mul(f, g):
    r"""Return `f * g` after folding constants and applying `f*0 = 0`, `f*1 = f`."""
    f, g = ensure_term(f), ensure_term(g)
    if f.is_constant() and g.is_constant():
        return fold_binary('*', f, g)
    if _is_zero(f):
        return f
    if _is_zero(g):
        return g
    if _is_one(f):
        return g
    if _is_one(g):
        return f
    return Mul(f, g)


def div(f, g):
    r"""Return `f / g` after folding constants and applying `0/f = 0`, `f/1 = f`.

    Dividing a static constant by a static zero raises a
    common.ConstructionError.
    """
    f, g = ensure_term(f), ensure_term(g)
    if f.is_constant() and g.is_constant():
        return fold_binary('/', f, g)
    if _is_zero(f):
        return f
    if _is_one(g):
        return f
    if isinstance(f, Variable) and f == g:
        return ONE
    return Div(f, g)


def _static_int(value):
    r"""Return the exponent as `int` if it is integral and known at build time.

    Python integers and static constants with integral values qualify.
    Returns `None` otherwise.
    """
    if isinstance(value, (bool, np.bool_)):
        return None
    if isinstance(value, (numbers.Integral, np.integer)):
        return int(value)
    if isinstance(value, StaticConstant) and isinstance(value.value, (numbers.Integral, np.integer)):
        return int(value.value)
    return None


def power(base, exponent):
    r"""Return `base ** exponent` after folding and applying `f^0 = 1`, `f^1 = f`.

    @param base
        Term or number.
    @param exponent
        An integer (or static integer constant) builds a power with static
        exponent. Any other number or term builds a power with a general
        exponent term.
    """
    base = ensure_term(base)
    n = _static_int(exponent)
    if n is None:
        exponent = ensure_term(exponent)
        if base.is_constant() and exponent.is_constant():
            return fold_binary('**', base, exponent)
        if _is_zero(exponent):
            return ONE
        if _is_one(exponent):
            return base
        return Power(base, exponent)
    if base.is_constant():
        return fold_binary('**', base, StaticConstant(n))
    if n == 0:
        return ONE
    if n == 1:
        return base
    return Power(base, n)
