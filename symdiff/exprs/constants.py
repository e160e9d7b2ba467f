r"""@package symdiff.exprs.constants

Leaves of the term trees: the two constant flavors and variables.

A StaticConstant holds a value fixed at the time the term is built. Algebra
between two static constants folds immediately to a new static constant,
and invalid static operations (like dividing by a static zero) are rejected
right away with a common.ConstructionError.

A DynamicConstant holds a value that is only known when the surrounding code
runs, like the plain Python numbers mixed into expressions such as `5*x`.
Any algebra involving a dynamic constant still folds to a (dynamic)
constant, but follows IEEE-754 semantics instead of raising, i.e. dividing by
zero gives `inf` or `nan`.

A Variable reads one positional argument, its *slot*, during evaluation.
"""

import numbers

import numpy as np

from .common import ArityError, is_number, _construction_error
from .numexpr import Term


__all__ = [
    "Constant",
    "StaticConstant",
    "DynamicConstant",
    "Variable",
    "constant",
    "dynamic",
    "variable",
    "variables",
    "ZERO",
    "ONE",
]


def _format_number(value):
    r"""Short string for a constant value."""
    if isinstance(value, (numbers.Integral, np.integer)):
        return "%d" % value
    return repr(float(value))


class Constant(Term):
    r"""Base class of the two constant flavors.

    Represents an expression of the form \f$ f(\mathbf{x}) = c \f$.
    """

    def __init__(self, value, name=None):
        if not is_number(value):
            raise TypeError("Constant value must be a real number, got %r."
                            % (value,))
        ## The constant value this term represents.
        self._value = value
        super(Constant, self).__init__(name=name)

    @property
    def value(self):
        r"""The value of this constant."""
        return self._value

    @property
    def nice_name(self):
        return "%s (%s)" % (self.name, _format_number(self._value))

    def _expr_str(self):
        return _format_number(self._value)

    def _key(self):
        return (self._value,)

    def _own_slots(self):
        return ()

    def _evaluator(self):
        value = self._value
        return lambda args: value

    def is_zero_expression(self):
        return bool(self._value == 0)

    def is_one_expression(self):
        return bool(self._value == 1)

    def is_constant(self):
        return True


class StaticConstant(Constant):
    r"""Constant with a value known when the term is built."""
    def __init__(self, value, name='const'):
        super(StaticConstant, self).__init__(value, name=name)


class DynamicConstant(Constant):
    r"""Constant whose value is supplied later, but still before evaluation."""
    def __init__(self, value, name='dyn'):
        super(DynamicConstant, self).__init__(value, name=name)


## The static constant zero.
ZERO = StaticConstant(0)
## The static constant one.
ONE = StaticConstant(1)


class Variable(Term):
    r"""Term reading the positional argument at index `slot`.

    Variables compare equal if they read the same slot, regardless of their
    names.
    """
    def __init__(self, slot, name=None):
        r"""Init function.

        Args:
            slot:   Non-negative index of the argument this variable reads.
            name:   Name used when printing the term. Default is ``'x<slot>'``.
        """
        if isinstance(slot, (bool, np.bool_)) or not isinstance(slot, (numbers.Integral, np.integer)):
            raise TypeError("Variable slot must be an integer, got %r." % (slot,))
        if slot < 0:
            raise _construction_error("Variable slot must be non-negative, got %d.", slot)
        self._slot = int(slot)
        super(Variable, self).__init__(name=name if name else "x%d" % slot)

    @property
    def slot(self):
        r"""Index of the argument this variable reads."""
        return self._slot

    def _expr_str(self):
        return self.name

    def _key(self):
        return (self._slot,)

    def _own_slots(self):
        return (self._slot,)

    def _evaluator(self):
        slot = self._slot
        def f(args):
            try:
                return args[slot]
            except IndexError:
                raise ArityError("Variable %d needs at least %d argument(s), got %d."
                                 % (slot, slot+1, len(args))) from None
        return f

    def bind(self, term):
        r"""Create a binding group substituting `term` for this variable.

        This is what `x = term` means in a binding list of the form
        ``f | (x = sin(y), y = x**2)``, written here as
        ``f | (x.bind(sin(y)), y.bind(x**2))``.
        """
        from .binding import NamedBindingGroup
        return NamedBindingGroup({self._slot: term})


def _as_value(value):
    r"""Accept numbers and constant terms, returning the plain value."""
    if isinstance(value, Constant):
        return value.value
    return value


def constant(value):
    r"""Create a static constant, i.e. one that folds eagerly."""
    return StaticConstant(_as_value(value))


def dynamic(value):
    r"""Create a dynamic constant."""
    return DynamicConstant(_as_value(value))


def variable(slot, name=None):
    r"""Create the variable reading the argument at index `slot`."""
    return Variable(slot, name=name)


def variables(names):
    r"""Create several variables at once.

    @param names
        Either the number `n` of variables to create (reading slots
        `0, ..., n-1`) or a string of whitespace or comma separated names, in
        which case the i'th name labels slot `i`.

    @b Examples

    ```
        x, y, z = variables(3)
        a, b = variables("a, b")
    ```
    """
    if isinstance(names, str):
        names = names.replace(",", " ").split()
        return tuple(Variable(i, name=n) for i, n in enumerate(names))
    return tuple(Variable(i) for i in range(names))


def is_static(term):
    r"""Return whether a term is a static constant."""
    return isinstance(term, StaticConstant)


def _static_binary(kind, a, b):
    r"""Fold two static constant values, rejecting invalid operations."""
    if kind == '+':
        return a + b
    if kind == '-':
        return a - b
    if kind == '*':
        return a * b
    if kind == '/':
        if b == 0:
            raise _construction_error("Division of static constant %s by static zero.",
                                      _format_number(a))
        return a / b
    if kind == '**':
        if a == 0 and b < 0:
            raise _construction_error("Static zero raised to negative power %s.",
                                      _format_number(b))
        integral = (numbers.Integral, np.integer)
        if isinstance(a, integral) and isinstance(b, integral) and b >= 0:
            return int(a) ** int(b)
        return np.float_power(a, b)
    raise ValueError("Unknown operation: %s" % kind)


_DYNAMIC_OPS = {
    '+': np.add,
    '-': np.subtract,
    '*': np.multiply,
    '/': np.true_divide,
    '**': np.float_power,
}


def fold_binary(kind, a, b):
    r"""Combine two constant terms into a new constant term.

    The result is static if and only if both operands are static.

    @param kind
        One of ``'+', '-', '*', '/', '**'``.
    @param a,b
        Constant terms (of either flavor).
    """
    if is_static(a) and is_static(b):
        with np.errstate(all='ignore'):
            return StaticConstant(_static_binary(kind, a.value, b.value))
    with np.errstate(all='ignore'):
        return DynamicConstant(_DYNAMIC_OPS[kind](a.value, b.value))


def fold_unary(func, c, validate=None):
    r"""Apply a NumPy function to a constant term, keeping its flavor.

    @param func
        Function to apply to the value.
    @param c
        Constant term.
    @param validate
        Optional callable checked for static constants only. It should
        raise a common.ConstructionError for invalid values.
    """
    if is_static(c):
        if validate is not None:
            validate(c.value)
        with np.errstate(all='ignore'):
            return StaticConstant(func(c.value))
    with np.errstate(all='ignore'):
        return DynamicConstant(func(c.value))
