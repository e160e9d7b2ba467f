r"""@package symdiff.exprs.printing

Conversion of terms to SymPy expressions for printing and cross-checking.

Variables are mapped to SymPy symbols by their slot, so that two variables
reading the same slot become the same symbol. By default, the symbol of slot
`i` is called ``x<i>``.

@b Examples

```
    x, y = variables(2)
    to_sympy(sin(x) * y**2)     # x1**2*sin(x0)
    latex(sin(x) / y)           # \frac{\sin{\left(x_{0} \right)}}{x_{1}}
```
"""

from functools import singledispatch

import sympy as sp

from .numexpr import ensure_term
from .constants import Constant, Variable
from .basics import Negate, Add, Sub, Mul, Div, Power
from .elementary import Sin, Cos, Exp, Log
from .binding import Composition


__all__ = [
    "to_sympy",
    "latex",
]


class _Symbols(object):
    r"""Lazily created SymPy symbols indexed by variable slot."""
    def __init__(self, symbols=None):
        self._symbols = dict(enumerate(symbols or ()))

    def __getitem__(self, slot):
        try:
            return self._symbols[slot]
        except KeyError:
            sym = self._symbols[slot] = sp.Symbol("x%d" % slot)
            return sym


def to_sympy(term, symbols=None):
    r"""Convert a term to an equivalent SymPy expression.

    @param term
        The term (or number) to convert.
    @param symbols
        Optional sequence of SymPy symbols to use for the variable slots
        `0, 1, ...`. Slots not covered get symbols named ``x<slot>``.
    """
    return _convert(ensure_term(term), _Symbols(symbols))


def latex(term, symbols=None):
    r"""Return the LaTeX representation of a term via SymPy."""
    return sp.latex(to_sympy(term, symbols=symbols))


@singledispatch
def _convert(term, symbols):
    raise NotImplementedError(
        "Cannot convert a %s to SymPy" % type(term).__name__
    )


@_convert.register(Constant)
def _(term, symbols):
    return sp.sympify(term.value)


@_convert.register(Variable)
def _(term, symbols):
    return symbols[term.slot]


@_convert.register(Negate)
def _(term, symbols):
    return -_convert(term.inner, symbols)


@_convert.register(Add)
def _(term, symbols):
    return _convert(term.left, symbols) + _convert(term.right, symbols)


@_convert.register(Sub)
def _(term, symbols):
    return _convert(term.left, symbols) - _convert(term.right, symbols)


@_convert.register(Mul)
def _(term, symbols):
    return _convert(term.left, symbols) * _convert(term.right, symbols)


@_convert.register(Div)
def _(term, symbols):
    return _convert(term.left, symbols) / _convert(term.right, symbols)


@_convert.register(Power)
def _(term, symbols):
    base = _convert(term.base, symbols)
    if term.has_static_exponent():
        return base**sp.Integer(term.exponent)
    return base**_convert(term.exponent, symbols)


_FUNCS = {Sin: sp.sin, Cos: sp.cos, Exp: sp.exp, Log: sp.log}


@_convert.register(Sin)
@_convert.register(Cos)
@_convert.register(Exp)
@_convert.register(Log)
def _(term, symbols):
    return _FUNCS[type(term)](_convert(term.inner, symbols))


@_convert.register(Composition)
def _(term, symbols):
    outer = _convert(term.outer, symbols)
    subs = [(symbols[j], _convert(g, symbols))
            for j, g in enumerate(term.bindings)]
    return outer.subs(subs, simultaneous=True)
