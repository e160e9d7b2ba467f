r"""@package symdiff.exprs.binding

Substitution of terms for variables: composition and named rebinding.

A Composition substitutes terms for a *prefix* of the variable slots of an
outer term. With bindings `g_0, ..., g_{k-1}`, the outer term is evaluated
for the arguments

    (g_0(args), ..., g_{k-1}(args), args[k], args[k+1], ...)

i.e. the slots `j >= k` of the outer term pass through and read the caller's
argument `j`. This expresses function nesting as well as partial
application:

~~~.py
x, y = variables(2)
h = x*x | x + y              # (x + y)**2
g = h | (x, 2*x)             # (x + 2x)**2 = 9 x**2
~~~

A NamedBindingGroup instead maps individual slots to terms, leaving all
other slots untouched. Applying it with `|` is normalized to the positional
form by filling the unmapped slots with identity variables:

~~~.py
f = (x + y) | {x: sin(y), y: x**2}                   # sin(y) + x**2
f = (x + y) | (x.bind(sin(y)), y.bind(x**2))         # the same
~~~
"""

import logging

from ..utils import split
from .common import RebindingError, ArityError, _construction_error
from .numexpr import Term, ensure_term
from .constants import Variable
from .evaluators import evaluate


__all__ = [
    "Composition",
    "NamedBindingGroup",
    "compose",
    "bindings",
    "apply",
    "pass_through_slot",
    "positional_bindings",
]


logger = logging.getLogger(__name__)


def pass_through_slot(slot, n_bound):
    r"""Return the outer slot fed directly by the caller's argument `slot`.

    In a composition with `n_bound` bindings, the caller's arguments with
    index `>= n_bound` reach the outer term unchanged at the same slot. The
    arguments with smaller index only reach it through the bindings, in
    which case `None` is returned.
    """
    if slot < 0 or n_bound < 0:
        raise ValueError("Slots and binding counts must be non-negative.")
    return slot if slot >= n_bound else None


def positional_bindings(group, size):
    r"""Convert a NamedBindingGroup into a positional list of bindings.

    Each slot `i < size` mapped by the group is replaced by its term, the
    other slots by the identity `Variable(i)`. Trailing identities are
    dropped, since those slots pass through a composition anyway.

    @param group
        The NamedBindingGroup to convert.
    @param size
        Number of slots the positional form should cover at most, usually the
        arity of the term the group is applied to.
    """
    result = [group[i] if i in group else Variable(i) for i in range(size)]
    while result and _is_identity(result[-1], len(result)-1):
        result.pop()
    return tuple(result)


def _is_identity(term, slot):
    return isinstance(term, Variable) and term.slot == slot


def _slot_of(key):
    if isinstance(key, Variable):
        return key.slot
    if isinstance(key, Term):
        raise TypeError("Only variables can be bound, got %r." % key)
    return Variable(key).slot


class Composition(Term):
    r"""Outer term with a prefix of its variable slots substituted.

    Represents \f$ h(\mathbf{x}) = f(g_0(\mathbf{x}), \ldots, g_{k-1}(\mathbf{x}),
    x_k, x_{k+1}, \ldots) \f$.
    """
    def __init__(self, outer, bindings, name='compose'):
        r"""Init function.

        Args:
            outer:  The term whose variables are substituted.
            bindings: Sequence of terms `g_i` substituted for `Variable(i)`.
            name:   Name of the term (e.g. for print_tree()).
        """
        self._outer = outer
        self._bindings = tuple(bindings)
        sub_terms = dict(("g%d" % i, g) for i, g in enumerate(self._bindings))
        super(Composition, self).__init__(name=name, outer=outer, **sub_terms)

    @property
    def outer(self):
        r"""The term whose variables are substituted."""
        return self._outer

    @property
    def bindings(self):
        r"""Tuple of the substituted terms."""
        return self._bindings

    @property
    def nice_name(self):
        return "%s (%d bound)" % (self.name, len(self._bindings))

    def _expr_str(self):
        return "%s | (%s)" % (self._outer.str(),
                              ", ".join(g._expr_str() for g in self._bindings))

    def _key(self):
        return (self._outer, self._bindings)

    def _own_slots(self):
        k = len(self._bindings)
        result = set(s for s in self._outer.slots if pass_through_slot(s, k) is not None)
        for g in self._bindings:
            result.update(g.slots)
        return result

    def _evaluator(self):
        outer = self._outer._evaluator()
        gs = [g._evaluator() for g in self._bindings]
        k = len(gs)
        def f(args):
            _, tail = split(args, k)
            return outer(tuple(g(args) for g in gs) + tuple(tail))
        return f


class NamedBindingGroup(object):
    r"""Mapping of variable slots to the terms substituted for them.

    Groups are immutable. Merging two groups (see merge() and bindings())
    binding the same slot raises a common.RebindingError.
    """
    def __init__(self, mapping=None):
        r"""Create a group from a dict mapping variables (or slots) to terms.

        Numbers given as terms are converted to constants.
        """
        self._map = dict()
        for key, term in (mapping or dict()).items():
            slot = _slot_of(key)
            if slot in self._map:
                raise _construction_error("Variable %d is bound twice.", slot,
                                          cls=RebindingError)
            self._map[slot] = ensure_term(term)

    @property
    def slots(self):
        r"""Sorted tuple of the bound slots."""
        return tuple(sorted(self._map))

    def __getitem__(self, slot):
        return self._map[_slot_of(slot)]

    def __contains__(self, slot):
        return _slot_of(slot) in self._map

    def __len__(self):
        return len(self._map)

    def __iter__(self):
        return iter(self.slots)

    def items(self):
        r"""Sorted list of `(slot, term)` pairs."""
        return [(s, self._map[s]) for s in self.slots]

    def __eq__(self, other):
        if not isinstance(other, NamedBindingGroup):
            return NotImplemented
        return self._map == other._map

    def __hash__(self):
        return hash(tuple(self.items()))

    def __repr__(self):
        return "<NamedBindingGroup(%s)>" % ", ".join(
            "x%d=%s" % (s, t) for s, t in self.items()
        )

    def merge(self, other):
        r"""Return a new group containing the bindings of both groups.

        `other` may be another group or a bare Variable, which joins as the
        identity binding of its slot.
        """
        if isinstance(other, Variable):
            other = NamedBindingGroup({other: other})
        elif isinstance(other, dict):
            other = NamedBindingGroup(other)
        elif not isinstance(other, NamedBindingGroup):
            raise TypeError("Cannot group a binding with %r. Bind it to a "
                            "variable using `x.bind(term)`." % (other,))
        common = set(self._map).intersection(other._map)
        if common:
            raise _construction_error(
                "Rebinding conflict: variable(s) %s bound more than once.",
                ", ".join("%d" % s for s in sorted(common)), cls=RebindingError
            )
        result = NamedBindingGroup()
        result._map.update(self._map)
        result._map.update(other._map)
        return result

    def __and__(self, other):
        return self.merge(other)

    def __rand__(self, other):
        if isinstance(other, (Variable, dict)):
            return bindings(other, self)
        return NotImplemented

    def lookup(self, slot, args):
        r"""Value of `slot` after substitution, given the caller's arguments.

        If `slot` is bound, the bound term is evaluated for `args`. Otherwise
        ``args[slot]`` is returned unchanged.
        """
        slot = _slot_of(slot)
        if slot in self._map:
            return evaluate(self._map[slot], args)
        try:
            return args[slot]
        except IndexError:
            raise ArityError("Slot %d not bound and only %d argument(s) given."
                             % (slot, len(args))) from None

    def to_positional(self, size):
        r"""Positional bindings covering at most `size` slots, see positional_bindings()."""
        return positional_bindings(self, size)


def compose(outer, *gs):
    r"""Substitute the terms `gs` for the first `len(gs)` variables of `outer`.

    The remaining variable slots of `outer` pass through (see Composition).
    Constants ignore substitution and are returned unchanged, as is `outer`
    if no (or only identity) bindings are given. A single variable composed
    with bindings resolves to its binding directly.
    """
    outer = ensure_term(outer)
    gs = [ensure_term(g) for g in gs]
    if not gs or outer.is_constant():
        return outer
    if all(_is_identity(g, i) for i, g in enumerate(gs)):
        return outer
    if isinstance(outer, Variable):
        if outer.slot < len(gs):
            return gs[outer.slot]
        return outer
    return Composition(outer, gs)


def bindings(*items):
    r"""Merge binding groups into one group.

    This is the grouping `(x = f, y = g)` of named bindings. Each item may be
    a NamedBindingGroup, a dict or a bare Variable (binding the variable to
    itself). Slots bound more than once raise a common.RebindingError.
    """
    result = NamedBindingGroup()
    for item in items:
        result = result.merge(item)
    return result


def _apply_named(outer, group):
    if outer.is_constant():
        return outer
    gs = positional_bindings(group, outer.arity)
    logger.debug("Applying %r to %r as %d positional binding(s)", group, outer, len(gs))
    return compose(outer, *gs)


def apply(outer, substitution):
    r"""Implementation of the `outer | substitution` operator.

    @param outer
        The term to substitute into.
    @param substitution
        One of:
            * a single term (or number) substituted for `Variable(0)`
            * a tuple/list of terms substituted positionally (see compose())
            * a NamedBindingGroup or a dict mapping variables to terms
            * a tuple/list of binding groups, which are merged first
    """
    outer = ensure_term(outer)
    if isinstance(substitution, dict):
        substitution = NamedBindingGroup(substitution)
    if isinstance(substitution, NamedBindingGroup):
        return _apply_named(outer, substitution)
    if isinstance(substitution, (tuple, list)):
        items = list(substitution)
        if any(isinstance(i, (NamedBindingGroup, dict)) for i in items):
            return _apply_named(outer, bindings(*items))
        return compose(outer, *items)
    return compose(outer, substitution)
