r"""@package symdiff.exprs.numexpr

Base of the term system.

A term is an immutable node of an expression tree: a constant, a variable, an
operator applied to other terms, or the composition of a term with a list of
substitutions. Terms are built exclusively through combinators (the Python
operators and the functions in basics, elementary and binding), which apply
algebraic simplifications eagerly so that e.g. `x + 0` is just `x`.

Terms themselves are not evaluated directly. Instead, you create an
*evaluator* (see evaluators.TermEvaluator) which turns the current tree into
a callable taking the positional argument list:

~~~.py
x, y = variables(2)
expr = sin(x) * y + 3
ev = expr.evaluator()
print("f(.5, 2) =", ev([.5, 2]))
print("df/dx(.5, 2) =", ev.diff([.5, 2], x))
~~~

All terms are *picklable*, which means they can easily be stored to disk and
retrieved later using Term.save() and Term.load().
"""

from abc import ABCMeta, abstractmethod
import logging

from ..utils import save_to_file, load_from_file
from .common import is_number


__all__ = [
    "Term",
    "ensure_term",
]


logger = logging.getLogger(__name__)


def ensure_term(value):
    """Ensure an object is a term, converting it if necessary.

    Plain (Python or NumPy) numbers are converted to constants.DynamicConstant
    objects, since their values are only known when the surrounding code runs.
    Anything else raises a `TypeError`.
    """
    if isinstance(value, Term):
        return value
    if is_number(value):
        from .constants import DynamicConstant
        return DynamicConstant(value)
    raise TypeError("Cannot convert %s to a term." % type(value).__name__)


class Term(object, metaclass=ABCMeta):
    """Parent class for all nodes of an expression tree.

    Terms are immutable. Each child class stores its data before calling the
    init function of this class, which then computes the set of variable
    slots the term reads and freezes the object.

    The methods a child has to override are:
        * _expr_str() returning a representation of the term
        * _evaluator() creating the callable used by the evaluators
        * _key() returning the data identifying the term structurally
        * _own_slots() returning the slots read by the term
    """
    # Let NumPy scalars defer to our reflected operators.
    __array_ufunc__ = None

    def __init__(self, name=None, **sub_terms):
        r"""Base class init for terms.

        Args:
            name: (string, optional)
                Name for the term. Can be useful to label terms in a more
                complex expression tree to indicate their role/meaning.
                By default, the current class name is used as name.
            **sub_terms:
                Child terms, stored under the given keys. They are used when
                traversing through a complete tree in e.g. print_tree() or
                traverse_tree().
        """
        self.__sub_terms = dict(sub_terms)
        self.__name = name if name else self.__class__.__name__
        ## Frozen set of the variable slots this term reads from its arguments.
        self._slots = frozenset(self._own_slots())
        self._hash = hash((type(self).__name__, self._key()))
        self._frozen = True

    def __setattr__(self, name, value):
        if getattr(self, "_frozen", False):
            raise AttributeError("Terms are immutable, cannot set '%s'." % name)
        super(Term, self).__setattr__(name, value)

    def __delattr__(self, name):
        raise AttributeError("Terms are immutable, cannot delete '%s'." % name)

    @property
    def name(self):
        r"""Name given to this instance of the term."""
        return self.__name

    @property
    def nice_name(self):
        r"""More descriptive name, which may be overridden by sub classes."""
        return self.__name

    @property
    def slots(self):
        r"""Frozen set of all variable slots this term reads."""
        return self._slots

    @property
    def arity(self):
        r"""Minimum length of the argument list needed for evaluation."""
        return max(self._slots) + 1 if self._slots else 0

    @property
    def sub_terms(self):
        r"""Tuple of the direct children of this term."""
        return tuple(self.__sub_terms.values())

    def traverse_tree(self, include_root=False, skip_zeros=False, parents=None):
        r"""Generator that walks through a complete term tree.

        In each iteration, the returned values represent the current node's
        parents (as a list from root to immediate parent), its key under which
        it is stored in its parent, and the node itself.

        Args:
            include_root: Whether to include the root as first item. Default
                is `False`.
            skip_zeros: Whether to skip zero constants.
            parents: Optional list of parents of the root. Normally only used
                internally for the recursion.

        @b Examples
        \code
            for parents, name, term in root.traverse_tree():
                print("-"*len(parents), name)
        \endcode

        """
        if parents is None:
            parents = []
        if include_root:
            yield parents, "", self
        parents = parents + [self]
        for name, term in self.__sub_terms.items():
            if not (skip_zeros and term.is_zero_expression()):
                yield parents, name, term
            for node in term.traverse_tree(include_root=False,
                                           skip_zeros=skip_zeros,
                                           parents=parents):
                yield node

    def print_tree(self, root_name='root', nice_names=True, skip_zeros=False):
        r"""Print the whole term tree.

        Each term's key under which it is stored in its parent will be shown
        as well as its actual name and the class name.
        """
        def _p(term, name, parents=()):
            n = term.nice_name if nice_names else term.name
            print("%s%s [%s] <%s>" % (
                ". " * len(parents), name, n, type(term).__name__
            ))
        _p(self, root_name)
        for parents, name, term in self.traverse_tree(skip_zeros=skip_zeros):
            _p(term, name, parents)

    def count_nodes(self):
        r"""Return the number of nodes in the tree (shared nodes counted each time)."""
        return 1 + sum(1 for _ in self.traverse_tree())

    def save(self, filename, overwrite=False, verbose=True):
        r"""Save the term to disk.

        Args:
            filename: The file name to store the data in. An extension
                ``'.npy'`` will be added if not already there.
            overwrite: Whether to overwrite an existing file with the same
                name. If `False` (default) and such a file exists, a
                `RuntimeError` is raised.
            verbose: Whether to print when the file was written. Default is
                `True`.
        """
        save_to_file(
            filename, self, overwrite=overwrite, verbose=verbose,
            showname="%s [%s]" % (self.nice_name, type(self).__name__)
        )

    @classmethod
    def load(cls, filename):
        r"""Static function to load a term from disk."""
        term = load_from_file(filename)
        if not isinstance(term, Term):
            raise TypeError("File %s does not contain a term." % filename)
        logger.debug("Loaded %s [%s] from %s", term.nice_name, type(term).__name__, filename)
        return term

    def __getstate__(self):
        r"""Return a picklable state object representing the whole term."""
        return self.__dict__.copy()

    def __setstate__(self, state):
        r"""Restore a complete term from the given unpickled state."""
        self.__dict__.update(state)
        # String hashes are salted per process.
        self.__dict__['_hash'] = hash((type(self).__name__, self._key()))

    def __repr__(self):
        r"""Return a string representing the whole term tree."""
        cls = self.__class__.__name__
        return "<%s(%s)>" % (cls, self._expr_str())

    def __str__(self):
        return self._expr_str()

    def str(self):
        """Return the term as a string enclosed in parentheses if compound."""
        if self.sub_terms:
            return "(%s)" % self._expr_str()
        return self._expr_str()

    def __eq__(self, other):
        if self is other:
            return True
        if type(self) is not type(other):
            return NotImplemented
        return self._hash == other._hash and self._key() == other._key()

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self):
        return self._hash

    def __bool__(self):
        raise TypeError("The truth value of a term is ambiguous. "
                        "Evaluate it or compare terms with `==`.")

    @abstractmethod
    def _expr_str(self):
        """String representing the term.

        If the term has child terms, be sure to use their `str` method and not
        the `_expr_str`, e.g.:

            def _expr_str(self):
                return "sin%s" % self.inner.str()
        """
        pass

    @abstractmethod
    def _evaluator(self):
        r"""Create a callable evaluating this term for a sequence of arguments.

        Child classes create the callables of their children here and combine
        them. See evaluators.TermEvaluator for how these are used.
        """
        pass

    @abstractmethod
    def _key(self):
        r"""Tuple of hashable data identifying this term structurally."""
        pass

    def _own_slots(self):
        r"""Variable slots read by this term (default: union over children)."""
        result = set()
        for term in self.__sub_terms.values():
            result.update(term.slots)
        return result

    def is_zero_expression(self):
        r"""Return whether this term is the constant zero.

        All terms except zero constants deny being zero.
        """
        return False

    def is_one_expression(self):
        r"""Return whether this term is the constant one."""
        return False

    def is_constant(self):
        r"""Return whether this term is a constant of either flavor."""
        return False

    def evaluator(self):
        r"""Create an evaluator for this term.

        The evaluator is a callable taking the positional argument list. It
        can also evaluate derivatives (see evaluators.TermEvaluator).
        """
        from .evaluators import TermEvaluator
        return TermEvaluator(self)

    def diff(self, x=0, n=1):
        r"""Return the n'th derivative of this term w.r.t. the variable `x`.

        `x` may be a constants.Variable or a slot number.
        """
        from .differential import derivative
        return derivative(self, x, n=n)

    def __neg__(self):
        from .basics import negate
        return negate(self)

    def __pos__(self):
        return self

    def __add__(self, other):
        from .basics import add
        return add(self, other)

    def __radd__(self, other):
        from .basics import add
        return add(other, self)

    def __sub__(self, other):
        from .basics import sub
        return sub(self, other)

    def __rsub__(self, other):
        from .basics import sub
        return sub(other, self)

    def __mul__(self, other):
        from .basics import mul
        return mul(self, other)

    def __rmul__(self, other):
        from .basics import mul
        return mul(other, self)

    def __truediv__(self, other):
        from .basics import div
        return div(self, other)

    def __rtruediv__(self, other):
        from .basics import div
        return div(other, self)

    def __pow__(self, exponent):
        from .basics import power
        return power(self, exponent)

    def __rpow__(self, base):
        from .basics import power
        return power(base, self)

    def __or__(self, substitution):
        from .binding import apply
        return apply(self, substitution)
