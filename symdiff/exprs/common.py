r"""@package symdiff.exprs.common

Utils and exception classes used by multiple modules in symdiff.exprs.
"""

import numbers
import logging

import numpy as np


__all__ = [
    "AlgebraError",
    "ConstructionError",
    "RebindingError",
    "ArityError",
    "is_number",
]


logger = logging.getLogger(__name__)


class AlgebraError(Exception):
    r"""Base class of all errors raised by the expression system."""
    pass


class ConstructionError(AlgebraError, ValueError):
    r"""Raised when a combinator would produce a malformed term.

    Examples are the division of a static constant by a static zero or the
    logarithm of a non-positive static constant.
    """
    pass


class RebindingError(ConstructionError):
    r"""Raised when the same variable slot is bound twice in one group."""
    pass


class ArityError(AlgebraError, IndexError):
    r"""Raised when a term is evaluated with too few arguments."""
    pass


def is_number(value):
    r"""Check whether a value is a real scalar number (including NumPy scalars).

    Booleans are not considered numbers here.
    """
    if isinstance(value, (bool, np.bool_)):
        return False
    return isinstance(value, (numbers.Real, np.integer, np.floating)) and np.ndim(value) == 0


def _construction_error(msg, *args, cls=ConstructionError):
    r"""Log and return an exception to be raised by a combinator."""
    msg = msg % args if args else msg
    logger.debug("Rejecting construction: %s", msg)
    return cls(msg)
