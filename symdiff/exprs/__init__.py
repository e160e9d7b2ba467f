r"""@package symdiff.exprs

Term system for building, simplifying, evaluating and differentiating
symbolic expressions in several variables.

A term is an immutable tree made of constants, variables, the arithmetic
operators `+ - * / **`, the elementary functions `sin`, `cos`, `exp` and
`log`, and compositions substituting terms for variables. Terms are built
using the Python operators and the functions exported here, which fold
constants and remove trivial operations (like `f * 1`) right away.

There are two kinds of constants. A *static* constant (see
constants.constant()) is known when the term is built and any invalid
operation with static constants raises a common.ConstructionError
immediately. A *dynamic* constant (see constants.dynamic()) follows the
IEEE-754 rules instead, producing `inf` or `nan`. Plain Python numbers
mixed into terms become dynamic constants.

NOTE: Terms themselves cannot be evaluated. Instead, you create an
      *evaluator* (see evaluators.TermEvaluator) taking the positional
      argument list, where `args[i]` is the value of `Variable(i)`.

@b Examples

```
    x, y = variables(2)
    f = sin(x) * y**2 + 3
    ev = f.evaluator()
    ev([0.5, 2.0])              # 4 sin(0.5) + 3
    ev.diff([0.5, 2.0], x)      # 4 cos(0.5)
    g = f | {x: x*y, y: 2*x}    # substitute for x and y simultaneously
    differentiate(g, y)
```
"""

from .common import AlgebraError, ConstructionError, RebindingError, ArityError
from .numexpr import Term, ensure_term
from .constants import Constant, StaticConstant, DynamicConstant, Variable
from .constants import constant, dynamic, variable, variables, ZERO, ONE
from .basics import negate, add, sub, mul, div, power
from .elementary import sin, cos, exp, log
from .binding import Composition, NamedBindingGroup
from .binding import compose, bindings, pass_through_slot, positional_bindings
from .evaluators import TermEvaluator, evaluate, evaluate_many
from .differential import differentiate, derivative, gradient
from .printing import to_sympy, latex
