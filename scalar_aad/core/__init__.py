# scalar_aad/core/__init__.py

"""
Core public API.

Exports:
    Value         : scalar graph node (data, optional gradient, producing operation).
    Differentiable: per-type gradient rules; `register` adds new scalar types.
    Tape          : per-pass arena of nodes with integer handles.
    reverse       : run a single reverse pass from an output node.
    zero_grads    : reset every tracked node reachable from an output.
    grad, grads, grads_list, value : functional conveniences.
"""

from .differentiable import Differentiable, register, rules_for
from .operation import Const, OpKind, Operation, Ref
from .var import Value
from .tape import Tape
from .engine import reverse, zero_grads
from .seeds import grad, grads, grads_list, value

__all__ = [
    "Differentiable", "register", "rules_for",
    "Const", "OpKind", "Operation", "Ref",
    "Value",
    "Tape",
    "reverse", "zero_grads",
    "grad", "grads", "grads_list", "value",
]
