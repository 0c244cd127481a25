# scalar_aad/core/var.py
from __future__ import annotations

from typing import Any, Iterator, Optional

import numpy as np

from .. import config as config_mod  # module access so use_config() overrides are seen
from .differentiable import Differentiable, is_registered, rules_for
from .operation import Const, Operation, Ref


def as_scalar(x: Any, dtype: Optional[type] = None):
    """
    Convert x to a scalar the engine can differentiate through.

    Values of a registered type pass through unchanged; plain Python and numpy
    numbers are cast to `dtype` (default: the configured dtype).
    """
    if is_registered(type(x)):
        return x
    if isinstance(x, (int, float, np.integer, np.floating)):
        target = dtype if dtype is not None else config_mod.get_config().dtype
        return target(x)
    raise TypeError(
        f"Value only accepts scalar numbers of a registered type, but got {type(x)}"
    )


class Value:
    """
    Scalar node of the computation graph.

    Attributes
    ----------
    data : T
        Forward (primal) value. Read-only.
    grad : T | None
        Gradient accumulator, None when gradient tracking is disabled.
    operation : Operation | None
        How this node was produced; None for leaves (inputs/parameters).
    name : Optional[str]
        Optional debug/pretty-print name.
    """

    __array_ufunc__ = None  # numpy scalars defer to the reflected operators below

    def __init__(self, data: Any, *, requires_grad: bool = True, name: Optional[str] = None):
        if isinstance(data, Value):
            raise TypeError("Value cannot wrap another Value; use detach() for a snapshot")
        self._data = as_scalar(data)
        self._grad = rules_for(self._data).zero_grad() if requires_grad else None
        self.operation: Optional[Operation] = None
        self.name = name

    @classmethod
    def new(cls, data: Any, name: Optional[str] = None) -> "Value":
        """Tracked leaf."""
        return cls(data, requires_grad=True, name=name)

    @classmethod
    def coeff(cls, data: Any, name: Optional[str] = None) -> "Value":
        """Untracked constant leaf."""
        return cls(data, requires_grad=False, name=name)

    def __repr__(self):
        label = f", name={self.name!r}" if self.name is not None else ""
        return f"Value(data={self._data!r}, grad={self._grad!r}{label})"

    def __float__(self):
        return float(self._data)

    # ------------------------------------------------------------------ state

    @property
    def data(self):
        return self._data

    @property
    def grad(self):
        return self._grad

    @property
    def rules(self) -> Differentiable:
        return rules_for(self._data)

    @property
    def requires_grad(self) -> bool:
        return self._grad is not None

    @requires_grad.setter
    def requires_grad(self, flag: bool):
        if not flag:
            self._grad = None
        elif self._grad is None:
            self._grad = self.rules.zero_grad()

    @property
    def is_leaf(self) -> bool:
        return self.operation is None

    def zero_grad(self):
        """Reset this node's accumulator. Ancestors are left untouched."""
        if self._grad is not None:
            self._grad = self.rules.zero_grad()

    def detach(self) -> Const:
        """Owned snapshot of the current value, usable as a constant operand."""
        return Const(self._data)

    def parents(self) -> Iterator["Value"]:
        """Operand nodes the reverse pass may traverse into."""
        if self.operation is None:
            return
        for operand in self.operation.operands:
            if isinstance(operand, Ref) and operand.traversable:
                yield operand.node

    def _accumulate(self, delta):
        if self._grad is not None:
            self._grad = self._grad + delta

    # --------------------------------------------------------------- backward

    def backward(self, accumulate: Optional[bool] = None):
        """
        Reverse pass from this node: dy/dy = 1, then every tracked ancestor
        receives dy/d(ancestor) added onto its gradient.
        """
        from .engine import reverse
        reverse(self, accumulate=accumulate)

    # -------------------------------------------------------------- operators

    def pow(self, exponent: "Value") -> "Value":
        from ..ops.arithmetic import pow
        return pow(self, exponent)

    def __add__(self, other):
        from ..ops.arithmetic import add
        return add(self, other)

    def __radd__(self, other):
        from ..ops.arithmetic import add
        return add(other, self)

    def __sub__(self, other):
        from ..ops.arithmetic import sub
        return sub(self, other)

    def __rsub__(self, other):
        from ..ops.arithmetic import sub
        return sub(other, self)

    def __mul__(self, other):
        from ..ops.arithmetic import mul
        return mul(self, other)

    def __rmul__(self, other):
        from ..ops.arithmetic import mul
        return mul(other, self)

    def __truediv__(self, other):
        from ..ops.arithmetic import div
        return div(self, other)

    def __rtruediv__(self, other):
        from ..ops.arithmetic import div
        return div(other, self)

    def __neg__(self):
        from ..ops.arithmetic import neg
        return neg(self)

    def __pow__(self, other):
        from ..ops.arithmetic import pow
        if not isinstance(other, Value):
            other = Value.coeff(as_scalar(other, type(self._data)))
        return pow(self, other)

    def __rpow__(self, other):
        from ..ops.arithmetic import pow
        return pow(Value.coeff(as_scalar(other, type(self._data))), self)
