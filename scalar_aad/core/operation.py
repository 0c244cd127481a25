# scalar_aad/core/operation.py
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional, Tuple

from .differentiable import Differentiable

if TYPE_CHECKING:
    from .var import Value


class OpKind(enum.Enum):
    ADD = "add"
    SUB = "sub"
    MUL = "mul"
    DIV = "div"
    POW = "pow"
    NEG = "neg"


@dataclass(frozen=True, eq=False)
class Ref:
    """Borrowed reference to an existing node; traversed during backward."""
    node: "Value"

    @property
    def data(self):
        return self.node.data

    @property
    def traversable(self) -> bool:
        return self.node.requires_grad


@dataclass(frozen=True)
class Const:
    """Owned snapshot of a value taken when it was consumed; never traversed."""
    data: Any

    @property
    def traversable(self) -> bool:
        return False


Operand = Any  # Ref | Const


# (forward, d/dlhs, d/drhs) per kind, each taking (a, b, rules).
# Local partials are evaluated from the operands' current data at backward time.
_RULES = {
    OpKind.ADD: (
        lambda a, b, t: a + b,
        lambda a, b, t: t.eye_grad(),
        lambda a, b, t: t.eye_grad(),
    ),
    OpKind.SUB: (
        lambda a, b, t: a - b,
        lambda a, b, t: t.eye_grad(),
        lambda a, b, t: -t.eye_grad(),
    ),
    OpKind.MUL: (
        lambda a, b, t: a * b,
        lambda a, b, t: b,
        lambda a, b, t: a,
    ),
    OpKind.DIV: (
        lambda a, b, t: a / b,
        lambda a, b, t: t.eye_grad() / b,
        lambda a, b, t: -(a / (b * b)),
    ),
    OpKind.POW: (
        lambda a, b, t: t.pow(a, b),
        lambda a, b, t: b * t.pow(a, b - t.eye_grad()),
        lambda a, b, t: t.pow(a, b) * t.log(a),
    ),
    OpKind.NEG: (
        lambda a, b, t: -a,
        lambda a, b, t: -t.eye_grad(),
        None,
    ),
}


@dataclass(frozen=True)
class Operation:
    """
    Record of the operation that produced a node.

    Attributes
    ----------
    kind : OpKind
    lhs  : Ref | Const
    rhs  : Ref | Const, or None for the unary NEG
    """
    kind: OpKind
    lhs: Operand
    rhs: Optional[Operand] = None

    @property
    def operands(self) -> Tuple[Operand, ...]:
        return (self.lhs,) if self.rhs is None else (self.lhs, self.rhs)

    def forward(self, rules: Differentiable):
        """Result scalar from the operands' current data."""
        f = _RULES[self.kind][0]
        b = None if self.rhs is None else self.rhs.data
        return f(self.lhs.data, b, rules)

    def backward(self, grad, rules: Differentiable):
        """
        Chain-rule contributions for each operand position:
            [(operand, grad * ∂out/∂operand), ...]
        """
        _, dfda, dfdb = _RULES[self.kind]
        a = self.lhs.data
        if self.rhs is None:
            return [(self.lhs, grad * dfda(a, None, rules))]
        b = self.rhs.data
        return [
            (self.lhs, grad * dfda(a, b, rules)),
            (self.rhs, grad * dfdb(a, b, rules)),
        ]
