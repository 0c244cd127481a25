# scalar_aad/ops/arithmetic.py
from ..core.differentiable import rules_for
from ..core.operation import Const, OpKind, Operation, Ref
from ..core.var import Value, as_scalar


_OPERANDS = (Value, Ref, Const)


def _as_operand(x, like=None):
    """
    Nodes are borrowed (Ref); Const snapshots pass through; plain numbers
    become Const, cast to the type of `like` when given.
    """
    if isinstance(x, Value):
        return Ref(x)
    if isinstance(x, (Ref, Const)):
        return x
    return Const(as_scalar(x, type(like) if like is not None else None))


def _record(op: Operation) -> Value:
    """
    Forward step:
      - computes out.data from the operands' current data
      - attaches the operation record, operands kept exactly as supplied
    The result always tracks gradients.
    """
    out = Value(op.forward(rules_for(op.lhs.data)))
    out.operation = op
    return out


def _binary(x, y, kind: OpKind) -> Value:
    anchor = next((v for v in (x, y) if isinstance(v, _OPERANDS)), None)
    like = anchor.data if anchor is not None else None
    return _record(Operation(kind, _as_operand(x, like), _as_operand(y, like)))


def add(x, y): return _binary(x, y, OpKind.ADD)
def sub(x, y): return _binary(x, y, OpKind.SUB)
def mul(x, y): return _binary(x, y, OpKind.MUL)
def div(x, y): return _binary(x, y, OpKind.DIV)


def neg(x):
    """
    Unary negation:
      out.data = -x.data
      ∂out/∂x  = -1
    """
    return _record(Operation(OpKind.NEG, _as_operand(x)))


def pow(x, y):
    """
    Power x ** y for two nodes.

    Local partials (evaluated at backward time from current data):
      ∂out/∂x = y * x^(y-1)
      ∂out/∂y = x^y * log(x)        (NaN for x<0, -inf/NaN at x=0, as numpy yields)

    Both operands must be Value nodes; wrap a plain exponent with Value.coeff.
    """
    if not isinstance(x, Value) or not isinstance(y, Value):
        raise TypeError(
            f"pow expects two Value nodes, got {type(x).__name__} and {type(y).__name__}"
        )
    return _record(Operation(OpKind.POW, Ref(x), Ref(y)))
