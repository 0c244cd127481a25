# scalar_aad/core/seeds.py

#-----------------------------------------------------------------------------
# We "plant" a seed (dy/dy = 1) at the scalar output and let gradients grow
# backwards through the graph.
#-----------------------------------------------------------------------------
from __future__ import annotations
from typing import Any, Callable, Dict, Iterable, List

from .engine import reverse
from .var import Value


def value(x: Any) -> Any:
    """Return the numeric value of a Value; pass through plain numbers unchanged."""
    return x.data if isinstance(x, Value) else x


def _ensure_value(v: Any, *, name: str) -> Value:
    """Wrap a plain number as a fresh tracked leaf; pass existing nodes through."""
    return v if isinstance(v, Value) else Value.new(v, name=name)


def _run(y: Any, leaves: List[Value]) -> List[Any]:
    # Fresh leaves start at zero; a clean-slate pass keeps reused nodes honest.
    if isinstance(y, Value):
        reverse(y, accumulate=False)
    return [x.grad if x.grad is not None else x.rules.zero_grad() for x in leaves]


# ----------------------------- single-input grad ----------------------------- #
def grad(f: Callable[[Value], Any], x0: Any) -> Any:
    """
    Derivative of a scalar function y=f(x) at x0 (single input).
    If f returns a plain number the derivative is zero.
    """
    x = _ensure_value(x0, name="x")
    return _run(f(x), [x])[0]


# ----------------------------- multi-input grads ----------------------------- #
def grads(f: Callable[[Dict[str, Value]], Any], inputs: Dict[str, Any]) -> Dict[str, Any]:
    """
    Gradient of y=f(vars) w.r.t. ALL inputs (dict form).
    Performs ONE reverse pass to obtain all ∂y/∂var simultaneously.

    Parameters
    ----------
    f       : function taking a dict {name: Value} and returning a Value
    inputs  : dict {name: numeric}

    Returns
    -------
    dict {name: numeric}  # gradients in the same key order as `inputs`
    """
    vars_ad = {k: _ensure_value(v, name=k) for k, v in inputs.items()}
    partials = _run(f(vars_ad), list(vars_ad.values()))
    return dict(zip(vars_ad.keys(), partials))


def grads_list(f: Callable[[List[Value]], Any], x0_list: Iterable[Any]) -> List[Any]:
    """
    Same as grads(), but the inputs are provided as a list and the result is a list
    of partials in the same order.

    Example
    -------
    f = lambda xs: xs[0]*xs[0] + 3*xs[1]
    grads_list(f, [2.0, 4.0]) -> [4.0, 3.0]
    """
    xs = [_ensure_value(v, name=f"x{i}") for i, v in enumerate(x0_list)]
    return _run(f(xs), xs)
