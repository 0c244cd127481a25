# scalar_aad/core/differentiable.py
"""
Numeric rules a scalar type must supply to flow through the graph.

A type qualifies as differentiable when it supports + - * / and unary -
returning the same type, and a `Differentiable` rule set is registered for it.
The rule set provides the two identities used by the reverse pass and the two
transcendental primitives needed by the power rule.

Rule sets for numpy.float32 and numpy.float64 ship by default. Numeric edge
cases (x/0, log of a non-positive number) are left to the type itself: numpy
produces inf/NaN, nothing here intercepts them.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict

import numpy as np


@dataclass(frozen=True)
class Differentiable:
    """
    Gradient rules for one scalar type.

    Attributes
    ----------
    dtype     : the concrete scalar type the rules apply to
    zero_grad : () -> T, additive identity (accumulator reset value)
    eye_grad  : () -> T, multiplicative identity (seed for dy/dy)
    pow       : (base, exponent) -> T
    log       : (x) -> T, natural logarithm
    """
    dtype: type
    zero_grad: Callable[[], Any]
    eye_grad: Callable[[], Any]
    pow: Callable[[Any, Any], Any]
    log: Callable[[Any], Any]


_REGISTRY: Dict[type, Differentiable] = {}


def register(rules: Differentiable) -> Differentiable:
    """Register (or replace) the rule set for `rules.dtype`."""
    _REGISTRY[rules.dtype] = rules
    return rules


def unregister(dtype: type) -> None:
    _REGISTRY.pop(dtype, None)


def is_registered(dtype: type) -> bool:
    return any(t in _REGISTRY for t in dtype.__mro__)


def rules_for(x: Any) -> Differentiable:
    """
    Resolve the rule set for a scalar value (or a type).

    Subclasses of a registered type inherit its rules.
    """
    dtype = x if isinstance(x, type) else type(x)
    for t in dtype.__mro__:
        rules = _REGISTRY.get(t)
        if rules is not None:
            return rules
    raise TypeError(f"no Differentiable rules registered for {dtype.__name__}")


def _numpy_rules(dtype) -> Differentiable:
    zero, eye = dtype(0), dtype(1)
    return Differentiable(
        dtype=dtype,
        zero_grad=lambda: zero,
        eye_grad=lambda: eye,
        pow=lambda a, b: dtype(np.power(a, b)),
        log=lambda a: dtype(np.log(a)),
    )


float32 = register(_numpy_rules(np.float32))
float64 = register(_numpy_rules(np.float64))
