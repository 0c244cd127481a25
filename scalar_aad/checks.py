"""
Finite-difference verification of reverse-mode gradients.

Formulas:
    numeric_i  = [f(x + ε e_i) - f(x)] / ε        (scipy.optimize.approx_fprime)
    analytic_i = ∂f/∂x_i from one reverse pass

The bumped evaluations run on untracked leaves, so they never touch the
gradients of any node the caller holds.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Sequence

import numpy as np
from scipy.optimize import approx_fprime

from . import config as config_mod
from .core.seeds import grads_list, value
from .core.var import Value

logger = logging.getLogger(__name__)


@dataclass
class GradCheckResult:
    """Outcome of comparing reverse-mode and finite-difference gradients."""
    analytic: np.ndarray
    numeric: np.ndarray
    max_abs_error: float
    passed: bool


def numerical_grads(f: Callable[[List[Value]], Any],
                    x0: Sequence[float],
                    epsilon: Optional[float] = None) -> np.ndarray:
    """
    Finite-difference gradient of y = f([x0, x1, ...]) at x0.

    Args:
        f: function taking a list of Values and returning a Value (or a number)
        x0: evaluation point
        epsilon: bump size; defaults to the configured fd_epsilon

    Returns:
        np.ndarray of partials in the order of x0
    """
    eps = config_mod.get_config().fd_epsilon if epsilon is None else epsilon
    point = np.asarray(x0, dtype=np.float64)

    def scalar_f(xs):
        return float(value(f([Value.coeff(np.float64(v)) for v in xs])))

    return approx_fprime(point, scalar_f, eps)


def check_grads(f: Callable[[List[Value]], Any],
                x0: Sequence[float],
                atol: float = 1e-5,
                rtol: float = 1e-3,
                epsilon: Optional[float] = None) -> GradCheckResult:
    """
    Compare reverse-mode gradients of f at x0 against finite differences.

    passed is True when |analytic - numeric| <= atol + rtol * |numeric|
    holds componentwise.
    """
    if atol < 0 or rtol < 0:
        raise ValueError(f"tolerances must be non-negative, got atol={atol}, rtol={rtol}")

    analytic = np.array([float(g) for g in grads_list(f, x0)], dtype=np.float64)
    numeric = numerical_grads(f, x0, epsilon)
    max_abs_error = float(np.max(np.abs(analytic - numeric))) if analytic.size else 0.0
    passed = bool(np.allclose(analytic, numeric, atol=atol, rtol=rtol))

    if passed:
        logger.debug("gradient check passed (max abs error %.3e)", max_abs_error)
    else:
        logger.warning("gradient check failed: analytic=%s numeric=%s", analytic, numeric)
    return GradCheckResult(analytic, numeric, max_abs_error, passed)
