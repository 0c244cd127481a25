# scalar_aad/__init__.py
# Scalar reverse-mode automatic adjoint differentiation

from .core import (
    Value,
    Differentiable,
    register,
    rules_for,
    Tape,
    reverse,
    zero_grads,
    grad,
    grads,
    grads_list,
    value,
)
from . import ops
from .config import AADConfig, get_config, set_config, use_config
from .checks import GradCheckResult, check_grads, numerical_grads

__all__ = [
    # Core
    'Value',
    'Differentiable',
    'register',
    'rules_for',
    'Tape',
    # Engine
    'reverse',
    'zero_grads',
    'grad',
    'grads',
    'grads_list',
    'value',
    'ops',
    # Config
    'AADConfig',
    'get_config',
    'set_config',
    'use_config',
    # Checks
    'GradCheckResult',
    'check_grads',
    'numerical_grads',
]
