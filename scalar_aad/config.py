"""
Engine configuration.

A single process-wide `AADConfig` holds the defaults the engine falls back to
when a caller does not pass an explicit argument:

    dtype       scalar type raw Python numbers are coerced to
    accumulate  whether backward() adds onto existing gradients (True) or
                resets every traced node first (False)
    fd_epsilon  step used by the finite-difference checks
"""
from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, fields, replace

import numpy as np

from .core.differentiable import is_registered


@dataclass(frozen=True)
class AADConfig:
    """Configuration for graph construction and reverse passes."""
    dtype: type = np.float64
    accumulate: bool = True
    fd_epsilon: float = 1e-6


_config = AADConfig()


def get_config() -> AADConfig:
    return _config


def _validated(base: AADConfig, changes: dict) -> AADConfig:
    known = {f.name for f in fields(AADConfig)}
    unknown = set(changes) - known
    if unknown:
        raise TypeError(f"unknown config option(s): {', '.join(sorted(unknown))}")
    cfg = replace(base, **changes)
    if not isinstance(cfg.dtype, type) or not is_registered(cfg.dtype):
        raise TypeError(f"dtype {cfg.dtype!r} has no registered Differentiable rules")
    if cfg.fd_epsilon <= 0:
        raise ValueError(f"fd_epsilon must be positive, got {cfg.fd_epsilon}")
    return cfg


def set_config(**changes) -> AADConfig:
    """Update the process-wide configuration and return the new value."""
    global _config
    _config = _validated(_config, changes)
    return _config


@contextmanager
def use_config(**overrides):
    """
    Temporarily override configuration values:
        with use_config(accumulate=False):
            y.backward()
    """
    global _config
    prev = _config
    try:
        _config = _validated(prev, overrides)
        yield _config
    finally:
        _config = prev
