"""
Tests for the per-type gradient rules and their registry.
"""

import math
from decimal import Decimal

import numpy as np
import pytest

from scalar_aad import Differentiable, Value, register, rules_for
from scalar_aad.core.differentiable import is_registered, unregister


@pytest.fixture
def decimal_rules():
    rules = register(Differentiable(
        dtype=Decimal,
        zero_grad=lambda: Decimal(0),
        eye_grad=lambda: Decimal(1),
        pow=lambda a, b: a ** b,
        log=lambda a: a.ln(),
    ))
    yield rules
    unregister(Decimal)


@pytest.mark.parametrize("dtype", [np.float32, np.float64])
def test_numpy_identities(dtype):
    rules = rules_for(dtype)
    assert rules.zero_grad() == 0 and type(rules.zero_grad()) is dtype
    assert rules.eye_grad() == 1 and type(rules.eye_grad()) is dtype


@pytest.mark.parametrize("dtype", [np.float32, np.float64])
def test_numpy_transcendentals_keep_width(dtype):
    rules = rules_for(dtype(2.0))
    p = rules.pow(dtype(2.0), dtype(3.0))
    assert p == 8 and type(p) is dtype
    lg = rules.log(dtype(math.e))
    assert lg == pytest.approx(1.0, rel=1e-6) and type(lg) is dtype


def test_unregistered_types_rejected():
    with pytest.raises(TypeError):
        rules_for(1.5)  # plain float: coerce through Value instead
    with pytest.raises(TypeError):
        rules_for(object())
    assert not is_registered(complex)


def test_float32_graph_stays_float32():
    x = Value.new(np.float32(1.5))
    y = Value.new(np.float32(2.0))
    z = x * y + x.pow(y)
    z.backward()
    assert type(z.data) is np.float32
    assert type(x.grad) is np.float32
    assert type(y.grad) is np.float32
    assert x.grad == pytest.approx(2.0 + 2.0 * 1.5, rel=1e-6)


def test_custom_type_registration(decimal_rules):
    assert rules_for(Decimal("1")) is decimal_rules

    x, y = Value.new(Decimal(3)), Value.new(Decimal(4))
    (x * y + x).backward()
    assert x.grad == Decimal(5)
    assert y.grad == Decimal(3)
    assert isinstance(x.grad, Decimal)


def test_custom_type_division_and_power(decimal_rules):
    x, y = Value.new(Decimal(1)), Value.new(Decimal(4))
    (x / y).backward()
    assert x.grad == Decimal("0.25")
    assert y.grad == Decimal("-0.0625")

    a, b = Value.new(Decimal(2)), Value.new(Decimal(3))
    a.pow(b).backward()
    assert a.grad == Decimal(12)
    assert float(b.grad) == pytest.approx(8.0 * math.log(2.0))


def test_custom_type_constants_follow_node(decimal_rules):
    x = Value.new(Decimal(2))
    z = x * 3
    assert isinstance(z.data, Decimal)
    assert z.data == Decimal(6)
