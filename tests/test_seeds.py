"""
Tests for the functional gradient helpers.
"""

import math

import pytest

from scalar_aad import Value, grad, grads, grads_list, value


def test_grad_single_input():
    assert grad(lambda x: x * x * x, 2.0) == pytest.approx(12.0)


def test_grads_dict_keeps_key_order():
    out = grads(lambda v: v["a"] * v["b"] + v["a"], {"a": 3.0, "b": 4.0})
    assert list(out) == ["a", "b"]
    assert out["a"] == 5
    assert out["b"] == 3


def test_grads_list_example():
    g = grads_list(lambda xs: xs[0] * xs[0] + 3 * xs[1], [2.0, 4.0])
    assert g == [4.0, 3.0]


def test_grads_list_power():
    g = grads_list(lambda xs: xs[0].pow(xs[1]), [2.0, 3.0])
    assert g[0] == pytest.approx(12.0)
    assert g[1] == pytest.approx(8.0 * math.log(2.0))


def test_constant_function_has_zero_gradient():
    assert grad(lambda x: 5.0, 1.0) == 0


def test_unused_input_has_zero_gradient():
    g = grads_list(lambda xs: xs[0] * 2.0, [1.0, 7.0])
    assert g == [2.0, 0.0]


def test_existing_node_is_used_clean_slate():
    x = Value.new(3.0)
    (x * x).backward()
    assert grad(lambda v: v * 2.0, x) == 2
    assert x.grad == 2


def test_value_helper():
    assert value(Value.new(2.5)) == 2.5
    assert value(3) == 3
