"""
Tests for graph tracing and inspection helpers.
"""

from scalar_aad import Tape, Value
from scalar_aad.core.graph_utils import (
    get_graph_stats,
    print_computation_graph,
    print_graph_summary,
)


# ============================================================================
# TAPE
# ============================================================================

def test_trace_orders_operands_before_results():
    x, y = Value.new(1.0), Value.new(2.0)
    z = x * y
    out = z + x
    tape = Tape.trace(out)
    assert len(tape) == 4
    assert tape.nodes[-1] is out
    assert tape.handle(z) > tape.handle(x)
    assert tape.handle(z) > tape.handle(y)


def test_same_node_gets_one_handle():
    x = Value.new(1.0)
    tape = Tape.trace(x + x)
    assert len(tape) == 2
    assert x in tape


def test_trace_skips_untracked_and_constants():
    x, c = Value.new(1.0), Value.coeff(2.0)
    out = x * c + 3.0
    tape = Tape.trace(out)
    assert c not in tape
    assert len(tape) == 3


def test_trace_of_untracked_output_is_empty():
    assert len(Tape.trace(Value.coeff(1.0))) == 0


def test_tape_reset():
    x = Value.new(1.0)
    tape = Tape.trace(x * x)
    tape.reset()
    assert len(tape) == 0
    assert x not in tape


# ============================================================================
# STATS
# ============================================================================

def test_graph_stats():
    x, y = Value.new(1.0), Value.new(2.0)
    out = x * y + x
    stats = get_graph_stats(out)
    assert stats["nodes"] == 4
    assert stats["edges"] == 4
    assert stats["leaves"] == 2
    assert stats["max_fan_in"] == 2
    assert stats["max_fan_out"] == 2
    assert stats["operations"] == {"leaf": 2, "mul": 1, "add": 1}


def test_graph_stats_aliased_operand():
    x = Value.new(1.0)
    stats = get_graph_stats(x + x)
    assert stats["nodes"] == 2
    assert stats["edges"] == 2
    assert stats["max_fan_out"] == 2


def test_graph_stats_empty():
    stats = get_graph_stats(Value.coeff(1.0))
    assert stats["nodes"] == 0
    assert stats["operations"] == {}


# ============================================================================
# PRINTING
# ============================================================================

def test_print_graph_summary(capsys):
    x = Value.new(1.0)
    stats = print_graph_summary(x * 2.0)
    out = capsys.readouterr().out
    assert "COMPUTATION GRAPH SUMMARY" in out
    assert "mul" in out
    assert stats["nodes"] == 2


def test_print_computation_graph(capsys):
    x = Value.new(1.0, name="x")
    y = Value.new(2.0)
    out = (x * 3.0 + y) / y
    out.backward()
    print_computation_graph(out, max_nodes=3)
    text = capsys.readouterr().out
    assert "COMPUTATION GRAPH STRUCTURE" in text
    assert "const(3)" in text
    assert "more nodes" in text


def test_print_empty_graph(capsys):
    print_computation_graph(Value.coeff(1.0))
    assert "Empty graph" in capsys.readouterr().out
