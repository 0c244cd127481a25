"""
Graph inspection helpers.
Print and summarise the structure of the graph reachable from an output node.
"""

import numpy as np
from typing import Dict, List
from collections import Counter

from .operation import Ref
from .tape import Tape


def _tag(node) -> str:
    return node.operation.kind.value if node.operation is not None else "leaf"


def _operand_labels(node, tape: Tape) -> List[str]:
    labels = []
    for operand in node.operation.operands:
        if isinstance(operand, Ref) and operand.node in tape:
            labels.append(f"Node{tape.handle(operand.node)}")
        elif isinstance(operand, Ref):
            labels.append("untracked")
        else:
            labels.append(f"const({float(operand.data):g})")
    return labels


def get_graph_stats(output) -> Dict:
    """
    Statistics of the traced graph (nothing is printed).

    fan-in counts the operands of each node, constants included; fan-out
    counts how many traced nodes borrow each node.

    Returns:
        dict with nodes, edges, leaves, max/avg fan-in, max/avg fan-out and
        the per-operation breakdown
    """
    tape = Tape.trace(output)
    if not len(tape):
        return {
            'nodes': 0,
            'edges': 0,
            'leaves': 0,
            'max_fan_in': 0,
            'avg_fan_in': 0.0,
            'max_fan_out': 0,
            'avg_fan_out': 0.0,
            'operations': {}
        }

    n_nodes = len(tape)
    fan_ins = [len(node.operation.operands) if node.operation else 0 for node in tape]

    # x + x is one node used twice: one edge per operand position
    fan_outs = [0] * n_nodes
    for node in tape:
        for parent in node.parents():
            fan_outs[tape.handle(parent)] += 1

    op_counter = Counter(_tag(node) for node in tape)

    return {
        'nodes': n_nodes,
        'edges': sum(fan_outs),
        'leaves': op_counter.get('leaf', 0),
        'max_fan_in': max(fan_ins),
        'avg_fan_in': float(np.mean(fan_ins)),
        'max_fan_out': max(fan_outs),
        'avg_fan_out': float(np.mean(fan_outs)),
        'operations': dict(op_counter)
    }


def print_graph_summary(output) -> Dict:
    """
    Print the graph summary.

    Returns:
        the statistics dict from get_graph_stats
    """
    stats = get_graph_stats(output)
    if stats['nodes'] == 0:
        print("Empty computation graph")
        return stats

    print("\n" + "="*70)
    print("COMPUTATION GRAPH SUMMARY")
    print("="*70)
    print(f"Total nodes:        {stats['nodes']:,}")
    print(f"Total edges:        {stats['edges']:,}")
    print(f"Leaves:             {stats['leaves']:,}")
    print(f"Max fan-in:         {stats['max_fan_in']}")
    print(f"Avg fan-in:         {stats['avg_fan_in']:.2f}")
    print(f"Max fan-out:        {stats['max_fan_out']}")
    print(f"Avg fan-out:        {stats['avg_fan_out']:.2f}")
    print()
    print("Operation breakdown:")
    for op_type, count in Counter(stats['operations']).most_common():
        pct = 100.0 * count / stats['nodes']
        print(f"  {op_type:12s}: {count:6,} ({pct:5.1f}%)")
    print("="*70 + "\n")
    return stats


def print_computation_graph(output, max_nodes: int = 20) -> None:
    """
    Print one line per traced node, operands first, output last.

    Args:
        output: node the graph is traced from
        max_nodes: print at most this many nodes
    """
    tape = Tape.trace(output)
    print("\n" + "="*70)
    print("COMPUTATION GRAPH STRUCTURE")
    print("="*70)

    if not len(tape):
        print("Empty graph")
        return

    for i, node in enumerate(tape.nodes[:max_nodes]):
        data = float(node.data)
        grad = float(node.grad) if node.grad is not None else float("nan")
        if node.operation is not None:
            operand_info = ", ".join(_operand_labels(node, tape))
            print(f"Node {i:4d}: {_tag(node):6s} ({data:10.6f}, grad {grad:10.6f}) <- [{operand_info}]")
        else:
            label = node.name if node.name is not None else "leaf"
            print(f"Node {i:4d}: {label:6s} ({data:10.6f}, grad {grad:10.6f}) [leaf/input]")

    if len(tape) > max_nodes:
        print(f"... ({len(tape) - max_nodes} more nodes)")

    print("="*70 + "\n")
