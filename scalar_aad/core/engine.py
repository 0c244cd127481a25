# scalar_aad/core/engine.py
from __future__ import annotations

import logging
from typing import List, Optional

from .. import config as config_mod
from .operation import Ref
from .tape import Tape
from .var import Value

logger = logging.getLogger(__name__)


def zero_grads(output: Value):
    """
    Reset the gradient of every tracked node reachable from `output`
    (including `output` itself). Untracked nodes stay untracked.
    """
    for node in Tape.trace(output):
        node.zero_grad()


def reverse(output: Value, accumulate: Optional[bool] = None) -> Tape:
    """
    Run a single reverse pass from `output`.

    Args:
        output: node to differentiate; seeded with dy/dy = eye_grad().
        accumulate: add this pass onto existing gradients (True) or reset every
            traced node first (False). None -> the configured default.

    Returns:
        The traced Tape (empty when `output` does not track gradients).

    Notes:
        - Per-pass adjoints live in a list indexed by tape handle; stored
          gradients are only written once the sweep is complete, so gradients
          left over from earlier passes never enter the chain rule.
        - For each node: adj[p] += adj[y] * (∂y/∂p), for each traversable p.
    """
    if accumulate is None:
        accumulate = config_mod.get_config().accumulate

    tape = Tape.trace(output)
    if not len(tape):
        logger.debug("reverse(%r): output does not track gradients, nothing to do", output)
        return tape

    if not accumulate:
        for node in tape:
            node.zero_grad()

    adjoints = [node.rules.zero_grad() for node in tape]
    adjoints[tape.handle(output)] = output.rules.eye_grad()
    _propagate(tape, adjoints)

    for node, adj in zip(tape.nodes, adjoints):
        node._accumulate(adj)

    logger.debug("reverse pass over %d node(s) (accumulate=%s)", len(tape), accumulate)
    return tape


def _propagate(tape: Tape, adjoints: List):
    """
    Backward sweep in reverse topological order. Every node's adjoint is
    complete (all paths summed) by the time the node is visited. Operands that
    are the same node share a handle: both contributions land in one slot and
    the node is visited once.
    """
    for i in range(len(tape) - 1, -1, -1):
        node = tape.nodes[i]
        op = node.operation
        if op is None:
            continue  # leaf: end of graph
        for operand, delta in op.backward(adjoints[i], node.rules):
            if not isinstance(operand, Ref) or not operand.traversable:
                continue
            j = tape.handle(operand.node)
            adjoints[j] = adjoints[j] + delta
