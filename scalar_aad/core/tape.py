# scalar_aad/core/tape.py
from __future__ import annotations

from typing import Dict, Iterator, List, TYPE_CHECKING

if TYPE_CHECKING:
    from .var import Value


class Tape:
    """
    Arena for one reverse pass: records nodes in forward (topological) order
    and hands out integer handles. Two operands referring to the same node
    resolve to the same handle.
    """
    def __init__(self):
        self.nodes: List["Value"] = []
        self._index: Dict[int, int] = {}  # id(node) -> handle

    def __len__(self):
        return len(self.nodes)

    def __iter__(self) -> Iterator["Value"]:
        return iter(self.nodes)

    def __contains__(self, node) -> bool:
        return id(node) in self._index

    def reset(self):
        self.nodes.clear()
        self._index.clear()

    def push_node(self, node: "Value") -> int:
        """Append `node` and return its handle."""
        handle = len(self.nodes)
        self.nodes.append(node)
        self._index[id(node)] = handle
        return handle

    def handle(self, node: "Value") -> int:
        return self._index[id(node)]

    @classmethod
    def trace(cls, output: "Value") -> "Tape":
        """
        Record every tracked node reachable from `output` so that operands
        come before the nodes computed from them; `output` is last.

        Only traversable operands (borrowed nodes that track gradients) are
        followed. Iterative post-order DFS, so graph depth is not limited by
        the interpreter's recursion limit.
        """
        tape = cls()
        if not output.requires_grad:
            return tape
        seen = set()
        stack = [(output, False)]
        while stack:
            node, expanded = stack.pop()
            if expanded:
                tape.push_node(node)
                continue
            if id(node) in seen:
                continue
            seen.add(id(node))
            stack.append((node, True))
            for parent in node.parents():
                if id(parent) not in seen:
                    stack.append((parent, False))
        return tape
