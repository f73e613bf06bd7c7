"""Deterministic tree traversal."""

from __future__ import annotations

from collections.abc import Iterator

from synlint.kernel.syntax.nodes import Node


def walk(node: Node) -> Iterator[Node]:
    """Yield every node of the subtree exactly once, in post-order.

    Children are visited left to right before the node that contains them.
    The walk is iterative so deeply chained expressions do not hit the
    interpreter's recursion limit.
    """
    stack: list[tuple[Node, Iterator[Node]]] = [(node, node.children())]
    while stack:
        current, children = stack[-1]
        child = next(children, None)
        if child is None:
            stack.pop()
            yield current
        else:
            stack.append((child, child.children()))
