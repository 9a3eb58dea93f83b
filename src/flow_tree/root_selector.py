"""Root selection for a linked node list."""

from __future__ import annotations

from typing import List, Sequence, Tuple

from .models import FlowNode, RootFallback


def select_roots(nodes: Sequence[FlowNode]) -> Tuple[List[FlowNode], RootFallback]:
    """
    Pick the top-level nodes of the hierarchy.

    Roots are nodes nobody linked as a child. When every node has a parent
    (fully cyclic data), layer-0 nodes are used instead, and failing that the
    first node in input order.

    Returns:
        Tuple of (roots, fallback) where fallback names the rule that applied:
        "none", "layer_zero" or "first_node". Roots are empty only when
        `nodes` is empty.
    """
    roots = [node for node in nodes if not node.has_parent]
    if roots or not nodes:
        return roots, "none"

    roots = [node for node in nodes if node.layer == 0]
    if roots:
        return roots, "layer_zero"

    return [nodes[0]], "first_node"
