"""
Plain nested-structure export of a built flow tree.

The rendering layer consumes `{name, attributes, children}` recursively.
A node may have several parents and the data may contain cycles, so the
export is a walk over a graph rather than a tree:

- a node's subtree is emitted the first time the node is reached; later
  occurrences under other parents are emitted with no children and
  `"ref": True`, which keeps the output linear in the number of edges
- a node met again on its own ancestor path is emitted with no children and
  `"cycle": True`
- a node with children at `max_depth` is emitted with no children and
  `"truncated": True`

The walk uses an explicit stack, and the depth cap keeps the nesting within
what JSON encoders and the API models can handle.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, List, Sequence, Set, Tuple

from .models import FlowNode, FlowTree

logger = logging.getLogger(__name__)

MAX_OUTPUT_DEPTH = 64

_ENTER = "enter"
_EXIT = "exit"

_Frame = Tuple[str, FlowNode, List[Dict[str, Any]], int]


def _node_entry(node: FlowNode) -> Dict[str, Any]:
    return {
        "name": node.name,
        "id": node.id,
        "layer": node.layer,
        "attributes": dict(node.attributes),
        "children": [],
    }


def _emit_nodes(
    roots: Sequence[FlowNode], max_depth: int
) -> Tuple[List[Dict[str, Any]], int]:
    """Walk `roots` depth-first and return their entries plus the truncation count."""
    output: List[Dict[str, Any]] = []
    emitted: Set[str] = set()
    path: Set[str] = set()
    truncated = 0
    stack: List[_Frame] = [(_ENTER, root, output, 1) for root in reversed(roots)]

    while stack:
        action, node, siblings, depth = stack.pop()
        if action == _EXIT:
            path.discard(node.id)
            continue

        entry = _node_entry(node)
        siblings.append(entry)
        if node.id in path:
            entry["cycle"] = True
            continue
        if node.id in emitted:
            entry["ref"] = True
            continue
        if not node.children:
            emitted.add(node.id)
            continue
        if depth >= max_depth:
            # Not marked emitted: a shallower occurrence may still carry the subtree.
            entry["truncated"] = True
            truncated += 1
            continue

        emitted.add(node.id)
        path.add(node.id)
        stack.append((_EXIT, node, siblings, depth))
        for child in reversed(node.children):
            stack.append((_ENTER, child, entry["children"], depth + 1))

    return output, truncated


def node_to_dict(node: FlowNode, max_depth: int = MAX_OUTPUT_DEPTH) -> Dict[str, Any]:
    """Convert a node and its descendants to nested dicts."""
    (data,), _ = _emit_nodes([node], max_depth)
    return data


def tree_to_dict(tree: FlowTree, max_depth: int = MAX_OUTPUT_DEPTH) -> Dict[str, Any]:
    """
    Convert a FlowTree (synthetic root, roots and stats) to nested dicts.

    Roots share one walk, so a subtree reachable from two roots is emitted
    under the first and referenced under the second.
    """
    children, truncated = _emit_nodes(tree.children, max_depth)
    if truncated:
        logger.warning(
            "Flow tree output cut at depth %d: truncated_nodes=%d", max_depth, truncated
        )
    return {
        "name": tree.name,
        "attributes": dict(tree.attributes),
        "children": children,
        "stats": asdict(tree.stats),
    }


def write_tree_json(path: Path, tree: FlowTree) -> None:
    """
    Write a FlowTree to `path` as UTF-8 JSON.

    Parent directories are created when missing. The document is written to a
    sibling temporary file first, so an existing `path` is only replaced by a
    complete document.
    """
    data = tree_to_dict(tree)
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_name(path.name + ".tmp")
    try:
        with tmp_path.open("w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
        tmp_path.replace(path)
    finally:
        tmp_path.unlink(missing_ok=True)
