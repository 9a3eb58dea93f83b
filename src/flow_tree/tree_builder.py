"""
Money-flow hierarchy construction.

This module exposes `build_tree`, which:
  - Builds one node per row with an account identifier.
  - Links each node under the node(s) of its declared parent account.
  - Selects the top-level nodes (with fallbacks for fully linked input).
  - Wraps them in a synthetic root carrying summary attributes.

The whole transformation is synchronous and keeps no state between calls.
Well-formed input never raises; degenerate input degrades to a placeholder or
a best-effort hierarchy.
"""

from __future__ import annotations

import logging
from typing import Iterable

from .column_resolver import ColumnResolver
from .linker import link_relationships
from .models import EMPTY_NAME, ROOT_NAME, BuildStats, FlowTree, Row
from .node_builder import build_nodes
from .root_selector import select_roots

logger = logging.getLogger(__name__)


def build_tree(rows: Iterable[Row], resolver: ColumnResolver | None = None) -> FlowTree:
    """
    Build the money-flow hierarchy for a sequence of rows.

    Args:
        rows: Ordered row mappings (column name -> scalar value).
        resolver: Column resolver with the alias table to use. Defaults to
            the built-in aliases.

    Returns:
        FlowTree whose children are the selected root nodes. When no row has
        an account identifier the "No Data" placeholder is returned.

    Example:
        >>> tree = build_tree([
        ...     {"AccountNo": "A", "Layer": 0},
        ...     {"AccountNo": "B", "Layer": 1, "Parent": "A"},
        ...     {"AccountNo": "C", "Layer": 1, "Parent": "A"},
        ... ])
        >>> [root.name for root in tree.children]
        ['A']
        >>> [child.name for child in tree.children[0].children]
        ['B', 'C']
        >>> tree.attributes
        {'totalAccounts': 3, 'totalLayers': 2}
    """
    node_set = build_nodes(rows, resolver)

    if not node_set.nodes:
        logger.info(
            "No account identifiers found in %d rows; returning empty tree",
            node_set.rows_received,
        )
        return FlowTree(
            name=EMPTY_NAME,
            stats=BuildStats(
                rows_received=node_set.rows_received,
                rows_skipped=node_set.rows_skipped,
            ),
        )

    relationships = link_relationships(node_set.nodes, node_set.account_index, resolver)
    raw_roots = sum(1 for node in node_set.nodes if not node.has_parent)
    roots, fallback = select_roots(node_set.nodes)

    if fallback != "none":
        logger.warning(
            "Every node has a parent; using %s fallback for %d root(s)",
            fallback,
            len(roots),
        )

    stats = BuildStats(
        rows_received=node_set.rows_received,
        rows_skipped=node_set.rows_skipped,
        nodes_created=len(node_set.nodes),
        relationships_found=relationships,
        raw_roots=raw_roots,
        roots_selected=len(roots),
        root_fallback=fallback,
    )
    logger.info(
        "Built flow tree: nodes=%d, relationships=%d, roots=%d, layers=%d, skipped_rows=%d",
        stats.nodes_created,
        stats.relationships_found,
        stats.roots_selected,
        len(node_set.layer_index),
        stats.rows_skipped,
    )

    return FlowTree(
        name=ROOT_NAME,
        attributes={
            "totalAccounts": len(node_set.nodes),
            "totalLayers": len(node_set.layer_index),
        },
        children=roots,
        stats=stats,
    )
