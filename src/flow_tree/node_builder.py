"""
Node building pass: one `FlowNode` per row with an account identifier.

No deduplication happens here. Ten rows naming the same account produce ten
nodes, all reachable through the account index.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, DefaultDict, Dict, Iterable, List

from .column_resolver import (
    ATTRIBUTE_FIELDS,
    DEFAULT_RESOLVER,
    ColumnResolver,
    as_text,
    coerce_layer,
    normalize_row,
)
from .models import FlowNode, NodeSet, Row

logger = logging.getLogger(__name__)


def build_nodes(rows: Iterable[Row], resolver: ColumnResolver | None = None) -> NodeSet:
    """
    Convert rows into nodes and index them by account and by layer.

    Rows without a resolvable account identifier are skipped and only counted.
    For every other row the attribute bag holds the resolved semantic fields
    followed by the raw row, so raw columns overwrite colliding keys.

    Args:
        rows: Ordered row mappings (column name -> scalar).
        resolver: Column resolver to use. Defaults to the built-in alias table.

    Returns:
        NodeSet with nodes in input order, the account index and layer index.

    Example:
        >>> node_set = build_nodes([{"Account No": "A", "Layer": 0}, {"Layer": 1}])
        >>> [n.id for n in node_set.nodes]
        ['A-0']
        >>> node_set.rows_skipped
        1
    """
    resolver = resolver or DEFAULT_RESOLVER

    nodes: List[FlowNode] = []
    account_index: DefaultDict[str, List[FlowNode]] = defaultdict(list)
    layer_index: DefaultDict[int, List[FlowNode]] = defaultdict(list)
    rows_received = 0
    rows_skipped = 0

    for index, row in enumerate(rows):
        rows_received += 1
        normalized = normalize_row(row)

        account_no = resolver.resolve_normalized(normalized, "account_no")
        account_id = as_text(account_no)
        if not account_id:
            rows_skipped += 1
            continue

        layer = coerce_layer(resolver.resolve_normalized(normalized, "layer"))

        attributes: Dict[str, Any] = {"account_no": account_no, "layer": layer}
        for field_name in ATTRIBUTE_FIELDS:
            attributes[field_name] = resolver.resolve_normalized(normalized, field_name)
        attributes.update(row)

        node = FlowNode(
            id=f"{account_id}-{index}",
            account_id=account_id,
            layer=layer,
            attributes=attributes,
        )
        nodes.append(node)
        account_index[account_id].append(node)
        layer_index[layer].append(node)

    if rows_skipped:
        logger.debug(
            "Skipped %d of %d rows without an account identifier",
            rows_skipped,
            rows_received,
        )

    return NodeSet(
        nodes=nodes,
        account_index=dict(account_index),
        layer_index=dict(layer_index),
        rows_received=rows_received,
        rows_skipped=rows_skipped,
    )
