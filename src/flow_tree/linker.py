"""
Relationship linking: attach each node under the node(s) of its parent account.

A row names its parent by account identifier only. When that account appears
in several rows, the node is attached under every plausible match instead of
picking one; a missed edge costs an investigator more than a duplicate edge.

The literal "null" is accepted as "no parent" in any casing ("NULL", "Null"),
since sheet exports spell it inconsistently.
"""

from __future__ import annotations

from typing import List, Mapping, Sequence

from .column_resolver import DEFAULT_RESOLVER, ColumnResolver, as_text
from .models import FlowNode


def resolve_parent_account(node: FlowNode, resolver: ColumnResolver | None = None) -> str | None:
    """
    Return the parent account identifier declared on a node, if any.

    The literal string "null" (any casing) counts as no parent.
    """
    resolver = resolver or DEFAULT_RESOLVER
    parent = as_text(resolver.resolve(node.attributes, "parent_account_no"))
    if not parent or parent.lower() == "null":
        return None
    return parent


def select_parents(node: FlowNode, candidates: Sequence[FlowNode]) -> List[FlowNode]:
    """
    Choose which candidate nodes become parents of `node`.

    Candidates exactly one layer above the node win. If none sit there, every
    candidate is used so a declared relationship survives inconsistent layer
    labelling.
    """
    strict = [candidate for candidate in candidates if candidate.layer == node.layer - 1]
    return strict if strict else list(candidates)


def link_relationships(
    nodes: Sequence[FlowNode],
    account_index: Mapping[str, Sequence[FlowNode]],
    resolver: ColumnResolver | None = None,
) -> int:
    """
    Attach nodes to their parents in place.

    Single pass over `nodes` keyed by already-indexed accounts, so cycles in
    the data cannot cause non-termination here.

    Args:
        nodes: Flat node list from the node builder.
        account_index: account_id -> nodes sharing that account.
        resolver: Column resolver used for the parent field.

    Returns:
        Number of parent -> child edges created.
    """
    relationships = 0
    for node in nodes:
        parent_account = resolve_parent_account(node, resolver)
        if parent_account is None:
            continue
        candidates = account_index.get(parent_account)
        if not candidates:
            continue
        for parent in select_parents(node, candidates):
            parent.children.append(node)
            node.has_parent = True
            relationships += 1
    return relationships
