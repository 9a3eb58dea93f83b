"""
Domain models for the flow tree builder.

These models are intentionally kept framework-agnostic (plain dataclasses)
to keep dependencies minimal and make reasoning/testing straightforward.

`FlowNode` is mutable because the relationship linker attaches children in
place. A node may sit in several parents' `children` lists and the graph may
contain cycles, so nodes compare by identity only.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Mapping, Union

RowValue = Union[str, int, float, bool, None]
Row = Mapping[str, RowValue]

RootFallback = Literal["none", "layer_zero", "first_node"]

ROOT_NAME = "Transaction Flow"
EMPTY_NAME = "No Data"


@dataclass(eq=False)
class FlowNode:
    """
    One input row with a resolvable account identifier.

    `id` is unique per row; `account_id` repeats when several rows mention
    the same account.
    """

    id: str
    account_id: str
    layer: int
    attributes: Dict[str, Any] = field(default_factory=dict, repr=False)
    children: List["FlowNode"] = field(default_factory=list, repr=False)
    has_parent: bool = False

    @property
    def name(self) -> str:
        """Display label used by the rendering layer."""
        return self.account_id


AccountIndex = Dict[str, List[FlowNode]]
LayerIndex = Dict[int, List[FlowNode]]


@dataclass(frozen=True)
class NodeSet:
    """
    Output of the node building pass.

    - nodes: flat list in input row order
    - account_index: account_id -> nodes sharing it (duplicates preserved)
    - layer_index: layer -> nodes, used for summary statistics only
    """

    nodes: List[FlowNode]
    account_index: AccountIndex
    layer_index: LayerIndex
    rows_received: int
    rows_skipped: int


@dataclass(frozen=True)
class BuildStats:
    """Counts gathered while building one tree."""

    rows_received: int = 0
    rows_skipped: int = 0
    nodes_created: int = 0
    relationships_found: int = 0
    raw_roots: int = 0
    roots_selected: int = 0
    root_fallback: RootFallback = "none"


@dataclass
class FlowTree:
    """
    Synthetic root of a built hierarchy.

    `attributes` carries `totalAccounts` and `totalLayers` for a populated
    tree and is empty for the "No Data" placeholder.
    """

    name: str
    attributes: Dict[str, int] = field(default_factory=dict)
    children: List[FlowNode] = field(default_factory=list, repr=False)
    stats: BuildStats = field(default_factory=BuildStats)

    @property
    def total_accounts(self) -> int:
        return self.attributes.get("totalAccounts", 0)

    @property
    def total_layers(self) -> int:
        return self.attributes.get("totalLayers", 0)

    @property
    def is_empty(self) -> bool:
        return self.name == EMPTY_NAME
