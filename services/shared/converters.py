"""
Conversion utilities between domain models and API DTOs.

The nested tree is flattened to plain dicts by `flow_tree.serialization`
first, which also cuts cycles, shared subtrees and over-deep nesting, so
the DTOs never see a recursive or exponentially large structure.
"""

from __future__ import annotations

import hashlib
import json
from dataclasses import asdict
from typing import Any, Mapping, Sequence

from flow_tree.models import BuildStats, FlowTree
from flow_tree.serialization import tree_to_dict

from .api_models import BuildStatsDTO, FlowTreeDTO


def build_stats_to_dto(stats: BuildStats) -> BuildStatsDTO:
    """Convert domain BuildStats to its API DTO."""
    return BuildStatsDTO(**asdict(stats))


def flow_tree_to_dto(tree: FlowTree) -> FlowTreeDTO:
    """
    Convert a built FlowTree to its API DTO.

    Example:
        >>> from flow_tree import build_tree
        >>> dto = flow_tree_to_dto(build_tree([{"AccountNo": "A"}]))
        >>> dto.attributes
        {'totalAccounts': 1, 'totalLayers': 1}
    """
    return FlowTreeDTO.model_validate(tree_to_dict(tree))


def rows_fingerprint(rows: Sequence[Mapping[str, Any]]) -> str:
    """
    SHA256 hexdigest of the rows, independent of column order within a row.

    Row order is part of the fingerprint because node ids depend on it.
    """
    canonical = json.dumps(list(rows), sort_keys=True, ensure_ascii=False, default=str)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()
