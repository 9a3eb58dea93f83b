"""
Flow Tree package.

This package provides:
- Data models for flow nodes and the built hierarchy.
- Column resolution for inconsistently named transaction columns.
- Node building, relationship linking and root selection.
- I/O helpers to read transaction CSV files and write the hierarchy as JSON.
- A small `run_pipeline` orchestration helper.
"""

from .column_resolver import ColumnResolver
from .models import BuildStats, FlowNode, FlowTree
from .serialization import tree_to_dict
from .tree_builder import build_tree

__all__ = [
    "BuildStats",
    "ColumnResolver",
    "FlowNode",
    "FlowTree",
    "build_tree",
    "tree_to_dict",
]
