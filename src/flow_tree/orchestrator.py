"""
End-to-end orchestration for the flow tree builder.

This module exposes a small function `run_pipeline` that:
  - Reads the transactions CSV.
  - Builds the money-flow hierarchy.
  - Writes the hierarchy as JSON for the rendering layer.
"""

from __future__ import annotations

from pathlib import Path

from .models import FlowTree
from .serialization import write_tree_json
from .tree_builder import build_tree
from .utils.row_io import DEFAULT_MAX_ROWS, read_rows


def run_pipeline(
    input_path: Path,
    output_path: Path,
    max_rows: int = DEFAULT_MAX_ROWS,
) -> FlowTree:
    """
    Run the full pipeline from CSV file to JSON hierarchy.

    Args:
        input_path: Path to the transactions CSV file.
        output_path: Path of the JSON file to write.
        max_rows: Upper bound on input rows.

    Returns:
        The built FlowTree (also written to `output_path`).

    Raises:
        FileNotFoundError: If input_path does not exist.
        ValueError: If the input file is rejected by the reader.
        OSError: If the output file cannot be written.

    Example:
        >>> from pathlib import Path
        >>> tree = run_pipeline(
        ...     Path("input/transactions.csv"),
        ...     Path("output/flow_tree.json"),
        ... )
    """
    rows = read_rows(input_path, max_rows=max_rows)
    tree = build_tree(rows)
    write_tree_json(output_path, tree)
    return tree
