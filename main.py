#!/usr/bin/env python3
"""
CLI entry point for the flow tree builder.

Reads a transaction CSV export, reconstructs the money-flow hierarchy and
writes it as JSON for the rendering layer.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from flow_tree.orchestrator import run_pipeline
from flow_tree.utils.row_io import DEFAULT_MAX_ROWS


def main(argv: list[str] | None = None) -> int:
    """Main entry point for CLI."""
    parser = argparse.ArgumentParser(
        description="Reconstruct money-flow hierarchies from transaction sheets.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py
  python main.py input/transactions.csv output/flow_tree.json
  python main.py custom/input.csv custom/tree.json --max-rows 5000
        """,
    )
    parser.add_argument(
        "input",
        nargs="?",
        default="input/transactions.csv",
        help="Path to input transactions CSV file (default: input/transactions.csv)",
    )
    parser.add_argument(
        "output",
        nargs="?",
        default="output/flow_tree.json",
        help="Path of the JSON file to write (default: output/flow_tree.json)",
    )
    parser.add_argument(
        "--max-rows",
        type=int,
        default=DEFAULT_MAX_ROWS,
        help=f"Reject inputs with more data rows than this (default: {DEFAULT_MAX_ROWS})",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log build progress to stderr",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    input_path = Path(args.input)
    output_path = Path(args.output)

    if not input_path.exists():
        print(f"Error: Input file not found: {input_path}", file=sys.stderr)
        print("Please ensure the file exists and try again.", file=sys.stderr)
        return 1

    try:
        print(f"Reading transactions from: {input_path}")
        tree = run_pipeline(input_path, output_path, max_rows=args.max_rows)
    except ValueError as e:
        print(f"Error: Failed to parse input file: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error writing output: {e}", file=sys.stderr)
        return 1

    if tree.is_empty:
        print("\nNo account identifiers found; wrote empty tree.")
    else:
        print("\n✓ Flow tree built!")
        print(f"  Accounts: {tree.total_accounts}")
        print(f"  Layers:   {tree.total_layers}")
        print(f"  Roots:    {len(tree.children)}")
    print(f"  Output:   {output_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
