"""
Test fixtures and factory functions for creating test data.

This module provides factory functions for creating test data objects
to reduce duplication across test files.
"""

from .test_data_factories import (
    create_build_request,
    create_chain_rows,
    create_layered_rows,
    create_row,
)

__all__ = [
    "create_row",
    "create_chain_rows",
    "create_layered_rows",
    "create_build_request",
]
