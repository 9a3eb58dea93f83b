"""
Pytest configuration and fixtures for test suite.

Puts the project root on sys.path (for `services` and `main`) and provides
common row fixtures.
"""

import sys
from pathlib import Path

import pytest

project_root = Path(__file__).resolve().parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from tests.fixtures import create_chain_rows, create_row  # noqa: E402


@pytest.fixture
def example_rows() -> list[dict]:
    """Origin A at layer 0 sending to B and C at layer 1."""
    return [
        create_row("A", layer=0),
        create_row("B", layer=1, parent="A"),
        create_row("C", layer=1, parent="A"),
    ]


@pytest.fixture
def chain_rows() -> list[dict]:
    """Linear chain ACC0 -> ACC1 -> ACC2 -> ACC3."""
    return create_chain_rows(4)
