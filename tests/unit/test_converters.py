"""
Unit tests for domain <-> DTO conversion.
"""

from __future__ import annotations

from flow_tree.models import BuildStats
from flow_tree.tree_builder import build_tree
from services.shared.api_models import BuildStatsDTO, FlowTreeDTO
from services.shared.converters import build_stats_to_dto, flow_tree_to_dto, rows_fingerprint
from flow_tree.serialization import MAX_OUTPUT_DEPTH
from tests.fixtures import create_chain_rows, create_layered_rows, create_row


class TestBuildStatsToDto:
    def test_all_fields_copied(self) -> None:
        stats = BuildStats(
            rows_received=5,
            rows_skipped=1,
            nodes_created=4,
            relationships_found=3,
            raw_roots=0,
            roots_selected=1,
            root_fallback="layer_zero",
        )

        dto = build_stats_to_dto(stats)

        assert isinstance(dto, BuildStatsDTO)
        assert dto.model_dump() == {
            "rows_received": 5,
            "rows_skipped": 1,
            "nodes_created": 4,
            "relationships_found": 3,
            "raw_roots": 0,
            "roots_selected": 1,
            "root_fallback": "layer_zero",
        }


class TestFlowTreeToDto:
    def test_example_tree(self, example_rows) -> None:
        dto = flow_tree_to_dto(build_tree(example_rows))

        assert isinstance(dto, FlowTreeDTO)
        assert dto.attributes == {"totalAccounts": 3, "totalLayers": 2}
        assert [c.id for c in dto.children[0].children] == ["B-1", "C-2"]
        assert dto.stats.relationships_found == 2

    def test_cyclic_tree_converts(self) -> None:
        rows = [create_row("A", layer=0, parent="B"), create_row("B", layer=1, parent="A")]

        dto = flow_tree_to_dto(build_tree(rows))

        assert dto.children[0].children[0].children[0].cycle is True

    def test_shared_subtree_converts_as_reference(self) -> None:
        dto = flow_tree_to_dto(build_tree(create_layered_rows(2)))

        first_root, second_root = dto.children
        assert [c.ref for c in first_root.children] == [False, False]
        assert [c.ref for c in second_root.children] == [True, True]

    def test_long_chain_converts(self) -> None:
        dto = flow_tree_to_dto(build_tree(create_chain_rows(1500)))

        node = dto.children[0]
        for _ in range(MAX_OUTPUT_DEPTH - 1):
            node = node.children[0]
        assert node.truncated is True
        assert node.children == []

    def test_empty_tree(self) -> None:
        dto = flow_tree_to_dto(build_tree([]))

        assert dto.name == "No Data"
        assert dto.children == []


class TestRowsFingerprint:
    def test_column_order_does_not_matter(self) -> None:
        assert rows_fingerprint([{"a": 1, "b": 2}]) == rows_fingerprint([{"b": 2, "a": 1}])

    def test_row_order_matters(self) -> None:
        rows = [create_row("A"), create_row("B")]

        assert rows_fingerprint(rows) != rows_fingerprint(list(reversed(rows)))

    def test_hex_digest(self) -> None:
        digest = rows_fingerprint([])

        assert len(digest) == 64
        int(digest, 16)
