from __future__ import annotations

import pytest

from catalog_mermaid.assemblers import (
    build_diagram,
    get_assembler_for,
    is_assembler_registered,
    list_registered_kinds,
    register_assembler,
)
from catalog_mermaid.assemblers.base import Assembler, BuildOptions
from catalog_mermaid.model.elements import ElementHeader, ElementType, MetadataElementSummary
from catalog_mermaid.model.graphs import AssetGraph, LineageGraph
from catalog_mermaid.util.errors import ConfigError, InputError

BUILTIN_KINDS = {
    "asset",
    "lineage",
    "information-supply-chain",
    "glossary-term",
    "glossary-category",
    "project",
    "governance-definition",
    "solution-component",
    "solution-blueprint",
    "solution-role",
    "data-structure",
}


class _NoteAssembler:
    kind = "unit-note"
    graph_type = AssetGraph
    anchor_policy = None

    def assemble(self, graph, builder, options) -> None:  # type: ignore[no-untyped-def]
        builder.start_graph("Note", options.direction)
        builder.add_node(graph.asset.guid, "note", "Note", None)


def _asset_graph() -> AssetGraph:
    return AssetGraph(asset=MetadataElementSummary(ElementHeader("asset-1", ElementType("Asset")), {"displayName": "Orders"}))


def test_builtin_kinds_are_registered() -> None:
    assert BUILTIN_KINDS <= set(list_registered_kinds())
    for kind in BUILTIN_KINDS:
        assert is_assembler_registered(kind)
        assembler = get_assembler_for(kind)
        assert isinstance(assembler, Assembler)
        assert assembler.kind == kind


def test_unknown_kind_is_a_config_error() -> None:
    with pytest.raises(ConfigError):
        get_assembler_for("unit:not-a-kind")


def test_registered_factory_is_used() -> None:
    register_assembler("unit-note", _NoteAssembler)  # type: ignore[arg-type]
    result = build_diagram("unit-note", _asset_graph())
    assert result.kind == "unit-note"
    assert result.nodes == 1
    assert "**note**" in result.text


def test_build_diagram_accepts_graph_objects_and_mappings() -> None:
    from_object = build_diagram("asset", _asset_graph())
    from_mapping = build_diagram(
        "asset", {"asset": {"guid": "asset-1", "type": "Asset", "properties": {"displayName": "Orders"}}}
    )
    assert from_object.text == from_mapping.text
    assert from_object.nodes == 1
    assert from_object.edges == 0
    assert not from_object.empty


def test_build_diagram_rejects_the_wrong_graph_type() -> None:
    with pytest.raises(InputError):
        build_diagram("lineage", _asset_graph())


def test_include_all_anchors_overrides_assembler_default() -> None:
    graph = {
        "asset": {"guid": "asset-1", "type": "Asset"},
        "lineage_relationships": [
            {
                "header": {"guid": "flow-1", "type": "DataFlow"},
                "end1": {
                    "guid": "col-a",
                    "type": "DataField",
                    "classifications": [{"classification_name": "Anchors", "properties": {"anchorGUID": "table-a"}}],
                },
                "end2": {"guid": "col-b", "type": "DataField"},
            }
        ],
    }
    default = build_diagram("lineage", graph)
    assert "Anchor for" not in default.text
    everything = build_diagram("lineage", graph, BuildOptions(include_all_anchors=True))
    assert '4-. "Anchor for" .->2\n' in everything.text
    assert "**table-a**" in everything.text


def test_kinds_without_anchor_policy_never_link_anchors() -> None:
    graph = {
        "term": {
            "guid": "term-1",
            "type": "GlossaryTerm",
            "classifications": [{"classification_name": "Anchors", "properties": {"anchorGUID": "gl-1"}}],
        }
    }
    result = build_diagram("glossary-term", graph, BuildOptions(include_all_anchors=True))
    assert "Anchor for" not in result.text


def test_lineage_graph_type_is_exposed() -> None:
    assert get_assembler_for("lineage").graph_type is LineageGraph
