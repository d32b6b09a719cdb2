from __future__ import annotations

import pytest

from catalog_mermaid.model.elements import (
    ElementHeader,
    MetadataElementSummary,
    MetadataRelationship,
    RelatedMetadataElementSummary,
    SolutionComponentElement,
)
from catalog_mermaid.model.graphs import (
    AssetGraph,
    DataStructureGraph,
    InformationSupplyChainGraph,
    SolutionBlueprintGraph,
)
from catalog_mermaid.util.errors import InputError


def test_header_accepts_camel_case_and_type_objects() -> None:
    header = ElementHeader.from_dict(
        {
            "guid": "g-1",
            "type": {"typeName": "CSVFile", "superTypeNames": ["DataFile", "Asset"]},
            "classifications": [
                {"classificationName": "Anchors", "classificationProperties": {"anchorGUID": "a-1"}},
            ],
            "createdBy": "erin",
        }
    )
    assert header.type_name == "CSVFile"
    assert header.is_type_of("Asset")
    assert not header.is_type_of("Process")
    assert header.anchor is not None
    assert header.anchor.properties["anchorGUID"] == "a-1"
    assert header.created_by == "erin"


def test_header_requires_guid_and_type() -> None:
    with pytest.raises(InputError):
        ElementHeader.from_dict({"type": "Asset"})
    with pytest.raises(InputError):
        ElementHeader.from_dict({"guid": "g-1"})


def test_element_summary_header_may_be_inline_or_nested() -> None:
    nested = MetadataElementSummary.from_dict(
        {"header": {"guid": "g-1", "type": "Asset"}, "properties": {"displayName": "Orders"}}
    )
    inline = MetadataElementSummary.from_dict({"guid": "g-1", "type": "Asset", "properties": {"displayName": "Orders"}})
    assert nested == inline
    assert nested.get("displayName") == "Orders"
    assert nested.get("missing") is None


def test_related_element_requires_both_parts() -> None:
    with pytest.raises(InputError):
        RelatedMetadataElementSummary.from_dict({"relatedElement": {"guid": "g", "type": "Asset"}})
    related = RelatedMetadataElementSummary.from_dict(
        {
            "relationshipHeader": {"guid": "r-1", "type": "TermAnchor"},
            "relatedElement": {"guid": "g-2", "type": "Glossary"},
            "relationshipProperties": {"label": "in"},
            "relatedElementAtEnd1": True,
        }
    )
    assert related.relationship_property("label") == "in"
    assert related.related_element_at_end1 is True


def test_relationship_needs_both_ends() -> None:
    with pytest.raises(InputError):
        MetadataRelationship.from_dict({"guid": "r", "type": "DataFlow", "end1": {"guid": "a", "type": "Asset"}})


def test_lists_must_be_lists() -> None:
    with pytest.raises(InputError):
        AssetGraph.from_dict({"asset": {"guid": "a", "type": "Asset"}, "external_references": {"not": "a list"}})


def test_graph_root_is_required() -> None:
    with pytest.raises(InputError):
        AssetGraph.from_dict({})


def test_supply_chain_segments_absent_versus_empty() -> None:
    chain = {"guid": "isc-1", "type": "InformationSupplyChain"}
    assert InformationSupplyChainGraph.from_dict({"supply_chain": chain}).segments is None
    assert InformationSupplyChainGraph.from_dict({"supply_chain": chain, "segments": []}).segments == ()


def test_solution_component_reads_its_type_property() -> None:
    element = SolutionComponentElement.from_dict(
        {
            "component": {"guid": "sc-1", "type": "SolutionComponent", "properties": {"solutionComponentType": "API"}},
            "sub_components": [{"guid": "sc-2", "type": "SolutionComponent"}],
        }
    )
    assert element.solution_component_type == "API"
    assert element.sub_components[0].guid == "sc-2"
    blueprint = SolutionBlueprintGraph.from_dict(
        {"blueprint": {"guid": "bp-1", "type": "SolutionBlueprint"}, "solutionComponents": [{"guid": "sc-1", "type": "SolutionComponent"}]}
    )
    assert blueprint.solution_components[0].guid == "sc-1"


def test_member_fields_nest() -> None:
    graph = DataStructureGraph.from_dict(
        {
            "structure": {"guid": "ds-1", "type": "DataStructure"},
            "member_fields": [
                {
                    "relationship_header": {"guid": "m-1", "type": "MemberDataField"},
                    "data_field": {"guid": "f-1", "type": "DataField"},
                    "nested_fields": [
                        {
                            "relationship_header": {"guid": "m-2", "type": "NestedDataField"},
                            "data_field": {"guid": "f-2", "type": "DataField"},
                        }
                    ],
                }
            ],
        }
    )
    assert graph.member_fields[0].nested_fields[0].data_field.guid == "f-2"
