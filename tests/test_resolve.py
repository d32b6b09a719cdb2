from __future__ import annotations

import pytest

from catalog_mermaid.mermaid.resolve import (
    cardinality_label,
    display_name_for,
    list_label,
    resolve_style_for_classifications,
    resolve_style_for_entity,
    resolve_style_for_entity_type,
    resolve_style_for_relationship_kind,
    resolve_style_for_solution_component,
    type_label_for_entity,
)
from catalog_mermaid.mermaid.styles import visual_style
from catalog_mermaid.mermaid.syntax import add_spaces_to_type_name, sanitize_label
from catalog_mermaid.model.elements import (
    ElementClassification,
    ElementHeader,
    ElementType,
    MetadataElementSummary,
)
from catalog_mermaid.util.errors import InputError


def _header(type_name: str = "Asset", *classifications: str, supers: tuple = (), created_by=None) -> ElementHeader:
    return ElementHeader(
        guid="guid-1",
        type=ElementType(type_name, tuple(supers)),
        classifications=tuple(ElementClassification(name) for name in classifications),
        created_by=created_by,
    )


def test_sanitize_label() -> None:
    assert sanitize_label('a"b//c') == "a'b/ /c"
    assert sanitize_label(None) is None


def test_add_spaces_to_type_name() -> None:
    assert add_spaces_to_type_name("DataStoreFile") == "Data Store File"
    assert add_spaces_to_type_name("DeployedAPI") == "Deployed API"
    assert add_spaces_to_type_name("API") == "API"
    assert add_spaces_to_type_name("Asset [Template]") == "Asset [Template]"
    assert add_spaces_to_type_name("") == ""


def test_memento_beats_template_in_any_order() -> None:
    default = visual_style("ASSET")
    assert resolve_style_for_classifications(_header("Asset", "Memento", "Template"), default).name == "MEMENTO"
    assert resolve_style_for_classifications(_header("Asset", "Template", "Memento"), default).name == "MEMENTO"


def test_template_and_role_classifications() -> None:
    default = visual_style("ASSET")
    assert resolve_style_for_classifications(_header("Asset", "TemplateSubstitute"), default).name == "TEMPLATE"
    assert resolve_style_for_classifications(_header("Collection", "RootCollection"), default).name == "ROOT_COLLECTION"
    assert resolve_style_for_classifications(_header("Asset", "Confidentiality"), default) is default


def test_entity_type_rules_follow_the_most_specific_match() -> None:
    default = visual_style("LINKED_ELEMENT")
    csv_file = _header("CSVFile", supers=("DataFile", "DataStore", "DataAsset", "Asset", "Referenceable"))
    assert resolve_style_for_entity_type(csv_file, default).name == "DATA_FILE"
    value_set = _header("ValidValueSet", supers=("ValidValueDefinition", "Referenceable"))
    assert resolve_style_for_entity_type(value_set, default).name == "VALID_VALUE_SET"
    team = _header("Team", supers=("Actor",))
    assert resolve_style_for_entity_type(team, default).name == "GOVERNANCE_TEAM"
    assert resolve_style_for_entity_type(_header("Unheard"), default) is default


def test_entity_style_applies_classification_override_last() -> None:
    header = _header("DataFile", "Memento", supers=("DataStore", "Asset"))
    assert resolve_style_for_entity(header, None).name == "MEMENTO"


def test_relationship_kind_styles() -> None:
    assert resolve_style_for_relationship_kind("ImplementedBy").name == "DEFAULT_SOLUTION_COMPONENT"
    assert resolve_style_for_relationship_kind("DeployedOn").name == "HOST"
    assert resolve_style_for_relationship_kind("DataFlow").name == "LINEAGE_ELEMENT"
    assert resolve_style_for_relationship_kind("LineageMapping").name == "LINEAGE_ELEMENT"
    assert resolve_style_for_relationship_kind("SomethingNew").name == "LINKED_ELEMENT"
    assert resolve_style_for_relationship_kind(_header("ProcessCall")).name == "LINEAGE_ELEMENT"


def test_solution_component_styles() -> None:
    assert resolve_style_for_solution_component("Manual Process").name == "MANUAL_PROCESS"
    assert resolve_style_for_solution_component(None).name == "DEFAULT_SOLUTION_COMPONENT"
    assert resolve_style_for_solution_component("Unlisted").name == "DEFAULT_SOLUTION_COMPONENT"


def test_type_label_prefers_priority_classifications() -> None:
    assert type_label_for_entity(_header("Asset")) == "Asset"
    assert type_label_for_entity(_header("Asset", "Memento", "Template")) == "Asset [Template]"
    assert type_label_for_entity(_header("Collection", "Folder")) == "Collection [Folder]"
    assert type_label_for_entity(_header("Asset", "Confidentiality")) == "Asset"


def test_display_name_fallback_chain() -> None:
    assert display_name_for(MetadataElementSummary(_header(), {"qualifiedName": "q", "displayName": "d"})) == "d"
    assert display_name_for(MetadataElementSummary(_header(), {"qualifiedName": "q"})) == "q"
    assert display_name_for(MetadataElementSummary(_header())) == "guid-1"
    like = MetadataElementSummary(_header("Like", created_by="erin"))
    assert display_name_for(like) == "erin"


def test_list_label() -> None:
    assert list_label(["a", None, "b"]) == "a,\nb"
    assert list_label(None) == ""


def test_cardinality_label() -> None:
    assert cardinality_label() is None
    assert cardinality_label(1, 0, -1) == "[1] 0..*"
    assert cardinality_label("2", "1", "5") == "[2] 1..5"
    assert cardinality_label(None, 1, None) == "[0] 1..*"


def test_cardinality_label_rejects_non_numbers() -> None:
    with pytest.raises(InputError):
        cardinality_label("first", 0, 1)
    with pytest.raises(InputError):
        cardinality_label(0, True, 1)
