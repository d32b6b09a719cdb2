from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Optional, Tuple, Union

from ..util.errors import InputError
from .styles import SOLUTION_COMPONENT_STYLES, VisualStyle, visual_style


MEMENTO_CLASSIFICATION = "Memento"
TEMPLATE_CLASSIFICATIONS = ("Template", "TemplateSubstitute")

# Collection and project roles that carry their own look.
ROLE_CLASSIFICATION_STYLES = {
    "ObjectIdentifier": "OBJECT_IDENTIFIER",
    "DataSharingAgreement": "DATA_SHARING_AGREEMENT",
    "RootCollection": "ROOT_COLLECTION",
    "Folder": "FOLDER",
    "HomeCollection": "HOME_COLLECTION",
    "ResultsSet": "RESULTS_SET",
    "RecentAccess": "RECENT_ACCESS",
    "WorkItemList": "WORK_ITEM_LIST",
}

# Checked in this order before any other labelled classification.
PRIORITY_LABEL_CLASSIFICATIONS = ("Template", "TemplateSubstitute", "CalculatedValue", "PrimaryKey")
LABELLED_CLASSIFICATIONS = frozenset(
    set(ROLE_CLASSIFICATION_STYLES)
    | {
        MEMENTO_CLASSIFICATION,
        "NamespaceCollection",
        "EventSet",
        "ContextEventCollection",
        "ConceptModel",
        "Duplicate",
        "CampaignProject",
        "Task",
        "PersonalProject",
        "StudyProject",
    }
)

LINEAGE_RELATIONSHIP_TYPES = ("DataFlow", "ProcessCall", "LineageMapping", "DataSetContent")

DISPLAY_NAME_PROPERTIES = (
    "displayName",
    "resourceName",
    "role",
    "fullName",
    "userId",
    "distinguishedName",
    "identifier",
    "annotationType",
    "stars",
    "url",
    "qualifiedName",
)


@dataclass(frozen=True)
class TypeRule:
    """Style for a type; the first matching child rule refines it."""

    type_names: Tuple[str, ...]
    style: str
    children: Tuple[TypeRule, ...] = ()


def _rule(type_names: Union[str, Tuple[str, ...]], style: str, *children: TypeRule) -> TypeRule:
    names = (type_names,) if isinstance(type_names, str) else type_names
    return TypeRule(type_names=names, style=style, children=children)


ENTITY_TYPE_RULES: Tuple[TypeRule, ...] = (
    _rule("ExternalId", "EXTERNAL_ID"),
    _rule(("Comment", "Like", "Rating"), "FEEDBACK"),
    _rule(("SearchKeyword", "InformalTag"), "TAG"),
    _rule(
        "Actor",
        "GOVERNANCE_ACTOR",
        _rule("UserIdentity", "USER_IDENTITY"),
        _rule("Team", "GOVERNANCE_TEAM"),
    ),
    _rule(
        "Collection",
        "COLLECTION",
        _rule("DigitalProduct", "DIGITAL_PRODUCT"),
        _rule("Agreement", "AGREEMENT", _rule("DigitalSubscription", "DIGITAL_SUBSCRIPTION")),
        _rule("DataDictionary", "DATA_DICTIONARY"),
        _rule("DataSpec", "DATA_SPEC"),
    ),
    _rule("ExternalReference", "EXTERNAL_REFERENCE"),
    _rule("Host", "HOST"),
    _rule("GovernanceActionProcess", "GOVERNANCE_ACTION"),
    _rule("EngineAction", "ENGINE_ACTION"),
    _rule(
        "GovernanceActionType",
        "GOVERNANCE_ACTION",
        _rule("GovernanceActionProcessStep", "GOVERNANCE_ACTION_PROCESS_STEP"),
    ),
    _rule("GovernanceActionProcessInstance", "GOVERNANCE_ACTION"),
    _rule("ValidValueDefinition", "VALID_VALUE", _rule("ValidValueSet", "VALID_VALUE_SET")),
    _rule(
        "Asset",
        "ASSET",
        _rule(
            "DataAsset",
            "DATA_ASSET",
            _rule("FileFolder", "FILE_FOLDER", _rule("DataFolder", "DATA_STORE")),
            _rule("DataStore", "DATA_STORE", _rule("DataFile", "DATA_FILE")),
            _rule("DeployedDatabaseSchema", "DEPLOYED_DB_SCHEMA"),
        ),
        _rule("ITInfrastructure", "IT_ASSET"),
        _rule(
            "Process",
            "PROCESS",
            _rule("DeployedAPI", "DEPLOYED_API"),
            _rule("DeployedConnector", "CONNECTOR"),
        ),
    ),
    _rule("InformationSupplyChainSegment", "INFORMATION_SUPPLY_CHAIN_SEG"),
    _rule("InformationSupplyChain", "INFORMATION_SUPPLY_CHAIN"),
    _rule("SolutionBlueprint", "SOLUTION_BLUEPRINT"),
    _rule("SolutionPort", "SOLUTION_PORT"),
    _rule("SolutionComponent", "DEFAULT_SOLUTION_COMPONENT"),
    _rule("GovernanceDefinition", "GOVERNANCE_DEFINITION", _rule("GovernanceMetric", "GOVERNANCE_METRIC")),
    _rule("Project", "PROJECT"),
    _rule("DataStructure", "DATA_STRUCTURE"),
    _rule("DataField", "DATA_FIELD"),
    _rule("DataClass", "DATA_CLASS"),
    _rule("Glossary", "GLOSSARY"),
    _rule("GlossaryCategory", "GLOSSARY_CATEGORY"),
    _rule("GlossaryTerm", "GLOSSARY_TERM"),
    _rule("SchemaElement", "SCHEMA_ELEMENT"),
    _rule("RequestForActionAnnotation", "REQUEST_FOR_ACTION"),
    _rule("ToDo", "TO_DO"),
)


def _classification_names(header: Any) -> list[str]:
    return [
        c.classification_name
        for c in (getattr(header, "classifications", None) or ())
        if c is not None and getattr(c, "classification_name", None)
    ]


def resolve_style_for_classifications(header: Any, default: Optional[VisualStyle]) -> Optional[VisualStyle]:
    """
    Memento beats template; otherwise the first collection/project role with a
    style of its own wins. Anything else keeps `default`.
    """
    if header is None:
        return default
    names = _classification_names(header)
    if MEMENTO_CLASSIFICATION in names:
        return visual_style("MEMENTO")
    if any(name in TEMPLATE_CLASSIFICATIONS for name in names):
        return visual_style("TEMPLATE")
    for name in names:
        style_name = ROLE_CLASSIFICATION_STYLES.get(name)
        if style_name:
            return visual_style(style_name)
    return default


def _match_rules(header: Any, rules: Iterable[TypeRule]) -> Optional[str]:
    for rule in rules:
        if any(header.is_type_of(name) for name in rule.type_names):
            return _match_rules(header, rule.children) or rule.style
    return None


def resolve_style_for_entity_type(header: Any, default: Optional[VisualStyle]) -> Optional[VisualStyle]:
    if header is None:
        return default
    style_name = _match_rules(header, ENTITY_TYPE_RULES)
    return visual_style(style_name) if style_name else default


def resolve_style_for_entity(header: Any, default: Optional[VisualStyle]) -> Optional[VisualStyle]:
    return resolve_style_for_classifications(header, resolve_style_for_entity_type(header, default))


def resolve_style_for_relationship_kind(relationship: Any) -> VisualStyle:
    """Style for the element found at the far end of a relationship of this type."""

    def _is(name: str) -> bool:
        if isinstance(relationship, str):
            return relationship == name
        return bool(relationship is not None and relationship.is_type_of(name))

    if _is("ImplementedBy"):
        return visual_style("DEFAULT_SOLUTION_COMPONENT")
    if _is("DeployedOn"):
        return visual_style("HOST")
    if any(_is(name) for name in LINEAGE_RELATIONSHIP_TYPES):
        return visual_style("LINEAGE_ELEMENT")
    return visual_style("LINKED_ELEMENT")


def resolve_style_for_solution_component(component_type: Optional[str]) -> VisualStyle:
    style_name = SOLUTION_COMPONENT_STYLES.get(component_type or "")
    return visual_style(style_name or "DEFAULT_SOLUTION_COMPONENT")


def type_label_for_entity(header: Any) -> str:
    """Type name, plus the most telling classification in brackets when there is one."""
    type_name = header.type_name
    names = _classification_names(header)
    for candidate in PRIORITY_LABEL_CLASSIFICATIONS:
        if candidate in names:
            return f"{type_name} [{candidate}]"
    for name in names:
        if name in LABELLED_CLASSIFICATIONS:
            return f"{type_name} [{name}]"
    return type_name


def display_name_for(summary: Any) -> str:
    props = getattr(summary, "properties", None) or {}
    for name in DISPLAY_NAME_PROPERTIES:
        value = props.get(name)
        if value is not None:
            return str(value)
    header = summary.header
    if header.type_name == "Like" and header.created_by:
        return header.created_by
    return header.guid


def list_label(values: Optional[Iterable[Optional[str]]]) -> str:
    if not values:
        return ""
    return ",\n".join(str(v) for v in values if v is not None)


def _as_int(name: str, value: Any, default: int) -> int:
    if value is None:
        return default
    if isinstance(value, bool):
        raise InputError(f"Cardinality field '{name}' must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        raise InputError(f"Cardinality field '{name}' must be an integer, got {value!r}") from None


def cardinality_label(position: Any = None, min_cardinality: Any = None, max_cardinality: Any = None) -> Optional[str]:
    """
    `[position] min..max`, with negative bounds shown as `*`.
    Missing values default to position 0, min 0 and an unbounded max.
    """
    if position is None and min_cardinality is None and max_cardinality is None:
        return None
    pos = _as_int("position", position, 0)
    low = _as_int("minCardinality", min_cardinality, 0)
    high = _as_int("maxCardinality", max_cardinality, -1)
    low_text = "*" if low < 0 else str(low)
    high_text = "*" if high < 0 else str(high)
    return f"[{pos}] {low_text}..{high_text}"
