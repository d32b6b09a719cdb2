from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Mapping, Optional, Tuple, TypeVar

from ..util.errors import InputError

T = TypeVar("T")

ANCHORS_CLASSIFICATION = "Anchors"


def _camel(key: str) -> str:
    head, *rest = key.split("_")
    return head + "".join(w[:1].upper() + w[1:] for w in rest)


def pick(data: Mapping[str, Any], *keys: str) -> Any:
    """First present value among keys; snake_case keys also match their camelCase spelling."""
    for key in keys:
        if key in data:
            return data[key]
        camel = _camel(key)
        if camel in data:
            return data[camel]
    return None


def require_mapping(value: Any, where: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise InputError(f"{where} must be an object")
    return value


def properties_of(value: Any, where: str) -> Dict[str, Any]:
    if value is None:
        return {}
    return dict(require_mapping(value, where))


def tuple_of(value: Any, factory: Callable[[Mapping[str, Any], str], T], where: str) -> Tuple[T, ...]:
    if value is None:
        return ()
    if not isinstance(value, (list, tuple)):
        raise InputError(f"{where} must be a list")
    return tuple(factory(require_mapping(item, f"{where}[{i}]"), f"{where}[{i}]") for i, item in enumerate(value))


def optional_of(value: Any, factory: Callable[[Mapping[str, Any], str], T], where: str) -> Optional[T]:
    if value is None:
        return None
    return factory(require_mapping(value, where), where)


@dataclass(frozen=True)
class ElementType:
    type_name: str
    super_type_names: Tuple[str, ...] = ()

    def is_type_of(self, name: str) -> bool:
        return name == self.type_name or name in self.super_type_names

    @classmethod
    def from_value(cls, value: Any, where: str = "type") -> ElementType:
        if isinstance(value, str) and value:
            return cls(type_name=value)
        if isinstance(value, Mapping):
            name = pick(value, "type_name", "name")
            if not name:
                raise InputError(f"{where} is missing 'type_name'")
            supers = pick(value, "super_type_names", "super_types") or ()
            if isinstance(supers, str):
                supers = (supers,)
            return cls(type_name=str(name), super_type_names=tuple(str(s) for s in supers))
        raise InputError(f"{where} must be a type name or an object with 'type_name'")


@dataclass(frozen=True)
class ElementClassification:
    classification_name: str
    properties: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], where: str = "classification") -> ElementClassification:
        name = pick(data, "classification_name", "name")
        if not name:
            raise InputError(f"{where} is missing 'classification_name'")
        return cls(
            classification_name=str(name),
            properties=properties_of(pick(data, "properties", "classification_properties"), f"{where}.properties"),
        )


@dataclass(frozen=True)
class ElementHeader:
    guid: str
    type: ElementType
    classifications: Tuple[ElementClassification, ...] = ()
    created_by: Optional[str] = None

    @property
    def type_name(self) -> str:
        return self.type.type_name

    def is_type_of(self, name: str) -> bool:
        return self.type.is_type_of(name)

    def classification(self, name: str) -> Optional[ElementClassification]:
        for classification in self.classifications:
            if classification.classification_name == name:
                return classification
        return None

    @property
    def anchor(self) -> Optional[ElementClassification]:
        return self.classification(ANCHORS_CLASSIFICATION)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], where: str = "header") -> ElementHeader:
        guid = pick(data, "guid")
        if not guid:
            raise InputError(f"{where} is missing 'guid'")
        type_value = pick(data, "type", "type_name")
        if type_value is None:
            raise InputError(f"{where} is missing 'type'")
        created_by = pick(data, "created_by")
        return cls(
            guid=str(guid),
            type=ElementType.from_value(type_value, f"{where}.type"),
            classifications=tuple_of(
                pick(data, "classifications"), ElementClassification.from_dict, f"{where}.classifications"
            ),
            created_by=str(created_by) if created_by is not None else None,
        )


def _header_source(data: Mapping[str, Any], *keys: str) -> Mapping[str, Any]:
    # Headers may be nested under a key or written inline next to the properties.
    nested = pick(data, *keys)
    if nested is not None:
        return require_mapping(nested, keys[0])
    return data


@dataclass(frozen=True)
class MetadataElementSummary:
    header: ElementHeader
    properties: Dict[str, Any] = field(default_factory=dict)

    @property
    def guid(self) -> str:
        return self.header.guid

    def get(self, name: str) -> Optional[str]:
        value = self.properties.get(name)
        return str(value) if value is not None else None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], where: str = "element") -> MetadataElementSummary:
        return cls(
            header=ElementHeader.from_dict(_header_source(data, "header", "element_header"), f"{where}.header"),
            properties=properties_of(pick(data, "properties"), f"{where}.properties"),
        )


def element_of(data: Mapping[str, Any], where: str) -> MetadataElementSummary:
    return MetadataElementSummary.from_dict(data, where)


@dataclass(frozen=True)
class RelatedMetadataElementSummary:
    relationship_header: ElementHeader
    related_element: MetadataElementSummary
    relationship_properties: Dict[str, Any] = field(default_factory=dict)
    related_element_at_end1: bool = False
    nested_elements: Tuple[RelatedMetadataElementSummary, ...] = ()

    def relationship_property(self, name: str) -> Optional[str]:
        value = self.relationship_properties.get(name)
        return str(value) if value is not None else None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], where: str = "related") -> RelatedMetadataElementSummary:
        relationship = pick(data, "relationship_header", "relationship")
        if relationship is None:
            raise InputError(f"{where} is missing 'relationship_header'")
        related = pick(data, "related_element", "element")
        if related is None:
            raise InputError(f"{where} is missing 'related_element'")
        return cls(
            relationship_header=ElementHeader.from_dict(
                require_mapping(relationship, f"{where}.relationship_header"), f"{where}.relationship_header"
            ),
            related_element=element_of(require_mapping(related, f"{where}.related_element"), f"{where}.related_element"),
            relationship_properties=properties_of(
                pick(data, "relationship_properties"), f"{where}.relationship_properties"
            ),
            related_element_at_end1=bool(pick(data, "related_element_at_end1") or False),
            nested_elements=tuple_of(pick(data, "nested_elements"), RelatedMetadataElementSummary.from_dict, f"{where}.nested_elements"),
        )


def related_of(data: Mapping[str, Any], where: str) -> RelatedMetadataElementSummary:
    return RelatedMetadataElementSummary.from_dict(data, where)


@dataclass(frozen=True)
class MetadataRelationship:
    header: ElementHeader
    end1: MetadataElementSummary
    end2: MetadataElementSummary
    properties: Dict[str, Any] = field(default_factory=dict)

    @property
    def guid(self) -> str:
        return self.header.guid

    def get(self, name: str) -> Optional[str]:
        value = self.properties.get(name)
        return str(value) if value is not None else None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], where: str = "relationship") -> MetadataRelationship:
        end1 = pick(data, "end1", "end_1")
        end2 = pick(data, "end2", "end_2")
        if end1 is None or end2 is None:
            raise InputError(f"{where} needs both 'end1' and 'end2'")
        return cls(
            header=ElementHeader.from_dict(_header_source(data, "header", "relationship_header"), f"{where}.header"),
            end1=element_of(require_mapping(end1, f"{where}.end1"), f"{where}.end1"),
            end2=element_of(require_mapping(end2, f"{where}.end2"), f"{where}.end2"),
            properties=properties_of(pick(data, "properties", "relationship_properties"), f"{where}.properties"),
        )


@dataclass(frozen=True)
class WiredSolutionComponent:
    header: ElementHeader
    linked_element: MetadataElementSummary
    label: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], where: str = "wire") -> WiredSolutionComponent:
        linked = pick(data, "linked_element")
        if linked is None:
            raise InputError(f"{where} is missing 'linked_element'")
        label = pick(data, "label")
        return cls(
            header=ElementHeader.from_dict(_header_source(data, "header", "relationship_header"), f"{where}.header"),
            linked_element=element_of(require_mapping(linked, f"{where}.linked_element"), f"{where}.linked_element"),
            label=str(label) if label is not None else None,
        )


@dataclass(frozen=True)
class MemberDataField:
    relationship_header: ElementHeader
    data_field: MetadataElementSummary
    position: Optional[Any] = None
    min_cardinality: Optional[Any] = None
    max_cardinality: Optional[Any] = None
    nested_fields: Tuple[MemberDataField, ...] = ()
    data_classes: Tuple[RelatedMetadataElementSummary, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], where: str = "member_field") -> MemberDataField:
        relationship = pick(data, "relationship_header", "relationship")
        if relationship is None:
            raise InputError(f"{where} is missing 'relationship_header'")
        data_field = pick(data, "data_field", "field")
        if data_field is None:
            raise InputError(f"{where} is missing 'data_field'")
        return cls(
            relationship_header=ElementHeader.from_dict(
                require_mapping(relationship, f"{where}.relationship_header"), f"{where}.relationship_header"
            ),
            data_field=element_of(require_mapping(data_field, f"{where}.data_field"), f"{where}.data_field"),
            position=pick(data, "position"),
            min_cardinality=pick(data, "min_cardinality"),
            max_cardinality=pick(data, "max_cardinality"),
            nested_fields=tuple_of(pick(data, "nested_fields"), MemberDataField.from_dict, f"{where}.nested_fields"),
            data_classes=tuple_of(pick(data, "data_classes"), related_of, f"{where}.data_classes"),
        )


@dataclass(frozen=True)
class SolutionComponentElement:
    component: MetadataElementSummary
    wired_to: Tuple[WiredSolutionComponent, ...] = ()
    wired_from: Tuple[WiredSolutionComponent, ...] = ()
    actors: Tuple[RelatedMetadataElementSummary, ...] = ()
    blueprints: Tuple[RelatedMetadataElementSummary, ...] = ()
    implementations: Tuple[RelatedMetadataElementSummary, ...] = ()
    other_elements: Tuple[RelatedMetadataElementSummary, ...] = ()
    sub_components: Tuple[SolutionComponentElement, ...] = ()

    @property
    def guid(self) -> str:
        return self.component.guid

    @property
    def solution_component_type(self) -> Optional[str]:
        return self.component.get("solutionComponentType")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], where: str = "component") -> SolutionComponentElement:
        component = pick(data, "component", "element")
        source = require_mapping(component, f"{where}.component") if component is not None else data
        return cls(
            component=element_of(source, f"{where}.component"),
            wired_to=tuple_of(pick(data, "wired_to"), WiredSolutionComponent.from_dict, f"{where}.wired_to"),
            wired_from=tuple_of(pick(data, "wired_from"), WiredSolutionComponent.from_dict, f"{where}.wired_from"),
            actors=tuple_of(pick(data, "actors"), related_of, f"{where}.actors"),
            blueprints=tuple_of(pick(data, "blueprints"), related_of, f"{where}.blueprints"),
            implementations=tuple_of(pick(data, "implementations"), related_of, f"{where}.implementations"),
            other_elements=tuple_of(pick(data, "other_elements"), related_of, f"{where}.other_elements"),
            sub_components=tuple_of(pick(data, "sub_components"), SolutionComponentElement.from_dict, f"{where}.sub_components"),
        )


@dataclass(frozen=True)
class InformationSupplyChainSegment:
    segment: MetadataElementSummary
    implemented_by: Tuple[RelatedMetadataElementSummary, ...] = ()
    lineage: Tuple[MetadataRelationship, ...] = ()

    @property
    def guid(self) -> str:
        return self.segment.guid

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], where: str = "segment") -> InformationSupplyChainSegment:
        segment = pick(data, "segment", "element")
        source = require_mapping(segment, f"{where}.segment") if segment is not None else data
        return cls(
            segment=element_of(source, f"{where}.segment"),
            implemented_by=tuple_of(pick(data, "implemented_by"), related_of, f"{where}.implemented_by"),
            lineage=tuple_of(pick(data, "lineage"), MetadataRelationship.from_dict, f"{where}.lineage"),
        )
