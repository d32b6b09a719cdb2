from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple

from ..util.errors import InputError
from .elements import (
    InformationSupplyChainSegment,
    MemberDataField,
    MetadataElementSummary,
    MetadataRelationship,
    RelatedMetadataElementSummary,
    SolutionComponentElement,
    element_of,
    optional_of,
    pick,
    related_of,
    require_mapping,
    tuple_of,
)

Related = Tuple[RelatedMetadataElementSummary, ...]


def _root(data: Mapping[str, Any], key: str, kind: str) -> MetadataElementSummary:
    value = pick(data, key)
    if value is None:
        raise InputError(f"{kind} graph is missing '{key}'")
    return element_of(require_mapping(value, key), key)


def _related(data: Mapping[str, Any], key: str) -> Related:
    return tuple_of(pick(data, key), related_of, key)


def _optional_related(data: Mapping[str, Any], key: str) -> Optional[RelatedMetadataElementSummary]:
    return optional_of(pick(data, key), related_of, key)


def _text(data: Mapping[str, Any], key: str) -> Optional[str]:
    value = pick(data, key)
    return str(value) if value is not None else None


@dataclass(frozen=True)
class AssetGraph:
    asset: MetadataElementSummary
    anchored_elements: Tuple[MetadataElementSummary, ...] = ()
    relationships: Tuple[MetadataRelationship, ...] = ()
    external_references: Related = ()
    information_supply_chains: Related = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> AssetGraph:
        return cls(
            asset=_root(data, "asset", "asset"),
            anchored_elements=tuple_of(pick(data, "anchored_elements"), element_of, "anchored_elements"),
            relationships=tuple_of(pick(data, "relationships"), MetadataRelationship.from_dict, "relationships"),
            external_references=_related(data, "external_references"),
            information_supply_chains=_related(data, "information_supply_chains"),
        )


@dataclass(frozen=True)
class LineageGraph:
    asset: MetadataElementSummary
    lineage_relationships: Tuple[MetadataRelationship, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> LineageGraph:
        return cls(
            asset=_root(data, "asset", "lineage"),
            lineage_relationships=tuple_of(
                pick(data, "lineage_relationships"), MetadataRelationship.from_dict, "lineage_relationships"
            ),
        )


@dataclass(frozen=True)
class InformationSupplyChainGraph:
    supply_chain: MetadataElementSummary
    segments: Optional[Tuple[InformationSupplyChainSegment, ...]] = None
    parents: Related = ()
    peers: Related = ()
    implemented_by: Related = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> InformationSupplyChainGraph:
        raw_segments = pick(data, "segments")
        return cls(
            supply_chain=_root(data, "supply_chain", "information supply chain"),
            segments=(
                tuple_of(raw_segments, InformationSupplyChainSegment.from_dict, "segments")
                if raw_segments is not None
                else None
            ),
            parents=_related(data, "parents"),
            peers=_related(data, "peers"),
            implemented_by=_related(data, "implemented_by"),
        )


@dataclass(frozen=True)
class GlossaryTermGraph:
    term: MetadataElementSummary
    glossary: Optional[RelatedMetadataElementSummary] = None
    categories: Related = ()
    related_terms: Related = ()
    external_references: Related = ()
    semantic_assignments: Related = ()
    other_related: Related = ()
    summary: Optional[str] = None
    description: Optional[str] = None
    usage: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> GlossaryTermGraph:
        return cls(
            term=_root(data, "term", "glossary term"),
            glossary=_optional_related(data, "glossary"),
            categories=_related(data, "categories"),
            related_terms=_related(data, "related_terms"),
            external_references=_related(data, "external_references"),
            semantic_assignments=_related(data, "semantic_assignments"),
            other_related=_related(data, "other_related"),
            summary=_text(data, "summary"),
            description=_text(data, "description"),
            usage=_text(data, "usage"),
        )


@dataclass(frozen=True)
class GlossaryCategoryGraph:
    category: MetadataElementSummary
    glossary: Optional[RelatedMetadataElementSummary] = None
    parent_category: Optional[RelatedMetadataElementSummary] = None
    subcategories: Related = ()
    terms: Related = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> GlossaryCategoryGraph:
        return cls(
            category=_root(data, "category", "glossary category"),
            glossary=_optional_related(data, "glossary"),
            parent_category=_optional_related(data, "parent_category"),
            subcategories=_related(data, "subcategories"),
            terms=_related(data, "terms"),
        )


@dataclass(frozen=True)
class ProjectGraph:
    project: MetadataElementSummary
    parent_projects: Related = ()
    child_projects: Related = ()
    dependencies: Related = ()
    team: Related = ()
    collections: Related = ()
    external_references: Related = ()
    other_related: Related = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ProjectGraph:
        return cls(
            project=_root(data, "project", "project"),
            parent_projects=_related(data, "parent_projects"),
            child_projects=_related(data, "child_projects"),
            dependencies=_related(data, "dependencies"),
            team=_related(data, "team"),
            collections=_related(data, "collections"),
            external_references=_related(data, "external_references"),
            other_related=_related(data, "other_related"),
        )


@dataclass(frozen=True)
class GovernanceDefinitionGraph:
    definition: MetadataElementSummary
    description: Optional[str] = None
    supported_by: Related = ()
    supporting: Related = ()
    peers: Related = ()
    implementations: Related = ()
    metrics: Related = ()
    external_references: Related = ()
    other_related: Related = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> GovernanceDefinitionGraph:
        return cls(
            definition=_root(data, "definition", "governance definition"),
            description=_text(data, "description"),
            supported_by=_related(data, "supported_by"),
            supporting=_related(data, "supporting"),
            peers=_related(data, "peers"),
            implementations=_related(data, "implementations"),
            metrics=_related(data, "metrics"),
            external_references=_related(data, "external_references"),
            other_related=_related(data, "other_related"),
        )


@dataclass(frozen=True)
class SolutionComponentGraph:
    component: SolutionComponentElement

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SolutionComponentGraph:
        value = pick(data, "component")
        if value is None:
            raise InputError("solution component graph is missing 'component'")
        return cls(component=SolutionComponentElement.from_dict(require_mapping(value, "component"), "component"))


@dataclass(frozen=True)
class SolutionBlueprintGraph:
    blueprint: MetadataElementSummary
    solution_components: Tuple[SolutionComponentElement, ...] = ()
    description: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SolutionBlueprintGraph:
        return cls(
            blueprint=_root(data, "blueprint", "solution blueprint"),
            solution_components=tuple_of(
                pick(data, "solution_components"), SolutionComponentElement.from_dict, "solution_components"
            ),
            description=_text(data, "description"),
        )


@dataclass(frozen=True)
class SolutionRoleGraph:
    role: MetadataElementSummary
    solution_components: Related = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SolutionRoleGraph:
        return cls(
            role=_root(data, "role", "solution role"),
            solution_components=_related(data, "solution_components"),
        )


@dataclass(frozen=True)
class DataStructureGraph:
    structure: MetadataElementSummary
    member_fields: Tuple[MemberDataField, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> DataStructureGraph:
        return cls(
            structure=_root(data, "structure", "data structure"),
            member_fields=tuple_of(pick(data, "member_fields"), MemberDataField.from_dict, "member_fields"),
        )
