from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterable, Mapping, Optional, Protocol, Sequence, Tuple, runtime_checkable

from ..mermaid.builder import DiagramBuilder
from ..mermaid.resolve import (
    cardinality_label,
    display_name_for,
    resolve_style_for_classifications,
    resolve_style_for_entity,
    resolve_style_for_relationship_kind,
    type_label_for_entity,
)
from ..mermaid.styles import VisualStyle, visual_style
from ..mermaid.syntax import EdgeKind, add_spaces_to_type_name
from ..model.elements import (
    ElementHeader,
    MetadataElementSummary,
    MetadataRelationship,
    RelatedMetadataElementSummary,
)


@dataclass(frozen=True)
class BuildOptions:
    include_all_anchors: Optional[bool] = None
    full_display: bool = True
    direction: str = "LR"


@runtime_checkable
class Assembler(Protocol):
    """
    Assembler contract for one kind of catalog graph.

    anchor_policy is None when the diagram never shows anchor links; otherwise it is
    the default for include_all_anchors when the caller does not choose.
    """

    kind: str
    graph_type: Any
    anchor_policy: Optional[bool]

    def assemble(self, graph: Any, builder: DiagramBuilder, options: BuildOptions) -> None:
        ...


class Direction(Enum):
    BY_END = "by-end"
    TO_START = "to-start"
    FROM_START = "from-start"


LabelStrategy = Callable[[RelatedMetadataElementSummary], Optional[str]]


def relationship_label(related: RelatedMetadataElementSummary) -> str:
    """Label property, else cardinality, else the relationship type; the type is appended in brackets."""
    relationship_type = add_spaces_to_type_name(related.relationship_header.type_name)
    label = related.relationship_property("label")
    if label is None:
        props = related.relationship_properties
        label = cardinality_label(props.get("position"), props.get("minCardinality"), props.get("maxCardinality"))
    if label is None:
        return relationship_type
    return f"{label} [{relationship_type}]"


def related_type_label(related: RelatedMetadataElementSummary) -> str:
    label = related.relationship_property("label")
    if label is not None:
        return label
    return add_spaces_to_type_name(related.related_element.header.type_name)


def role_label(related: RelatedMetadataElementSummary) -> str:
    role = related.relationship_property("role")
    if role is not None:
        return role
    return add_spaces_to_type_name(type_label_for_entity(related.related_element.header))


def title_for(prefix: str, summary: MetadataElementSummary) -> str:
    return f"{prefix} - {display_name_for(summary)} [{summary.guid}]"


def add_element(
    builder: DiagramBuilder,
    summary: MetadataElementSummary,
    default_style: Optional[VisualStyle],
    extra_properties: Optional[Mapping[str, Optional[str]]] = None,
) -> bool:
    builder.record_anchor(summary.header)
    return builder.add_node(
        summary.guid,
        display_name_for(summary),
        type_label_for_entity(summary.header),
        resolve_style_for_entity(summary.header, default_style),
        extra_properties,
    )


def add_related_elements(
    builder: DiagramBuilder,
    related: Optional[Iterable[Optional[RelatedMetadataElementSummary]]],
    *,
    start_key: str,
    default_style: Optional[VisualStyle],
    direction: Direction = Direction.BY_END,
    kind: EdgeKind = EdgeKind.HEAVY,
    label: LabelStrategy = relationship_label,
) -> int:
    """
    Add each related element and one edge between it and `start_key`.

    BY_END follows the relationship's own orientation. Hierarchy summaries are
    followed into their nested elements with the related element as the new start.
    Returns the number of relationships visited.
    """
    visited = 0
    for item in related or ():
        if item is None:
            continue
        add_element(builder, item.related_element, default_style)
        related_key = item.related_element.guid
        text = label(item)
        toward_start = direction is Direction.TO_START or (
            direction is Direction.BY_END and item.related_element_at_end1
        )
        if toward_start:
            builder.add_edge(item.relationship_header.guid, related_key, start_key, text, kind)
        else:
            builder.add_edge(item.relationship_header.guid, start_key, related_key, text, kind)
        visited += 1
        if item.nested_elements:
            visited += add_related_elements(
                builder,
                item.nested_elements,
                start_key=related_key,
                default_style=default_style,
                direction=direction,
                kind=kind,
                label=label,
            )
    return visited


def add_description_boxes(
    builder: DiagramBuilder,
    owner_key: str,
    boxes: Sequence[Tuple[str, Optional[str]]],
    *,
    subgraph: Optional[str] = None,
) -> None:
    """
    Stack (title, text) boxes under the owner. Empty texts are skipped; the boxes are
    held in order by invisible edges and joined to the owner with a dotted edge.
    """
    present = [(title, text) for title, text in boxes if text]
    if not present:
        return
    description = visual_style("DESCRIPTION")
    if subgraph:
        builder.start_subgraph(subgraph, description, "TB")
    first_key: Optional[str] = None
    previous: Optional[str] = None
    for title, text in present:
        key = f"{owner_key}:{title}"
        builder.add_node(key, text, title, description)
        if previous is not None:
            builder.add_invisible_edge(previous, key)
        first_key = first_key or key
        previous = key
    if subgraph:
        builder.end_subgraph()
    if first_key is not None:
        builder.add_edge(None, owner_key, first_key, None, EdgeKind.DOTTED)


def add_classifications(builder: DiagramBuilder, header: ElementHeader) -> None:
    """One box per classification, listing its properties, in a "Classifications" subgraph."""
    if not header.classifications:
        return
    builder.start_subgraph("Classifications", visual_style("DESCRIPTION"), "TB")
    for classification in header.classifications:
        lines = []
        for name, value in classification.properties.items():
            lines.append(name if value is None else f"{name}\n - {value}")
        stub = ElementHeader(guid=header.guid, type=header.type, classifications=(classification,))
        builder.add_node(
            f"{header.guid}:{classification.classification_name}",
            "\n".join(lines) or None,
            classification.classification_name,
            resolve_style_for_classifications(stub, visual_style("CLASSIFICATION")),
        )
    builder.end_subgraph()


def label_or_relationship_type(related: RelatedMetadataElementSummary) -> str:
    label = related.relationship_property("label")
    if label is not None:
        return label
    return add_spaces_to_type_name(related.relationship_header.type_name)


def relationship_line_label(relationship: MetadataRelationship) -> str:
    relationship_type = add_spaces_to_type_name(relationship.header.type_name)
    label = relationship.get("label")
    return f"{label} [{relationship_type}]" if label is not None else relationship_type


def add_relationship_line(
    builder: DiagramBuilder,
    relationship: MetadataRelationship,
    kind: EdgeKind,
    default_style: Optional[VisualStyle] = None,
) -> None:
    """Draw both ends of a relationship and the keyed edge from end1 to end2."""
    end_style = default_style or resolve_style_for_relationship_kind(relationship.header)
    add_element(builder, relationship.end1, end_style)
    add_element(builder, relationship.end2, end_style)
    builder.add_edge(
        relationship.guid,
        relationship.end1.guid,
        relationship.end2.guid,
        relationship_line_label(relationship),
        kind,
    )


LINEAGE_EDGE_KINDS: Tuple[Tuple[str, EdgeKind], ...] = (
    ("LineageMapping", EdgeKind.ANIMATED_LONG),
    ("DataFlow", EdgeKind.HEAVY),
    ("ControlFlow", EdgeKind.HEAVY),
    ("ProcessCall", EdgeKind.HEAVY),
    ("DataSetContent", EdgeKind.HEAVY),
)


def lineage_edge_kind(header: ElementHeader, default: EdgeKind = EdgeKind.THIN) -> EdgeKind:
    for type_name, kind in LINEAGE_EDGE_KINDS:
        if header.is_type_of(type_name):
            return kind
    return default
