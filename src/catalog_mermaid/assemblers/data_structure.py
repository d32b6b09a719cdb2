from __future__ import annotations

from typing import Iterable

from ..mermaid.builder import DiagramBuilder
from ..mermaid.resolve import cardinality_label
from ..mermaid.styles import visual_style
from ..mermaid.syntax import EdgeKind, add_spaces_to_type_name
from ..model.elements import MemberDataField
from ..model.graphs import DataStructureGraph
from .base import BuildOptions, Direction, add_element, add_related_elements, title_for

DATA_FIELDS_SUBGRAPH = "Data fields"


def add_member_fields(builder: DiagramBuilder, parent_key: str, fields: Iterable[MemberDataField]) -> int:
    """Add each member field under its parent and recurse into nested fields. Returns the field count."""
    added = 0
    for member in fields:
        data_field = member.data_field
        label = cardinality_label(member.position, member.min_cardinality, member.max_cardinality)
        add_element(
            builder,
            data_field,
            visual_style("DATA_FIELD"),
            {"cardinality": label} if label is not None else None,
        )
        builder.add_edge(
            member.relationship_header.guid,
            parent_key,
            data_field.guid,
            add_spaces_to_type_name(member.relationship_header.type_name),
            EdgeKind.HEAVY,
        )
        added += 1
        add_related_elements(
            builder,
            member.data_classes,
            start_key=data_field.guid,
            default_style=visual_style("DATA_CLASS"),
            direction=Direction.FROM_START,
            kind=EdgeKind.THIN,
        )
        added += add_member_fields(builder, data_field.guid, member.nested_fields)
    return added


class DataStructureAssembler:
    kind = "data-structure"
    graph_type = DataStructureGraph
    anchor_policy = None

    def assemble(self, graph: DataStructureGraph, builder: DiagramBuilder, options: BuildOptions) -> None:
        structure = graph.structure
        builder.start_graph(title_for("Data Structure", structure), options.direction)
        add_element(builder, structure, visual_style("DATA_STRUCTURE"))
        if not graph.member_fields:
            return
        builder.start_subgraph(DATA_FIELDS_SUBGRAPH, visual_style("SUBGRAPH"))
        add_member_fields(builder, structure.guid, graph.member_fields)
        builder.end_subgraph()
