from __future__ import annotations

from ..mermaid.builder import DiagramBuilder
from ..mermaid.resolve import display_name_for, resolve_style_for_classifications, type_label_for_entity
from ..mermaid.styles import visual_style
from ..model.graphs import LineageGraph
from .base import BuildOptions, add_relationship_line, lineage_edge_kind


class LineageAssembler:
    """
    Lineage around one asset. Both ends of every lineage relationship are drawn;
    anchors shared between them are linked when the build finalizes.
    """

    kind = "lineage"
    graph_type = LineageGraph
    anchor_policy = False

    def assemble(self, graph: LineageGraph, builder: DiagramBuilder, options: BuildOptions) -> None:
        asset = graph.asset
        name = display_name_for(asset)
        builder.start_graph(f"Lineage Graph for {name} [{asset.guid}]", options.direction)
        builder.record_anchor(asset.header)
        builder.add_node(
            asset.guid,
            name,
            type_label_for_entity(asset.header),
            resolve_style_for_classifications(asset.header, visual_style("LINEAGE_ANCHOR")),
        )

        lineage_element = visual_style("LINEAGE_ELEMENT")
        for relationship in graph.lineage_relationships:
            add_relationship_line(builder, relationship, lineage_edge_kind(relationship.header), lineage_element)
