from __future__ import annotations

from ..mermaid.builder import DiagramBuilder
from ..mermaid.styles import visual_style
from ..mermaid.syntax import EdgeKind
from ..model.graphs import AssetGraph
from .base import (
    BuildOptions,
    Direction,
    add_classifications,
    add_element,
    add_related_elements,
    add_relationship_line,
    lineage_edge_kind,
    title_for,
)


class AssetAssembler:
    """
    An asset with the elements anchored to it, its relationships, external
    references and the information supply chains it takes part in.
    """

    kind = "asset"
    graph_type = AssetGraph
    anchor_policy = False

    def assemble(self, graph: AssetGraph, builder: DiagramBuilder, options: BuildOptions) -> None:
        asset = graph.asset
        builder.start_graph(title_for("Asset", asset), options.direction)
        add_element(builder, asset, visual_style("ASSET"))

        for element in graph.anchored_elements:
            add_element(builder, element, visual_style("ANCHORED_ELEMENT"))

        for relationship in graph.relationships:
            kind = EdgeKind.THIN if lineage_edge_kind(relationship.header) is EdgeKind.THIN else EdgeKind.HEAVY
            add_relationship_line(builder, relationship, kind)

        add_related_elements(
            builder,
            graph.external_references,
            start_key=asset.guid,
            default_style=visual_style("EXTERNAL_REFERENCE"),
            direction=Direction.FROM_START,
            kind=EdgeKind.THIN,
        )
        add_related_elements(
            builder,
            graph.information_supply_chains,
            start_key=asset.guid,
            default_style=visual_style("INFORMATION_SUPPLY_CHAIN"),
            kind=EdgeKind.THIN,
        )

        if options.full_display:
            add_classifications(builder, asset.header)
