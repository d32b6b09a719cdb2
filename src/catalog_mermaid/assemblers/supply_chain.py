from __future__ import annotations

from ..logging import get_logger
from ..mermaid.builder import DiagramBuilder
from ..mermaid.resolve import display_name_for
from ..mermaid.styles import visual_style
from ..mermaid.syntax import EdgeKind
from ..model.graphs import InformationSupplyChainGraph
from .base import (
    BuildOptions,
    Direction,
    add_element,
    add_related_elements,
    add_relationship_line,
    label_or_relationship_type,
    lineage_edge_kind,
    title_for,
)

LOG = get_logger(__name__)

SEGMENT_LINK_LABEL = "Segment"


class InformationSupplyChainAssembler:
    """
    One subgraph per segment holding the segment, the components that implement
    it and its lineage. A supply chain without segments produces no diagram.
    """

    kind = "information-supply-chain"
    graph_type = InformationSupplyChainGraph
    anchor_policy = None

    def assemble(self, graph: InformationSupplyChainGraph, builder: DiagramBuilder, options: BuildOptions) -> None:
        supply_chain = graph.supply_chain
        if not graph.segments:
            LOG.info("Supply chain has no segments; nothing to draw", extra={"kind": self.kind})
            builder.clear_graph()
            return

        builder.start_graph(title_for("Information Supply Chain", supply_chain), options.direction)
        add_element(builder, supply_chain, visual_style("INFORMATION_SUPPLY_CHAIN"))

        add_related_elements(
            builder,
            graph.parents,
            start_key=supply_chain.guid,
            default_style=visual_style("INFORMATION_SUPPLY_CHAIN"),
            direction=Direction.TO_START,
        )
        add_related_elements(
            builder,
            graph.peers,
            start_key=supply_chain.guid,
            default_style=visual_style("INFORMATION_SUPPLY_CHAIN"),
            kind=EdgeKind.THIN,
        )
        add_related_elements(
            builder,
            graph.implemented_by,
            start_key=supply_chain.guid,
            default_style=visual_style("INFORMATION_SUPPLY_CHAIN_IMPL"),
            direction=Direction.FROM_START,
            label=label_or_relationship_type,
        )

        for segment in graph.segments:
            segment_key = segment.guid
            builder.start_subgraph(
                f"Segment - {display_name_for(segment.segment)}",
                visual_style("SUBGRAPH"),
                key=f"segment-subgraph:{segment_key}",
            )
            add_element(builder, segment.segment, visual_style("INFORMATION_SUPPLY_CHAIN_SEG"))
            add_related_elements(
                builder,
                segment.implemented_by,
                start_key=segment_key,
                default_style=visual_style("INFORMATION_SUPPLY_CHAIN_IMPL"),
                direction=Direction.FROM_START,
                label=label_or_relationship_type,
            )
            for relationship in segment.lineage:
                add_relationship_line(
                    builder,
                    relationship,
                    lineage_edge_kind(relationship.header),
                    visual_style("LINEAGE_ELEMENT"),
                )
            builder.end_subgraph()
            builder.add_edge(None, supply_chain.guid, segment_key, SEGMENT_LINK_LABEL, EdgeKind.HEAVY)
