from __future__ import annotations

from ..mermaid.builder import DiagramBuilder
from ..mermaid.styles import visual_style
from ..mermaid.syntax import EdgeKind
from ..model.graphs import GovernanceDefinitionGraph
from .base import (
    BuildOptions,
    Direction,
    add_description_boxes,
    add_element,
    add_related_elements,
    label_or_relationship_type,
    title_for,
)


class GovernanceDefinitionAssembler:
    """
    A governance definition between the definitions it supports and those that
    support it, with peers, implementations, metrics and references around it.
    """

    kind = "governance-definition"
    graph_type = GovernanceDefinitionGraph
    anchor_policy = None

    def assemble(self, graph: GovernanceDefinitionGraph, builder: DiagramBuilder, options: BuildOptions) -> None:
        definition = graph.definition
        key = definition.guid
        builder.start_graph(title_for("Governance Definition", definition), options.direction)
        add_element(builder, definition, visual_style("GOVERNANCE_DEFINITION"))

        add_description_boxes(builder, key, [("Description", graph.description)])

        add_related_elements(
            builder,
            graph.supported_by,
            start_key=key,
            default_style=visual_style("GOVERNANCE_DEFINITION"),
            direction=Direction.TO_START,
        )
        add_related_elements(
            builder,
            graph.supporting,
            start_key=key,
            default_style=visual_style("GOVERNANCE_DEFINITION"),
            direction=Direction.FROM_START,
        )
        add_related_elements(
            builder,
            graph.peers,
            start_key=key,
            default_style=visual_style("GOVERNANCE_DEFINITION"),
            kind=EdgeKind.THIN,
        )
        add_related_elements(
            builder,
            graph.implementations,
            start_key=key,
            default_style=visual_style("LINKED_ELEMENT"),
            direction=Direction.FROM_START,
            label=label_or_relationship_type,
        )
        add_related_elements(
            builder,
            graph.metrics,
            start_key=key,
            default_style=visual_style("GOVERNANCE_METRIC"),
            kind=EdgeKind.THIN,
        )
        add_related_elements(
            builder,
            graph.external_references,
            start_key=key,
            default_style=visual_style("EXTERNAL_REFERENCE"),
            direction=Direction.FROM_START,
            kind=EdgeKind.THIN,
        )
        add_related_elements(
            builder,
            graph.other_related,
            start_key=key,
            default_style=visual_style("LINKED_ELEMENT"),
            kind=EdgeKind.THIN,
        )
