from __future__ import annotations

from ..mermaid.builder import DiagramBuilder
from ..mermaid.styles import visual_style
from ..mermaid.syntax import EdgeKind
from ..model.graphs import ProjectGraph
from .base import (
    BuildOptions,
    Direction,
    add_element,
    add_related_elements,
    role_label,
    title_for,
)

COLLECTION_MEMBERSHIP = "Collection Membership"


class ProjectAssembler:
    kind = "project"
    graph_type = ProjectGraph
    anchor_policy = None

    def assemble(self, graph: ProjectGraph, builder: DiagramBuilder, options: BuildOptions) -> None:
        project = graph.project
        builder.start_graph(title_for("Project", project), options.direction)
        add_element(builder, project, visual_style("PROJECT"))

        add_related_elements(
            builder,
            graph.parent_projects,
            start_key=project.guid,
            default_style=visual_style("PROJECT"),
            direction=Direction.TO_START,
        )
        # child projects nest through their own hierarchy summaries
        add_related_elements(
            builder,
            graph.child_projects,
            start_key=project.guid,
            default_style=visual_style("PROJECT"),
            direction=Direction.FROM_START,
        )
        add_related_elements(
            builder,
            graph.dependencies,
            start_key=project.guid,
            default_style=visual_style("PROJECT"),
            kind=EdgeKind.THIN,
        )
        add_related_elements(
            builder,
            graph.team,
            start_key=project.guid,
            default_style=visual_style("GOVERNANCE_ACTOR"),
            direction=Direction.TO_START,
            label=role_label,
        )

        if graph.collections:
            builder.start_subgraph(COLLECTION_MEMBERSHIP, visual_style("SUBGRAPH"))
            add_related_elements(
                builder,
                graph.collections,
                start_key=project.guid,
                default_style=visual_style("COLLECTION"),
                direction=Direction.TO_START,
                kind=EdgeKind.THIN,
            )
            builder.end_subgraph()

        add_related_elements(
            builder,
            graph.external_references,
            start_key=project.guid,
            default_style=visual_style("EXTERNAL_REFERENCE"),
            direction=Direction.FROM_START,
            kind=EdgeKind.THIN,
        )
        add_related_elements(
            builder,
            graph.other_related,
            start_key=project.guid,
            default_style=visual_style("LINKED_ELEMENT"),
            kind=EdgeKind.THIN,
        )
