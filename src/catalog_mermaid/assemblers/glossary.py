from __future__ import annotations

from ..mermaid.builder import DiagramBuilder
from ..mermaid.styles import visual_style
from ..mermaid.syntax import EdgeKind
from ..model.graphs import GlossaryCategoryGraph, GlossaryTermGraph
from .base import (
    BuildOptions,
    Direction,
    add_description_boxes,
    add_element,
    add_related_elements,
    title_for,
)


class GlossaryTermAssembler:
    kind = "glossary-term"
    graph_type = GlossaryTermGraph
    anchor_policy = None

    def assemble(self, graph: GlossaryTermGraph, builder: DiagramBuilder, options: BuildOptions) -> None:
        term = graph.term
        builder.start_graph(title_for("Glossary Term", term), options.direction)
        add_element(builder, term, visual_style("GLOSSARY_TERM"))

        if graph.glossary is not None:
            add_related_elements(
                builder,
                [graph.glossary],
                start_key=term.guid,
                default_style=visual_style("GLOSSARY"),
                direction=Direction.TO_START,
            )
        add_related_elements(
            builder,
            graph.categories,
            start_key=term.guid,
            default_style=visual_style("GLOSSARY_CATEGORY"),
            direction=Direction.TO_START,
        )
        add_related_elements(
            builder,
            graph.related_terms,
            start_key=term.guid,
            default_style=visual_style("GLOSSARY_TERM"),
            kind=EdgeKind.THIN,
        )
        add_related_elements(
            builder,
            graph.external_references,
            start_key=term.guid,
            default_style=visual_style("EXTERNAL_REFERENCE"),
            direction=Direction.FROM_START,
            kind=EdgeKind.THIN,
        )
        add_related_elements(
            builder,
            graph.semantic_assignments,
            start_key=term.guid,
            default_style=visual_style("LINKED_ELEMENT"),
            direction=Direction.TO_START,
        )
        add_related_elements(
            builder,
            graph.other_related,
            start_key=term.guid,
            default_style=visual_style("LINKED_ELEMENT"),
            kind=EdgeKind.THIN,
        )

        add_description_boxes(
            builder,
            term.guid,
            [("Summary", graph.summary), ("Description", graph.description), ("Usage", graph.usage)],
            subgraph="Term Details",
        )


class GlossaryCategoryAssembler:
    """A category with its glossary, its parent and the full subcategory tree."""

    kind = "glossary-category"
    graph_type = GlossaryCategoryGraph
    anchor_policy = None

    def assemble(self, graph: GlossaryCategoryGraph, builder: DiagramBuilder, options: BuildOptions) -> None:
        category = graph.category
        builder.start_graph(title_for("Glossary Category", category), options.direction)
        add_element(builder, category, visual_style("GLOSSARY_CATEGORY"))

        if graph.glossary is not None:
            add_related_elements(
                builder,
                [graph.glossary],
                start_key=category.guid,
                default_style=visual_style("GLOSSARY"),
                direction=Direction.TO_START,
            )
        if graph.parent_category is not None:
            add_related_elements(
                builder,
                [graph.parent_category],
                start_key=category.guid,
                default_style=visual_style("GLOSSARY_CATEGORY"),
                direction=Direction.TO_START,
            )
        add_related_elements(
            builder,
            graph.subcategories,
            start_key=category.guid,
            default_style=visual_style("GLOSSARY_CATEGORY"),
            direction=Direction.FROM_START,
        )
        add_related_elements(
            builder,
            graph.terms,
            start_key=category.guid,
            default_style=visual_style("GLOSSARY_TERM"),
            direction=Direction.FROM_START,
            kind=EdgeKind.THIN,
        )
