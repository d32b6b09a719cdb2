from __future__ import annotations

from typing import Iterable, Optional, Set

from ..mermaid.builder import DiagramBuilder
from ..mermaid.resolve import (
    display_name_for,
    resolve_style_for_classifications,
    resolve_style_for_solution_component,
    type_label_for_entity,
)
from ..mermaid.styles import visual_style
from ..mermaid.syntax import EdgeKind, add_spaces_to_type_name
from ..model.elements import SolutionComponentElement, WiredSolutionComponent
from ..model.graphs import SolutionBlueprintGraph, SolutionComponentGraph, SolutionRoleGraph
from .base import (
    BuildOptions,
    Direction,
    add_description_boxes,
    add_element,
    add_related_elements,
    related_type_label,
    role_label,
    title_for,
)

COLLECTION_MEMBERSHIP = "Collection Membership"
NESTED_COMPONENT_LABEL = "Nested Solution Component"


def _wire_label(wire: WiredSolutionComponent) -> str:
    wire_type = add_spaces_to_type_name(wire.header.type_name)
    if wire.label:
        return f"{wire.label}\n[{wire_type}]"
    return wire_type


def _add_wires(
    builder: DiagramBuilder,
    component_key: str,
    wires: Iterable[WiredSolutionComponent],
    wire_keys: Set[str],
    inbound: bool,
) -> None:
    for wire in wires:
        wire_key = wire.header.guid
        if wire_key in wire_keys:
            continue
        wire_keys.add(wire_key)
        add_element(builder, wire.linked_element, visual_style("DEFAULT_SOLUTION_COMPONENT"))
        linked_key = wire.linked_element.guid
        if inbound:
            builder.add_edge(wire_key, linked_key, component_key, _wire_label(wire), EdgeKind.HEAVY)
        else:
            builder.add_edge(wire_key, component_key, linked_key, _wire_label(wire), EdgeKind.HEAVY)


def add_solution_component(
    builder: DiagramBuilder,
    parent_key: Optional[str],
    parent_label: Optional[str],
    element: SolutionComponentElement,
    wire_keys: Set[str],
    full_display: bool = True,
) -> None:
    """
    Add a solution component, its wiring and actors, and walk its sub-components.

    Wires are shared between the two components they join, so `wire_keys` collects
    the relationship guids already drawn for the whole build.
    """
    component = element.component
    key = component.guid
    builder.record_anchor(component.header)
    builder.add_node(
        key,
        display_name_for(component),
        type_label_for_entity(component.header),
        resolve_style_for_classifications(
            component.header, resolve_style_for_solution_component(element.solution_component_type)
        ),
    )

    _add_wires(builder, key, element.wired_to, wire_keys, inbound=True)
    _add_wires(builder, key, element.wired_from, wire_keys, inbound=False)

    add_related_elements(
        builder,
        element.actors,
        start_key=key,
        default_style=visual_style("GOVERNANCE_ACTOR"),
        direction=Direction.TO_START,
        label=role_label,
    )

    if full_display:
        add_related_elements(
            builder,
            element.blueprints,
            start_key=key,
            default_style=visual_style("SOLUTION_BLUEPRINT"),
            direction=Direction.TO_START,
            kind=EdgeKind.THIN,
            label=related_type_label,
        )
        add_related_elements(
            builder,
            element.implementations,
            start_key=key,
            default_style=visual_style("INFORMATION_SUPPLY_CHAIN_IMPL"),
            direction=Direction.FROM_START,
        )
        add_related_elements(
            builder,
            element.other_elements,
            start_key=key,
            default_style=visual_style("LINKED_ELEMENT"),
            kind=EdgeKind.THIN,
        )

    if parent_key is not None:
        builder.add_edge(None, parent_key, key, parent_label, EdgeKind.HEAVY)

    for sub_component in element.sub_components:
        add_solution_component(builder, key, NESTED_COMPONENT_LABEL, sub_component, wire_keys, full_display)


class SolutionComponentAssembler:
    kind = "solution-component"
    graph_type = SolutionComponentGraph
    anchor_policy = None

    def assemble(self, graph: SolutionComponentGraph, builder: DiagramBuilder, options: BuildOptions) -> None:
        builder.start_graph(title_for("Solution Component", graph.component.component), options.direction)
        add_solution_component(builder, None, None, graph.component, set(), options.full_display)


class SolutionBlueprintAssembler:
    kind = "solution-blueprint"
    graph_type = SolutionBlueprintGraph
    anchor_policy = None

    def assemble(self, graph: SolutionBlueprintGraph, builder: DiagramBuilder, options: BuildOptions) -> None:
        blueprint = graph.blueprint
        builder.start_graph(title_for("Solution Blueprint", blueprint), options.direction)
        add_element(builder, blueprint, visual_style("SOLUTION_BLUEPRINT"))
        add_description_boxes(builder, blueprint.guid, [("Description", graph.description)])

        wire_keys: Set[str] = set()
        for component in graph.solution_components:
            add_solution_component(
                builder, blueprint.guid, COLLECTION_MEMBERSHIP, component, wire_keys, options.full_display
            )


class SolutionRoleAssembler:
    kind = "solution-role"
    graph_type = SolutionRoleGraph
    anchor_policy = None

    def assemble(self, graph: SolutionRoleGraph, builder: DiagramBuilder, options: BuildOptions) -> None:
        role = graph.role
        builder.start_graph(title_for("Solution Role", role), options.direction)
        builder.record_anchor(role.header)
        builder.add_node(
            role.guid,
            display_name_for(role),
            type_label_for_entity(role.header),
            resolve_style_for_classifications(role.header, visual_style("SOLUTION_ROLE")),
        )
        add_related_elements(
            builder,
            graph.solution_components,
            start_key=role.guid,
            default_style=visual_style("DEFAULT_SOLUTION_COMPONENT"),
            direction=Direction.FROM_START,
            label=role_label,
        )
