from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional

from ..logging import get_logger
from ..mermaid.builder import DiagramBuilder
from ..mermaid.styles import StyleTable
from ..model.loader import parse_graph
from ..util.errors import ConfigError, InputError
from .base import Assembler, BuildOptions

LOG = get_logger(__name__)

AssemblerFactory = Callable[[], Assembler]


class AssemblerRegistry:
    """
    Registry mapping graph kinds ("asset", "glossary-term", ...) to Assembler factories.
    Unknown kinds are a configuration error; there is no fallback assembler.
    """

    def __init__(self) -> None:
        self._map: Dict[str, AssemblerFactory] = {}

    def register(self, kind: str, factory: AssemblerFactory) -> None:
        self._map[kind] = factory

    def is_registered(self, kind: str) -> bool:
        return kind in self._map

    def registered_kinds(self) -> list[str]:
        return sorted(self._map.keys())

    def get(self, kind: str) -> Assembler:
        factory = self._map.get(kind)
        if factory is None:
            known = ", ".join(self.registered_kinds())
            raise ConfigError(f"Unknown graph kind {kind!r} (known kinds: {known})")
        return factory()


_global_registry = AssemblerRegistry()


def register_assembler(kind: str, factory: AssemblerFactory) -> None:
    _global_registry.register(kind, factory)


def get_assembler_for(kind: str) -> Assembler:
    return _global_registry.get(kind)


def is_assembler_registered(kind: str) -> bool:
    return _global_registry.is_registered(kind)


def list_registered_kinds() -> list[str]:
    return _global_registry.registered_kinds()


@dataclass(frozen=True)
class RenderResult:
    kind: str
    text: Optional[str]
    nodes: int
    edges: int

    @property
    def empty(self) -> bool:
        return self.text is None


def build_diagram(
    kind: str,
    graph: Any,
    options: Optional[BuildOptions] = None,
    style_table: Optional[StyleTable] = None,
) -> RenderResult:
    """
    Assemble one graph into Mermaid text.

    `graph` is either the kind's graph dataclass or a mapping that is parsed into it.
    The result text is None when the assembler cleared the diagram.
    """
    assembler = get_assembler_for(kind)
    options = options or BuildOptions()
    if isinstance(graph, Mapping):
        graph = parse_graph(kind, graph)
    elif not isinstance(graph, assembler.graph_type):
        raise InputError(
            f"{kind} diagrams need a {assembler.graph_type.__name__}, got {type(graph).__name__}"
        )

    builder = DiagramBuilder(style_table)
    assembler.assemble(graph, builder, options)

    if assembler.anchor_policy is None:
        include_all_anchors = None
    elif options.include_all_anchors is None:
        include_all_anchors = assembler.anchor_policy
    else:
        include_all_anchors = options.include_all_anchors

    text = builder.finalize(include_all_anchors)
    LOG.info(
        "Built diagram",
        extra={"kind": kind, "nodes": builder.node_count, "edges": builder.edge_count},
    )
    return RenderResult(kind=kind, text=text, nodes=builder.node_count, edges=builder.edge_count)


def render_graph(
    kind: str,
    graph: Any,
    options: Optional[BuildOptions] = None,
    style_table: Optional[StyleTable] = None,
) -> Optional[str]:
    return build_diagram(kind, graph, options, style_table).text


def _register_builtin_assemblers() -> None:
    from .asset import AssetAssembler
    from .data_structure import DataStructureAssembler
    from .glossary import GlossaryCategoryAssembler, GlossaryTermAssembler
    from .governance import GovernanceDefinitionAssembler
    from .lineage import LineageAssembler
    from .project import ProjectAssembler
    from .solution import SolutionBlueprintAssembler, SolutionComponentAssembler, SolutionRoleAssembler
    from .supply_chain import InformationSupplyChainAssembler

    for factory in (
        AssetAssembler,
        LineageAssembler,
        InformationSupplyChainAssembler,
        GlossaryTermAssembler,
        GlossaryCategoryAssembler,
        ProjectAssembler,
        GovernanceDefinitionAssembler,
        SolutionComponentAssembler,
        SolutionBlueprintAssembler,
        SolutionRoleAssembler,
        DataStructureAssembler,
    ):
        register_assembler(factory.kind, factory)


_register_builtin_assemblers()
