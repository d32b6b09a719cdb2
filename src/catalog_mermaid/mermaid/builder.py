from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Set

from ..logging import get_logger
from ..util.errors import DiagramStateError
from .anchors import AnchorTracker
from .identity import IdentityMapper
from .styles import DEFAULT_STYLE_TABLE, StyleTable, VisualStyle
from .syntax import (
    EdgeKind,
    render_animation,
    render_edge,
    render_front_matter,
    render_node,
    render_style,
    render_subgraph_start,
)

LOG = get_logger(__name__)


class DiagramBuilder:
    """
    Accumulates one Mermaid flowchart.

    Node keys and keyed edges are emitted at most once. Styles are recorded when a
    node or subgraph is first drawn and written as trailing `style` directives by
    finalize(), followed by animation directives for animated edges.

    A builder serves a single build: after finalize() any further mutation raises
    DiagramStateError. clear_graph() abandons the build; mutations then become no-ops
    and finalize() returns None.
    """

    def __init__(self, style_table: Optional[StyleTable] = None) -> None:
        self._style_table = style_table or DEFAULT_STYLE_TABLE
        self._ids = IdentityMapper()
        self._anchors = AnchorTracker()
        self._chunks: List[str] = []
        self._used_nodes: Set[str] = set()
        self._used_edges: Set[str] = set()
        self._animated: Dict[str, None] = {}
        self._styles: Dict[str, VisualStyle] = {}
        self._edge_count = 0
        self._open_subgraphs = 0
        self._cleared = False
        self._finalized = False

    @property
    def style_table(self) -> StyleTable:
        return self._style_table

    @property
    def node_count(self) -> int:
        return len(self._used_nodes)

    @property
    def edge_count(self) -> int:
        return self._edge_count

    @property
    def cleared(self) -> bool:
        return self._cleared

    def has_node(self, key: str) -> bool:
        return key in self._used_nodes

    def lookup_node_name(self, key: str) -> str:
        return self._ids.lookup_node_name(key)

    def _writable(self) -> bool:
        if self._finalized:
            raise DiagramStateError("Diagram has already been finalized")
        return not self._cleared

    def _record_style(self, node_id: str, style: Optional[VisualStyle]) -> None:
        resolved = self._style_table.resolve(style)
        if resolved is not None:
            self._styles[node_id] = resolved

    def start_graph(self, title: str, direction: str = "LR") -> None:
        if not self._writable():
            return
        self._chunks.append(render_front_matter(title, direction))

    def add_node(
        self,
        key: str,
        label: Optional[str],
        type_label: Optional[str],
        style: Optional[VisualStyle],
        extra_properties: Optional[Mapping[str, Optional[str]]] = None,
    ) -> bool:
        """Draw a node the first time its key is seen. Returns False for repeats."""
        if not self._writable() or key in self._used_nodes:
            return False
        self._used_nodes.add(key)
        node_id = self._ids.lookup_node_name(key)
        self._record_style(node_id, style)
        self._chunks.append(
            render_node(node_id, label, type_label, self._style_table.resolve(style), extra_properties)
        )
        return True

    def add_edge(
        self,
        key: Optional[str],
        source_key: str,
        target_key: str,
        label: Optional[str] = None,
        kind: EdgeKind = EdgeKind.HEAVY,
    ) -> bool:
        """
        Draw an edge. Edges with a key are emitted once per key; edges without one are
        always emitted. Returns whether a line was written.
        """
        if kind is EdgeKind.INVISIBLE:
            return self.add_invisible_edge(source_key, target_key)
        if not self._writable():
            return False
        if key is not None:
            if key in self._used_edges:
                return False
            self._used_edges.add(key)
        source_id = self._ids.lookup_node_name(source_key)
        edge_id = None
        if kind is EdgeKind.ANIMATED_LONG and key is not None:
            edge_id = self._ids.lookup_node_name(key)
            self._animated[edge_id] = None
        target_id = self._ids.lookup_node_name(target_key)
        self._chunks.append(render_edge(source_id, target_id, label, kind, edge_id))
        self._edge_count += 1
        return True

    def add_invisible_edge(self, source_key: str, target_key: str) -> bool:
        if not self._writable():
            return False
        source_id = self._ids.lookup_node_name(source_key)
        target_id = self._ids.lookup_node_name(target_key)
        self._chunks.append(render_edge(source_id, target_id, None, EdgeKind.INVISIBLE))
        self._edge_count += 1
        return True

    def start_subgraph(
        self,
        name: str,
        style: Optional[VisualStyle],
        direction: Optional[str] = None,
        key: Optional[str] = None,
    ) -> None:
        """Open a subgraph titled `name`. Its id comes from `key` when given, else from the title."""
        if not self._writable():
            return
        subgraph_id = self._ids.lookup_node_name(key if key is not None else name)
        self._record_style(subgraph_id, style)
        self._chunks.append(render_subgraph_start(subgraph_id, name, direction))
        self._open_subgraphs += 1

    def end_subgraph(self) -> None:
        if not self._writable():
            return
        if self._open_subgraphs <= 0:
            raise DiagramStateError("end_subgraph() called without an open subgraph")
        self._open_subgraphs -= 1
        self._chunks.append("end\n")

    def record_anchor(self, header: Any) -> None:
        if header is None or not self._writable():
            return
        self._anchors.record_possible_anchor(
            getattr(header, "guid", None),
            getattr(header, "classifications", None),
        )

    def clear_graph(self) -> None:
        if self._finalized:
            raise DiagramStateError("Diagram has already been finalized")
        LOG.debug("Diagram cleared; build will produce no output", extra={"nodes": self.node_count, "edges": self.edge_count})
        self._cleared = True
        self._chunks = []

    def finalize(self, include_all_anchors: Optional[bool] = None) -> Optional[str]:
        """
        Emit anchor links (when include_all_anchors is not None), then style and
        animation directives, and return the diagram text. None when the build was cleared.
        """
        if self._finalized:
            raise DiagramStateError("Diagram has already been finalized")
        if self._cleared:
            self._finalized = True
            return None
        while self._open_subgraphs > 0:
            self.end_subgraph()
        if include_all_anchors is not None:
            self._anchors.emit_anchor_links(self, include_all_anchors)
        self._finalized = True
        for node_id, style in self._styles.items():
            line = render_style(node_id, style)
            if line is not None:
                self._chunks.append(line)
        for edge_id in self._animated:
            self._chunks.append(render_animation(edge_id))
        return "".join(self._chunks)
