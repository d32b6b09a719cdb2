from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Mapping, Optional

from .styles import visual_style
from .syntax import EdgeKind

if TYPE_CHECKING:
    from .builder import DiagramBuilder

ANCHORS_CLASSIFICATION = "Anchors"
ANCHOR_GUID_PROPERTY = "anchorGUID"
ANCHOR_TYPE_NAME_PROPERTY = "anchorTypeName"
UNKNOWN_ANCHOR_TYPE = "null"
ANCHOR_LINK_LABEL = "Anchor for"


@dataclass(frozen=True)
class AnchorNode:
    anchor_key: str
    type_label: str


def _classification_properties(classification: Any) -> Mapping[str, Any]:
    props = getattr(classification, "properties", None)
    return props if isinstance(props, Mapping) else {}


class AnchorTracker:
    """
    Collects anchor back-references while elements are drawn and emits the
    dotted "Anchor for" links once the rest of the diagram is complete.

    Anchors and the elements they own keep first-seen order.
    """

    def __init__(self) -> None:
        self._anchors: Dict[str, AnchorNode] = {}
        self._owned: Dict[str, Dict[str, None]] = {}

    def record_possible_anchor(self, element_key: str, classifications: Optional[Iterable[Any]]) -> None:
        if not element_key or not classifications:
            return
        for classification in classifications:
            if getattr(classification, "classification_name", None) != ANCHORS_CLASSIFICATION:
                continue
            props = _classification_properties(classification)
            anchor_key = props.get(ANCHOR_GUID_PROPERTY)
            if anchor_key is None:
                return
            anchor_key = str(anchor_key)
            if anchor_key == element_key:
                return
            if anchor_key not in self._anchors:
                type_label = props.get(ANCHOR_TYPE_NAME_PROPERTY)
                self._anchors[anchor_key] = AnchorNode(
                    anchor_key=anchor_key,
                    type_label=str(type_label) if type_label is not None else UNKNOWN_ANCHOR_TYPE,
                )
            self._owned.setdefault(anchor_key, {})[element_key] = None
            return

    def anchors(self) -> List[AnchorNode]:
        return list(self._anchors.values())

    def owned_by(self, anchor_key: str) -> List[str]:
        return list(self._owned.get(anchor_key, {}))

    def __len__(self) -> int:
        return len(self._anchors)

    def emit_anchor_links(self, builder: DiagramBuilder, include_all_anchors: bool) -> int:
        """
        Draw dotted links from each anchor to the elements it owns.

        With include_all_anchors the anchor node is added when missing; otherwise
        anchors that are not already drawn are skipped. Returns the number of links emitted.
        """
        emitted = 0
        anchor_style = visual_style("LINEAGE_ANCHOR")
        for anchor_key, anchor in self._anchors.items():
            if include_all_anchors:
                builder.add_node(anchor_key, anchor_key, anchor.type_label, anchor_style)
            elif not builder.has_node(anchor_key):
                continue
            for element_key in self._owned.get(anchor_key, {}):
                builder.add_edge(None, anchor_key, element_key, ANCHOR_LINK_LABEL, EdgeKind.DOTTED)
                emitted += 1
        return emitted
