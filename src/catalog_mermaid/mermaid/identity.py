from __future__ import annotations

from typing import Dict, Iterator, Tuple


class IdentityMapper:
    """
    Map long opaque keys (guids, relationship ids, subgraph names) to short
    sequential Mermaid ids. Ids are allocated in first-seen order starting at "1"
    and never reused within one build.
    """

    def __init__(self) -> None:
        self._ids: Dict[str, str] = {}

    def lookup_node_name(self, external_key: str) -> str:
        node_id = self._ids.get(external_key)
        if node_id is None:
            node_id = str(len(self._ids) + 1)
            self._ids[external_key] = node_id
        return node_id

    def __contains__(self, external_key: object) -> bool:
        return external_key in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    def items(self) -> Iterator[Tuple[str, str]]:
        return iter(self._ids.items())
