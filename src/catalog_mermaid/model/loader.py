from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml

from ..util.errors import InputError


def _parse_text(path: Path, text: str) -> Any:
    suffix = path.suffix.lower()
    if suffix in {".yaml", ".yml"}:
        return yaml.safe_load(text)
    if suffix == ".json":
        return json.loads(text)
    # Try YAML first then JSON
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError:
        return json.loads(text)


def load_graph_document(path: Path) -> Tuple[Optional[str], Dict[str, Any]]:
    """
    Read a graph document: {kind: <assembler kind>, graph: {...}}.

    A document without a `graph` key is treated as the graph itself, in which case
    the kind must come from the caller.
    """
    path = Path(path)
    if not path.exists():
        raise InputError(f"Graph document not found: {path}")
    try:
        data = _parse_text(path, path.read_text(encoding="utf-8"))
    except (OSError, ValueError, yaml.YAMLError) as e:
        raise InputError(f"Failed to parse graph document {path}: {e}") from e
    if not isinstance(data, dict):
        raise InputError(f"Top-level graph document must be an object: {path}")

    kind = data.get("kind")
    if kind is not None and not isinstance(kind, str):
        raise InputError("Graph document field 'kind' must be a string")
    graph = data.get("graph", None)
    if graph is None:
        graph = {k: v for k, v in data.items() if k != "kind"}
    if not isinstance(graph, dict):
        raise InputError("Graph document field 'graph' must be an object")
    return kind, graph


def parse_graph(kind: str, data: Mapping[str, Any]) -> Any:
    from ..assemblers import get_assembler_for

    return get_assembler_for(kind).graph_type.from_dict(data)
