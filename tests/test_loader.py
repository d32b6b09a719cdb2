from __future__ import annotations

import json

import pytest

from catalog_mermaid.model.graphs import GlossaryTermGraph
from catalog_mermaid.model.loader import load_graph_document, parse_graph
from catalog_mermaid.util.errors import ConfigError, InputError


def test_yaml_document(tmp_path) -> None:
    path = tmp_path / "term.yaml"
    path.write_text(
        "kind: glossary-term\n"
        "graph:\n"
        "  term:\n"
        "    guid: term-1\n"
        "    type: GlossaryTerm\n"
        "    properties: {displayName: Customer}\n",
        encoding="utf-8",
    )
    kind, graph = load_graph_document(path)
    assert kind == "glossary-term"
    parsed = parse_graph(kind, graph)
    assert isinstance(parsed, GlossaryTermGraph)
    assert parsed.term.get("displayName") == "Customer"


def test_json_document(tmp_path) -> None:
    path = tmp_path / "asset.json"
    path.write_text(json.dumps({"kind": "asset", "graph": {"asset": {"guid": "a", "type": "Asset"}}}), encoding="utf-8")
    kind, graph = load_graph_document(path)
    assert kind == "asset"
    assert graph == {"asset": {"guid": "a", "type": "Asset"}}


def test_other_suffix_and_bare_graph(tmp_path) -> None:
    path = tmp_path / "asset.graph"
    path.write_text('{"asset": {"guid": "a", "type": "Asset"}}', encoding="utf-8")
    kind, graph = load_graph_document(path)
    assert kind is None
    assert "asset" in graph


def test_missing_and_malformed_documents(tmp_path) -> None:
    with pytest.raises(InputError):
        load_graph_document(tmp_path / "missing.yaml")
    bad = tmp_path / "bad.json"
    bad.write_text("{not json", encoding="utf-8")
    with pytest.raises(InputError):
        load_graph_document(bad)
    listing = tmp_path / "list.yaml"
    listing.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(InputError):
        load_graph_document(listing)


def test_parse_graph_unknown_kind() -> None:
    with pytest.raises(ConfigError):
        parse_graph("unit:unknown", {})
