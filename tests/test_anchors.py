from __future__ import annotations

from catalog_mermaid.mermaid.anchors import AnchorTracker
from catalog_mermaid.mermaid.builder import DiagramBuilder
from catalog_mermaid.model.elements import ElementClassification, ElementHeader, ElementType


def _anchored_header(guid: str, anchor_guid: str, anchor_type: str | None = "DataSet") -> ElementHeader:
    props = {"anchorGUID": anchor_guid}
    if anchor_type is not None:
        props["anchorTypeName"] = anchor_type
    return ElementHeader(
        guid=guid,
        type=ElementType("DataField"),
        classifications=(ElementClassification("Anchors", props),),
    )


def _builder_with_fields(*headers: ElementHeader) -> DiagramBuilder:
    builder = DiagramBuilder()
    builder.start_graph("Anchors")
    for header in headers:
        builder.record_anchor(header)
        builder.add_node(header.guid, header.guid, header.type_name, None)
    return builder


def test_tracker_records_anchor_once_and_keeps_owned_order() -> None:
    tracker = AnchorTracker()
    first = _anchored_header("field-2", "asset-1")
    second = _anchored_header("field-1", "asset-1")
    tracker.record_possible_anchor(first.guid, first.classifications)
    tracker.record_possible_anchor(second.guid, second.classifications)
    tracker.record_possible_anchor(first.guid, first.classifications)
    assert len(tracker) == 1
    assert tracker.owned_by("asset-1") == ["field-2", "field-1"]
    assert tracker.anchors()[0].type_label == "DataSet"


def test_tracker_ignores_self_anchors_and_missing_classification() -> None:
    tracker = AnchorTracker()
    own = _anchored_header("asset-1", "asset-1")
    tracker.record_possible_anchor(own.guid, own.classifications)
    tracker.record_possible_anchor("plain", ())
    tracker.record_possible_anchor("plain", None)
    assert len(tracker) == 0


def test_missing_anchor_type_uses_null_label() -> None:
    tracker = AnchorTracker()
    header = _anchored_header("field-1", "asset-1", anchor_type=None)
    tracker.record_possible_anchor(header.guid, header.classifications)
    assert tracker.anchors()[0].type_label == "null"


def test_orphan_anchor_is_skipped_unless_all_anchors_requested() -> None:
    text = _builder_with_fields(_anchored_header("field-1", "asset-1")).finalize(include_all_anchors=False)
    assert "Anchor for" not in text


def test_all_anchors_draws_anchor_node_and_one_link_per_owned_element() -> None:
    builder = _builder_with_fields(
        _anchored_header("field-1", "asset-1"),
        _anchored_header("field-2", "asset-1"),
    )
    text = builder.finalize(include_all_anchors=True)
    assert '3@{ shape: stadium, label: "*Data Set*\n**asset-1**"}' in text
    assert '3-. "Anchor for" .->1\n' in text
    assert '3-. "Anchor for" .->2\n' in text
    assert text.count("Anchor for") == 2


def test_anchor_already_drawn_is_linked_without_all_anchors() -> None:
    builder = DiagramBuilder()
    builder.start_graph("Anchors")
    builder.add_node("asset-1", "Orders", "DataSet", None)
    header = _anchored_header("field-1", "asset-1")
    builder.record_anchor(header)
    builder.add_node(header.guid, "id", "DataField", None)
    text = builder.finalize(include_all_anchors=False)
    assert '1-. "Anchor for" .->2\n' in text


def test_no_anchor_links_without_anchor_policy() -> None:
    text = _builder_with_fields(_anchored_header("field-1", "asset-1")).finalize(include_all_anchors=None)
    assert "Anchor for" not in text
