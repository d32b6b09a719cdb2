from __future__ import annotations

import subprocess

import pytest

from catalog_mermaid.export import mermaid as export_mermaid
from catalog_mermaid.export.mermaid import (
    markdown_document,
    validate_mermaid_diagrams_with_mmdc,
    write_mermaid,
)
from catalog_mermaid.util.errors import ExportError


def test_write_plain_and_markdown(tmp_path) -> None:
    text = "---\ntitle: T\n---\nflowchart LR\n"
    plain = write_mermaid(text, tmp_path / "nested" / "graph.mmd")
    assert plain.read_text(encoding="utf-8") == text

    md = write_mermaid(text, tmp_path / "graph.md", markdown=True, title="Asset - Orders")
    assert md.read_text(encoding="utf-8") == "# Asset - Orders\n\n```mermaid\n" + text + "```\n"


def test_markdown_without_title() -> None:
    assert markdown_document("flowchart LR\n") == "```mermaid\nflowchart LR\n```\n"


def test_validate_requires_mmdc(tmp_path, monkeypatch) -> None:
    monkeypatch.setattr(export_mermaid, "which", lambda name: None)
    with pytest.raises(ExportError, match="mmdc"):
        validate_mermaid_diagrams_with_mmdc(tmp_path)


def test_validate_reports_render_failures(tmp_path, monkeypatch) -> None:
    (tmp_path / "a.mmd").write_text("flowchart LR\n", encoding="utf-8")
    (tmp_path / "notes.txt").write_text("skip", encoding="utf-8")
    monkeypatch.setattr(export_mermaid, "which", lambda name: "/usr/local/bin/mmdc")
    calls = []

    def fake_run(cmd, **kwargs):
        calls.append(cmd)
        return subprocess.CompletedProcess(cmd, 1, stdout="", stderr="Parse error on line 2")

    monkeypatch.setattr(export_mermaid.subprocess, "run", fake_run)
    with pytest.raises(ExportError, match="Parse error"):
        validate_mermaid_diagrams_with_mmdc(tmp_path)
    assert len(calls) == 1
    assert calls[0][:3] == ["/usr/local/bin/mmdc", "-i", str(tmp_path / "a.mmd")]


def test_validate_returns_sorted_paths(tmp_path, monkeypatch) -> None:
    for name in ("b.mmd", "a.mmd"):
        (tmp_path / name).write_text("flowchart LR\n", encoding="utf-8")
    monkeypatch.setattr(export_mermaid, "which", lambda name: "/usr/local/bin/mmdc")
    monkeypatch.setattr(
        export_mermaid.subprocess,
        "run",
        lambda cmd, **kwargs: subprocess.CompletedProcess(cmd, 0, stdout="", stderr=""),
    )
    paths = validate_mermaid_diagrams_with_mmdc(tmp_path)
    assert [p.name for p in paths] == ["a.mmd", "b.mmd"]
