from __future__ import annotations

import json
import sys

import pytest

from catalog_mermaid import cli
from catalog_mermaid.config import RenderConfig
from catalog_mermaid.export import mermaid as export_mermaid
from catalog_mermaid.util.errors import ConfigError, ExitCode, ExportError


def _write_asset_document(tmp_path, kind: str = "asset"):
    path = tmp_path / "asset.json"
    path.write_text(
        json.dumps(
            {
                "kind": kind,
                "graph": {"asset": {"guid": "asset-1", "type": "Asset", "properties": {"displayName": "Orders"}}},
            }
        ),
        encoding="utf-8",
    )
    return path


def test_render_to_stdout(tmp_path, capsys) -> None:
    code = cli.cmd_render(RenderConfig(input=_write_asset_document(tmp_path)))
    assert code == 0
    out = capsys.readouterr().out
    assert out.startswith("---\ntitle: \"Asset - Orders [asset-1]\"\n---\nflowchart LR\n")


def test_render_markdown_file(tmp_path) -> None:
    output = tmp_path / "out" / "asset.md"
    code = cli.cmd_render(RenderConfig(input=_write_asset_document(tmp_path), output=output, markdown=True))
    assert code == 0
    text = output.read_text(encoding="utf-8")
    assert text.startswith("# Asset - Orders [asset-1]\n\n```mermaid\n---\n")
    assert text.endswith("```\n")


def test_render_kind_override_and_direction(tmp_path, capsys) -> None:
    path = _write_asset_document(tmp_path, kind="unit:wrong")
    code = cli.cmd_render(RenderConfig(input=path, kind="lineage", direction="TB"))
    assert code == 0
    out = capsys.readouterr().out
    assert 'title: "Lineage Graph for Orders [asset-1]"' in out
    assert "flowchart TB\n" in out


def test_render_applies_style_overrides(tmp_path, capsys) -> None:
    cfg = RenderConfig(input=_write_asset_document(tmp_path), style_overrides={"ASSET": {"fill": "#ABCDEF"}})
    cli.cmd_render(cfg)
    assert "fill:#ABCDEF" in capsys.readouterr().out


def test_render_needs_input_and_kind(tmp_path) -> None:
    with pytest.raises(ConfigError):
        cli.cmd_render(RenderConfig())
    bare = tmp_path / "bare.yaml"
    bare.write_text("asset: {guid: a, type: Asset}\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        cli.cmd_render(RenderConfig(input=bare))


def test_empty_diagram_exit_code(tmp_path, capsys) -> None:
    path = tmp_path / "chain.yaml"
    path.write_text(
        "kind: information-supply-chain\n"
        "graph:\n"
        "  supply_chain: {guid: isc-1, type: InformationSupplyChain}\n",
        encoding="utf-8",
    )
    output = tmp_path / "chain.mmd"
    code = cli.cmd_render(RenderConfig(input=path, output=output))
    assert code == ExitCode.EMPTY_DIAGRAM
    assert not output.exists()


def test_list_kinds(capsys) -> None:
    assert cli.cmd_list_kinds(RenderConfig()) == 0
    out = capsys.readouterr().out
    assert "glossary-term" in out
    assert "DataStructureGraph" in out


def test_validate_without_mmdc_raises(tmp_path, monkeypatch) -> None:
    monkeypatch.setattr(export_mermaid, "which", lambda name: None)
    with pytest.raises(ExportError):
        cli.cmd_validate(RenderConfig(outdir=tmp_path))
    with pytest.raises(ConfigError):
        cli.cmd_validate(RenderConfig())


def test_main_maps_errors_to_exit_codes(tmp_path, monkeypatch) -> None:
    path = _write_asset_document(tmp_path, kind="unit:not-registered")
    monkeypatch.setattr(sys, "argv", ["catalog-mermaid", "render", "--input", str(path)])
    with pytest.raises(SystemExit) as excinfo:
        cli.main()
    assert excinfo.value.code == ExitCode.CONFIG_ERROR

    monkeypatch.setattr(sys, "argv", ["catalog-mermaid", "render", "--input", str(tmp_path / "missing.json")])
    with pytest.raises(SystemExit) as excinfo:
        cli.main()
    assert excinfo.value.code == ExitCode.INPUT_ERROR


def test_main_success_exits_zero(tmp_path, monkeypatch) -> None:
    output = tmp_path / "asset.mmd"
    monkeypatch.setattr(
        sys,
        "argv",
        ["catalog-mermaid", "render", "--input", str(_write_asset_document(tmp_path)), "--output", str(output)],
    )
    with pytest.raises(SystemExit) as excinfo:
        cli.main()
    assert excinfo.value.code == 0
    assert output.read_text(encoding="utf-8").startswith("---\ntitle: \"Asset - Orders [asset-1]\"")


def test_markdown_heading_keeps_colon_in_title(tmp_path, capsys) -> None:
    path = tmp_path / "asset.yaml"
    path.write_text(
        "kind: asset\n"
        "graph:\n"
        "  asset: {guid: asset-1, type: Asset, properties: {displayName: 'Orders: EU'}}\n",
        encoding="utf-8",
    )
    assert cli.cmd_render(RenderConfig(input=path, markdown=True)) == 0
    out = capsys.readouterr().out
    assert out.startswith('# Asset - Orders: EU [asset-1]\n\n```mermaid\n---\ntitle: "Asset - Orders: EU [asset-1]"\n')


def test_main_logs_effective_configuration(tmp_path, monkeypatch, caplog) -> None:
    output = tmp_path / "asset.mmd"
    monkeypatch.setattr(
        sys,
        "argv",
        ["catalog-mermaid", "render", "--input", str(_write_asset_document(tmp_path)), "--output", str(output)],
    )
    monkeypatch.setattr(cli, "setup_logging", lambda config=None: None)
    caplog.set_level("DEBUG", logger="catalog_mermaid.cli")
    with pytest.raises(SystemExit):
        cli.main()
    records = [r for r in caplog.records if r.getMessage() == "Effective configuration"]
    assert records
    assert records[0].config["output"] == str(output)
    assert records[0].command == "render"
