from __future__ import annotations

import sys
from typing import Optional

import yaml

from .assemblers import build_diagram, get_assembler_for, list_registered_kinds
from .assemblers.base import BuildOptions
from .config import RenderConfig, dump_config, load_render_config
from .export.mermaid import markdown_document, validate_mermaid_diagrams_with_mmdc, write_mermaid
from .logging import LogConfig, get_logger, setup_logging
from .mermaid.styles import DEFAULT_STYLE_TABLE, StyleTable, style_rows
from .model.loader import load_graph_document
from .util.errors import ConfigError, ExitCode, as_exit_code
from .util.rich_progress import render_build_summary_table, render_kinds, render_style_table

LOG = get_logger(__name__)


def _style_table(cfg: RenderConfig) -> StyleTable:
    if not cfg.style_overrides:
        return DEFAULT_STYLE_TABLE
    return DEFAULT_STYLE_TABLE.with_overrides(cfg.style_overrides)


def _diagram_title(text: str) -> Optional[str]:
    lines = text.splitlines()
    if len(lines) > 1 and lines[0] == "---" and lines[1].startswith("title: "):
        front = yaml.safe_load(lines[1])
        return str(front["title"])
    return None


def cmd_render(cfg: RenderConfig) -> int:
    if cfg.input is None:
        raise ConfigError("render needs --input (or 'input' in the config file)")
    doc_kind, graph = load_graph_document(cfg.input)
    kind = cfg.kind or doc_kind
    if not kind:
        raise ConfigError(f"No graph kind given: pass --kind or set 'kind' in {cfg.input}")

    options = BuildOptions(
        include_all_anchors=cfg.include_all_anchors,
        full_display=cfg.full_display,
        direction=cfg.direction,
    )
    result = build_diagram(kind, graph, options, _style_table(cfg))
    if result.text is None:
        LOG.warning("Nothing to draw; no diagram written", extra={"kind": kind, "input": str(cfg.input)})
        return int(ExitCode.EMPTY_DIAGRAM)

    if cfg.output is not None:
        write_mermaid(result.text, cfg.output, markdown=cfg.markdown, title=_diagram_title(result.text))
        LOG.info("Diagram written", extra={"kind": kind, "output": str(cfg.output)})
    elif cfg.markdown:
        sys.stdout.write(markdown_document(result.text, _diagram_title(result.text)))
    else:
        sys.stdout.write(result.text)

    if cfg.summary:
        render_build_summary_table(kind, result.nodes, result.edges, cfg.output)
    return 0


def cmd_list_kinds(cfg: RenderConfig) -> int:
    render_kinds([(kind, get_assembler_for(kind).graph_type.__name__) for kind in list_registered_kinds()])
    return 0


def cmd_list_styles(cfg: RenderConfig) -> int:
    render_style_table(style_rows(_style_table(cfg)))
    return 0


def cmd_validate(cfg: RenderConfig) -> int:
    if cfg.outdir is None:
        raise ConfigError("validate needs --outdir")
    paths = validate_mermaid_diagrams_with_mmdc(cfg.outdir, glob_pattern=cfg.glob)
    LOG.info("Mermaid validation complete", extra={"validated": len(paths), "outdir": str(cfg.outdir)})
    print(f"OK: {len(paths)} diagram(s) validated")
    return 0


def main() -> None:
    try:
        command, cfg = load_render_config()
        setup_logging(LogConfig(level=cfg.log_level, json_logs=cfg.json_logs))
        LOG.debug("Effective configuration", extra={"command": command, "config": dump_config(cfg)})

        if command == "render":
            code = cmd_render(cfg)
        elif command == "list-kinds":
            code = cmd_list_kinds(cfg)
        elif command == "list-styles":
            code = cmd_list_styles(cfg)
        elif command == "validate":
            code = cmd_validate(cfg)
        else:
            raise ConfigError(f"Unknown command: {command}")

        sys.exit(code)
    except SystemExit:
        raise
    except BrokenPipeError:
        # Common when users pipe to `head` or similar tools.
        try:
            sys.exit(0)
        except SystemExit:
            raise
    except Exception as e:
        try:
            setup_logging(LogConfig())  # ensure something is configured
        except Exception:
            pass
        LOG.error("Execution failed", extra={"error": str(e)})
        sys.exit(as_exit_code(e))


if __name__ == "__main__":
    main()
