from __future__ import annotations

import argparse
import json
import os
import warnings
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml

from .mermaid.syntax import FLOWCHART_DIRECTIONS

# --------
# Defaults
# --------
DEFAULT_DIRECTION = "LR"
DEFAULT_GLOB = "*.mmd"
ENV_PREFIX = "CATALOG_MERMAID_"
ALLOWED_CONFIG_KEYS = {
    "input",
    "output",
    "kind",
    "markdown",
    "include_all_anchors",
    "full_display",
    "direction",
    "summary",
    "log_level",
    "json_logs",
    "style_overrides",
    "glob",
    "outdir",
}
BOOL_CONFIG_KEYS = {"markdown", "include_all_anchors", "full_display", "summary", "json_logs"}
PATH_CONFIG_KEYS = {"input", "output", "outdir"}
STR_CONFIG_KEYS = {"kind", "direction", "log_level", "glob"}
STYLE_OVERRIDE_FIELDS = {"text", "fill", "line", "shape"}


@dataclass(frozen=True)
class RenderConfig:
    # Input/output
    input: Optional[Path] = None
    output: Optional[Path] = None
    kind: Optional[str] = None
    markdown: bool = False

    # Diagram
    include_all_anchors: Optional[bool] = None  # None: assembler default
    full_display: bool = True
    direction: str = DEFAULT_DIRECTION
    style_overrides: Optional[Dict[str, Dict[str, Optional[str]]]] = None

    # Reporting
    summary: bool = False
    log_level: str = "WARNING"
    json_logs: bool = False

    # validate
    glob: str = DEFAULT_GLOB
    outdir: Optional[Path] = None


def _parse_config_file(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    text = path.read_text(encoding="utf-8")
    try:
        if path.suffix.lower() in {".yaml", ".yml"}:
            data = yaml.safe_load(text) or {}
        elif path.suffix.lower() == ".json":
            data = json.loads(text)
        else:
            # Try YAML first then JSON
            try:
                data = yaml.safe_load(text) or {}
            except yaml.YAMLError:
                data = json.loads(text)
    except Exception as e:
        raise ValueError(f"Failed to parse config file {path}: {e}") from e
    if not isinstance(data, dict):
        raise ValueError("Top-level config must be an object")
    return data


def _env_str(name: str) -> Optional[str]:
    raw = os.getenv(ENV_PREFIX + name)
    if raw is None:
        return None
    raw = raw.strip()
    if not raw:
        return None
    return raw


def _env_bool(name: str) -> Optional[bool]:
    raw = _env_str(name)
    if raw is None:
        return None
    return raw.lower() in {"1", "true", "yes", "on"}


def _coerce_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        raw = value.strip().lower()
        if raw in {"1", "true", "yes", "on"}:
            return True
        if raw in {"0", "false", "no", "off"}:
            return False
    raise ValueError(f"Config field '{key}' must be a boolean")


def _normalize_style_overrides(value: Any) -> Dict[str, Dict[str, Optional[str]]]:
    if not isinstance(value, Mapping):
        raise ValueError("Config field 'style_overrides' must be a mapping of style name to fields")
    overrides: Dict[str, Dict[str, Optional[str]]] = {}
    for name, fields in value.items():
        if not isinstance(fields, Mapping):
            raise ValueError(f"Style override '{name}' must be a mapping")
        unknown = sorted(set(fields) - STYLE_OVERRIDE_FIELDS)
        if unknown:
            raise ValueError(f"Style override '{name}' has unknown fields: {', '.join(unknown)}")
        overrides[str(name).upper()] = dict(fields)
    return overrides


def _normalize_config_file(data: Dict[str, Any]) -> Dict[str, Any]:
    unknown = sorted(set(data.keys()) - ALLOWED_CONFIG_KEYS)
    if unknown:
        warnings.warn(f"Unknown config keys ignored: {', '.join(unknown)}")
    normalized: Dict[str, Any] = {}
    for key, value in data.items():
        if key not in ALLOWED_CONFIG_KEYS:
            continue
        if value is None:
            normalized[key] = None
            continue
        if key == "style_overrides":
            normalized[key] = _normalize_style_overrides(value)
        elif key in BOOL_CONFIG_KEYS:
            normalized[key] = _coerce_bool(key, value)
        elif key in PATH_CONFIG_KEYS:
            if isinstance(value, (str, Path)):
                normalized[key] = value
            else:
                raise ValueError(f"Config field '{key}' must be a string path")
        elif key in STR_CONFIG_KEYS:
            if isinstance(value, str):
                normalized[key] = value
            else:
                raise ValueError(f"Config field '{key}' must be a string")
    return _compact_dict(normalized)


def _compact_dict(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Drop keys with None values so they don't override lower-precedence config.
    """
    return {k: v for k, v in data.items() if v is not None}


def _merge_dicts(a: Dict[str, Any], b: Dict[str, Any]) -> Dict[str, Any]:
    """
    Shallow merge: values in b override a.
    """
    merged = dict(a)
    merged.update(b)
    return merged


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="catalog-mermaid",
        description="Render metadata catalog graphs as Mermaid flowcharts",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_common(p: argparse.ArgumentParser) -> None:
        p.add_argument("--config", type=Path, help="Optional YAML/JSON config file")
        p.add_argument(
            "--json-logs",
            action=argparse.BooleanOptionalAction,
            default=None,
            help="Enable JSON logs",
        )
        p.add_argument("--log-level", default=None, help="Log level (WARNING, INFO, DEBUG, ...)")

    # render
    p_render = subparsers.add_parser("render", help="Render a graph document as Mermaid")
    add_common(p_render)
    p_render.add_argument("--input", type=Path, default=None, help="YAML/JSON graph document")
    p_render.add_argument("--kind", default=None, help="Graph kind (overrides the document's kind)")
    p_render.add_argument("--output", type=Path, default=None, help="Output file (default: stdout)")
    p_render.add_argument(
        "--markdown",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Wrap the diagram in a Markdown mermaid fence",
    )
    p_render.add_argument(
        "--all-anchors",
        dest="include_all_anchors",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Draw anchors even when the anchor is not otherwise in the diagram",
    )
    p_render.add_argument(
        "--full-display",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Include secondary details (classifications, blueprints, ...)",
    )
    p_render.add_argument(
        "--direction",
        default=None,
        choices=sorted(FLOWCHART_DIRECTIONS),
        help=f"Flowchart direction (default {DEFAULT_DIRECTION})",
    )
    p_render.add_argument(
        "--summary",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Print a build summary table to stderr",
    )

    p_kinds = subparsers.add_parser("list-kinds", help="List registered graph kinds")
    add_common(p_kinds)

    p_styles = subparsers.add_parser("list-styles", help="List the visual style table")
    add_common(p_styles)

    p_val = subparsers.add_parser("validate", help="Render Mermaid files with mmdc to check their syntax")
    add_common(p_val)
    p_val.add_argument("--outdir", type=Path, default=None, help="Directory holding Mermaid files")
    p_val.add_argument("--glob", default=None, help=f"File pattern (default {DEFAULT_GLOB!r})")

    return parser


def load_render_config(
    args: Optional[argparse.Namespace] = None,
    argv: Optional[list[str]] = None,
) -> Tuple[str, RenderConfig]:
    """
    Build RenderConfig by merging defaults, optional config file, env vars, and CLI args.
    Precedence (low -> high): defaults < config file < env < CLI.

    Returns:
      (command, RenderConfig) where command is render|list-kinds|list-styles|validate
    """
    ns = args if args is not None else build_parser().parse_args(argv)
    command = ns.command

    # defaults
    base: Dict[str, Any] = {
        "input": None,
        "output": None,
        "kind": None,
        "markdown": False,
        "include_all_anchors": None,
        "full_display": True,
        "direction": DEFAULT_DIRECTION,
        "summary": False,
        "log_level": "WARNING",
        "json_logs": False,
        "style_overrides": None,
        "glob": DEFAULT_GLOB,
        "outdir": None,
    }

    # config file
    file_cfg: Dict[str, Any] = {}
    if getattr(ns, "config", None):
        file_cfg = _normalize_config_file(_parse_config_file(Path(ns.config)))

    # env
    env_cfg: Dict[str, Any] = _compact_dict(
        {
            "input": _env_str("INPUT"),
            "output": _env_str("OUTPUT"),
            "kind": _env_str("KIND"),
            "markdown": _env_bool("MARKDOWN"),
            "include_all_anchors": _env_bool("ALL_ANCHORS"),
            "full_display": _env_bool("FULL_DISPLAY"),
            "direction": _env_str("DIRECTION"),
            "summary": _env_bool("SUMMARY"),
            "log_level": _env_str("LOG_LEVEL"),
            "json_logs": _env_bool("JSON_LOGS"),
            "glob": _env_str("GLOB"),
            "outdir": _env_str("OUTDIR"),
        }
    )

    # CLI
    cli_cfg: Dict[str, Any] = _compact_dict(
        {
            "input": getattr(ns, "input", None),
            "output": getattr(ns, "output", None),
            "kind": getattr(ns, "kind", None),
            "markdown": getattr(ns, "markdown", None),
            "include_all_anchors": getattr(ns, "include_all_anchors", None),
            "full_display": getattr(ns, "full_display", None),
            "direction": getattr(ns, "direction", None),
            "summary": getattr(ns, "summary", None),
            "log_level": getattr(ns, "log_level", None),
            "json_logs": getattr(ns, "json_logs", None),
            "glob": getattr(ns, "glob", None),
            "outdir": getattr(ns, "outdir", None),
        }
    )

    merged = _merge_dicts(base, _merge_dicts(file_cfg, _merge_dicts(env_cfg, cli_cfg)))

    direction = str(merged["direction"]).upper()
    if direction not in FLOWCHART_DIRECTIONS:
        raise ValueError(f"Direction must be one of: {', '.join(sorted(FLOWCHART_DIRECTIONS))}")

    cfg = RenderConfig(
        input=Path(merged["input"]) if merged.get("input") else None,
        output=Path(merged["output"]) if merged.get("output") else None,
        kind=str(merged["kind"]) if merged.get("kind") else None,
        markdown=bool(merged["markdown"]),
        include_all_anchors=merged.get("include_all_anchors"),
        full_display=bool(merged["full_display"]),
        direction=direction,
        style_overrides=merged.get("style_overrides"),
        summary=bool(merged["summary"]),
        log_level=(merged.get("log_level") or "WARNING").upper(),
        json_logs=bool(merged["json_logs"]),
        glob=str(merged.get("glob") or DEFAULT_GLOB),
        outdir=Path(merged["outdir"]) if merged.get("outdir") else None,
    )
    return command, cfg


def dump_config(cfg: RenderConfig) -> Dict[str, Any]:
    return {
        "input": str(cfg.input) if cfg.input else None,
        "output": str(cfg.output) if cfg.output else None,
        "kind": cfg.kind,
        "markdown": cfg.markdown,
        "include_all_anchors": cfg.include_all_anchors,
        "full_display": cfg.full_display,
        "direction": cfg.direction,
        "style_overrides": cfg.style_overrides,
        "summary": cfg.summary,
        "log_level": cfg.log_level,
        "json_logs": cfg.json_logs,
        "glob": cfg.glob,
        "outdir": str(cfg.outdir) if cfg.outdir else None,
    }
