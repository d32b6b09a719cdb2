from __future__ import annotations

from enum import Enum
from typing import Mapping, Optional

from .styles import DEFAULT_SHAPE, VisualStyle

FLOWCHART_DIRECTIONS = ("LR", "RL", "TB", "TD", "BT")
INIT_DIRECTIVE = '%%{init: {"flowchart": {"htmlLabels": false}} }%%'


class EdgeKind(Enum):
    HEAVY = "heavy"
    THIN = "thin"
    DOTTED = "dotted"
    LONG = "long"
    ANIMATED_LONG = "animated-long"
    INVISIBLE = "invisible"


def sanitize_label(text: Optional[str]) -> Optional[str]:
    """
    Make free text safe inside a quoted Mermaid label.
    Double quotes end the label early and `//` is read as the start of a link.
    """
    if text is None:
        return None
    return str(text).replace('"', "'").replace("//", "/ /")


def add_spaces_to_type_name(type_name: Optional[str]) -> str:
    """DataStoreFile -> Data Store File. Runs of capitals (API, SQL) stay together."""
    if not type_name:
        return ""
    out = []
    prev = ""
    for ch in str(type_name):
        if ch.isupper() and out and (prev.islower() or prev.isdigit()):
            out.append(" ")
        out.append(ch)
        prev = ch
    return "".join(out)


def check_direction(direction: str) -> str:
    value = str(direction).strip().upper()
    if value not in FLOWCHART_DIRECTIONS:
        raise ValueError(f"Unsupported flowchart direction {direction!r}; expected one of: {', '.join(FLOWCHART_DIRECTIONS)}")
    return value


def front_matter_title(title: str) -> str:
    """Collapse a diagram title onto one line so it stays a single YAML scalar."""
    return " ".join((sanitize_label(title) or "").split()).replace("\\", "\\\\")


def render_front_matter(title: str, direction: str = "LR") -> str:
    return f'---\ntitle: "{front_matter_title(title)}"\n---\nflowchart {check_direction(direction)}\n{INIT_DIRECTIVE}\n\n'


def render_node(
    node_id: str,
    label: Optional[str],
    type_label: Optional[str],
    style: Optional[VisualStyle],
    extra_properties: Optional[Mapping[str, Optional[str]]] = None,
) -> str:
    shape = (style.shape if style is not None else None) or DEFAULT_SHAPE
    parts = [f'{node_id}@{{ shape: {shape}, label: "*{sanitize_label(add_spaces_to_type_name(type_label))}*\n']
    if label is not None:
        parts.append(f"**{sanitize_label(str(label).strip())}**")
    for name, value in (extra_properties or {}).items():
        parts.append(f"\n{name}: {sanitize_label(value) if value is not None else ''}")
    parts.append('"}\n')
    return "".join(parts)


def render_edge(
    source_id: str,
    target_id: str,
    label: Optional[str],
    kind: EdgeKind,
    edge_id: Optional[str] = None,
) -> str:
    text = sanitize_label(label)
    if kind is EdgeKind.INVISIBLE:
        return f"{source_id}~~~{target_id}\n"
    if kind is EdgeKind.THIN:
        arrow = f'-->|"{text}"|' if text is not None else "-->"
    elif kind is EdgeKind.DOTTED:
        arrow = f'-. "{text}" .->' if text is not None else "-.->"
    elif kind in (EdgeKind.LONG, EdgeKind.ANIMATED_LONG):
        prefix = f"{edge_id}@" if (kind is EdgeKind.ANIMATED_LONG and edge_id) else ""
        body = f'-- "{text}" ------>' if text is not None else "------>"
        arrow = f" {prefix}{body}"
    else:
        arrow = f'==>|"{text}"|' if text is not None else "==>"
    return f"{source_id}{arrow}{target_id}\n"


def render_subgraph_start(subgraph_id: str, name: str, direction: Optional[str] = None) -> str:
    line = f"subgraph {subgraph_id} [{sanitize_label(name)}]\n"
    if direction:
        line += f"direction {check_direction(direction)}\n"
    return line


def render_style(node_id: str, style: VisualStyle) -> Optional[str]:
    if not style.has_colors:
        return None
    parts = []
    if style.text_color:
        parts.append(f"color:{style.text_color}")
    if style.fill_color:
        parts.append(f"fill:{style.fill_color}")
    if style.line_color:
        parts.append(f"stroke:{style.line_color}")
    return f"style {node_id} {', '.join(parts)}\n"


def render_animation(edge_id: str) -> str:
    return f"{edge_id}@{{ animation: fast }}\n"
