from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional, Sequence, Tuple, Union

from rich.console import Console
from rich.table import Table


def _stderr_console() -> Console:
    return Console(stderr=True)


def _output_name(output: Optional[Union[str, Path]]) -> str:
    if output is None:
        return "stdout"
    return str(output)


def render_build_summary_table(
    kind: str,
    nodes: int,
    edges: int,
    output: Optional[Union[str, Path]],
    *,
    console: Optional[Console] = None,
) -> None:
    console = console or _stderr_console()
    table = Table(title="Diagram Summary", show_lines=False)
    table.add_column("Kind", style="bold")
    table.add_column("Nodes", justify="right")
    table.add_column("Edges", justify="right")
    table.add_column("Output")
    table.add_row(kind, str(nodes), str(edges), _output_name(output))
    console.print(table)


def render_style_table(
    rows: Iterable[Sequence[str]],
    *,
    console: Optional[Console] = None,
) -> None:
    """Print (name, text, fill, line, shape) rows, each colour cell drawn in its own colour."""
    console = console or Console()
    table = Table(title="Visual Styles", show_lines=False)
    table.add_column("Style", style="bold")
    table.add_column("Text")
    table.add_column("Fill")
    table.add_column("Line")
    table.add_column("Shape")
    for row in rows:
        name, text, fill, line, shape = row
        table.add_row(name, *(_swatch(value) for value in (text, fill, line)), shape)
    console.print(table)


def _swatch(color: str) -> str:
    if not color:
        return ""
    return f"[on {color}]  [/] {color}"


def render_kinds(kinds: Iterable[Tuple[str, str]], *, console: Optional[Console] = None) -> None:
    console = console or Console()
    table = Table(title="Graph Kinds", show_lines=False)
    table.add_column("Kind", style="bold")
    table.add_column("Graph")
    for kind, graph_type in kinds:
        table.add_row(kind, graph_type)
    console.print(table)
