from __future__ import annotations

import subprocess
import tempfile
from pathlib import Path
from shutil import which
from typing import List, Optional

from ..util.errors import ExportError


def markdown_document(text: str, title: Optional[str] = None) -> str:
    lines: List[str] = []
    if title:
        lines.extend([f"# {title}", ""])
    lines.append("```mermaid")
    lines.append(text.rstrip("\n"))
    lines.append("```")
    return "\n".join(lines) + "\n"


def write_mermaid(text: str, path: Path, *, markdown: bool = False, title: Optional[str] = None) -> Path:
    """Write diagram text to `path`, creating parent directories. Returns the path written."""
    body = markdown_document(text, title) if markdown else text
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(body, encoding="utf-8")
    except OSError as e:
        raise ExportError(f"Failed to write diagram to {path}: {e}") from e
    return path


def _render_check(mmdc: str, source: Path, target: Path) -> None:
    proc = subprocess.run([mmdc, "-i", str(source), "-o", str(target)], text=True, capture_output=True)
    if proc.returncode == 0:
        return
    detail = (proc.stderr or "").strip() or (proc.stdout or "").strip() or f"exit status {proc.returncode}"
    raise ExportError(f"mmdc could not render {source.name}: {detail}")


def validate_mermaid_diagrams_with_mmdc(outdir: Path, *, glob_pattern: str = "*.mmd") -> List[Path]:
    """Render every diagram under `outdir` matching `glob_pattern` with mmdc and return them sorted.

    A diagram that mmdc cannot render raises ExportError naming the file.
    """
    mmdc = which("mmdc")
    if mmdc is None:
        raise ExportError("'mmdc' is not on PATH; install it with: npm install -g @mermaid-js/mermaid-cli")

    diagrams = sorted(p for p in Path(outdir).glob(glob_pattern) if p.is_file())
    with tempfile.TemporaryDirectory(prefix="catalog-mermaid-") as scratch:
        for diagram in diagrams:
            _render_check(mmdc, diagram, Path(scratch) / f"{diagram.stem}.svg")
    return diagrams
