from __future__ import annotations

from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

DEFAULT_SHAPE = "rounded"

# Shapes accepted by Mermaid's `@{ shape: ... }` node syntax (v11.3+).
KNOWN_SHAPES = frozenset(
    {
        "rounded",
        "rect",
        "stadium",
        "circle",
        "dbl-circ",
        "diam",
        "hex",
        "cyl",
        "lin-cyl",
        "h-cyl",
        "doc",
        "docs",
        "lin-doc",
        "tag-doc",
        "flag",
        "fr-rect",
        "div-rect",
        "lin-rect",
        "st-rect",
        "tag-rect",
        "win-pane",
        "notch-rect",
        "sl-rect",
        "lean-r",
        "lean-l",
        "trap-t",
        "trap-b",
        "curv-trap",
        "odd",
        "tri",
        "card",
        "bow-rect",
        "text",
        "braces",
        "hourglass",
        "fork",
        "delay",
        "das",
    }
)


@dataclass(frozen=True)
class VisualStyle:
    name: str
    text_color: Optional[str] = None
    fill_color: Optional[str] = None
    line_color: Optional[str] = None
    shape: Optional[str] = None

    @property
    def has_colors(self) -> bool:
        return bool(self.text_color or self.fill_color or self.line_color)


# (name, text, fill, line, shape)
_STYLE_ROWS: Tuple[Tuple[str, Optional[str], Optional[str], Optional[str], Optional[str]], ...] = (
    # Generic placement
    ("DESCRIPTION", None, None, None, "text"),
    ("PLAIN", None, None, None, "rounded"),
    ("LINKED_ELEMENT", "#000000", "#FFFFFF", "#004563", "rounded"),
    ("ANCHORED_ELEMENT", "#000000", "#E6F2F7", "#004563", "rounded"),
    ("LINEAGE_ELEMENT", "#000000", "#DCEFD4", "#2E6B1F", "rounded"),
    ("LINEAGE_ANCHOR", "#FFFFFF", "#004563", "#004563", "stadium"),
    ("CLASSIFICATION", "#000000", "#FFF9D6", "#B59F00", "tag-rect"),
    ("SUBGRAPH", "#000000", "#F4F6F8", "#004563", None),
    # Classification-driven overrides
    ("MEMENTO", "#5C5C5C", "#E0E0E0", "#8C8C8C", "rounded"),
    ("TEMPLATE", "#000000", "#FCE8CC", "#C77700", "rounded"),
    ("OBJECT_IDENTIFIER", "#000000", "#FFF2B3", "#8C7400", "tag-rect"),
    ("DATA_SHARING_AGREEMENT", "#000000", "#F6D9F2", "#8A2F7A", "doc"),
    ("ROOT_COLLECTION", "#FFFFFF", "#3B5B92", "#233A61", "tri"),
    ("FOLDER", "#000000", "#FFE7A3", "#9C7A00", "fr-rect"),
    ("HOME_COLLECTION", "#000000", "#D7ECFA", "#1D6FA5", "card"),
    ("RESULTS_SET", "#000000", "#E3F4EE", "#2A7B61", "docs"),
    ("RECENT_ACCESS", "#000000", "#EFE6FA", "#6A3FA0", "docs"),
    ("WORK_ITEM_LIST", "#000000", "#FDE2E2", "#B03A2E", "docs"),
    # Entity-type families
    ("EXTERNAL_ID", "#000000", "#FFF4CC", "#9A7D0A", "tag-rect"),
    ("EXTERNAL_REFERENCE", "#000000", "#EAF2FF", "#3366CC", "doc"),
    ("FEEDBACK", "#000000", "#FFEFD5", "#CC7A00", "braces"),
    ("TAG", "#000000", "#FFFACD", "#B8A200", "tag-rect"),
    ("USER_IDENTITY", "#000000", "#E8E8FF", "#5050B0", "circle"),
    ("GOVERNANCE_ACTOR", "#000000", "#E0F0FF", "#2F6EA6", "circle"),
    ("GOVERNANCE_TEAM", "#000000", "#D5E8F8", "#2F6EA6", "dbl-circ"),
    ("COLLECTION", "#000000", "#F0E6D8", "#7A5230", "docs"),
    ("DIGITAL_PRODUCT", "#FFFFFF", "#1F6F8B", "#124457", "flag"),
    ("AGREEMENT", "#000000", "#F6D9F2", "#8A2F7A", "doc"),
    ("DIGITAL_SUBSCRIPTION", "#000000", "#F2C4EB", "#8A2F7A", "doc"),
    ("DATA_DICTIONARY", "#000000", "#E1F5FE", "#0277BD", "docs"),
    ("DATA_SPEC", "#000000", "#E0F2F1", "#00695C", "docs"),
    ("HOST", "#FFFFFF", "#4D4D4D", "#262626", "rect"),
    ("IT_ASSET", "#000000", "#D9D9D9", "#4D4D4D", "rect"),
    ("GOVERNANCE_ACTION", "#000000", "#FFE0CC", "#B34700", "hex"),
    ("GOVERNANCE_ACTION_PROCESS_STEP", "#000000", "#FFD1B3", "#B34700", "hex"),
    ("ENGINE_ACTION", "#000000", "#FFC299", "#B34700", "hex"),
    ("VALID_VALUE", "#000000", "#EDF7ED", "#3C763D", "rounded"),
    ("VALID_VALUE_SET", "#000000", "#D4EDD4", "#3C763D", "docs"),
    ("ASSET", "#FFFFFF", "#006678", "#004563", "rounded"),
    ("DATA_ASSET", "#FFFFFF", "#00829B", "#004563", "rounded"),
    ("DATA_STORE", "#FFFFFF", "#006678", "#004563", "cyl"),
    ("DATA_FILE", "#000000", "#B3E0E8", "#004563", "doc"),
    ("FILE_FOLDER", "#000000", "#FFE7A3", "#9C7A00", "fr-rect"),
    ("DEPLOYED_DB_SCHEMA", "#000000", "#B3E0E8", "#004563", "lin-cyl"),
    ("PROCESS", "#FFFFFF", "#5E3C99", "#3B2560", "rect"),
    ("DEPLOYED_API", "#FFFFFF", "#7B52AB", "#3B2560", "lean-r"),
    ("CONNECTOR", "#000000", "#D1C4E9", "#3B2560", "div-rect"),
    ("INFORMATION_SUPPLY_CHAIN", "#FFFFFF", "#2E7D32", "#1B5E20", "flag"),
    ("INFORMATION_SUPPLY_CHAIN_SEG", "#000000", "#C8E6C9", "#1B5E20", "rect"),
    ("INFORMATION_SUPPLY_CHAIN_IMPL", "#000000", "#E8F5E9", "#1B5E20", "rounded"),
    ("SOLUTION_BLUEPRINT", "#FFFFFF", "#0D47A1", "#082C66", "docs"),
    ("SOLUTION_PORT", "#000000", "#BBDEFB", "#0D47A1", "circle"),
    ("SOLUTION_ROLE", "#000000", "#E0F0FF", "#2F6EA6", "circle"),
    ("DEFAULT_SOLUTION_COMPONENT", "#000000", "#BBDEFB", "#0D47A1", "rounded"),
    ("AUTOMATED_PROCESS", "#FFFFFF", "#1565C0", "#0D47A1", "rect"),
    ("MANUAL_PROCESS", "#000000", "#FFF3E0", "#E65100", "trap-t"),
    ("THIRD_PARTY_PROCESS", "#000000", "#ECEFF1", "#455A64", "div-rect"),
    ("INSIGHT_MODEL", "#000000", "#F3E5F5", "#6A1B9A", "hex"),
    ("USER_INTERFACE", "#000000", "#FFFDE7", "#F9A825", "win-pane"),
    ("DATA_DISTRIBUTION", "#000000", "#E0F7FA", "#006064", "lean-r"),
    ("GOVERNANCE_DEFINITION", "#000000", "#FFF0F5", "#A0325A", "rounded"),
    ("GOVERNANCE_METRIC", "#000000", "#FCE4EC", "#A0325A", "odd"),
    ("PROJECT", "#FFFFFF", "#6D4C41", "#3E2723", "rounded"),
    ("DATA_STRUCTURE", "#000000", "#E3F2FD", "#1565C0", "rect"),
    ("DATA_FIELD", "#000000", "#FFFFFF", "#1565C0", "rounded"),
    ("DATA_CLASS", "#000000", "#F1F8E9", "#558B2F", "hex"),
    ("GLOSSARY", "#FFFFFF", "#37474F", "#263238", "docs"),
    ("GLOSSARY_CATEGORY", "#000000", "#CFD8DC", "#37474F", "fr-rect"),
    ("GLOSSARY_TERM", "#000000", "#ECEFF1", "#37474F", "rounded"),
    ("SCHEMA_ELEMENT", "#000000", "#F5F5F5", "#616161", "rounded"),
    ("REQUEST_FOR_ACTION", "#000000", "#FFEBEE", "#C62828", "flag"),
    ("TO_DO", "#000000", "#FFF8E1", "#FF8F00", "card"),
)


class StyleTable(Mapping[str, VisualStyle]):
    """
    Read-only lookup of visual styles by symbolic name.
    Overrides produce a new table; the default table is never modified.
    """

    def __init__(self, styles: Mapping[str, VisualStyle]) -> None:
        self._styles: Mapping[str, VisualStyle] = MappingProxyType(dict(styles))

    def __getitem__(self, name: str) -> VisualStyle:
        try:
            return self._styles[name]
        except KeyError:
            raise KeyError(f"Unknown visual style: {name!r}") from None

    def __iter__(self) -> Iterator[str]:
        return iter(self._styles)

    def __len__(self) -> int:
        return len(self._styles)

    def resolve(self, style: Optional[VisualStyle]) -> Optional[VisualStyle]:
        """Return this table's definition for `style`'s name, if it has one."""
        if style is None:
            return None
        return self._styles.get(style.name, style)

    def with_overrides(self, overrides: Mapping[str, Mapping[str, Any]]) -> StyleTable:
        merged: Dict[str, VisualStyle] = dict(self._styles)
        for name, fields in overrides.items():
            base = merged.get(name) or VisualStyle(name=name)
            merged[name] = replace(base, **_override_fields(name, fields))
        return StyleTable(merged)


_OVERRIDE_KEYS = {"text": "text_color", "fill": "fill_color", "line": "line_color", "shape": "shape"}


def _override_fields(name: str, fields: Mapping[str, Any]) -> Dict[str, Optional[str]]:
    if not isinstance(fields, Mapping):
        raise ValueError(f"Style override '{name}' must be a mapping")
    out: Dict[str, Optional[str]] = {}
    for key, value in fields.items():
        attr = _OVERRIDE_KEYS.get(str(key))
        if attr is None:
            raise ValueError(
                f"Style override '{name}' has unknown field '{key}' (expected one of: {', '.join(sorted(_OVERRIDE_KEYS))})"
            )
        if value is not None and not isinstance(value, str):
            raise ValueError(f"Style override '{name}.{key}' must be a string")
        if attr == "shape" and value is not None and value not in KNOWN_SHAPES:
            raise ValueError(f"Style override '{name}.shape' is not a known Mermaid shape: {value}")
        out[attr] = value
    return out


DEFAULT_STYLE_TABLE = StyleTable({row[0]: VisualStyle(*row) for row in _STYLE_ROWS})


def visual_style(name: str) -> VisualStyle:
    return DEFAULT_STYLE_TABLE[name]


def style_rows(table: Optional[StyleTable] = None) -> List[Tuple[str, str, str, str, str]]:
    """Rows for display: (name, text, fill, line, shape) with blanks for unset values."""
    rows: List[Tuple[str, str, str, str, str]] = []
    for name, style in sorted((table or DEFAULT_STYLE_TABLE).items()):
        rows.append(
            (
                name,
                style.text_color or "",
                style.fill_color or "",
                style.line_color or "",
                style.shape or DEFAULT_SHAPE,
            )
        )
    return rows


# Solution component type -> style name
SOLUTION_COMPONENT_STYLES: Mapping[str, str] = MappingProxyType(
    {
        "Automated Process": "AUTOMATED_PROCESS",
        "Manual Process": "MANUAL_PROCESS",
        "Third Party Process": "THIRD_PARTY_PROCESS",
        "Insight Model": "INSIGHT_MODEL",
        "User Interface": "USER_INTERFACE",
        "API": "DEPLOYED_API",
        "Data Store": "DATA_STORE",
        "Data Set": "DATA_ASSET",
        "Data Distribution": "DATA_DISTRIBUTION",
        "Data Processing Workflow": "PROCESS",
        "Software Server": "IT_ASSET",
        "Hardware": "HOST",
        "Connector": "CONNECTOR",
    }
)
