"""
Tagweave Kernel — Styles

Compiles a component's style map into class names and CSS rule text once,
at definition time, and records style usage against a request's StyleScope
at render time.

Style values come in two forms:
  "{padding:1rem}" / "padding:1rem"  → `.box{padding:1rem}`
  {"backgroundColor": "red"}         → `.box{background-color: red;}`

Dedup keys are "<component>:<style key>", so the same key in two components
never collides in the scope.
"""

from __future__ import annotations

import hashlib
import re
from collections.abc import Mapping
from typing import Any

from engine.kernel.types import ComponentDefinition, StyleScope

_CAMEL_RE = re.compile(r"([a-z0-9])([A-Z])")


# ---------------------------------------------------------------------------
# Naming
# ---------------------------------------------------------------------------


def kebab_case(value: str) -> str:
    """cardTitle / card_title → card-title"""
    return _CAMEL_RE.sub(r"\1-\2", value).replace("_", "-").lower()


def class_name_for(component: str, key: str, naming: str = "plain") -> str:
    """
    Deterministic class name for one style key.

    plain:  kebab-case of the key ("box")
    scoped: kebab-case plus a short hash of component and key ("box-1a2b3c4d")
    """
    base = kebab_case(key)
    if naming == "scoped":
        digest = hashlib.sha256(f"{component}:{key}".encode()).hexdigest()[:8]
        return f"{base}-{digest}"
    return base


def style_key(component: str, key: str) -> str:
    return f"{component}:{key}"


# ---------------------------------------------------------------------------
# Rule text
# ---------------------------------------------------------------------------


def css_declarations(value: Mapping[str, Any]) -> str:
    """{"backgroundColor": "red"} → "background-color: red;" """
    parts = []
    for prop, val in value.items():
        name = kebab_case(prop)
        if name.startswith("ms-"):
            name = "-" + name
        parts.append(f"{name}: {val};")
    return " ".join(parts)


def css_body(value: str | Mapping[str, Any]) -> str:
    """Normalise a style value to a brace-wrapped declaration block."""
    if isinstance(value, Mapping):
        return "{" + css_declarations(value) + "}"
    text = value.strip()
    if text.startswith("{") and text.endswith("}"):
        return text
    return "{" + text + "}"


def compile_styles(
    component: str,
    styles: Mapping[str, str | Mapping[str, Any]],
    naming: str = "plain",
) -> tuple[dict[str, str], dict[str, str]]:
    """Return (class_names, style_rules), both keyed by style key in declaration order."""
    class_names: dict[str, str] = {}
    rules: dict[str, str] = {}
    for key, value in styles.items():
        class_name = class_name_for(component, key, naming)
        class_names[key] = class_name
        rules[key] = f".{class_name}{css_body(value)}"
    return class_names, rules


# ---------------------------------------------------------------------------
# Emission
# ---------------------------------------------------------------------------


def emit_styles(definition: ComponentDefinition, scope: StyleScope) -> dict[str, Any]:
    """
    Record every style the component declares in `scope` and return the
    class map handed to its template.

    For sealed components the map holds custom-property references and
    the token defaults and fixed stylesheet are recorded once per component.
    """
    if definition.tokens is not None:
        sheet = definition.tokens
        scope.record(style_key(definition.name, "tokens"), sheet.root_css)
        scope.record(style_key(definition.name, "sheet"), sheet.stylesheet)
        return {section: dict(values) for section, values in sheet.var_map.items()}

    for key in definition.styles:
        scope.record(style_key(definition.name, key), definition.style_rules[key])
    return dict(definition.class_names)
