"""
Tagweave Kernel — Sealed Token Components

A sealed component never sees literal style values. Its template gets a
nested map of CSS custom-property references instead of class names:

    tokens = {"colors": {"bg": "#fff", "fg": "#111"}, "spacing": {"pad": "1rem"}}

    classes["colors"]["bg"]  == "var(--card-colors-bg)"

and it ships a fixed stylesheet that consumes those properties. The host
customises the component only by redefining the properties at some CSS
scope (see token_overrides). The stylesheet is built once, at definition
time, from the var map.

Emission per response, once per component (not per instance):
  "<name>:tokens" → :root{--card-colors-bg: #fff; ...}
  "<name>:sheet"  → the fixed stylesheet
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from types import MappingProxyType
from typing import Any

from engine.kernel.actions import RouteTable
from engine.kernel.components import install_component
from engine.kernel.errors import InvalidComponentError
from engine.kernel.registry import ComponentRegistry
from engine.kernel.styles import kebab_case
from engine.kernel.types import ActionSpec, ComponentDefinition, PropSpec, TemplateFn, TokenSheet
from engine.kernel.validation import validate_definition, validate_tokens

logger = logging.getLogger(__name__)

# Stylesheet builder: (root class, var map) -> CSS text
StylesheetFn = Callable[[str, Mapping[str, Mapping[str, str]]], str]


# ---------------------------------------------------------------------------
# Naming
# ---------------------------------------------------------------------------


def root_class_for(component: str) -> str:
    return f"ui-{component}"


def token_var_name(component: str, section: str, key: str) -> str:
    """("card", "colors", "bgHover") → "--card-colors-bg-hover" """
    return f"--{component}-{kebab_case(section)}-{kebab_case(key)}"


def _declarations(component: str, tokens: Mapping[str, Mapping[str, Any]]) -> str:
    return " ".join(
        f"{token_var_name(component, section, key)}: {value};"
        for section, values in tokens.items()
        for key, value in values.items()
    )


# ---------------------------------------------------------------------------
# Sheet construction
# ---------------------------------------------------------------------------


def build_token_sheet(
    component: str,
    tokens: Mapping[str, Mapping[str, Any]],
    stylesheet: StylesheetFn | str | None = None,
) -> TokenSheet:
    """Derive the var map, the :root defaults block and the fixed stylesheet."""
    var_map = {
        section: {key: f"var({token_var_name(component, section, key)})" for key in values}
        for section, values in tokens.items()
    }
    root_css = ":root{" + _declarations(component, tokens) + "}"

    if stylesheet is None:
        sheet = ""
    elif callable(stylesheet):
        sheet = stylesheet(root_class_for(component), var_map)
    else:
        sheet = stylesheet

    if not isinstance(sheet, str):
        raise InvalidComponentError(component, [f"stylesheet must produce CSS text, got {type(sheet).__name__}"])

    return TokenSheet(
        component=component,
        tokens=MappingProxyType({s: MappingProxyType(dict(v)) for s, v in tokens.items()}),
        var_map=MappingProxyType({s: MappingProxyType(v) for s, v in var_map.items()}),
        root_css=root_css,
        stylesheet=sheet.strip(),
    )


def token_overrides(
    component: str,
    overrides: Mapping[str, Mapping[str, Any]],
    selector: str = ":root",
) -> str:
    """
    CSS block redefining some of a sealed component's properties at `selector`.

        token_overrides("card", {"colors": {"bg": "#000"}}, ".dark")
        → ".dark{--card-colors-bg: #000;}"
    """
    return f"{selector}{{{_declarations(component, overrides)}}}"


# ---------------------------------------------------------------------------
# Definition
# ---------------------------------------------------------------------------


def define_token_component(
    name: str,
    *,
    tokens: Mapping[str, Mapping[str, Any]],
    render: TemplateFn,
    stylesheet: StylesheetFn | str | None = None,
    props: Iterable[PropSpec] = (),
    actions: Mapping[str, ActionSpec] | None = None,
) -> ComponentDefinition:
    props = tuple(props)
    actions = dict(actions or {})

    errors = validate_definition(name, props, {}, actions, render)
    errors.extend(validate_tokens(tokens))
    if errors:
        raise InvalidComponentError(str(name), errors)

    sheet = build_token_sheet(name, tokens, stylesheet)
    return ComponentDefinition(
        name=name,
        props=props,
        styles=MappingProxyType({}),
        actions=MappingProxyType(actions),
        render=render,
        tokens=sheet,
        root_class=root_class_for(name),
    )


def register_token_component(
    registry: ComponentRegistry,
    name: str,
    *,
    routes: RouteTable | None = None,
    **kwargs: Any,
) -> ComponentDefinition:
    definition = define_token_component(name, **kwargs)
    install_component(registry, definition, routes)
    logger.info("tokens: %s sealed with %d sections", name, len(definition.tokens.var_map))
    return definition
