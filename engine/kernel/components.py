"""
Tagweave Kernel — Component Definition

The registration surface used by application code at startup:

    register_component(
        registry,
        "counter",
        props=[number("step", 1)],
        styles={"box": "{padding:1rem}"},
        actions={"bump": post("/api/counter", bump_handler)},
        render=lambda props, actions, classes: f'<div class="{classes["box"]}">{props["step"]}</div>',
        routes=route_table,
    )

Validation and style compilation happen here, once. Nothing below this
point re-checks a definition.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any

from engine.kernel.actions import RouteTable, project_routes
from engine.kernel.errors import InvalidComponentError
from engine.kernel.registry import ComponentRegistry
from engine.kernel.styles import compile_styles
from engine.kernel.types import ActionSpec, ComponentDefinition, PropSpec, TemplateFn
from engine.kernel.validation import validate_definition


def define_component(
    name: str,
    *,
    render: TemplateFn,
    props: Iterable[PropSpec] = (),
    styles: Mapping[str, Any] | None = None,
    actions: Mapping[str, ActionSpec] | None = None,
    class_naming: str = "plain",
) -> ComponentDefinition:
    """Validate the parts and build an immutable ComponentDefinition."""
    props = tuple(props)
    styles = dict(styles or {})
    actions = dict(actions or {})

    errors = validate_definition(name, props, styles, actions, render, class_naming)
    if errors:
        raise InvalidComponentError(str(name), errors)

    class_names, rules = compile_styles(name, styles, class_naming)
    return ComponentDefinition(
        name=name,
        props=props,
        styles=MappingProxyType(styles),
        actions=MappingProxyType(actions),
        render=render,
        class_names=MappingProxyType(class_names),
        style_rules=MappingProxyType(rules),
    )


def install_component(
    registry: ComponentRegistry,
    definition: ComponentDefinition,
    routes: RouteTable | None = None,
) -> None:
    """Register `definition`, then project its actions into `routes`."""
    registry.register(definition)
    if routes is not None:
        project_routes(definition, routes)


def register_component(
    registry: ComponentRegistry,
    name: str,
    *,
    routes: RouteTable | None = None,
    **kwargs: Any,
) -> ComponentDefinition:
    definition = define_component(name, **kwargs)
    install_component(registry, definition, routes)
    return definition
