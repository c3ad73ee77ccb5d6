"""
Tagweave Kernel — Definition Validation

Validates component definitions before they are built.
Returns a list of error strings. Empty list = valid.

Validation is structural (well-formed names, known kind tags, defaults of
the declared type, callable handlers). It runs once per component at
registration; a non-empty result is fatal there.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from engine.kernel.actions import ActionMap, path_params
from engine.kernel.types import (
    ATTRIBUTE_NAME_PATTERN,
    CLASS_NAMING_MODES,
    HTTP_METHODS,
    IDENTIFIER_PATTERN,
    PROP_KINDS,
    STYLE_KEY_PATTERN,
    ActionSpec,
    PropSpec,
    is_valid_component_name,
    matches_kind,
)

# Action names that would be shadowed by ActionMap's own attributes
RESERVED_ACTION_NAMES: set[str] = {n for n in dir(ActionMap) if not n.startswith("_")}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def validate_definition(
    name: Any,
    props: Any = (),
    styles: Any = None,
    actions: Any = None,
    render: Any = None,
    class_naming: str = "plain",
) -> list[str]:
    """
    Validate everything that goes into a ComponentDefinition.

    It does NOT check that nested tags used by the template are registered.
    That happens (or not) at render time.
    """
    errors: list[str] = []

    if not is_valid_component_name(name):
        errors.append(f"Invalid component name: {name!r} (expected lowercase, hyphen-separated)")

    if not callable(render):
        errors.append("render must be callable")

    if class_naming not in CLASS_NAMING_MODES:
        errors.append(f"Unknown class naming mode: {class_naming!r}")

    errors.extend(validate_props(props))

    # Names the template itself puts in its context (see templates.mustache)
    reserved = getattr(render, "reserved_props", ())
    for spec in props:
        if isinstance(spec, PropSpec) and spec.name in reserved:
            errors.append(f"Prop name {spec.name!r} is reserved by the template context")

    errors.extend(validate_styles(styles or {}))
    errors.extend(validate_actions(actions or {}))
    return errors


def validate_props(props: Any) -> list[str]:
    errors: list[str] = []
    seen_names: set[str] = set()
    seen_attrs: set[str] = set()

    for spec in props:
        if not isinstance(spec, PropSpec):
            errors.append(f"Prop must be a PropSpec, got {type(spec).__name__}")
            continue
        if not IDENTIFIER_PATTERN.match(spec.name):
            errors.append(f"Invalid prop name: {spec.name!r}")
        if spec.name in seen_names:
            errors.append(f"Duplicate prop: {spec.name}")
        seen_names.add(spec.name)

        attr = spec.attribute_name
        if not ATTRIBUTE_NAME_PATTERN.match(attr):
            errors.append(f"Invalid attribute name for prop {spec.name}: {attr!r} (attributes are lowercase)")
        if attr in seen_attrs:
            errors.append(f"Duplicate attribute: {attr}")
        seen_attrs.add(attr)

        if spec.kind not in PROP_KINDS:
            errors.append(f"Unknown prop kind for {spec.name}: {spec.kind!r}")
        elif not matches_kind(spec.kind, spec.default):
            errors.append(f"Default for {spec.name} must be a {spec.kind}, got {spec.default!r}")

    return errors


def validate_styles(styles: Any) -> list[str]:
    errors: list[str] = []
    if not isinstance(styles, Mapping):
        return ["styles must be a mapping of style key to CSS"]

    for key, value in styles.items():
        if not isinstance(key, str) or not STYLE_KEY_PATTERN.match(key):
            errors.append(f"Invalid style key: {key!r}")
        if isinstance(value, Mapping):
            if not all(isinstance(k, str) for k in value):
                errors.append(f"Style {key}: property names must be strings")
        elif not isinstance(value, str) or not value.strip():
            errors.append(f"Style {key}: expected CSS text or a property mapping")

    return errors


def validate_actions(actions: Any) -> list[str]:
    errors: list[str] = []
    if not isinstance(actions, Mapping):
        return ["actions must be a mapping of action name to ActionSpec"]

    for name, spec in actions.items():
        if not isinstance(name, str) or not IDENTIFIER_PATTERN.match(name):
            errors.append(f"Invalid action name: {name!r}")
        elif name in RESERVED_ACTION_NAMES:
            errors.append(f"Action name {name!r} is reserved")
        if not isinstance(spec, ActionSpec):
            errors.append(f"Action {name}: expected ActionSpec, got {type(spec).__name__}")
            continue
        if spec.method not in HTTP_METHODS:
            errors.append(f"Action {name}: unsupported method {spec.method!r}")
        if not spec.path.startswith("/"):
            errors.append(f"Action {name}: path must start with '/': {spec.path!r}")
        params = path_params(spec.path)
        if len(params) != len(set(params)):
            errors.append(f"Action {name}: repeated path parameter in {spec.path!r}")
        if not callable(spec.handler):
            errors.append(f"Action {name}: handler must be callable")

    return errors


def validate_tokens(tokens: Any) -> list[str]:
    errors: list[str] = []
    if not isinstance(tokens, Mapping) or not tokens:
        return ["tokens must be a non-empty mapping of section to values"]

    for section, values in tokens.items():
        if not isinstance(section, str) or not STYLE_KEY_PATTERN.match(section):
            errors.append(f"Invalid token section: {section!r}")
        if not isinstance(values, Mapping) or not values:
            errors.append(f"Token section {section}: expected a non-empty mapping")
            continue
        for key, value in values.items():
            if not isinstance(key, str) or not STYLE_KEY_PATTERN.match(key):
                errors.append(f"Invalid token key: {section}.{key!r}")
            if isinstance(value, bool) or not isinstance(value, (str, int, float)):
                errors.append(f"Token {section}.{key}: expected a CSS value, got {value!r}")

    return errors
