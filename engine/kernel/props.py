"""
Tagweave Kernel — Prop Coercion

Turns raw attribute strings into typed props using each component's
PropSpecs. Attributes always arrive as strings (HTML semantics); the
declared kind tag decides how they are read.

Contract: coercion never raises. Absent or malformed values resolve to a
copy of the declared default, so templates can trust their input types.
"""

from __future__ import annotations

import copy
import json
import logging
import math
import re
from collections.abc import Iterable, Mapping
from typing import Any

from engine.kernel.types import PropSpec

logger = logging.getLogger(__name__)

_NUMBER_RE = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$")
_INTEGER_RE = re.compile(r"^[+-]?\d+$")

_FALSE_VALUES = {"false", "0"}

# Sentinel returned by coercers when the raw value cannot be read
_INVALID = object()


# ---------------------------------------------------------------------------
# PropSpec helpers
# ---------------------------------------------------------------------------


def string(name: str, default: str = "", attribute: str | None = None) -> PropSpec:
    return PropSpec(name=name, kind="string", default=default, attribute=attribute)


def number(name: str, default: int | float = 0, attribute: str | None = None) -> PropSpec:
    return PropSpec(name=name, kind="number", default=default, attribute=attribute)


def boolean(name: str, default: bool = False, attribute: str | None = None) -> PropSpec:
    return PropSpec(name=name, kind="boolean", default=default, attribute=attribute)


def object_(name: str, default: dict[str, Any] | None = None, attribute: str | None = None) -> PropSpec:
    return PropSpec(name=name, kind="object", default={} if default is None else default, attribute=attribute)


def array(name: str, default: list[Any] | None = None, attribute: str | None = None) -> PropSpec:
    return PropSpec(name=name, kind="array", default=[] if default is None else default, attribute=attribute)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def coerce_props(
    specs: Iterable[PropSpec],
    attributes: Mapping[str, str],
    component: str = "",
) -> dict[str, Any]:
    """
    Build the typed props dict for one component instance.

    Fields are produced in declaration order. Attributes with no matching PropSpec are
    dropped silently.
    """
    props: dict[str, Any] = {}
    for spec in specs:
        raw = attributes.get(spec.attribute_name)
        props[spec.name] = coerce_value(spec, raw, component)
    return props


def coerce_value(spec: PropSpec, raw: str | None, component: str = "") -> Any:
    """Coerce one raw attribute value; None means the attribute is absent."""
    if raw is None:
        return copy.deepcopy(spec.default)

    coercer = _COERCERS.get(spec.kind)
    value = coercer(raw) if coercer else _INVALID
    if value is _INVALID:
        logger.warning(
            "props: %s.%s expected %s, got %r; using default",
            component or "?",
            spec.name,
            spec.kind,
            raw[:200],
        )
        return copy.deepcopy(spec.default)
    return value


# ---------------------------------------------------------------------------
# Per-kind coercers
# ---------------------------------------------------------------------------


def _coerce_string(raw: str) -> Any:
    return raw


def _coerce_number(raw: str) -> Any:
    text = raw.strip()
    if not _NUMBER_RE.match(text):
        return _INVALID
    if _INTEGER_RE.match(text):
        try:
            return int(text)
        except ValueError:
            # Past the interpreter's integer string conversion limit
            return _INVALID
    value = float(text)
    if not math.isfinite(value):
        return _INVALID
    return value


def _coerce_boolean(raw: str) -> Any:
    # HTML boolean-attribute convention: presence means true unless the
    # value explicitly says otherwise.
    text = raw.strip().lower()
    return text not in _FALSE_VALUES


def _coerce_json(expected: type) -> Any:
    def coerce(raw: str) -> Any:
        try:
            value = json.loads(raw)
        except (ValueError, RecursionError):
            return _INVALID
        if not isinstance(value, expected):
            return _INVALID
        return value

    return coerce


_COERCERS = {
    "string": _coerce_string,
    "number": _coerce_number,
    "boolean": _coerce_boolean,
    "object": _coerce_json(dict),
    "array": _coerce_json(list),
}
