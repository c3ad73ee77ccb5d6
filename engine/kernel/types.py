"""
Tagweave Kernel — Shared Types

Data classes used across props, styles, actions, tokens and the renderer.
These are the contracts that bind the kernel together.

Lifecycles:
- ComponentDefinition, PropSpec, ActionSpec, TokenSheet — built once at
  registration, immutable afterwards.
- StyleScope, RenderContext — one per inbound request, never shared.
- GeneratedAttributeSet — one per action call inside a template.
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from engine.kernel.markup import spread_attrs

# ---------------------------------------------------------------------------
# Regex patterns
# ---------------------------------------------------------------------------

# Custom-tag shaped: lowercase, hyphen-separated segments
COMPONENT_NAME_PATTERN = re.compile(r"^[a-z][a-z0-9]*(?:-[a-z0-9]+)*$")
ATTRIBUTE_NAME_PATTERN = re.compile(r"^[a-z_][a-z0-9_.:-]*$")
STYLE_KEY_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_-]*$")
IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

PROP_KINDS: set[str] = {
    "string",
    "number",
    "boolean",
    "object",
    "array",
}

HTTP_METHODS: set[str] = {"GET", "POST", "PUT", "PATCH", "DELETE"}

CLASS_NAMING_MODES: set[str] = {"plain", "scoped"}

DEFAULT_MAX_DEPTH = 32
DEFAULT_SWAP = "outerHTML"
DEFAULT_TARGET = "closest [data-component]"


# Template function: (typed props, action callables, class map) -> markup
TemplateFn = Callable[[dict[str, Any], Any, Mapping[str, Any]], str]

# Action handler: (request, path params) -> response (may be awaitable)
Handler = Callable[[Any, dict[str, str]], Any]


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PropSpec:
    """
    One typed input field of a component.

    `attribute` is the raw attribute name the value is read from; it
    defaults to the field name.
    """

    name: str
    kind: str
    default: Any
    attribute: str | None = None

    @property
    def attribute_name(self) -> str:
        return self.attribute or self.name


@dataclass(frozen=True)
class ActionSpec:
    """
    A server-callable route declared by a component.

    The same object is projected into the route table and used to build
    client attributes, so method and path can never drift apart.
    `path` is stored normalised to `{param}` placeholders.
    """

    method: str
    path: str
    handler: Handler


@dataclass(frozen=True)
class TokenSheet:
    """Custom-property contract of a sealed component."""

    component: str
    tokens: Mapping[str, Mapping[str, str]]
    var_map: Mapping[str, Mapping[str, str]]  # section -> key -> "var(--...)"
    root_css: str  # :root block with the default values
    stylesheet: str  # fixed rules consuming the custom properties


@dataclass(frozen=True)
class ComponentDefinition:
    """
    A registered component. Built by define_component / define_token_component.

    class_names and style_rules are derived from `styles` at definition time
    so the same style key always yields the same class name across requests.
    """

    name: str
    props: tuple[PropSpec, ...]
    styles: Mapping[str, Any]
    actions: Mapping[str, ActionSpec]
    render: TemplateFn
    class_names: Mapping[str, str] = field(default_factory=dict)
    style_rules: Mapping[str, str] = field(default_factory=dict)
    tokens: TokenSheet | None = None
    root_class: str | None = None

    @property
    def sealed(self) -> bool:
        return self.tokens is not None


@dataclass
class StyleScope:
    """
    Per-request style bookkeeping.

    Each style key is recorded at most once; its CSS is appended to the
    accumulator only on first use, so blocks come out in first-use order.
    """

    emitted: set[str] = field(default_factory=set)
    blocks: list[str] = field(default_factory=list)

    def record(self, key: str, css: str) -> bool:
        """Mark `key` as emitted. Returns True if this was its first use."""
        if key in self.emitted:
            return False
        self.emitted.add(key)
        if css:
            self.blocks.append(css)
        return True

    def css(self) -> str:
        return "\n".join(self.blocks)

    def style_tag(self) -> str:
        """The single style container for a response ("" when nothing was used)."""
        if not self.blocks:
            return ""
        return f"<style>{self.css()}</style>"


@dataclass
class RenderContext:
    """
    Request-scoped ambient data for one render.

    `headers` carries extra request/response headers components may read
    (e.g. a freshly minted anti-forgery token). `stack` holds the
    (component, attributes) frames of the expansion currently in progress.
    """

    styles: StyleScope = field(default_factory=StyleScope)
    headers: dict[str, str] = field(default_factory=dict)
    stack: list[tuple[str, tuple[tuple[str, str], ...]]] = field(default_factory=list)

    @property
    def depth(self) -> int:
        return len(self.stack)


@dataclass(frozen=True)
class RenderOptions:
    """Engine-wide knobs supplied by the host application."""

    max_depth: int = DEFAULT_MAX_DEPTH
    default_swap: str = DEFAULT_SWAP
    default_target: str = DEFAULT_TARGET
    default_headers: Mapping[str, str] = field(default_factory=dict)
    mark_components: bool = True


class GeneratedAttributeSet(dict):
    """
    Wire attributes describing how a client invokes one action.

    A plain attribute-name -> value mapping; `str()` renders it ready to be
    spread onto an element. `method` and `path` are the resolved route the
    attributes point at.
    """

    def __init__(self, attributes: Mapping[str, str], *, action: str, method: str, path: str) -> None:
        super().__init__(attributes)
        self.action = action
        self.method = method
        self.path = path

    def __str__(self) -> str:
        return spread_attrs(self)

    def __html__(self) -> str:
        return str(self)

    def __repr__(self) -> str:
        return f"GeneratedAttributeSet({self.action!r}, {self.method} {self.path}, {dict.__repr__(self)})"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def is_valid_component_name(value: str) -> bool:
    """Check if a string can be used as a component tag name."""
    return isinstance(value, str) and bool(COMPONENT_NAME_PATTERN.match(value))


def matches_kind(kind: str, value: Any) -> bool:
    """Return True if `value`'s runtime type matches the prop kind tag."""
    if kind == "string":
        return isinstance(value, str)
    if kind == "number":
        return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)
    if kind == "boolean":
        return isinstance(value, bool)
    if kind == "object":
        return isinstance(value, dict)
    if kind == "array":
        return isinstance(value, list)
    return False
