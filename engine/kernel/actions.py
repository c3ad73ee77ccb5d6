"""
Tagweave Kernel — Action Binding

A component declares server-callable actions as ActionSpecs:

    actions={
        "toggle": patch("/api/todos/{id}/toggle", toggle_handler),
        "remove": delete("/api/todos/:id", remove_handler),
    }

At registration every ActionSpec is projected into the host's route table
as (method, path, handler). At render time the template receives an
ActionMap; calling `actions.toggle({"id": 7}, {"target": "#list"})` does no
IO and returns the wire attributes a client needs to invoke the route:

    hx-patch="/api/todos/7/toggle" hx-target="#list" hx-swap="outerHTML"

Method and path are read from the same ActionSpec object in both places.
Payload fields consumed by path parameters are removed from hx-vals.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any, Protocol
from urllib.parse import quote, unquote

from engine.kernel.errors import ActionBindingError
from engine.kernel.types import (
    ActionSpec,
    ComponentDefinition,
    GeneratedAttributeSet,
    Handler,
    RenderContext,
    RenderOptions,
)

logger = logging.getLogger(__name__)

_PARAM_RE = re.compile(r"\{([A-Za-z_][A-Za-z0-9_]*)\}|:([A-Za-z_][A-Za-z0-9_]*)")

# Per-call option name → wire attribute
OPTION_ATTRIBUTES: dict[str, str] = {
    "target": "hx-target",
    "swap": "hx-swap",
    "indicator": "hx-indicator",
    "trigger": "hx-trigger",
    "confirm": "hx-confirm",
    "include": "hx-include",
    "push_url": "hx-push-url",
}


# ---------------------------------------------------------------------------
# Path templates
# ---------------------------------------------------------------------------


def normalize_path(path: str) -> str:
    """/api/todos/:id → /api/todos/{id}"""
    return _PARAM_RE.sub(lambda m: "{" + (m.group(1) or m.group(2)) + "}", path)


def path_params(path: str) -> list[str]:
    """Parameter names in order of appearance: /a/{x}/b/:y → ["x", "y"]"""
    return [m.group(1) or m.group(2) for m in _PARAM_RE.finditer(path)]


def resolve_path(path: str, payload: Mapping[str, Any]) -> str:
    """Substitute path parameters from `payload` (URL-quoted)."""

    def substitute(m: re.Match) -> str:
        param = m.group(1) or m.group(2)
        if param not in payload or payload[param] is None:
            raise ActionBindingError(f"Path parameter {param!r} of {path!r} is missing from the action payload")
        return quote(_param_text(payload[param]), safe="")

    return _PARAM_RE.sub(substitute, path)


def _param_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


# ---------------------------------------------------------------------------
# ActionSpec helpers
# ---------------------------------------------------------------------------


def action(method: str, path: str, handler: Handler) -> ActionSpec:
    return ActionSpec(method=method.upper(), path=normalize_path(path), handler=handler)


def get(path: str, handler: Handler) -> ActionSpec:
    return action("GET", path, handler)


def post(path: str, handler: Handler) -> ActionSpec:
    return action("POST", path, handler)


def put(path: str, handler: Handler) -> ActionSpec:
    return action("PUT", path, handler)


def patch(path: str, handler: Handler) -> ActionSpec:
    return action("PATCH", path, handler)


def delete(path: str, handler: Handler) -> ActionSpec:
    return action("DELETE", path, handler)


# ---------------------------------------------------------------------------
# Route table projection
# ---------------------------------------------------------------------------


class RouteTable(Protocol):
    """Anything routes can be registered into (the host's HTTP router)."""

    def register(self, method: str, path: str, handler: Handler) -> None: ...


@dataclass(frozen=True)
class RouteEntry:
    method: str
    path: str
    handler: Handler
    pattern: re.Pattern
    params: tuple[str, ...]


class MemoryRouteTable:
    """
    In-process route table. Matches concrete request paths back to handlers.
    Used by tests and by hosts without their own router.
    """

    def __init__(self) -> None:
        self.routes: list[RouteEntry] = []

    def register(self, method: str, path: str, handler: Handler) -> None:
        params = tuple(path_params(path))
        pieces: list[str] = []
        last = 0
        for m in _PARAM_RE.finditer(path):
            pieces.append(re.escape(path[last : m.start()]))
            pieces.append("([^/]+)")
            last = m.end()
        pieces.append(re.escape(path[last:]))
        regex = "^" + "".join(pieces)
        self.routes.append(
            RouteEntry(
                method=method.upper(),
                path=path,
                handler=handler,
                pattern=re.compile(regex + "/?$"),
                params=params,
            )
        )

    def match(self, method: str, path: str) -> tuple[Handler, dict[str, str]] | None:
        """Find the handler and decoded path params for a concrete request."""
        for route in self.routes:
            if route.method != method.upper():
                continue
            m = route.pattern.match(path)
            if m:
                return route.handler, {name: unquote(v) for name, v in zip(route.params, m.groups())}
        return None


def project_routes(definition: ComponentDefinition, routes: RouteTable) -> None:
    """Register every action of `definition` into `routes`."""
    for name, spec in definition.actions.items():
        routes.register(spec.method, spec.path, spec.handler)
        logger.info("actions: %s.%s → %s %s", definition.name, name, spec.method, spec.path)


# ---------------------------------------------------------------------------
# Client attribute generation
# ---------------------------------------------------------------------------


def build_attributes(
    name: str,
    spec: ActionSpec,
    payload: Mapping[str, Any] | None = None,
    options: Mapping[str, Any] | None = None,
    *,
    render_options: RenderOptions | None = None,
    headers: Mapping[str, str] | None = None,
) -> GeneratedAttributeSet:
    """
    Compute the wire attributes for one call of action `name`.

    Order: verb attribute, hx-vals, per-call options, defaults, hx-headers.
    """
    payload = dict(payload or {})
    options = dict(options or {})
    defaults = render_options or RenderOptions()

    resolved = resolve_path(spec.path, payload)
    consumed = set(path_params(spec.path))

    attrs: dict[str, str] = {f"hx-{spec.method.lower()}": resolved}

    body = {k: v for k, v in payload.items() if k not in consumed}
    if body:
        attrs["hx-vals"] = _dump_json(name, "payload", body, ensure_ascii=False)

    call_headers = options.pop("headers", None) or {}
    for key, value in options.items():
        attr = OPTION_ATTRIBUTES.get(key)
        if attr is None:
            logger.warning("actions: ignoring unknown option %r for %s", key, name)
            continue
        if value is None:
            continue
        attrs[attr] = _option_text(value)

    if spec.method != "GET":
        attrs.setdefault("hx-target", defaults.default_target)
        attrs.setdefault("hx-swap", defaults.default_swap)

    merged_headers = {**defaults.default_headers, **(headers or {}), **call_headers}
    if merged_headers:
        attrs["hx-headers"] = _dump_json(name, "headers", merged_headers)

    return GeneratedAttributeSet(attrs, action=name, method=spec.method, path=resolved)


def _dump_json(action: str, what: str, value: Mapping[str, Any], **kwargs: Any) -> str:
    try:
        return json.dumps(value, sort_keys=True, separators=(",", ":"), **kwargs)
    except (TypeError, ValueError) as e:
        raise ActionBindingError(f"Action {action!r}: {what} is not JSON serialisable: {e}") from e


def _option_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ", ".join(str(v) for v in value)
    return str(value)


class ActionMap(Mapping[str, Any]):
    """
    The `actions` argument handed to a template.

    Supports both `actions["toggle"](...)` and `actions.toggle(...)`.
    `headers` exposes the render context's request headers.
    """

    def __init__(
        self,
        definition: ComponentDefinition,
        render_options: RenderOptions,
        headers: Mapping[str, str],
    ) -> None:
        self._definition = definition
        self._render_options = render_options
        self._headers = dict(headers)
        self._callables = {name: self._make_callable(name, spec) for name, spec in definition.actions.items()}

    def _make_callable(self, name: str, spec: ActionSpec):
        def call(
            payload: Mapping[str, Any] | None = None,
            options: Mapping[str, Any] | None = None,
        ) -> GeneratedAttributeSet:
            return build_attributes(
                name,
                spec,
                payload,
                options,
                render_options=self._render_options,
                headers=self._headers,
            )

        call.__name__ = name
        return call

    @property
    def headers(self) -> dict[str, str]:
        return dict(self._headers)

    def __getitem__(self, name: str):
        return self._callables[name]

    def __getattr__(self, name: str):
        callables = self.__dict__.get("_callables", {})
        if name in callables:
            return callables[name]
        raise AttributeError(f"no action {name!r}")

    def __iter__(self) -> Iterator[str]:
        return iter(self._callables)

    def __len__(self) -> int:
        return len(self._callables)


def bind_actions(
    definition: ComponentDefinition,
    context: RenderContext,
    render_options: RenderOptions | None = None,
) -> ActionMap:
    """Build the action map for one render of `definition`."""
    return ActionMap(definition, render_options or RenderOptions(), context.headers)
