"""
Tagweave Kernel — Renderer

(registry, component name, raw attributes, context) → HTML string.
No IO. Deterministic: same input + fresh context → same output, always.

Per component instance:
  1. resolve the definition (UnknownComponentError if absent)
  2. coerce raw attributes into typed props
  3. record the component's styles in the context's StyleScope
  4. bind action callables
  5. call the template with (props, actions, classes)
  6. expand nested registered tags, depth-first, left to right
  7. mark the root element (data-component, ui-<name> for sealed components)

Recursion is bounded by RenderOptions.max_depth. An ancestor frame with
the same (name, attributes) is a cycle and fails immediately.

The caller owns the context: one per inbound request, never shared. The
accumulated CSS goes out once, ahead of the markup (render_response) or in
the document head (render_document).
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from engine.kernel.actions import bind_actions
from engine.kernel.errors import RenderDepthExceededError, TemplateError
from engine.kernel.markup import escape, expand_tags, inject_root_attributes
from engine.kernel.props import coerce_props
from engine.kernel.registry import ComponentRegistry
from engine.kernel.styles import emit_styles
from engine.kernel.types import RenderContext, RenderOptions

logger = logging.getLogger(__name__)


class Renderer:
    """Renders registered components. One per application, shared by all requests."""

    def __init__(self, registry: ComponentRegistry, options: RenderOptions | None = None) -> None:
        self.registry = registry
        self.options = options or RenderOptions()

    # -----------------------------------------------------------------------
    # Public API
    # -----------------------------------------------------------------------

    def new_context(self, headers: Mapping[str, str] | None = None) -> RenderContext:
        return RenderContext(headers=dict(headers or {}))

    def render(
        self,
        name: str,
        attributes: Mapping[str, Any] | None,
        context: RenderContext,
    ) -> str:
        """Render one component instance (and everything nested in it)."""
        return self._render(name, normalize_attributes(attributes), context)

    def expand(self, markup: str, context: RenderContext) -> str:
        """Expand registered component tags inside arbitrary host markup."""
        return expand_tags(markup, self.registry.has, lambda tag, attrs: self._render(tag, attrs, context))

    def render_response(
        self,
        name: str,
        attributes: Mapping[str, Any] | None = None,
        context: RenderContext | None = None,
    ) -> str:
        """Style container followed by the component's markup."""
        ctx = context or self.new_context()
        markup = self.render(name, attributes, ctx)
        return ctx.styles.style_tag() + markup

    def render_document(self, body: str, context: RenderContext, title: str = "") -> str:
        """Expand `body` and wrap it in a complete HTML document."""
        content = self.expand(body, context)

        parts: list[str] = []
        parts.append("<!DOCTYPE html>")
        parts.append('<html lang="en">')
        parts.append("<head>")
        parts.append('  <meta charset="utf-8">')
        parts.append('  <meta name="viewport" content="width=device-width, initial-scale=1">')
        if title:
            parts.append(f"  <title>{escape(title)}</title>")

        # Only the styles this document actually used
        css = context.styles.css()
        if css:
            parts.append("  <style>")
            parts.append(css)
            parts.append("  </style>")

        parts.append("</head>")
        parts.append("<body>")
        parts.append(content)
        parts.append("</body>")
        parts.append("</html>")

        return "\n".join(parts)

    # -----------------------------------------------------------------------
    # Pipeline
    # -----------------------------------------------------------------------

    def _render(self, name: str, attributes: dict[str, str], context: RenderContext) -> str:
        definition = self.registry.resolve(name)

        frame = (name, tuple(sorted(attributes.items())))
        chain = [n for n, _ in context.stack]
        if frame in context.stack:
            raise RenderDepthExceededError(name, chain, self.options.max_depth, cycle=True)
        if context.depth >= self.options.max_depth:
            raise RenderDepthExceededError(name, chain, self.options.max_depth)

        context.stack.append(frame)
        try:
            props = coerce_props(definition.props, attributes, name)
            classes = emit_styles(definition, context.styles)
            actions = bind_actions(definition, context, self.options)

            markup = definition.render(props, actions, classes)
            if not isinstance(markup, str):
                raise TemplateError(f"Template of {name!r} returned {type(markup).__name__}, expected str")

            markup = self.expand(markup, context)
        finally:
            context.stack.pop()

        if self.options.mark_components:
            markup = inject_root_attributes(
                markup,
                {"data-component": name},
                [definition.root_class] if definition.root_class else None,
            )
        elif definition.root_class:
            markup = inject_root_attributes(markup, classes=[definition.root_class])

        logger.debug("renderer: %s at depth %d", name, context.depth)
        return markup


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def normalize_attributes(attributes: Mapping[str, Any] | None) -> dict[str, str]:
    """
    Raw attributes as HTML would see them: lower-case names, string values.

    None and False mean "absent", True means present with no value.
    """
    normalized: dict[str, str] = {}
    for key, value in (attributes or {}).items():
        if value is None or value is False:
            continue
        normalized[str(key).lower()] = "" if value is True else str(value)
    return normalized
