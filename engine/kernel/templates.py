"""
Tagweave Kernel — Mustache Templates

Template functions written as Mustache strings, rendered with chevron:

    render=mustache(
        '<li class="{{classes.item}}"><button {{{actions.toggle}}}>{{title}}</button></li>',
        bindings={"toggle": lambda props: ({"id": props["id"]}, {"swap": "outerHTML"})},
    )

Context handed to chevron:
  - every prop at top level ({{title}})
  - props      → the typed props dict
  - classes    → the class map (or token var map for sealed components)
  - actions    → action name → pre-rendered attribute string; use triple
                 braces so the attribute text is not escaped again

An action without a binding is rendered with an empty payload. Props named
props, classes or actions would be shadowed, so the template function
carries `reserved_props` and definition validation rejects them.
The source is tokenized at definition time, so syntax errors surface at
startup rather than on the first request.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

import chevron
from chevron.tokenizer import ChevronError, tokenize

from engine.kernel.errors import TemplateError
from engine.kernel.types import TemplateFn

# Top-level context names a prop cannot use
RESERVED_CONTEXT_NAMES = frozenset({"props", "classes", "actions"})

# (typed props) -> (payload, options)
Binding = Callable[[dict[str, Any]], tuple[Mapping[str, Any] | None, Mapping[str, Any] | None]]


def mustache(source: str, bindings: Mapping[str, Binding] | None = None) -> TemplateFn:
    """Compile a Mustache string into a template function."""
    try:
        list(tokenize(source))
    except ChevronError as e:
        raise TemplateError(f"Invalid Mustache template: {e}") from e

    bindings = dict(bindings or {})

    def render(props: dict[str, Any], actions: Any, classes: Mapping[str, Any]) -> str:
        rendered_actions: dict[str, str] = {}
        for name in actions:
            binding = bindings.get(name)
            payload, options = binding(props) if binding else (None, None)
            rendered_actions[name] = str(actions[name](payload, options))

        context = {
            **props,
            "props": props,
            "classes": dict(classes),
            "actions": rendered_actions,
        }
        return chevron.render(source, context)

    render.source = source  # type: ignore[attr-defined]
    render.reserved_props = RESERVED_CONTEXT_NAMES  # type: ignore[attr-defined]
    return render
