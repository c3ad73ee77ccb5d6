"""
Tagweave Kernel — Markup Helpers

String-level HTML utilities used by templates and the renderer:
  escape / spread_attrs       — safe output of text and attribute maps
  expand_tags                 — replace registered custom-element tags in markup
  parse_attributes            — inline attribute text -> raw string mapping
  inject_root_attributes      — add attributes/classes to a fragment's root

Regex based, no DOM. Nested component instances are expected as empty
(`<x-tag a="1"></x-tag>`) or self-closing (`<x-tag a="1" />`) tags.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from html import escape as _html_escape
from html import unescape as _html_unescape
from typing import Any

# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------

_ATTR_SRC = r"""[^\s"'<>/=]+(?:\s*=\s*(?:"[^"]*"|'[^']*'|[^\s"'=<>`]+))?"""

_ATTR_RE = re.compile(
    r"""(?P<name>[^\s"'<>/=]+)(?:\s*=\s*(?:"(?P<dq>[^"]*)"|'(?P<sq>[^']*)'|(?P<bare>[^\s"'=<>`]+)))?"""
)

# <tag attrs></tag> or <tag attrs/> with nothing in between
_COMPONENT_TAG_RE = re.compile(
    rf"<(?P<tag>[a-z][a-z0-9]*(?:-[a-z0-9]+)*)(?P<attrs>(?:\s+{_ATTR_SRC})*)\s*(?:/>|>\s*</(?P=tag)\s*>)"
)

# First start tag of a fragment, allowing only leading whitespace before it
_ROOT_TAG_RE = re.compile(rf"^(?P<lead>\s*)<(?P<tag>[a-zA-Z][a-zA-Z0-9-]*)(?P<attrs>(?:\s+{_ATTR_SRC})*)(?P<end>\s*/?>)")

_CLASS_ATTR_RE = re.compile(r"""(\sclass\s*=\s*)(?:"([^"]*)"|'([^']*)')""")


# ---------------------------------------------------------------------------
# Escaping
# ---------------------------------------------------------------------------


def escape(text: Any) -> str:
    """HTML-escape user content (quotes included, safe inside attributes)."""
    return _html_escape(str(text), quote=True)


def spread_attrs(attrs: Mapping[str, Any]) -> str:
    """
    Render an attribute mapping as `name="value"` pairs.

    None and False values are skipped, True renders a bare attribute.
    """
    parts: list[str] = []
    for name, value in attrs.items():
        if value is None or value is False:
            continue
        if value is True:
            parts.append(name)
            continue
        parts.append(f'{name}="{escape(value)}"')
    return " ".join(parts)


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def parse_attributes(text: str) -> dict[str, str]:
    """
    Parse inline attribute text into a raw string mapping.

    Names are lower-cased, values are entity-decoded, bare attributes map
    to "" (HTML boolean presence). The first occurrence of a name wins.
    """
    attrs: dict[str, str] = {}
    for m in _ATTR_RE.finditer(text or ""):
        name = m.group("name").lower()
        if name in attrs:
            continue
        value = m.group("dq")
        if value is None:
            value = m.group("sq")
        if value is None:
            value = m.group("bare")
        attrs[name] = _html_unescape(value) if value is not None else ""
    return attrs


def expand_tags(
    markup: str,
    is_component: Callable[[str], bool],
    render_tag: Callable[[str, dict[str, str]], str],
) -> str:
    """
    Replace every registered component tag in `markup` with its rendering.

    Tags are visited left to right; `render_tag` runs to completion for one
    tag before the next is visited. Unregistered tags are left untouched.
    """

    def replace(m: re.Match) -> str:
        tag = m.group("tag")
        if not is_component(tag):
            return m.group(0)
        return render_tag(tag, parse_attributes(m.group("attrs")))

    return _COMPONENT_TAG_RE.sub(replace, markup)


# ---------------------------------------------------------------------------
# Root element injection
# ---------------------------------------------------------------------------


def inject_root_attributes(
    markup: str,
    attrs: Mapping[str, str] | None = None,
    classes: list[str] | None = None,
) -> str:
    """
    Add attributes and classes to the first element of a fragment.

    Attributes already present on the root are left as they are. Classes
    are prepended to an existing class attribute. Fragments that do not
    start with an element are returned unchanged.
    """
    m = _ROOT_TAG_RE.match(markup)
    if m is None:
        return markup

    existing = parse_attributes(m.group("attrs"))
    attr_text = m.group("attrs")

    if classes:
        joined = " ".join(classes)
        class_match = _CLASS_ATTR_RE.search(attr_text)
        if class_match:
            current = class_match.group(2) if class_match.group(2) is not None else class_match.group(3)
            merged = f"{joined} {current}".strip()
            attr_text = (
                attr_text[: class_match.start()]
                + f'{class_match.group(1)}"{escape(merged)}"'
                + attr_text[class_match.end() :]
            )
        else:
            attr_text += f' class="{escape(joined)}"'

    extra = {k: v for k, v in (attrs or {}).items() if k.lower() not in existing}
    if extra:
        attr_text += " " + spread_attrs(extra)

    rebuilt = f"{m.group('lead')}<{m.group('tag')}{attr_text}{m.group('end')}"
    return rebuilt + markup[m.end() :]
