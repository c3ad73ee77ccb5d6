"""
Tagweave Markup -- Helper Tests

String-level HTML helpers: escaping, attribute spreading and parsing,
custom-tag scanning, root-element injection.
"""

from engine.kernel.markup import (
    escape,
    expand_tags,
    inject_root_attributes,
    parse_attributes,
    spread_attrs,
)

# ============================================================================
# Escaping and spreading
# ============================================================================


class TestSpreadAttrs:
    """Attribute mappings → name="value" text."""

    def test_values_escaped(self):
        """Quotes and angle brackets are escaped."""
        assert spread_attrs({"title": '"<x>"'}) == 'title="&quot;&lt;x&gt;&quot;"'

    def test_booleans(self):
        """True → bare name, False/None → omitted."""
        assert spread_attrs({"checked": True, "disabled": False, "hidden": None, "id": 3}) == 'checked id="3"'

    def test_escape_single_quote(self):
        """Single quotes are escaped too."""
        assert escape("it's") == "it&#x27;s"


# ============================================================================
# Parsing
# ============================================================================


class TestParseAttributes:
    """Inline attribute text → raw strings."""

    def test_quote_styles(self):
        """Double, single and unquoted values."""
        assert parse_attributes(" a=\"1\" b='2' c=3") == {"a": "1", "b": "2", "c": "3"}

    def test_bare_attribute(self):
        """A bare attribute maps to the empty string."""
        assert parse_attributes(" done") == {"done": ""}

    def test_entities_decoded(self):
        """Entity-encoded values are decoded."""
        assert parse_attributes(' items="[&quot;a&quot;]"') == {"items": '["a"]'}

    def test_names_lowercased_first_wins(self):
        """Names are lower-cased; repeated names keep the first value."""
        assert parse_attributes(' Step="1" step="2"') == {"step": "1"}


class TestExpandTags:
    """Replacing custom-element shaped tags."""

    def test_empty_and_self_closing(self):
        """Both <x-a></x-a> and <x-b/> are visited, in order, with parsed attributes."""
        seen = []

        def render_tag(tag, attrs):
            seen.append((tag, attrs))
            return f"[{tag}]"

        out = expand_tags('<div><x-a n="1"></x-a><x-b /></div>', lambda tag: True, render_tag)
        assert out == "<div>[x-a][x-b]</div>"
        assert seen == [("x-a", {"n": "1"}), ("x-b", {})]

    def test_tags_with_content_ignored(self):
        """Tags with children are not component instances."""
        assert expand_tags("<x-a>text</x-a>", lambda tag: True, lambda tag, attrs: "[A]") == "<x-a>text</x-a>"

    def test_expand_leaves_unknown(self):
        """expand_tags only replaces tags the predicate accepts."""
        out = expand_tags(
            "<x-a></x-a><x-b></x-b>",
            lambda tag: tag == "x-a",
            lambda tag, attrs: "[A]",
        )
        assert out == "[A]<x-b></x-b>"


# ============================================================================
# Root injection
# ============================================================================


class TestInjectRootAttributes:
    """Attributes and classes on the first element."""

    def test_adds_attribute(self):
        """A missing attribute is appended."""
        assert inject_root_attributes("<div>x</div>", {"data-component": "a"}) == '<div data-component="a">x</div>'

    def test_existing_attribute_kept(self):
        """An attribute already on the root is not overwritten."""
        html = '<div data-component="mine">x</div>'
        assert inject_root_attributes(html, {"data-component": "a"}) == html

    def test_class_prepended(self):
        """Classes go before existing ones."""
        assert inject_root_attributes("<div class='b'></div>", classes=["a"]) == '<div class="a b"></div>'

    def test_self_closing_root(self):
        """Self-closing roots keep their terminator."""
        assert inject_root_attributes("<img src='x' />", {"alt": ""}) == "<img src='x' alt=\"\" />"

    def test_only_first_element(self):
        """Later elements are untouched."""
        assert inject_root_attributes("<p></p><p></p>", {"id": "a"}) == '<p id="a"></p><p></p>'

    def test_leading_whitespace(self):
        """Leading whitespace is preserved."""
        assert inject_root_attributes("\n  <p></p>", {"id": "a"}) == '\n  <p id="a"></p>'

    def test_non_element_fragment(self):
        """Text or comments first → unchanged."""
        assert inject_root_attributes("hello <p></p>", {"id": "a"}) == "hello <p></p>"
        assert inject_root_attributes("<!-- c --><p></p>", {"id": "a"}) == "<!-- c --><p></p>"
