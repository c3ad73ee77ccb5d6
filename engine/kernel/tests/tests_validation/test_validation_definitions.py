"""
Tagweave Validation -- Definition Tests

validate_definition returns a list of error strings; define_component
raises InvalidComponentError when it is non-empty.
"""

import pytest

from engine.kernel.actions import get, post
from engine.kernel.components import define_component
from engine.kernel.errors import InvalidComponentError
from engine.kernel.props import array, number, string
from engine.kernel.types import ActionSpec, PropSpec
from engine.kernel.validation import validate_actions, validate_definition, validate_props, validate_styles


def render_nothing(props, actions, classes):
    return "<div></div>"


def noop(request, params):
    return None


class TestValidDefinitions:
    """Well-formed definitions produce no errors."""

    def test_minimal(self):
        """Name and render are enough."""
        assert validate_definition("x-box", render=render_nothing) == []

    def test_full(self):
        """Props, styles and actions together."""
        errors = validate_definition(
            "todo-item",
            props=[number("id"), string("title"), array("tags")],
            styles={"item": "{padding:0}", "done": {"opacity": "0.5"}},
            actions={"toggle": post("/api/todos/{id}/toggle", noop)},
            render=render_nothing,
        )
        assert errors == []


class TestNames:
    """Component names are custom-tag shaped."""

    @pytest.mark.parametrize("name", ["Box", "x_box", "-box", "box-", "x--box", "", None, 3])
    def test_invalid_names(self, name):
        """Upper-case, underscores, stray hyphens and non-strings are rejected."""
        assert validate_definition(name, render=render_nothing)

    def test_render_must_be_callable(self):
        """render is required."""
        assert validate_definition("x-box", render="<div></div>") == ["render must be callable"]

    def test_unknown_class_naming(self):
        """Only plain and scoped exist."""
        assert validate_definition("x-box", render=render_nothing, class_naming="bem")


class TestProps:
    """PropSpec checks."""

    def test_wrong_default_type(self):
        """A default that does not match its kind is an error."""
        errors = validate_props([PropSpec("step", "number", "1")])
        assert any("Default for step" in e for e in errors)

    def test_bool_is_not_a_number(self):
        """True is not an acceptable number default."""
        assert validate_props([PropSpec("step", "number", True)])

    def test_unknown_kind(self):
        """Kinds outside the five tags are rejected."""
        assert validate_props([PropSpec("when", "date", "")])

    def test_duplicates(self):
        """Duplicate names and duplicate attributes are both errors."""
        assert validate_props([string("a"), string("a")])
        assert validate_props([string("a", attribute="x"), string("b", attribute="x")])

    def test_uppercase_attribute(self):
        """HTML attribute names are lower-case."""
        assert validate_props([string("maxItems")])
        assert validate_props([string("maxItems", attribute="max-items")]) == []

    def test_not_a_propspec(self):
        """Plain tuples are not accepted."""
        assert validate_props([("step", "number", 1)])


class TestStyles:
    """Style map checks."""

    def test_bad_key(self):
        """Keys must be identifier-like."""
        assert validate_styles({"has space": "{}"})

    def test_empty_value(self):
        """Blank CSS is an error."""
        assert validate_styles({"box": "  "})

    def test_not_a_mapping(self):
        """styles must be a mapping."""
        assert validate_styles(["box"])


class TestActions:
    """Action map checks."""

    def test_reserved_names(self):
        """Names that collide with the action map's own attributes are rejected."""
        for name in ("get", "keys", "items", "values", "headers"):
            errors = validate_actions({name: get("/api/x", noop)})
            assert any("reserved" in e for e in errors), name

    def test_bad_method(self):
        """Only the five HTTP verbs are accepted."""
        assert validate_actions({"go": ActionSpec("TRACE", "/api/x", noop)})

    def test_relative_path(self):
        """Paths start with a slash."""
        assert validate_actions({"go": ActionSpec("GET", "api/x", noop)})

    def test_repeated_param(self):
        """A path parameter may appear only once."""
        assert validate_actions({"go": ActionSpec("GET", "/a/{id}/b/{id}", noop)})

    def test_handler_must_be_callable(self):
        """The handler is called by the router."""
        assert validate_actions({"go": ActionSpec("GET", "/api/x", None)})

    def test_invalid_identifier(self):
        """Action names are identifiers."""
        assert validate_actions({"add-item": post("/api/x", noop)})


class TestDefineComponent:
    """define_component raises on any error."""

    def test_raises_with_all_errors(self):
        """Every problem is reported at once."""
        with pytest.raises(InvalidComponentError) as exc:
            define_component("Bad", props=[PropSpec("n", "number", "x")], render=None)
        assert exc.value.name == "Bad"
        assert len(exc.value.errors) == 3

    def test_definition_is_frozen(self):
        """Definitions cannot be changed after creation."""
        definition = define_component("x-box", styles={"box": "{}"}, render=render_nothing)
        with pytest.raises(AttributeError):
            definition.name = "other"
        with pytest.raises(TypeError):
            definition.styles["box"] = "{color:red}"
