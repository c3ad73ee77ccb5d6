"""
Tagweave Registry -- Contract Tests

The registry maps a component name to its definition. Pure storage.

Tests verify that:
  - register / resolve / has / names behave as a name-keyed table
  - Re-registering a name fails fast with DuplicateComponentError
  - Resolving an unknown name raises UnknownComponentError (a LookupError)
    listing what is available
  - A plain class name claimed with different rules by two components fails
    fast with InvalidComponentError
  - Fresh registries are isolated from each other
  - register_component projects actions into the route table
"""

import threading

import pytest

from engine.kernel.actions import MemoryRouteTable, post
from engine.kernel.components import define_component, register_component
from engine.kernel.errors import DuplicateComponentError, InvalidComponentError, UnknownComponentError
from engine.kernel.registry import ComponentRegistry
from engine.kernel.renderer import Renderer
from engine.kernel.types import RenderContext


def make_definition(name="x-box"):
    return define_component(name, render=lambda props, actions, classes: "<div></div>")


def noop_handler(request, params):
    return None


# ============================================================================
# Basic table behaviour
# ============================================================================


class TestRegisterAndResolve:
    """register() stores, resolve() returns the same object."""

    def test_resolve_returns_registered_definition(self):
        """resolve() hands back the exact definition that was registered."""
        registry = ComponentRegistry()
        definition = make_definition()
        registry.register(definition)
        assert registry.resolve("x-box") is definition

    def test_has_and_contains(self):
        """has() and `in` agree."""
        registry = ComponentRegistry()
        registry.register(make_definition())
        assert registry.has("x-box")
        assert "x-box" in registry
        assert not registry.has("x-other")
        assert "x-other" not in registry

    def test_names_lists_every_component(self):
        """names() lists registered names."""
        registry = ComponentRegistry()
        for name in ("a-one", "b-two", "c-three"):
            registry.register(make_definition(name))
        assert sorted(registry.names()) == ["a-one", "b-two", "c-three"]
        assert len(registry) == 3

    def test_iter_yields_definitions(self):
        """Iterating yields definitions, not names."""
        registry = ComponentRegistry()
        registry.register(make_definition("a-one"))
        assert [d.name for d in registry] == ["a-one"]

    def test_empty_registry(self):
        """A fresh registry is empty."""
        registry = ComponentRegistry()
        assert registry.names() == []
        assert len(registry) == 0


# ============================================================================
# Failure modes
# ============================================================================


class TestDuplicateRegistration:
    """Duplicate names fail fast."""

    def test_duplicate_raises(self):
        """Registering the same name twice raises DuplicateComponentError."""
        registry = ComponentRegistry()
        registry.register(make_definition())
        with pytest.raises(DuplicateComponentError) as exc:
            registry.register(make_definition())
        assert exc.value.name == "x-box"

    def test_duplicate_keeps_original(self):
        """The first definition stays in place after a rejected duplicate."""
        registry = ComponentRegistry()
        first = make_definition()
        registry.register(first)
        with pytest.raises(DuplicateComponentError):
            registry.register(make_definition())
        assert registry.resolve("x-box") is first

    def test_duplicate_does_not_project_routes(self):
        """A rejected registration adds nothing to the route table."""
        registry = ComponentRegistry()
        routes = MemoryRouteTable()
        register_component(registry, "x-form", render=lambda p, a, c: "<form></form>", routes=routes)
        with pytest.raises(DuplicateComponentError):
            register_component(
                registry,
                "x-form",
                actions={"add": post("/api/items", noop_handler)},
                render=lambda p, a, c: "<form></form>",
                routes=routes,
            )
        assert routes.routes == []


class TestClassNameConflicts:
    """Plain class names are shared by the whole page."""

    def render_box(self, props, actions, classes):
        return f'<div class="{classes["box"]}"></div>'

    def test_conflicting_plain_rules_rejected(self):
        """Same plain class, different rules → InvalidComponentError."""
        registry = ComponentRegistry()
        register_component(registry, "x-card", styles={"box": "{padding:1rem}"}, render=self.render_box)
        with pytest.raises(InvalidComponentError) as exc:
            register_component(registry, "x-alert", styles={"box": "{color:red}"}, render=self.render_box)
        assert exc.value.name == "x-alert"
        assert "x-card.box" in exc.value.errors[0]
        assert registry.names() == ["x-card"]

    def test_rejected_definition_projects_no_routes(self):
        """A conflict adds nothing to the route table."""
        registry = ComponentRegistry()
        routes = MemoryRouteTable()
        register_component(registry, "x-card", styles={"box": "{padding:1rem}"}, render=self.render_box)
        with pytest.raises(InvalidComponentError):
            register_component(
                registry,
                "x-alert",
                styles={"box": "{color:red}"},
                actions={"dismiss": post("/api/alerts", noop_handler)},
                render=self.render_box,
                routes=routes,
            )
        assert routes.routes == []

    def test_conflict_within_one_component(self):
        """Two keys of one component that kebab-case to one class conflict too."""
        registry = ComponentRegistry()
        definition = define_component(
            "x-card",
            styles={"cardTitle": "{margin:0}", "card_title": "{margin:1rem}"},
            render=self.render_box,
        )
        with pytest.raises(InvalidComponentError):
            registry.register(definition)

    def test_identical_rules_may_share(self):
        """The same plain class with the same rule text is accepted."""
        registry = ComponentRegistry()
        register_component(registry, "x-card", styles={"box": "{padding:1rem}"}, render=self.render_box)
        register_component(registry, "x-panel", styles={"box": "padding:1rem"}, render=self.render_box)
        assert registry.has("x-panel")

    def test_scoped_components_never_conflict(self):
        """Scoped names differ per component, so each keeps its own rules."""
        registry = ComponentRegistry()
        register_component(registry, "x-card", styles={"box": "{padding:1rem}"}, render=self.render_box)
        register_component(
            registry, "x-alert", styles={"box": "{color:red}"}, render=self.render_box, class_naming="scoped"
        )
        renderer = Renderer(registry)
        context = RenderContext()
        card = renderer.render("x-card", {}, context)
        alert = renderer.render("x-alert", {}, context)

        alert_class = registry.resolve("x-alert").class_names["box"]
        assert 'class="box"' in card
        assert f'class="{alert_class}"' in alert
        assert context.styles.blocks == [".box{padding:1rem}", f".{alert_class}{{color:red}}"]


class TestUnknownComponent:
    """resolve() of an unknown name."""

    def test_unknown_raises(self):
        """UnknownComponentError for a name that was never registered."""
        registry = ComponentRegistry()
        with pytest.raises(UnknownComponentError):
            registry.resolve("x-missing")

    def test_unknown_is_lookup_error(self):
        """UnknownComponentError can be caught as LookupError."""
        registry = ComponentRegistry()
        with pytest.raises(LookupError):
            registry.resolve("x-missing")

    def test_message_lists_available(self):
        """The error message names the available components."""
        registry = ComponentRegistry()
        registry.register(make_definition("a-one"))
        with pytest.raises(UnknownComponentError) as exc:
            registry.resolve("x-missing")
        assert "x-missing" in str(exc.value)
        assert "a-one" in str(exc.value)
        assert exc.value.available == ["a-one"]


# ============================================================================
# Isolation and concurrency
# ============================================================================


class TestIsolation:
    """Registries are explicit instances with no shared state."""

    def test_fresh_registries_are_independent(self):
        """Registering in one registry does not affect another."""
        a = ComponentRegistry()
        b = ComponentRegistry()
        a.register(make_definition())
        assert a.has("x-box")
        assert not b.has("x-box")

    def test_concurrent_registration_keeps_every_name(self):
        """Parallel writers with distinct names all land."""
        registry = ComponentRegistry()
        names = [f"x-item{i}" for i in range(50)]

        def register(name):
            registry.register(make_definition(name))

        threads = [threading.Thread(target=register, args=(n,)) for n in names]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert sorted(registry.names()) == sorted(names)

    def test_concurrent_duplicate_only_one_wins(self):
        """Parallel writers with the same name: exactly one succeeds."""
        registry = ComponentRegistry()
        failures = []

        def register():
            try:
                registry.register(make_definition())
            except DuplicateComponentError:
                failures.append(1)

        threads = [threading.Thread(target=register) for _ in range(10)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(registry) == 1
        assert len(failures) == 9


class TestRouteProjection:
    """register_component projects every action into the route table."""

    def test_actions_are_routed(self):
        """Each declared action becomes one (method, path, handler) route."""
        registry = ComponentRegistry()
        routes = MemoryRouteTable()
        definition = register_component(
            registry,
            "x-list",
            actions={"add": post("/api/items", noop_handler)},
            render=lambda p, a, c: "<ul></ul>",
            routes=routes,
        )
        assert [(r.method, r.path, r.handler) for r in routes.routes] == [("POST", "/api/items", noop_handler)]
        assert registry.resolve("x-list") is definition
