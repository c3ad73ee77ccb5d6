"""
Tagweave Kernel — Component Registry

Name → ComponentDefinition table. Pure storage.

One registry instance is built at startup and handed to the Renderer;
tests build a fresh one each. Writes are serialised and replace the table
wholesale, so concurrent readers never observe a half-written state.
Registering an existing name fails fast with DuplicateComponentError.

Class names are global in the page. A definition whose class name is
already claimed by another style with different rule text fails with
InvalidComponentError; identical rules may share a class.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator

from engine.kernel.errors import DuplicateComponentError, InvalidComponentError, UnknownComponentError
from engine.kernel.types import ComponentDefinition

logger = logging.getLogger(__name__)


class ComponentRegistry:
    """Registered components, keyed by tag name."""

    def __init__(self) -> None:
        self._components: dict[str, ComponentDefinition] = {}
        # class name → (component, style key, rule body)
        self._classes: dict[str, tuple[str, str, str]] = {}
        self._lock = threading.Lock()

    def register(self, definition: ComponentDefinition) -> None:
        with self._lock:
            if definition.name in self._components:
                raise DuplicateComponentError(definition.name)
            classes = _claim_classes(self._classes, definition)
            self._components = {**self._components, definition.name: definition}
            self._classes = classes
        logger.info("registry: registered %s", definition.name)

    def resolve(self, name: str) -> ComponentDefinition:
        try:
            return self._components[name]
        except KeyError:
            raise UnknownComponentError(name, self._components) from None

    def has(self, name: str) -> bool:
        return name in self._components

    def names(self) -> list[str]:
        return list(self._components)

    def __contains__(self, name: object) -> bool:
        return name in self._components

    def __iter__(self) -> Iterator[ComponentDefinition]:
        return iter(list(self._components.values()))

    def __len__(self) -> int:
        return len(self._components)


def _claim_classes(
    claimed: dict[str, tuple[str, str, str]],
    definition: ComponentDefinition,
) -> dict[str, tuple[str, str, str]]:
    """Return `claimed` extended with the definition's class names, or raise on a conflict."""
    classes = dict(claimed)
    errors = []
    for key, class_name in definition.class_names.items():
        body = definition.style_rules[key][len(class_name) + 1 :]
        owner = classes.get(class_name)
        if owner is None:
            classes[class_name] = (definition.name, key, body)
        elif owner[2] != body:
            errors.append(
                f"Class {class_name!r} of style {key!r} is already defined by "
                f"{owner[0]}.{owner[1]} with different rules; use class_naming='scoped' or another key"
            )
    if errors:
        raise InvalidComponentError(definition.name, errors)
    return classes
