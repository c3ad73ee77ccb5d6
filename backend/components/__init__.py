"""
Components registered by the application at startup.
"""

from __future__ import annotations

from backend.components.todo import register_todo_components
from backend.config import settings
from engine.kernel.actions import RouteTable
from engine.kernel.registry import ComponentRegistry


def register_demo_components(registry: ComponentRegistry, routes: RouteTable | None = None) -> None:
    register_todo_components(registry, routes, class_naming=settings.CLASS_NAMING)


__all__ = ["register_demo_components", "register_todo_components"]
