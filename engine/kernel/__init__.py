"""
Tagweave Kernel — the pure engine.

Components:
  registry    — name → ComponentDefinition table
  props       — raw attribute strings → typed props (never raises)
  styles      — class names, CSS rules, per-request dedup
  actions     — route projection + client attribute generation
  renderer    — (name, attributes, context) → HTML (recursive, deterministic)

Registration facades:
  define_component / register_component, define_token_component /
  register_token_component, mustache
"""

from engine.kernel.actions import MemoryRouteTable, RouteTable, bind_actions, project_routes
from engine.kernel.components import define_component, install_component, register_component
from engine.kernel.errors import (
    ActionBindingError,
    DuplicateComponentError,
    InvalidComponentError,
    KernelError,
    RenderDepthExceededError,
    TemplateError,
    UnknownComponentError,
)
from engine.kernel.props import coerce_props
from engine.kernel.registry import ComponentRegistry
from engine.kernel.renderer import Renderer
from engine.kernel.templates import mustache
from engine.kernel.tokens import define_token_component, register_token_component, token_overrides
from engine.kernel.types import RenderContext, RenderOptions, StyleScope

__all__ = [
    "ComponentRegistry",
    "Renderer",
    "RenderContext",
    "RenderOptions",
    "StyleScope",
    "define_component",
    "install_component",
    "register_component",
    "define_token_component",
    "register_token_component",
    "token_overrides",
    "mustache",
    "coerce_props",
    "bind_actions",
    "project_routes",
    "RouteTable",
    "MemoryRouteTable",
    "KernelError",
    "UnknownComponentError",
    "DuplicateComponentError",
    "InvalidComponentError",
    "RenderDepthExceededError",
    "ActionBindingError",
    "TemplateError",
]
