"""
Pydantic models for Tagweave.

All data shapes defined here. No imports from repos or routes.
"""

from backend.models.render import (
    ComponentListResponse,
    DocumentRequest,
    RenderRequest,
    RenderResponse,
)
from backend.models.todo import CreateTodoRequest, Todo

__all__ = [
    # Render models
    "RenderRequest",
    "RenderResponse",
    "DocumentRequest",
    "ComponentListResponse",
    # Todo models
    "Todo",
    "CreateTodoRequest",
]
