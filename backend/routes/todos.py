"""Demo page — GET / serves the todo list as a full document."""

from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, Response

from backend.components.todo import list_attributes
from backend.routes.pages import get_renderer, new_request_context
from engine.kernel.markup import spread_attrs

router = APIRouter(tags=["todos"])

_HTMX_SCRIPT = '<script src="https://unpkg.com/htmx.org@2.0.4" defer></script>'


@router.get("/", response_class=HTMLResponse)
async def todo_page(request: Request) -> Response:
    """Render the todo list page with the current items."""
    renderer = get_renderer(request)
    context, headers = new_request_context(renderer)
    todos = await request.app.state.todos.list_all()

    body = f"<main><todo-list {spread_attrs(list_attributes(todos))}></todo-list></main>\n{_HTMX_SCRIPT}"
    html = renderer.render_document(body, context, title="Todos")
    return HTMLResponse(content=html, headers={"Cache-Control": "no-store", **headers})
