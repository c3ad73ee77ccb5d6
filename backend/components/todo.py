"""
Demo todo-list components and their action handlers.

  todo-list    — section with heading, items, form and stats (nests the others)
  todo-item    — one row; toggle (PATCH) and remove (DELETE) actions
  todo-form    — add (POST) action
  todo-stats   — Mustache template; clear-completed (POST) action
  status-badge — sealed token component shown when everything is done

Every handler answers with a freshly rendered todo-list fragment, which
the client swaps in place of #todo-list.
"""

from __future__ import annotations

import json
import logging

from fastapi import HTTPException, Request, status
from fastapi.responses import HTMLResponse
from pydantic import ValidationError

from backend.config import settings
from backend.models.todo import CreateTodoRequest, Todo
from backend.repos.todo_repo import TodoRepo
from engine.kernel.actions import RouteTable, delete, patch, post
from engine.kernel.components import register_component
from engine.kernel.markup import escape, spread_attrs
from engine.kernel.props import array, boolean, number, string
from engine.kernel.registry import ComponentRegistry
from engine.kernel.renderer import Renderer
from engine.kernel.templates import mustache
from engine.kernel.tokens import register_token_component

logger = logging.getLogger(__name__)

LIST_TARGET = "#todo-list"


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


def _repo(request: Request) -> TodoRepo:
    return request.app.state.todos


def _todo_id(params: dict[str, str]) -> int:
    try:
        return int(params["id"])
    except (KeyError, ValueError):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Todo not found") from None


def list_attributes(todos: list[Todo], heading: str | None = None) -> dict[str, str]:
    """Raw attributes for a todo-list instance showing `todos`."""
    attrs = {"items": json.dumps([t.to_attribute() for t in todos])}
    if heading:
        attrs["heading"] = heading
    return attrs


async def render_todo_list(request: Request) -> HTMLResponse:
    """Re-render the whole list for the current request."""
    renderer: Renderer = request.app.state.renderer
    todos = await _repo(request).list_all()

    headers = {}
    token = request.headers.get(settings.CSRF_HEADER_NAME)
    if token:
        headers[settings.CSRF_HEADER_NAME] = token

    context = renderer.new_context(headers)
    html = renderer.render_response("todo-list", list_attributes(todos), context)
    return HTMLResponse(content=html, headers={"Cache-Control": "no-store"})


async def add_todo(request: Request, params: dict[str, str]) -> HTMLResponse:
    form = await request.form()
    try:
        req = CreateTodoRequest(title=str(form.get("title", "")))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.errors()) from None

    todo = await _repo(request).create(req)
    logger.info("todos: created %d", todo.id)
    return await render_todo_list(request)


async def toggle_todo(request: Request, params: dict[str, str]) -> HTMLResponse:
    todo = await _repo(request).toggle(_todo_id(params))
    if todo is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Todo not found")
    return await render_todo_list(request)


async def remove_todo(request: Request, params: dict[str, str]) -> HTMLResponse:
    if not await _repo(request).delete(_todo_id(params)):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Todo not found")
    return await render_todo_list(request)


async def clear_completed(request: Request, params: dict[str, str]) -> HTMLResponse:
    removed = await _repo(request).clear_completed()
    logger.info("todos: cleared %d completed", removed)
    return await render_todo_list(request)


# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------


def _todo_item(props, actions, classes) -> str:
    ref = {"id": props["id"]}
    item_class = classes["item"] + (f" {classes['done']}" if props["done"] else "")
    toggle = actions.toggle(ref, {"target": LIST_TARGET})
    remove = actions.remove(ref, {"target": LIST_TARGET, "confirm": "Delete this todo?"})
    checked = " checked" if props["done"] else ""
    return (
        f'<li class="{item_class}" id="todo-{props["id"]}">'
        f'<input type="checkbox" {toggle}{checked}>'
        f'<span class="{classes["title"]}">{escape(props["title"])}</span>'
        f'<button class="{classes["remove"]}" aria-label="Delete" {remove}>&times;</button>'
        "</li>"
    )


def _todo_list(props, actions, classes) -> str:
    items = [item for item in props["items"] if isinstance(item, dict)]
    done = sum(1 for item in items if item.get("done"))

    parts = [f'<section class="{classes["list"]}" id="todo-list">']
    parts.append(f'<h2 class="{classes["heading"]}">{escape(props["heading"])}</h2>')
    if items and done == len(items):
        parts.append('<status-badge label="All done"></status-badge>')

    if items:
        parts.append(f'<ul class="{classes["items"]}">')
        for item in items:
            attrs = {"id": item.get("id", 0), "title": item.get("title", ""), "done": bool(item.get("done"))}
            parts.append(f"<todo-item {spread_attrs(attrs)}></todo-item>")
        parts.append("</ul>")
    else:
        parts.append(f'<p class="{classes["empty"]}">Nothing to do.</p>')

    parts.append("<todo-form></todo-form>")
    stats = {"total": len(items), "done": done, "clearable": done > 0}
    parts.append(f"<todo-stats {spread_attrs(stats)}></todo-stats>")
    parts.append("</section>")
    return "".join(parts)


def _todo_form(props, actions, classes) -> str:
    add = actions.add(None, {"target": LIST_TARGET})
    return (
        f'<form class="{classes["form"]}" {add}>'
        f'<input class="{classes["input"]}" type="text" name="title" placeholder="{escape(props["placeholder"])}" '
        'maxlength="200" required>'
        '<button type="submit">Add</button>'
        "</form>"
    )


TODO_STATS = mustache(
    '<footer class="{{classes.stats}}">'
    "<span>{{done}} of {{total}} done</span>"
    "{{#clearable}}<button {{{actions.clear}}}>Clear completed</button>{{/clearable}}"
    "</footer>",
    bindings={"clear": lambda props: (None, {"target": LIST_TARGET, "confirm": "Remove completed todos?"})},
)


def _status_badge(props, actions, tokens) -> str:
    return f"<span>{escape(props['label'])}</span>"


def _badge_stylesheet(root: str, v) -> str:
    return (
        f".{root}{{display:inline-block;"
        f"background:{v['colors']['bg']};color:{v['colors']['fg']};"
        f"border-radius:{v['shape']['radius']};padding:{v['shape']['pad']};"
        "font-size:0.75rem}"
    )


# ---------------------------------------------------------------------------
# Registration
# ---------------------------------------------------------------------------


def register_todo_components(
    registry: ComponentRegistry,
    routes: RouteTable | None = None,
    class_naming: str = "plain",
) -> None:
    register_component(
        registry,
        "todo-item",
        props=[number("id", 0), string("title"), boolean("done")],
        styles={
            "item": "display:flex;gap:0.5rem;align-items:center;padding:0.25rem 0",
            "done": {"textDecoration": "line-through", "opacity": "0.6"},
            "title": "{flex:1}",
            "remove": "background:none;border:0;cursor:pointer",
        },
        actions={
            "toggle": patch("/api/todos/{id}/toggle", toggle_todo),
            "remove": delete("/api/todos/{id}", remove_todo),
        },
        render=_todo_item,
        class_naming=class_naming,
        routes=routes,
    )

    register_component(
        registry,
        "todo-form",
        props=[string("placeholder", "What needs doing?")],
        styles={
            "form": "display:flex;gap:0.5rem;margin-top:1rem",
            "input": "flex:1;padding:0.25rem",
        },
        actions={"add": post("/api/todos", add_todo)},
        render=_todo_form,
        class_naming=class_naming,
        routes=routes,
    )

    register_component(
        registry,
        "todo-stats",
        props=[number("total", 0), number("done", 0), boolean("clearable")],
        styles={"stats": "display:flex;justify-content:space-between;margin-top:1rem;color:#666"},
        actions={"clear": post("/api/todos/clear-completed", clear_completed)},
        render=TODO_STATS,
        class_naming=class_naming,
        routes=routes,
    )

    register_token_component(
        registry,
        "status-badge",
        tokens={
            "colors": {"bg": "#e6f4ea", "fg": "#1e6b34"},
            "shape": {"radius": "999px", "pad": "0.125rem 0.5rem"},
        },
        stylesheet=_badge_stylesheet,
        props=[string("label", "Done")],
        render=_status_badge,
        routes=routes,
    )

    register_component(
        registry,
        "todo-list",
        props=[array("items"), string("heading", "Todos")],
        styles={
            "list": "max-width:32rem;margin:0 auto;font-family:system-ui,sans-serif",
            "heading": "margin-bottom:0.5rem",
            "items": "list-style:none;padding:0",
            "empty": {"color": "#888", "fontStyle": "italic"},
        },
        render=_todo_list,
        class_naming=class_naming,
        routes=routes,
    )
