"""
Tagweave FastAPI application.

Entry point for the API server.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI

from backend.components import register_demo_components
from backend.config import settings
from backend.logging_config import configure_logging
from backend.repos.todo_repo import TodoRepo
from backend.routes import pages as pages_routes
from backend.routes import todos as todo_routes
from backend.routes.actions import FastAPIRouteTable
from engine.kernel.actions import RouteTable
from engine.kernel.registry import ComponentRegistry
from engine.kernel.renderer import Renderer

logger = logging.getLogger(__name__)

Setup = Callable[[ComponentRegistry, RouteTable], None]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for FastAPI application.

    Components are registered in create_app, before the server starts;
    startup only configures logging and reports what is registered.
    """
    configure_logging()
    logger.info(
        "main: %d components registered (%s)",
        len(app.state.renderer.registry),
        ", ".join(sorted(app.state.renderer.registry.names())),
    )
    yield
    logger.info("main: shutting down")


def create_app(setup: Setup | None = register_demo_components) -> FastAPI:
    """
    Build the application: registry, renderer, routes.

    `setup` registers components (and their action routes). Action routes
    must exist before the router is included, so registration happens here
    rather than in the lifespan.
    """
    registry = ComponentRegistry()
    route_table = FastAPIRouteTable()
    if setup is not None:
        setup(registry, route_table)

    app = FastAPI(
        title="Tagweave",
        docs_url=None,
        redoc_url=None,
        lifespan=lifespan,
    )
    app.state.renderer = Renderer(registry, settings.render_options())
    app.state.todos = TodoRepo()

    # Register routes
    app.include_router(pages_routes.router)
    app.include_router(route_table.router)
    app.include_router(todo_routes.router)

    @app.get("/health")
    async def health():
        """Health check endpoint for uptime monitoring."""
        return {"status": "ok"}

    return app


app = create_app()
