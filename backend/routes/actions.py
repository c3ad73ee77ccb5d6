"""Component action routes — projects ActionSpecs into a FastAPI router."""

from __future__ import annotations

import inspect
import logging

from fastapi import APIRouter, Request

from engine.kernel.types import Handler

logger = logging.getLogger(__name__)


class FastAPIRouteTable:
    """
    RouteTable backed by an APIRouter.

    Handlers are called as handler(request, path_params) and awaited when
    they return an awaitable. Register everything before the router is
    included in the app; FastAPI copies routes at include time.
    """

    def __init__(self, router: APIRouter | None = None) -> None:
        self.router = router or APIRouter(tags=["actions"])
        self.registered: list[tuple[str, str]] = []

    def register(self, method: str, path: str, handler: Handler) -> None:
        async def endpoint(request: Request):
            result = handler(request, dict(request.path_params))
            if inspect.isawaitable(result):
                result = await result
            return result

        endpoint.__name__ = getattr(handler, "__name__", "action")
        self.router.add_api_route(path, endpoint, methods=[method], include_in_schema=False)
        self.registered.append((method, path))
        logger.debug("actions: routed %s %s", method, path)
