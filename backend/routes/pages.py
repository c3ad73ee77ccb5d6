"""Component rendering routes — fragments, JSON renders, and full documents."""

from __future__ import annotations

import logging
import secrets

from fastapi import APIRouter, HTTPException, Request, status
from fastapi.responses import HTMLResponse, Response

from backend.config import settings
from backend.models.render import ComponentListResponse, DocumentRequest, RenderRequest, RenderResponse
from backend.utils.etag import compute_etag
from engine.kernel.errors import RenderDepthExceededError, UnknownComponentError
from engine.kernel.renderer import Renderer
from engine.kernel.types import RenderContext

logger = logging.getLogger(__name__)

router = APIRouter(tags=["pages"])

# Rendered output embeds a per-request anti-forgery token
_CACHE_CONTROL = "no-store"


def get_renderer(request: Request) -> Renderer:
    return request.app.state.renderer


def new_request_context(renderer: Renderer) -> tuple[RenderContext, dict[str, str]]:
    """Fresh context for one request, with a newly minted anti-forgery token."""
    headers = {settings.CSRF_HEADER_NAME: secrets.token_urlsafe(32)}
    return renderer.new_context(headers), headers


def _render(renderer: Renderer, name: str, attributes: dict[str, str], context: RenderContext) -> str:
    """Render one component, mapping kernel errors to HTTP errors."""
    try:
        return renderer.render(name, attributes, context)
    except UnknownComponentError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from None
    except RenderDepthExceededError as e:
        logger.error("pages: %s", e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e)) from None


@router.get("/components")
async def list_components(request: Request) -> ComponentListResponse:
    """Registered component names, sorted."""
    return ComponentListResponse(components=sorted(get_renderer(request).registry.names()))


@router.get("/components/{name}", response_class=HTMLResponse)
async def render_component(name: str, request: Request) -> Response:
    """
    Render a component as an HTML fragment.

    Query parameters are the raw attributes. The response body is the
    style container followed by the markup.

    Headers:
    - ETag: hash of the body
    - Cache-Control: no-store (body carries a per-request token)
    - <CSRF_HEADER_NAME>: the token minted for this render
    """
    renderer = get_renderer(request)
    context, headers = new_request_context(renderer)
    markup = _render(renderer, name, dict(request.query_params), context)
    html = context.styles.style_tag() + markup

    return HTMLResponse(
        content=html,
        headers={
            "Cache-Control": _CACHE_CONTROL,
            "ETag": compute_etag(html),
            "X-Content-Type-Options": "nosniff",
            **headers,
        },
    )


@router.post("/components/{name}/render")
async def render_component_json(name: str, req: RenderRequest, request: Request) -> RenderResponse:
    """Render a component and return markup and CSS separately."""
    renderer = get_renderer(request)
    context, _ = new_request_context(renderer)
    markup = _render(renderer, name, req.attributes, context)
    return RenderResponse(
        html=context.styles.style_tag() + markup,
        css=context.styles.css(),
        markup=markup,
    )


@router.post("/render", response_class=HTMLResponse)
async def render_document(req: DocumentRequest, request: Request) -> Response:
    """Expand registered tags in host markup and return a full HTML document."""
    renderer = get_renderer(request)
    context, headers = new_request_context(renderer)
    try:
        html = renderer.render_document(req.markup, context, title=req.title)
    except RenderDepthExceededError as e:
        logger.error("pages: %s", e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e)) from None

    return HTMLResponse(
        content=html,
        headers={"Cache-Control": _CACHE_CONTROL, "ETag": compute_etag(html), **headers},
    )
