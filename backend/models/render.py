"""Render request/response models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class RenderRequest(BaseModel):
    """What the client sends to POST /components/{name}/render."""

    model_config = {"extra": "forbid"}

    attributes: dict[str, str] = Field(default_factory=dict)


class RenderResponse(BaseModel):
    """A rendered component, with its CSS split out."""

    html: str  # style container + markup
    css: str
    markup: str


class DocumentRequest(BaseModel):
    """What the client sends to POST /render."""

    model_config = {"extra": "forbid"}

    markup: str = Field(max_length=200_000)
    title: str = ""


class ComponentListResponse(BaseModel):
    components: list[str]
