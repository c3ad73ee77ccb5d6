"""Todo models for the demo components."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class Todo(BaseModel):
    """One todo item as held by the store."""

    id: int
    title: str
    done: bool = False
    created_at: datetime

    def to_attribute(self) -> dict[str, object]:
        """Shape passed to components through a JSON array attribute."""
        return {"id": self.id, "title": self.title, "done": self.done}


class CreateTodoRequest(BaseModel):
    """Form fields posted by the todo-form component."""

    model_config = {"extra": "ignore", "str_strip_whitespace": True}

    title: str = Field(min_length=1, max_length=200)
