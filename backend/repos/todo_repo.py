"""In-memory repository for the demo todo list."""

from __future__ import annotations

import asyncio
from datetime import UTC, datetime

from backend.models.todo import CreateTodoRequest, Todo


class TodoRepo:
    """All todo operations. One instance per app; state lives in process memory."""

    def __init__(self) -> None:
        self._todos: dict[int, Todo] = {}
        self._next_id = 1
        self._lock = asyncio.Lock()

    async def create(self, req: CreateTodoRequest) -> Todo:
        """
        Create a new todo.

        Args:
            req: CreateTodoRequest with the title

        Returns:
            Newly created Todo
        """
        async with self._lock:
            todo = Todo(id=self._next_id, title=req.title, created_at=datetime.now(UTC))
            self._todos[todo.id] = todo
            self._next_id += 1
            return todo

    async def get(self, todo_id: int) -> Todo | None:
        return self._todos.get(todo_id)

    async def list_all(self) -> list[Todo]:
        """All todos, oldest first."""
        return sorted(self._todos.values(), key=lambda t: t.id)

    async def toggle(self, todo_id: int) -> Todo | None:
        """Flip the done flag. Returns None if the todo does not exist."""
        async with self._lock:
            todo = self._todos.get(todo_id)
            if todo is None:
                return None
            updated = todo.model_copy(update={"done": not todo.done})
            self._todos[todo_id] = updated
            return updated

    async def delete(self, todo_id: int) -> bool:
        """Delete a todo. Returns True if it existed."""
        async with self._lock:
            return self._todos.pop(todo_id, None) is not None

    async def clear_completed(self) -> int:
        """Delete every done todo. Returns how many were removed."""
        async with self._lock:
            done = [t.id for t in self._todos.values() if t.done]
            for todo_id in done:
                del self._todos[todo_id]
            return len(done)
