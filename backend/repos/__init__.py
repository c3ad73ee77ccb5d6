"""
Repository layer for Tagweave.

All storage lives here and ONLY here.
"""

from backend.repos.todo_repo import TodoRepo

__all__ = [
    "TodoRepo",
]
