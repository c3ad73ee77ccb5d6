"""
Tagweave Kernel — Exceptions

Configuration and programming errors (unknown component, duplicate
registration, invalid definition, runaway recursion, unbindable action,
bad template output) are raised and surfaced to the caller.
Malformed attribute *data* never raises; it degrades to prop defaults.
"""

from __future__ import annotations

from collections.abc import Iterable


class KernelError(Exception):
    """Base class for all engine errors."""


class UnknownComponentError(KernelError, LookupError):
    """Render or lookup requested for a name that is not registered."""

    def __init__(self, name: str, available: Iterable[str] = ()) -> None:
        self.name = name
        self.available = sorted(available)
        listing = ", ".join(self.available) or "none"
        super().__init__(f"Component {name!r} is not registered. Available components: {listing}")


class DuplicateComponentError(KernelError):
    """A component with the same name is already registered."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Component {name!r} is already registered")


class InvalidComponentError(KernelError):
    """A component definition failed structural validation."""

    def __init__(self, name: str, errors: list[str]) -> None:
        self.name = name
        self.errors = errors
        super().__init__(f"Invalid component {name!r}: " + "; ".join(errors))


class RenderDepthExceededError(KernelError):
    """Recursive expansion hit the depth limit or a self-including cycle."""

    def __init__(self, name: str, chain: list[str], limit: int, cycle: bool = False) -> None:
        self.name = name
        self.chain = chain
        self.limit = limit
        self.cycle = cycle
        path = " > ".join([*chain, name])
        reason = "cycle detected" if cycle else f"depth limit {limit} exceeded"
        super().__init__(f"Render of {name!r} aborted, {reason}: {path}")


class ActionBindingError(KernelError):
    """Client attributes could not be built for an action call."""


class TemplateError(KernelError):
    """A template function returned something other than markup."""
