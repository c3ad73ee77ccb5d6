"""
Tagweave configuration — all environment variables in one place.

Read from environment at runtime. The kernel never reads the environment;
render_options() is the only bridge.
"""

from __future__ import annotations

import os

from engine.kernel.types import DEFAULT_MAX_DEPTH, DEFAULT_SWAP, DEFAULT_TARGET, RenderOptions


class Settings:
    """Application settings from environment variables."""

    # Application
    ENVIRONMENT: str = os.environ.get("ENVIRONMENT", "development")
    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO")

    # Rendering
    MAX_RENDER_DEPTH: int = int(os.environ.get("MAX_RENDER_DEPTH", str(DEFAULT_MAX_DEPTH)))
    CLASS_NAMING: str = os.environ.get("CLASS_NAMING", "plain")  # plain | scoped
    MARK_COMPONENTS: bool = os.environ.get("MARK_COMPONENTS", "true").lower() == "true"

    # Client wire defaults
    HX_DEFAULT_SWAP: str = os.environ.get("HX_DEFAULT_SWAP", DEFAULT_SWAP)
    HX_DEFAULT_TARGET: str = os.environ.get("HX_DEFAULT_TARGET", DEFAULT_TARGET)

    # Anti-forgery header minted per page render
    CSRF_HEADER_NAME: str = os.environ.get("CSRF_HEADER_NAME", "X-CSRF-Token")

    def render_options(self) -> RenderOptions:
        return RenderOptions(
            max_depth=self.MAX_RENDER_DEPTH,
            default_swap=self.HX_DEFAULT_SWAP,
            default_target=self.HX_DEFAULT_TARGET,
            mark_components=self.MARK_COMPONENTS,
        )


# Singleton instance
settings = Settings()

if settings.MAX_RENDER_DEPTH < 1:
    raise RuntimeError("MAX_RENDER_DEPTH must be at least 1")
if settings.CLASS_NAMING not in ("plain", "scoped"):
    raise RuntimeError("CLASS_NAMING must be 'plain' or 'scoped'")
