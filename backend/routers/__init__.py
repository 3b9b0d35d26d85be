"""Routers module - FastAPI route handlers"""

from . import config, render

__all__ = ["config", "render"]
