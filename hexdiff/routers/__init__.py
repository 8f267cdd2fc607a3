"""Routers module - FastAPI route handlers"""

from . import config, engine, sessions

__all__ = ["config", "engine", "sessions"]
