"""API router factory functions."""
from .requests import create_requests_router
from .systems import create_systems_router

__all__ = [
    "create_requests_router",
    "create_systems_router",
]
