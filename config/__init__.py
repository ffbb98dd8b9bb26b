"""Configuration package for the interview session service."""
from .routes import LlmRoute, route_from_settings
from .settings import Settings, settings

__all__ = [
    "LlmRoute",
    "route_from_settings",
    "Settings",
    "settings",
]
