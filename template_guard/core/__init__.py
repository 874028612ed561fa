"""Core configuration and factory components."""

from template_guard.core.config import Settings, get_settings
from template_guard.core.factory import ComponentFactory

__all__ = [
    "Settings",
    "get_settings",
    "ComponentFactory",
]
