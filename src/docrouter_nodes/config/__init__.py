"""Configuration package."""
from docrouter_nodes.config.settings import (
    DEFAULT_BASE_URL,
    DocRouterSettings,
    get_settings,
    reset_settings,
)

__all__ = ["DEFAULT_BASE_URL", "DocRouterSettings", "get_settings", "reset_settings"]
