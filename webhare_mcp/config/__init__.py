"""Configuration for webhare-mcp."""

from .settings import (
    ConfigurationError,
    WebHareSettings,
    get_all_flags,
    is_enabled,
    load_settings,
    set_flag,
)

__all__ = [
    'ConfigurationError',
    'WebHareSettings',
    'get_all_flags',
    'is_enabled',
    'load_settings',
    'set_flag',
]
