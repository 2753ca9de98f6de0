"""
Operation registrations for webhare-mcp.
"""

from .webhare_operations import (
    LIST_MODULES_SUBCOMMAND,
    STATUS_SUBCOMMAND,
    WH_CLI,
    WH_COMMAND,
    WH_INFO,
    WH_LIST_MODULES,
    WH_STATUS,
    register_webhare_operations,
    webhare_operations,
)

__all__ = [
    'LIST_MODULES_SUBCOMMAND',
    'STATUS_SUBCOMMAND',
    'WH_CLI',
    'WH_COMMAND',
    'WH_INFO',
    'WH_LIST_MODULES',
    'WH_STATUS',
    'register_webhare_operations',
    'webhare_operations',
]
