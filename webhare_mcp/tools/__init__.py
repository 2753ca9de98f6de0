"""MCP tool handlers for webhare-mcp."""

from .webhare_tools import WebHareTools

__all__ = ['WebHareTools']
