"""Data models for webhare-mcp."""

from .arguments import CliArguments, CommandArguments, UNDEFINED

__all__ = [
    'CliArguments',
    'CommandArguments',
    'UNDEFINED',
]
