"""MCP server exposing the WebHare CLI as tools."""

__version__ = "0.1.0"
