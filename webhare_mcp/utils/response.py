"""Response envelope for MCP tool calls."""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List

from mcp.types import TextContent


NO_OUTPUT_PLACEHOLDER = "Command executed successfully with no output"


@dataclass
class ResponseEnvelope:
    """Ordered text items plus an error flag, returned for every tool call."""
    content: List[Dict[str, str]] = field(default_factory=list)
    is_error: bool = False

    @property
    def text(self) -> str:
        """All text items joined by newlines."""
        return "\n".join(item["text"] for item in self.content)

    def to_text_content(self) -> List[TextContent]:
        """Convert to MCP content items."""
        return [TextContent(type="text", text=item["text"]) for item in self.content]


def text_response(text: str) -> ResponseEnvelope:
    """Create a successful single-item text response."""
    return ResponseEnvelope(content=[{"type": "text", "text": text}])


def output_response(output: str) -> ResponseEnvelope:
    """Create a text response from command output.

    Empty output is replaced by a fixed placeholder so callers never receive
    an empty text item.
    """
    return text_response(output or NO_OUTPUT_PLACEHOLDER)


def json_response(data: Dict[str, Any]) -> ResponseEnvelope:
    """Create a successful response holding a JSON-encoded object."""
    return text_response(json.dumps(data, indent=2))


def error_response(message: str) -> ResponseEnvelope:
    """Create an error response envelope.

    Args:
        message: Error message (prefixed with "Error:")

    Returns:
        Envelope with is_error set
    """
    return ResponseEnvelope(
        content=[{"type": "text", "text": f"Error: {message}"}],
        is_error=True
    )
