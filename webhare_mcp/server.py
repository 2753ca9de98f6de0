"""Main MCP server implementation for the WebHare CLI."""

import asyncio
import logging
import sys
from typing import Optional

from mcp import Tool
from mcp.server import NotificationOptions, Server
from mcp.server.models import InitializationOptions
from mcp.types import TextContent

from . import __version__
from .config.settings import ConfigurationError, WebHareSettings, load_settings
from .tools.webhare_tools import WebHareTools
from .utils.log_setup import configure_logging

logger = logging.getLogger(__name__)

SERVER_NAME = "webhare-server"


class ToolCallFailed(Exception):
    """Raised from call_tool so the SDK reports the envelope as a tool error."""
    pass


class WebHareMCPServer:
    """MCP Server exposing the WebHare CLI."""

    def __init__(self, settings: WebHareSettings, logger: Optional[logging.Logger] = None):
        """Initialize the MCP server and its tool handlers."""
        self.settings = settings
        self.logger = logger or logging.getLogger(__name__)
        self.webhare_tools = WebHareTools(settings, logger=self.logger)

        # Create MCP server instance
        self.server = Server(SERVER_NAME)

        # Register handlers
        self._register_handlers()

    def _register_handlers(self):
        """Register all MCP handlers."""

        @self.server.list_tools()
        async def handle_list_tools() -> list[Tool]:
            """List all available tools."""
            return self.webhare_tools.get_tools()

        # Arguments are validated by the operation registry
        @self.server.call_tool(validate_input=False)
        async def handle_call_tool(name: str, arguments: dict) -> list[TextContent]:
            """Route tool calls to the WebHare tools."""
            response = await self.webhare_tools.handle_tool(name, arguments)
            if response.is_error:
                raise ToolCallFailed(response.text)
            return response.to_text_content()

    def log_installation(self) -> None:
        """Log installation paths and whether they exist."""
        s = self.settings
        status = s.installation_status()
        self.logger.info(f"Using WebHare installation at: {s.webhare_dir}")
        self.logger.info(f"Using WebHare data root at: {s.webhare_dataroot}")
        self.logger.info(f"WebHare installation exists: {status['webhare_exists']}")
        self.logger.info(f"WebHare CLI exists: {status['cli_exists']}")
        self.logger.info(f"WebHare functions exist: {status['functions_exists']}")
        self.logger.info(f"WebHare data root exists: {status['dataroot_exists']}")
        if s.log_mode == "file":
            self.logger.info(f"Log file located at: {s.log_file}")

    async def run(self):
        """Run the MCP server on stdio."""
        from mcp.server.stdio import stdio_server

        async with stdio_server() as (read_stream, write_stream):
            self.logger.info("WebHare MCP server running on stdio")
            self.log_installation()
            await self.server.run(
                read_stream,
                write_stream,
                InitializationOptions(
                    server_name=SERVER_NAME,
                    server_version=__version__,
                    capabilities=self.server.get_capabilities(
                        notification_options=NotificationOptions(),
                        experimental_capabilities={}
                    )
                )
            )


def main():
    """Main entry point for the MCP server."""
    try:
        settings = load_settings()
    except ConfigurationError as e:
        logging.basicConfig(level=logging.ERROR)
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)

    configure_logging(settings)
    logger.info("===== WEBHARE MCP SERVER STARTING =====")

    try:
        server = WebHareMCPServer(settings)
        asyncio.run(server.run())
    except KeyboardInterrupt:
        pass
    except Exception as e:
        logger.exception(f"FATAL ERROR: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
