"""WebHare tools: installation info, shell commands and WebHare CLI calls."""

import json
import logging
import re
import shlex
from typing import Any, Dict, List, Optional

from mcp import Tool
from pydantic import ValidationError

from ..config.settings import WebHareSettings, is_enabled
from ..core.cli_invoker import WebHareCLI
from ..core.errors import ExecutionError
from ..core.process_runner import ProcessRunner
from ..models.arguments import CliArguments, CommandArguments
from ..registry.operation_registry import MalformedArguments, OperationRegistry
from ..registry.operations.webhare_operations import (
    LIST_MODULES_SUBCOMMAND,
    STATUS_SUBCOMMAND,
    register_webhare_operations,
)
from ..utils.response import (
    ResponseEnvelope,
    error_response,
    json_response,
    output_response,
)

_WHITESPACE = re.compile(r"\s+")


class WebHareTools:
    """Handles the WebHare tool calls."""

    def __init__(
        self,
        settings: WebHareSettings,
        runner: Optional[ProcessRunner] = None,
        cli: Optional[WebHareCLI] = None,
        logger: Optional[logging.Logger] = None
    ):
        """Initialize with settings and the command execution collaborators.

        Args:
            settings: Installation paths and environment values
            runner: Runner for raw shell commands
            cli: WebHare CLI invoker
            logger: Logger shared with the collaborators created here
        """
        self.settings = settings
        self.logger = logger or logging.getLogger(__name__)
        self.runner = runner or ProcessRunner(logger=self.logger)
        self.webhare_cli = cli or WebHareCLI(settings, runner=self.runner, logger=self.logger)

        self.registry = OperationRegistry()
        register_webhare_operations(self.registry, self)

    def get_tools(self) -> List[Tool]:
        """Return all WebHare tools."""
        return self.registry.to_tools()

    async def handle_tool(self, name: str, arguments: Optional[Dict[str, Any]]) -> ResponseEnvelope:
        """Route tool call to its handler.

        Never raises: every failure is returned as an error envelope.

        Args:
            name: Tool name
            arguments: Tool arguments

        Returns:
            Response envelope
        """
        self.logger.info(f"CALL TOOL REQUEST: {name} {json.dumps(arguments or {}, default=str)}")
        try:
            response = await self.registry.execute(
                name,
                arguments,
                validate=is_enabled('strict_arguments')
            )
        except Exception as e:
            self.logger.error(f"Error executing tool {name}: {e}")
            return error_response(str(e))

        self.logger.info(f"CALL TOOL RESPONSE: {response.text}")
        return response

    # ========================================================================
    # Handlers
    # ========================================================================

    async def info(self, args: dict) -> ResponseEnvelope:
        """Report installation paths and whether they exist."""
        s = self.settings
        return json_response({
            "webhare_dir": str(s.webhare_dir),
            "webhare_dataroot": str(s.webhare_dataroot),
            **s.installation_status(),
            "home": str(s.home),
        })

    async def command(self, args: dict) -> ResponseEnvelope:
        """Run a shell command line inside the WebHare directory."""
        params = _parse(CommandArguments, args)
        command_line = f"cd {shlex.quote(str(self.settings.webhare_dir))} && {params.command}"
        output = await self.runner.run(command_line)
        return output_response(output)

    async def cli(self, args: dict) -> ResponseEnvelope:
        """Run a WebHare CLI subcommand."""
        params = _parse(CliArguments, args)
        output = await self.webhare_cli.invoke(params.command, params.args)
        return output_response(output)

    async def list_modules(self, args: dict) -> ResponseEnvelope:
        """List installed modules from the whitespace separated CLI output."""
        output = await self.webhare_cli.invoke(LIST_MODULES_SUBCOMMAND)
        modules = [m for m in _WHITESPACE.split(output) if m]
        return json_response({
            "modules": modules,
            "count": len(modules),
        })

    async def status(self, args: dict) -> ResponseEnvelope:
        """Classify WebHare as running, installed but stopped, or not installed."""
        try:
            await self.webhare_cli.invoke(STATUS_SUBCOMMAND)
        except ExecutionError as e:
            self.logger.info(f"WebHare liveness check failed: {e}")
            installed = self.settings.webhare_dir.exists() and self.settings.cli_path.exists()
            return json_response({
                "installed": installed,
                "running": False,
                "message": (
                    "WebHare is installed but not running" if installed
                    else "WebHare is not installed"
                ),
            })

        return json_response({
            "installed": True,
            "running": True,
            "message": "WebHare is installed and running",
        })


def _parse(model, args: dict):
    try:
        return model.model_validate(args or {})
    except ValidationError as e:
        raise MalformedArguments(str(e))
