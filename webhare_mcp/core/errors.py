"""Exceptions raised while running shell commands and the WebHare CLI."""

from typing import Optional


class WebHareMCPError(Exception):
    """Base exception for the WebHare MCP server."""
    pass


class ExecutionError(WebHareMCPError):
    """A subprocess failed to run or exited without usable output."""

    prefix = "Command execution failed"

    def __init__(
        self,
        message: str,
        stdout: str = "",
        stderr: str = "",
        returncode: Optional[int] = None
    ):
        self.detail = message
        self.message = f"{self.prefix}: {message}"
        self.stdout = stdout
        self.stderr = stderr
        self.returncode = returncode
        super().__init__(self.message)


class WebHareCommandError(ExecutionError):
    """A WebHare CLI invocation failed."""

    prefix = "WebHare command execution failed"
