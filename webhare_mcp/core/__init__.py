"""
Command execution layer: raw shell commands and WebHare CLI invocations.
"""

from .errors import ExecutionError, WebHareCommandError, WebHareMCPError
from .process_runner import ExecutionResult, ProcessRunner
from .cli_invoker import WebHareCLI

__all__ = [
    'ExecutionError',
    'ExecutionResult',
    'ProcessRunner',
    'WebHareCLI',
    'WebHareCommandError',
    'WebHareMCPError',
]
