"""
Process Runner - run a command, wait for it, capture its output.

Commands run as asyncio subprocesses so a slow child only suspends the tool
call that started it. There is no timeout and no cancellation.

Result policy:
- exit 0: stdout is returned; stderr output is only logged as a warning
- non-zero exit with stdout: the partial stdout is returned as a success
- non-zero exit without stdout, or a spawn failure: ExecutionError
"""

import asyncio
import logging
import os
from dataclasses import dataclass
from typing import Optional, Sequence, Union

from .errors import ExecutionError


PathLike = Union[str, os.PathLike]


@dataclass
class ExecutionResult:
    """Outcome of a single subprocess run."""
    exited_successfully: bool
    output: str                 # stdout as captured, untrimmed
    diagnostics: str = ""
    returncode: Optional[int] = None


class ProcessRunner:
    """Runs shell command lines or argument vectors and normalizes the result."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize runner.

        Args:
            logger: Logger to report commands and results to
        """
        self.logger = logger or logging.getLogger(__name__)

    async def run(self, command_line: str, cwd: Optional[PathLike] = None) -> str:
        """
        Run a shell command line.

        The command line is handed to the shell as is; quoting is the
        caller's responsibility.

        Args:
            command_line: Fully formed shell command
            cwd: Optional working directory

        Returns:
            Captured stdout, trimmed

        Raises:
            ExecutionError: If the command failed without producing stdout
        """
        self.logger.info(f"COMMAND EXECUTION: {command_line}")
        try:
            process = await asyncio.create_subprocess_shell(
                command_line,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=cwd
            )
        except OSError as e:
            self.logger.error(f"COMMAND ERROR: {e}")
            raise ExecutionError(str(e))

        return await self._collect(process, command_line)

    async def run_args(self, argv: Sequence[str], cwd: Optional[PathLike] = None) -> str:
        """
        Run a program from an argument vector, without a shell.

        Args:
            argv: Program followed by its arguments
            cwd: Optional working directory

        Returns:
            Captured stdout, trimmed

        Raises:
            ExecutionError: If the program could not be started, or failed
                without producing stdout
        """
        argv = [str(arg) for arg in argv]
        if not argv:
            raise ExecutionError("empty argument vector")

        description = " ".join(argv)
        self.logger.info(f"COMMAND EXECUTION: {description}")
        try:
            process = await asyncio.create_subprocess_exec(
                *argv,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=cwd
            )
        except OSError as e:
            self.logger.error(f"COMMAND ERROR: {e}")
            raise ExecutionError(str(e))

        return await self._collect(process, description)

    async def _collect(self, process: asyncio.subprocess.Process, description: str) -> str:
        stdout, stderr = await process.communicate()
        result = ExecutionResult(
            exited_successfully=process.returncode == 0,
            output=_decode(stdout),
            diagnostics=_decode(stderr).strip(),
            returncode=process.returncode
        )
        return self._normalize(result, description)

    def _normalize(self, result: ExecutionResult, description: str) -> str:
        """Apply the success/leniency/failure policy to a finished run."""
        output = result.output.strip()
        if result.exited_successfully:
            if result.diagnostics:
                self.logger.warning(f"Command stderr: {result.diagnostics}")
            self.logger.info(f"COMMAND RESULT: {output}")
            return output

        message = f"'{description}' exited with status {result.returncode}"
        if result.diagnostics:
            message = f"{message}: {result.diagnostics}"
        self.logger.error(f"COMMAND ERROR: {message}")

        if result.output:
            # Any captured stdout, even whitespace, makes a failed run a success
            self.logger.info(f"COMMAND ERROR STDOUT: {output}")
            return output

        raise ExecutionError(
            message,
            stdout=output,
            stderr=result.diagnostics,
            returncode=result.returncode
        )


def _decode(data: Optional[bytes]) -> str:
    return (data or b"").decode("utf-8", errors="replace")
