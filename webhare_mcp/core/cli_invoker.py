"""
WebHare CLI invoker.

The `wh` CLI needs its environment prepared by `lib/wh-functions.sh`, so each
invocation is written to a transient bash script that:

1. changes to the WebHare installation directory
2. exports HOME, WEBHARE_DIR, WEBHARE_DATAROOT and WEBHARE_BASEPORT
3. appends the extra search directories to PATH
4. sources the helper script
5. runs `bin/wh <subcommand> <args...>`

Every interpolated value is shell-quoted. The script is passed to bash as an
argument vector and removed once the call finishes, whatever the outcome.
"""

import logging
import os
import shlex
import tempfile
import time
from pathlib import Path
from typing import Optional, Sequence

from ..config.settings import WebHareSettings
from .errors import ExecutionError, WebHareCommandError
from .process_runner import ProcessRunner

SCRIPT_PREFIX = "webhare-command-"
BASH = "bash"


class WebHareCLI:
    """Runs WebHare CLI subcommands through transient setup scripts."""

    def __init__(
        self,
        settings: WebHareSettings,
        runner: Optional[ProcessRunner] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize invoker.

        Args:
            settings: Installation paths and environment values
            runner: Process runner used to execute the script
            logger: Logger to report invocations to
        """
        self.settings = settings
        self.logger = logger or logging.getLogger(__name__)
        self.runner = runner or ProcessRunner(logger=self.logger)

    def build_script(self, subcommand: str, args: Sequence[str] = ()) -> str:
        """
        Render the script body for one CLI invocation.

        Args:
            subcommand: WebHare CLI subcommand (e.g. "getmodulelist")
            args: Arguments passed after the subcommand, one word each

        Returns:
            Bash script text
        """
        s = self.settings
        q = shlex.quote

        path_suffix = "".join(f":{q(d)}" for d in s.extra_path)
        command = " ".join(q(str(word)) for word in [s.cli_path, subcommand, *args])

        lines = [
            "#!/bin/bash",
            f"cd {q(str(s.webhare_dir))} || exit 1",
            f"export HOME={q(str(s.home))}",
            f"export WEBHARE_DIR={q(str(s.webhare_dir))}",
            f"export WEBHARE_DATAROOT={q(str(s.webhare_dataroot))}",
            f"export WEBHARE_BASEPORT={int(s.base_port)}",
            f'export PATH="$PATH"{path_suffix}',
            f"source {q(str(s.functions_path))}",
            command,
        ]
        return "\n".join(lines) + "\n"

    async def invoke(self, subcommand: str, args: Sequence[str] = ()) -> str:
        """
        Run a WebHare CLI subcommand.

        Args:
            subcommand: WebHare CLI subcommand
            args: Subcommand arguments

        Returns:
            Captured stdout, trimmed

        Raises:
            WebHareCommandError: If the script could not be written or the
                command failed without output
        """
        args = [str(arg) for arg in args]
        self.logger.info(f"WEBHARE COMMAND: {' '.join([subcommand, *args])}")

        script_path = None
        try:
            script_path = self._create_script(self.build_script(subcommand, args))
            output = await self.runner.run_args([BASH, str(script_path)])
        except ExecutionError as e:
            self.logger.error(f"WEBHARE COMMAND ERROR: {e.message}")
            raise WebHareCommandError(
                e.detail,
                stdout=e.stdout,
                stderr=e.stderr,
                returncode=e.returncode
            )
        except OSError as e:
            self.logger.error(f"WEBHARE COMMAND ERROR: {e}")
            raise WebHareCommandError(f"could not write command script: {e}")
        finally:
            if script_path is not None:
                self._remove_script(script_path)

        self.logger.info(f"WEBHARE COMMAND RESULT: {output}")
        return output

    def _create_script(self, content: str) -> Path:
        """Write the script to a unique, executable temp file."""
        fd, name = tempfile.mkstemp(
            prefix=f"{SCRIPT_PREFIX}{time.time_ns()}-",
            suffix=".sh",
            dir=str(self.settings.temp_dir)
        )
        path = Path(name)
        try:
            with os.fdopen(fd, "w") as f:
                f.write(content)
            path.chmod(0o700)
        except OSError:
            path.unlink(missing_ok=True)
            raise
        return path

    def _remove_script(self, path: Path) -> None:
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            self.logger.warning(f"Failed to remove command script {path}: {e}")
