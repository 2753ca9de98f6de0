"""
Configuration and Feature Flags for the WebHare MCP server.

Installation paths, the WebHare base port and the logging mode are read from
environment variables, falling back to the home-relative defaults the server
has always used.

Usage:
    from webhare_mcp.config.settings import load_settings, is_enabled

    settings = load_settings()
    if is_enabled('strict_arguments'):
        # Reject tool calls with missing required parameters
        ...

Environment Variables:
    WEBHARE_DIR=<path>              - WebHare installation (whtree) directory
    WEBHARE_DATAROOT=<path>         - WebHare data root
    WEBHARE_BASEPORT=<port>         - Base port exported to the WebHare CLI
    WEBHARE_MCP_EXTRA_PATH=<dirs>   - Directories appended to PATH (os.pathsep separated)
    WEBHARE_MCP_TMPDIR=<path>       - Directory for transient command scripts
    WEBHARE_MCP_LOG_MODE=stderr/file - Log to stderr only, or also to a file
    WEBHARE_MCP_LOG_FILE=<path>     - Log file used in 'file' mode
    WEBHARE_MCP_LOG_LEVEL=<level>   - Logging level name (default INFO)
    WEBHARE_MCP_STRICT_ARGS=true/false - Toggle strict argument validation
"""

import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, Optional, Tuple


DEFAULT_BASE_PORT = 13679
DEFAULT_EXTRA_PATH = ("/usr/local/bin", "/opt/homebrew/bin")
LOG_MODES = ("stderr", "file")


class ConfigurationError(ValueError):
    """Invalid configuration value."""
    pass


# Feature flags with environment variable overrides
FEATURE_FLAGS: Dict[str, bool] = {
    # Missing required tool parameters fail with MalformedArguments instead
    # of being coerced to the literal string "undefined"
    'strict_arguments': os.getenv('WEBHARE_MCP_STRICT_ARGS', 'true').lower() == 'true',
}


def is_enabled(flag: str) -> bool:
    """
    Check if a feature flag is enabled.

    Args:
        flag: Feature flag name (e.g., 'strict_arguments')

    Returns:
        True if flag is enabled, False otherwise

    Raises:
        KeyError: If flag name is not recognized
    """
    if flag not in FEATURE_FLAGS:
        available = ', '.join(FEATURE_FLAGS.keys())
        raise KeyError(
            f"Unknown feature flag: '{flag}'. "
            f"Available flags: {available}"
        )

    return FEATURE_FLAGS[flag]


def get_all_flags() -> Dict[str, bool]:
    """Get all feature flags and their current state."""
    return FEATURE_FLAGS.copy()


def set_flag(flag: str, enabled: bool) -> None:
    """
    Programmatically set a feature flag (for testing only).

    Warning:
        This is for testing only. In production, use environment variables.
    """
    if flag not in FEATURE_FLAGS:
        available = ', '.join(FEATURE_FLAGS.keys())
        raise KeyError(
            f"Unknown feature flag: '{flag}'. "
            f"Available flags: {available}"
        )

    FEATURE_FLAGS[flag] = enabled


@dataclass(frozen=True)
class WebHareSettings:
    """Read-only server configuration, resolved once at startup."""
    home: Path
    webhare_dir: Path
    webhare_dataroot: Path
    base_port: int = DEFAULT_BASE_PORT
    extra_path: Tuple[str, ...] = DEFAULT_EXTRA_PATH
    temp_dir: Path = Path(tempfile.gettempdir())
    log_mode: str = "stderr"
    log_file: Optional[Path] = None
    log_level: str = "INFO"

    @property
    def cli_path(self) -> Path:
        """WebHare CLI entry point."""
        return self.webhare_dir / "bin" / "wh"

    @property
    def functions_path(self) -> Path:
        """Helper script sourced before every CLI invocation."""
        return self.webhare_dir / "lib" / "wh-functions.sh"

    def installation_status(self) -> Dict[str, bool]:
        """Existence flags for the installation paths."""
        return {
            "webhare_exists": self.webhare_dir.exists(),
            "cli_exists": self.cli_path.exists(),
            "functions_exists": self.functions_path.exists(),
            "dataroot_exists": self.webhare_dataroot.exists(),
        }


def _parse_port(value: str) -> int:
    try:
        port = int(value)
    except ValueError:
        raise ConfigurationError(f"WEBHARE_BASEPORT must be an integer, got '{value}'")
    if not 0 < port < 65536:
        raise ConfigurationError(f"WEBHARE_BASEPORT out of range: {port}")
    return port


def load_settings(environ: Optional[Mapping[str, str]] = None) -> WebHareSettings:
    """
    Build settings from environment variables.

    Args:
        environ: Mapping to read from (default: os.environ)

    Returns:
        WebHareSettings

    Raises:
        ConfigurationError: If a value cannot be used
    """
    env = os.environ if environ is None else environ

    home = Path(env.get("HOME") or Path.home())

    webhare_dir = Path(env.get("WEBHARE_DIR") or home / "projects" / "webhare" / "whtree")
    webhare_dataroot = Path(
        env.get("WEBHARE_DATAROOT") or home / "whrunkit" / "myserver" / "whdata"
    )

    extra_path_env = env.get("WEBHARE_MCP_EXTRA_PATH")
    if extra_path_env is None:
        extra_path = DEFAULT_EXTRA_PATH
    else:
        extra_path = tuple(p for p in extra_path_env.split(os.pathsep) if p)

    log_mode = env.get("WEBHARE_MCP_LOG_MODE", "stderr").lower()
    if log_mode not in LOG_MODES:
        raise ConfigurationError(
            f"WEBHARE_MCP_LOG_MODE must be one of {', '.join(LOG_MODES)}, got '{log_mode}'"
        )

    return WebHareSettings(
        home=home,
        webhare_dir=webhare_dir,
        webhare_dataroot=webhare_dataroot,
        base_port=_parse_port(env.get("WEBHARE_BASEPORT", str(DEFAULT_BASE_PORT))),
        extra_path=extra_path,
        temp_dir=Path(env.get("WEBHARE_MCP_TMPDIR") or tempfile.gettempdir()),
        log_mode=log_mode,
        log_file=Path(env.get("WEBHARE_MCP_LOG_FILE") or home / "webhare-mcp-log.txt"),
        log_level=env.get("WEBHARE_MCP_LOG_LEVEL", "INFO").upper(),
    )
