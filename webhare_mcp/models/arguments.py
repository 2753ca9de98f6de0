"""Argument models for the WebHare tools.

Required parameters are checked by the operation registry before a handler
runs. These models normalize what got through: scalar values become strings
and a missing or non-list `args` becomes an empty list.
"""

from typing import Any, List

from pydantic import BaseModel, Field, field_validator

# Value used for a missing command when strict argument checking is disabled
UNDEFINED = "undefined"


def _as_text(value: Any) -> str:
    if value is None:
        return UNDEFINED
    return value if isinstance(value, str) else str(value)


class CommandArguments(BaseModel):
    """Arguments of wh_command."""

    command: str = Field(UNDEFINED, description="Shell command line to run in the WebHare directory")

    @field_validator("command", mode="before")
    @classmethod
    def _coerce_command(cls, value: Any) -> str:
        return _as_text(value)


class CliArguments(BaseModel):
    """Arguments of wh_cli."""

    command: str = Field(UNDEFINED, description="WebHare CLI subcommand")
    args: List[str] = Field(default_factory=list, description="Subcommand arguments")

    @field_validator("command", mode="before")
    @classmethod
    def _coerce_command(cls, value: Any) -> str:
        return _as_text(value)

    @field_validator("args", mode="before")
    @classmethod
    def _coerce_args(cls, value: Any) -> List[str]:
        if not isinstance(value, (list, tuple)):
            return []
        return [_as_text(v) for v in value]
