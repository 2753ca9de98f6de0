"""
WebHare operation registrations.

Declares the five WebHare tools with their schemas and binds them to the
handlers of a WebHareTools instance.
"""

from typing import TYPE_CHECKING, List

from ..operation_registry import OperationCategory, OperationDescriptor, OperationRegistry

if TYPE_CHECKING:
    from ...tools.webhare_tools import WebHareTools


WH_INFO = "wh_info"
WH_COMMAND = "wh_command"
WH_CLI = "wh_cli"
WH_LIST_MODULES = "wh_list_modules"
WH_STATUS = "wh_status"

# Fixed WebHare CLI subcommands
LIST_MODULES_SUBCOMMAND = "getmodulelist"
STATUS_SUBCOMMAND = "isrunning"

_NO_PARAMETERS = {
    "type": "object",
    "properties": {}
}


def webhare_operations(tools: "WebHareTools") -> List[OperationDescriptor]:
    """
    Build the WebHare operation descriptors.

    Args:
        tools: Handler owner

    Returns:
        Descriptors in listing order
    """
    return [
        OperationDescriptor(
            name=WH_INFO,
            category=OperationCategory.INSPECTION,
            description="Get information about the WebHare installation",
            input_schema=dict(_NO_PARAMETERS),
            handler=tools.info
        ),
        OperationDescriptor(
            name=WH_COMMAND,
            category=OperationCategory.SHELL,
            description="Execute a command in the WebHare directory",
            input_schema={
                "type": "object",
                "properties": {
                    "command": {
                        "type": "string",
                        "description": "Command to execute"
                    }
                },
                "required": ["command"]
            },
            handler=tools.command
        ),
        OperationDescriptor(
            name=WH_CLI,
            category=OperationCategory.CLI,
            description="Execute a WebHare CLI command",
            input_schema={
                "type": "object",
                "properties": {
                    "command": {
                        "type": "string",
                        "description": "WebHare command to execute"
                    },
                    "args": {
                        "type": "array",
                        "items": {
                            "type": "string"
                        },
                        "description": "Command arguments"
                    }
                },
                "required": ["command"]
            },
            handler=tools.cli
        ),
        OperationDescriptor(
            name=WH_LIST_MODULES,
            category=OperationCategory.CLI,
            description="List all installed WebHare modules",
            input_schema=dict(_NO_PARAMETERS),
            handler=tools.list_modules
        ),
        OperationDescriptor(
            name=WH_STATUS,
            category=OperationCategory.CLI,
            description="Check if WebHare is installed and running",
            input_schema=dict(_NO_PARAMETERS),
            handler=tools.status
        ),
    ]


def register_webhare_operations(registry: OperationRegistry, tools: "WebHareTools") -> None:
    """Register the WebHare operations on a registry."""
    registry.register_all(webhare_operations(tools))
