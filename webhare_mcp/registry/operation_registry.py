"""
Operation Registry - Typed catalog of MCP tool operations.

Provides:
- Operation descriptors with JSON schemas for their parameters
- Lookup by name with a dedicated error for unknown operations
- Required-parameter validation before a handler runs
- Conversion of the catalog into MCP Tool definitions
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Optional

from mcp import Tool

from ..core.errors import WebHareMCPError
from ..utils.response import ResponseEnvelope

logger = logging.getLogger(__name__)

# Type aliases
JSONSchema = Dict[str, Any]
Handler = Callable[[Dict[str, Any]], Awaitable[ResponseEnvelope]]

_JSON_TYPES = {
    "string": str,
    "array": list,
    "object": dict,
    "boolean": bool,
    "integer": int,
}


# ============================================================================
# Enums
# ============================================================================

class OperationCategory(Enum):
    """What an operation touches when it runs."""
    INSPECTION = "inspection"   # Filesystem checks only, no subprocess
    SHELL = "shell"             # Raw shell command in the installation dir
    CLI = "cli"                 # WebHare CLI through a transient script


# ============================================================================
# Data Classes
# ============================================================================

@dataclass(frozen=True)
class OperationDescriptor:
    """
    Describes an operation for the registry.

    Descriptors are created once at startup and never mutated.
    """
    name: str                          # Operation identifier (e.g., "wh_status")
    category: OperationCategory
    description: str                   # Human-readable description
    input_schema: JSONSchema           # JSON Schema for operation parameters
    handler: Handler = field(compare=False)

    @property
    def required(self) -> List[str]:
        """Names of required parameters."""
        return list(self.input_schema.get("required", []))

    def to_tool(self) -> Tool:
        """MCP Tool definition for list_tools."""
        return Tool(
            name=self.name,
            description=self.description,
            inputSchema=self.input_schema
        )


# ============================================================================
# Exceptions
# ============================================================================

class OperationRegistryError(WebHareMCPError):
    """Base exception for registry errors."""
    pass


class UnknownOperation(OperationRegistryError):
    """Operation not found in registry."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown tool: {name}")


OperationNotFound = UnknownOperation


class OperationAlreadyRegistered(OperationRegistryError):
    """Operation already registered."""
    pass


class InvalidOperationDescriptor(OperationRegistryError):
    """Invalid operation descriptor."""
    pass


class MalformedArguments(OperationRegistryError):
    """Tool arguments do not satisfy the operation schema."""
    pass


# ============================================================================
# Operation Registry
# ============================================================================

class OperationRegistry:
    """
    Central registry for tool operations.

    Names are unique; registration order is preserved for listing.
    """

    def __init__(self):
        """Initialize registry."""
        self._operations: Dict[str, OperationDescriptor] = {}
        self._category_index: Dict[OperationCategory, List[str]] = {}

    # ========================================================================
    # Registration
    # ========================================================================

    def register(self, operation: OperationDescriptor) -> None:
        """
        Register a new operation.

        Args:
            operation: Operation descriptor to register

        Raises:
            OperationAlreadyRegistered: If operation name already exists
            InvalidOperationDescriptor: If descriptor validation fails
        """
        self._validate_descriptor(operation)

        if operation.name in self._operations:
            raise OperationAlreadyRegistered(
                f"Operation '{operation.name}' already registered"
            )

        self._operations[operation.name] = operation
        self._category_index.setdefault(operation.category, []).append(operation.name)

        logger.debug(
            f"Registered operation: {operation.name} "
            f"(category: {operation.category.value})"
        )

    def register_all(self, operations: List[OperationDescriptor]) -> None:
        """Register multiple operations at once."""
        for operation in operations:
            self.register(operation)

    # ========================================================================
    # Retrieval
    # ========================================================================

    def get(self, name: str) -> OperationDescriptor:
        """
        Retrieve an operation by name.

        Raises:
            UnknownOperation: If operation doesn't exist
        """
        if name not in self._operations:
            raise UnknownOperation(name)

        return self._operations[name]

    def list(self, category: Optional[OperationCategory] = None) -> List[OperationDescriptor]:
        """List operations, optionally filtered by category."""
        if category is None:
            return list(self._operations.values())
        return [self._operations[n] for n in self._category_index.get(category, [])]

    def exists(self, name: str) -> bool:
        """Check if operation exists."""
        return name in self._operations

    def names(self) -> List[str]:
        """Registered operation names in registration order."""
        return list(self._operations.keys())

    def to_tools(self) -> List[Tool]:
        """All operations as MCP Tool definitions."""
        return [op.to_tool() for op in self._operations.values()]

    # ========================================================================
    # Execution
    # ========================================================================

    async def execute(
        self,
        operation_name: str,
        params: Optional[Dict[str, Any]],
        validate: bool = True
    ) -> ResponseEnvelope:
        """
        Execute an operation.

        Args:
            operation_name: Name of operation to execute
            params: Operation parameters
            validate: Check required parameters and their types first

        Returns:
            ResponseEnvelope produced by the handler

        Raises:
            UnknownOperation: If operation doesn't exist
            MalformedArguments: If parameter validation fails
        """
        operation = self.get(operation_name)
        params = params or {}

        if validate and operation.input_schema:
            self._validate_params(params, operation)

        return await operation.handler(params)

    # ========================================================================
    # Internal Helpers
    # ========================================================================

    def _validate_descriptor(self, operation: OperationDescriptor) -> None:
        """
        Validate operation descriptor.

        Raises:
            InvalidOperationDescriptor: If validation fails
        """
        if not operation.name:
            raise InvalidOperationDescriptor("Operation name is required")

        if not operation.description:
            raise InvalidOperationDescriptor(
                f"Operation '{operation.name}' needs a description"
            )

        if operation.handler is None:
            raise InvalidOperationDescriptor(
                f"Operation '{operation.name}' needs a handler"
            )

        if operation.input_schema.get("type") != "object":
            raise InvalidOperationDescriptor(
                f"Operation '{operation.name}' input schema must be an object schema"
            )

        properties = operation.input_schema.get("properties", {})
        for name in operation.required:
            if name not in properties:
                raise InvalidOperationDescriptor(
                    f"Operation '{operation.name}' requires undeclared parameter '{name}'"
                )

    def _validate_params(
        self,
        params: Dict[str, Any],
        operation: OperationDescriptor
    ) -> None:
        """
        Validate parameters against the operation input schema.

        Only required fields and the type of required fields are checked;
        optional parameters are normalized by their handlers.

        Raises:
            MalformedArguments: If validation fails
        """
        operation_name = operation.name
        properties = operation.input_schema.get("properties", {})
        for name in operation.required:
            if params.get(name) is None:
                raise MalformedArguments(
                    f"Missing required parameter '{name}' for tool '{operation_name}'"
                )

            expected = properties.get(name, {}).get("type")
            python_type = _JSON_TYPES.get(expected)
            if python_type is not None and not isinstance(params[name], python_type):
                raise MalformedArguments(
                    f"Parameter '{name}' for tool '{operation_name}' must be of type {expected}"
                )
