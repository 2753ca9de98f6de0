"""
Operation Registry for webhare-mcp.

Provides typed, discoverable catalog of tool operations.
"""

from .operation_registry import (
    OperationRegistry,
    OperationDescriptor,
    OperationCategory,
    # Exceptions
    OperationRegistryError,
    UnknownOperation,
    OperationNotFound,
    OperationAlreadyRegistered,
    InvalidOperationDescriptor,
    MalformedArguments,
)

__all__ = [
    'OperationRegistry',
    'OperationDescriptor',
    'OperationCategory',
    # Exceptions
    'OperationRegistryError',
    'UnknownOperation',
    'OperationNotFound',
    'OperationAlreadyRegistered',
    'InvalidOperationDescriptor',
    'MalformedArguments',
]
