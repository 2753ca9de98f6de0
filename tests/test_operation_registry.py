"""Tests for the operation registry."""

import pytest

from webhare_mcp.registry import (
    InvalidOperationDescriptor,
    MalformedArguments,
    OperationAlreadyRegistered,
    OperationCategory,
    OperationDescriptor,
    OperationNotFound,
    OperationRegistry,
    UnknownOperation,
)
from webhare_mcp.utils.response import text_response


async def echo_handler(params):
    return text_response(f"got {params.get('value')}")


def make_descriptor(name="echo", **overrides):
    fields = dict(
        name=name,
        category=OperationCategory.SHELL,
        description="Echo a value",
        input_schema={
            "type": "object",
            "properties": {"value": {"type": "string"}},
            "required": ["value"]
        },
        handler=echo_handler,
    )
    fields.update(overrides)
    return OperationDescriptor(**fields)


@pytest.fixture
def registry():
    registry = OperationRegistry()
    registry.register(make_descriptor())
    return registry


class TestRegistration:

    def test_duplicate_name_rejected(self, registry):
        with pytest.raises(OperationAlreadyRegistered):
            registry.register(make_descriptor())

    def test_description_required(self):
        with pytest.raises(InvalidOperationDescriptor):
            OperationRegistry().register(make_descriptor(description=""))

    def test_schema_must_be_object(self):
        with pytest.raises(InvalidOperationDescriptor):
            OperationRegistry().register(make_descriptor(input_schema={"type": "string"}))

    def test_required_parameter_must_be_declared(self):
        schema = {"type": "object", "properties": {}, "required": ["value"]}
        with pytest.raises(InvalidOperationDescriptor, match="undeclared parameter 'value'"):
            OperationRegistry().register(make_descriptor(input_schema=schema))

    def test_listing_keeps_registration_order(self, registry):
        registry.register(make_descriptor("second", category=OperationCategory.CLI))

        assert registry.names() == ["echo", "second"]
        assert [op.name for op in registry.list(OperationCategory.CLI)] == ["second"]
        assert registry.list(OperationCategory.INSPECTION) == []
        assert [tool.name for tool in registry.to_tools()] == ["echo", "second"]

    def test_required_parameters(self, registry):
        assert registry.get("echo").required == ["value"]
        assert make_descriptor(input_schema={"type": "object", "properties": {}}).required == []

    def test_to_tool_carries_schema(self, registry):
        tool = registry.get("echo").to_tool()

        assert tool.description == "Echo a value"
        assert tool.inputSchema["required"] == ["value"]


class TestLookup:

    def test_unknown_operation(self, registry):
        with pytest.raises(UnknownOperation) as exc_info:
            registry.get("missing_tool")

        assert exc_info.value.name == "missing_tool"
        assert "missing_tool" in str(exc_info.value)

    def test_operation_not_found_alias(self):
        assert OperationNotFound is UnknownOperation

    def test_exists(self, registry):
        assert registry.exists("echo")
        assert not registry.exists("ECHO")


class TestExecute:

    @pytest.mark.asyncio
    async def test_calls_handler(self, registry):
        response = await registry.execute("echo", {"value": "x"})
        assert response.text == "got x"

    @pytest.mark.asyncio
    async def test_missing_required_parameter(self, registry):
        with pytest.raises(MalformedArguments, match="Missing required parameter 'value'"):
            await registry.execute("echo", {})

    @pytest.mark.asyncio
    async def test_none_arguments_treated_as_empty(self, registry):
        with pytest.raises(MalformedArguments):
            await registry.execute("echo", None)

    @pytest.mark.asyncio
    async def test_wrong_parameter_type(self, registry):
        with pytest.raises(MalformedArguments, match="must be of type string"):
            await registry.execute("echo", {"value": 42})

    @pytest.mark.asyncio
    async def test_validation_can_be_skipped(self, registry):
        response = await registry.execute("echo", {}, validate=False)
        assert response.text == "got None"
