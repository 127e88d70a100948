"""
Tests for the MCP registry: catalogue validation, argument coercion,
error wrapping and resource URI matching.
"""
import pytest

from taskmind.exceptions import ParameterError, RegistryError
from taskmind.mcp.registry import (
    MCPRegistry,
    ParamSpec,
    PromptSpec,
    ResourceSpec,
    ToolSpec,
    coerce_arguments,
    coerce_value,
)


def echo(text, count=1):
    return text * count


class TestRegistration:
    def test_duplicate_tool_rejected(self):
        registry = MCPRegistry()
        spec = ToolSpec("echo", "Echo", echo, (ParamSpec("text", "string", "t", required=True),))
        registry.add_tool(spec)
        with pytest.raises(RegistryError):
            registry.add_tool(spec)

    def test_unknown_param_type_rejected(self):
        with pytest.raises(RegistryError):
            MCPRegistry().add_tool(ToolSpec("echo", "Echo", echo, (ParamSpec("text", "list", "t"),)))

    def test_required_with_default_rejected(self):
        with pytest.raises(RegistryError):
            MCPRegistry().add_tool(ToolSpec(
                "echo", "Echo", echo, (ParamSpec("text", "string", "t", required=True, default="x"),)
            ))

    def test_default_of_wrong_type_rejected(self):
        with pytest.raises(RegistryError):
            MCPRegistry().add_tool(ToolSpec(
                "echo", "Echo", echo, (ParamSpec("count", "integer", "c", default="many"),)
            ))

    def test_handler_must_accept_declared_params(self):
        with pytest.raises(RegistryError):
            MCPRegistry().add_tool(ToolSpec("echo", "Echo", echo, (ParamSpec("other", "string", "o"),)))

    def test_duplicate_prompt_rejected(self):
        registry = MCPRegistry()
        registry.add_prompt(PromptSpec("p", "Prompt", lambda: "x"))
        with pytest.raises(RegistryError):
            registry.add_prompt(PromptSpec("p", "Prompt", lambda: "x"))

    def test_resource_handler_must_accept_placeholders(self):
        with pytest.raises(RegistryError):
            MCPRegistry().add_resource(ResourceSpec("task://{id}", "Task", "One task", lambda: "{}"))


class TestCoercion:
    @pytest.mark.parametrize("value,expected", [(5, 5), ("7", 7), (" 8 ", 8), (3.0, 3)])
    def test_integer(self, value, expected):
        assert coerce_value(ParamSpec("n", "integer", "n"), value) == expected

    @pytest.mark.parametrize("value", ["abc", True, 2.5, [1]])
    def test_integer_rejects(self, value):
        with pytest.raises(ParameterError):
            coerce_value(ParamSpec("n", "integer", "n"), value)

    @pytest.mark.parametrize("value,expected", [
        (True, True), ("true", True), ("YES", True), ("1", True), (1, True),
        (False, False), ("false", False), ("no", False), ("0", False), (0, False),
    ])
    def test_boolean(self, value, expected):
        assert coerce_value(ParamSpec("b", "boolean", "b"), value) is expected

    def test_boolean_rejects(self):
        with pytest.raises(ParameterError):
            coerce_value(ParamSpec("b", "boolean", "b"), "maybe")

    def test_string_accepts_numbers(self):
        assert coerce_value(ParamSpec("s", "string", "s"), 42) == "42"

    def test_string_rejects_objects(self):
        with pytest.raises(ParameterError):
            coerce_value(ParamSpec("s", "string", "s"), {"a": 1})

    def test_missing_required(self):
        with pytest.raises(ParameterError) as exc_info:
            coerce_arguments((ParamSpec("id", "integer", "id", required=True),), {})
        assert "id" in str(exc_info.value)

    def test_null_counts_as_missing(self):
        params = (ParamSpec("flag", "boolean", "f", default=False),)
        assert coerce_arguments(params, {"flag": None}) == {"flag": False}

    def test_defaults_and_extras(self):
        params = (ParamSpec("text", "string", "t", required=True), ParamSpec("count", "integer", "c", default=2))
        assert coerce_arguments(params, {"text": "a", "unexpected": 1}) == {"text": "a", "count": 2}


class TestCalls:
    @pytest.fixture
    def echo_registry(self):
        registry = MCPRegistry()
        registry.add_tool(ToolSpec(
            "echo", "Echo text",
            echo,
            (ParamSpec("text", "string", "Text", required=True), ParamSpec("count", "integer", "Times", default=1)),
        ))
        registry.add_tool(ToolSpec("explode", "Always fails", lambda: 1 / 0))
        return registry

    def test_call_with_coercion(self, echo_registry):
        assert echo_registry.call_tool("echo", {"text": "ab", "count": "2"}) == "abab"

    def test_missing_param_is_error_result(self, echo_registry):
        result = echo_registry.call_tool("echo", {})
        assert result.startswith("❌")
        assert "text" in result

    def test_handler_exception_is_wrapped(self, echo_registry):
        result = echo_registry.call_tool("explode", {})
        assert result.startswith("❌ Error executing 'explode':")

    def test_unknown_tool(self, echo_registry):
        assert echo_registry.call_tool("nope").startswith("❌")
        assert echo_registry.has_tool("nope") is False

    def test_input_schema(self, echo_registry):
        tool = echo_registry.list_tools()[0]
        assert tool["name"] == "echo"
        assert tool["inputSchema"]["required"] == ["text"]
        assert tool["inputSchema"]["properties"]["count"] == {"type": "integer", "description": "Times", "default": 1}


class TestResources:
    @pytest.fixture
    def resource_registry(self):
        registry = MCPRegistry()
        registry.add_resource(ResourceSpec("task://{id}", "Task", "One", lambda id: f"id={id}"))
        registry.add_resource(ResourceSpec("task://all", "All", "All", lambda: "all"))
        registry.add_resource(ResourceSpec("task://status/{status}", "Status", "By status",
                                           lambda status: f"status={status}"))
        registry.add_resource(ResourceSpec("task://broken", "Broken", "Fails", lambda: 1 / 0))
        return registry

    def test_fixed_uri_wins_over_template(self, resource_registry):
        _, text = resource_registry.read_resource("task://all")
        assert text == "all"

    def test_template_extracts_values(self, resource_registry):
        assert resource_registry.read_resource("task://12")[1] == "id=12"
        assert resource_registry.read_resource("task://status/done")[1] == "status=done"

    def test_unknown_uri(self, resource_registry):
        with pytest.raises(LookupError):
            resource_registry.read_resource("other://x")
        with pytest.raises(LookupError):
            resource_registry.read_resource("task://a/b/c")

    def test_handler_failure_becomes_error_json(self, resource_registry):
        spec, text = resource_registry.read_resource("task://broken")
        assert spec.mime_type == "application/json"
        assert text.startswith('{"error":')

    def test_listing_splits_templates(self, resource_registry):
        assert [r["uri"] for r in resource_registry.list_resources()] == ["task://all", "task://broken"]
        assert [r["uriTemplate"] for r in resource_registry.list_resource_templates()] == [
            "task://{id}", "task://status/{status}"
        ]
