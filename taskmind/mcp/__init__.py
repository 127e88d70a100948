"""MCP protocol layer: registry, handlers, resources and JSON-RPC dispatch."""
from taskmind.mcp.registry import MCPRegistry, ParamSpec, ToolSpec, PromptSpec, ResourceSpec
from taskmind.mcp.catalog import build_registry
from taskmind.mcp.request_handlers import handle_jsonrpc_batch, handle_jsonrpc_request

__all__ = [
    "MCPRegistry",
    "ParamSpec",
    "ToolSpec",
    "PromptSpec",
    "ResourceSpec",
    "build_registry",
    "handle_jsonrpc_batch",
    "handle_jsonrpc_request",
]
