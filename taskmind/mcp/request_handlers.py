"""JSON-RPC 2.0 request handling for the MCP protocol."""
import logging
import traceback
from typing import Any, Dict, List, Optional

from taskmind import __version__
from taskmind.mcp.formatting import is_error_result
from taskmind.mcp.registry import MCPRegistry

logger = logging.getLogger(__name__)

PROTOCOL_VERSION = "2024-11-05"
SERVER_INFO = {
    "name": "task-management-server",
    "version": __version__,
    "description": "AI-powered task management with MCP",
}

INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603
RESOURCE_NOT_FOUND = -32002


def _result(jsonrpc: str, request_id: Any, result: Dict[str, Any]) -> Dict[str, Any]:
    return {"jsonrpc": jsonrpc, "id": request_id, "result": result}


def _error(jsonrpc: str, request_id: Any, code: int, message: str, data: Any = None) -> Dict[str, Any]:
    error = {"code": code, "message": message}
    if data is not None:
        error["data"] = data
    return {"jsonrpc": jsonrpc, "id": request_id, "error": error}


def _text_content(text: str) -> Dict[str, str]:
    return {"type": "text", "text": text}


def handle_jsonrpc_request(registry: MCPRegistry, request: Any) -> Optional[Dict[str, Any]]:
    """
    Handle one JSON-RPC 2.0 request.

    Args:
        registry: The tool/prompt/resource catalogue
        request: Decoded JSON-RPC request

    Returns:
        JSON-RPC response dictionary, or None for notifications
    """
    if not isinstance(request, dict) or not isinstance(request.get("method"), str):
        request_id = request.get("id") if isinstance(request, dict) else None
        return _error("2.0", request_id, INVALID_REQUEST, "Invalid Request")

    jsonrpc = request.get("jsonrpc", "2.0")
    request_id = request.get("id")
    method = request["method"]
    params = request.get("params") or {}

    if method.startswith("notifications/"):
        logger.debug(f"Received notification: {method}")
        return None
    if not isinstance(params, dict):
        return _error(jsonrpc, request_id, INVALID_PARAMS, "Invalid params: expected an object")

    try:
        if method == "initialize":
            return _result(jsonrpc, request_id, {
                "protocolVersion": PROTOCOL_VERSION,
                "capabilities": {"tools": {}, "resources": {}, "prompts": {}},
                "serverInfo": SERVER_INFO,
            })

        if method == "ping":
            return _result(jsonrpc, request_id, {})

        if method == "tools/list":
            return _result(jsonrpc, request_id, {"tools": registry.list_tools()})

        if method == "tools/call":
            tool_name = params.get("name")
            arguments = params.get("arguments") or {}
            if not isinstance(tool_name, str):
                return _error(jsonrpc, request_id, INVALID_PARAMS, "Invalid params: missing tool name")
            if not isinstance(arguments, dict):
                return _error(jsonrpc, request_id, INVALID_PARAMS, "Invalid params: arguments must be an object")
            if not registry.has_tool(tool_name):
                return _error(jsonrpc, request_id, METHOD_NOT_FOUND, f"Method not found: {tool_name}")
            text = registry.call_tool(tool_name, arguments)
            return _result(jsonrpc, request_id, {
                "content": [_text_content(text)],
                "isError": is_error_result(text),
            })

        if method == "prompts/list":
            return _result(jsonrpc, request_id, {"prompts": registry.list_prompts()})

        if method == "prompts/get":
            prompt_name = params.get("name")
            arguments = params.get("arguments") or {}
            if not isinstance(prompt_name, str):
                return _error(jsonrpc, request_id, INVALID_PARAMS, "Invalid params: missing prompt name")
            if not isinstance(arguments, dict):
                return _error(jsonrpc, request_id, INVALID_PARAMS, "Invalid params: arguments must be an object")
            if not registry.has_prompt(prompt_name):
                return _error(jsonrpc, request_id, METHOD_NOT_FOUND, f"Prompt not found: {prompt_name}")
            text = registry.get_prompt(prompt_name, arguments)
            return _result(jsonrpc, request_id, {
                "description": prompt_name,
                "messages": [{"role": "user", "content": _text_content(text)}],
            })

        if method == "resources/list":
            return _result(jsonrpc, request_id, {"resources": registry.list_resources()})

        if method == "resources/templates/list":
            return _result(jsonrpc, request_id, {"resourceTemplates": registry.list_resource_templates()})

        if method == "resources/read":
            uri = params.get("uri")
            if not isinstance(uri, str):
                return _error(jsonrpc, request_id, INVALID_PARAMS, "Invalid params: missing resource uri")
            try:
                spec, text = registry.read_resource(uri)
            except LookupError as e:
                return _error(jsonrpc, request_id, RESOURCE_NOT_FOUND, str(e))
            return _result(jsonrpc, request_id, {
                "contents": [{"uri": uri, "mimeType": spec.mime_type, "text": text}],
            })

        return _error(jsonrpc, request_id, METHOD_NOT_FOUND, f"Method not found: {method}")
    except Exception as e:
        logger.error(f"Internal error handling {method}", exc_info=True)
        return _error(jsonrpc, request_id, INTERNAL_ERROR, f"Internal error: {str(e)}", traceback.format_exc())


def handle_jsonrpc_batch(registry: MCPRegistry, messages: List[Any]) -> Optional[Any]:
    """
    Handle a JSON-RPC batch.

    Returns the list of responses, None when every message was a
    notification, or a single Invalid Request error for an empty batch.
    """
    if not messages:
        return _error("2.0", None, INVALID_REQUEST, "Invalid Request: empty batch")
    responses = [handle_jsonrpc_request(registry, message) for message in messages]
    responses = [response for response in responses if response is not None]
    return responses or None
