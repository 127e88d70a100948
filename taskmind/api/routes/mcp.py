"""
MCP (Model Context Protocol) API routes.
"""
import logging
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, Response

from taskmind.dependencies.services import get_registry
from taskmind.mcp import MCPRegistry, handle_jsonrpc_batch, handle_jsonrpc_request

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/mcp", tags=["mcp"])


@router.post("")
async def mcp_jsonrpc(
    request: Any = Body(...),
    registry: MCPRegistry = Depends(get_registry)
):
    """JSON-RPC 2.0 endpoint; batches are answered with a list."""
    if isinstance(request, list):
        logger.debug(f"Received JSON-RPC batch of {len(request)} messages")
        response = handle_jsonrpc_batch(registry, request)
        return response if response is not None else Response(status_code=202)

    response = handle_jsonrpc_request(registry, request)
    if response is None:
        return Response(status_code=202)
    return response


@router.get("/tools")
async def mcp_list_tools(registry: MCPRegistry = Depends(get_registry)) -> Dict[str, Any]:
    """List the tool catalogue with input schemas."""
    return {"tools": registry.list_tools()}


@router.get("/prompts")
async def mcp_list_prompts(registry: MCPRegistry = Depends(get_registry)) -> Dict[str, Any]:
    return {"prompts": registry.list_prompts()}


@router.get("/resources")
async def mcp_list_resources(registry: MCPRegistry = Depends(get_registry)) -> Dict[str, Any]:
    return {
        "resources": registry.list_resources(),
        "resourceTemplates": registry.list_resource_templates(),
    }
