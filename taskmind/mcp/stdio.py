"""
MCP over stdio: one JSON-RPC message per line on stdin, one response per
line on stdout. Logging must go to stderr so stdout stays protocol-only.
"""
import json
import logging
import sys
from typing import Any, Optional, TextIO

from taskmind.mcp.registry import MCPRegistry
from taskmind.mcp.request_handlers import handle_jsonrpc_batch, handle_jsonrpc_request

logger = logging.getLogger(__name__)

PARSE_ERROR = -32700


def process_line(registry: MCPRegistry, line: str) -> Optional[Any]:
    """Handle one input line; returns the response payload or None when nothing is owed."""
    line = line.strip()
    if not line:
        return None
    try:
        message = json.loads(line)
    except json.JSONDecodeError as e:
        logger.warning(f"Discarding malformed JSON-RPC line: {e}")
        return {"jsonrpc": "2.0", "id": None, "error": {"code": PARSE_ERROR, "message": f"Parse error: {e}"}}

    if isinstance(message, list):
        return handle_jsonrpc_batch(registry, message)
    return handle_jsonrpc_request(registry, message)


def run_stdio_server(registry: MCPRegistry, stdin: TextIO = None, stdout: TextIO = None) -> None:
    """Serve until stdin is closed."""
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    logger.info("MCP stdio transport started")
    for line in stdin:
        response = process_line(registry, line)
        if response is None:
            continue
        stdout.write(json.dumps(response, ensure_ascii=False) + "\n")
        stdout.flush()
    logger.info("MCP stdio transport stopped (stdin closed)")
